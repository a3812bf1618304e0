import sys

from run_history.cli import main

if __name__ == "__main__":
    sys.exit(main())
