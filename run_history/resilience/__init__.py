"""
Resilience package: bounded retry with fixed delay.
"""

from run_history.resilience.resilience import RETRY_EXCEPTIONS, bounded_retrying

__all__ = [
    "RETRY_EXCEPTIONS",
    "bounded_retrying",
]
