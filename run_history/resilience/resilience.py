"""
Resilience Module: begrenzte Retries für GitHub-API-Aufrufe.

- Tenacity-basierte Retries mit fester Wartezeit
- Immer begrenzt: maximale Versuche, optional zusätzlich Gesamtzeit
- Nach Erschöpfung wird tenacity.RetryError geworfen (Aufrufer entscheidet,
  welcher fachliche Fehler daraus wird)
"""

import logging
from typing import Callable, Optional, Tuple, Type

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    stop_after_delay,
    wait_fixed,
)

logger = logging.getLogger(__name__)


# Retry für Netzwerk-/Transport-Fehler und HTTP-Statusfehler der API
RETRY_EXCEPTIONS: Tuple[Type[BaseException], ...] = (
    ConnectionError,
    TimeoutError,
    OSError,
    httpx.HTTPError,
)


def _log_before_sleep(max_attempts: int) -> Callable[[RetryCallState], None]:
    def _log(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        wait = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            "Retry %d/%d nach %s: %s. Warte %.1fs.",
            retry_state.attempt_number, max_attempts,
            type(exc).__name__, exc, wait,
        )
    return _log


def bounded_retrying(
    max_attempts: int,
    delay: float = 1.0,
    max_elapsed: Optional[float] = None,
    retry_on: Tuple[Type[BaseException], ...] = RETRY_EXCEPTIONS,
) -> AsyncRetrying:
    """
    Baut einen begrenzten AsyncRetrying-Controller mit fester Wartezeit.

    Args:
        max_attempts: Maximale Anzahl Versuche (inklusive erstem Aufruf)
        delay: Wartezeit zwischen zwei Versuchen in Sekunden
        max_elapsed: Optionale Obergrenze der Gesamtzeit in Sekunden
        retry_on: Exception-Typen, die einen weiteren Versuch auslösen

    Returns:
        AsyncRetrying, wirft nach Erschöpfung tenacity.RetryError

    Raises:
        ValueError: Wenn max_attempts < 1 oder delay negativ ist
    """
    if max_attempts < 1:
        raise ValueError("max_attempts muss >= 1 sein")
    if delay < 0:
        raise ValueError("delay darf nicht negativ sein")
    stop = stop_after_attempt(max_attempts)
    if max_elapsed is not None:
        stop = stop | stop_after_delay(max_elapsed)
    return AsyncRetrying(
        stop=stop,
        wait=wait_fixed(delay),
        retry=retry_if_exception_type(retry_on),
        before_sleep=_log_before_sleep(max_attempts),
        reraise=False,
    )
