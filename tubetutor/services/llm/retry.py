from __future__ import annotations

import time
from typing import Callable

import structlog

from tubetutor.core.errors import GenerationFailed
from tubetutor.services.llm.client import GenerationClient, GenerationTimeout

logger = structlog.get_logger(__name__)


def backoff_delay(attempt: int, base_sec: float, mode: str = "exponential") -> float:
    """Delay before retrying after failed attempt number `attempt` (1-based)."""
    if mode == "linear":
        return base_sec * attempt
    if mode == "exponential":
        return base_sec * (2 ** (attempt - 1))
    raise ValueError(f"Unknown backoff mode: {mode!r}")


def generate_with_retry(
    client: GenerationClient,
    prompt: str,
    *,
    attempts: int = 3,
    backoff_sec: float = 1.5,
    timeout_sec: float = 30.0,
    backoff: str = "exponential",
    sleep: Callable[[float], None] = time.sleep,
) -> str:
    """
    Call the generation client, retrying transient failures.

    attempts=1 fails fast on the first error. Every attempt is bounded by
    timeout_sec; a timeout counts as a failed attempt. After the last
    attempt the error is re-raised as GenerationFailed.
    """
    attempts = max(1, int(attempts))
    last_err: Exception | None = None

    for attempt in range(1, attempts + 1):
        try:
            return client.generate(prompt, timeout_sec=timeout_sec)
        except Exception as e:
            last_err = e
            logger.warning(
                "generation_attempt_failed",
                attempt=attempt,
                attempts=attempts,
                error_type=type(e).__name__,
                error=str(e),
            )
            if attempt < attempts:
                sleep(backoff_delay(attempt, backoff_sec, backoff))

    timed_out = isinstance(last_err, GenerationTimeout)
    raise GenerationFailed(
        f"Generation failed after {attempts} attempt(s): {last_err}",
        attempts=attempts,
        timed_out=timed_out,
    ) from last_err
