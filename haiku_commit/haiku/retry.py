"""Validation-retry loop: re-prompt a provider until its haiku is strict 5-7-5."""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from haiku_commit.haiku.validate import is_strict_575, normalize, syllable_counts

log = logging.getLogger(__name__)

CORRECTIVE_INSTRUCTION = (
    'The previous output did not match strict 5-7-5. '
    'Output exactly 3 lines with syllable counts 5, 7, 5. '
    'No extra text, no code fences.'
)

DEFAULT_MAX_RETRIES = 2

Generator = Callable[..., Awaitable[str]]


@dataclass(frozen=True)
class RetryOptions:
    """strict: enforce 5-7-5 (off = first attempt is accepted as-is).
    max_retries: corrective re-prompts after the first attempt."""
    strict: bool = True
    max_retries: int = DEFAULT_MAX_RETRIES

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")


@dataclass(frozen=True)
class RetryResult:
    """Final haiku for one sample.

    `valid` is False only when strict mode ran out of retries; `text` is then
    the last attempt, returned as a best effort.
    """
    text: str
    valid: bool
    attempts: int


async def generate_with_validation(
    generator: Generator,
    options: RetryOptions,
    logger: logging.Logger | None = None,
) -> RetryResult:
    """
    Call `generator` and re-prompt with CORRECTIVE_INSTRUCTION until the haiku is strict 5-7-5.

    Only structural invalidity is retried here. Exceptions raised by the
    generator (provider failures, GenerationAborted) propagate untouched.
    """
    logger = logger or log

    text = normalize(await generator())
    attempts = 1
    if not options.strict:
        logger.debug("Strict mode off; accepting first attempt")
        return RetryResult(text=text, valid=True, attempts=attempts)

    if is_strict_575(text):
        logger.debug("First attempt is strict 5-7-5")
        return RetryResult(text=text, valid=True, attempts=attempts)

    for _ in range(options.max_retries):
        logger.info(f"Haiku not 5-7-5 (counts={syllable_counts(text)}); corrective retry {attempts}/{options.max_retries}")
        text = normalize(await generator(CORRECTIVE_INSTRUCTION))
        attempts += 1
        if is_strict_575(text):
            logger.info(f"Strict 5-7-5 reached after {attempts} attempts")
            return RetryResult(text=text, valid=True, attempts=attempts)

    logger.warning(f"Retry budget exhausted after {attempts} attempts; returning best effort")
    return RetryResult(text=text, valid=False, attempts=attempts)


async def generate_samples(
    generator: Generator,
    options: RetryOptions,
    samples: int = 1,
    logger: logging.Logger | None = None,
) -> list[RetryResult]:
    """Run the validate-and-retry procedure once per sample, one after another.

    Samples are never generated concurrently; at most one request is in flight.
    """
    results = []
    for index in range(max(1, samples)):
        (logger or log).debug(f"Generating sample {index + 1}/{samples}")
        results.append(await generate_with_validation(generator, options, logger))
    return results
