"""Haiku Validation Package"""

from haiku_commit.haiku.retry import (
    CORRECTIVE_INSTRUCTION,
    DEFAULT_MAX_RETRIES,
    RetryOptions,
    RetryResult,
    generate_samples,
    generate_with_validation,
)
from haiku_commit.haiku.syllables import (
    CmuDictCounter,
    HeuristicCounter,
    count_syllables,
    get_default_counter,
    heuristic_syllables,
    set_default_counter,
)
from haiku_commit.haiku.validate import HAIKU_PATTERN, is_strict_575, normalize, syllable_counts

__all__ = [
    "CORRECTIVE_INSTRUCTION",
    "CmuDictCounter",
    "DEFAULT_MAX_RETRIES",
    "HAIKU_PATTERN",
    "HeuristicCounter",
    "RetryOptions",
    "RetryResult",
    "count_syllables",
    "generate_samples",
    "generate_with_validation",
    "get_default_counter",
    "heuristic_syllables",
    "is_strict_575",
    "normalize",
    "set_default_counter",
    "syllable_counts",
]
