"""
Unit tests for haiku validation: normalize, syllable counting, strict 5-7-5, retry loop.

Run with:
    pytest tests/test_haiku.py -v
"""

import pytest

from haiku_commit.cancellation import GenerationAborted
from haiku_commit.haiku import (
    CORRECTIVE_INSTRUCTION,
    CmuDictCounter,
    HeuristicCounter,
    RetryOptions,
    count_syllables,
    generate_samples,
    generate_with_validation,
    heuristic_syllables,
    is_strict_575,
    normalize,
    syllable_counts,
)
from haiku_commit.llm import ProviderError

from conftest import INVALID_HAIKU, VALID_HAIKU


class FakeGenerator:
    """Async generator stub returning canned responses and recording instructions."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls: list[str | None] = []

    async def __call__(self, corrective_instruction=None):
        self.calls.append(corrective_instruction)
        response = self.responses[min(len(self.calls), len(self.responses)) - 1]
        if isinstance(response, BaseException):
            raise response
        return response


# ---------------------------------------------------------------------------
# normalize
# ---------------------------------------------------------------------------

class TestNormalize:

    @pytest.mark.parametrize("text", [
        "  line one  \nline two\t\nline three   ",
        "a\nb\nc\nd\ne",
        "a\n\n\nb",
        "\r\n  first \r\nsecond\r\n",
        "",
        "   ",
        "single",
    ])
    def test_idempotent(self, text):
        once = normalize(text)
        assert normalize(once) == once

    @pytest.mark.parametrize("text", [
        "a  \nb \nc\t\nd\ne",
        "  x\r\ny  \r\nz  ",
    ])
    def test_at_most_three_lines_without_trailing_whitespace(self, text):
        lines = normalize(text).split('\n')
        assert len(lines) <= 3
        assert all(line == line.rstrip() for line in lines)

    def test_keeps_first_three_lines(self):
        assert normalize("one\ntwo\nthree\nfour") == "one\ntwo\nthree"

    def test_trims_outer_whitespace(self):
        assert normalize("\n\n  hello\nworld  \n\n") == "hello\nworld"

    def test_handles_crlf(self):
        assert normalize("a\r\nb\r\nc") == "a\nb\nc"


# ---------------------------------------------------------------------------
# Syllable counting
# ---------------------------------------------------------------------------

class TestSyllables:

    @pytest.mark.parametrize("text, expected", [
        ("pond", 1),
        ("silent", 2),
        ("silence", 2),     # final 'e' is silent
        ("the", 1),         # floor of 1
        ("rhythm", 1),      # 'y' is a vowel
        ("an old silent pond", 5),
        ("a frog jumps into the pond", 7),
        ("splash, silence... again!", 5),   # punctuation ignored
        ("", 0),
        ("123 !!!", 0),
    ])
    def test_heuristic(self, text, expected):
        assert heuristic_syllables(text) == expected

    def test_heuristic_counter_matches_function(self):
        assert HeuristicCounter().count("splash silence again") == heuristic_syllables("splash silence again")

    def test_cmudict_uses_pronunciations(self):
        # "create" is K R IY0 EY1 T; the heuristic merges "ea" and drops the final "e"
        assert CmuDictCounter().count("create") == 2
        assert heuristic_syllables("create") == 1

    def test_cmudict_unknown_word_uses_heuristic(self):
        assert CmuDictCounter().count("zzqxplorbe") == heuristic_syllables("zzqxplorbe")

    def test_failing_counter_falls_back(self):
        class Broken:
            def count(self, text):
                raise RuntimeError("dictionary missing")

        assert count_syllables("an old silent pond", Broken()) == 5

    def test_explicit_counter_wins_over_default(self):
        class Fixed:
            def count(self, text):
                return 42

        assert count_syllables("anything", Fixed()) == 42


# ---------------------------------------------------------------------------
# syllable_counts / is_strict_575
# ---------------------------------------------------------------------------

class TestStrict575:

    def test_counts_for_valid_haiku(self):
        assert syllable_counts(VALID_HAIKU) == (5, 7, 5)

    def test_counts_incomplete_for_short_text(self):
        assert syllable_counts("one line\ntwo lines") is None

    def test_valid_haiku(self):
        assert is_strict_575(VALID_HAIKU) is True

    def test_valid_haiku_with_cmudict(self):
        assert is_strict_575(VALID_HAIKU, CmuDictCounter()) is True

    @pytest.mark.parametrize("text", [
        "one line only",
        "",
        "an old silent pond\na frog jumps into the pond",
        VALID_HAIKU + "\nsplash silence again",
        INVALID_HAIKU,
    ])
    def test_invalid(self, text):
        assert is_strict_575(text) is False

    def test_never_raises_on_odd_input(self):
        assert is_strict_575("```\n\n```") is False


# ---------------------------------------------------------------------------
# generate_with_validation
# ---------------------------------------------------------------------------

@pytest.mark.anyio
class TestGenerateWithValidation:

    async def test_non_strict_accepts_first_attempt(self):
        gen = FakeGenerator("not a haiku at all")
        result = await generate_with_validation(gen, RetryOptions(strict=False, max_retries=5))

        assert result.valid is True
        assert result.attempts == 1
        assert result.text == "not a haiku at all"
        assert gen.calls == [None]

    async def test_valid_first_attempt(self):
        gen = FakeGenerator(f"  {VALID_HAIKU}  \n")
        result = await generate_with_validation(gen, RetryOptions(strict=True, max_retries=2))

        assert result.valid is True
        assert result.attempts == 1
        assert result.text == VALID_HAIKU

    async def test_exhausts_retry_budget(self):
        gen = FakeGenerator(INVALID_HAIKU)
        result = await generate_with_validation(gen, RetryOptions(strict=True, max_retries=2))

        assert result.valid is False
        assert result.attempts == 3
        assert len(gen.calls) == 3
        assert result.text == INVALID_HAIKU

    async def test_corrective_instruction_only_on_retries(self):
        gen = FakeGenerator(INVALID_HAIKU)
        await generate_with_validation(gen, RetryOptions(strict=True, max_retries=2))

        assert gen.calls == [None, CORRECTIVE_INSTRUCTION, CORRECTIVE_INSTRUCTION]

    async def test_stops_on_first_valid_retry(self):
        gen = FakeGenerator(INVALID_HAIKU, INVALID_HAIKU, VALID_HAIKU, INVALID_HAIKU)
        result = await generate_with_validation(gen, RetryOptions(strict=True, max_retries=5))

        assert result.valid is True
        assert result.attempts == 3
        assert len(gen.calls) == 3

    async def test_returns_last_candidate_on_failure(self):
        gen = FakeGenerator("first\ntry\nhere", "second\ntry\nhere", "third try\nstill\nwrong")
        result = await generate_with_validation(gen, RetryOptions(strict=True, max_retries=2))

        assert result.valid is False
        assert result.text == "third try\nstill\nwrong"

    async def test_zero_retries(self):
        gen = FakeGenerator(INVALID_HAIKU)
        result = await generate_with_validation(gen, RetryOptions(strict=True, max_retries=0))

        assert result.valid is False
        assert result.attempts == 1

    async def test_provider_error_propagates_without_retry(self):
        gen = FakeGenerator(INVALID_HAIKU, ProviderError("boom"), VALID_HAIKU)

        with pytest.raises(ProviderError, match="boom"):
            await generate_with_validation(gen, RetryOptions(strict=True, max_retries=5))
        assert len(gen.calls) == 2

    async def test_abort_propagates(self):
        gen = FakeGenerator(GenerationAborted())

        with pytest.raises(GenerationAborted):
            await generate_with_validation(gen, RetryOptions(strict=True, max_retries=5))
        assert len(gen.calls) == 1


class TestRetryOptions:

    def test_negative_retries_rejected(self):
        with pytest.raises(ValueError):
            RetryOptions(strict=True, max_retries=-1)

    def test_defaults(self):
        options = RetryOptions()
        assert options.strict is True
        assert options.max_retries == 2


@pytest.mark.anyio
class TestGenerateSamples:

    async def test_runs_each_sample_sequentially(self):
        gen = FakeGenerator(VALID_HAIKU)
        results = await generate_samples(gen, RetryOptions(strict=True, max_retries=2), samples=3)

        assert len(results) == 3
        assert all(r.valid and r.attempts == 1 for r in results)
        assert gen.calls == [None, None, None]

    async def test_each_sample_has_own_retry_budget(self):
        gen = FakeGenerator(INVALID_HAIKU)
        results = await generate_samples(gen, RetryOptions(strict=True, max_retries=1), samples=2)

        assert [r.attempts for r in results] == [2, 2]
        assert len(gen.calls) == 4
