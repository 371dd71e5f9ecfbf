"""Prompt Builder - Construct LLM prompts for haiku commit messages."""

BASE_INSTRUCTION = ' '.join([
    'Write a git commit message as a haiku.',
    'Strict 5-7-5 syllables. Exactly 3 lines.',
    'No preamble, no code fences, no extra text.',
    'Avoid trailing spaces; keep lines concise.',
])

DIFF_HEADER = "Git diff (staged changes):"


def build_base_instruction() -> str:
    return BASE_INSTRUCTION


def build_prompt(diff: str, corrective_instruction: str | None = None) -> str:
    """Assemble the prompt sent to every provider.

    The corrective instruction, when given, goes on its own line right after
    the base instruction so the model reads it before the diff.
    """
    instruction = BASE_INSTRUCTION
    if corrective_instruction:
        instruction = f"{instruction}\n{corrective_instruction}"
    return f"{instruction}\n\n{DIFF_HEADER}\n{diff}"
