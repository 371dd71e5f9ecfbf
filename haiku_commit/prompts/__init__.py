"""Prompt Building Package"""

from haiku_commit.prompts.builder import BASE_INSTRUCTION, DIFF_HEADER, build_base_instruction, build_prompt

__all__ = ["BASE_INSTRUCTION", "DIFF_HEADER", "build_base_instruction", "build_prompt"]
