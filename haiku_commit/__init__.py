"""
Haiku Commit

AI-generated 5-7-5 haiku commit messages from a diff.
"""

__version__ = "1.0.0"

# Centralized provider names - single source of truth
# Used by: llm/__init__.py (registry), llm/models.py (catalog), config (validation), cli/args.py
PROVIDER_LABELS = {
    'anthropic': 'Anthropic',
    'openai': 'OpenAI',
    'gemini': 'Gemini',
}

PROVIDER_NAMES = list(PROVIDER_LABELS.keys())
