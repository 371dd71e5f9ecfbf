"""Model catalog and model resolution."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from haiku_commit import PROVIDER_NAMES


@dataclass(frozen=True)
class CatalogEntry:
    """A known model for one provider."""
    id: str
    label: str = ""
    aliases: frozenset[str] = field(default_factory=frozenset)
    recommended: bool = False
    preferred: bool = False

    @property
    def display_label(self) -> str:
        return self.label or self.id


_CATALOG: dict[str, tuple[CatalogEntry, ...]] = {
    "anthropic": (
        CatalogEntry(
            id="claude-sonnet-4-5-20250929",
            label="Claude Sonnet 4.5 (latest)",
            aliases=frozenset({"claude-sonnet-4-5-20250929", "claude-sonnet-4-5-latest"}),
            recommended=True,
        ),
        CatalogEntry(
            id="claude-sonnet-4-20250514",
            label="Claude Sonnet 4 (preferred)",
            aliases=frozenset({"claude-sonnet-4-20250514"}),
            preferred=True,
        ),
        CatalogEntry(
            id="claude-3-5-haiku-20241022",
            label="Claude Haiku 3.5 (fastest)",
            aliases=frozenset({"claude-3-5-haiku-latest"}),
        ),
    ),
    "openai": (
        CatalogEntry(
            id="gpt-5-mini-2025-08-07",
            label="GPT-5 Mini 2025-08-07 (preferred)",
            aliases=frozenset({"gpt-5-mini"}),
            recommended=True,
        ),
        CatalogEntry(id="gpt-5-2025-08-07", label="GPT-5 2025-08-07", aliases=frozenset({"gpt-5"})),
        CatalogEntry(
            id="gpt-5-nano-2025-08-07",
            label="GPT-5 Nano 2025-08-07 (cheapest)",
            aliases=frozenset({"gpt-5-nano"}),
        ),
    ),
    "gemini": (
        CatalogEntry(
            id="gemini-2.5-flash-preview-09-2025",
            label="Gemini 2.5 Flash Preview (preferred, 1M token context)",
            aliases=frozenset({"gemini-2.5-flash"}),
            recommended=True,
        ),
        CatalogEntry(id="gemini-2.5-pro", label="Gemini 2.5 Pro"),
        CatalogEntry(
            id="gemini-2.5-flash-lite-preview-09-2025",
            label="Gemini 2.5 Flash-Lite Preview (cheapest)",
            aliases=frozenset({"gemini-2.5-flash-lite"}),
        ),
    ),
}

CATALOG: Mapping[str, tuple[CatalogEntry, ...]] = MappingProxyType(_CATALOG)

# Used only if a provider's catalog is ever emptied
FALLBACK_MODELS = {
    "anthropic": "claude-sonnet-4-20250514",
    "openai": "gpt-5-mini",
    "gemini": "gemini-2.5-flash",
}


def get_catalog() -> Mapping[str, tuple[CatalogEntry, ...]]:
    return CATALOG


def get_recommended_model(provider: str) -> str:
    """Catalog entry flagged recommended, else the first entry, else ''."""
    entries = CATALOG.get(provider, ())
    entry = next((e for e in entries if e.recommended), entries[0] if entries else None)
    return entry.id if entry else ""


def find_catalog_entry(provider: str, model_id: str) -> CatalogEntry | None:
    """Look up a model by id or alias."""
    for entry in CATALOG.get(provider, ()):
        if model_id == entry.id or model_id in entry.aliases:
            return entry
    return None


DEFAULT_MODELS = {
    provider: get_recommended_model(provider) or FALLBACK_MODELS[provider]
    for provider in PROVIDER_NAMES
}


def effective_model(provider: str, config) -> str:
    """
    Pick the model id for a provider call.

    Precedence: shared `config.model` > `config.<provider>_model` > catalog default.
    Returns '' when the provider is unset or unknown.

    `config` is any snapshot exposing those attributes (normally a Config).
    """
    if provider not in DEFAULT_MODELS:
        return ""
    shared = (getattr(config, "model", None) or "").strip()
    if shared:
        return shared
    specific = (getattr(config, f"{provider}_model", None) or "").strip()
    return specific or DEFAULT_MODELS[provider]
