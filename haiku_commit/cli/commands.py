"""CLI Commands"""

import os

from haiku_commit import PROVIDER_LABELS
from haiku_commit.config import API_KEY_ENV, Config, get_config_path
from haiku_commit.llm.models import effective_model, find_catalog_entry, get_catalog
from haiku_commit.output import bold, dim, info, highlight, success


def display_config(config: Config) -> int:
    """Display current configuration."""
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .haikurc found)")

    env_overrides = [name for name in ('HAIKU_PROVIDER', 'HAIKU_MODEL', 'HAIKU_DEBUG') if os.environ.get(name)]
    if env_overrides:
        print(f"  {dim('Environment overrides:')}")
        for name in env_overrides:
            print(f"    {name}={os.environ[name]}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    provider:         {info(config.provider or 'none')}")
    print(f"    model:            {info(config.model or 'per provider')}")
    for provider in PROVIDER_LABELS:
        print(f"    {provider + '_model:':<17} {info(getattr(config, f'{provider}_model') or 'default')}")
    print(f"    strict:           {info(str(config.strict).lower())}")
    print(f"    max_retries:      {info(str(config.max_retries))}")
    print(f"    samples:          {info(str(config.samples))}")
    print(f"    max_tokens:       {info(str(config.max_tokens))}")
    print(f"    max_diff_length:  {info(str(config.max_diff_length))}")
    print(f"    syllable_counter: {info(config.syllable_counter)}")

    print(f"\n  {bold('Effective models:')}")
    for provider, label in PROVIDER_LABELS.items():
        key_state = success('key set') if os.environ.get(API_KEY_ENV[provider]) else dim(f'no {API_KEY_ENV[provider]}')
        print(f"    {label + ':':<10} {info(effective_model(provider, config))}  {key_state}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .haikurc (in current directory)")
    print(f"    Global: ~/.haikurc\n")

    return 0


def list_models(config: Config) -> int:
    """Show the model catalog, marking recommended, preferred and active entries."""
    for provider, entries in get_catalog().items():
        active = find_catalog_entry(provider, effective_model(provider, config))
        print(f"\n{bold(PROVIDER_LABELS.get(provider, provider))}")
        for entry in entries:
            marks = []
            if entry.recommended:
                marks.append(highlight('recommended'))
            if entry.preferred:
                marks.append(info('preferred'))
            if entry is active:
                marks.append(success('active'))
            aliases = f" {dim('aka ' + ', '.join(sorted(entry.aliases - {entry.id})))}" if entry.aliases - {entry.id} else ""
            suffix = f"  [{', '.join(marks)}]" if marks else ""
            print(f"  {entry.id}{aliases}{suffix}")
            print(dim(f"    {entry.display_label}"))
    print()
    return 0
