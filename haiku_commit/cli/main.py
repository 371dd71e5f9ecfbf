"""CLI Main Entry Point"""

import asyncio
import logging
import signal
import sys

from haiku_commit.cancellation import CancellationToken, GenerationAborted
from haiku_commit.config import API_KEY_ENV, Config, api_key_for, apply_env_overrides, load_config
from haiku_commit.haiku import RetryOptions, RetryResult, generate_samples, set_default_counter, syllable_counts
from haiku_commit.llm import LLMError, ProviderOptions, resolve_provider
from haiku_commit.llm.models import effective_model
from haiku_commit.logs import setup_logging
from haiku_commit.output import dim, format_syllable_counts, print_box, print_error, print_warning, Spinner

from haiku_commit.cli.args import parse_args
from haiku_commit.cli.commands import display_config, list_models
from haiku_commit.cli.utils import read_diff, truncate_diff

log = logging.getLogger(__name__)

EXIT_CANCELLED = 130


def _apply_args(args, config: Config) -> Config:
    """Apply CLI overrides to config.

    Precedence: CLI args > environment variables > config file
    """
    apply_env_overrides(config)
    if args.provider:
        config.provider = args.provider
    if args.model:
        config.model = args.model
    if args.max_tokens is not None:
        config.max_tokens = args.max_tokens
    if args.no_strict:
        config.strict = False
    if args.retries is not None:
        config.max_retries = args.retries
    if args.samples is not None:
        config.samples = args.samples
    if args.max_diff_length is not None:
        config.max_diff_length = args.max_diff_length
    if args.syllable_counter:
        config.syllable_counter = args.syllable_counter
    if args.verbose:
        config.debug = True
    for warning in config.validate():
        print_warning(warning)
    return config


def _install_interrupt(token: CancellationToken) -> bool:
    """Route Ctrl+C to the cancellation token. Not supported on Windows event loops."""
    try:
        asyncio.get_running_loop().add_signal_handler(signal.SIGINT, token.cancel)
        return True
    except (NotImplementedError, RuntimeError):
        return False


async def _generate(provider: str, api_key: str, model: str, diff: str, config: Config) -> list[RetryResult]:
    token = CancellationToken()
    installed = _install_interrupt(token)
    try:
        options = ProviderOptions(
            provider=provider,
            api_key=api_key,
            model=model,
            max_tokens=config.max_tokens,
            signal=token,
        )
        generator = resolve_provider(options)
        retry_options = RetryOptions(strict=config.strict, max_retries=config.max_retries)
        with Spinner():
            return await generate_samples(generator, retry_options, config.samples)
    finally:
        if installed:
            asyncio.get_running_loop().remove_signal_handler(signal.SIGINT)


def _display_result(result: RetryResult, index: int, total: int) -> None:
    """Show one haiku in a box with its syllable counts."""
    print()
    print_box(result.text, title=f"{index}/{total}" if total > 1 else "")
    counts = format_syllable_counts(syllable_counts(result.text))
    attempts = "attempt" if result.attempts == 1 else "attempts"
    print(dim("  syllables ") + counts + dim(f"  ({result.attempts} {attempts})"))
    if not result.valid:
        print_warning(f"Not strict 5-7-5 after {result.attempts} attempts; showing the best attempt.")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    config = _apply_args(args, load_config())
    setup_logging(config.debug)

    if args.display_config:
        return display_config(config)
    if args.list_models:
        return list_models(config)

    set_default_counter(config.syllable_counter)

    # Configuration and precondition errors are reported before any network call
    provider = config.provider
    model = effective_model(provider, config)
    if not provider or not model:
        print_error("No AI provider configured. Use --provider or set \"provider\" in .haikurc.")
        return 1

    api_key = api_key_for(provider)
    if not api_key:
        print_error(
            f"No API key found. Set {API_KEY_ENV[provider]} environment variable:\n"
            f"  export {API_KEY_ENV[provider]}='your-key-here'"
        )
        return 1

    try:
        diff = read_diff(args.diff)
    except OSError as e:
        print_error(f"Could not read diff: {e}")
        return 1
    if not diff.strip():
        print_error("No diff provided. Try: git diff --cached | haiku-commit")
        return 1

    diff, truncated = truncate_diff(diff, config.max_diff_length)
    if truncated:
        log.info(f"Diff over {config.max_diff_length} characters truncated for safety")

    is_pipe = not sys.stdout.isatty()
    if not is_pipe:
        print(dim(f"Writing a haiku with {provider} ({model})..."))

    try:
        results = asyncio.run(_generate(provider, api_key, model, diff, config))
    except (GenerationAborted, KeyboardInterrupt):
        print(dim("Cancelled."), file=sys.stderr)
        return EXIT_CANCELLED
    except LLMError as e:
        print_error(str(e))
        return 1

    # Pipe mode: output raw haiku only; warnings go to stderr
    if is_pipe:
        for index, result in enumerate(results, 1):
            if not result.valid:
                print_warning(f"Haiku {index} is not strict 5-7-5 after {result.attempts} attempts; printing the best attempt.")
        print('\n\n'.join(result.text for result in results))
        return 0

    for index, result in enumerate(results, 1):
        _display_result(result, index, len(results))
    return 0
