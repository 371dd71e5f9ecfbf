"""CLI Argument Parsing"""

import argparse
import argcomplete

from haiku_commit import PROVIDER_NAMES, __version__


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='haiku-commit',
        description='Turn a diff into a 5-7-5 haiku commit message',
        epilog='Example: git diff --cached | haiku-commit -p openai'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Input options
    parser.add_argument('--diff', type=str, metavar='FILE', help='Read the diff from FILE (default: stdin)')
    parser.add_argument('--max-diff-length', type=int, metavar='CHARS', help='Truncate the diff to CHARS characters')

    # Generation options
    parser.add_argument('-n', '--samples', type=int, metavar='N', help='Generate N haiku, one after another')
    parser.add_argument('--no-strict', action='store_true', help='Accept the first haiku without checking 5-7-5')
    parser.add_argument('--retries', type=int, metavar='N', help='Corrective retries when a haiku is not 5-7-5')
    parser.add_argument('--syllable-counter', type=str, choices=['cmudict', 'heuristic'], help='Syllable counter')

    # LLM options
    parser.add_argument('-p', '--provider', type=str, choices=PROVIDER_NAMES, help='LLM provider')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name (overrides every provider setting)')
    parser.add_argument('--max-tokens', type=int, metavar='N', help='Max tokens per request')

    # Output options
    parser.add_argument('--verbose', action='store_true', help='Show debug logs (requests, attempts, retries)')

    # Info
    parser.add_argument('--list-models', action='store_true', help='Show known models per provider')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')

    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
