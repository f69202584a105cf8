from __future__ import annotations

import argparse
import logging
import sys

from typing import List, NoReturn, Optional, Sequence

from .charsets import DEFAULT_SELECTOR
from .password_generator import (
    DEFAULT_LENGTH,
    DEFAULT_MAX_REPEAT,
    DEFAULT_MIN_CHAR,
    LOWEST_LENGTH,
    GenerationFailed,
    PasswordGenerator,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_GENERATION_FAILED = 2


class UsageArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors with the full help listing."""

    def error(self, message: str) -> NoReturn:
        sys.stderr.write(f'{message}\n')
        self.print_help(sys.stderr)
        sys.exit(EXIT_USAGE)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value.strip())
    except ValueError:
        msg = f'invalid integer: {value}'
        raise argparse.ArgumentTypeError(msg) from None
    if number < 0:
        msg = f'must not be negative: {value}'
        raise argparse.ArgumentTypeError(msg)
    return number


def build_parser() -> UsageArgumentParser:
    """Create the command-line parser."""
    parser = UsageArgumentParser(
        prog='pwgen',
        description='Generate a random password matching composition rules.',
        allow_abbrev=False,
    )
    parser.add_argument(
        '-chars',
        default=DEFAULT_SELECTOR,
        help=(
            'Chars to use. A - uppercase letter, a - lowercase letter, '
            "D - digit, S - special. e.g. use 'AaDS' to use everything, "
            "or use 'AD' to generate using only uppercase letters and digits. "
            f"By default, will use '{DEFAULT_SELECTOR}'"
        ),
    )
    parser.add_argument(
        '-length',
        type=_non_negative_int,
        default=DEFAULT_LENGTH,
        help=(
            f'Generated password length. Minimum length is {LOWEST_LENGTH}. '
            f'Default length is {DEFAULT_LENGTH}'
        ),
    )

    minimums = (
        ('-minUpper', 'min_upper', 'uppercase letters'),
        ('-minLower', 'min_lower', 'lowercase letters'),
        ('-minDigit', 'min_digit', 'digits'),
        ('-minSpecial', 'min_special', 'special characters'),
    )
    for flag, dest, label in minimums:
        parser.add_argument(
            flag,
            dest=dest,
            type=_non_negative_int,
            default=DEFAULT_MIN_CHAR,
            help=f'Minimum number of {label}. Default is {DEFAULT_MIN_CHAR}',
        )

    parser.add_argument(
        '-maxRepeat',
        dest='max_repeat',
        type=_non_negative_int,
        default=DEFAULT_MAX_REPEAT,
        help=(
            'Any single char can repeat at most this number. '
            f'Default is {DEFAULT_MAX_REPEAT}'
        ),
    )
    parser.add_argument(
        '-verbose',
        action='store_true',
        help='Log generation details to stderr',
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse and validate command-line arguments.

    Exits with EXIT_USAGE when the arguments are malformed or the
    requested length is below the minimum.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.length < LOWEST_LENGTH:
        parser.error(
            f'Min length must be greater than or equal to {LOWEST_LENGTH}'
        )
    return args


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='[%(levelname)s] %(name)s: %(message)s',
        stream=sys.stderr,
    )

    generator = PasswordGenerator(
        chars=args.chars,
        length=args.length,
        min_upper=args.min_upper,
        min_lower=args.min_lower,
        min_digit=args.min_digit,
        min_special=args.min_special,
        max_repeat=args.max_repeat,
    )

    try:
        password = generator.generate_password()
    except GenerationFailed as exc:
        logger.error('%s', exc)
        sys.exit(EXIT_GENERATION_FAILED)

    print(password)
    sys.exit(EXIT_OK)


if __name__ == '__main__':
    main()
