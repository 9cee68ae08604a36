#!/usr/bin/env python3
"""Command-line interface for textops string utilities.

Usage:
    textops abbreviate --upper 20 "Now is the time for all good men"
    textops initials --delimiters "_-" "Ben_John-Lee"
    textops swapcase "The Quick Brown Fox"
    textops wrap --width 40 --input notes.txt
    cat notes.txt | textops --config ./textops.yaml wrap --break-long-words
"""

import argparse
import logging
import re
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Callable, Dict, Optional

import yaml

from config import get_config_value, load_config
from utils.string_utils import (
    InvalidArgumentError,
    abbreviate,
    initials,
    swap_case,
    wrap,
)


logger = logging.getLogger(__name__)


def setup_logging(logging_config: Dict[str, Any], verbose: bool = False) -> None:
    """Set up logging configuration.

    Console output goes to stderr so that stdout only carries results.

    Args:
        logging_config: Logging configuration dictionary.
        verbose: Force DEBUG level regardless of the configured level.
    """
    log_level = 'DEBUG' if verbose else logging_config.get('level', 'WARNING')
    log_file = logging_config.get('file')
    log_format = logging_config.get(
        'format',
        '%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )
    date_format = logging_config.get('date_format', '%Y-%m-%d %H:%M:%S')
    formatter = logging.Formatter(log_format, date_format)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(log_level).upper(), logging.WARNING))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if log_file:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=logging_config.get('max_bytes', 10485760),
            backupCount=logging_config.get('backup_count', 5),
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def setup_argparser() -> argparse.ArgumentParser:
    """Set up the argument parser.

    Option defaults are None so that unset flags fall back to the
    configuration file.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog='textops',
        description='Abbreviate, take initials of, swap case of or wrap text.',
        epilog='Example: textops wrap --width 20 "Here is one line of text"',
    )
    parser.add_argument(
        '--config',
        help='Path to a YAML configuration file (default: bundled default.yaml)',
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging',
    )

    # Arguments shared by every command
    source = argparse.ArgumentParser(add_help=False)
    source.add_argument(
        'text',
        nargs='?',
        help='Text to transform (default: read --input or stdin)',
    )
    source.add_argument(
        '--input', '-i',
        help='Read text from this file instead of stdin',
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    abbreviate_parser = subparsers.add_parser(
        'abbreviate',
        parents=[source],
        help='Cut each line at the first space after a lower limit',
    )
    abbreviate_parser.add_argument(
        '--lower', type=int,
        help='Position from which to look for a space',
    )
    abbreviate_parser.add_argument(
        '--upper', type=int,
        help='Maximum characters kept, -1 for no limit',
    )
    abbreviate_parser.add_argument(
        '--suffix',
        help='String appended to abbreviated lines',
    )

    initials_parser = subparsers.add_parser(
        'initials',
        parents=[source],
        help='Print the first character of every word',
    )
    initials_parser.add_argument(
        '--delimiters', '-d',
        help='Characters separating words (default: whitespace)',
    )

    subparsers.add_parser(
        'swapcase',
        parents=[source],
        help='Swap letter case, title-casing the start of each word',
    )

    wrap_parser = subparsers.add_parser(
        'wrap',
        parents=[source],
        help='Wrap each line to a maximum width',
    )
    wrap_parser.add_argument(
        '--width', '-w', type=int,
        help='Maximum line width',
    )
    wrap_parser.add_argument(
        '--newline',
        help='Line separator inserted between wrapped lines',
    )
    wrap_parser.add_argument(
        '--break-long-words',
        dest='long_words',
        action='store_true',
        default=None,
        help='Split words longer than the width',
    )
    wrap_parser.add_argument(
        '--no-break-long-words',
        dest='long_words',
        action='store_false',
        help='Keep long words whole even if a line overflows',
    )
    wrap_parser.add_argument(
        '--wrap-on',
        help='Regular expression matching break points (default: a space)',
    )

    return parser


def _option(args: argparse.Namespace, name: str, config: Dict[str, Any],
            key_path: str, default: Any = None) -> Any:
    """Resolve an option from the command line, then config, then default."""
    value = getattr(args, name, None)
    if value is not None:
        return value
    return get_config_value(config, key_path, default)


def build_transform(args: argparse.Namespace, config: Dict[str, Any]) -> Callable[[str], str]:
    """Build the per-line transformation for the selected command.

    Args:
        args: Parsed command-line arguments.
        config: Loaded configuration dictionary.

    Returns:
        A function mapping one input line to its output.
    """
    if args.command == 'abbreviate':
        lower = _option(args, 'lower', config, 'abbreviate.lower', 0)
        upper = _option(args, 'upper', config, 'abbreviate.upper', -1)
        suffix = _option(args, 'suffix', config, 'abbreviate.suffix', '...')
        logger.debug(f"abbreviate lower={lower} upper={upper} suffix={suffix!r}")
        return lambda line: abbreviate(line, lower, upper, suffix)

    if args.command == 'initials':
        delimiters = _option(args, 'delimiters', config, 'initials.delimiters')
        logger.debug(f"initials delimiters={delimiters!r}")
        return lambda line: initials(line, delimiters)

    if args.command == 'swapcase':
        return swap_case

    width = _option(args, 'width', config, 'wrap.length', 80)
    newline = _option(args, 'newline', config, 'wrap.newline')
    long_words = _option(args, 'long_words', config, 'wrap.long_words', False)
    wrap_on = _option(args, 'wrap_on', config, 'wrap.wrap_on')
    logger.debug(
        f"wrap width={width} newline={newline!r} long_words={long_words} "
        f"wrap_on={wrap_on!r}"
    )
    return lambda line: wrap(line, width, newline, long_words, wrap_on)


def read_input(args: argparse.Namespace) -> str:
    """Read the text to transform.

    Args:
        args: Parsed command-line arguments.

    Returns:
        The positional text, the --input file contents, or stdin.
    """
    if args.text is not None:
        return args.text
    if args.input:
        with open(args.input, 'r', encoding='utf-8') as f:
            return f.read()
    return sys.stdin.read()


def transform_lines(text: str, transform: Callable[[str], str]) -> str:
    """Apply a transformation to every line of text independently.

    Only '\\n' separates lines; a single trailing newline is dropped.
    """
    if text.endswith('\n'):
        text = text[:-1]
    return '\n'.join(transform(line) for line in text.split('\n'))


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = setup_argparser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        setup_logging(config.get('logging', {}), args.verbose)

        transform = build_transform(args, config)
        text = read_input(args)
        logger.info(f"Running {args.command} on {len(text)} chars")

        print(transform_lines(text, transform))
        return 0

    except InvalidArgumentError as e:
        print(f"Invalid argument: {e}", file=sys.stderr)
        return 1
    except re.error as e:
        print(f"Invalid wrap pattern: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"File not found: {e}", file=sys.stderr)
        return 1
    except yaml.YAMLError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"I/O error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
