"""Command line entry point: convert a Draft.js JSON document to Markdown.

Usage:
    draft-md content.json -o content.md
    cat content.json | python -m draft_md --empty-line-before-block
"""

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any

from draft_md.config import ConversionConfig, HashConfig, StyleToken
from draft_md.converter import draft_to_markdown
from draft_md.document import load_document, load_document_file
from draft_md.errors import DraftMarkdownError
from draft_md.settings import Settings

LOGGER = logging.getLogger(__name__)


def _json_object(value: str) -> dict[str, Any]:
    try:
        parsed = json.loads(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f'Invalid JSON: {e}') from e
    if not isinstance(parsed, dict):
        raise argparse.ArgumentTypeError('Expected a JSON object.')
    return parsed


def _block_types_mapping(value: str) -> dict[str, str]:
    mapping = _json_object(value)
    if not all(isinstance(prefix, str) for prefix in mapping.values()):
        raise argparse.ArgumentTypeError('Block type prefixes must be strings.')
    return mapping


def _style_transform(value: str) -> dict[str, StyleToken]:
    """Parse {"STYLE": "token" | ["left", "right"] | null}."""
    transform: dict[str, StyleToken] = {}
    for style, token in _json_object(value).items():
        if token is None or isinstance(token, str):
            transform[style] = token
        elif isinstance(token, list) and len(token) == 2 and all(isinstance(t, str) for t in token):
            transform[style] = (token[0], token[1])
        else:
            raise argparse.ArgumentTypeError(
                f'Style {style!r}: expected a string, a [left, right] pair or null.'
            )
    return transform


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='draft-md',
        description='Convert Draft.js raw content (JSON) to Markdown.',
    )
    parser.add_argument(
        'input',
        nargs='?',
        default='-',
        help='Draft.js JSON file (default: read from stdin).',
    )
    parser.add_argument('-o', '--output', type=Path, help='Write Markdown to this file.')
    parser.add_argument(
        '--empty-line-before-block',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Separate blocks with a blank line.',
    )
    parser.add_argument(
        '--print-break-line-literal',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Print a literal \\n token in block separators.',
    )
    parser.add_argument(
        '--raw-css',
        dest='raw_css_inline_styles',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Render JSON-object inline styles as raw CSS.',
    )
    parser.add_argument(
        '--block-types-mapping',
        type=_block_types_mapping,
        default=None,
        help='JSON object overriding block type prefixes.',
    )
    parser.add_argument(
        '--style-transform',
        type=_style_transform,
        default=None,
        help='JSON object overriding inline style tokens.',
    )
    parser.add_argument('--trigger', help='Hashtag trigger (default: #).')
    parser.add_argument('--separator', help='Hashtag separator (default: space).')
    return parser


def _pick(flag: Any, default: Any) -> Any:
    return default if flag is None else flag


def build_configs(args: argparse.Namespace, settings: Settings) -> tuple[ConversionConfig, HashConfig]:
    """Merge command line flags over settings (flags win)."""
    defaults = settings.to_conversion_config()
    config = ConversionConfig(
        custom_style_transform=args.style_transform or {},
        empty_line_before_block=_pick(args.empty_line_before_block, defaults.empty_line_before_block),
        print_break_line_literal=_pick(args.print_break_line_literal, defaults.print_break_line_literal),
        block_types_mapping=args.block_types_mapping or {},
        raw_css_inline_styles=_pick(args.raw_css_inline_styles, defaults.raw_css_inline_styles),
    )
    hash_defaults = settings.to_hash_config()
    hash_config = HashConfig(
        trigger=_pick(args.trigger, hash_defaults.trigger),
        separator=_pick(args.separator, hash_defaults.separator),
    )
    return config, hash_config


def run(args: argparse.Namespace, settings: Settings) -> int:
    config, hash_config = build_configs(args, settings)
    try:
        if args.input == '-':
            content = load_document(sys.stdin.read())
        else:
            content = load_document_file(Path(args.input))
        markdown = draft_to_markdown(content, hash_config=hash_config, config=config)
    except DraftMarkdownError as e:
        LOGGER.error('Conversion failed: %s', e)
        return 1

    if args.output:
        args.output.write_text(markdown, encoding='utf-8')
        LOGGER.info('Wrote %d characters to %s', len(markdown), args.output)
    else:
        sys.stdout.write(markdown)
    return 0


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    logging.basicConfig(level=getattr(logging, settings.logging_level), stream=sys.stderr)

    args: argparse.Namespace = build_parser().parse_args(argv)
    return run(args, settings)


if __name__ == '__main__':
    sys.exit(main())
