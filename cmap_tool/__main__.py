"""cmap-tool — inspect and transform indexed colour palettes.

Usage: uv run cmap-tool <command> <palette> [options]

Commands are auto-discovered from cmap_tool/commands/.
Each command module's docstring is its documentation.
Run `cmap-tool help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, cmap-tool looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import logging
import os
import sys

from cmap_tool import registry
from cmap_tool.core.config import LOG_LEVELS, load_env, load_settings
from cmap_tool.core.errors import PaletteError
from cmap_tool.core.log import setup_logging
from cmap_tool.core.report import format_json, format_text
from cmap_tool.core.serialize import read_file, to_string, write_file
from cmap_tool.core.types import Report

logger = logging.getLogger('cmap_tool')


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'cmap_tool.commands.{name}')


def _short_doc(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        "  cmap-tool create grays.cmap --depth 2 -c '#000' -c '#555' -c '#aaa' -c '#fff'\n"
        '  cmap-tool show grays.cmap\n'
        '  cmap-tool info grays.cmap --json\n'
        "  cmap-tool add grays.cmap -c '#2563eb' --new\n"
        '  cmap-tool gamma grays.cmap --gamma 1.8 -o bright.cmap\n'
        '  cmap-tool shift grays.cmap --fraction -0.25\n'
        '  cmap-tool rank grays.cmap --rank 1.0\n'
        '  cmap-tool help gamma\n'
        '\n'
        'Settings (set in .env or environment):\n'
        '  CMAP_TOOL_LOG_LEVEL      DEBUG|INFO|WARNING|ERROR (default WARNING)\n'
        '  CMAP_TOOL_DEFAULT_DEPTH  depth used by `create` (default 8)\n'
        '  CMAP_TOOL_JSON           1 to print JSON by default\n'
    )
    parser = argparse.ArgumentParser(
        prog='cmap-tool',
        description='Inspect and transform indexed colour palettes.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    # Global options before the subcommand
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument(
        '--log-level',
        choices=LOG_LEVELS,
        type=str.upper,
        default=None,
        help='Logging level (default: CMAP_TOOL_LOG_LEVEL or WARNING)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_doc(name, cmd.help))
        p.add_argument('palette', help='Palette file (text format)')
        p.add_argument('-j', '--json', action='store_true', default=None, help='Output JSON instead of text')
        if cmd.writes:
            p.add_argument('-o', '--output', default=None, help='Where to write the result (default: the input file)')
        cmd.add_arguments(p)

    # `help` subcommand: prints full module docstring for a command
    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_doc(name, cmd.help)}')
        print('\nRun: cmap-tool help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_command_module(topic).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {topic!r})')
        return
    print(doc)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=args.env_file)
    settings = load_settings()
    setup_logging(args.log_level or settings.log_level)
    if env_path:
        logger.info('loaded %s', env_path)
    args.settings = settings

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(args.topic)
        return

    cmd = registry.get(args.command)
    want_json = settings.json_output if args.json is None else args.json

    palette = None
    if cmd.needs_input:
        if not os.path.isfile(args.palette):
            print(f'Error: palette file not found: {args.palette}', file=sys.stderr)
            sys.exit(1)

    report = Report(palette_path=args.palette if cmd.needs_input else '')
    try:
        if cmd.needs_input:
            palette = read_file(args.palette)
        palette = cmd.execute(palette, report, args)
        report.describe(palette)
        if cmd.writes:
            out_path = args.output or args.palette
            write_file(out_path, palette)
            report.output_path = out_path
            logger.info('%s: wrote %s', cmd.name, out_path)
    except PaletteError as exc:
        print(f'Error: {exc}', file=sys.stderr)
        sys.exit(1)

    # `show` prints the palette itself, in the on-disk format
    if cmd.name == 'show' and not want_json:
        sys.stdout.write(to_string(palette))
    elif want_json:
        print(format_json(report))
    else:
        print(format_text(report))


if __name__ == '__main__':
    main()
