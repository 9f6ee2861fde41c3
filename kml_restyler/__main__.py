"""kml-restyler: move KML placemark styles onto the sixteen-colour omaps palette.

Usage: kml-restyler [options] <input.kml> <output.kml>

Reads a KML export (e.g. from Google My Maps), maps every icon Style and
StyleMap onto one of the canonical `placemark-<colour>` styles, points each
placemark straight at its canonical style, drops the StyleMaps and writes
the result. The colour and style mappings are printed on success.

Colour policies are auto-discovered from kml_restyler/policies/.
Run `kml-restyler --list-policies` to see them.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, kml-restyler looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import sys

from kml_restyler import __version__, registry
from kml_restyler.core.config import ENV_PREFIX, Settings, load_env
from kml_restyler.core.kml_parser import KmlParseError, parse_kml_file, write_kml_file
from kml_restyler.core.log import configure_logging
from kml_restyler.core.report import format_json, format_text
from kml_restyler.core.rewriter import restyle


def _build_parser() -> argparse.ArgumentParser:
    epilog = (
        'Examples:\n'
        '  kml-restyler mymap.kml mymap-omaps.kml\n'
        '  kml-restyler --policy fixed mymap.kml mymap-omaps.kml\n'
        '  kml-restyler --json --indent 4 mymap.kml mymap-omaps.kml\n'
        '  kml-restyler --list-policies\n'
        '\n'
        'Settings (set in .env or environment, flags win):\n'
        f'  {ENV_PREFIX}POLICY     colour policy (default: discovered)\n'
        f'  {ENV_PREFIX}INDENT     spaces per indentation level (default: 2)\n'
        f'  {ENV_PREFIX}LOG_LEVEL  DEBUG, INFO, WARNING, ... (default: WARNING)\n'
    )
    parser = argparse.ArgumentParser(
        prog='kml-restyler',
        description='Normalise KML placemark styles onto the canonical omaps palette.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument('input', nargs='?', help='Path to the source .kml file')
    parser.add_argument('output', nargs='?', help='Path to write the restyled .kml file')
    parser.add_argument('-p', '--policy', default=None, help='Colour policy name (default: from settings)')
    parser.add_argument('-j', '--json', action='store_true', help='Print the summary as JSON instead of text')
    parser.add_argument('--indent', type=int, default=None, metavar='N', help='Spaces per indentation level')
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging on stderr')
    parser.add_argument('--list-policies', action='store_true', help='List colour policies and exit')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def _fail(message: str) -> None:
    print(f'Error: {message}', file=sys.stderr)
    sys.exit(1)


def _print_policies(default: str) -> None:
    print('Available colour policies:\n')
    for name, pol in sorted(registry.all_policies().items()):
        marker = '*' if name == default else ' '
        print(f' {marker} {name:<12} {pol.help}')
    print('\n* = active policy')


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'kml-restyler: loaded {env_path}', file=sys.stderr)
    elif args.env_file:
        print(f'kml-restyler: env file not found: {args.env_file}', file=sys.stderr)

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        _fail(str(exc))

    configure_logging('DEBUG' if args.verbose else settings.log_level)

    policy_name = args.policy or settings.policy

    if args.list_policies:
        _print_policies(policy_name)
        return

    if not args.input or not args.output:
        parser.error('the following arguments are required: input, output')

    if args.indent is not None and args.indent < 0:
        _fail(f'--indent must not be negative, got {args.indent}')
    indent = settings.indent if args.indent is None else args.indent

    try:
        policy = registry.get(policy_name)
    except KeyError as exc:
        _fail(exc.args[0])

    try:
        document = parse_kml_file(args.input)
    except OSError as exc:
        _fail(f'cannot read {args.input}: {exc}')
    except KmlParseError as exc:
        _fail(f'cannot parse {args.input}: {exc}')

    resolution, stats = restyle(document, policy)

    try:
        write_kml_file(document, args.output, indent=' ' * indent)
    except OSError as exc:
        _fail(f'cannot write {args.output}: {exc}')

    if args.json:
        print(format_json(resolution, stats, args.input, args.output))
    else:
        print(format_text(resolution, stats, args.input, args.output))


if __name__ == '__main__':
    main()
