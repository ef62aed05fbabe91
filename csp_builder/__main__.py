"""
csp-builder CLI
"""
from __future__ import annotations

import argparse
import sys

from csp_builder.config.loader import CSPSettings, get_settings, load_settings
from csp_builder.config.presets import build_preset, load_presets
from csp_builder.directives import header_name
from csp_builder.errors import CSPError
from csp_builder.logging_config import setup_logging
from csp_builder.policy import Policy
from csp_builder.values import parse_value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csp-builder",
        description="Compose a Content-Security-Policy header value",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List configured presets
  python -m csp_builder presets

  # Render the default preset
  python -m csp_builder render

  # Extend the strict preset with a CDN and print a full header line
  python -m csp_builder render strict --add "script-src=https://cdn.example.com" --header

  # Start from nothing; keywords are written in single quotes
  python -m csp_builder render --empty --add "default-src='self'" --add upgrade-insecure-requests
        """
    )
    parser.add_argument('--presets-file', help='YAML presets file (defaults to CSP_PRESETS_FILE)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    subparsers.add_parser('presets', help='List configured presets')

    render_parser = subparsers.add_parser('render', help='Compile a policy')
    render_parser.add_argument('preset', nargs='?', help='Preset to start from (defaults to CSP_DEFAULT_PRESET)')
    render_parser.add_argument('--empty', action='store_true', help='Start from an empty policy')
    render_parser.add_argument('--add', action='append', default=[], metavar='DIRECTIVE[=VALUES]',
                               help='Declare a directive; repeatable, values are space-separated')
    render_parser.add_argument('--header', action='store_true', help='Print "Name: value" instead of the value')
    render_parser.add_argument('--report-only', action='store_true',
                               help='Use the Content-Security-Policy-Report-Only header name')

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Logging must be configured before the first event, or it lands on stdout
    settings = CSPSettings()
    setup_logging(settings.log_level, settings.log_json)
    load_settings()

    try:
        if args.command == 'presets':
            return cmd_presets(args)
        elif args.command == 'render':
            return cmd_render(args)
    except CSPError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def cmd_presets(args) -> int:
    """List preset names with their descriptions"""
    presets = load_presets(args.presets_file)
    if not presets:
        print("No presets configured.")
        return 0
    width = max(len(name) for name in presets)
    for name, preset in presets.items():
        print(f"{name.ljust(width)}  {preset.description}")
    return 0


def apply_addition(policy: Policy, addition: str) -> Policy:
    """Apply one ``DIRECTIVE[=VALUES]`` argument to the policy."""
    name, sep, raw = addition.partition('=')
    values = [parse_value(v) for v in raw.split()] if sep else []
    return policy.declare(name, *values)


def cmd_render(args) -> int:
    """Compile a preset plus additions and print it"""
    if args.empty:
        policy = Policy()
    else:
        policy = build_preset(args.preset, args.presets_file)

    for addition in args.add:
        apply_addition(policy, addition)

    value = policy.compile()
    if args.header:
        report_only = args.report_only or get_settings().report_only
        print(f"{header_name(report_only)}: {value}")
    else:
        print(value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
