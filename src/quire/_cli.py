"""Quire CLI — quire build / quire check / quire watch.

Entry point for the ``quire`` command-line interface.  Exit status is 0 when
the build passes and 1 when it fails, so the command can gate CI.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the quire CLI."""
    parser = argparse.ArgumentParser(
        prog="quire",
        description="Validate, route and build navigation for a Markdown docs tree.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # quire build
    build_parser = subparsers.add_parser(
        "build",
        help="Validate content and write routes.json / navigation.json",
    )
    build_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    build_parser.add_argument("--output", default=None, help="Output directory")
    build_parser.add_argument(
        "--base-url", default=None, help="Base URL for sitemap generation",
    )
    build_parser.add_argument(
        "--workers", type=int, default=None, help="Threads for reading files (0=sequential)",
    )

    # quire check
    check_parser = subparsers.add_parser(
        "check",
        help="Validate content without writing output",
    )
    check_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    check_parser.add_argument(
        "--no-warnings", action="store_true", help="Hide missing-description warnings",
    )

    # quire watch
    watch_parser = subparsers.add_parser(
        "watch",
        help="Rebuild whenever content or configuration changes",
    )
    watch_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    watch_parser.add_argument("--output", default=None, help="Output directory")
    watch_parser.add_argument(
        "--check-only", action="store_true", help="Validate on change without writing",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from quire import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from quire._errors import QuireError
    from quire.app import build, check, watch

    try:
        if args.command == "build":
            result = build(
                root=args.root,
                output=args.output,
                base_url=args.base_url,
                workers=args.workers,
            )
        elif args.command == "check":
            result = check(root=args.root, show_warnings=not args.no_warnings)
        else:
            watch(root=args.root, write=not args.check_only, output=args.output)
            sys.exit(0)
    except QuireError as exc:
        print(f"quire: {exc}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0 if result.ok else 1)


if __name__ == "__main__":
    main()
