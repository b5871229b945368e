"""CLI entrypoint for diffing package versions between two lockfiles.

Usage:
  npm-version-diff FROM TO [--mode npm|pnpm] [--git] [--direct-only] ...

FROM and TO are lockfile paths, or git revisions when --git is given.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .config import load_options
from .core import diff_packages
from .errors import VersionDiffError
from .options import DEPENDENCY_TYPES, MODES
from .report import build_report, render_markdown, render_text

FORMATS = ("json", "markdown", "text")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="npm-version-diff", description=__doc__.splitlines()[0])
    parser.add_argument("from_ref", metavar="FROM", help="Lockfile path or git revision before")
    parser.add_argument("to_ref", metavar="TO", help="Lockfile path or git revision after")
    parser.add_argument("--mode", choices=MODES, default=None, help="Lockfile format")
    parser.add_argument(
        "--include",
        nargs="+",
        choices=DEPENDENCY_TYPES,
        default=None,
        help="Dependency types to include (takes precedence over --omit)",
    )
    parser.add_argument(
        "--omit",
        nargs="+",
        choices=DEPENDENCY_TYPES,
        default=None,
        help="Dependency types to omit (prod is always kept)",
    )
    parser.add_argument(
        "--direct-only",
        action="store_true",
        default=None,
        help="Only report dependencies declared by the project itself",
    )
    parser.add_argument(
        "--git",
        action="store_true",
        default=None,
        help="Treat FROM and TO as git revisions",
    )
    parser.add_argument(
        "--git-lock-file",
        default=None,
        help="Lockfile path inside the git revisions (default depends on --mode)",
    )
    parser.add_argument("--format", choices=FORMATS, default="text", help="Output format")
    parser.add_argument("--config", default=None, help="Path to a JSON settings file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = load_options(
            args.config,
            mode=args.mode,
            include=args.include,
            omit=args.omit,
            direct_only=args.direct_only,
            git=args.git,
            git_lock_file=args.git_lock_file,
        )
        changes = diff_packages(args.from_ref, args.to_ref, options)
    except VersionDiffError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(json.dumps(build_report(changes), indent=2))
    elif args.format == "markdown":
        sys.stdout.write(render_markdown(changes))
    else:
        sys.stdout.write(render_text(changes))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
