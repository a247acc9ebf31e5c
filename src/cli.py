"""Command-line entry point for the microservice generator.

Usage::

    python -m src.cli ./my-service
    python -m src.cli ./my-service --yes
    python -m src.cli ./my-service --no-overwrite
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from src.config import GeneratorConfig
from src.scaffolder import ScaffoldError, build_generator
from src.utils import console, print_warning


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nodejs-microservice",
        description="Generate a Node.js/Express microservice skeleton",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m src.cli ./my-service\n"
            "  python -m src.cli ./my-service --yes\n"
            "  python -m src.cli ./my-service --no-overwrite\n"
        ),
    )
    parser.add_argument(
        "destination",
        nargs="?",
        default=None,
        help="Directory to generate into (default: current directory)",
    )
    parser.add_argument(
        "--yes", "-y",
        dest="accept_defaults",
        action="store_true",
        default=None,
        help="Accept every default without prompting",
    )
    conflict = parser.add_mutually_exclusive_group()
    conflict.add_argument(
        "--force",
        dest="conflict",
        action="store_const",
        const="overwrite",
        help="Overwrite existing files (default)",
    )
    conflict.add_argument(
        "--no-overwrite",
        dest="conflict",
        action="store_const",
        const="fail",
        help="Fail instead of overwriting an existing file",
    )
    parser.add_argument(
        "--template-dir",
        default=None,
        help="Use templates from this directory instead of the packaged ones",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``python -m src.cli``; returns the exit status."""
    args = build_parser().parse_args(argv)

    config = GeneratorConfig.from_env(
        destination=Path(args.destination) if args.destination else None,
        template_dir=Path(args.template_dir) if args.template_dir else None,
        conflict=args.conflict,
        accept_defaults=args.accept_defaults,
    )

    generator = build_generator(config)
    try:
        asyncio.run(generator.generate(config.destination))
    except (ScaffoldError, ValueError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if generator.written:
            print_warning(
                f"{len(generator.written)} file(s) were written before the failure "
                "and have been left in place."
            )
        return 1
    except KeyboardInterrupt:
        console.print("[bold red]Error:[/bold red] interrupted")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
