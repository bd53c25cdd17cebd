"""Generate a static C++ documentation site from AST dumps."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from cppdocgen.errors import BuildError, ConfigError
from cppdocgen.run_build import run_build

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Run the documentation build."""
    ap = argparse.ArgumentParser(
        prog="cppdocgen",
        description="Generate cross-linked HTML documentation for a C++ codebase.",
    )
    ap.add_argument(
        "ast_dumps",
        nargs="+",
        type=Path,
        help="AST dump files (YAML or JSON) produced by the parser front-end",
    )
    ap.add_argument(
        "-i",
        "--input",
        type=Path,
        default=Path(),
        help="Project root that source and tutorial paths are relative to",
    )
    ap.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help="Directory the site is written to",
    )
    ap.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file (default: INPUT/cppdocgen.yml if present)",
    )
    ap.add_argument(
        "--overwrite",
        action="store_true",
        help="Clear a non-empty output directory instead of refusing to build",
    )
    ap.add_argument(
        "--jobs",
        type=int,
        help="Number of page-writing threads (overrides the config)",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return run_build(args)
    except (ConfigError, BuildError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
