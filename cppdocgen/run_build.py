"""Orchestration logic for turning AST dumps into a documentation site."""

from __future__ import annotations

import argparse
import logging
import shutil
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cppdocgen.build_config import BuildConfig
from cppdocgen.build_context import BuildContext
from cppdocgen.builder import Builder
from cppdocgen.entries import IndexEntry, build_symbol_entries
from cppdocgen.errors import ConfigError
from cppdocgen.file_entries import build_file_roots
from cppdocgen.linker import Linker
from cppdocgen.load_ast_dump import load_ast_dump
from cppdocgen.load_config import DEFAULT_CONFIG_NAME, load_config
from cppdocgen.renderer import Renderer
from cppdocgen.symbol_graph import SymbolGraph
from cppdocgen.tutorial_entries import load_tutorials

if TYPE_CHECKING:
    from cppdocgen.builder import ProgressCallback
    from cppdocgen.entity import Entity

logger = logging.getLogger(__name__)


def run_build(args: argparse.Namespace) -> int:
    """Execute the full build pipeline."""
    input_dir = args.input.resolve()
    output_dir = args.output.resolve()
    config = _init_config(args, input_dir, output_dir)
    graph = SymbolGraph.build(_load_units(args.ast_dumps))
    logger.info("Symbol graph has %d symbols", sum(1 for _ in graph.walk()))
    _prepare_output(output_dir, overwrite=args.overwrite)

    context = BuildContext(
        config=config,
        graph=graph,
        linker=Linker(config, graph),
        renderer=Renderer.from_config(config.templates),
    )
    written = build_site(context, progress=_print_progress)

    print(f"Generated {written} pages into: {output_dir}")
    return 0


def build_site(
    context: BuildContext, progress: ProgressCallback | None = None
) -> int:
    """Collect every entry and build all pages on a thread pool."""
    config = context.config
    symbols = build_symbol_entries(context.graph.root, context.linker)
    files = build_file_roots(config)
    tutorials = load_tutorials(config)

    with ThreadPoolExecutor(max_workers=config.jobs) as pool:
        builder = Builder(
            context,
            pool,
            index=IndexEntry(context.graph.root),
            symbols=symbols,
            files=files,
            tutorials=tutorials,
        )
        return builder.build(progress)


def _init_config(
    args: argparse.Namespace, input_dir: Path, output_dir: Path
) -> BuildConfig:
    """Load the config file (explicit, or `cppdocgen.yml` in the input dir)."""
    path = args.config
    if path is None and (input_dir / DEFAULT_CONFIG_NAME).is_file():
        path = input_dir / DEFAULT_CONFIG_NAME
    config: dict[str, Any] = load_config(path)
    if args.jobs:
        config["jobs"] = args.jobs
    return BuildConfig.from_dict(config, input_dir, output_dir)


def _load_units(paths: list[Path]) -> list[Entity]:
    units: list[Entity] = []
    for path in paths:
        units.extend(load_ast_dump(path))
    if not units:
        msg = "No entities found in the given AST dumps"
        raise ConfigError(msg)
    return units


def _prepare_output(output_dir: Path, *, overwrite: bool) -> None:
    if output_dir.exists() and any(output_dir.iterdir()):
        if not overwrite:
            msg = f"Output directory is not empty: {output_dir} (use --overwrite)"
            raise ConfigError(msg)
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)


def _print_progress(done: int, total: int, url: str) -> None:
    if done % 50 == 0 or done == total:
        print(f"  ... wrote {done}/{total} pages")
