"""
Command Line Entry Point
Compiles a manifest file into React component sources.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Sequence

from manifest_compiler.core import (
    ValidationError,
    configure_logging,
    create_container,
    get_logger,
    get_settings,
)
from manifest_compiler.codegen import BatchGenerationResult, CodeGenerator, GenerationOptions
from manifest_compiler.manifest import ManifestParser, load_manifest
from manifest_compiler.monitoring import init_tracer, metrics_collector

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="manifest_compiler",
        description="Generate React components from a project manifest.",
    )
    parser.add_argument("manifest", type=Path, help="Path to manifest JSON")
    parser.add_argument("--out", type=Path, default=Path("."), help="Project root to write into")
    parser.add_argument(
        "--component",
        action="append",
        dest="components",
        metavar="ID",
        help="Only generate this component (repeatable)",
    )
    parser.add_argument("--no-format", action="store_true", help="Skip prettier")
    parser.add_argument("--tsx", action="store_true", help="Write .tsx files")
    parser.add_argument(
        "--metrics",
        type=Path,
        metavar="PATH",
        help="Write Prometheus metrics for the run to this file",
    )
    return parser


def write_results(result: BatchGenerationResult, out_dir: Path) -> list[Path]:
    """Write every successful file under `out_dir`."""
    written: list[Path] = []
    for item in result.results:
        if not item.success:
            continue
        target = out_dir / item.filepath
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(item.code + "\n", encoding="utf-8")
        written.append(target)
    return written


async def run(args: argparse.Namespace) -> int:
    """Generate and write; returns the process exit status."""
    settings = get_settings()
    if args.no_format:
        settings = settings.model_copy(update={"enable_formatting": False})

    container = create_container(settings)
    parser = container.get(ManifestParser)
    generator = container.get(CodeGenerator)

    try:
        manifest = load_manifest(args.manifest, parser)
    except (OSError, ValidationError) as e:
        logger.error("manifest_load_failed", path=str(args.manifest), error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    overrides = GenerationOptions(file_extension=".tsx") if args.tsx else None
    if args.components:
        result = await generator.generate_selected(args.components, manifest, overrides)
    else:
        result = await generator.generate_all(manifest, overrides)

    written = write_results(result, args.out)
    if args.metrics:
        args.metrics.write_bytes(metrics_collector.get_metrics())

    for item in result.results:
        status = "ok" if item.success else "FAILED"
        print(f"{status:6} {item.component_id} -> {item.filepath or item.error}")
        for handler in item.handlers:
            print(f"       handler {handler.name} (flow {handler.flow_id})")
        for diagnostic in item.diagnostics:
            print(f"       {diagnostic.severity}: {diagnostic.message}")
    print(
        f"{result.success_count} generated, {result.failure_count} failed, "
        f"{len(written)} written in {result.total_duration_ms:.1f}ms"
    )
    return 0 if result.success else 1


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level, settings.json_logs)
    init_tracer("manifest-compiler")
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
