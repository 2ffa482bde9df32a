"""Command-line interface for scrollstory.

Validates scene files, prints computed scroll geometry and previews the
visibility timeline without a browser.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from scrollstory.core.config.loader import (
    apply_logging,
    load_config,
    load_engine_config,
    load_scene,
)
from scrollstory.core.config.models import EngineConfig
from scrollstory.core.geometry.overlap import validate_all_sections
from scrollstory.core.rendering.custom import load_builtin_renderers
from scrollstory.core.runtime.simulation import simulate_scroll
from scrollstory.core.scene.models import Scene
from scrollstory.core.scene.validator import SceneValidationError, build_scene, validate_schema
from scrollstory.core.timing.calculus import (
    ScrollHeightError,
    ZoneOrderingError,
    calculate_card_threshold,
    prepare_scene,
    section_zones_vh,
)

console = Console()
logger = logging.getLogger(__name__)


def _load_engine_config(args: argparse.Namespace) -> EngineConfig | None:
    try:
        config = load_engine_config(Path(args.config) if args.config else None)
    except Exception as e:
        console.print(f"[red]ERROR: Could not load config: {escape(str(e))}[/red]")
        return None
    apply_logging(config)
    if args.log_level:
        logging.getLogger().setLevel(args.log_level)
    return config


def _load_prepared_scene(path: Path, config: EngineConfig) -> Scene | None:
    try:
        scene = load_scene(path, load_builtin_renderers())
        return prepare_scene(scene, config.timing, config.runtime.default_fade_zone)
    except (FileNotFoundError, ValueError) as e:
        # ZoneOrderingError and ScrollHeightError are ValueErrors too
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
    except SceneValidationError as e:
        for err in e.errors:
            console.print(f"[red]  - {escape(err)}[/red]")
    return None


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a scene: structural errors fail, overlap warnings do not."""
    config = _load_engine_config(args)
    if config is None:
        return 1

    path = Path(args.scene)
    try:
        raw = load_config(path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        return 1

    registry = load_builtin_renderers()
    result = validate_schema(raw, registry)
    if not result.valid:
        console.print(f"[red]❌ {len(result.errors)} error(s) in {escape(str(path))}[/red]")
        for err in result.errors:
            logger.error("%s", err)
            console.print(f"[red]  - {escape(err)}[/red]")
        return 1

    try:
        scene = prepare_scene(
            build_scene(raw, registry), config.timing, config.runtime.default_fade_zone
        )
    except SceneValidationError as e:
        console.print(f"[red]❌ {len(e.errors)} error(s) in {escape(str(path))}[/red]")
        for err in e.errors:
            console.print(f"[red]  - {escape(err)}[/red]")
        return 1
    except (ZoneOrderingError, ScrollHeightError) as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        return 1

    report = validate_all_sections(scene, config.viewport, config.focal)
    for warning in report.warnings:
        logger.warning("%s", warning)
        console.print(f"[yellow]  ! {escape(warning)}[/yellow]")

    console.print(
        f"[green]✅ {escape(str(path))}: {len(scene.sections)} section(s), "
        f"{len(report.warnings)} overlap warning(s)[/green]"
    )
    return 0


def cmd_heights(args: argparse.Namespace) -> int:
    """Print computed scroll heights, zones and card thresholds."""
    config = _load_engine_config(args)
    if config is None:
        return 1
    scene = _load_prepared_scene(Path(args.scene), config)
    if scene is None:
        return 1

    viewport_height = config.viewport.height
    table = Table(title=f"Scroll geometry at {config.viewport.width:.0f}x{viewport_height:.0f}")
    table.add_column("Section")
    table.add_column("Cards", justify="right")
    table.add_column("Height", justify="right")
    table.add_column("Hold", justify="right")
    table.add_column("Fade", justify="right")
    table.add_column("Card thresholds (px)")

    for section in scene.sections:
        zones = section_zones_vh(section, config.runtime.default_fade_zone, config.timing)
        thresholds = [
            calculate_card_threshold(viewport_height, i, config.timing).threshold
            for i in range(section.card_count)
        ]
        table.add_row(
            escape(section.id),
            str(section.card_count),
            f"{section.scroll.height_vh}vh",
            f"{zones.hold_zone * 100:.0f}vh",
            f"{zones.fade_zone * 100:.0f}vh",
            ", ".join(str(t) for t in thresholds) or "-",
        )

    console.print(table)
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    """Print a sampled scroll timeline of section opacity."""
    config = _load_engine_config(args)
    if config is None:
        return 1
    scene = _load_prepared_scene(Path(args.scene), config)
    if scene is None:
        return 1

    samples = simulate_scroll(
        scene,
        config.viewport,
        args.samples,
        default_fade_zone=config.runtime.default_fade_zone,
        constants=config.timing,
    )

    table = Table(title="Scroll preview")
    table.add_column("Offset", justify="right")
    for section in scene.sections:
        table.add_column(escape(section.id), justify="right")
    table.add_column("Trailing", justify="right")

    for sample in samples:
        cells = [f"{sample.offset:.0f}"]
        for section in scene.sections:
            visual = sample.sections[section.id]
            cells.append(f"{visual.opacity:.2f}" if visual.displayed else "-")
        cells.append(f"{sample.trailing.opacity:.2f}")
        table.add_row(*cells)

    console.print(table)
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=None, help="Path to engine config (JSON or YAML)")
    common.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )

    p = argparse.ArgumentParser(
        prog="scrollstory",
        description="scrollstory - scroll-driven section choreography",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    validate = sub.add_parser("validate", parents=[common], help="Validate a scene file")
    validate.add_argument("scene", help="Path to scene file (JSON or YAML)")
    validate.set_defaults(func=cmd_validate)

    heights = sub.add_parser(
        "heights", parents=[common], help="Show computed scroll heights and zones"
    )
    heights.add_argument("scene", help="Path to scene file (JSON or YAML)")
    heights.set_defaults(func=cmd_heights)

    preview = sub.add_parser(
        "preview", parents=[common], help="Preview the scroll visibility timeline"
    )
    preview.add_argument("scene", help="Path to scene file (JSON or YAML)")
    preview.add_argument(
        "--samples",
        type=int,
        default=20,
        help="Number of scroll offsets to sample (default: 20)",
    )
    preview.set_defaults(func=cmd_preview)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)
    if getattr(args, "samples", 2) < 2:
        p.error("--samples must be at least 2")
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
