"""Typer CLI application."""

import json
import sys
from dataclasses import asdict
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from cellterm.config import ConfigError, RendererConfig, load_config
from cellterm.logging_setup import configure_logging


def _load(console: Console) -> RendererConfig:
    try:
        cfg = load_config()
    except ConfigError as e:
        console.print(f"[red]Invalid configuration: {e}[/]")
        raise typer.Exit(2)
    configure_logging(cfg.log_level, cfg.log_file)
    return cfg


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="cellterm",
        help="Character-cell terminal renderer with minimal diff output.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console(stderr=True)

    @app.command()
    def info(
        json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    ) -> None:
        """Show the detected terminal size and effective configuration."""
        from cellterm.cli.core.terminal import Terminal

        cfg = _load(console)
        size = Terminal.size(fallback=(cfg.fallback_width, cfg.fallback_height))

        if json_output:
            data = {
                "cols": size.cols,
                "rows": size.rows,
                "config": {
                    **asdict(cfg),
                    "log_file": str(cfg.log_file) if cfg.log_file else None,
                },
            }
            print(json.dumps(data, indent=2))
            return

        table = Table(title="cellterm", show_header=False)
        table.add_column("Setting", style="bold cyan")
        table.add_column("Value")
        table.add_row("Terminal size", f"{size.cols}x{size.rows}")
        table.add_row("Log level", cfg.log_level)
        table.add_row("Log file", str(cfg.log_file) if cfg.log_file else "(stderr)")
        table.add_row("FPS", f"{cfg.fps:g}")
        table.add_row("Fallback size", f"{cfg.fallback_width}x{cfg.fallback_height}")
        Console().print(table)

    @app.command()
    def demo(
        frames: Annotated[int, typer.Option("--frames", "-n", min=1, help="Number of frames to draw")] = 200,
        fps: Annotated[Optional[float], typer.Option("--fps", min=0.1, help="Frames per second")] = None,
        width: Annotated[Optional[int], typer.Option("--width", min=0, help="Override terminal width")] = None,
        height: Annotated[Optional[int], typer.Option("--height", min=0, help="Override terminal height")] = None,
    ) -> None:
        """Run an animated demo through the diff renderer."""
        from cellterm.cli.core.terminal import Terminal
        from cellterm.cli.demo import run_demo
        from cellterm.render.renderer import Renderer

        cfg = _load(console)
        out = sys.stdout
        fallback = (cfg.fallback_width, cfg.fallback_height)

        def poll_size() -> tuple[int, int]:
            size = Terminal.size(out, fallback)
            return size.cols, size.rows

        fixed = width is not None or height is not None
        cols, rows = poll_size()
        cols = width if width is not None else cols
        rows = height if height is not None else rows

        renderer = Renderer(out, cols, rows)
        try:
            with Terminal.session(out):
                renderer.repaint()
                stats = run_demo(
                    renderer,
                    frames,
                    fps or cfg.fps,
                    poll_size=None if fixed else poll_size,
                )
        except KeyboardInterrupt:
            console.print("[yellow]Interrupted[/]")
            raise typer.Exit(130)
        except OSError as e:
            console.print(f"[red]Terminal write failed: {e}[/]")
            raise typer.Exit(1)

        console.print(
            f"[green]{frames} frames[/]: {stats.patches} patches, "
            f"{stats.cursor_moves} cursor moves, "
            f"{stats.fg_changes + stats.bg_changes} color changes, "
            f"{stats.bytes_written} bytes"
        )

    return app
