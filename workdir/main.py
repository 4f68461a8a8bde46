"""workdir CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
import yaml
from pydantic import ValidationError
from rich.table import Table

from workdir.core.config import ConfigManager
from workdir.core.logging import StdlibLogger, setup_logging
from workdir.core.manager import WorkingDirectory
from workdir.core.paths import is_relative_path
from workdir.core.prepare import PrepareStatus, prepare_directory
from workdir.core.relocator import relocate_files
from workdir.ui import console, error, info, success, warn


app = typer.Typer(
    name="workdir",
    help="Working directory object whose registered files follow it around.",
    no_args_is_help=True,
)


class _State:
    manager: Optional[ConfigManager] = None
    log: Optional[StdlibLogger] = None


_state = _State()


@app.callback()
def _main(
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help="Configuration directory"),
) -> None:
    """Load configuration and set up logging before any command runs."""
    _state.manager = ConfigManager(config_dir)
    cfg = _config_manager().config
    _state.log = StdlibLogger(setup_logging(log_level=cfg.log_level, logs_dir=cfg.logs_dir))


def _config_manager() -> ConfigManager:
    if _state.manager is None:
        _state.manager = ConfigManager()
    return _state.manager


def _logger() -> StdlibLogger:
    if _state.log is None:
        _state.log = StdlibLogger()
    return _state.log


@app.command()
def classify(
    paths: List[str] = typer.Argument(..., help="Paths to classify"),
    windows: Optional[bool] = typer.Option(
        None, "--windows/--posix", help="Force Windows or POSIX rules (default: this platform)"
    ),
) -> None:
    """Tell whether each path is relative or absolute."""
    table = Table(title="Path Classification")
    table.add_column("Path", style="cyan")
    table.add_column("Kind", style="green")
    for p in paths:
        kind = "relative" if is_relative_path(p, windows) else "absolute"
        table.add_row(p, kind)
    console.print(table)


@app.command()
def prepare(
    directory: str = typer.Argument(..., help="Directory to create or check"),
) -> None:
    """Make sure a directory exists and is writable."""
    cfg = _config_manager().config
    result = prepare_directory(directory, log=_logger(), mode=cfg.mkdir_mode)
    if result.status is PrepareStatus.CREATED:
        success(f"Created {directory}")
    elif result.status is PrepareStatus.ALREADY_OK:
        info(f"Already ready: {directory}")
    else:
        error(f"{result.error.category.value}: {result.error.message}")
        raise typer.Exit(1)


@app.command()
def move(
    old_base: str = typer.Argument(..., help="Directory the files are under now"),
    new_base: str = typer.Argument(..., help="Directory to move them to"),
    files: List[str] = typer.Argument(..., help="Paths relative to OLD_BASE"),
) -> None:
    """Move files from one base directory to another, keeping relative paths."""
    cfg = _config_manager().config
    result = relocate_files(old_base, new_base, files, log=_logger(), mode=cfg.mkdir_mode)
    _print_relocation(result.moved, result.failed, result.skipped)
    if result.partial:
        raise typer.Exit(1)


@app.command()
def chdir(
    new_dir: str = typer.Argument(..., help="New base directory (relative to --from)"),
    base: Optional[str] = typer.Option(None, "--from", help="Starting base directory (default: CWD)"),
    files: List[str] = typer.Option([], "--file", "-f", help="File to register before the change"),
    create: Optional[bool] = typer.Option(
        None, "--create/--no-create", help="Create NEW_DIR if missing (default: from config)"
    ),
) -> None:
    """Change a working directory and bring registered files along."""
    cfg = _config_manager().config
    wd = WorkingDirectory.from_config(cfg, base, log=_logger())
    for f in files:
        if not wd.register_file(f):
            warn(f"Not under {wd.path}, ignored: {f}")
    change = wd.change_directory(new_dir, autocreate=create)
    if not change:
        error(change.error.message if change.error else "Change directory failed.")
        info(f"Working directory: {wd.path}")
        raise typer.Exit(1)
    success(f"Working directory: {wd.path}")
    if change.relocation is not None:
        _print_relocation(change.relocation.moved, change.relocation.failed, change.relocation.skipped)


def _print_relocation(moved: list[str], failed: list[str], skipped: list[str]) -> None:
    table = Table(title="Relocation")
    table.add_column("File", style="cyan")
    table.add_column("Result")
    for f in moved:
        table.add_row(f, "[green]moved[/]")
    for f in failed:
        table.add_row(f, "[red]failed[/]")
    for f in skipped:
        table.add_row(f, "[dim]skipped[/]")
    console.print(table)
    summary = f"{len(moved)} moved, {len(failed)} failed, {len(skipped)} skipped"
    if failed:
        warn(summary)
    else:
        success(summary)


@app.command()
def init() -> None:
    """Write a default configuration file."""
    mgr = _config_manager()
    mgr.save()
    success(f"Configuration initialized at {mgr.config_path}")


@app.command()
def config(
    show: bool = typer.Option(False, "--show", "-s", help="Show current configuration"),
    path: bool = typer.Option(False, "--path", "-p", help="Show config file path"),
    assignments: List[str] = typer.Option([], "--set", help="Set KEY=VALUE and save"),
) -> None:
    """View or change configuration."""
    mgr = _config_manager()
    if assignments:
        for assignment in assignments:
            key, sep, raw = assignment.partition("=")
            if not sep:
                error(f"Expected KEY=VALUE, got: {assignment}")
                raise typer.Exit(1)
            key = key.strip()
            try:
                # Values are read the same way the config file is
                mgr.set(key, yaml.safe_load(raw) if raw.strip() else None)
            except KeyError:
                error(f"Unknown setting: {key}")
                raise typer.Exit(1)
            except ValidationError as e:
                error(f"Invalid value for {key}: {e.errors()[0]['msg']}")
                raise typer.Exit(1)
            except yaml.YAMLError:
                error(f"Could not parse value for {key}: {raw}")
                raise typer.Exit(1)
        mgr.save()
        success(f"Configuration saved to {mgr.config_path}")
        return
    if path:
        info(str(mgr.config_path))
        return
    if show:
        table = Table(title="Configuration")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")
        for key, value in mgr.config.model_dump().items():
            if key == "mkdir_mode":
                value = oct(value)
            table.add_row(key, str(value))
        console.print(table)
        return
    info(f"Config dir: {mgr.config_dir}")
    info(f"Config file exists: {mgr.config_path.exists()}")


if __name__ == "__main__":
    app()
