"""
DayFlow CLI Interface
Command line interface implemented using Typer
"""

import json
import os
import time
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from dayflow.config.loader import CONFIG_ENV_VAR, get_config
from dayflow.core.logger import get_logger, setup_logging

logger = get_logger(__name__)


def _use_config(config_file: Optional[str]):
    """Select the configuration file for this process and any server workers"""
    if config_file:
        os.environ[CONFIG_ENV_VAR] = str(Path(config_file).expanduser())
        config = get_config(os.environ[CONFIG_ENV_VAR])
        # Log handlers follow the selected file's [logging] section
        setup_logging()
        return config
    return get_config()


def start(
    host: Optional[str] = typer.Option(None, help="Server host address"),
    port: Optional[int] = typer.Option(None, help="Server port"),
    config_file: Optional[str] = typer.Option(None, help="Configuration file path"),
    debug: Optional[bool] = typer.Option(None, help="Enable debug mode (auto-reload)"),
):
    """Start the DayFlow API server"""
    try:
        config = _use_config(config_file)
        host = host or config.get("server.host", "0.0.0.0")
        port = port or int(config.get("server.port", 8000))
        debug = bool(config.get("server.debug", False)) if debug is None else debug
        if debug:
            setup_logging(level="DEBUG")

        logger.info("Starting DayFlow API server...")
        logger.info(f"Host: {host}, Port: {port}")
        logger.info(f"Debug mode: {debug}")

        uvicorn.run(
            "dayflow.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=debug,
            log_level="debug" if debug else "info",
        )

    except Exception as e:
        logger.error(f"Failed to start service: {e}")
        raise typer.Exit(1)


def init_db(
    config_file: Optional[str] = typer.Option(None, help="Configuration file path"),
):
    """Create the database file and tables"""
    _use_config(config_file)

    from dayflow.core.db import get_db

    db = get_db()
    typer.echo(f"Database ready: {db.db_path}")


def export(
    user_id: str = typer.Option(..., help="User whose data is exported"),
    out: Optional[Path] = typer.Option(None, help="Output file (defaults to the exports directory)"),
    config_file: Optional[str] = typer.Option(None, help="Configuration file path"),
):
    """Export a user's tasks, ideas and links as JSON"""
    _use_config(config_file)

    from dayflow.core.db import get_db
    from dayflow.core.paths import get_exports_dir
    from dayflow.handlers.export import build_export, export_filename

    data = build_export(get_db(), user_id)
    target = out or get_exports_dir() / export_filename()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    typer.echo(
        f"Exported {len(data['tasks'])} tasks, {len(data['ideas'])} ideas, "
        f"{len(data['links'])} links to {target}"
    )


def focus(
    sessions: int = typer.Option(1, help="Number of work sessions to run"),
    task_id: Optional[str] = typer.Option(None, help="Task to focus on"),
):
    """Run a pomodoro timer in the terminal"""
    from dayflow.core.focus import FocusTimer, TimerMode

    def on_finish(mode: TimerMode):
        typer.echo(f"{mode.value} finished ({timer.cycles} sessions done)")

    timer = FocusTimer(on_finish=on_finish, current_task_id=task_id)
    try:
        while timer.cycles < sessions:
            if not timer.running:
                typer.echo(f"Starting {timer.mode.value}: {timer.remaining // 60} minutes")
                timer.start()
            time.sleep(1)
            timer.tick()
    except KeyboardInterrupt:
        timer.pause()
        typer.echo(f"Stopped with {timer.cycles} sessions done")


def main():
    """Main function"""
    app = typer.Typer()

    app.command()(start)  # Start FastAPI server
    app.command()(init_db)  # Initialize database
    app.command()(export)  # Export user data
    app.command()(focus)  # Terminal focus timer

    app()


if __name__ == "__main__":
    main()
