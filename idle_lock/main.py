"""Main entry point for Idle Lock."""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from idle_lock.config.manager import ConfigManager
from idle_lock.core.provider import LockScreenProvider
from idle_lock.platforms.base import NullAuthGateway
from idle_lock.platforms.factory import get_auth_gateway, get_platform_name
from idle_lock.utils.logger import setup_logging


app = typer.Typer(help="Idle Lock - Lock the application after a period of inactivity")


@app.command()
def run(
    timeout_ms: Annotated[
        Optional[int],
        typer.Option("--timeout", "-t", help="Idle timeout in milliseconds"),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
    no_auth: Annotated[
        bool,
        typer.Option("--no-auth", help="Act as if no authentication sensor exists"),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose logging")
    ] = False,
):
    """
    Open the demo window guarded by the idle lock.

    After TIMEOUT milliseconds without mouse or keyboard input the window is
    covered by a lock overlay, which is dismissed through the device's
    authentication prompt.
    """
    config_manager = ConfigManager()
    config = config_manager.load_config(config_file)

    if timeout_ms is not None:
        config["timeout_ms"] = timeout_ms

    log_level = "DEBUG" if verbose else config.get("log_level", "INFO")
    logger = setup_logging(
        log_level,
        config_manager.get_log_file_path(config),
        file_level=config.get("log_file_level"),
    )

    if not config_manager.validate_config(config):
        logger.error("Invalid configuration")
        raise typer.Exit(1)

    from idle_lock.ui.window import has_display

    if not has_display():
        logger.error("No graphical display detected; cannot open window")
        raise typer.Exit(1)

    import tkinter as tk

    from idle_lock.ui.demo import CounterView
    from idle_lock.ui.window import provide_lock_context, run_tk

    gateway = NullAuthGateway() if no_auth else get_auth_gateway()
    provider = LockScreenProvider(
        gateway,
        timeout_ms=config["timeout_ms"],
        prompt_message=config["prompt_message"],
        fallback_policy=config_manager.get_fallback_policy(config),
        overlay_title=config["overlay_title"],
        unlock_button_text=config["unlock_button_text"],
    )

    root = tk.Tk()
    root.title("Idle Lock")
    root.geometry("480x640")
    provide_lock_context(root, provider.context)
    CounterView(root)

    logger.info(f"Starting Idle Lock (timeout {config['timeout_ms']}ms)")
    try:
        asyncio.run(run_tk(root, provider))
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    finally:
        logger.info("Idle Lock stopped")


@app.command()
def config(
    show: Annotated[
        bool, typer.Option("--show", help="Show current configuration")
    ] = False,
    reset: Annotated[
        bool, typer.Option("--reset", help="Reset configuration to defaults")
    ] = False,
):
    """Manage Idle Lock configuration."""
    config_manager = ConfigManager()

    if reset:
        config_manager.save_config(config_manager.default_config)
        typer.echo("Configuration reset to defaults")
        return

    if show:
        current = config_manager.load_config()
        typer.echo(f"Config file: {config_manager.config_file}")
        typer.echo("Current configuration:")
        for key, value in current.items():
            typer.echo(f"  {key}: {value!r}")
        return

    typer.echo("Use --show to display configuration or --reset to reset to defaults")


@app.command()
def status():
    """Show the detected authentication gateway."""
    setup_logging("WARNING", stream=sys.stderr)
    gateway = get_auth_gateway()
    available = asyncio.run(gateway.has_challenge())

    typer.echo("Idle Lock Status:")
    typer.echo(f"  Platform: {get_platform_name()}")
    typer.echo(f"  Gateway: {type(gateway).__name__}")
    typer.echo(f"  Authentication available: {'yes' if available else 'no'}")
    if not available:
        typer.echo("  Unlock requests will use the fallback policy")


if __name__ == "__main__":
    app()
