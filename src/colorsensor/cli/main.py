"""Main CLI entry point."""

import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Optional

import click

from colorsensor import __version__

from .commands import config, replay
from .display import format_color_change, format_snapshot, timestamp

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path.home() / ".colorsensor" / "logs"


def resolve_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Where log output goes for the given flags."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "colorsensor-debug.log"
    return DEFAULT_LOG_DIR / "colorsensor.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging in the current directory
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Explicit log level wins for custom log files
    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Rotating file handler (keeps last 5 files, max 10MB each)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")


def report_error(error: Exception, log_path: Path) -> None:
    """Show a clean error message without traceback."""
    from colorsensor.exceptions import format_error_for_display

    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)
    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)
    click.echo(f"\nFor details, check the log file: {log_path}", err=True)


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__, prog_name="colorsensor")
@click.option(
    '--config-file',
    '-c',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Configuration file (default: ~/.colorsensor/config.json)'
)
@click.option('--port', '-p', type=str, default=None, help='Serial port (overrides config)')
@click.option('--baud', '-b', type=int, default=None, help='Baud rate (overrides config)')
@click.option(
    '--channels',
    type=click.IntRange(1, 4),
    default=None,
    help='Number of active sensor channels (overrides config)'
)
@click.option(
    '--snapshot/--no-snapshot',
    default=False,
    help='Print the per-channel readout whenever it changes'
)
@click.option('-v', '--verbose', count=True, help='Increase verbosity (-v: INFO, -vv: DEBUG)')
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./colorsensor-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(
    ctx,
    config_file: Optional[Path],
    port: Optional[str],
    baud: Optional[int],
    channels: Optional[int],
    snapshot: bool,
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    Color Sensor - real-time color decisions from a serial RGBC sensor board.

    Reads "channel,r,g,b,c" lines from the board, classifies each channel
    as red, blue or yellow, mixes simultaneous colors (purple, orange,
    green) and prints every confirmed color change.

    \b
    Examples:
      # Run with the configured port
      colorsensor

      # Override port and show the per-channel readout
      colorsensor --port /dev/ttyUSB0 --snapshot

      # Replay a recorded session without hardware
      colorsensor replay session.txt

      # Change the default port
      colorsensor config set --port COM4
    """
    ctx.ensure_object(dict)
    ctx.obj['config_file'] = config_file
    ctx.obj['logging'] = (verbose, debug, log_file, log_level)

    if ctx.invoked_subcommand is not None:
        return

    from colorsensor.core import ColorPipeline
    from colorsensor.models import AppConfig

    setup_logging(verbose, debug, log_file, log_level)
    log_path = resolve_log_path(debug, log_file)

    logger.info("Starting color sensor")

    pipeline = None
    try:
        app_config = AppConfig.load_or_default(config_file)

        serial_overrides = {}
        if port is not None:
            serial_overrides['port'] = port
        if baud is not None:
            serial_overrides['baud_rate'] = baud
        updates = {}
        if serial_overrides:
            updates['serial'] = app_config.serial.model_copy(update=serial_overrides)
        if channels is not None:
            updates['max_channels'] = channels
        if updates:
            app_config = app_config.model_copy(update=updates)

        def on_color(index: int) -> None:
            click.echo(f"[{timestamp()}] color -> {format_color_change(index)}")

        pipeline = ColorPipeline(app_config, on_color)
        pipeline.init()

        if pipeline.device_available:
            click.echo(
                f"Listening on {app_config.serial.port} @ {app_config.serial.baud_rate} "
                f"({app_config.max_channels} channel(s)). Press Ctrl+C to stop."
            )
        else:
            click.echo(
                f"Port {app_config.serial.port} is not available; no colors will be detected. "
                "Press Ctrl+C to stop.",
                err=True
            )

        interval = app_config.tick_interval_ms / 1000.0
        last_snapshot = None
        while True:
            pipeline.tick()
            if snapshot and pipeline.snapshot != last_snapshot:
                last_snapshot = pipeline.snapshot
                click.echo(f"[{timestamp()}]\n{format_snapshot(last_snapshot)}")
            time.sleep(interval)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        click.echo("\nShutting down...", err=True)
    except click.Abort:
        raise
    except Exception as e:
        logger.exception("Error running color sensor")
        report_error(e, log_path)
        sys.exit(1)
    finally:
        if pipeline is not None:
            pipeline.shutdown()


cli.add_command(config)
cli.add_command(replay)

if __name__ == "__main__":
    cli()
