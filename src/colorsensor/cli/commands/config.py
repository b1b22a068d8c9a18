"""Config command group: view and edit the persisted AppConfig."""

import json
import sys
from pathlib import Path
from typing import Any, Optional

import click
from pydantic import ValidationError

from colorsensor.exceptions import ColorSensorError, format_error_for_display, wrap_pydantic_error
from colorsensor.models import DEFAULT_CONFIG_PATH, AppConfig, ClassifierStrategy


def _config_path(ctx: click.Context) -> Path:
    obj = ctx.find_root().obj or {}
    return obj.get('config_file') or DEFAULT_CONFIG_PATH


def _fail(error: Exception) -> None:
    user_message, recovery_hint = format_error_for_display(error)
    click.echo(f"[FAIL] {user_message}", err=True)
    if recovery_hint:
        click.echo(recovery_hint, err=True)
    sys.exit(1)


@click.group(name="config")
def config():
    """View and edit the configuration file."""
    pass


@config.command(name="path")
@click.pass_context
def config_path(ctx):
    """Print the configuration file location."""
    click.echo(str(_config_path(ctx)))


@config.command(name="show")
@click.pass_context
def config_show(ctx):
    """Print the effective configuration as JSON."""
    path = _config_path(ctx)
    try:
        app_config = AppConfig.load_or_default(path)
    except ColorSensorError as e:
        _fail(e)
        return

    if not path.exists():
        click.echo(f"# {path} does not exist; showing defaults", err=True)
    click.echo(app_config.model_dump_json(indent=2))


@config.command(name="reset")
@click.option('--yes', '-y', is_flag=True, help='Do not ask for confirmation')
@click.pass_context
def config_reset(ctx, yes: bool):
    """Overwrite the configuration file with defaults (a .bak copy is kept)."""
    path = _config_path(ctx)
    if not yes:
        click.confirm(f"Reset {path} to defaults?", abort=True)
    AppConfig().save(path)
    click.echo(f"[OK] Reset {path}")


# option name -> location in the config
_SETTABLE: list[tuple[str, tuple[str, ...]]] = [
    ("port", ("serial", "port")),
    ("baud", ("serial", "baud_rate")),
    ("dtr", ("serial", "dtr_enable")),
    ("rts", ("serial", "rts_enable")),
    ("channels", ("max_channels",)),
    ("stable_frames", ("stable_frames",)),
    ("cooldown_ms", ("apply_cooldown_ms",)),
    ("warmup_ms", ("warmup_ms",)),
    ("strategy", ("classifier", "strategy")),
    ("no_data_timeout_ms", ("classifier", "no_data_timeout_ms")),
    ("min_clear", ("classifier", "min_clear")),
]


@config.command(name="set")
@click.option('--port', type=str, default=None, help='Serial port (e.g. COM3, /dev/ttyUSB0)')
@click.option('--baud', type=int, default=None, help='Baud rate')
@click.option('--dtr/--no-dtr', default=None, help='Assert DTR when opening the port')
@click.option('--rts/--no-rts', default=None, help='Assert RTS when opening the port')
@click.option('--channels', type=int, default=None, help='Active channels (1-4)')
@click.option('--stable-frames', type=int, default=None, help='Ticks needed to confirm a color')
@click.option('--cooldown-ms', type=int, default=None, help='Minimum time between color changes')
@click.option('--warmup-ms', type=int, default=None, help='Delay before reading after opening')
@click.option(
    '--strategy',
    type=click.Choice([s.value for s in ClassifierStrategy]),
    default=None,
    help='Classification strategy'
)
@click.option('--no-data-timeout-ms', type=int, default=None, help='Channel staleness timeout')
@click.option('--min-clear', type=int, default=None, help='Darkness cutoff on the clear channel')
@click.pass_context
def config_set(ctx, **options: Optional[Any]):
    """
    Update configuration values and save.

    \b
    Examples:
      colorsensor config set --port /dev/ttyUSB0 --baud 115200
      colorsensor config set --channels 2 --strategy ratio
    """
    path = _config_path(ctx)
    try:
        current = AppConfig.load_or_default(path)
    except ColorSensorError as e:
        _fail(e)
        return

    data = current.model_dump(mode="json")
    changed = []
    for option, location in _SETTABLE:
        value = options.get(option)
        if value is None:
            continue
        target = data
        for key in location[:-1]:
            target = target[key]
        target[location[-1]] = value
        changed.append((".".join(location), value))

    if not changed:
        click.echo("Nothing to change. See 'colorsensor config set --help'.")
        return

    try:
        updated = AppConfig.model_validate(data)
    except ValidationError as e:
        _fail(wrap_pydantic_error(e, str(path)))
        return

    updated.save(path)
    for field, value in changed:
        click.echo(f"[OK] {field} = {json.dumps(value)}")
