"""Replay command: run recorded sensor lines through the pipeline offline."""

import logging
from pathlib import Path
from typing import Optional

import click

from colorsensor.core import ColorPipeline
from colorsensor.exceptions import ColorSensorError
from colorsensor.models import AppConfig

from ..display import format_color_change, format_snapshot

logger = logging.getLogger(__name__)


@click.command(name="replay")
@click.argument('recording', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--tick-ms',
    type=click.IntRange(min=1),
    default=None,
    help='Simulated time between ticks (default: tick_interval_ms from config)'
)
@click.option(
    '--lines-per-tick',
    type=click.IntRange(min=1),
    default=1,
    help='Recorded lines delivered before each tick (default: 1)'
)
@click.option('--snapshot/--no-snapshot', default=False, help='Print the readout after every tick')
@click.pass_context
def replay(ctx, recording: Path, tick_ms: Optional[int], lines_per_tick: int, snapshot: bool):
    """
    Replay a recorded session without hardware.

    RECORDING is a text file with one protocol line per line, exactly as
    the board prints them (e.g. captured with a serial monitor). Time is
    simulated, so cooldown and staleness behave as they would live.

    \b
    Examples:
      colorsensor replay session.txt
      colorsensor replay session.txt --lines-per-tick 4 --tick-ms 20
    """
    obj = ctx.find_root().obj or {}
    verbose, debug, log_file, log_level = obj.get('logging', (0, False, None, 'INFO'))
    if verbose or debug or log_file:
        from ..main import setup_logging
        setup_logging(verbose, debug, log_file, log_level)

    try:
        app_config = AppConfig.load_or_default(obj.get('config_file'))
    except ColorSensorError as e:
        raise click.ClickException(e.get_full_message())

    interval = (tick_ms or app_config.tick_interval_ms) / 1000.0
    lines = [ln.strip() for ln in recording.read_text(errors="replace").splitlines()]
    lines = [ln for ln in lines if ln]

    now = 0.0
    changes = 0

    def on_color(index: int) -> None:
        nonlocal changes
        changes += 1
        click.echo(f"[t={now:8.3f}s] color -> {format_color_change(index)}")

    pipeline = ColorPipeline(app_config, on_color, clock=lambda: now)

    for start in range(0, len(lines), lines_per_tick):
        for line in lines[start:start + lines_per_tick]:
            pipeline.feed_line(line)
        pipeline.tick()
        if snapshot:
            click.echo(f"[t={now:8.3f}s]\n{format_snapshot(pipeline.snapshot)}")
        now += interval

    # Let the last reading settle through stabilization
    for _ in range(app_config.stable_frames):
        pipeline.tick()
        now += interval

    logger.info(f"Replayed {len(lines)} line(s) from {recording}, {changes} color change(s)")
    click.echo(f"\n{len(lines)} line(s), {changes} color change(s)")
