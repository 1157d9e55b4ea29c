"""CLI entry point for audiocap."""

import click

from audiocap import __version__
from audiocap.errors import AudiocapError


def _load():
    """Load config and return (cfg, data_dir)."""
    from audiocap.config import AudiocapConfig
    from audiocap.paths import get_config_path, get_data_dir

    cfg = AudiocapConfig.load(get_config_path(get_data_dir()))
    return cfg, get_data_dir(cfg.storage.data_dir)


def _service(cfg, data_dir, fmt=None, out_dir=None):
    from dataclasses import replace
    from pathlib import Path

    from audiocap.capture import Container
    from audiocap.service import RecordingService

    rec_config = cfg.to_recorder_config(data_dir)
    if fmt:
        rec_config = replace(rec_config, format=Container.parse(fmt))
    if out_dir:
        rec_config = replace(rec_config, out_dir=Path(out_dir))
    return RecordingService(data_dir, rec_config)


@click.group()
@click.version_option(version=__version__, prog_name="audiocap")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def main(verbose):
    """Record microphone and system audio with ffmpeg."""
    from audiocap.logging_utils import setup_logger
    from audiocap.paths import get_log_path

    _, data_dir = _load()
    setup_logger(get_log_path(data_dir), verbose=verbose)


@main.command()
@click.option("--output", "-o", type=click.Path(), default=None, help="Output file path.")
@click.option("--background", "-b", is_flag=True, help="Detach ffmpeg and return immediately.")
@click.option("--duration", "-t", default=None,
              help="Stop after this long: HH:MM:SS, seconds, or e.g. 1h30m.")
@click.option("--mic", default=None, help="Microphone device (platform specific).")
@click.option("--system", default=None, help="System audio / loopback device (platform specific).")
@click.option("--format", "fmt", default=None, type=click.Choice(["wav", "mp3"]),
              help="Output format.")
@click.option("--out-dir", type=click.Path(), default=None, help="Directory for new recordings.")
def record(output, background, duration, mic, system, fmt, out_dir):
    """Record microphone and system audio into one file."""
    from pathlib import Path

    from audiocap.errors import ProcessExitError
    from audiocap.ffmpeg import next_filename
    from audiocap.timeparse import normalize_duration

    try:
        cfg, data_dir = _load()
        service = _service(cfg, data_dir, fmt=fmt, out_dir=out_dir)

        duration = duration or cfg.recording.duration or None
        if duration:
            duration = normalize_duration(duration)

        outfile = Path(output) if output else next_filename(service.config.out_dir, service.config.format)
        if not background:
            click.echo(f"Recording to {outfile} (Ctrl+C to stop)...")
        result = service.start(
            output=outfile,
            background=background,
            duration=duration,
            mic=mic or cfg.recording.mic or None,
            system=system or cfg.recording.system or None,
        )
    except ProcessExitError as e:
        if not e.interrupted:
            raise click.ClickException(str(e))
        click.echo(f"Recording stopped: {outfile}")
        return
    except (AudiocapError, ValueError) as e:
        raise click.ClickException(str(e))

    if result["status"] == "started":
        click.echo(f"Recording in background (pid {result['pid']}): {result['file']}")
        click.echo("Run 'audiocap stop' to finish.")
    else:
        click.echo(f"Recording saved: {result['file']}")


@main.command()
def stop():
    """Stop the background recording."""
    try:
        cfg, data_dir = _load()
        result = _service(cfg, data_dir).stop()
    except AudiocapError as e:
        raise click.ClickException(str(e))

    if result["status"] == "stopped":
        click.echo(f"Stopped recording (pid {result['pid']}).")
    else:
        click.echo(f"Recording was not running (pid {result['pid']}); cleared stale record.")


@main.command()
def status():
    """Show whether a background recording is running."""
    try:
        cfg, data_dir = _load()
        result = _service(cfg, data_dir).status()
    except AudiocapError as e:
        raise click.ClickException(str(e))

    if result["status"] == "no_pidfile":
        click.echo("No active recording.")
    elif result["status"] == "running":
        click.echo(f"Recording running (pid {result['pid']}).")
    else:
        click.echo(f"Recording not running (pid {result['pid']}, stale record).")


@main.command()
def devices():
    """List audio devices using the platform's own tools."""
    try:
        cfg, data_dir = _load()
        _service(cfg, data_dir).list_devices()
    except AudiocapError as e:
        raise click.ClickException(str(e))


@main.command()
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--list", "list_all", is_flag=True, help="Show all configuration values.")
def config(key, value, list_all):
    """View or set configuration."""
    from audiocap.paths import get_config_path

    cfg, data_dir = _load()
    config_path = get_config_path(data_dir)

    if list_all or (key is None and value is None):
        for section_name, section_dict in cfg._to_dict().items():
            for k, v in section_dict.items():
                click.echo(f"{section_name}.{k} = {v!r}")
        return

    if value is None:
        try:
            click.echo(cfg.get(key))
        except KeyError as e:
            raise click.ClickException(str(e))
        return

    try:
        cfg.set(key, value)
    except (KeyError, ValueError) as e:
        raise click.ClickException(str(e))
    cfg.save(config_path)
    click.echo(f"Set {key} = {cfg.get(key)!r}")
