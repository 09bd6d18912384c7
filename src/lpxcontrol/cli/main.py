"""Main CLI entry point."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import click

from lpxcontrol import __version__
from lpxcontrol.exceptions import LpxControlError, format_error_for_display
from lpxcontrol.models.config import DEFAULT_CONFIG_DIR, DEFAULT_CONFIG_PATH

from .commands import colour, config_group, midi_group, mode, run

logger = logging.getLogger(__name__)


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging in the current directory
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)

    Returns:
        Path of the log file
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    if debug and not log_file:
        log_path = Path.cwd() / "lpxcontrol-debug.log"
        file_level = logging.DEBUG
    elif log_file:
        log_path = log_file
        file_level = getattr(logging, log_level.upper())
    else:
        log_dir = DEFAULT_CONFIG_DIR / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / "lpxcontrol.log"
        file_level = getattr(logging, log_level.upper())

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
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)

    # The daemon has no UI, so diagnostics also go to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(min(level, file_level))
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


class ErrorReportingGroup(click.Group):
    """Click group that shows LpxControlError as a clean message and exits 1."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except LpxControlError as e:
            logger.error(e.technical_message)

            user_message, recovery_hint = format_error_for_display(e)
            click.echo("\n" + "=" * 70, err=True)
            click.echo(f"ERROR: {user_message}", err=True)
            click.echo("=" * 70, err=True)
            if recovery_hint:
                click.echo(f"\n{recovery_hint}", err=True)

            log_path = ctx.meta.get("lpxcontrol.log_path")
            if log_path:
                click.echo(f"\nFor details, check the log file: {log_path}", err=True)
            ctx.exit(1)


@click.group(cls=ErrorReportingGroup, invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__, prog_name="lpxcontrol")
@click.option(
    '--config',
    '-c',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help='Configuration file (created with defaults if missing)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./lpxcontrol-debug.log)'
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
    ctx: click.Context,
    config_path: Path,
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    Launchpad X control surface - run programs from the control pads.

    \b
    Examples:
      # Run the daemon
      lpxcontrol

    \b
      # Put the Launchpad in programmer mode
      lpxcontrol mode 127

    \b
      # Light pad 11 red
      lpxcontrol colour 11 127 0 0

    \b
      # List MIDI devices
      lpxcontrol midi list
    """
    from lpxcontrol.models import AppConfig

    ctx.meta["lpxcontrol.log_path"] = setup_logging(verbose, debug, log_file, log_level)
    ctx.obj = AppConfig.load_or_default(config_path)

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


cli.add_command(run)
cli.add_command(mode)
cli.add_command(colour)
cli.add_command(midi_group)
cli.add_command(config_group)

if __name__ == "__main__":
    cli()
