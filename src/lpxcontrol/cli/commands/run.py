"""Run command - the control surface daemon."""

import logging
import signal
import threading

import click

from lpxcontrol.core import Coordinator
from lpxcontrol.devices.launchpad import LaunchpadOutput
from lpxcontrol.midi import MidiConnection
from lpxcontrol.models import AppConfig

logger = logging.getLogger(__name__)


def run_daemon(config: AppConfig, stop_event: threading.Event | None = None) -> None:
    """
    Connect to the surface and process events until `stop_event` is set.

    Raises:
        DeviceConnectionError: If the Launchpad ports cannot be opened
    """
    stop_event = stop_event or threading.Event()
    link = MidiConnection(
        input_port=config.input_port,
        output_port=config.output_port,
        client_name=config.client_name,
    )
    coordinator = Coordinator(config, LaunchpadOutput(link))

    try:
        link.open_output()
        coordinator.start()
        link.open_input(coordinator.handle_message)
        logger.info(f"Listening on {config.input_port}, actions in {config.actions_dir}")

        while not stop_event.wait(1.0):
            pass
    finally:
        coordinator.stop()
        link.close()


@click.command()
@click.pass_obj
def run(config: AppConfig):
    """
    Run the control surface daemon (the default command).

    \b
    Control pads (19, 29, ... 89) run <home>/subs/ON-CTL.<pad> when pressed
    and the previous pad's OFF-CTL.<pad>. <home> is taken from the
    environment (Home120Proof by default).

    \b
    Lock:   press 91, 92, 93, 94 in order
    Unlock: press 94, 93, 92, 91 in order
    """
    stop_event = threading.Event()

    def request_stop(signum, frame):
        logger.info(f"Received signal {signum}, shutting down")
        stop_event.set()

    signal.signal(signal.SIGTERM, request_stop)

    click.echo("lpxcontrol running. Press Ctrl+C to stop.", err=True)
    try:
        run_daemon(config, stop_event)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        click.echo("Stopped.", err=True)
