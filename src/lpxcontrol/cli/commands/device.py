"""One-shot device commands: layout select and pad colour."""

import logging

import click

from lpxcontrol.devices.launchpad import LaunchpadOutput, Layout
from lpxcontrol.midi import MidiConnection
from lpxcontrol.models import AppConfig, Color

logger = logging.getLogger(__name__)

LAYOUT_HELP = "\n".join(f"  {layout.value:3d}: {layout.name.lower()}" for layout in Layout)


def _open_output(config: AppConfig) -> tuple[MidiConnection, LaunchpadOutput]:
    link = MidiConnection(output_port=config.output_port, client_name=config.client_name)
    link.open_output()
    return link, LaunchpadOutput(link)


@click.command(name="mode", help=f"Select the Launchpad layout.\n\n\b\nLayouts:\n{LAYOUT_HELP}")
@click.argument("layout", type=click.IntRange(0, 127))
@click.pass_obj
def mode(config: AppConfig, layout: int):
    known = {item.value for item in Layout}
    if layout not in known:
        click.echo(f"Warning: {layout} is not a documented layout", err=True)

    link, output = _open_output(config)
    with link:
        if not output.select_layout(layout):
            raise click.ClickException(f"Failed to select layout {layout}")
    click.echo(f"Layout {layout} selected")


@click.command(name="colour")
@click.argument("pad", type=click.IntRange(0, 127))
@click.argument("red", type=click.IntRange(0, 127))
@click.argument("green", type=click.IntRange(0, 127))
@click.argument("blue", type=click.IntRange(0, 127))
@click.pass_obj
def colour(config: AppConfig, pad: int, red: int, green: int, blue: int):
    """Set PAD (11-99) to an RGB colour, each component 0-127."""
    link, output = _open_output(config)
    with link:
        if not output.set_pad_rgb(pad, Color(r=red, g=green, b=blue)):
            raise click.ClickException(f"Failed to set pad {pad}")
