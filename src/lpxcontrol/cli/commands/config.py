"""Config command - inspect the configuration file."""

import click

from lpxcontrol.models import AppConfig


@click.group(name="config")
def config_group():
    """Show configuration settings."""
    pass


@config_group.command(name="show")
@click.option("--field", "-f", type=str, default=None, help="Show a single field")
@click.pass_obj
def show(config: AppConfig, field: str | None):
    """Display the effective configuration."""
    values = config.model_dump(mode="json")

    if field is not None:
        if field not in values:
            raise click.BadParameter(f"Unknown field '{field}'", param_hint="--field")
        click.echo(f"{field}: {values[field]}")
        return

    for name, value in values.items():
        description = AppConfig.model_fields[name].description or ""
        click.echo(f"{name}: {value}")
        if description:
            click.echo(f"    {description}")


@config_group.command(name="path")
@click.pass_context
def path(ctx: click.Context):
    """Print the configuration file location."""
    click.echo(str(ctx.find_root().params["config_path"]))
