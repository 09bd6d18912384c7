"""Allow running as ``python -m lpxcontrol``."""

from lpxcontrol.cli.main import cli

if __name__ == "__main__":
    cli()
