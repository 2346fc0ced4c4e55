"""LinkedWith CLI entry point - assembles all command groups."""
import click

from . import __version__
from .graph_cmd import graph


@click.group()
@click.version_option(version=__version__)
def cli():
    """LinkedWith: who was connected to whom, and when."""
    pass


cli.add_command(graph)


if __name__ == "__main__":
    cli()
