#!/usr/bin/python3

from itertools import groupby
from pathlib import Path
from typing import List, Optional

import click

from deployment.options import registry_filepath_option
from deployment.registry import DeploymentRegistry, RegistryEntry


def _display_registry_entries(entries: List[RegistryEntry], registry_filepath: Path) -> None:
    """Display registry entries grouped by network."""
    if not entries:
        click.secho(f"No deployments found in {registry_filepath}", fg="yellow")
        return

    for network, network_entries in groupby(entries, key=lambda e: e.network):
        click.secho(f"\n{network}", fg="green")
        for index, entry in enumerate(network_entries, start=1):
            click.secho(f"    {index}. {entry.name} {entry.address}", fg="cyan")


@click.command(name="list-deployments")
@registry_filepath_option
@click.option("--network-name", "-n", help="Only list deployments on this network")
def cli(registry_filepath: Path, network_name: Optional[str]):
    """List all deployed contracts in the registry. Optionally filter by network."""
    registry = DeploymentRegistry(registry_filepath)
    _display_registry_entries(registry.entries(network_name), registry_filepath)


if __name__ == "__main__":
    cli()
