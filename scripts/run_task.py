#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, network_option

from deployment.chain import ApeChainProvider
from deployment.exceptions import TaskError
from deployment.networks import active_network
from deployment.options import registry_filepath_option, task_option
from deployment.registry import DeploymentRegistry
from deployment.tasks import TASKS, run_task


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@task_option
@registry_filepath_option
def cli(network, task_name, registry_filepath):
    """Call a read-only method of a deployed contract and print the result."""
    task = TASKS[task_name]
    try:
        result = run_task(
            registry=DeploymentRegistry(registry_filepath),
            network=active_network(),
            contract_name=task.contract_name,
            method=task.method,
            task_name=task.name,
            chain=ApeChainProvider(),
        )
    except TaskError as e:
        click.secho(str(e), fg="red")
        raise click.Abort()

    print(f"got : {result}")


if __name__ == "__main__":
    cli()
