from pathlib import Path

import click

from deployment.constants import DEFAULT_PARAMS_FILEPATH, DEFAULT_REGISTRY_FILEPATH
from deployment.tasks import TASKS
from deployment.types import ChecksumAddress

params_filepath_option = click.option(
    "--params-filepath",
    "-p",
    help="Constructor parameters YAML file",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    default=DEFAULT_PARAMS_FILEPATH,
    show_default=True,
)

registry_filepath_option = click.option(
    "--registry-filepath",
    "-f",
    help="Deployment registry file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_REGISTRY_FILEPATH,
    show_default=True,
)

autosign_option = click.option(
    "--autosign",
    help="Automatically sign deployments without confirmation",
    is_flag=True,
    default=False,
)

task_option = click.option(
    "--task",
    "-t",
    "task_name",
    help="Task to run against a deployed contract",
    type=click.Choice(sorted(TASKS)),
    required=True,
)

address_option = click.option(
    "--address",
    "-a",
    help="Account address",
    type=ChecksumAddress(),
    required=False,
)
