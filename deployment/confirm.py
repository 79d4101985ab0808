from typing import Any, Sequence

import click
from ape.utils import ZERO_ADDRESS


def _confirm_deployment(contract_name: str) -> None:
    """Asks the user to confirm the deployment of a single contract."""
    click.confirm(f"Deploy {contract_name}?", abort=True)


def _continue() -> None:
    """Asks the user to continue."""
    click.confirm("Continue?", abort=True)


def _is_zero_address(value: Any) -> bool:
    return isinstance(value, str) and value.lower() == ZERO_ADDRESS.lower()


def _confirm_resolution(resolved_args: Sequence[Any], contract_name: str) -> None:
    """Asks the user to confirm the resolved constructor arguments for a single contract."""
    if len(resolved_args) == 0:
        print(f"\n(i) No constructor parameters for {contract_name}")
        _confirm_deployment(contract_name)
        return

    print(f"\nConstructor parameters for {contract_name}")
    for position, resolved_value in enumerate(resolved_args):
        print(f"\t[{position}]={resolved_value}")
    _confirm_deployment(contract_name)
    if any(_is_zero_address(value) for value in resolved_args):
        click.confirm("Zero Address detected for deployment parameter; Continue?", abort=True)
