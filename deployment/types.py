from typing import Any, NamedTuple, Tuple

import click
from eth_typing import ChecksumAddress as Address
from eth_utils import to_checksum_address

from deployment.constants import LOCAL_TEST_NETWORK


class DeploymentUnit(NamedTuple):
    """A single contract to deploy, identified by its contract name."""

    name: str
    constructor_args: Tuple[Any, ...] = ()
    skip_if_already_deployed: bool = False


class DeploymentRecord(NamedTuple):
    name: str
    address: Address


class DeployerAccount(NamedTuple):
    address: Address
    balance: int


class NetworkContext(NamedTuple):
    name: str

    @property
    def is_local_test_network(self) -> bool:
        return self.name == LOCAL_TEST_NETWORK


class ChecksumAddress(click.ParamType):
    name = "checksum_address"

    def convert(self, value, param, ctx):
        try:
            value = to_checksum_address(value=value)
        except ValueError:
            self.fail(f"{value} is not a valid ethereum address", param, ctx)
        else:
            return value
