#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option

from deployment.constants import FUNDING_URL, LOCAL_FAUCET_URL
from deployment.funding import LocalFaucet
from deployment.networks import active_network
from deployment.options import address_option


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@account_option()
@address_option
@click.option(
    "--faucet-url",
    help="Local faucet endpoint",
    type=click.STRING,
    default=LOCAL_FAUCET_URL,
    show_default=True,
)
def cli(network, account, address, faucet_url):
    """Fund an account from the local test network faucet."""
    network_context = active_network()
    if not network_context.is_local_test_network:
        click.secho(
            f"No faucet available on '{network_context.name}'; "
            f"please fund your account with testnet FHE from {FUNDING_URL}",
            fg="red",
        )
        raise click.Abort()

    address = address or account.address
    LocalFaucet(url=faucet_url).fund(address)
    print(f"Funded {address} on {network_context.name}")


if __name__ == "__main__":
    cli()
