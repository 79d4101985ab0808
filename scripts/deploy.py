#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, account_option, network_option
from ape_accounts import KeyfileAccount

from deployment.chain import ApeChainProvider
from deployment.confirm import _continue
from deployment.exceptions import DeploymentError, InsufficientFunds
from deployment.funding import LocalFaucet, ensure_funded, get_deployer_account
from deployment.networks import active_network
from deployment.options import autosign_option, params_filepath_option
from deployment.params import Deployer, DeploymentPlan
from deployment.registry import DeploymentRegistry


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@account_option()
@params_filepath_option
@autosign_option
@click.option(
    "--publish",
    help="Publish the deployed contracts to the block explorer",
    is_flag=True,
    default=False,
)
def cli(network, account, params_filepath, autosign, publish):
    """
    Deploys Counter, WrappingERC20 and VickreyAuction, in that order.

    ape run deploy --network ethereum:localfhenix --autosign
    """
    plan = DeploymentPlan.from_yaml(filepath=params_filepath)
    network_context = active_network()
    if autosign and isinstance(account, KeyfileAccount):
        account.set_autosign(True)

    chain = ApeChainProvider(account=account, publish=publish)
    deployer_account = get_deployer_account(chain)
    try:
        ensure_funded(deployer_account, network_context, LocalFaucet())
    except InsufficientFunds as e:
        click.secho(str(e), fg="red")
        raise click.Abort()

    deployer = Deployer(
        chain=chain,
        registry=DeploymentRegistry(plan.registry_filepath),
        network=network_context,
        account=deployer_account,
        autosign=autosign,
    )
    deployer.print_deployment_info(plan)
    if not autosign:
        _continue()

    try:
        deployer.deploy_all(plan.units)
    except DeploymentError as e:
        click.secho(str(e), fg="red")
        raise click.Abort()

    print(f"(i) Registry written to {plan.registry_filepath}!")


if __name__ == "__main__":
    cli()
