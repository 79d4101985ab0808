import requests
from eth_typing import ChecksumAddress

from deployment.chain import ChainProvider
from deployment.constants import FUNDING_URL, LOCAL_FAUCET_URL
from deployment.exceptions import InsufficientFunds
from deployment.types import DeployerAccount, NetworkContext


class LocalFaucet:
    """Credits accounts with test funds on the local test network."""

    def __init__(self, url: str = LOCAL_FAUCET_URL):
        self.url = url

    def fund(self, address: ChecksumAddress) -> None:
        response = requests.get(self.url, params={"address": address})
        response.raise_for_status()


def get_deployer_account(chain: ChainProvider) -> DeployerAccount:
    """Returns the first signer along with its current balance."""
    address = chain.get_signers()[0]
    return DeployerAccount(address=address, balance=chain.get_balance(address))


def ensure_funded(account: DeployerAccount, network: NetworkContext, faucet: LocalFaucet) -> None:
    """
    Ensures the deployer can pay for deployments.

    An unfunded deployer is funded once through the faucet on the local test
    network; the faucet's outcome is final and the balance is not queried again.
    On any other network an unfunded deployer raises InsufficientFunds.
    """
    if account.balance > 0:
        return

    if network.is_local_test_network:
        print(f"Funding {account.address} from the {network.name} faucet...")
        faucet.fund(account.address)
        return

    raise InsufficientFunds(address=account.address, network=network.name, funding_url=FUNDING_URL)
