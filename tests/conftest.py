from typing import Any, Dict, List, Sequence

import pytest
from eth_abi import encode
from eth_utils import to_checksum_address

from deployment.chain import ChainProvider, DeploymentReceipt
from deployment.registry import DeploymentRegistry
from deployment.types import DeployerAccount, NetworkContext

DEPLOYER_ADDRESS = to_checksum_address("0x" + "1" * 40)

ERC20_ABI = [
    {
        "type": "function",
        "name": "balanceOf",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "name",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "symbol",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
    },
]


def contract_address(index: int) -> str:
    return to_checksum_address(f"0x{index:040x}")


class FakeChain(ChainProvider):
    """In-memory chain that records every operation it is asked to perform."""

    def __init__(self, balance: int = 10**18, failures: Dict[str, Exception] = None):
        self.balance = balance
        self.failures = failures or dict()
        self.balance_queries = 0
        self.deployments = list()
        self.calls = list()
        self.call_result = encode(["string"], ["Test Token"])

    def get_balance(self, address) -> int:
        self.balance_queries += 1
        return self.balance

    def get_signers(self) -> List[str]:
        return [DEPLOYER_ADDRESS]

    def deploy_contract(self, name: str, args: Sequence[Any]) -> DeploymentReceipt:
        if name in self.failures:
            raise self.failures[name]
        self.deployments.append((name, list(args)))
        index = len(self.deployments)
        return DeploymentReceipt(
            address=contract_address(index),
            abi=ERC20_ABI,
            tx_hash="0x" + f"{index:064x}",
            block_hash="0x" + f"{index + 100:064x}",
            block_number=index,
            deployer=DEPLOYER_ADDRESS,
        )

    def call(self, address, abi, method, args=()) -> bytes:
        self.calls.append((address, method, list(args)))
        return self.call_result


class FakeFaucet:
    def __init__(self, error: Exception = None):
        self.error = error
        self.funded = list()

    def fund(self, address) -> None:
        self.funded.append(address)
        if self.error:
            raise self.error


@pytest.fixture
def fake_chain():
    return FakeChain()


@pytest.fixture
def fake_faucet():
    return FakeFaucet()


@pytest.fixture
def registry(tmp_path):
    return DeploymentRegistry(tmp_path / "artifacts" / "registry.json")


@pytest.fixture
def local_network():
    return NetworkContext(name="localfhenix")


@pytest.fixture
def testnet():
    return NetworkContext(name="helium")


@pytest.fixture
def funded_account():
    return DeployerAccount(address=DEPLOYER_ADDRESS, balance=10**18)


@pytest.fixture
def unfunded_account():
    return DeployerAccount(address=DEPLOYER_ADDRESS, balance=0)
