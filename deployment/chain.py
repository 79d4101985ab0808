from abc import ABC, abstractmethod
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from ape import chain, networks
from ape.api import AccountAPI
from ape.contracts import ContractInstance
from ape.exceptions import (
    ApeException,
    ContractLogicError,
    TransactionNotFoundError,
)
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address, to_hex
from web3.exceptions import TimeExhausted

from deployment.exceptions import (
    DeploymentReverted,
    DeploymentTimeout,
    DeploymentTransactionFailed,
    TaskCallFailed,
)
from deployment.utils import encode_call_data, get_contract_container, get_method_abi


class DeploymentReceipt(NamedTuple):
    """Confirmed outcome of a contract deployment transaction."""

    address: ChecksumAddress
    abi: List[Dict[str, Any]]
    tx_hash: str
    block_hash: str
    block_number: int
    deployer: ChecksumAddress


class ChainProvider(ABC):
    """
    The chain operations needed to fund, deploy and query contracts.
    Every method blocks until the network has answered.
    """

    @abstractmethod
    def get_balance(self, address: ChecksumAddress) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_signers(self) -> List[ChecksumAddress]:
        raise NotImplementedError

    @abstractmethod
    def deploy_contract(self, name: str, args: Sequence[Any]) -> DeploymentReceipt:
        """Submits a deployment transaction and waits for its confirmation."""
        raise NotImplementedError

    @abstractmethod
    def call(
        self, address: ChecksumAddress, abi: List[Dict], method: str, args: Sequence[Any] = ()
    ) -> bytes:
        """Performs a read-only call and returns the undecoded result."""
        raise NotImplementedError


def _get_abi(contract_instance: ContractInstance) -> List[Dict[str, Any]]:
    """Returns the ABI of a contract instance."""
    contract_abi = list()
    for entry in contract_instance.contract_type.abi:
        contract_abi.append(entry.model_dump(mode="json", by_alias=True, exclude_none=True))
    return contract_abi


class ApeChainProvider(ChainProvider):
    """Chain operations against the connected ape provider, signed by an ape account."""

    def __init__(self, account: Optional[AccountAPI] = None, publish: bool = False):
        self._account = account
        self.publish = publish

    def get_balance(self, address: ChecksumAddress) -> int:
        return networks.provider.get_balance(address)

    def get_signers(self) -> List[ChecksumAddress]:
        if self._account is None:
            return list()
        return [self._account.address]

    def deploy_contract(self, name: str, args: Sequence[Any]) -> DeploymentReceipt:
        container = get_contract_container(name)
        try:
            instance = self._account.deploy(container, *args, publish=self.publish)
        except ContractLogicError as e:
            raise DeploymentReverted(name, str(e)) from e
        except (TransactionNotFoundError, TimeExhausted) as e:
            raise DeploymentTimeout(name, str(e)) from e
        except ApeException as e:
            raise DeploymentTransactionFailed(name, str(e)) from e

        receipt = instance.receipt
        block = chain.blocks[receipt.block_number]
        return DeploymentReceipt(
            address=to_checksum_address(instance.address),
            abi=_get_abi(instance),
            tx_hash=receipt.txn_hash,
            block_hash=to_hex(block.hash),
            block_number=receipt.block_number,
            deployer=receipt.transaction.sender,
        )

    def call(
        self, address: ChecksumAddress, abi: List[Dict], method: str, args: Sequence[Any] = ()
    ) -> bytes:
        method_abi = get_method_abi(abi, method, args)
        ecosystem = networks.provider.network.ecosystem
        txn = ecosystem.create_transaction(receiver=address, data=encode_call_data(method_abi, args))
        try:
            return bytes(networks.provider.send_call(txn))
        except ApeException as e:
            raise TaskCallFailed(f"Call to {method} at {address} failed: {e}") from e
