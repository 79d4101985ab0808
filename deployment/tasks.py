from typing import Any, NamedTuple, Optional, Sequence

from deployment.chain import ChainProvider
from deployment.constants import WRAPPING_ERC20
from deployment.exceptions import ContractNotDeployed, TaskCallFailed
from deployment.registry import DeploymentRegistry
from deployment.types import NetworkContext
from deployment.utils import decode_call_result, format_call_result, get_method_abi


class Task(NamedTuple):
    """A read-only call against a deployed contract."""

    name: str
    contract_name: str
    method: str


TASKS = {
    task.name: task
    for task in (
        Task(name="getName", contract_name=WRAPPING_ERC20, method="name"),
        Task(name="getSymbol", contract_name=WRAPPING_ERC20, method="symbol"),
    )
}


def run_task(
    registry: DeploymentRegistry,
    network: NetworkContext,
    contract_name: str,
    method: str,
    chain: ChainProvider,
    args: Sequence[Any] = (),
    task_name: Optional[str] = None,
) -> str:
    """
    Calls `method` on the contract deployed as `contract_name` on `network`
    and returns the decoded result for display.
    """
    entry = registry.get(network.name, contract_name)
    if entry is None:
        raise ContractNotDeployed(contract_name=contract_name, network=network.name)

    try:
        method_abi = get_method_abi(entry.abi, method, args)
    except ValueError as e:
        raise TaskCallFailed(
            f"{contract_name} at {entry.address} has no callable '{method}': {e}"
        ) from e

    print(f"Running {task_name or method}, targeting contract at: {entry.address}")
    raw_result = chain.call(entry.address, entry.abi, method, args)
    return format_call_result(decode_call_result(method_abi, raw_result))
