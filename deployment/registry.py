import json
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional

from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from deployment.utils import _load_json

NetworkName = str
ContractName = str
ABI = List[Dict[str, Any]]


STANDARD_REGISTRY_JSON_FORMAT = {"indent": 4, "separators": (",", ": ")}


class RegistryEntry(NamedTuple):
    """Represents a single deployed contract on a single network."""

    network: NetworkName
    name: ContractName
    address: ChecksumAddress
    abi: ABI
    args: List[Any]
    tx_hash: str
    block_hash: str
    block_number: int
    deployer: str


def read_registry(filepath: Path) -> List[RegistryEntry]:
    if not filepath.exists():
        return list()
    data = _load_json(filepath)
    registry_entries = list()
    for network, entries in data.items():
        for contract_name, artifacts in entries.items():
            registry_entry = RegistryEntry(
                network=network,
                name=contract_name,
                address=artifacts["address"],
                abi=artifacts["abi"],
                args=artifacts.get("args", []),
                tx_hash=artifacts["tx_hash"],
                block_hash=artifacts["block_hash"],
                block_number=artifacts["block_number"],
                deployer=artifacts["deployer"],
            )
            registry_entries.append(registry_entry)
    return registry_entries


def write_registry(entries: List[RegistryEntry], filepath: Path) -> Path:
    """Writes the complete set of registry entries to a file, replacing its contents."""

    # Sort registry entries to enforce common order
    entries = sorted(entries, key=lambda entry: (entry.network, entry.name))

    data = defaultdict(dict)
    for entry in entries:
        entry_abi = list(entry.abi)
        entry_abi.sort(key=lambda d: (d["type"], d.get("name", "")))

        data[entry.network][entry.name] = {
            "address": entry.address,
            "abi": entry_abi,
            "args": list(entry.args),
            "tx_hash": entry.tx_hash,
            "block_hash": entry.block_hash,
            "block_number": int(entry.block_number),
            "deployer": entry.deployer,
        }

    # Create the parent directory if it does not exist
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w") as file:
        json.dump(data, file, **STANDARD_REGISTRY_JSON_FORMAT)

    return filepath


class DeploymentRegistry:
    """
    File-backed store of deployed contracts, keyed by network and contract name.
    There is at most one entry per contract name on a given network.
    """

    def __init__(self, filepath: Path):
        self.filepath = Path(filepath)

    def entries(self, network: Optional[NetworkName] = None) -> List[RegistryEntry]:
        entries = read_registry(self.filepath)
        if network is None:
            return entries
        return [entry for entry in entries if entry.network == network]

    def get(self, network: NetworkName, name: ContractName) -> Optional[RegistryEntry]:
        for entry in self.entries(network):
            if entry.name == name:
                return entry
        return None

    def record(self, entry: RegistryEntry) -> RegistryEntry:
        """Adds an entry, replacing any existing entry for the same network and name."""
        entry = entry._replace(address=to_checksum_address(entry.address))
        entries = [
            e
            for e in read_registry(self.filepath)
            if (e.network, e.name) != (entry.network, entry.name)
        ]
        entries.append(entry)
        write_registry(entries=entries, filepath=self.filepath)
        return entry
