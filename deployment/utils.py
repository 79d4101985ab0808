import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml
from ape import project
from ape.contracts import ContractContainer
from eth_abi import decode, encode, is_encodable
from eth_abi.exceptions import DecodingError
from eth_utils import to_hex
from eth_utils.abi import collapse_if_tuple, function_abi_to_4byte_selector

from deployment.constants import ARTIFACTS_DIR
from deployment.exceptions import DeploymentConfigError, TaskDecodeFailed


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def _load_json(filepath: Path) -> dict:
    """Loads a JSON file."""
    with open(filepath, "r") as file:
        return json.load(file)


def get_artifact_filepath(config: Dict) -> Path:
    """Returns the filepath of the registry file."""
    artifact_config = config.get("artifacts", {})
    artifact_dir = Path(artifact_config.get("dir", ARTIFACTS_DIR))
    filename = artifact_config.get("filename")
    if not filename:
        raise DeploymentConfigError("artifact filename is not set in params file.")
    return artifact_dir / filename


def get_contract_container(contract: str) -> ContractContainer:
    try:
        return getattr(project, contract)
    except AttributeError:
        raise ValueError(f"No contract found with name '{contract}'.")


#
# ABI
#


def _types(abi_params: List[Dict]) -> List[str]:
    return [collapse_if_tuple(param) for param in abi_params]


def get_method_abi(abi: List[Dict], method: str, args: Sequence[Any] = ()) -> Dict:
    """
    Returns the ABI of the function named `method` whose inputs can
    encode `args`; overloads are disambiguated by arity and type.
    """
    candidates = [
        entry
        for entry in abi
        if entry.get("type") == "function"
        and entry.get("name") == method
        and len(entry.get("inputs", [])) == len(args)
    ]
    for candidate in candidates:
        input_types = _types(candidate.get("inputs", []))
        if all(is_encodable(t, arg) for t, arg in zip(input_types, args)):
            return candidate
    raise ValueError(f"Could not find ABI for '{method}' with {len(args)} arg(s) and given type(s)")


def encode_call_data(method_abi: Dict, args: Sequence[Any] = ()) -> bytes:
    selector = function_abi_to_4byte_selector(method_abi)
    input_types = _types(method_abi.get("inputs", []))
    return selector + encode(input_types, list(args))


def decode_call_result(method_abi: Dict, raw_result: bytes) -> List[Any]:
    output_types = _types(method_abi.get("outputs", []))
    try:
        return list(decode(output_types, bytes(raw_result)))
    except DecodingError as e:
        raise TaskDecodeFailed(
            f"Could not decode result of '{method_abi['name']}' as ({', '.join(output_types)}): {e}"
        ) from e


def _format_value(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return to_hex(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_format_value(v) for v in value) + "]"
    return str(value)


def format_call_result(values: Sequence[Any]) -> str:
    """Renders decoded outputs for display; multiple outputs are comma separated."""
    return ", ".join(_format_value(value) for value in values)
