import typing
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional

from deployment.chain import ChainProvider
from deployment.confirm import _confirm_resolution
from deployment.exceptions import DeploymentConfigError
from deployment.registry import DeploymentRegistry, RegistryEntry
from deployment.types import DeployerAccount, DeploymentRecord, DeploymentUnit, NetworkContext
from deployment.utils import _load_yaml, get_artifact_filepath

CONTRACT_CONSTRUCTOR_PARAMETER_KEY = "constructor"
CONTRACT_SKIP_PARAMETER_KEY = "skip_if_already_deployed"


# Variables


class Variable(ABC):
    VARIABLE_PREFIX = "$"

    @abstractmethod
    def resolve(self, deployer: DeployerAccount) -> Any:
        raise NotImplementedError

    @classmethod
    def is_variable(cls, param: Any) -> bool:
        """Returns True if the param is a variable."""
        result = isinstance(param, str) and param.startswith(cls.VARIABLE_PREFIX)
        return result


class DeployerAddress(Variable):
    DEPLOYER_INDICATOR = "deployer"

    @classmethod
    def is_deployer(cls, value: str) -> bool:
        """Returns True if the variable is a special deployer variable."""
        return value == cls.DEPLOYER_INDICATOR

    def resolve(self, deployer: DeployerAccount) -> Any:
        return deployer.address

    def __repr__(self) -> str:
        return f"{self.VARIABLE_PREFIX}{self.DEPLOYER_INDICATOR}"


class Constant(Variable):
    def __init__(self, constant_name: str, constants: typing.Dict[str, Any]):
        try:
            self.constant_value = constants[constant_name]
        except KeyError:
            raise DeploymentConfigError(f"Constant '{constant_name}' not found in deployment file.")

    @classmethod
    def is_constant(cls, value: str) -> bool:
        """Returns True if the variable is a deployment constant."""
        return value.isupper()

    def resolve(self, deployer: DeployerAccount) -> Any:
        return self.constant_value


def _variable_from_value(variable: str, constants: typing.Dict[str, Any]) -> Variable:
    variable = variable[len(Variable.VARIABLE_PREFIX) :]
    if DeployerAddress.is_deployer(variable):
        return DeployerAddress()
    elif Constant.is_constant(variable):
        return Constant(variable, constants)
    raise DeploymentConfigError(f"Variable ${variable} is not resolvable")


def _process_raw_value(value: Any, constants: typing.Dict[str, Any]) -> Any:
    if isinstance(value, list):
        return [_process_raw_value(v, constants) for v in value]

    if Variable.is_variable(value):
        value = _variable_from_value(value, constants)

    return value


def _resolve_param(value: Any, deployer: DeployerAccount) -> Any:
    """Resolves a single parameter value or a list of parameter values."""
    if isinstance(value, list):
        return [_resolve_param(v, deployer) for v in value]

    if isinstance(value, Variable):
        return value.resolve(deployer)

    return value  # literally a value


def _unit_from_config(contract_info: Any, constants: typing.Dict[str, Any]) -> DeploymentUnit:
    if isinstance(contract_info, str):
        return DeploymentUnit(name=contract_info)

    if not isinstance(contract_info, dict) or len(contract_info) != 1:
        raise DeploymentConfigError("Malformed constructor parameters YAML.")

    contract_name = list(contract_info.keys())[0]  # only one entry
    contract_data = contract_info[contract_name] or dict()
    if not isinstance(contract_data, dict):
        raise DeploymentConfigError(f"Malformed constructor parameter config for {contract_name}.")

    raw_params = contract_data.get(CONTRACT_CONSTRUCTOR_PARAMETER_KEY) or list()
    if isinstance(raw_params, dict):
        # only the order of named parameters matters for deployment
        raw_params = list(raw_params.values())
    elif not isinstance(raw_params, list):
        raise DeploymentConfigError(f"Malformed constructor parameters for {contract_name}.")

    skip_if_already_deployed = contract_data.get(CONTRACT_SKIP_PARAMETER_KEY, False)
    if not isinstance(skip_if_already_deployed, bool):
        raise DeploymentConfigError(
            f"'{CONTRACT_SKIP_PARAMETER_KEY}' for {contract_name} must be true or false, "
            f"got {skip_if_already_deployed!r}."
        )

    return DeploymentUnit(
        name=contract_name,
        constructor_args=tuple(_process_raw_value(value, constants) for value in raw_params),
        skip_if_already_deployed=skip_if_already_deployed,
    )


class DeploymentPlan:
    """The ordered list of contracts to deploy, as read from a constructor parameters file."""

    def __init__(self, units: List[DeploymentUnit], registry_filepath: Path, path: Path = None):
        names = [unit.name for unit in units]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise DeploymentConfigError(f"Duplicate contracts in deployment: {', '.join(duplicates)}")
        self.units = units
        self.registry_filepath = registry_filepath
        self.path = path

    @classmethod
    def from_config(cls, config: typing.Dict, path: Path = None) -> "DeploymentPlan":
        contracts = (config or dict()).get("contracts")
        if not contracts:
            raise DeploymentConfigError("Constructor parameters file missing 'contracts' field.")

        constants = config.get("constants") or dict()
        units = [_unit_from_config(contract_info, constants) for contract_info in contracts]
        return cls(units=units, registry_filepath=get_artifact_filepath(config), path=path)

    @classmethod
    def from_yaml(cls, filepath: Path) -> "DeploymentPlan":
        config = _load_yaml(filepath)
        return cls.from_config(config=config, path=filepath)

    @property
    def contract_names(self) -> List[str]:
        return [unit.name for unit in self.units]


class Deployer:
    """
    Deploys contracts one at a time as the given account,
    recording each deployment in the registry.
    """

    def __init__(
        self,
        chain: ChainProvider,
        registry: DeploymentRegistry,
        network: NetworkContext,
        account: DeployerAccount,
        autosign: bool = False,
    ):
        if autosign:
            print("WARNING: Autosign is enabled. Deployments will be signed automatically.")
        self.chain = chain
        self.registry = registry
        self.network = network
        self.account = account
        self._autosign = autosign

    def resolve(self, unit: DeploymentUnit) -> List[Any]:
        """Resolves the constructor arguments for a single contract."""
        return [_resolve_param(value, self.account) for value in unit.constructor_args]

    def deploy(self, unit: DeploymentUnit) -> DeploymentRecord:
        existing = self.registry.get(self.network.name, unit.name)
        if unit.skip_if_already_deployed and existing is not None:
            record = DeploymentRecord(name=unit.name, address=existing.address)
        else:
            record = self._deploy_contract(unit)

        print(f"{record.name} contract: {record.address}")
        return record

    def _deploy_contract(self, unit: DeploymentUnit) -> DeploymentRecord:
        resolved_args = self.resolve(unit)
        if not self._autosign:
            _confirm_resolution(resolved_args, unit.name)

        receipt = self.chain.deploy_contract(unit.name, resolved_args)
        entry = self.registry.record(
            RegistryEntry(
                network=self.network.name,
                name=unit.name,
                address=receipt.address,
                abi=receipt.abi,
                args=resolved_args,
                tx_hash=receipt.tx_hash,
                block_hash=receipt.block_hash,
                block_number=receipt.block_number,
                deployer=receipt.deployer,
            )
        )
        return DeploymentRecord(name=entry.name, address=entry.address)

    def deploy_all(self, units: List[DeploymentUnit]) -> List[DeploymentRecord]:
        """
        Deploys each unit in order and returns their records.
        The first failure halts the run; earlier deployments are kept.
        """
        return [self.deploy(unit) for unit in units]

    def print_deployment_info(self, plan: Optional[DeploymentPlan] = None) -> None:
        lines = [f"Account: {self.account.address}"]
        if plan is not None:
            lines.append(f"Config: {plan.path}")
            lines.append(f"Contracts: {', '.join(plan.contract_names)}")
        lines.extend(
            [
                f"Registry: {self.registry.filepath}",
                f"Network: {self.network.name}",
                f"Balance: {self.account.balance}",
            ]
        )
        print(*lines, sep="\n")
