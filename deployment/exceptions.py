"""Errors raised while funding, deploying and querying contracts."""


class DeploymentConfigError(ValueError):
    """Raised when a constructor parameters file is malformed."""


#
# Funding
#


class FundingError(Exception):
    """Base exception for deployer funding errors."""


class InsufficientFunds(FundingError):
    """Raised when the deployer has no balance and cannot fund itself."""

    def __init__(self, address: str, network: str, funding_url: str):
        self.address = address
        self.network = network
        self.funding_url = funding_url
        super().__init__(
            f"Deployer {address} has no funds on '{network}'. "
            f"Please fund your account with testnet FHE from {funding_url}"
        )


#
# Deployment
#


class DeploymentError(Exception):
    """Base exception for a failed deployment of a single contract."""

    def __init__(self, contract_name: str, reason: str = ""):
        self.contract_name = contract_name
        self.reason = reason
        message = f"Deployment of {contract_name} failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DeploymentTransactionFailed(DeploymentError):
    """Raised when the deployment transaction could not be submitted."""


class DeploymentTimeout(DeploymentError):
    """Raised when the deployment transaction was not confirmed in time."""


class DeploymentReverted(DeploymentError):
    """Raised when the contract constructor reverted."""


#
# Tasks
#


class TaskError(Exception):
    """Base exception for post-deployment task errors."""


class ContractNotDeployed(TaskError, LookupError):
    """Raised when a contract has no registry record on the network."""

    def __init__(self, contract_name: str, network: str):
        self.contract_name = contract_name
        self.network = network
        super().__init__(
            f"Contract '{contract_name}' is not deployed on '{network}'; deploy it first."
        )


class TaskCallFailed(TaskError):
    """Raised when a read-only contract call fails."""


class TaskDecodeFailed(TaskError):
    """Raised when a contract call result cannot be decoded."""
