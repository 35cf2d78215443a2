"""Custom exception classes for pharbit-deployments."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class NoSignerAvailableError(DeploymentError, LookupError):
    """Raised when the chain client exposes no signing account."""

    pass


class DeploymentFailedError(DeploymentError, RuntimeError):
    """Raised when the contract creation transaction is rejected or reverts."""

    pass


class RecordBuildError(DeploymentError, ValueError):
    """Raised when a deployment record is missing a required field."""

    pass


class RecordWriteError(DeploymentError, OSError):
    """Raised when the deployment record cannot be written to disk."""

    pass


class InvalidArtifactError(DeploymentError, ValueError):
    """Raised when a compiled artifact file exists but cannot be used."""

    pass


class CompilationError(DeploymentError, RuntimeError):
    """Raised when no contract definition can be loaded or compiled."""

    pass


class RecordNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when the deployments directory or a record file is missing."""

    pass


class NetworkNotFoundError(DeploymentError, ValueError):
    """Raised when no deployment record exists for the requested network."""

    pass


class ContractNotFoundError(DeploymentError, ValueError):
    """Raised when a contract is not listed in a deployment record."""

    pass


class RpcError(DeploymentError, RuntimeError):
    """Raised when a raw JSON-RPC request fails."""

    pass
