"""Custom exception classes for dapp-deploy."""


class DappDeployError(Exception):
    """Base exception for all dapp-deploy errors."""

    pass


class ConfigurationError(DappDeployError, ValueError):
    """Raised when a run configuration is invalid."""

    pass


class SessionError(DappDeployError):
    """Base exception for fatal chain session setup errors."""

    pass


class ChainConnectionError(SessionError, ConnectionError):
    """Raised when the Ethereum client cannot be reached."""

    pass


class NoAccountsError(SessionError, LookupError):
    """Raised when the Ethereum client has no unlocked accounts."""

    pass


class AccountIndexOutOfRangeError(SessionError, IndexError):
    """Raised when the account index is past the end of the unlocked accounts."""

    pass


class InvalidAccountIndexError(SessionError, ValueError):
    """Raised when the account index is negative."""

    pass


class ArtifactError(DappDeployError):
    """Raised when compiled artifacts cannot be listed or loaded."""

    pass


class DeploymentError(DappDeployError):
    """Raised when deployment of a single contract fails."""

    def __init__(self, contract_name: str, detail: str):
        self.contract_name = contract_name
        self.detail = detail
        super().__init__(
            f'Deployment of "{contract_name}" contract failed with the following '
            f"information:\n{detail}"
        )


class RegistryError(DappDeployError):
    """Base exception for deployment registry file errors."""

    pass


class RegistryCorruptError(RegistryError, ValueError):
    """Raised when an existing registry file does not contain valid JSON."""

    def __init__(self, path, detail: str):
        self.path = path
        super().__init__(
            f'Parsing of JSON data in "{path}" failed with the following '
            f"information:\n{detail}"
        )


class RegistryReadError(RegistryError, OSError):
    """Raised when an existing registry file cannot be read."""

    def __init__(self, path, detail: str):
        self.path = path
        super().__init__(
            f'Reading of file "{path}" failed with the following information:\n{detail}'
        )


class RegistryWriteError(RegistryError, OSError):
    """Raised when a registry file cannot be written."""

    def __init__(self, path, contract_name: str, detail: str):
        self.path = path
        self.contract_name = contract_name
        super().__init__(
            f'Unable to output address of deployed "{contract_name}" contract to '
            f'file "{path}". Operation failed with the following information:\n{detail}'
        )
