"""Custom exception classes for streamr-chains library."""


class ChainConfigError(Exception):
    """Base exception for chain configuration errors."""

    pass


class ConfigParseError(ChainConfigError, ValueError):
    """Raised when a configuration document violates its schema."""

    pass


class InvalidAddressFormatError(ChainConfigError, ValueError):
    """Raised when an address is not 0x followed by 40 hex digits."""

    pass


class InvalidChainIdError(ChainConfigError, ValueError):
    """Raised when a chain ID is not a positive integer."""

    pass


class InvalidChainNameError(ChainConfigError, ValueError):
    """Raised when a network is given an empty name."""

    pass


class MissingEnvironmentVariableError(ChainConfigError, LookupError):
    """Raised when the deployment environment selector is not set."""

    pass


class InvalidEnvironmentValueError(ChainConfigError, ValueError):
    """Raised when the deployment environment selector holds an unrecognized value."""

    pass


class UnknownEnvironmentError(ChainConfigError, LookupError):
    """Raised when no configuration document ships for an environment."""

    pass


class UnknownNetworkError(ChainConfigError, LookupError):
    """Raised when requested network is not in the registry."""

    pass


class ContractNotFoundError(ChainConfigError, LookupError):
    """Raised when requested contract is not configured on a network."""

    pass


class NoRPCEndpointError(ChainConfigError, LookupError):
    """Raised when no RPC URL can be resolved for a network."""

    pass


class ChainIdMismatchError(ChainConfigError, ValueError):
    """Raised when an RPC endpoint reports a different chain ID than configured."""

    pass


class UnknownOperationError(ChainConfigError, ValueError):
    """Raised when a StreamrConfig method name is not a known operation."""

    pass
