"""
deploy-profiles

Resolves named deployment environments (host/port or credential provider,
chain id, gas limit, gas price, sender) into validated, immutable
network profiles.
"""

from ._version import __version__

# Core configuration, types and errors
from .core.config import ResolverConfig
from .core.types import (
    StaticConnection,
    DynamicConnection,
    ConnectionSource,
    NetworkDeclaration,
    NetworkProfile,
)
from .core.exceptions import (
    DeployProfilesError,
    ConfigurationError,
    UnknownEnvironment,
    CredentialError,
    MissingCredential,
    InvalidProfile,
)

# Connectivity and credential providers
from .connection import HttpConnection
from .providers import (
    CredentialProvider,
    HDWalletProvider,
    PrivateKeyProvider,
    ProviderRegistry,
    default_registry,
)

# Declarations and resolution
from .declarations import DeclarationSet, BUILTIN_DECLARATIONS
from .resolver import ConfigResolver


def resolve(name: str) -> NetworkProfile:
    """Resolve ``name`` against the built-in declarations and the process environment."""
    return ConfigResolver().resolve(name)


__all__ = [
    "__version__",
    "ResolverConfig",
    "StaticConnection",
    "DynamicConnection",
    "ConnectionSource",
    "NetworkDeclaration",
    "NetworkProfile",
    "DeployProfilesError",
    "ConfigurationError",
    "UnknownEnvironment",
    "CredentialError",
    "MissingCredential",
    "InvalidProfile",
    "HttpConnection",
    "CredentialProvider",
    "HDWalletProvider",
    "PrivateKeyProvider",
    "ProviderRegistry",
    "default_registry",
    "DeclarationSet",
    "BUILTIN_DECLARATIONS",
    "ConfigResolver",
    "resolve",
]
