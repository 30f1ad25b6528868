"""
Core module for deploy-profiles.

This module contains the configuration, exceptions and profile types
that the resolver, declarations and providers build on.
"""

from .config import ResolverConfig, DEFAULT_HD_PATH
from .exceptions import (
    DeployProfilesError,
    ConfigurationError,
    UnknownEnvironment,
    CredentialError,
    MissingCredential,
    InvalidProfile,
)
from .types import (
    StaticConnection,
    DynamicConnection,
    ConnectionSource,
    NetworkDeclaration,
    NetworkProfile,
)

__all__ = [
    # Configuration
    "ResolverConfig",
    "DEFAULT_HD_PATH",

    # Exceptions
    "DeployProfilesError",
    "ConfigurationError",
    "UnknownEnvironment",
    "CredentialError",
    "MissingCredential",
    "InvalidProfile",

    # Types
    "StaticConnection",
    "DynamicConnection",
    "ConnectionSource",
    "NetworkDeclaration",
    "NetworkProfile",
]
