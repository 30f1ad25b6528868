"""Credential providers for dynamic networks."""

from .base import CredentialProvider
from .wallet import HDWalletProvider, PrivateKeyProvider
from .registry import ProviderEntry, ProviderRegistry, ProviderFactory, default_registry

__all__ = [
    "CredentialProvider",
    "HDWalletProvider",
    "PrivateKeyProvider",
    "ProviderEntry",
    "ProviderRegistry",
    "ProviderFactory",
    "default_registry",
]
