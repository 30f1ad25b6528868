"""Registry of named credential provider factories."""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..core.config import ResolverConfig
from ..core.exceptions import ConfigurationError
from .base import CredentialProvider
from .wallet import HDWalletProvider, PrivateKeyProvider

logger = logging.getLogger(__name__)

# factory(url, secret, account_index, config) -> CredentialProvider
ProviderFactory = Callable[[str, Optional[str], int, ResolverConfig], CredentialProvider]


@dataclass(frozen=True)
class ProviderEntry:
    """A registered provider implementation."""
    provider_id: str
    factory: ProviderFactory
    requires_secret: bool = True


class ProviderRegistry:
    """Maps provider ids used in declarations to factories.

    Declarations name a provider instead of embedding code; the resolver
    looks the id up here and hands the factory any secret explicitly.
    """

    def __init__(self):
        self._entries: Dict[str, ProviderEntry] = {}

    def register(
        self,
        provider_id: str,
        factory: ProviderFactory,
        requires_secret: bool = True
    ) -> None:
        """Register a factory under ``provider_id``.

        Raises:
            ConfigurationError: The id is empty or already registered
        """
        if not provider_id:
            raise ConfigurationError("Provider id must not be empty")
        if provider_id in self._entries:
            raise ConfigurationError(
                f"Provider {provider_id!r} is already registered",
                details={'provider_id': provider_id}
            )
        self._entries[provider_id] = ProviderEntry(provider_id, factory, requires_secret)
        logger.debug(f"Registered credential provider {provider_id!r}")

    def get(self, provider_id: str) -> Optional[ProviderEntry]:
        return self._entries.get(provider_id)

    def ids(self) -> List[str]:
        return sorted(self._entries)

    def __contains__(self, provider_id: str) -> bool:
        return provider_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def _hdwallet(url: str, secret: Optional[str], account_index: int, config: ResolverConfig) -> CredentialProvider:
    return HDWalletProvider(
        secret,
        url,
        account_path=config.account_path(account_index),
        request_timeout=config.request_timeout
    )


def _private_key(url: str, secret: Optional[str], account_index: int, config: ResolverConfig) -> CredentialProvider:
    return PrivateKeyProvider(secret, url, request_timeout=config.request_timeout)


def default_registry() -> ProviderRegistry:
    """A fresh registry holding the built-in providers."""
    registry = ProviderRegistry()
    registry.register('hdwallet', _hdwallet)
    registry.register('private_key', _private_key)
    return registry
