"""Resolve environment names into validated network profiles."""

import logging
import os
from typing import Callable, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from .core.config import ResolverConfig
from .core.exceptions import InvalidProfile, MissingCredential
from .core.types import (
    DynamicConnection,
    NetworkDeclaration,
    NetworkProfile,
    StaticConnection,
)
from .declarations import DeclarationSet
from .providers.base import CredentialProvider
from .providers.registry import ProviderRegistry, default_registry

logger = logging.getLogger(__name__)

EnvLookup = Callable[[str], Optional[str]]


class ConfigResolver:
    """Turns a declared environment name into a NetworkProfile.

    Example:
        ```python
        resolver = ConfigResolver()
        profile = resolver.resolve("ropsten")
        profile.chain_id      # 3
        profile.endpoint_url  # "http://127.0.0.1:8545"
        ```

    Resolution reads only the environment variables a declaration names,
    through ``env``, and never opens a connection or derives a key.
    """

    def __init__(
        self,
        declarations: Optional[DeclarationSet] = None,
        registry: Optional[ProviderRegistry] = None,
        config: Optional[ResolverConfig] = None,
        env: Optional[EnvLookup] = None
    ):
        """Initialize the resolver.

        Args:
            declarations: Declared environments (defaults to the built-in set)
            registry: Provider factories (defaults to the built-in providers)
            config: Resolver settings (defaults to ``ResolverConfig()``)
            env: Variable lookup (defaults to ``os.environ.get``)
        """
        self.declarations = declarations if declarations is not None else DeclarationSet.builtin()
        self.registry = registry if registry is not None else default_registry()
        self.config = config or ResolverConfig()
        self._env = env or os.environ.get

    def names(self) -> List[str]:
        """Declared environment names, sorted."""
        return self.declarations.names()

    def resolve(self, name: str) -> NetworkProfile:
        """Resolve ``name`` into a validated, immutable profile.

        Args:
            name: A declared environment name

        Returns:
            The resolved NetworkProfile

        Raises:
            UnknownEnvironment: ``name`` has no declaration
            MissingCredential: A variable the declaration needs is unset
            InvalidProfile: Required fields are absent or out of range
        """
        logger.debug(f"Resolving environment {name!r}")
        declaration = self.declarations.flatten(name)

        self._require(name, declaration, 'chain_id')
        self._require(name, declaration, 'gas_limit')
        self._require(name, declaration, 'gas_price')

        if declaration.is_dynamic:
            connection, provider = self._dynamic(name, declaration)
            from_address = None
        else:
            connection, provider = self._static(name, declaration), None
            from_address = self._sender(name, declaration)

        profile = self._build(
            name,
            connection=connection,
            chain_id=declaration.chain_id,
            gas_limit=declaration.gas_limit,
            gas_price=declaration.gas_price,
            from_address=from_address,
            provider=provider
        )
        logger.info(
            f"Resolved {name!r}: chain_id={profile.chain_id} endpoint={profile.endpoint_url}"
        )
        return profile

    def resolve_all(self) -> Dict[str, NetworkProfile]:
        """Resolve every declared environment, stopping at the first failure."""
        return {name: self.resolve(name) for name in self.names()}

    def _require(self, name: str, declaration: NetworkDeclaration, field: str) -> None:
        if getattr(declaration, field) is None:
            raise InvalidProfile(
                f"Environment {name!r} is missing required field {field}",
                environment=name,
                field=field
            )

    def _lookup(self, name: str, variable: str) -> str:
        value = self._env(variable)
        if value is None or not value.strip():
            raise MissingCredential(name, variable)
        return value.strip()

    def _static(self, name: str, declaration: NetworkDeclaration) -> StaticConnection:
        self._require(name, declaration, 'host')
        self._require(name, declaration, 'port')
        for field in ('url', 'secret_env', 'account_index'):
            if getattr(declaration, field) is not None:
                raise InvalidProfile(
                    f"Environment {name!r} has no credential provider but sets {field}",
                    environment=name,
                    field=field,
                    value=getattr(declaration, field)
                )
        return self._model(
            name,
            StaticConnection,
            host=declaration.host,
            port=declaration.port
        )

    def _dynamic(self, name: str, declaration: NetworkDeclaration):
        self._require(name, declaration, 'url')
        for field in ('host', 'port', 'from_address', 'sender_env'):
            if getattr(declaration, field) is not None:
                raise InvalidProfile(
                    f"Environment {name!r} uses a credential provider and cannot set {field}",
                    environment=name,
                    field=field,
                    value=getattr(declaration, field)
                )

        entry = self.registry.get(declaration.provider)
        if entry is None:
            raise InvalidProfile(
                f"Environment {name!r} names unregistered provider {declaration.provider!r}"
                f" (registered: {', '.join(self.registry.ids()) or 'none'})",
                environment=name,
                field='provider',
                value=declaration.provider
            )

        connection = self._model(
            name,
            DynamicConnection,
            provider_id=declaration.provider,
            url=declaration.url
        )

        secret = None
        if entry.requires_secret:
            secret = self._lookup(name, declaration.secret_env or self.config.mnemonic_env)

        account_index = declaration.account_index
        if account_index is None:
            account_index = self.config.account_index
        if account_index < 0:
            raise InvalidProfile(
                f"Environment {name!r} has a negative account_index",
                environment=name,
                field='account_index',
                value=account_index
            )

        provider: CredentialProvider = entry.factory(
            connection.url, secret, account_index, self.config
        )
        logger.debug(f"Environment {name!r} uses provider {provider!r}")
        return connection, provider

    def _sender(self, name: str, declaration: NetworkDeclaration) -> Optional[str]:
        if declaration.from_address is not None and declaration.sender_env is not None:
            raise InvalidProfile(
                f"Environment {name!r} sets both from_address and sender_env",
                environment=name,
                field='sender_env',
                value=declaration.sender_env
            )
        if declaration.sender_env is not None:
            return self._lookup(name, declaration.sender_env)
        return declaration.from_address

    def _build(self, name: str, **fields) -> NetworkProfile:
        return self._model(name, NetworkProfile, name=name, **fields)

    @staticmethod
    def _model(environment: str, model, **fields):
        try:
            return model(**fields)
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = str(error['loc'][0]) if error.get('loc') else None
            raise InvalidProfile(
                f"Environment {environment!r} has an invalid {field or 'profile'}: {error['msg']}",
                environment=environment,
                field=field,
                value=fields.get(field) if field else None
            ) from e
