"""Static network declarations and their override layering."""

import logging
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from .core.exceptions import InvalidProfile, UnknownEnvironment
from .core.types import NetworkDeclaration

logger = logging.getLogger(__name__)

GWEI = 10 ** 9


class DeclarationSet:
    """A base declaration plus named per-environment overrides.

    A name is flattened by layering, in order, ``defaults``, every ancestor
    reached through ``extends`` (root first) and the named declaration
    itself.
    """

    def __init__(
        self,
        networks: Mapping[str, NetworkDeclaration],
        defaults: Optional[NetworkDeclaration] = None
    ):
        self.defaults = defaults or NetworkDeclaration()
        self._networks = MappingProxyType(dict(networks))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'DeclarationSet':
        """Build a set from plain data: ``{"defaults": {...}, "networks": {name: {...}}}``."""
        unknown = set(data) - {'defaults', 'networks'}
        if unknown:
            raise InvalidProfile(
                f"Unexpected top-level keys: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0]
            )

        defaults = cls._parse('defaults', data.get('defaults') or {})
        networks = {
            name: cls._parse(name, body)
            for name, body in (data.get('networks') or {}).items()
        }
        return cls(networks, defaults=defaults)

    @staticmethod
    def _parse(name: str, body: Mapping[str, Any]) -> NetworkDeclaration:
        try:
            return NetworkDeclaration(**body)
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = str(error['loc'][0]) if error.get('loc') else None
            raise InvalidProfile(
                f"Invalid declaration for {name!r}: {error['msg']}",
                environment=name,
                field=field,
                value=body.get(field) if field else None
            ) from e

    @property
    def networks(self) -> Mapping[str, NetworkDeclaration]:
        return self._networks

    def names(self) -> List[str]:
        return sorted(self._networks)

    def __contains__(self, name: str) -> bool:
        return name in self._networks

    def __len__(self) -> int:
        return len(self._networks)

    def lineage(self, name: str) -> List[str]:
        """Names layered for ``name``, root ancestor first.

        Raises:
            UnknownEnvironment: ``name`` is not declared
            InvalidProfile: An ``extends`` target is undeclared or forms a cycle
        """
        if name not in self._networks:
            raise UnknownEnvironment(name, known=list(self._networks))

        chain: List[str] = []
        current: Optional[str] = name
        while current is not None:
            if current in chain:
                cycle = ' -> '.join(chain + [current])
                raise InvalidProfile(
                    f"Cyclic 'extends' for {name!r}: {cycle}",
                    environment=name,
                    field='extends',
                    value=current
                )
            if current not in self._networks:
                raise InvalidProfile(
                    f"{chain[-1]!r} extends undeclared environment {current!r}",
                    environment=name,
                    field='extends',
                    value=current
                )
            chain.append(current)
            current = self._networks[current].extends

        return list(reversed(chain))

    def flatten(self, name: str) -> NetworkDeclaration:
        """Single declaration holding every layer that applies to ``name``."""
        merged = self.defaults
        for layer in self.lineage(name):
            merged = merged.merged_with(self._networks[layer])
        logger.debug(f"Flattened {name!r}: {sorted(merged.explicit_fields())}")
        return merged

    @classmethod
    def builtin(cls) -> 'DeclarationSet':
        """The deployment targets this package ships with."""
        return cls.from_mapping(BUILTIN_DECLARATIONS)


BUILTIN_DECLARATIONS: Dict[str, Any] = {
    'defaults': {
        'host': '127.0.0.1',
        'port': 8545,
    },
    'networks': {
        'ropsten': {
            'chain_id': 3,
            'gas_limit': 4700036,
            'gas_price': 60 * GWEI,
            'from_address': '0xdfffc978720962e2770bc7ea5c1d304b99862e20',
        },
        'ropsten-legacy': {
            'extends': 'ropsten',
            'gas_price': 20 * GWEI,
        },
        'rinkeby': {
            'provider': 'hdwallet',
            'url': 'https://rinkeby.infura.io/PwcyIGszs2x6sS6NIU1Q',
            'chain_id': 4,
            'gas_limit': 7484176,
            'gas_price': 9 * GWEI,
        },
    },
}
