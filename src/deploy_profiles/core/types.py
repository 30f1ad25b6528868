"""Core type definitions for deploy-profiles."""

from typing import Optional, Union, Dict, Any, Literal

from eth_utils import is_address, to_checksum_address
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ..connection import DEFAULT_TIMEOUT, HttpConnection
from ..providers.base import CredentialProvider

# Fields that describe how an environment is reached. A layer that sets any
# field of one group drops whatever the other group inherited.
STATIC_FIELDS = ('host', 'port')
DYNAMIC_FIELDS = ('provider', 'url', 'secret_env', 'account_index')
SENDER_FIELDS = ('from_address', 'sender_env')


def _checksum_address(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    if not isinstance(v, str) or not is_address(v):
        raise ValueError(f'Invalid Ethereum address: {v}')
    return to_checksum_address(v)


class StaticConnection(BaseModel):
    """Endpoint reached at a literal host and port."""
    kind: Literal['static'] = 'static'
    host: str
    port: int

    model_config = ConfigDict(frozen=True)

    @field_validator('host')
    @classmethod
    def validate_host(cls, v):
        if not v.strip():
            raise ValueError('host must not be empty')
        return v.strip()

    @field_validator('port')
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError(f'port must be within 1-65535: {v}')
        return v

    @property
    def endpoint_url(self) -> str:
        return f"http://{self.host}:{self.port}"


class DynamicConnection(BaseModel):
    """Endpoint reached through a registered credential provider."""
    kind: Literal['dynamic'] = 'dynamic'
    provider_id: str
    url: str

    model_config = ConfigDict(frozen=True)

    @field_validator('provider_id')
    @classmethod
    def validate_provider_id(cls, v):
        if not v.strip():
            raise ValueError('provider_id must not be empty')
        return v

    @field_validator('url')
    @classmethod
    def validate_url(cls, v):
        if not v.startswith(('http://', 'https://', 'ws://', 'wss://')):
            raise ValueError(f'url must be an http(s) or ws(s) URL: {v}')
        return v

    @property
    def endpoint_url(self) -> str:
        return self.url


ConnectionSource = Union[StaticConnection, DynamicConnection]


class NetworkDeclaration(BaseModel):
    """A partial, layerable description of one environment.

    Every field is optional so that a declaration can act as a base
    (``defaults``), a parent reached through ``extends``, or an override.
    Only the fields a layer sets explicitly take part in a merge.
    """
    extends: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    chain_id: Optional[int] = None
    gas_limit: Optional[int] = None
    gas_price: Optional[int] = None
    from_address: Optional[str] = None
    sender_env: Optional[str] = None
    provider: Optional[str] = None
    url: Optional[str] = None
    secret_env: Optional[str] = None
    account_index: Optional[int] = None

    model_config = ConfigDict(frozen=True, extra='forbid')

    def explicit_fields(self) -> Dict[str, Any]:
        """Fields set explicitly on this layer."""
        return self.model_dump(exclude_unset=True)

    def merged_with(self, override: 'NetworkDeclaration') -> 'NetworkDeclaration':
        """Return a new declaration with ``override`` layered on top of this one."""
        merged = self.explicit_fields()
        changes = override.explicit_fields()

        if any(f in changes for f in DYNAMIC_FIELDS):
            for f in STATIC_FIELDS + SENDER_FIELDS:
                merged.pop(f, None)
        if any(f in changes for f in STATIC_FIELDS):
            for f in DYNAMIC_FIELDS:
                merged.pop(f, None)

        merged.update(changes)
        merged.pop('extends', None)
        return NetworkDeclaration(**merged)

    @property
    def is_dynamic(self) -> bool:
        return self.provider is not None


class NetworkProfile(BaseModel):
    """A fully resolved, validated deployment target."""
    name: str
    connection: ConnectionSource = Field(..., discriminator='kind')
    chain_id: int
    gas_limit: int
    gas_price: int
    from_address: Optional[str] = None
    provider: Optional[CredentialProvider] = Field(default=None, repr=False, validate_default=True)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('name must not be empty')
        return v

    @field_validator('chain_id')
    @classmethod
    def validate_chain_id(cls, v):
        if v <= 0:
            raise ValueError(f'chain_id must be positive: {v}')
        return v

    @field_validator('gas_limit')
    @classmethod
    def validate_gas_limit(cls, v):
        if v <= 0:
            raise ValueError(f'gas_limit must be positive: {v}')
        return v

    @field_validator('gas_price')
    @classmethod
    def validate_gas_price(cls, v):
        if v < 0:
            raise ValueError(f'gas_price must be non-negative: {v}')
        return v

    @field_validator('from_address')
    @classmethod
    def validate_from_address(cls, v):
        return _checksum_address(v)

    @field_validator('provider')
    @classmethod
    def validate_provider(cls, v, info: ValidationInfo):
        connection = info.data.get('connection')
        if isinstance(connection, DynamicConnection) and v is None:
            raise ValueError('a dynamic connection requires a credential provider')
        if isinstance(connection, StaticConnection) and v is not None:
            raise ValueError('a static connection cannot carry a credential provider')
        if v is not None and info.data.get('from_address') is not None:
            raise ValueError('from_address and a credential provider are mutually exclusive')
        return v

    @property
    def is_dynamic(self) -> bool:
        return isinstance(self.connection, DynamicConnection)

    @property
    def endpoint_url(self) -> str:
        return self.connection.endpoint_url

    @property
    def sender(self) -> Optional[str]:
        """Literal sender address, or the provider's account address.

        Accessing this on a dynamic profile derives the provider's account.
        """
        if self.provider is not None:
            return self.provider.address
        return self.from_address

    def connect(self, timeout: Optional[float] = None) -> HttpConnection:
        """Connection toward the endpoint; nothing is opened until it is used.

        Without ``timeout``, a dynamic profile uses its provider's
        ``request_timeout`` and a static one uses ``DEFAULT_TIMEOUT``.
        """
        if self.provider is not None:
            return self.provider.connection(timeout=timeout)
        return HttpConnection(
            self.endpoint_url,
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout
        )
