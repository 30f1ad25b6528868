"""Configuration management for deploy-profiles."""

import os
from dataclasses import dataclass

from .exceptions import ConfigurationError

DEFAULT_HD_PATH = "m/44'/60'/0'/0/{index}"
DEFAULT_ACCOUNT_PATH = DEFAULT_HD_PATH.format(index=0)


@dataclass(frozen=True)
class ResolverConfig:
    """Settings shared by every resolution."""
    mnemonic_env: str = 'HDMNEMONIC'
    hd_path: str = DEFAULT_HD_PATH
    account_index: int = 0
    request_timeout: float = 30.0

    def __post_init__(self):
        if self.account_index < 0:
            raise ConfigurationError(
                f"account_index must be non-negative, got {self.account_index}",
                details={'field': 'account_index'}
            )
        if self.request_timeout <= 0:
            raise ConfigurationError(
                f"request_timeout must be positive, got {self.request_timeout}",
                details={'field': 'request_timeout'}
            )
        if '{index}' not in self.hd_path:
            raise ConfigurationError(
                f"hd_path must contain an '{{index}}' placeholder: {self.hd_path}",
                details={'field': 'hd_path'}
            )
        try:
            self.hd_path.format(index=0)
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigurationError(
                f"hd_path may only use the '{{index}}' placeholder: {self.hd_path}",
                details={'field': 'hd_path'}
            ) from e

    def account_path(self, index: int) -> str:
        """Derivation path for the account at ``index``."""
        return self.hd_path.format(index=index)

    @classmethod
    def from_env(cls) -> 'ResolverConfig':
        """Load configuration from environment variables."""
        try:
            return cls(
                mnemonic_env=os.environ.get('DEPLOY_PROFILES_MNEMONIC_ENV', 'HDMNEMONIC'),
                hd_path=os.environ.get('DEPLOY_PROFILES_HD_PATH', DEFAULT_HD_PATH),
                account_index=int(os.environ.get('DEPLOY_PROFILES_ACCOUNT_INDEX', '0')),
                request_timeout=float(os.environ.get('DEPLOY_PROFILES_REQUEST_TIMEOUT', '30.0'))
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid deploy-profiles environment setting: {e}") from e
