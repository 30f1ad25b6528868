"""Local-account credential providers backed by eth-account."""

from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..core.config import DEFAULT_ACCOUNT_PATH
from .base import CredentialProvider


class HDWalletProvider(CredentialProvider):
    """Derives an account from a BIP-39 mnemonic on first use."""

    def __init__(
        self,
        mnemonic: str,
        url: str,
        account_path: str = DEFAULT_ACCOUNT_PATH,
        request_timeout: float = 30.0
    ):
        super().__init__(url, request_timeout=request_timeout)
        self._mnemonic = mnemonic
        self.account_path = account_path

    def _derive_account(self) -> LocalAccount:
        Account.enable_unaudited_hdwallet_features()
        return Account.from_mnemonic(self._mnemonic, account_path=self.account_path)

    def _identity(self) -> tuple:
        return (self._mnemonic, self.url, self.account_path, self.request_timeout)

    def __repr__(self) -> str:
        return f"HDWalletProvider(url={self.url!r}, account_path={self.account_path!r})"


class PrivateKeyProvider(CredentialProvider):
    """Wraps a single hex private key."""

    def __init__(self, private_key: str, url: str, request_timeout: float = 30.0):
        super().__init__(url, request_timeout=request_timeout)
        self._private_key = private_key

    def _derive_account(self) -> LocalAccount:
        return Account.from_key(self._private_key)

    def _identity(self) -> tuple:
        return (self._private_key, self.url, self.request_timeout)
