"""Base class for credential providers."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from eth_account.signers.local import LocalAccount
from eth_keys.exceptions import ValidationError as KeyValidationError
from eth_utils import ValidationError as EthValidationError

from ..connection import HttpConnection
from ..core.exceptions import CredentialError

logger = logging.getLogger(__name__)


class CredentialProvider(ABC):
    """Supplies connectivity and a signing account for a dynamic network.

    Construction is cheap and side-effect free. The account is derived the
    first time it is asked for, and the connection opens its session only
    when used.
    """

    def __init__(self, url: str, request_timeout: float = 30.0):
        self.url = url
        self.request_timeout = request_timeout
        self._account: Optional[LocalAccount] = None

    @abstractmethod
    def _derive_account(self) -> LocalAccount:
        """Build the signing account from the provider's secret."""
        pass

    @abstractmethod
    def _identity(self) -> tuple:
        """Inputs that determine what this provider yields."""
        pass

    @property
    def account(self) -> LocalAccount:
        if self._account is None:
            try:
                self._account = self._derive_account()
            except (ValueError, TypeError, EthValidationError, KeyValidationError) as e:
                # Secret material must not end up in the message.
                raise CredentialError(
                    f"{type(self).__name__} could not derive an account: {type(e).__name__}",
                    details={'url': self.url}
                ) from None
            logger.debug(f"{type(self).__name__} derived account {self._account.address}")
        return self._account

    @property
    def address(self) -> str:
        return self.account.address

    def connection(self, timeout: Optional[float] = None) -> HttpConnection:
        return HttpConnection(
            self.url,
            timeout=self.request_timeout if timeout is None else timeout
        )

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self):
        return hash((type(self).__name__,) + self._identity())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self.url!r})"
