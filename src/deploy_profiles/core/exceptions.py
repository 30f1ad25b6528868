"""Custom exceptions for deploy-profiles."""

from typing import Optional, Any, Dict


class DeployProfilesError(Exception):
    """Base exception for all deploy-profiles errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(DeployProfilesError):
    """Configuration is invalid or missing."""
    pass


class UnknownEnvironment(DeployProfilesError):
    """No declaration exists for the requested environment name."""

    def __init__(
        self,
        environment: str,
        known: Optional[list] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        message = f"Unknown environment: {environment!r}"
        if known:
            message += f" (declared: {', '.join(sorted(known))})"
        super().__init__(message, details)
        self.environment = environment
        self.known = sorted(known) if known else []


class CredentialError(DeployProfilesError):
    """A credential could not be obtained or used."""

    def __init__(
        self,
        message: str,
        environment: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.environment = environment


class MissingCredential(CredentialError):
    """A required secret or address is absent from the process environment."""

    def __init__(
        self,
        environment: str,
        variable: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            f"Environment {environment!r} requires variable {variable} to be set",
            environment=environment,
            details=details
        )
        self.variable = variable


class InvalidProfile(DeployProfilesError):
    """A declaration does not produce a valid network profile."""

    def __init__(
        self,
        message: str,
        environment: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.environment = environment
        self.field = field
        self.value = value
