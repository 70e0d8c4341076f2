"""Credentials requested by the remote but not held by the client."""

from __future__ import annotations

from .remote import RemoteSessionError


class CredentialsRequiredError(RemoteSessionError):
    """Raised when the remote asks for credentials the client does not hold.

    Attributes:
        missing: Human-readable labels of the missing values.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__("Authentication required - enter " + " and ".join(self.missing) + " above")


__all__ = ["CredentialsRequiredError"]
