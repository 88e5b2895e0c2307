"""Credential source interface for Prometheus basic auth."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Credentials:
    """Username/password pair."""

    username: str
    password: str


class CredentialSource(ABC):
    """Abstract interface for secret store lookups."""

    @abstractmethod
    def resolve(self) -> Credentials:
        """Look up credentials.

        Returns:
            Resolved credentials

        Raises:
            CredentialSourceError: If the lookup fails
        """
