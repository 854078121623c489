"""Abstract base classes for platform-specific authentication."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AuthOutcome(Enum):
    """Outcome of a single authentication challenge."""

    SUCCESS = "success"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class AuthResult:
    """Result of one unlock attempt."""

    outcome: AuthOutcome
    reason: Optional[str] = None

    @classmethod
    def success(cls) -> "AuthResult":
        return cls(AuthOutcome.SUCCESS)

    @classmethod
    def cancelled(cls) -> "AuthResult":
        return cls(AuthOutcome.CANCELLED)

    @classmethod
    def failed(cls, reason: str) -> "AuthResult":
        return cls(AuthOutcome.FAILED, reason)


class AuthenticationGateway(ABC):
    """Abstract base class for device authentication.

    Implementations are stateless per call; the caller guarantees that
    ``challenge`` is never entered twice concurrently.
    """

    @abstractmethod
    async def has_challenge(self) -> bool:
        """Check if a usable authentication sensor or credential exists."""
        pass

    @abstractmethod
    async def challenge(self, prompt_message: str) -> AuthResult:
        """Present a single authentication prompt."""
        pass


class NullAuthGateway(AuthenticationGateway):
    """Gateway for systems without any authentication sensor."""

    async def has_challenge(self) -> bool:
        return False

    async def challenge(self, prompt_message: str) -> AuthResult:
        return AuthResult.failed("no authentication sensor")
