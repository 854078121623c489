"""Windows authentication through Windows Hello."""

import sys

from idle_lock.platforms.base import AuthenticationGateway, AuthResult
from idle_lock.utils.logger import get_logger

# Windows-specific imports (only available on Windows)
if sys.platform == "win32":
    try:
        from winrt.windows.security.credentials.ui import (
            UserConsentVerificationResult,
            UserConsentVerifier,
            UserConsentVerifierAvailability,
        )

        WINRT_AVAILABLE = True
    except ImportError:
        WINRT_AVAILABLE = False
        UserConsentVerificationResult = None
        UserConsentVerifier = None
        UserConsentVerifierAvailability = None
else:
    WINRT_AVAILABLE = False
    UserConsentVerificationResult = None
    UserConsentVerifier = None
    UserConsentVerifierAvailability = None


class WindowsAuthGateway(AuthenticationGateway):
    """Windows Hello user consent verification."""

    def __init__(self):
        self.logger = get_logger()
        if not WINRT_AVAILABLE:
            self.logger.warning("Windows Runtime APIs not available")

    async def has_challenge(self) -> bool:
        if not WINRT_AVAILABLE or UserConsentVerifier is None:
            return False

        try:
            availability = await UserConsentVerifier.check_availability_async()
            return availability == UserConsentVerifierAvailability.AVAILABLE
        except Exception as e:
            self.logger.error(f"Error checking Windows Hello availability: {e}")
            return False

    async def challenge(self, prompt_message: str) -> AuthResult:
        if not WINRT_AVAILABLE or UserConsentVerifier is None:
            return AuthResult.failed("Windows Hello not available")

        try:
            result = await UserConsentVerifier.request_verification_async(
                prompt_message
            )
        except Exception as e:
            self.logger.error(f"Error requesting Windows Hello verification: {e}")
            return AuthResult.failed(str(e))

        return _to_result(result)


def _to_result(result) -> AuthResult:
    if result == UserConsentVerificationResult.VERIFIED:
        return AuthResult.success()
    if result == UserConsentVerificationResult.CANCELED:
        return AuthResult.cancelled()
    name = getattr(result, "name", result)
    return AuthResult.failed(f"verification result {name}")
