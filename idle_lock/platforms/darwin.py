"""macOS authentication through the LocalAuthentication framework."""

import asyncio
import sys

from idle_lock.platforms.base import AuthenticationGateway, AuthResult
from idle_lock.utils.logger import get_logger

# macOS-specific imports (only available on macOS)
if sys.platform == "darwin":
    try:
        from LocalAuthentication import LAContext, LAPolicyDeviceOwnerAuthentication

        LOCAL_AUTH_AVAILABLE = True
    except ImportError:
        LOCAL_AUTH_AVAILABLE = False
        LAContext = None
        LAPolicyDeviceOwnerAuthentication = None
else:
    LOCAL_AUTH_AVAILABLE = False
    LAContext = None
    LAPolicyDeviceOwnerAuthentication = None

# LAError codes
LA_ERROR_USER_CANCEL = -2


class DarwinAuthGateway(AuthenticationGateway):
    """Touch ID with device passcode fallback."""

    def __init__(self):
        self.logger = get_logger()
        if not LOCAL_AUTH_AVAILABLE:
            self.logger.warning("LocalAuthentication framework not available")

    async def has_challenge(self) -> bool:
        if not LOCAL_AUTH_AVAILABLE or LAContext is None:
            return False

        try:
            context = LAContext.alloc().init()
            can_evaluate, error = context.canEvaluatePolicy_error_(
                LAPolicyDeviceOwnerAuthentication, None
            )
            if not can_evaluate:
                self.logger.info(f"Authentication not available: {error}")
            return bool(can_evaluate)
        except Exception as e:
            self.logger.error(f"Error checking authentication availability: {e}")
            return False

    async def challenge(self, prompt_message: str) -> AuthResult:
        if not LOCAL_AUTH_AVAILABLE or LAContext is None:
            return AuthResult.failed("LocalAuthentication not available")

        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()

        def reply(success, error):
            # Called on a framework-owned thread
            loop.call_soon_threadsafe(_settle, future, _to_result(success, error))

        try:
            context = LAContext.alloc().init()
            context.evaluatePolicy_localizedReason_reply_(
                LAPolicyDeviceOwnerAuthentication, prompt_message, reply
            )
        except Exception as e:
            self.logger.error(f"Error presenting authentication prompt: {e}")
            return AuthResult.failed(str(e))

        return await future


def _to_result(success, error) -> AuthResult:
    if success:
        return AuthResult.success()
    if error is not None and error.code() == LA_ERROR_USER_CANCEL:
        return AuthResult.cancelled()
    reason = error.localizedDescription() if error is not None else "unknown error"
    return AuthResult.failed(str(reason))


def _settle(future: asyncio.Future, result: AuthResult) -> None:
    if not future.done():
        future.set_result(result)
