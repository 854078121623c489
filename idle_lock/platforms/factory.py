"""Platform detection and factory for creating platform-specific gateways."""

import platform

from idle_lock.platforms.base import AuthenticationGateway, NullAuthGateway
from idle_lock.utils.logger import get_logger


def get_platform_name() -> str:
    """Get the current platform name."""
    return platform.system().lower()


def get_auth_gateway() -> AuthenticationGateway:
    """Factory function to create the platform-specific authentication gateway."""
    platform_name = get_platform_name()
    logger = get_logger()

    if platform_name == "darwin":
        from idle_lock.platforms.darwin import DarwinAuthGateway

        logger.debug("Creating macOS authentication gateway")
        return DarwinAuthGateway()
    elif platform_name == "linux":
        from idle_lock.platforms.linux import LinuxAuthGateway

        logger.debug("Creating Linux authentication gateway")
        return LinuxAuthGateway()
    elif platform_name == "windows":
        from idle_lock.platforms.windows import WindowsAuthGateway

        logger.debug("Creating Windows authentication gateway")
        return WindowsAuthGateway()
    else:
        logger.warning(
            f"Unsupported platform: {platform_name}, no authentication available"
        )
        return NullAuthGateway()


def is_supported_platform() -> bool:
    """Check if the current platform has an authentication gateway."""
    platform_name = get_platform_name()
    return platform_name in ["darwin", "linux", "windows"]
