from plugin_setup.infrastructure.platform.platform_client import DEFAULT_PLATFORM_URL, PlatformClient

__all__ = ["DEFAULT_PLATFORM_URL", "PlatformClient"]
