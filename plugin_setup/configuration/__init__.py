from plugin_setup.configuration.config import Settings, configure_logging, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
