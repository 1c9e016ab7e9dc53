from plugin_setup.infrastructure.config_store.host_config_store import HostConfigStore

__all__ = ["HostConfigStore"]
