from plugin_setup.infrastructure.events.setup_event_bus import EventListener, SetupEventBus

__all__ = ["EventListener", "SetupEventBus"]
