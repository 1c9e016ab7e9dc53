"""Setup tools for the host's A2A server."""

from .registry import ToolDefinition, ToolRegistry, text_result
from .setup_tools import SetupTools, create_setup_tools

__all__ = ["ToolDefinition", "ToolRegistry", "text_result", "SetupTools", "create_setup_tools"]
