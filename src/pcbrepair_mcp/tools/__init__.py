"""pcbrepair MCP tools."""

# Import modules to trigger tool registration via register_tool() calls
from . import export, project  # noqa: F401
from .registry import TOOL_REGISTRY, ToolSpec, get_categories, register_tool

__all__ = [
    "TOOL_REGISTRY",
    "ToolSpec",
    "get_categories",
    "register_tool",
]
