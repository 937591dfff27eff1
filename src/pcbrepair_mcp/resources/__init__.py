"""MCP resources for the loaded repair file."""

from .board import register_board_resources

__all__ = ["register_board_resources"]
