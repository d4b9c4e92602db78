"""
Base class for tools that talk to the Vectra API.

Tools receive the shared client and settings at construction time; nothing
is read from module-level state.
"""

from __future__ import annotations

from ..client import VectraClient
from ..config import Settings
from ..mcp_base import MCPTool, TParams


class VectraTool(MCPTool[TParams]):
    """An MCPTool bound to a VectraClient."""

    def __init__(self, client: VectraClient, settings: Settings) -> None:
        self.client = client
        self.settings = settings
