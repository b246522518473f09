"""
System prompt assembly.

Placeholder substitution into host-supplied templates, MCP server metadata
rendered as XML, and the standalone prompt sections.
"""

from .xml import escape_xml, to_posix
from .mcp_servers import (
    McpServerInfo,
    McpToolInfo,
    McpResourceInfo,
    McpResourceTemplateInfo,
    ServerStatus,
    generate_mcp_servers_xml,
)
from .sections import (
    add_user_instructions,
    get_capabilities_section,
    get_language_instructions,
    get_system_info_section,
)
from .system import BrowserSettings, PromptTemplates, Viewport, build_system_prompt

__all__ = [
    "escape_xml",
    "to_posix",
    "McpServerInfo",
    "McpToolInfo",
    "McpResourceInfo",
    "McpResourceTemplateInfo",
    "ServerStatus",
    "generate_mcp_servers_xml",
    "add_user_instructions",
    "get_capabilities_section",
    "get_language_instructions",
    "get_system_info_section",
    "BrowserSettings",
    "PromptTemplates",
    "Viewport",
    "build_system_prompt",
]
