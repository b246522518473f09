"""Roo Prompts - system prompt and mode assembly for Roo Code"""

from .config import PromptConfig, load_config, setup_logging
from .modes import (
    BUILTIN_MODES,
    FileRestrictionError,
    GroupOptions,
    ModeConfig,
    ModeConfigLoader,
    ModeNotFoundError,
    PromptComponent,
    ToolPermissionResolver,
    get_all_modes,
    get_full_mode_details,
    get_mode_by_slug,
    get_mode_config,
    is_custom_mode,
    is_tool_allowed_for_mode,
)
from .prompts import McpServerInfo, PromptTemplates, build_system_prompt, escape_xml, generate_mcp_servers_xml
from .tools import ALWAYS_AVAILABLE_TOOLS, EXPERIMENT_IDS, TOOL_GROUPS

__version__ = "0.1.0"
__all__ = [
    "PromptConfig",
    "load_config",
    "setup_logging",
    "BUILTIN_MODES",
    "FileRestrictionError",
    "GroupOptions",
    "ModeConfig",
    "ModeConfigLoader",
    "ModeNotFoundError",
    "PromptComponent",
    "ToolPermissionResolver",
    "get_all_modes",
    "get_full_mode_details",
    "get_mode_by_slug",
    "get_mode_config",
    "is_custom_mode",
    "is_tool_allowed_for_mode",
    "McpServerInfo",
    "PromptTemplates",
    "build_system_prompt",
    "escape_xml",
    "generate_mcp_servers_xml",
    "ALWAYS_AVAILABLE_TOOLS",
    "EXPERIMENT_IDS",
    "TOOL_GROUPS",
]
