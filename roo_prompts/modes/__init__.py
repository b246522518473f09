"""
Roo Code Mode System

This module provides the mode/persona table, custom-mode merging, and the
tool permission checks applied to each mode.
"""

from .config import (
    ModeConfig,
    GroupOptions,
    GroupEntry,
    ModeConfigLoader,
    ModeSource,
    PromptComponent,
    CustomModePrompts,
)
from .exceptions import ModeError, ModeNotFoundError, FileRestrictionError
from .builtin_modes import BUILTIN_MODES, DEFAULT_MODE_SLUG, DEFAULT_PROMPTS, get_builtin_mode
from .registry import (
    ModeDetailsOptions,
    compose_custom_instructions,
    find_mode_by_slug,
    get_all_modes,
    get_all_modes_with_prompts,
    get_custom_instructions,
    get_full_mode_details,
    get_group_name,
    get_group_options,
    get_mode_by_slug,
    get_mode_config,
    get_mode_selection,
    get_role_definition,
    get_tools_for_mode,
    get_when_to_use,
    is_custom_mode,
)
from .permissions import ToolPermissionResolver, does_file_match_regex, is_tool_allowed_for_mode

__all__ = [
    "ModeConfig",
    "GroupOptions",
    "GroupEntry",
    "ModeConfigLoader",
    "ModeSource",
    "PromptComponent",
    "CustomModePrompts",
    "ModeError",
    "ModeNotFoundError",
    "FileRestrictionError",
    "BUILTIN_MODES",
    "DEFAULT_MODE_SLUG",
    "DEFAULT_PROMPTS",
    "get_builtin_mode",
    "ModeDetailsOptions",
    "compose_custom_instructions",
    "find_mode_by_slug",
    "get_all_modes",
    "get_all_modes_with_prompts",
    "get_custom_instructions",
    "get_full_mode_details",
    "get_group_name",
    "get_group_options",
    "get_mode_by_slug",
    "get_mode_config",
    "get_mode_selection",
    "get_role_definition",
    "get_tools_for_mode",
    "get_when_to_use",
    "is_custom_mode",
    "ToolPermissionResolver",
    "does_file_match_regex",
    "is_tool_allowed_for_mode",
]
