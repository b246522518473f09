"""
Tool permission checks for modes.

``ToolPermissionResolver`` decides whether a single tool invocation is
allowed in a mode. The checks run in a fixed order and the first one that
applies decides:

1. Always-available tools are allowed, whatever else is configured.
2. Experiment-gated tools are denied unless their experiment flag is on.
3. ``tool_requirements is False`` disables every tool.
4. A falsy entry for the tool in ``tool_requirements`` denies it.
5. An unknown mode denies everything.
6. The mode's groups are scanned in declared order and the FIRST group
   granting the tool decides. Later groups granting the same tool are never
   consulted, so a restricted ``edit`` entry listed before an unrestricted
   one is the one enforced. This is not an OR across groups.
7. No group grants the tool: denied.

A denial is ``False``. Editing a path outside an ``edit`` group's
``file_regex`` raises ``FileRestrictionError`` instead.
"""

import logging
import re
from typing import Any, Collection, Mapping, Optional, Sequence, Union

from ..tools import ALWAYS_AVAILABLE_TOOLS, EDIT_PAYLOAD_PARAMS, EXPERIMENT_IDS, TOOL_GROUPS, ToolGroupConfig
from .builtin_modes import BUILTIN_MODES
from .config import ModeConfig
from .exceptions import FileRestrictionError
from .registry import get_group_name, get_group_options, get_mode_by_slug

logger = logging.getLogger(__name__)

# Either a per-tool map, or False to disable all tools
ToolRequirements = Union[Mapping[str, bool], bool]


def does_file_match_regex(file_path: str, pattern: str) -> bool:
    """
    Check if a file path matches a regex pattern.

    A malformed pattern is logged and reported as not matching, so the
    restriction it was meant to express stays enforced.
    """
    try:
        return re.search(pattern, file_path) is not None
    except re.error as e:
        logger.warning(f"Invalid regex pattern: {pattern} ({e})")
        return False


class ToolPermissionResolver:
    """
    Decides whether tools may be used in a mode.

    The tables are fixed at construction and never modified, so one
    resolver can be shared freely.
    """

    def __init__(
        self,
        tool_groups: Mapping[str, ToolGroupConfig] = TOOL_GROUPS,
        always_available: Collection[str] = ALWAYS_AVAILABLE_TOOLS,
        experiment_ids: Collection[str] = frozenset(EXPERIMENT_IDS.values()),
        builtin_modes: Sequence[ModeConfig] = BUILTIN_MODES,
    ):
        self.tool_groups = tool_groups
        self.always_available = always_available
        self.experiment_ids = experiment_ids
        self.builtin_modes = builtin_modes

    def is_tool_allowed(
        self,
        tool: str,
        mode_slug: str,
        custom_modes: Optional[Sequence[ModeConfig]] = None,
        tool_requirements: Optional[ToolRequirements] = None,
        tool_params: Optional[Mapping[str, Any]] = None,
        experiments: Optional[Mapping[str, bool]] = None,
    ) -> bool:
        """
        Check whether a tool invocation is allowed in a mode.

        Args:
            tool: Tool identifier, e.g. ``write_to_file``
            mode_slug: Slug of the mode the call runs in
            custom_modes: Custom modes taking precedence over built-in ones
            tool_requirements: Per-tool enable map, or False to disable all tools
            tool_params: Parameters of the call (``path``, ``content``, ...)
            experiments: Experiment id -> enabled

        Returns:
            True if allowed, False if denied

        Raises:
            FileRestrictionError: If an edit targets a path the mode may not edit
        """
        if tool in self.always_available:
            return True

        if tool in self.experiment_ids and not (experiments or {}).get(tool):
            return False

        if tool_requirements is False:
            return False
        if isinstance(tool_requirements, Mapping):
            if tool in tool_requirements and not tool_requirements[tool]:
                return False

        mode = get_mode_by_slug(mode_slug, custom_modes, self.builtin_modes)
        if not mode:
            return False

        for group in mode.groups:
            group_name = get_group_name(group)
            group_config = self.tool_groups.get(group_name)
            if group_config is None or tool not in group_config.tools:
                continue

            options = get_group_options(group)
            if options is None:
                return True

            if group_name == "edit" and options.file_regex:
                self._check_file_restriction(mode, options.file_regex, options.description, tool_params)

            return True

        return False

    def _check_file_restriction(
        self,
        mode: ModeConfig,
        pattern: str,
        description: Optional[str],
        tool_params: Optional[Mapping[str, Any]],
    ) -> None:
        if not tool_params:
            return
        file_path = tool_params.get("path")
        if not file_path:
            return
        if not any(tool_params.get(param) for param in EDIT_PAYLOAD_PARAMS):
            return
        if not does_file_match_regex(file_path, pattern):
            raise FileRestrictionError(mode.name, pattern, description, file_path)


_default_resolver = ToolPermissionResolver()


def is_tool_allowed_for_mode(
    tool: str,
    mode_slug: str,
    custom_modes: Optional[Sequence[ModeConfig]] = None,
    tool_requirements: Optional[ToolRequirements] = None,
    tool_params: Optional[Mapping[str, Any]] = None,
    experiments: Optional[Mapping[str, bool]] = None,
) -> bool:
    """Check a tool invocation against the built-in tables and modes."""
    return _default_resolver.is_tool_allowed(
        tool,
        mode_slug,
        custom_modes,
        tool_requirements,
        tool_params,
        experiments,
    )
