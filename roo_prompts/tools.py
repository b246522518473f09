"""
Tool group tables.

Fixed, process-wide tables describing which tool identifiers each tool group
grants, which tools are available in every mode, and which tools are gated
behind experiment flags. Everything here is immutable and built once at
import time.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Mapping


@dataclass(frozen=True)
class ToolGroupConfig:
    """Tools granted by a single tool group."""

    tools: FrozenSet[str]
    always_available: bool = False


TOOL_GROUPS: Mapping[str, ToolGroupConfig] = MappingProxyType(
    {
        "read": ToolGroupConfig(
            tools=frozenset(
                {
                    "read_file",
                    "fetch_instructions",
                    "search_files",
                    "list_files",
                    "list_code_definition_names",
                    "codebase_search",
                }
            ),
        ),
        "edit": ToolGroupConfig(
            tools=frozenset(
                {
                    "apply_diff",
                    "write_to_file",
                    "insert_content",
                    "search_and_replace",
                }
            ),
        ),
        "browser": ToolGroupConfig(tools=frozenset({"browser_action"})),
        "command": ToolGroupConfig(tools=frozenset({"execute_command"})),
        "mcp": ToolGroupConfig(tools=frozenset({"use_mcp_tool", "access_mcp_resource"})),
        "modes": ToolGroupConfig(
            tools=frozenset({"switch_mode", "new_task"}),
            always_available=True,
        ),
    }
)

# Tools permitted in every mode, regardless of groups, requirements or experiments
ALWAYS_AVAILABLE_TOOLS: FrozenSet[str] = frozenset(
    {
        "ask_followup_question",
        "attempt_completion",
        "switch_mode",
        "new_task",
        "update_todo_list",
    }
)

# Experiment name -> experiment id. Ids that are also tool names gate that tool.
EXPERIMENT_IDS: Mapping[str, str] = MappingProxyType(
    {
        "INSERT_BLOCK": "insert_content",
        "SEARCH_AND_REPLACE": "search_and_replace",
        "POWER_STEERING": "powerSteering",
    }
)

# Parameters that mark a tool call as actually writing to its path
EDIT_PAYLOAD_PARAMS = ("diff", "content", "operations")
