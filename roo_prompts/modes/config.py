"""
Mode configuration records and YAML loading.

This module provides the core data model of the mode system: GroupOptions,
ModeConfig, PromptComponent, and ModeConfigLoader for reading user-defined
custom modes from YAML files (global < project).
"""

import copy
import logging
import re
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping, Optional, Set, Tuple, Union

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Tool groups that modes can enable
ToolGroup = Literal["read", "edit", "browser", "command", "mcp", "modes"]

VALID_TOOL_GROUPS: Set[str] = {"read", "edit", "browser", "command", "mcp", "modes"}

SLUG_PATTERN = re.compile(r"^[a-zA-Z0-9-]+$")


class ModeSource(str, Enum):
    """Source of a mode configuration."""

    BUILTIN = "builtin"
    GLOBAL = "global"
    PROJECT = "project"
    CUSTOM = "custom"


@dataclass(frozen=True)
class GroupOptions:
    """
    Options for a tool group entry, used to scope an edit grant to some files.

    The pattern is not compiled here: a malformed pattern is reported when it
    is used and then treated as not matching.
    """

    file_regex: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GroupOptions":
        """Build options from a host dict (``fileRegex``) or a snake_case dict."""
        return cls(
            file_regex=data.get("fileRegex", data.get("file_regex")),
            description=data.get("description"),
        )

    def to_dict(self) -> Dict[str, str]:
        options: Dict[str, str] = {}
        if self.file_regex:
            options["fileRegex"] = self.file_regex
        if self.description:
            options["description"] = self.description
        return options

    def matches_file(self, file_path: str) -> bool:
        """Check if a file path matches this group's restriction."""
        if not self.file_regex:
            return True
        try:
            return bool(re.search(self.file_regex, file_path))
        except re.error as e:
            logger.warning(f"Invalid regex pattern: {self.file_regex} ({e})")
            return False


# GroupEntry can be either just a group name or a tuple of (group name, options)
GroupEntry = Union[ToolGroup, Tuple[ToolGroup, GroupOptions]]


def _normalize_group_entry(entry: Any) -> GroupEntry:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, (list, tuple)) and len(entry) == 2:
        group_name, options = entry
        if isinstance(options, Mapping):
            options = GroupOptions.from_dict(options)
        if not isinstance(options, GroupOptions):
            raise ValueError(f"Group options must be a dict, got {type(options)}")
        return (group_name, options)
    raise ValueError(f"Invalid group entry format: {entry}")


@dataclass(frozen=True)
class ModeConfig:
    """
    Configuration for a mode/persona.

    Attributes:
        slug: Unique identifier (letters, numbers and dashes)
        name: Display name (can include emoji)
        role_definition: The persona text that opens the system prompt
        groups: Enabled tool groups in evaluation order, optionally with options
        when_to_use: Description of when this mode should be used
        description: Short description of the mode
        custom_instructions: Additional mode-specific instructions
        source: Where this mode came from

    Records are immutable; use ``with_overrides`` to derive a changed copy.
    The same group may appear more than once: the first entry granting a
    tool is the one that applies to it.
    """

    slug: str
    name: str
    role_definition: str
    groups: Tuple[GroupEntry, ...] = field(default_factory=tuple)
    when_to_use: Optional[str] = None
    description: Optional[str] = None
    custom_instructions: Optional[str] = None
    source: ModeSource = ModeSource.BUILTIN

    def __post_init__(self):
        """Validate the mode configuration and normalize its groups."""
        if not SLUG_PATTERN.match(self.slug):
            raise ValueError(
                f"Invalid slug '{self.slug}': must contain only letters, numbers, and dashes"
            )

        if not self.name:
            raise ValueError("Mode name is required")
        if not self.role_definition:
            raise ValueError("Mode role_definition is required")

        groups = tuple(_normalize_group_entry(entry) for entry in self.groups)
        object.__setattr__(self, "groups", groups)
        self._validate_groups()

    def _validate_groups(self):
        for entry in self.groups:
            group_name = entry[0] if isinstance(entry, tuple) else entry
            if group_name not in VALID_TOOL_GROUPS:
                raise ValueError(
                    f"Invalid tool group '{group_name}' in mode '{self.slug}'. "
                    f"Valid groups: {', '.join(sorted(VALID_TOOL_GROUPS))}"
                )

    def is_tool_group_enabled(self, group: str) -> bool:
        """Check if a tool group is enabled in this mode."""
        for entry in self.groups:
            entry_group = entry[0] if isinstance(entry, tuple) else entry
            if entry_group == group:
                return True
        return False

    def get_group_options(self, group: str) -> Optional[GroupOptions]:
        """Get options of the first entry for a tool group, if any."""
        for entry in self.groups:
            if isinstance(entry, tuple):
                entry_group, options = entry
                if entry_group == group:
                    return options
            elif entry == group:
                return None
        return None

    def can_edit_file(self, file_path: str) -> bool:
        """
        Check if this mode can edit a specific file based on fileRegex restrictions.

        Args:
            file_path: Path to the file to check

        Returns:
            True if the mode can edit the file, False otherwise
        """
        if not self.is_tool_group_enabled("edit"):
            return False

        edit_options = self.get_group_options("edit")
        if edit_options is None:
            return True

        return edit_options.matches_file(file_path)

    def with_overrides(self, **changes: Any) -> "ModeConfig":
        """
        Return a new ModeConfig with the given fields replaced.

        The copy is not validated again, so prompt overrides may clear a
        text field such as ``role_definition``.
        """
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise TypeError(f"Unknown ModeConfig fields: {', '.join(sorted(unknown))}")
        updated = copy.copy(self)
        for name, value in changes.items():
            if name == "groups":
                value = tuple(_normalize_group_entry(entry) for entry in value)
            object.__setattr__(updated, name, value)
        return updated

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: ModeSource = ModeSource.CUSTOM) -> "ModeConfig":
        """
        Parse a mode from the host's camelCase format.

        ```yaml
        slug: my-mode
        name: My Mode
        roleDefinition: You are...
        groups:
          - read
          - [edit, {fileRegex: "\\.py$"}]
        ```
        """
        return cls(
            slug=data["slug"],
            name=data["name"],
            role_definition=data["roleDefinition"],
            groups=tuple(data.get("groups") or ()),
            when_to_use=data.get("whenToUse"),
            description=data.get("description"),
            custom_instructions=data.get("customInstructions"),
            source=source,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the host's camelCase format, omitting empty optionals."""
        groups: List[Any] = []
        for entry in self.groups:
            if isinstance(entry, tuple):
                group_name, options = entry
                groups.append([group_name, options.to_dict()])
            else:
                groups.append(entry)

        mode_dict: Dict[str, Any] = {
            "slug": self.slug,
            "name": self.name,
            "roleDefinition": self.role_definition,
            "groups": groups,
        }
        if self.when_to_use:
            mode_dict["whenToUse"] = self.when_to_use
        if self.description:
            mode_dict["description"] = self.description
        if self.custom_instructions:
            mode_dict["customInstructions"] = self.custom_instructions
        return mode_dict


class PromptComponent(BaseModel):
    """Per-mode overrides for the prompt-facing text of a mode."""

    role_definition: Optional[str] = Field(default=None, alias="roleDefinition", description="Replacement persona text")
    when_to_use: Optional[str] = Field(default=None, alias="whenToUse", description="Replacement usage hint")
    custom_instructions: Optional[str] = Field(default=None, alias="customInstructions", description="Replacement mode instructions")

    class Config:
        populate_by_name = True
        frozen = True


# Mode slug -> prompt overrides for that mode
CustomModePrompts = Mapping[str, PromptComponent]


class ModeConfigLoader:
    """
    Loads custom mode definitions from YAML files.

    Supports loading from:
    - Global configuration (~/.roo-code/modes.yaml)
    - Project configuration (.roomodes in project root)

    Precedence: project > global. The result is a plain list meant to be
    passed as ``custom_modes`` to the registry functions.
    """

    GLOBAL_MODES_FILENAME = "modes.yaml"
    PROJECT_MODES_FILENAME = ".roomodes"

    def __init__(self, global_config_dir: Optional[Path] = None):
        """
        Initialize the mode loader.

        Args:
            global_config_dir: Path to global config directory (defaults to ~/.roo-code)
        """
        if global_config_dir is None:
            global_config_dir = Path.home() / ".roo-code"
        self.global_config_dir = global_config_dir

    def load_from_yaml(self, file_path: Path, source: ModeSource) -> List[ModeConfig]:
        """
        Load modes from a YAML file with a top-level ``customModes`` list.

        Entries that fail validation are skipped with a warning. A missing,
        unreadable or malformed file yields an empty list.
        """
        if not file_path.exists():
            return []

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            logger.error(f"Error reading modes file {file_path}: {e}")
            return []

        # Strip BOM if present
        if content.startswith("\ufeff"):
            content = content[1:]

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML file {file_path}: {e}")
            return []

        if not data or not isinstance(data, dict):
            return []

        custom_modes = data.get("customModes", [])
        if not isinstance(custom_modes, list):
            logger.warning(f"'customModes' in {file_path} is not a list, ignoring")
            return []

        modes = []
        for mode_data in custom_modes:
            try:
                modes.append(ModeConfig.from_dict(mode_data, source))
            except (ValueError, KeyError, TypeError) as e:
                logger.warning(f"Failed to load mode from {file_path}: {e}")
                continue

        logger.debug(f"Loaded {len(modes)} modes from {file_path}")
        return modes

    def load_custom_modes(self, project_root: Optional[Path] = None) -> List[ModeConfig]:
        """
        Load global and project custom modes.

        Global modes come first in file order; a project mode with the same
        slug replaces the global one in place, other project modes are
        appended.
        """
        global_path = self.global_config_dir / self.GLOBAL_MODES_FILENAME
        modes = self.load_from_yaml(global_path, ModeSource.GLOBAL)

        if project_root:
            project_path = project_root / self.PROJECT_MODES_FILENAME
            for mode in self.load_from_yaml(project_path, ModeSource.PROJECT):
                index = next((i for i, m in enumerate(modes) if m.slug == mode.slug), None)
                if index is None:
                    modes.append(mode)
                else:
                    modes[index] = mode

        return modes

    def save_to_yaml(self, modes: List[ModeConfig], file_path: Path) -> None:
        """
        Save modes to a YAML file.

        Args:
            modes: List of modes to save
            file_path: Path to save to
        """
        file_path.parent.mkdir(parents=True, exist_ok=True)

        data = {"customModes": [mode.to_dict() for mode in modes]}
        with open(file_path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)

        logger.info(f"Saved {len(modes)} modes to {file_path}")
