"""
Mode lookup and merging.

Pure helpers that resolve a mode slug against the built-in modes and a list
of custom modes supplied by the caller. Nothing here keeps state between
calls: custom modes and prompt overrides are passed in every time.

Precedence contract:
- A custom mode replaces the built-in mode with the same slug.
- In merged listings it keeps the built-in mode's position; new slugs are
  appended in the order given.
- Prompt overrides (``PromptComponent``) replace individual text fields of
  the resolved mode and never touch its groups.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..tools import ALWAYS_AVAILABLE_TOOLS, TOOL_GROUPS, ToolGroupConfig
from ..prompts.sections import get_language_instructions
from .builtin_modes import BUILTIN_MODES, DEFAULT_MODE_SLUG
from .config import GroupEntry, GroupOptions, ModeConfig, PromptComponent, ToolGroup
from .exceptions import ModeNotFoundError

logger = logging.getLogger(__name__)


def get_group_name(group: GroupEntry) -> ToolGroup:
    """Extract the group name regardless of entry format."""
    if isinstance(group, str):
        return group
    return group[0]


def get_group_options(group: GroupEntry) -> Optional[GroupOptions]:
    """Get the options of a group entry if it has any."""
    return group[1] if isinstance(group, tuple) else None


def get_tools_for_mode(
    groups: Iterable[GroupEntry],
    tool_groups: Mapping[str, ToolGroupConfig] = TOOL_GROUPS,
    always_available: Iterable[str] = ALWAYS_AVAILABLE_TOOLS,
) -> List[str]:
    """
    List every tool a mode's groups grant, plus the always-available tools.

    Groups flagged ``always_available`` contribute their tools even when the
    mode does not list them. Tools are returned in first-seen order, sorted
    within each group.
    """
    tools: List[str] = []

    def add(names: Iterable[str]) -> None:
        for tool in sorted(names):
            if tool not in tools:
                tools.append(tool)

    for group in groups:
        add(tool_groups[get_group_name(group)].tools)

    for config in tool_groups.values():
        if config.always_available:
            add(config.tools)

    add(always_available)
    return tools


def find_mode_by_slug(slug: str, modes: Optional[Sequence[ModeConfig]]) -> Optional[ModeConfig]:
    """Find a mode by slug in the given list only, without built-in fallback."""
    if not modes:
        return None
    for mode in modes:
        if mode.slug == slug:
            return mode
    return None


def get_mode_by_slug(
    slug: str,
    custom_modes: Optional[Sequence[ModeConfig]] = None,
    builtin_modes: Sequence[ModeConfig] = BUILTIN_MODES,
) -> Optional[ModeConfig]:
    """
    Resolve a slug to a mode.

    Custom modes are checked first, then built-in modes.

    Returns:
        The matching ModeConfig, or None if neither list has the slug
    """
    custom_mode = find_mode_by_slug(slug, custom_modes)
    if custom_mode:
        return custom_mode
    return find_mode_by_slug(slug, builtin_modes)


def get_mode_config(
    slug: str,
    custom_modes: Optional[Sequence[ModeConfig]] = None,
    builtin_modes: Sequence[ModeConfig] = BUILTIN_MODES,
) -> ModeConfig:
    """
    Resolve a slug to a mode or fail.

    Raises:
        ModeNotFoundError: If neither custom nor built-in modes have the slug
    """
    mode = get_mode_by_slug(slug, custom_modes, builtin_modes)
    if not mode:
        raise ModeNotFoundError(slug)
    return mode


def get_all_modes(
    custom_modes: Optional[Sequence[ModeConfig]] = None,
    builtin_modes: Sequence[ModeConfig] = BUILTIN_MODES,
) -> List[ModeConfig]:
    """
    Get all available modes, with custom modes overriding built-in modes.

    The result starts from the built-in order. A custom mode whose slug is
    already present replaces that entry in place; any other custom mode is
    appended.
    """
    all_modes = list(builtin_modes)
    if not custom_modes:
        return all_modes

    for custom_mode in custom_modes:
        index = next(
            (i for i, mode in enumerate(all_modes) if mode.slug == custom_mode.slug),
            None,
        )
        if index is None:
            all_modes.append(custom_mode)
        else:
            all_modes[index] = custom_mode

    return all_modes


def is_custom_mode(slug: str, custom_modes: Optional[Sequence[ModeConfig]] = None) -> bool:
    """Check if a mode is custom or an override of a built-in mode."""
    return find_mode_by_slug(slug, custom_modes) is not None


def _as_prompt_component(value: Any) -> Optional[PromptComponent]:
    if value is None or isinstance(value, PromptComponent):
        return value
    return PromptComponent.model_validate(value)


def get_mode_selection(
    slug: str,
    prompt_component: Optional[PromptComponent] = None,
    custom_modes: Optional[Sequence[ModeConfig]] = None,
) -> Tuple[str, str]:
    """
    Pick the role definition and base instructions for a slug.

    A custom mode wins over a prompt component, which wins over the
    built-in mode. Missing values come back as empty strings.

    Returns:
        Tuple of (role_definition, base_instructions)
    """
    mode_to_use = find_mode_by_slug(slug, custom_modes)
    if mode_to_use is None:
        mode_to_use = _as_prompt_component(prompt_component)
    if mode_to_use is None:
        mode_to_use = find_mode_by_slug(slug, BUILTIN_MODES)

    if mode_to_use is None:
        return "", ""
    return mode_to_use.role_definition or "", mode_to_use.custom_instructions or ""


@dataclass
class ModeDetailsOptions:
    """
    Context for composing a mode's full custom instructions.

    Instruction fragments are only joined in when ``cwd`` is set.
    """

    cwd: Optional[str] = None
    global_custom_instructions: str = ""
    project_rules: str = ""
    ignore_instructions: str = ""
    language: Optional[str] = None


def compose_custom_instructions(base_instructions: str, options: ModeDetailsOptions) -> str:
    """
    Join a mode's instructions with the externally supplied fragments.

    Order: mode instructions, global instructions, project rules, ignore-file
    rules, preferred-language notice. Empty fragments are skipped and the
    rest are separated by a blank line.
    """
    fragments = [
        base_instructions,
        options.global_custom_instructions,
        options.project_rules,
        options.ignore_instructions,
        get_language_instructions(options.language) if options.language else "",
    ]
    return "\n\n".join(fragment.strip() for fragment in fragments if fragment and fragment.strip())


def get_full_mode_details(
    slug: str,
    custom_modes: Optional[Sequence[ModeConfig]] = None,
    custom_mode_prompts: Optional[Mapping[str, Any]] = None,
    options: Optional[ModeDetailsOptions] = None,
) -> ModeConfig:
    """
    Get complete mode details with all overrides applied.

    Args:
        slug: Mode slug; an unknown slug falls back to the default mode
        custom_modes: Custom modes that take precedence over built-in ones
        custom_mode_prompts: Slug -> PromptComponent (or equivalent dict)
        options: Instruction fragments to compose in when ``cwd`` is set

    Returns:
        A new ModeConfig. Without overrides and without ``cwd`` it equals
        the resolved base mode.
    """
    base_mode = get_mode_by_slug(slug, custom_modes)
    if base_mode is None:
        logger.warning(f"No mode found for slug: {slug}, falling back to '{DEFAULT_MODE_SLUG}'")
        base_mode = get_mode_config(DEFAULT_MODE_SLUG)

    prompt_component = _as_prompt_component((custom_mode_prompts or {}).get(slug))
    if prompt_component is None:
        prompt_component = PromptComponent()

    role_definition = prompt_component.role_definition or base_mode.role_definition
    when_to_use = prompt_component.when_to_use or base_mode.when_to_use
    custom_instructions = prompt_component.custom_instructions or base_mode.custom_instructions

    if options is not None and options.cwd:
        custom_instructions = compose_custom_instructions(custom_instructions or "", options)

    return base_mode.with_overrides(
        role_definition=role_definition,
        when_to_use=when_to_use,
        custom_instructions=custom_instructions,
    )


def get_all_modes_with_prompts(
    custom_modes: Optional[Sequence[ModeConfig]] = None,
    custom_mode_prompts: Optional[Mapping[str, Any]] = None,
) -> List[ModeConfig]:
    """Get all merged modes with any non-None prompt overrides applied."""
    custom_mode_prompts = custom_mode_prompts or {}
    result = []
    for mode in get_all_modes(custom_modes):
        component = _as_prompt_component(custom_mode_prompts.get(mode.slug))
        if component is None:
            result.append(mode)
            continue
        result.append(
            mode.with_overrides(
                role_definition=(
                    component.role_definition
                    if component.role_definition is not None
                    else mode.role_definition
                ),
                when_to_use=component.when_to_use if component.when_to_use is not None else mode.when_to_use,
                custom_instructions=(
                    component.custom_instructions
                    if component.custom_instructions is not None
                    else mode.custom_instructions
                ),
            )
        )
    return result


def get_role_definition(slug: str, custom_modes: Optional[Sequence[ModeConfig]] = None) -> str:
    """Safely get a mode's role definition; "" for unknown slugs."""
    mode = get_mode_by_slug(slug, custom_modes)
    if not mode:
        logger.warning(f"No mode found for slug: {slug}")
        return ""
    return mode.role_definition


def get_when_to_use(slug: str, custom_modes: Optional[Sequence[ModeConfig]] = None) -> str:
    """Safely get a mode's usage hint; "" for unknown slugs."""
    mode = get_mode_by_slug(slug, custom_modes)
    if not mode:
        logger.warning(f"No mode found for slug: {slug}")
        return ""
    return mode.when_to_use or ""


def get_custom_instructions(slug: str, custom_modes: Optional[Sequence[ModeConfig]] = None) -> str:
    """Safely get a mode's custom instructions; "" for unknown slugs."""
    mode = get_mode_by_slug(slug, custom_modes)
    if not mode:
        logger.warning(f"No mode found for slug: {slug}")
        return ""
    return mode.custom_instructions or ""
