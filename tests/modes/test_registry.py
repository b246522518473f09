"""Tests for mode lookup, merging and prompt overrides."""

import logging

import pytest

from roo_prompts.modes.builtin_modes import BUILTIN_MODES, DEFAULT_MODE_SLUG, get_builtin_mode
from roo_prompts.modes.config import GroupOptions, ModeConfig, ModeSource, PromptComponent
from roo_prompts.modes.exceptions import ModeNotFoundError
from roo_prompts.modes.registry import (
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
from roo_prompts.tools import ToolGroupConfig


@pytest.fixture
def custom_code_mode():
    return ModeConfig(
        slug="code",
        name="Custom Code",
        role_definition="You are a custom coder.",
        groups=["read"],
        source=ModeSource.CUSTOM,
    )


@pytest.fixture
def reviewer_mode():
    return ModeConfig(
        slug="reviewer",
        name="Reviewer",
        role_definition="You review code.",
        groups=["read"],
        custom_instructions="Point out bugs first.",
        source=ModeSource.CUSTOM,
    )


class TestGroupHelpers:
    """Test group entry helpers."""

    def test_group_name_and_options(self):
        """Test reading names and options from both entry forms."""
        options = GroupOptions(file_regex=r"\.md$")
        assert get_group_name("read") == "read"
        assert get_group_name(("edit", options)) == "edit"
        assert get_group_options("read") is None
        assert get_group_options(("edit", options)) is options

    def test_tools_for_mode_include_always_available(self):
        """Test tool listing covers group tools and always-available tools."""
        tools = get_tools_for_mode(["read", "command"])

        assert "read_file" in tools
        assert "execute_command" in tools
        assert "attempt_completion" in tools
        assert "write_to_file" not in tools
        assert len(tools) == len(set(tools))

    def test_tools_for_mode_without_groups(self):
        """Test a mode with no groups still gets the always-available tools."""
        tools = get_tools_for_mode([])
        assert "switch_mode" in tools
        assert "read_file" not in tools

    def test_tools_for_mode_adds_always_available_groups(self):
        """Test flagged groups contribute their tools without being listed."""
        tool_groups = {
            "read": ToolGroupConfig(tools=frozenset({"peek"})),
            "extra": ToolGroupConfig(tools=frozenset({"ping", "pong"}), always_available=True),
        }
        tools = get_tools_for_mode(["read"], tool_groups=tool_groups, always_available=frozenset())

        assert tools == ["peek", "ping", "pong"]
        assert get_tools_for_mode([], tool_groups=tool_groups, always_available=frozenset()) == ["ping", "pong"]


class TestResolve:
    """Test resolving slugs to modes."""

    def test_builtin_lookup(self):
        """Test finding a built-in mode."""
        mode = get_mode_by_slug("architect")
        assert mode is not None
        assert mode.name == "🏗️ Architect"

    def test_custom_mode_takes_precedence(self, custom_code_mode):
        """Test a custom mode wins over the built-in with the same slug."""
        assert get_mode_by_slug("code", [custom_code_mode]) is custom_code_mode

    def test_unknown_slug_returns_none(self):
        """Test resolving an unknown slug is not an error."""
        assert get_mode_by_slug("nonexistent") is None
        assert get_mode_by_slug("nonexistent", []) is None

    def test_get_mode_config_raises_for_unknown_slug(self):
        """Test the strict lookup raises ModeNotFoundError."""
        with pytest.raises(ModeNotFoundError, match="No mode found for slug: nonexistent") as exc_info:
            get_mode_config("nonexistent")
        assert exc_info.value.slug == "nonexistent"

    def test_get_mode_config_returns_custom_mode(self, reviewer_mode):
        """Test the strict lookup also sees custom modes."""
        assert get_mode_config("reviewer", [reviewer_mode]) is reviewer_mode

    def test_find_mode_by_slug_has_no_fallback(self):
        """Test find_mode_by_slug only searches the given list."""
        assert find_mode_by_slug("code", []) is None
        assert find_mode_by_slug("code", None) is None
        assert find_mode_by_slug("code", BUILTIN_MODES) is get_builtin_mode("code")

    def test_is_custom_mode(self, custom_code_mode):
        """Test detecting custom modes and overrides."""
        assert is_custom_mode("code", [custom_code_mode])
        assert not is_custom_mode("ask", [custom_code_mode])
        assert not is_custom_mode("code")


class TestMergeAll:
    """Test merging built-in and custom modes."""

    def test_no_custom_modes_returns_builtin_order(self):
        """Test the merged list equals the built-in list."""
        modes = get_all_modes()
        assert modes == list(BUILTIN_MODES)
        assert modes[0].slug == DEFAULT_MODE_SLUG

    def test_override_keeps_builtin_position(self, custom_code_mode):
        """Test a custom override replaces the built-in entry in place."""
        builtin_slugs = [m.slug for m in BUILTIN_MODES]
        modes = get_all_modes([custom_code_mode])

        assert [m.slug for m in modes] == builtin_slugs
        assert modes[builtin_slugs.index("code")].name == "Custom Code"

    def test_new_mode_is_appended(self, reviewer_mode, custom_code_mode):
        """Test a new slug is appended after the built-in modes."""
        modes = get_all_modes([reviewer_mode, custom_code_mode])

        assert [m.slug for m in modes] == [m.slug for m in BUILTIN_MODES] + ["reviewer"]
        assert modes[-1] is reviewer_mode

    def test_merge_does_not_modify_builtin_table(self, custom_code_mode):
        """Test merging leaves the built-in table untouched."""
        get_all_modes([custom_code_mode])
        assert get_builtin_mode("code").name == "💻 Code"


class TestModeSelection:
    """Test get_mode_selection precedence."""

    def test_prompt_component_over_builtin(self):
        """Test a prompt component beats the built-in mode."""
        role, instructions = get_mode_selection(
            "ask", PromptComponent(role_definition="R", custom_instructions="I")
        )
        assert (role, instructions) == ("R", "I")

    def test_custom_mode_over_prompt_component(self, reviewer_mode):
        """Test a custom mode beats a prompt component."""
        role, instructions = get_mode_selection(
            "reviewer", PromptComponent(role_definition="R"), [reviewer_mode]
        )
        assert role == "You review code."
        assert instructions == "Point out bugs first."

    def test_unknown_slug(self):
        """Test an unknown slug yields empty strings."""
        assert get_mode_selection("nonexistent") == ("", "")


class TestFullModeDetails:
    """Test get_full_mode_details."""

    def test_no_overrides_reproduces_builtin(self):
        """Test the no-override path returns the built-in mode's fields exactly."""
        for mode in BUILTIN_MODES:
            assert get_full_mode_details(mode.slug) == mode

    def test_prompt_overrides_replace_fields(self):
        """Test each override field replaces the base field."""
        details = get_full_mode_details(
            "debug",
            custom_mode_prompts={
                "debug": {"roleDefinition": "New role", "whenToUse": "Always", "customInstructions": "New rules"}
            },
        )
        assert details.role_definition == "New role"
        assert details.when_to_use == "Always"
        assert details.custom_instructions == "New rules"
        assert details.groups == get_builtin_mode("debug").groups

    def test_empty_override_falls_back_to_base(self):
        """Test empty override values keep the base fields."""
        details = get_full_mode_details(
            "ask", custom_mode_prompts={"ask": PromptComponent(role_definition="", custom_instructions=None)}
        )
        assert details.role_definition == get_builtin_mode("ask").role_definition
        assert details.custom_instructions == get_builtin_mode("ask").custom_instructions

    def test_overrides_for_other_slugs_are_ignored(self):
        """Test overrides only apply to their own slug."""
        details = get_full_mode_details("code", custom_mode_prompts={"ask": {"roleDefinition": "X"}})
        assert details == get_builtin_mode("code")

    def test_custom_mode_is_base(self, reviewer_mode):
        """Test a custom mode is used as the base."""
        details = get_full_mode_details("reviewer", [reviewer_mode])
        assert details == reviewer_mode

    def test_unknown_slug_falls_back_to_default(self, caplog):
        """Test an unknown slug falls back to the default mode with a warning."""
        with caplog.at_level(logging.WARNING):
            details = get_full_mode_details("nonexistent")
        assert details == get_builtin_mode(DEFAULT_MODE_SLUG)
        assert "nonexistent" in caplog.text

    def test_fragments_ignored_without_cwd(self):
        """Test fragments are not composed when no cwd is given."""
        details = get_full_mode_details(
            "ask", options=ModeDetailsOptions(global_custom_instructions="Global rule")
        )
        assert details.custom_instructions == get_builtin_mode("ask").custom_instructions

    def test_fragments_composed_with_cwd(self):
        """Test fragments are joined in order when cwd is given."""
        details = get_full_mode_details(
            "ask",
            custom_mode_prompts={"ask": {"customInstructions": "Mode rule"}},
            options=ModeDetailsOptions(
                cwd="/project",
                global_custom_instructions="Global rule",
                project_rules="Project rule",
                ignore_instructions="",
            ),
        )
        assert details.custom_instructions == "Mode rule\n\nGlobal rule\n\nProject rule"


class TestComposeCustomInstructions:
    """Test compose_custom_instructions."""

    def test_order_and_separators(self):
        """Test the fixed order and blank-line separators."""
        text = compose_custom_instructions(
            "Base",
            ModeDetailsOptions(
                cwd="/p",
                global_custom_instructions="Global",
                project_rules="Project",
                ignore_instructions="Ignore",
                language="fr",
            ),
        )
        parts = text.split("\n\n")
        assert parts[:4] == ["Base", "Global", "Project", "Ignore"]
        assert parts[4:] == ["Language Preference:\nYou should always speak and think in the \"fr\" language."]

    def test_empty_fragments_skipped(self):
        """Test empty and whitespace-only fragments are skipped."""
        text = compose_custom_instructions(
            "", ModeDetailsOptions(cwd="/p", global_custom_instructions="  ", project_rules="Project")
        )
        assert text == "Project"


class TestAllModesWithPrompts:
    """Test get_all_modes_with_prompts."""

    def test_applies_overrides_to_merged_modes(self, reviewer_mode):
        """Test overrides apply across built-in and custom modes."""
        modes = get_all_modes_with_prompts(
            [reviewer_mode],
            {"code": {"roleDefinition": "Override"}, "reviewer": {"customInstructions": ""}},
        )
        by_slug = {m.slug: m for m in modes}

        assert by_slug["code"].role_definition == "Override"
        # An explicit empty string still counts as an override here
        assert by_slug["reviewer"].custom_instructions == ""
        assert by_slug["ask"] == get_builtin_mode("ask")

    def test_empty_role_override_is_applied(self):
        """Test a cleared role definition comes back as an empty string."""
        modes = get_all_modes_with_prompts(None, {"code": {"roleDefinition": ""}})
        code = next(m for m in modes if m.slug == "code")

        assert code.role_definition == ""
        assert code.groups == get_builtin_mode("code").groups
        assert get_builtin_mode("code").role_definition


class TestSafeGetters:
    """Test the lenient field getters."""

    def test_known_slug(self):
        """Test reading fields of a built-in mode."""
        ask = get_builtin_mode("ask")
        assert get_role_definition("ask") == ask.role_definition
        assert get_when_to_use("ask") == ask.when_to_use
        assert get_custom_instructions("ask") == ask.custom_instructions

    def test_missing_optional_field(self):
        """Test a mode without custom instructions yields ""."""
        assert get_custom_instructions("code") == ""

    def test_unknown_slug(self, caplog):
        """Test unknown slugs yield "" and a warning."""
        with caplog.at_level(logging.WARNING):
            assert get_role_definition("nonexistent") == ""
            assert get_when_to_use("nonexistent") == ""
            assert get_custom_instructions("nonexistent") == ""
        assert "No mode found for slug: nonexistent" in caplog.text
