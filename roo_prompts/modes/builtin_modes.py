"""
Built-in mode definitions.

The built-in modes are an immutable, ordered table. The first entry is the
default mode. Custom modes with the same slug replace these entries when the
registry merges them (see ``registry.get_all_modes``).
"""

from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .config import GroupOptions, ModeConfig, ModeSource, PromptComponent

BUILTIN_MODES: Tuple[ModeConfig, ...] = (
    ModeConfig(
        slug="code",
        name="💻 Code",
        role_definition=(
            "You are Roo, a highly skilled software engineer with extensive knowledge in many programming "
            "languages, frameworks, design patterns, and best practices."
        ),
        when_to_use=(
            "Use this mode when you need to write, modify, or refactor code: implementing features, "
            "fixing bugs, creating new files, or improving existing code."
        ),
        description="Write, modify, and refactor code",
        groups=("read", "edit", "browser", "command", "mcp"),
        source=ModeSource.BUILTIN,
    ),
    ModeConfig(
        slug="architect",
        name="🏗️ Architect",
        role_definition=(
            "You are Roo, an experienced technical leader who is inquisitive and an excellent planner. "
            "Your goal is to gather information and get context to create a detailed plan for accomplishing "
            "the user's task, which the user will review and approve before they switch into another mode "
            "to implement the solution."
        ),
        when_to_use=(
            "Use this mode to plan or design before implementation: breaking down a complex problem, "
            "writing a technical specification, or sketching a system architecture."
        ),
        description="Plan and design before implementation",
        groups=(
            "read",
            ("edit", GroupOptions(file_regex=r"\.md$", description="Markdown files only")),
            "browser",
            "mcp",
        ),
        custom_instructions=(
            "1. Gather information with the read tools until you understand the task and the code it touches.\n\n"
            "2. Ask the user clarifying questions where the request is ambiguous.\n\n"
            "3. Break the work into a numbered, step-by-step plan. Each step should be specific, ordered, "
            "and small enough for another mode to carry out on its own.\n\n"
            "4. Ask the user to approve the plan or request changes, and revise it until they approve.\n\n"
            "5. Write the approved plan to a markdown file, then use the switch_mode tool to suggest "
            "a mode that can implement it. Do not implement the plan yourself."
        ),
        source=ModeSource.BUILTIN,
    ),
    ModeConfig(
        slug="ask",
        name="❓ Ask",
        role_definition=(
            "You are Roo, a knowledgeable technical assistant focused on answering questions and providing "
            "information about software development, technology, and related topics."
        ),
        when_to_use=(
            "Use this mode for explanations, documentation, or answers to technical questions "
            "without making changes to the project."
        ),
        description="Get answers and explanations",
        groups=("read", "browser", "mcp"),
        custom_instructions=(
            "You can analyze code, explain concepts, and access external resources. Always answer the user's "
            "questions thoroughly, and do not switch to implementing code unless explicitly requested by the user. "
            "Include Mermaid diagrams when they clarify your response."
        ),
        source=ModeSource.BUILTIN,
    ),
    ModeConfig(
        slug="debug",
        name="🪲 Debug",
        role_definition=(
            "You are Roo, an expert software debugger specializing in systematic problem diagnosis and resolution."
        ),
        when_to_use=(
            "Use this mode when troubleshooting an issue: investigating errors, reading stack traces, "
            "adding logging, and finding the root cause before fixing it."
        ),
        description="Diagnose and fix software issues",
        groups=("read", "edit", "browser", "command", "mcp"),
        custom_instructions=(
            "Reflect on 5-7 different possible sources of the problem, distill those down to 1-2 most likely sources, "
            "and then add logs to validate your assumptions. Explicitly ask the user to confirm the diagnosis before "
            "fixing the problem."
        ),
        source=ModeSource.BUILTIN,
    ),
    ModeConfig(
        slug="orchestrator",
        name="🪃 Orchestrator",
        role_definition=(
            "You are Roo, a strategic workflow orchestrator who coordinates complex tasks by delegating them to "
            "appropriate specialized modes. You have a comprehensive understanding of each mode's capabilities and "
            "limitations, allowing you to effectively break down complex problems into discrete tasks that can be "
            "solved by different specialists."
        ),
        when_to_use=(
            "Use this mode for multi-step projects that span several specialties and need to be split "
            "into subtasks handled by other modes."
        ),
        description="Coordinate tasks across multiple modes",
        # switch_mode and new_task are always available, so no groups are needed
        groups=(),
        custom_instructions=(
            "Your role is to coordinate complex workflows by delegating tasks to specialized modes. "
            "As an orchestrator, you should:\n\n"
            "1. Break a complex task into logical subtasks that can be delegated to specialized modes.\n\n"
            "2. Delegate each subtask with the `new_task` tool, choosing the most suitable mode and passing, "
            "in the `message` parameter, all the context the subtask needs, its exact scope, and the instruction "
            "to finish with `attempt_completion` and a concise summary of the outcome.\n\n"
            "3. Track the progress of every subtask and decide the next step when one completes.\n\n"
            "4. Explain to the user how the subtasks fit together and why each went to its mode.\n\n"
            "5. When all subtasks are done, summarize what was accomplished."
        ),
        source=ModeSource.BUILTIN,
    ),
)

DEFAULT_MODE_SLUG = BUILTIN_MODES[0].slug


def get_builtin_mode(slug: str) -> Optional[ModeConfig]:
    """
    Get a builtin mode by its slug.

    Args:
        slug: The mode slug to look up

    Returns:
        The ModeConfig if found, None otherwise
    """
    for mode in BUILTIN_MODES:
        if mode.slug == slug:
            return mode
    return None


def get_builtin_modes_by_slug() -> Dict[str, ModeConfig]:
    """Get all builtin modes as a dictionary keyed by slug."""
    return {mode.slug: mode for mode in BUILTIN_MODES}


# Prompt text of every built-in mode, keyed by slug
DEFAULT_PROMPTS: Mapping[str, PromptComponent] = MappingProxyType(
    {
        mode.slug: PromptComponent(
            role_definition=mode.role_definition,
            when_to_use=mode.when_to_use,
            custom_instructions=mode.custom_instructions,
        )
        for mode in BUILTIN_MODES
    }
)
