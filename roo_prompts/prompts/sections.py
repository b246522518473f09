"""
Prompt sections built from host-supplied values.

Each function returns a block of prompt text. Values such as the OS name,
the shell or the home directory are passed in by the caller.
"""

from typing import Optional

from .xml import to_posix


def get_capabilities_section(
    cwd: str,
    supports_computer_use: bool,
    has_mcp: bool = False,
    supports_diff: bool = False,
) -> str:
    """Describe what the assistant can do with its tools."""
    browser = ", use the browser" if supports_computer_use else ""
    edit_tools = "`apply_diff` or `write_to_file`" if supports_diff else "`write_to_file`"

    section = f"""====

CAPABILITIES

- You have access to tools that let you execute CLI commands on the user's computer{browser}, write and edit files, and ask follow-up questions. These tools help you effectively accomplish a wide range of tasks, such as writing code, making edits or improvements to existing files, and performing system operations.
- All necessary information about the project's codebase is provided to you directly in the prompt within a special XML structure: `<codebase>`. It contains a list of relevant files, their relative_path, and their full content with line numbers inside 'CDATA' blocks.
- To find specific code, text, or patterns, you must thoroughly analyze the content of each `<file>` within the `<codebase>` XML document. This replaces the need for any file search tools.
- To get an overview of the project's structure, code definitions and the relationships between different parts of the code, analyze the file paths and their content as provided in the `<codebase>` XML document.
	- For example, when asked to make edits or improvements, first examine the file list and structure within the `<codebase>` document, then analyze the content of the relevant `<file>` tags and use tools like {edit_tools} to apply the changes. If you refactored code, re-examine the `<codebase>` document to identify and update all affected files.
- You can use the execute_command tool to run commands on the user's computer whenever you feel it can help accomplish the user's task. When you need to execute a CLI command, you must provide a clear explanation of what the command does. Each command you execute is run in a new terminal instance in {to_posix(cwd)}."""

    if supports_computer_use:
        section += (
            "\n- You can use the browser_action tool to interact with websites (including html files and locally "
            "running development servers) through a Puppeteer-controlled browser when you feel it is necessary in "
            "accomplishing the user's task. You can launch a browser, navigate to pages, interact with elements "
            "through clicks and keyboard input, and capture the results through screenshots and console logs."
        )

    if has_mcp:
        section += (
            "\n- You have access to MCP servers that may provide additional tools and resources. Each server may "
            "provide different capabilities that you can use to accomplish tasks more effectively.\n"
        )

    return section


def get_system_info_section(cwd: str, os_name: str, shell: str, home_dir: str) -> str:
    """Describe the user's environment."""
    return f"""====

SYSTEM INFORMATION

Operating System: {os_name}
Default Shell: {shell}
Home Directory: {to_posix(home_dir)}
Current Workspace Directory: {to_posix(cwd)}

The Current Workspace Directory is the active VS Code project directory, and is therefore the default directory for all tool operations. New terminals will be created in the current workspace directory, however if you change directories in a terminal it will then have a different working directory; changing directories in a terminal does not modify the workspace directory, because you do not have access to change the workspace directory. Your knowledge of the project's file system is strictly limited to the structure and content provided in the `<codebase>` XML document. All necessary file information is already available to you in the prompt."""


def get_language_instructions(language: str) -> str:
    """Notice asking the model to answer in the user's preferred language."""
    return (
        "Language Preference:\n"
        f'You should always speak and think in the "{language}" language.'
    )


def add_user_instructions(
    settings_custom_instructions: Optional[str] = None,
    global_rules_file_instructions: Optional[str] = None,
    local_rules_file_instructions: Optional[str] = None,
    local_cursor_rules_file_instructions: Optional[str] = None,
    local_cursor_rules_dir_instructions: Optional[str] = None,
    local_windsurf_rules_file_instructions: Optional[str] = None,
    ignore_instructions: Optional[str] = None,
    preferred_language_instructions: Optional[str] = None,
) -> str:
    """
    Build the USER'S CUSTOM INSTRUCTIONS section.

    Fragments are joined in a fixed order (preferred language first, ignore
    rules last) with a blank line between them; empty ones are skipped.
    Returns "" when every fragment is empty.
    """
    fragments = [
        preferred_language_instructions,
        settings_custom_instructions,
        global_rules_file_instructions,
        local_rules_file_instructions,
        local_cursor_rules_file_instructions,
        local_cursor_rules_dir_instructions,
        local_windsurf_rules_file_instructions,
        ignore_instructions,
    ]
    custom_instructions = "\n\n".join(fragment for fragment in fragments if fragment)
    if not custom_instructions:
        return ""

    return f"""====

USER'S CUSTOM INSTRUCTIONS

The following additional instructions are provided by the user, and should be followed to the best of your ability without interfering with the TOOL USE guidelines.

{custom_instructions.strip()}"""
