"""
System prompt assembly.

The host loads the template texts and passes them in as ``PromptTemplates``;
this module only fills in placeholders. General placeholders (paths, OS,
shell) are replaced everywhere they occur. Section placeholders are
replaced once.
"""

import logging
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from .mcp_servers import McpServerInfo, generate_mcp_servers_xml
from .xml import escape_xml, to_posix

logger = logging.getLogger(__name__)

CWD_PLACEHOLDER = "__CWD_POSIX__"
OS_NAME_PLACEHOLDER = "__OS_NAME__"
SHELL_NAME_PLACEHOLDER = "__SHELL_NAME__"
HOME_DIR_PLACEHOLDER = "__HOME_DIR_POSIX__"
MCP_SERVERS_PLACEHOLDER = "__MCP_SERVERS_LIST_XML_PLACEHOLDER__"

BROWSER_TOOL_PLACEHOLDER = "__BROWSER_TOOL_DEFINITION_PLACEHOLDER__"
BROWSER_CAPABILITIES_PLACEHOLDER = "__BROWSER_CAPABILITIES_SUMMARY_EXTENSION_PLACEHOLDER__"
BROWSER_USAGE_PLACEHOLDER = "__BROWSER_USAGE_NOTES_PLACEHOLDER__"
BROWSER_CBR_RULE_PLACEHOLDER = "__BROWSER_CBR_RULE_PLACEHOLDER__"
BROWSER_CONFIRMATION_PLACEHOLDER = "__BROWSER_ITERATIVE_CONFIRMATION_EXTENSION_PLACEHOLDER__"

VIEWPORT_WIDTH_PLACEHOLDER = "__BROWSER_VIEWPORT_WIDTH__"
VIEWPORT_HEIGHT_PLACEHOLDER = "__BROWSER_VIEWPORT_HEIGHT__"


class Viewport(BaseModel):
    """Browser viewport size in pixels."""
    width: int = Field(default=900, gt=0)
    height: int = Field(default=600, gt=0)


class BrowserSettings(BaseModel):
    """Settings of the browser tool."""
    viewport: Viewport = Field(default_factory=Viewport)


class PromptTemplates(BaseModel):
    """Template texts for the system prompt, as loaded by the host."""

    system: str = Field(description="Main system prompt template")
    browser_tool: str = Field(default="", description="Browser tool definition")
    browser_capabilities: str = Field(default="", description="Browser capabilities summary extension")
    browser_usage: str = Field(default="", description="Browser usage notes")
    browser_cbr_rule: str = Field(default="", description="Browser rule")
    browser_iterative_confirmation: str = Field(default="", description="Browser iterative confirmation extension")
    codebase_xml: str = Field(default="", description="The <codebase> document appended to the prompt")


def build_system_prompt(
    templates: PromptTemplates,
    cwd: str,
    os_name: str,
    shell: str,
    home_dir: str,
    mcp_servers: Sequence[McpServerInfo] = (),
    supports_browser_use: bool = False,
    browser_settings: Optional[BrowserSettings] = None,
) -> str:
    """
    Fill in the system prompt template.

    Args:
        templates: Template texts
        cwd: Workspace directory
        os_name: Operating system name
        shell: Default shell
        home_dir: User's home directory
        mcp_servers: MCP servers known to the host
        supports_browser_use: Whether the browser sections are included
        browser_settings: Viewport used in the browser tool definition

    Returns:
        The completed prompt followed by a newline and the codebase XML
    """
    prompt = templates.system

    prompt = prompt.replace(CWD_PLACEHOLDER, escape_xml(to_posix(cwd)))
    prompt = prompt.replace(OS_NAME_PLACEHOLDER, escape_xml(os_name))
    prompt = prompt.replace(SHELL_NAME_PLACEHOLDER, escape_xml(shell))
    prompt = prompt.replace(HOME_DIR_PLACEHOLDER, escape_xml(to_posix(home_dir)))

    prompt = prompt.replace(MCP_SERVERS_PLACEHOLDER, generate_mcp_servers_xml(mcp_servers), 1)

    if supports_browser_use:
        viewport = (browser_settings or BrowserSettings()).viewport
        browser_tool = templates.browser_tool
        browser_tool = browser_tool.replace(VIEWPORT_WIDTH_PLACEHOLDER, str(viewport.width))
        browser_tool = browser_tool.replace(VIEWPORT_HEIGHT_PLACEHOLDER, str(viewport.height))
        sections = {
            BROWSER_TOOL_PLACEHOLDER: browser_tool,
            BROWSER_CAPABILITIES_PLACEHOLDER: templates.browser_capabilities,
            BROWSER_USAGE_PLACEHOLDER: templates.browser_usage,
            BROWSER_CBR_RULE_PLACEHOLDER: templates.browser_cbr_rule,
            BROWSER_CONFIRMATION_PLACEHOLDER: templates.browser_iterative_confirmation,
        }
    else:
        sections = {
            BROWSER_TOOL_PLACEHOLDER: "",
            BROWSER_CAPABILITIES_PLACEHOLDER: "",
            BROWSER_USAGE_PLACEHOLDER: "",
            BROWSER_CBR_RULE_PLACEHOLDER: "",
            BROWSER_CONFIRMATION_PLACEHOLDER: "",
        }

    for placeholder, text in sections.items():
        prompt = prompt.replace(placeholder, text, 1)

    logger.debug(f"Built system prompt ({len(prompt)} chars, browser={supports_browser_use})")
    return f"{prompt}\n{templates.codebase_xml}"
