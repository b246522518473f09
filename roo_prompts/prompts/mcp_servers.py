"""
MCP server metadata and its XML rendering.

The host hands over a snapshot of its MCP servers (connection management
lives elsewhere); only servers that are currently connected are described
to the model.
"""

import json
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field, field_validator

from .xml import escape_xml

NO_SERVERS_MESSAGE = (
    "    <no_mcp_servers_connected_message>No MCP servers currently connected</no_mcp_servers_connected_message>"
)


class ServerStatus(str, Enum):
    """Status of an MCP server connection."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class McpToolInfo(BaseModel):
    """A tool exposed by an MCP server."""

    name: str = Field(description="Tool name")
    description: Optional[str] = Field(default=None, description="Tool description")
    input_schema: Optional[Dict[str, Any]] = Field(default=None, alias="inputSchema", description="JSON schema of the tool input")

    class Config:
        populate_by_name = True


class McpResourceTemplateInfo(BaseModel):
    """A parameterized resource exposed by an MCP server."""

    uri_template: str = Field(alias="uriTemplate", description="RFC 6570 URI template")
    name: str = Field(description="Template name")
    description: Optional[str] = Field(default=None, description="Template description")

    class Config:
        populate_by_name = True


class McpResourceInfo(BaseModel):
    """A concrete resource exposed by an MCP server."""

    uri: str = Field(description="Resource URI")
    name: str = Field(description="Resource name")
    description: Optional[str] = Field(default=None, description="Resource description")


class McpServerInfo(BaseModel):
    """Snapshot of one MCP server as known to the host."""

    name: str = Field(description="Server name")
    status: ServerStatus = Field(default=ServerStatus.DISCONNECTED, description="Connection status")
    config: Dict[str, Any] = Field(default_factory=dict, description="Launch config with 'command' and 'args'")
    tools: List[McpToolInfo] = Field(default_factory=list)
    resource_templates: List[McpResourceTemplateInfo] = Field(default_factory=list, alias="resourceTemplates")
    resources: List[McpResourceInfo] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    @field_validator("config", mode="before")
    @classmethod
    def _parse_config(cls, value: Any) -> Any:
        # Hosts usually store the launch config as a JSON string
        if isinstance(value, str):
            return json.loads(value)
        return value

    @property
    def command_line(self) -> str:
        """The command used to launch the server, with its arguments."""
        command = self.config.get("command", "")
        args = self.config.get("args")
        if isinstance(args, list):
            return f"{command} {' '.join(str(arg) for arg in args)}"
        return f"{command}"


def _tool_xml(tool: McpToolInfo) -> str:
    schema = ""
    if tool.input_schema:
        schema = (
            "    <input_schema><![CDATA[\n"
            f"{json.dumps(tool.input_schema, indent=2, ensure_ascii=False)}\n"
            "    ]]></input_schema>"
        )
    return (
        f'\n        <tool name="{escape_xml(tool.name)}">'
        f"\n            <description>{escape_xml(tool.description)}</description>"
        f"\n{schema}"
        "\n        </tool>"
    )


def _resource_template_xml(template: McpResourceTemplateInfo) -> str:
    return (
        f'\n        <resource_template uri_template="{escape_xml(template.uri_template)}" '
        f'name="{escape_xml(template.name)}">'
        f"\n            <description>{escape_xml(template.description)}</description>"
        "\n        </resource_template>"
    )


def _resource_xml(resource: McpResourceInfo) -> str:
    return (
        f'\n        <direct_resource uri="{escape_xml(resource.uri)}" name="{escape_xml(resource.name)}">'
        f"\n            <description>{escape_xml(resource.description)}</description>"
        "\n        </direct_resource>"
    )


def _server_xml(server: McpServerInfo) -> str:
    tools_xml = "\n".join(_tool_xml(tool) for tool in server.tools)
    templates_xml = "\n".join(_resource_template_xml(t) for t in server.resource_templates)
    resources_xml = "\n".join(_resource_xml(r) for r in server.resources)

    tools_block = f"<available_tools>{tools_xml}\n    </available_tools>" if tools_xml else ""
    templates_block = f"<resource_templates>{templates_xml}\n    </resource_templates>" if templates_xml else ""
    resources_block = f"<direct_resources>{resources_xml}\n    </direct_resources>" if resources_xml else ""

    return (
        f'\n    <mcp_server name="{escape_xml(server.name)}" '
        f'command_line_invocation="{escape_xml(server.command_line)}">'
        f"\n        {tools_block}"
        f"\n        {templates_block}"
        f"\n        {resources_block}"
        "\n    </mcp_server>"
    )


def generate_mcp_servers_xml(servers: Sequence[McpServerInfo]) -> str:
    """
    Render the connected MCP servers as XML for the system prompt.

    Args:
        servers: All servers known to the host; non-connected ones are skipped

    Returns:
        One ``<mcp_server>`` block per connected server, or a
        ``<no_mcp_servers_connected_message>`` line when there are none
    """
    connected = [server for server in servers if server.status == ServerStatus.CONNECTED]
    if not connected:
        return NO_SERVERS_MESSAGE
    return "\n".join(_server_xml(server) for server in connected)
