"""
MCP protocol handling for the Restify Documentation MCP Server
"""

import logging
from typing import Any, Dict, List, Optional

from mcp.types import GetPromptResult, Prompt, PromptArgument, PromptMessage, Resource, TextContent, Tool

from registry import ComponentRegistry

logger = logging.getLogger(__name__)


class MCPHandler:
    """Translates registry components into MCP protocol objects"""

    def __init__(self, tools: ComponentRegistry, resources: ComponentRegistry, prompts: ComponentRegistry):
        self.tools = tools
        self.resources = resources
        self.prompts = prompts

    def get_tools(self) -> List[Tool]:
        """List available documentation and generator tools"""
        return [
            Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema())
            for tool in self.tools.create_all()
        ]

    def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """Handle tool calls"""
        if not self.tools.is_allowed(name):
            logger.warning(f"Unknown tool requested: {name}")
            return [TextContent(type="text", text=f"Error: Unknown tool: {name}")]

        result = self.tools.create(name).handle(arguments)
        text = f"Error: {result.text}" if result.is_error else result.text
        return [TextContent(type="text", text=text)]

    def get_resources(self) -> List[Resource]:
        """List available documentation resources"""
        return [
            Resource(
                uri=resource.uri,
                name=resource.name,
                description=resource.description,
                mimeType=resource.mime_type,
            )
            for resource in self.resources.create_all()
        ]

    def read_resource(self, uri: str) -> str:
        """Read resource data"""
        for resource in self.resources.create_all():
            if resource.uri == uri:
                return resource.read()
        raise ValueError(f"Unknown resource: {uri}")

    def get_prompts(self) -> List[Prompt]:
        return [
            Prompt(
                name=prompt.name,
                description=prompt.description,
                arguments=[
                    PromptArgument(name=arg.name, description=arg.description, required=arg.required)
                    for arg in prompt.arguments
                ],
            )
            for prompt in self.prompts.create_all()
        ]

    def get_prompt(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> GetPromptResult:
        if not self.prompts.is_allowed(name):
            raise ValueError(f"Unknown prompt: {name}")

        prompt = self.prompts.create(name)
        text = prompt.render(arguments)
        return GetPromptResult(
            description=prompt.title,
            messages=[PromptMessage(role="user", content=TextContent(type="text", text=text))],
        )
