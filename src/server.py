"""
Main facade for the Restify Documentation MCP Server
Wires every component together with constructor injection
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from cache_store import create_store
from code_examples_tool import GetCodeExamples
from config import ConfigurationManager
from doc_cache import DocCache
from doc_indexer import DocIndexer
from doc_parser import DocParser
from generate_action_tool import GenerateAction
from generate_getter_tool import GenerateGetter
from generate_match_filter_tool import GenerateMatchFilter
from generate_repository_tool import GenerateRepository
from mcp_handler import MCPHandler
from navigate_docs_tool import NavigateDocs
from prompts import RestifyHowTo, RestifyTroubleshooting
from registry import ComponentRegistry
from resources import RestifyApiReference, RestifyDocumentation
from search_docs_tool import SearchRestifyDocs

logger = logging.getLogger(__name__)

DOCUMENTATION_TOOLS = (SearchRestifyDocs, GetCodeExamples, NavigateDocs)
GENERATOR_TOOLS = (GenerateRepository, GenerateAction, GenerateGetter, GenerateMatchFilter)
RESOURCES = (RestifyDocumentation, RestifyApiReference)
PROMPTS = (RestifyHowTo, RestifyTroubleshooting)


class RestifyDocsServer:
    """Main facade coordinating all server components"""

    def __init__(self, project_root: Optional[str] = None, config_path: Optional[str] = None):
        if project_root is None:
            project_root = os.environ.get("RESTIFY_DOCS_PROJECT_ROOT", os.getcwd())
        self.project_root = Path(project_root)

        self.config_manager = ConfigurationManager(
            config_path=self._get_config_path(config_path), project_root=self.project_root
        )
        config = self.config_manager.config

        self.cache = DocCache(create_store(config, self.project_root), config)
        self.parser = DocParser(self.cache, config)
        self.indexer = DocIndexer(self.parser, self.cache, config)

        self.tools = self._build_tools()
        self.resources = self._build_registry("resource", RESOURCES, "mcp.resources")
        self.prompts = self._build_registry("prompt", PROMPTS, "mcp.prompts")
        self.mcp_handler = MCPHandler(self.tools, self.resources, self.prompts)

        logger.info(
            f"Restify docs server ready for {self.project_root} "
            f"({len(self.tools.names())} tools, {len(self.resources.names())} resources, "
            f"{len(self.prompts.names())} prompts)"
        )

    def _get_config_path(self, explicit: Optional[str]) -> Optional[Path]:
        """Get the configuration file path"""
        explicit = explicit or os.environ.get("RESTIFY_DOCS_CONFIG")
        if explicit:
            return Path(explicit)

        server_dir = Path(__file__).parent.parent
        config_path = server_dir / "config" / "server_config.yaml"
        return config_path if config_path.exists() else None

    def _build_tools(self) -> ComponentRegistry:
        registry = ComponentRegistry("tool")
        for tool_class in DOCUMENTATION_TOOLS:
            registry.register(tool_class.name, lambda cls=tool_class: cls(self.config_manager, self.indexer))
        for tool_class in GENERATOR_TOOLS:
            registry.register(tool_class.name, lambda cls=tool_class: cls(self.config_manager))
        self._apply_filters(registry, "mcp.tools")
        return registry

    def _build_registry(self, kind: str, classes, filter_key: str) -> ComponentRegistry:
        registry = ComponentRegistry(kind)
        for component_class in classes:
            registry.register(
                component_class.name, lambda cls=component_class: cls(self.config_manager, self.indexer)
            )
        self._apply_filters(registry, filter_key)
        return registry

    def _apply_filters(self, registry: ComponentRegistry, key: str):
        registry.apply_filters(
            self.config_manager.get(f"{key}.include", []),
            self.config_manager.get(f"{key}.exclude", []),
        )

    # MCP protocol methods
    def get_tools(self):
        """Get MCP tools"""
        return self.mcp_handler.get_tools()

    def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]):
        """Call MCP tool"""
        return self.mcp_handler.call_tool(name, arguments)

    def get_resources(self):
        """Get MCP resources"""
        return self.mcp_handler.get_resources()

    def read_resource(self, uri: str):
        """Read MCP resource"""
        return self.mcp_handler.read_resource(uri)

    def get_prompts(self):
        return self.mcp_handler.get_prompts()

    def get_prompt(self, name: str, arguments: Optional[Dict[str, Any]] = None):
        return self.mcp_handler.get_prompt(name, arguments)

    def clear_cache(self):
        """Drop every cached parse and index entry"""
        return self.cache.flush()
