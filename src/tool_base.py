"""
Base classes shared by every MCP tool
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ValidationError

from config import ConfigurationManager
from doc_indexer import DocIndexer
from models import ToolResult
import project_scanner
from project_scanner import ArtifactLocation, ModelInfo

logger = logging.getLogger(__name__)


def format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into one line per offending field"""
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "arguments"
        messages.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "Invalid arguments - " + "; ".join(messages)


class DocsTool:
    """A named operation with a pydantic argument model"""

    name: str = ""
    description: str = ""
    params_model: Type[BaseModel] = BaseModel
    failure_prefix: str = "Tool failed"

    def __init__(self, config_manager: ConfigurationManager):
        self.config_manager = config_manager

    @property
    def config(self) -> Dict[str, Any]:
        return self.config_manager.config

    def input_schema(self) -> Dict[str, Any]:
        return self.params_model.model_json_schema()

    def handle(self, arguments: Optional[Dict[str, Any]]) -> ToolResult:
        try:
            params = self.params_model.model_validate(arguments or {})
        except ValidationError as e:
            return ToolResult.error(format_validation_error(e))

        try:
            return self.run(params)
        except Exception as e:
            logger.error(f"{self.name} failed: {e}")
            return ToolResult.error(f"{self.failure_prefix}: {e}")

    def run(self, params: BaseModel) -> ToolResult:
        raise NotImplementedError


class DocumentationTool(DocsTool):
    """Tool backed by the documentation index"""

    def __init__(self, config_manager: ConfigurationManager, indexer: DocIndexer):
        super().__init__(config_manager)
        self.indexer = indexer

    def initialize_indexer(self):
        self.indexer.index_documents(self.config_manager.documentation_files())

    def capped_limit(self, requested: Optional[int], default_key: str, default: int, maximum: int) -> int:
        limit = requested if requested is not None else int(self.config_manager.get(default_key, default))
        return min(limit, maximum)


class GeneratorTool(DocsTool):
    """Tool that writes a PHP artifact into the application tree"""

    artifact_label: str = "File"
    suffix: str = ""
    default_subdir: str = "Restify"

    @property
    def project_root(self) -> Path:
        return Path(self.config_manager.project_root)

    @property
    def app_path(self) -> str:
        return self.config_manager.get("generators.app_path", "app")

    @property
    def root_namespace(self) -> str:
        return self.config_manager.get("generators.root_namespace", "App")

    def resolve_location(self, custom_namespace: Optional[str] = None) -> ArtifactLocation:
        location = project_scanner.find_artifact_location(
            self.project_root, self.app_path, self.suffix, self.default_subdir, self.root_namespace
        )
        if custom_namespace:
            location.namespace = custom_namespace
        return location

    def find_model(self, model_name: Optional[str]) -> Optional[ModelInfo]:
        if not model_name:
            return None
        return project_scanner.find_model(self.project_root, self.app_path, model_name, self.root_namespace)

    def already_exists(self, file_path: Path) -> ToolResult:
        return ToolResult.error(
            f"{self.artifact_label} already exists at: {file_path}\nUse 'force: true' to overwrite."
        )

    def write_artifact(self, file_path: Path, content: str):
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.info(f"Wrote {self.artifact_label.lower()} {file_path}")
