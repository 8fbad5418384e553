"""
MCP resources exposing the indexed documentation as JSON
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from config import ConfigurationManager
from doc_indexer import DocIndexer
from models import ParsedDocument

logger = logging.getLogger(__name__)

RESTIFY_PACKAGE = "binaryk/laravel-restify"


def restify_version(project_root: Path) -> str:
    """Installed Laravel Restify version from composer.lock, else the composer.json constraint"""
    lock_file = project_root / "composer.lock"
    if lock_file.exists():
        try:
            with open(lock_file, "r", encoding="utf-8") as f:
                lock_data = json.load(f)
            for package in lock_data.get("packages", []):
                if package.get("name") == RESTIFY_PACKAGE:
                    return package.get("version", "unknown")
        except (OSError, json.JSONDecodeError) as e:
            logger.debug(f"Could not read {lock_file}: {e}")

    composer_file = project_root / "composer.json"
    if composer_file.exists():
        try:
            with open(composer_file, "r", encoding="utf-8") as f:
                composer_data = json.load(f)
            constraint = composer_data.get("require", {}).get(RESTIFY_PACKAGE)
            if constraint:
                return constraint.lstrip("^~")
        except (OSError, json.JSONDecodeError) as e:
            logger.debug(f"Could not read {composer_file}: {e}")

    return "unknown"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class DocsResource:
    """A read-only JSON document addressed by a ``restify://`` URI"""

    uri: str = ""
    name: str = ""
    description: str = ""
    mime_type: str = "application/json"
    error_prefix: str = "Error reading resource"

    def __init__(self, config_manager: ConfigurationManager, indexer: DocIndexer):
        self.config_manager = config_manager
        self.indexer = indexer

    def read(self) -> str:
        try:
            self.indexer.index_documents(self.config_manager.documentation_files())
            return json.dumps(self.build(), indent=2)
        except Exception as e:
            logger.error(f"Failed to read {self.uri}: {e}")
            return f"{self.error_prefix}: {e}"

    def build(self) -> Dict[str, Any]:
        raise NotImplementedError

    def documents_by_category(self) -> Dict[str, List[ParsedDocument]]:
        grouped: Dict[str, List[ParsedDocument]] = {}
        for doc in self.indexer.documents.values():
            grouped.setdefault(doc.category, []).append(doc)
        return grouped


class RestifyDocumentation(DocsResource):
    uri = "restify://documentation"
    name = "Laravel Restify Documentation"
    description = (
        "Complete Laravel Restify documentation including installation guides, repositories, fields, "
        "filters, authentication, actions, and performance optimization, grouped by category."
    )
    error_prefix = "Error loading Laravel Restify documentation"

    def build(self) -> Dict[str, Any]:
        sections = {}
        for category, docs in self.documents_by_category().items():
            sections[category] = {
                "name": self.indexer.category_name(category),
                "documents": [
                    {
                        "title": doc.title,
                        "summary": doc.summary,
                        "headings": [
                            {"level": h.level, "text": h.text, "anchor": h.anchor} for h in doc.headings
                        ],
                        "code_examples_count": len(doc.code_examples),
                        "estimated_tokens": doc.estimated_tokens,
                        "file_path": Path(doc.file_path).name,
                    }
                    for doc in docs
                ],
                "total_documents": len(docs),
            }

        return {
            "package": "Laravel Restify",
            "version": restify_version(self.config_manager.project_root),
            "description": "A Laravel package that provides a powerful way to build RESTful APIs with ease",
            "documentation": {
                "sections": sections,
                "total_sections": len(sections),
                "total_documents": sum(s["total_documents"] for s in sections.values()),
            },
            "structure": {
                key: {
                    "name": section["name"],
                    "document_count": section["total_documents"],
                    "topics": [d["title"] for d in section["documents"]],
                }
                for key, section in sections.items()
            },
            "last_updated": _timestamp(),
        }


QUICK_START = {
    "installation": {
        "composer_install": "composer require binaryk/laravel-restify",
        "publish_config": "php artisan vendor:publish --tag=restify-config",
        "create_repository": "php artisan restify:repository PostRepository",
    },
    "endpoints_available": {
        "GET /api/restify/posts": "List all posts",
        "GET /api/restify/posts/1": "Show specific post",
        "POST /api/restify/posts": "Create new post",
        "PUT /api/restify/posts/1": "Update post",
        "DELETE /api/restify/posts/1": "Delete post",
    },
}


class RestifyApiReference(DocsResource):
    uri = "restify://api-reference"
    name = "Laravel Restify API Reference"
    description = (
        "Laravel Restify API reference outline: every documented topic grouped by category with its "
        "section structure and the languages of its code examples."
    )
    error_prefix = "Error generating Laravel Restify API reference"

    def build(self) -> Dict[str, Any]:
        reference = {}
        for category, docs in self.documents_by_category().items():
            reference[category] = {
                "name": self.indexer.category_name(category),
                "topics": [self._outline(doc) for doc in docs],
            }

        return {
            "package": "Laravel Restify API Reference",
            "version": restify_version(self.config_manager.project_root),
            "api_reference": reference,
            "quick_start": QUICK_START,
            "generated_at": _timestamp(),
        }

    @staticmethod
    def _outline(doc: ParsedDocument) -> Dict[str, Any]:
        return {
            "title": doc.title,
            "summary": doc.summary,
            "sections": [h.text for h in doc.headings if h.level <= 3],
            "code_languages": sorted({example.language for example in doc.code_examples}),
            "code_examples_count": len(doc.code_examples),
        }
