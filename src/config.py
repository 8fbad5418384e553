"""
Configuration management for the Restify Documentation MCP Server
"""
import copy
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional
import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "docs": {
        "paths": {
            "primary": "vendor/binarcode/laravel-restify/docs-v2/content/en",
            "legacy": "vendor/binarcode/laravel-restify/docs/content/en",
        },
        "processing": {
            "summary_length": 300,
        },
    },
    "categories": {
        "installation": {
            "name": "Installation & Setup",
            "paths": ["installation.md", "quickstart.md", "setup/*.md"],
        },
        "repositories": {
            "name": "Repositories",
            "paths": ["repository-pattern.md", "repositories/*.md", "api/repositories*.md"],
        },
        "fields": {
            "name": "Fields & Validation",
            "paths": ["field.md", "fields/*.md", "api/fields*.md"],
        },
        "filters": {
            "name": "Filters & Search",
            "paths": ["filters.md", "search/*.md", "api/filters*.md"],
        },
        "auth": {
            "name": "Authentication & Authorization",
            "paths": ["auth/*.md", "authentication.md", "policies.md"],
        },
        "actions": {
            "name": "Actions",
            "paths": ["actions.md", "actions/*.md", "api/actions*.md"],
        },
        "performance": {
            "name": "Performance",
            "paths": ["performance/*.md", "caching.md"],
        },
        "testing": {
            "name": "Testing",
            "paths": ["testing/*.md", "testing.md"],
        },
    },
    "search": {
        "default_limit": 10,
        "max_limit": 50,
        "min_query_length": 2,
        "boost_scores": {
            "title": 3.0,
            "heading": 2.0,
            "content": 1.0,
            "code": 1.5,
        },
    },
    "optimization": {
        "default_token_limit": 10000,
        "max_token_limit": 100000,
        "prioritize_code_examples": True,
    },
    "cache": {
        "enabled": True,
        "store": "array",
        "key_prefix": "restify_mcp",
        "ttl": 3600,
        "path": ".restify_docs_cache.db",
    },
    "mcp": {
        "tools": {"include": [], "exclude": []},
        "resources": {"include": [], "exclude": []},
        "prompts": {"include": [], "exclude": []},
    },
    "generators": {
        "app_path": "app",
        "migrations_path": "database/migrations",
        "root_namespace": "App",
    },
}


def config_value(config: Dict[str, Any], key: str, default: Any = None) -> Any:
    """Look up a dotted key such as ``search.min_query_length``"""
    node: Any = config
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node


def _deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


class ConfigurationManager:
    """Manages configuration loading and validation"""

    def __init__(self, config_path: Optional[Path] = None, project_root: Optional[Path] = None):
        self.project_root = project_root or Path.cwd()
        self.config_path = config_path
        self._config = None

    @property
    def config(self) -> Dict[str, Any]:
        """Lazy load configuration"""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        return config_value(self.config, key, default)

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file"""
        config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_path and self.config_path.exists():
            logger.info(f"Loading config from {self.config_path}")
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    user_config = yaml.safe_load(f)
                    if isinstance(user_config, dict):
                        _deep_merge(config, user_config)
            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Error loading config from {self.config_path}: {e}")

        self._validate_categories(config)
        return config

    def _validate_categories(self, config: Dict[str, Any]):
        """Drop malformed category entries so pattern matching never trips on them"""
        categories = config.get("categories") or {}
        valid = {}
        for key, category in categories.items():
            if not isinstance(category, dict):
                logger.warning(f"Ignoring category '{key}': expected a mapping")
                continue
            paths = category.get("paths") or []
            if isinstance(paths, str):
                paths = [paths]
            valid[str(key)] = {"name": category.get("name", str(key)), "paths": list(paths)}
        config["categories"] = valid

    def documentation_roots(self) -> List[Path]:
        """Resolve the primary and legacy documentation roots against the project root"""
        roots = []
        for key in ("docs.paths.primary", "docs.paths.legacy"):
            value = self.get(key)
            if not value:
                continue
            path = Path(value)
            if not path.is_absolute():
                path = self.project_root / path
            roots.append(path)
        return roots

    def documentation_files(self) -> List[str]:
        """Every Markdown file under the existing documentation roots, sorted per root"""
        files: List[str] = []
        for root in self.documentation_roots():
            if root.is_dir():
                files.extend(str(p) for p in sorted(root.rglob("*.md")) if p.is_file())
        return files
