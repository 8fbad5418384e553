from conftest import DOCS_ROOT, write
from config import ConfigurationManager, config_value


def test_config_value_walks_dotted_keys():
    config = {"search": {"max_limit": 50}, "flat": 1}

    assert config_value(config, "search.max_limit") == 50
    assert config_value(config, "search.missing", "fallback") == "fallback"
    assert config_value(config, "flat.deeper", 7) == 7


def test_defaults_without_file(tmp_path):
    manager = ConfigurationManager(project_root=tmp_path)

    assert manager.get("cache.store") == "array"
    assert manager.get("search.default_limit") == 10
    assert manager.get("categories.filters.name") == "Filters & Search"


def test_yaml_overrides_are_deep_merged(tmp_path):
    config_file = write(tmp_path / "config.yaml", """
        search:
          max_limit: 20
        categories:
          recipes:
            name: Recipes
            paths: recipes/*.md
    """)

    manager = ConfigurationManager(config_path=config_file, project_root=tmp_path)

    assert manager.get("search.max_limit") == 20
    assert manager.get("search.default_limit") == 10
    assert manager.get("categories.recipes") == {"name": "Recipes", "paths": ["recipes/*.md"]}
    assert manager.get("categories.filters.name") == "Filters & Search"


def test_malformed_categories_are_dropped(tmp_path):
    config_file = write(tmp_path / "config.yaml", """
        categories:
          broken: just a string
          untitled:
            paths: [misc.md]
    """)

    categories = ConfigurationManager(config_path=config_file, project_root=tmp_path).get("categories")

    assert "broken" not in categories
    assert categories["untitled"] == {"name": "untitled", "paths": ["misc.md"]}


def test_invalid_yaml_falls_back_to_defaults(tmp_path, caplog):
    config_file = write(tmp_path / "config.yaml", "search: [unclosed\n")

    manager = ConfigurationManager(config_path=config_file, project_root=tmp_path)

    assert manager.get("search.max_limit") == 50
    assert "Error loading config" in caplog.text


def test_documentation_roots_resolve_against_project(tmp_path):
    roots = ConfigurationManager(project_root=tmp_path).documentation_roots()

    assert roots == [
        tmp_path / "vendor/binarcode/laravel-restify/docs-v2/content/en",
        tmp_path / "vendor/binarcode/laravel-restify/docs/content/en",
    ]


def test_documentation_files_cover_both_roots(project):
    legacy = write(project / "vendor/binarcode/laravel-restify/docs/content/en/legacy.md", "# Legacy\n")

    files = ConfigurationManager(project_root=project).documentation_files()

    assert files == [
        str(project / DOCS_ROOT / "filters.md"),
        str(project / DOCS_ROOT / "installation.md"),
        str(project / DOCS_ROOT / "repositories" / "repository-pattern.md"),
        str(legacy),
    ]


def test_documentation_files_empty_without_docs(tmp_path):
    assert ConfigurationManager(project_root=tmp_path).documentation_files() == []
