import copy
import textwrap
from pathlib import Path

import pytest

from cache_store import ArrayStore
from config import DEFAULT_CONFIG, ConfigurationManager
from doc_cache import DocCache
from doc_indexer import DocIndexer
from doc_parser import DocParser

DOCS_ROOT = "vendor/binarcode/laravel-restify/docs-v2/content/en"


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
    return path


@pytest.fixture
def config():
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def cache(config):
    return DocCache(ArrayStore(), config)


@pytest.fixture
def parser(cache, config):
    return DocParser(cache, config)


@pytest.fixture
def indexer(parser, cache, config):
    return DocIndexer(parser, cache, config)


@pytest.fixture
def project(tmp_path):
    """A project root with a small Restify documentation tree"""
    docs = tmp_path / DOCS_ROOT
    write(docs / "installation.md", """
        ---
        title: Installation
        ---
        # Installation

        Install the package with composer. Then publish the config file.

        ```bash
        composer require binaryk/laravel-restify
        ```
    """)
    write(docs / "repositories" / "repository-pattern.md", """
        # Repositories

        A repository exposes a model through the API. Every repository has fields.

        ## Defining fields

        Fields are defined in the fields method of the repository.

        ```php
        public function fields(RestifyRequest $request): array
        {
            return [field('title')];
        }
        ```
    """)
    write(docs / "filters.md", """
        # Filters Guide

        A filter narrows the index query. Use a match filter for exact values.

        ## Match filter

        Available types:
        - string
        - int
        - bool

        ```php
        public static array $match = ['status' => 'string'];
        ```
    """)
    return tmp_path


@pytest.fixture
def config_manager(project):
    return ConfigurationManager(config_path=None, project_root=project)


@pytest.fixture
def project_indexer(config_manager):
    config = config_manager.config
    cache = DocCache(ArrayStore(), config)
    return DocIndexer(DocParser(cache, config), cache, config)
