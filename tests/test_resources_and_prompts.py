import json

import pytest

from prompts import DocsPrompt, RestifyHowTo, RestifyTroubleshooting, diagnose
from resources import RestifyApiReference, RestifyDocumentation, restify_version


def test_restify_version_sources(tmp_path):
    assert restify_version(tmp_path) == "unknown"

    (tmp_path / "composer.json").write_text(json.dumps({"require": {"binaryk/laravel-restify": "^9.0"}}))
    assert restify_version(tmp_path) == "9.0"

    (tmp_path / "composer.lock").write_text(
        json.dumps({"packages": [{"name": "binaryk/laravel-restify", "version": "v9.2.1"}]})
    )
    assert restify_version(tmp_path) == "v9.2.1"


def test_documentation_resource(config_manager, project_indexer):
    data = json.loads(RestifyDocumentation(config_manager, project_indexer).read())

    assert data["package"] == "Laravel Restify"
    assert data["version"] == "unknown"
    assert data["documentation"]["total_sections"] == 3
    assert data["documentation"]["total_documents"] == 3

    filters = data["documentation"]["sections"]["filters"]
    assert filters["name"] == "Filters & Search"
    assert filters["documents"][0]["title"] == "Filters Guide"
    assert filters["documents"][0]["file_path"] == "filters.md"
    assert filters["documents"][0]["code_examples_count"] == 1
    assert data["structure"]["filters"] == {
        "name": "Filters & Search",
        "document_count": 1,
        "topics": ["Filters Guide"],
    }


def test_api_reference_resource(config_manager, project_indexer):
    data = json.loads(RestifyApiReference(config_manager, project_indexer).read())

    topic = data["api_reference"]["repositories"]["topics"][0]
    assert topic["title"] == "Repositories"
    assert topic["sections"] == ["Repositories", "Defining fields"]
    assert topic["code_languages"] == ["php"]
    assert data["quick_start"]["installation"]["composer_install"] == "composer require binaryk/laravel-restify"


def test_resource_read_reports_failures(config_manager, project_indexer, monkeypatch):
    def broken(paths):
        raise RuntimeError("cache offline")

    monkeypatch.setattr(project_indexer, "index_documents", broken)

    text = RestifyDocumentation(config_manager, project_indexer).read()

    assert text == "Error loading Laravel Restify documentation: cache offline"


@pytest.fixture
def how_to(config_manager, project_indexer):
    return RestifyHowTo(config_manager, project_indexer)


@pytest.fixture
def troubleshooting(config_manager, project_indexer):
    return RestifyTroubleshooting(config_manager, project_indexer)


def test_how_to_guide_for_repositories(how_to):
    text = how_to.render({"task": "create a repository", "context": "blog API"})

    assert text.startswith("# How to: create a repository with Laravel Restify")
    assert "**Your context:** blog API" in text
    assert "**Difficulty level:** Intermediate" in text
    assert "### Step 1: Create the Repository Class" in text
    assert "### Step 4" not in text
    assert "**Explore related topics:**\n- Repositories" in text
    assert "## Common Issues" in text


def test_how_to_difficulty_changes_steps(how_to):
    advanced = how_to.render({"task": "create a repository", "difficulty": "advanced"})
    beginner = how_to.render({"task": "add a field", "difficulty": "beginner"})

    assert "### Step 4: Add Advanced Features" in advanced
    assert "**Note:** You can also add filters" in advanced
    assert "### Step 1: Choose Field Type" in beginner
    assert "**Note:**" not in beginner


def test_how_to_includes_matching_code_examples(how_to):
    text = how_to.render({"task": "match filter"})

    assert "## Code Examples" in text
    assert "```php\npublic static array $match = ['status' => 'string'];\n```" in text
    assert "### Step 1: Define Searchable Fields" in text


def test_how_to_without_documentation(how_to):
    text = how_to.render({"task": "quantum teleportation"})

    assert "I don't have specific documentation for this task" in text


def test_how_to_requires_task(how_to):
    assert how_to.render({}) == "Please specify what task you want to accomplish with Laravel Restify."


def test_diagnose_categories():
    assert diagnose("Getting a 404 on my endpoint")[0] == "routing"
    assert diagnose("request is rejected", "403 Forbidden")[0] == "authentication"
    assert diagnose("the page is slow")[0] == "performance"
    assert diagnose("something weird happens")[0] == "configuration"


def test_troubleshooting_guide(troubleshooting):
    text = troubleshooting.render({
        "issue": "repository validation fails with 422",
        "error_message": "The title field is required.",
        "code_snippet": "field('title')->required()",
    })

    assert text.startswith("# Laravel Restify Troubleshooting Guide")
    assert "**Error message:**\n```\nThe title field is required.\n```" in text
    assert "**Code Context:**\n```php\nfield('title')->required()\n```" in text
    assert "This is a validation error." in text
    assert "### Solution 1: Review Field Validation Rules" in text
    assert "- Write unit tests for validation rules" in text
    assert "## Related Documentation\n\n- **Repositories** (repositories):" in text
    assert "## Still Having Issues?" in text


def test_troubleshooting_routing_adds_route_debugging(troubleshooting):
    text = troubleshooting.render({"issue": "route returns 404"})

    assert "3. **Route Debugging**" in text
    assert "```bash\nphp artisan route:clear\n```" in text


def test_troubleshooting_requires_issue(troubleshooting):
    assert troubleshooting.render({"issue": ""}) == (
        "Please describe the issue you're experiencing with Laravel Restify."
    )


def test_prompt_errors_become_text(how_to, monkeypatch):
    def broken(paths):
        raise RuntimeError("disk gone")

    monkeypatch.setattr(how_to.indexer, "index_documents", broken)

    assert how_to.render({"task": "create"}) == (
        "I encountered an error while generating the laravel restify how-to guide: disk gone"
    )


def test_prompt_arguments_are_immutable_per_class():
    assert DocsPrompt.arguments == ()
    assert [arg.name for arg in RestifyHowTo.arguments] == ["task", "context", "difficulty"]
    assert [arg.name for arg in RestifyTroubleshooting.arguments] == [
        "issue", "error_message", "context", "code_snippet",
    ]
    assert isinstance(RestifyHowTo.arguments, tuple)
