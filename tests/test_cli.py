import pytest

from cli import UsageError, build_arguments, build_parser, execute
from conftest import write
from server import RestifyDocsServer


def parse(*argv):
    return build_parser().parse_args(list(argv))


@pytest.fixture
def server(project, tmp_path):
    config_file = write(tmp_path / "cli_config.yaml", "cache:\n  store: array\n")
    return RestifyDocsServer(project_root=str(project), config_path=str(config_file))


def test_search_arguments():
    args = parse("execute", "search-restify-docs", "--queries", "filter", "--queries", "match", "--limit", "5")

    assert build_arguments(args.tool, args) == {
        "queries": ["filter", "match"],
        "limit": 5,
        "token_limit": 10000,
    }


def test_navigate_defaults_to_overview():
    args = parse("execute", "navigate-docs")

    assert build_arguments(args.tool, args) == {"action": "overview", "include_content": False, "limit": 10}


def test_generator_arguments():
    args = parse(
        "execute", "generate-action", "--action-name", "PublishPost",
        "--validation-rules", '{"title": "required"}', "--force",
    )

    assert build_arguments(args.tool, args) == {
        "action_name": "PublishPost",
        "action_type": "index",
        "validation_rules": {"title": "required"},
        "force": True,
    }


def test_match_filter_arguments():
    args = parse("execute", "generate-match-filter", "--filter-name", "StatusFilter", "--attribute", "status")

    arguments = build_arguments(args.tool, args)

    assert arguments["name"] == "StatusFilter"
    assert arguments["type"] == "string"
    assert arguments["partial"] is False


@pytest.mark.parametrize("argv, message", [
    (("execute", "search-restify-docs"), "--queries option is required for search-restify-docs"),
    (("execute", "get-code-examples"), "--topic option is required for get-code-examples"),
    (("execute", "generate-repository"), "--model-name option is required for generate-repository"),
    (("execute", "generate-action", "--action-name", "X", "--validation-rules", "{bad"),
     "Invalid JSON in --validation-rules option"),
    (("execute", "mystery-tool"), "Unknown tool: mystery-tool"),
])
def test_usage_errors(argv, message):
    args = parse(*argv)

    with pytest.raises(UsageError, match=message):
        build_arguments(args.tool, args)


def test_execute_prints_result(server, capsys):
    code = execute(parse("execute", "search-restify-docs", "--queries", "filter"), server=server)

    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("Executing MCP tool: search-restify-docs\n")
    assert "Tool Result:\n" + "-" * 50 in out
    assert "### 1. Filters Guide" in out


def test_execute_reports_tool_errors(server, capsys):
    code = execute(parse("execute", "navigate-docs", "--action", "explode"), server=server)

    captured = capsys.readouterr()
    assert code == 1
    assert "Tool Error:" in captured.err
    assert 'Invalid action. Use "overview", "list-categories", or "category"' in captured.err


def test_execute_unknown_tool(server, capsys):
    code = execute(parse("execute", "mystery-tool"), server=server)

    err = capsys.readouterr().err
    assert code == 1
    assert "Unknown tool: mystery-tool" in err
    assert "Available tools: search-restify-docs, get-code-examples" in err


def test_execute_missing_option(server, capsys):
    code = execute(parse("execute", "get-code-examples"), server=server)

    assert code == 1
    assert "--topic option is required" in capsys.readouterr().err


def test_global_options():
    args = parse("--project-root", "/srv/app", "-v", "install")

    assert args.project_root == "/srv/app"
    assert args.verbose is True
    assert args.command == "install"
