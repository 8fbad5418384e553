"""
Command line interface: run a tool directly, start the MCP server, or install it into editors
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from doc_parser import estimate_tokens

logger = logging.getLogger(__name__)

LARGE_RESULT_CHARS = 1000
SEPARATOR = "-" * 50


class UsageError(Exception):
    """Raised when the options given cannot drive the requested tool"""


def _require(value: Any, option: str, tool: str) -> Any:
    if not value:
        raise UsageError(f"{option} option is required for {tool}")
    return value


def build_arguments(tool: str, args: argparse.Namespace) -> Dict[str, Any]:
    """Map command line options onto the tool's argument names, dropping unset ones"""
    if tool == "search-restify-docs":
        arguments = {
            "queries": _require(args.queries, "--queries", tool),
            "category": args.category,
            "limit": args.limit,
            "token_limit": args.token_limit,
        }
    elif tool == "get-code-examples":
        arguments = {
            "topic": _require(args.topic, "--topic", tool),
            "language": args.language,
            "category": args.category,
            "limit": args.limit,
        }
    elif tool == "navigate-docs":
        arguments = {
            "action": args.action or "overview",
            "category": args.category,
            "include_content": args.include_content,
            "limit": args.limit,
        }
    elif tool == "generate-repository":
        arguments = {
            "model_name": _require(args.model_name, "--model-name", tool),
            "include_fields": args.include_fields,
            "include_relationships": args.include_relationships,
            "repository_name": args.repository_name,
            "namespace": args.namespace,
            "force": args.force,
        }
    elif tool == "generate-action":
        rules = None
        if args.validation_rules:
            try:
                rules = json.loads(args.validation_rules)
            except json.JSONDecodeError:
                raise UsageError("Invalid JSON in --validation-rules option")
        arguments = {
            "action_name": _require(args.action_name, "--action-name", tool),
            "action_type": args.action_type or "index",
            "model_name": args.model_name,
            "validation_rules": rules,
            "uri_key": args.uri_key,
            "namespace": args.namespace,
            "force": args.force,
        }
    elif tool == "generate-getter":
        arguments = {
            "getter_name": _require(args.getter_name, "--getter-name", tool),
            "getter_type": args.getter_type or "extended",
            "scope": args.scope or "both",
            "model_name": args.model_name,
            "uri_key": args.uri_key,
            "namespace": args.namespace,
            "force": args.force,
        }
    elif tool == "generate-match-filter":
        arguments = {
            "name": _require(args.filter_name, "--filter-name", tool),
            "attribute": _require(args.attribute, "--attribute", tool),
            "type": args.filter_type or "string",
            "partial": args.partial,
            "repository": args.repository,
            "namespace": args.namespace,
            "force": args.force,
        }
    else:
        raise UsageError(f"Unknown tool: {tool}")

    return {key: value for key, value in arguments.items() if value is not None}


def execute(args: argparse.Namespace, server=None) -> int:
    if server is None:
        from server import RestifyDocsServer
        server = RestifyDocsServer(project_root=args.project_root)

    available = server.tools.names()
    if args.tool not in available:
        print(f"Unknown tool: {args.tool}", file=sys.stderr)
        print(f"Available tools: {', '.join(available)}", file=sys.stderr)
        return 1

    try:
        arguments = build_arguments(args.tool, args)
    except UsageError as e:
        print(str(e), file=sys.stderr)
        return 1

    print(f"Executing MCP tool: {args.tool}\n")
    result = server.tools.create(args.tool).handle(arguments)

    if result.is_error:
        print("Tool Error:", file=sys.stderr)
        print(result.text, file=sys.stderr)
        return 1

    print("Tool Result:")
    print(SEPARATOR)
    print(result.text)
    print(SEPARATOR)
    if len(result.text) > LARGE_RESULT_CHARS:
        words = len(result.text.split())
        print(f"\nResult size: {words} words (~{estimate_tokens(result.text)} tokens)")
    return 0


def start(args: argparse.Namespace) -> int:
    import asyncio
    import os

    import main as server_main

    if args.project_root:
        os.environ["RESTIFY_DOCS_PROJECT_ROOT"] = args.project_root
    asyncio.run(server_main.main())
    return 0


def install_command(args: argparse.Namespace) -> int:
    from installer import install

    project_root = Path(args.project_root or Path.cwd())
    print("Registering the Laravel Restify documentation MCP server...")
    for line in install(project_root):
        print(f"  {line}")
    print("\nRestart your editor or assistant to load the MCP server.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="restify-docs",
        description="Laravel Restify documentation MCP server",
    )
    parser.add_argument("--project-root", help="Laravel project root (defaults to the current directory)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("execute", help="Execute a specific MCP tool directly")
    run.add_argument("tool", help="Tool name, e.g. search-restify-docs")
    run.add_argument("--queries", action="append", help="Search query (repeatable, for search-restify-docs)")
    run.add_argument("--topic", help="Topic for code examples (for get-code-examples)")
    run.add_argument("--category", help="Category filter")
    run.add_argument("--language", help="Language filter (for get-code-examples)")
    run.add_argument("--action", help="Navigation action (for navigate-docs)")
    run.add_argument("--limit", type=int, default=10, help="Maximum number of results")
    run.add_argument("--token-limit", type=int, default=10000, help="Maximum response tokens")
    run.add_argument("--include-content", action="store_true", help="Include content summaries (for navigate-docs)")
    run.add_argument("--model-name", help="Model name (for the generators)")
    run.add_argument("--include-fields", action="store_true", help="Include fields from schema")
    run.add_argument("--include-relationships", action="store_true", help="Include relationships")
    run.add_argument("--repository-name", help="Override repository name (for generate-repository)")
    run.add_argument("--action-name", help="Action name (for generate-action)")
    run.add_argument("--action-type", help="index, show, standalone, invokable or destructive")
    run.add_argument("--validation-rules", help="Validation rules as JSON (for generate-action)")
    run.add_argument("--getter-name", help="Getter name (for generate-getter)")
    run.add_argument("--getter-type", help="invokable or extended (for generate-getter)")
    run.add_argument("--scope", help="index, show or both (for generate-getter)")
    run.add_argument("--filter-name", help="Filter class name (for generate-match-filter)")
    run.add_argument("--attribute", help="Column to match on (for generate-match-filter)")
    run.add_argument("--filter-type", help="Match type (for generate-match-filter)")
    run.add_argument("--partial", action="store_true", help="Use LIKE matching (for generate-match-filter)")
    run.add_argument("--repository", help="Repository to show integration for (for generate-match-filter)")
    run.add_argument("--uri-key", help="Custom URI key")
    run.add_argument("--namespace", help="Override namespace")
    run.add_argument("--force", action="store_true", help="Force overwrite existing file")
    run.set_defaults(handler=execute)

    serve = subparsers.add_parser("start", help="Run the MCP server over stdio")
    serve.set_defaults(handler=start)

    setup = subparsers.add_parser("install", help="Register the MCP server with detected AI code environments")
    setup.set_defaults(handler=install_command)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
