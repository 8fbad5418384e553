"""
Main entry point for the Restify Documentation MCP Server
"""
import asyncio
import logging

from mcp.server import Server
from pydantic.networks import AnyUrl
from server import RestifyDocsServer

logger = logging.getLogger("restify-docs-mcp-server")

app = Server("restify-docs")
_server = None


def get_server() -> RestifyDocsServer:
    global _server
    if _server is None:
        _server = RestifyDocsServer()
    return _server


@app.list_resources()
async def handle_list_resources():
    """List available resources"""
    return get_server().get_resources()


@app.read_resource()
async def read_resource(uri: AnyUrl):
    """Read resource data"""
    return get_server().read_resource(str(uri))


@app.list_tools()
async def list_tools():
    """List available tools"""
    return get_server().get_tools()


@app.call_tool()
async def call_tool(name: str, arguments):
    """Handle tool calls"""
    return get_server().call_tool(name, arguments)


@app.list_prompts()
async def list_prompts():
    return get_server().get_prompts()


@app.get_prompt()
async def get_prompt(name: str, arguments):
    return get_server().get_prompt(name, arguments)


async def main():
    """Main entry point for the Restify documentation MCP server"""
    try:
        from mcp.server.stdio import stdio_server

        get_server()

        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream,
                write_stream,
                app.create_initialization_options()
            )

    except Exception as e:  # noqa: BLE001
        logger.error("Error during server startup: %s", e)
        raise


def run():
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())


if __name__ == "__main__":
    run()
