"""MCP server entry point hosting the nml language client.

The server lifespan is the extension lifecycle: the client is activated when
the server starts and deactivated when it shuts down.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP

from nml_client.extension import ExtensionContext, activate, create_context, deactivate
from nml_client.tools.status_tools import register_status_tools
from nml_client.utils.config_utils import get_config_value
from nml_client.utils.logging_utils import Logger


@asynccontextmanager
async def extension_lifespan(server: FastMCP) -> AsyncIterator[ExtensionContext]:
    context = create_context()
    await activate(context)
    try:
        yield context
    finally:
        await deactivate(context)


mcp = FastMCP("nml-client", lifespan=extension_lifespan)


def main():
    """Main entry point for the MCP server."""
    Logger.instance(log_dir=get_config_value("logging", "log_dir"))
    register_status_tools(mcp)
    mcp.run()


if __name__ == "__main__":
    main()
