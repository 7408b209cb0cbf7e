"""Status tools for the nml language client host.

Tools:
- nml_client_status: lifecycle state, launch spec and document selector
"""

from mcp.server.fastmcp import Context, FastMCP

from nml_client.extension import ExtensionContext


def format_status(context: ExtensionContext) -> str:
    """Render the lifecycle state of ``context`` as text."""
    lifecycle = context.lifecycle
    lines = [f"📊 {context.config.name} client: {lifecycle.state.value.upper()}"]

    launch = lifecycle.launch_spec
    if launch is None:
        lines.append("  Server: not resolved yet")
    else:
        lines.append(f"  Server: {launch.command} {' '.join(launch.args)}")
        lines.append(f"  Transport: {launch.transport.value}")

    options = lifecycle.options
    if options is not None:
        selector = ", ".join(
            f"{f.scheme}:{f.language}" for f in options.document_selector
        )
        lines.append(f"  Documents: {selector}")
        if options.trace_channel is not None:
            lines.append(f"  Trace channel: {options.trace_channel.name}")

    if lifecycle.last_error is not None:
        lines.append(f"  ⚠️ Last error: {lifecycle.last_error}")

    return "\n".join(lines)


def register_status_tools(mcp: FastMCP):
    """Register client status MCP tools."""

    @mcp.tool()
    async def nml_client_status(ctx: Context) -> str:
        """Check the nml language client status.

        Returns:
            Lifecycle state, server command line and served documents
        """
        context: ExtensionContext = ctx.request_context.lifespan_context
        return format_status(context)
