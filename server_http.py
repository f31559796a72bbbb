#!/usr/bin/env python3
"""
HTTP MCP Server Launcher

Loads settings, opens the shared outbound client session, builds the tool
registry and serves the MCP endpoint until interrupted.
"""
import asyncio
import logging
import sys

import aiohttp

from config import ConfigError, Settings, load_settings
from mcp_http_server import MCPOverHTTPServer
from tool_registry import ToolRegistry
from tools import build_tools


async def serve(settings: Settings):
    """Run the server with one ClientSession for the process lifetime"""
    async with aiohttp.ClientSession() as session:
        registry = ToolRegistry(build_tools(settings, session))
        server = MCPOverHTTPServer(registry, host=settings.host, port=settings.port)
        await server.start()


def run():
    """Console entry point"""
    try:
        settings = load_settings()
    except ConfigError as e:
        logging.basicConfig(level=logging.ERROR, stream=sys.stderr)
        logging.error(f"❌ Failed to set up the server: {e}")
        sys.exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr
    )

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logging.info("👋 Server shutdown requested")


if __name__ == "__main__":
    run()
