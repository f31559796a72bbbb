#!/usr/bin/env python3
"""
MCP-over-HTTP Server - JSON-RPC 2.0 MCP Protocol via HTTP

Single stateless endpoint:
- POST /mcp carries one JSON-RPC 2.0 message (initialize, tools/list, tools/call)
- Any other method on /mcp is answered with a -32000 "Method not allowed." envelope
- No client sessions; every request is dispatched independently
"""
import asyncio
import logging
from typing import Any, Dict

from aiohttp import web
from aiohttp.web import Application, Request, Response, json_response

from base_tool import DispatchError
from tool_registry import ToolRegistry

SUPPORTED_PROTOCOL_VERSIONS = ("2025-03-26", "2024-11-05")


class MCPOverHTTPServer:
    """
    MCP server using JSON-RPC 2.0 over HTTP transport.

    Resolves tools/call requests through the ToolRegistry and serializes the
    result or error back into the JSON-RPC envelope.
    """

    def __init__(self, registry: ToolRegistry, host: str = "0.0.0.0", port: int = 3000):
        self.registry = registry
        self.host = host
        self.port = port

        self.protocol_version = SUPPORTED_PROTOCOL_VERSIONS[0]
        self.server_info = {
            "name": "mcp-streamable-http",
            "version": "1.0.0"
        }
        self.capabilities = {
            "tools": {}
        }

        self.logger = logging.getLogger("mcp_http_server")

    async def start(self):
        """Start the MCP-over-HTTP server and serve until cancelled"""
        app = self.create_app()

        runner = web.AppRunner(app)
        await runner.setup()

        site = web.TCPSite(runner, self.host, self.port)
        await site.start()

        self.logger.info(f"🚀 MCP Streamable HTTP Server listening on http://{self.host}:{self.port}")
        self.logger.info(f"🔧 Tools available: {len(self.registry)}")

        try:
            await asyncio.Event().wait()
        finally:
            self.logger.info("Server shutting down...")
            await runner.cleanup()

    def create_app(self) -> Application:
        """Create aiohttp application with MCP routes"""
        app = web.Application()

        # MCP JSON-RPC endpoint; every other verb gets the 405 envelope
        app.router.add_post("/mcp", self._handle_mcp_request)
        app.router.add_route("*", "/mcp", self._handle_method_not_allowed)

        # Banner and health check (non-MCP)
        app.router.add_get("/", self._handle_info)
        app.router.add_get("/health", self._handle_health)

        return app

    async def _handle_mcp_request(self, request: Request) -> Response:
        """Handle a JSON-RPC 2.0 MCP request"""
        try:
            data = await request.json()
        except ValueError:
            # Invalid JSON or a body that is not UTF-8
            return self._jsonrpc_error(None, -32700, "Parse error")

        if not self._is_valid_jsonrpc(data):
            return self._jsonrpc_error(None, -32600, "Invalid Request")

        method = data["method"]
        params = data.get("params") or {}
        request_id = data.get("id")

        self.logger.debug(f"MCP Request: {method}")

        if not isinstance(params, dict):
            return self._jsonrpc_error(request_id, -32602, "Invalid params")

        try:
            if method == "initialize":
                result = self._handle_initialize(params)
            elif method in ("notifications/initialized", "initialized"):
                result = None
            elif method == "ping":
                result = {}
            elif method == "tools/list":
                result = {"tools": self.registry.list_tools()}
            elif method == "tools/call":
                result = await self._handle_tools_call(params)
            else:
                return self._jsonrpc_error(request_id, -32601, f"Method not found: {method}")

        except DispatchError as e:
            return self._jsonrpc_error(request_id, e.code, e.message)
        except Exception:
            self.logger.exception(f"Error handling MCP request: {method}")
            return self._jsonrpc_error(request_id, -32603, "Internal server error")

        if "id" not in data:
            # Notification: nothing to answer
            return Response(status=202)
        return self._jsonrpc_success(request_id, result)

    async def _handle_method_not_allowed(self, request: Request) -> Response:
        return self._jsonrpc_error(None, -32000, "Method not allowed.", status=405)

    def _is_valid_jsonrpc(self, data: Any) -> bool:
        """Validate JSON-RPC 2.0 format"""
        return (
            isinstance(data, dict) and
            "method" in data and
            isinstance(data["method"], str)
        )

    def _jsonrpc_success(self, request_id: Any, result: Any) -> Response:
        """Create JSON-RPC success response"""
        response_data = {
            "jsonrpc": "2.0",
            "id": request_id,
            "result": result
        }
        return json_response(response_data)

    def _jsonrpc_error(self, request_id: Any, code: int, message: str, status: int = 200) -> Response:
        """Create JSON-RPC error response"""
        response_data = {
            "jsonrpc": "2.0",
            "error": {"code": code, "message": message},
            "id": request_id
        }
        return json_response(response_data, status=status)

    def _handle_initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle MCP initialize request"""
        client_version = params.get("protocolVersion")
        if not client_version:
            raise DispatchError("Missing protocolVersion", code=-32602)

        client_name = (params.get("clientInfo") or {}).get("name", "unknown")
        self.logger.info(f"Client initializing: {client_name}")

        # Echo the client's version when we speak it, otherwise offer ours
        version = client_version if client_version in SUPPORTED_PROTOCOL_VERSIONS else self.protocol_version

        return {
            "protocolVersion": version,
            "capabilities": self.capabilities,
            "serverInfo": self.server_info
        }

    async def _handle_tools_call(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle MCP tools/call request"""
        tool_name = params.get("name")
        if not tool_name or not isinstance(tool_name, str):
            raise DispatchError("Missing tool name", code=-32602)

        return await self.registry.execute_tool(tool_name, params.get("arguments"))

    async def _handle_info(self, request: Request) -> Response:
        """Server banner (non-MCP)"""
        return Response(text="MCP Server is running. Use POST /mcp to interact.")

    async def _handle_health(self, request: Request) -> Response:
        """Health check endpoint (non-MCP)"""
        return json_response({
            "status": "healthy",
            "server": self.server_info,
            "protocol": "MCP over HTTP (JSON-RPC 2.0)",
            "tools": len(self.registry)
        })
