"""Base MCP (Model Context Protocol) server implementing JSON-RPC 2.0 over stdio.

Accepts both framings seen from MCP clients and answers in the one the
client used:
    {json_payload}\\n                          (newline-delimited, MCP stdio)
    Content-Length: N\\r\\n\\r\\n{json_payload}  (LSP-style)

Tool arguments are validated against each tool's pydantic model before the
handler runs. Handler failures come back as ``isError`` tool results, never
as JSON-RPC errors, so one bad call cannot take the server down.
Notifications (requests without an id) receive no response.
"""

import json
import logging
import sys
import traceback
from typing import Any, BinaryIO, Callable, Dict, Optional, Type

from pydantic import BaseModel, ValidationError

from spapi_mcp.schemas import error_response, is_tool_response

logger = logging.getLogger("spapi.mcp.base")

PROTOCOL_VERSION = "2024-11-05"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

FRAMING_NEWLINE = "newline"
FRAMING_CONTENT_LENGTH = "content-length"

# Returned by _read_message for input that is not valid JSON.
PARSE_FAILED = object()


def configure_logging(level: str = "INFO") -> None:
    """Send logs to stderr so they do not interfere with the stdio transport."""
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def format_validation_error(tool_name: str, exc: ValidationError) -> str:
    lines = [f"❌ Invalid arguments for {tool_name}:"]
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "(arguments)"
        lines.append(f"- {location}: {err.get('msg')}")
    return "\n".join(lines)


class MCPServer:
    """Base MCP server with JSON-RPC 2.0 dispatch over stdio."""

    # Standard JSON-RPC error codes
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    def __init__(
        self,
        name: str = "sp-api-dev-mcp",
        version: str = "1.0.0",
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
    ):
        self.name = name
        self.version = version

        # name -> {description, args_model, input_schema, handler}
        self._tools: Dict[str, dict] = {}

        self._stdin = stdin
        self._stdout = stdout
        self._framing = FRAMING_NEWLINE
        self._initialized = False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_tool(
        self,
        name: str,
        description: str,
        args_model: Type[BaseModel],
        handler: Callable[[BaseModel], Any],
    ) -> None:
        """Register a tool that clients can invoke via tools/call.

        Args:
            name: Unique tool name (e.g. "search_orders").
            description: Human-readable description of the tool.
            args_model: Pydantic model the raw arguments are validated into.
                Its JSON Schema is published by tools/list.
            handler: Callable receiving the validated model instance.
        """
        self._tools[name] = {
            "description": description,
            "args_model": args_model,
            "input_schema": args_model.model_json_schema(),
            "handler": handler,
        }
        logger.info("Registered tool: %s", name)

    @property
    def tool_names(self):
        return list(self._tools)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    @property
    def stdin(self) -> BinaryIO:
        return self._stdin if self._stdin is not None else sys.stdin.buffer

    @property
    def stdout(self) -> BinaryIO:
        return self._stdout if self._stdout is not None else sys.stdout.buffer

    def _read_message(self) -> Optional[Any]:
        """Read one JSON-RPC message in either framing.

        Returns None on EOF and PARSE_FAILED for a body that is not JSON.
        Stray non-JSON lines are logged and skipped.
        """
        content_length = None
        while True:
            line = self.stdin.readline()
            if not line:
                return None
            text = line.decode("utf-8", errors="replace").strip()
            if text == "":
                if content_length is not None:
                    break
                continue
            if text.lower().startswith("content-length:"):
                try:
                    content_length = int(text.split(":", 1)[1].strip())
                except ValueError:
                    logger.warning("Invalid Content-Length header: %s", text)
                continue
            if content_length is None and text[0] in "{[":
                try:
                    message = json.loads(text)
                except json.JSONDecodeError:
                    logger.warning("Malformed JSON line: %s", text[:200])
                    self._framing = FRAMING_NEWLINE
                    return PARSE_FAILED
                self._framing = FRAMING_NEWLINE
                return message
            if content_length is None:
                logger.warning("Ignoring unexpected input: %s", text[:200])

        body = self.stdin.read(content_length)
        if not body:
            return None
        self._framing = FRAMING_CONTENT_LENGTH
        try:
            return json.loads(body.decode("utf-8"))
        except ValueError as exc:
            logger.warning("JSON decode error in framed message: %s", exc)
            return PARSE_FAILED

    def _write_message(self, obj: dict) -> None:
        body = json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        if self._framing == FRAMING_CONTENT_LENGTH:
            self.stdout.write(f"Content-Length: {len(body)}\r\n\r\n".encode("utf-8"))
            self.stdout.write(body)
        else:
            self.stdout.write(body + b"\n")
        self.stdout.flush()

    # ------------------------------------------------------------------
    # JSON-RPC helpers
    # ------------------------------------------------------------------

    def _make_response(self, request_id: Any, result: Any) -> dict:
        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    def _make_error(self, request_id: Any, code: int, message: str, data: Any = None) -> dict:
        err: Dict[str, Any] = {"code": code, "message": message}
        if data is not None:
            err["data"] = data
        return {"jsonrpc": "2.0", "id": request_id, "error": err}

    # ------------------------------------------------------------------
    # Method dispatch
    # ------------------------------------------------------------------

    def handle_message(self, msg: Any) -> Optional[dict]:
        """Return the response for one decoded message, or None for notifications."""
        if not isinstance(msg, dict) or "method" not in msg:
            request_id = msg.get("id") if isinstance(msg, dict) else None
            return self._make_error(request_id, self.INVALID_REQUEST, "Missing 'method' field")
        return self._dispatch(msg)

    def _dispatch(self, msg: dict) -> Optional[dict]:
        method = msg.get("method", "")
        params = msg.get("params") or {}
        request_id = msg.get("id")
        is_notification = "id" not in msg

        logger.debug("Dispatch: method=%s, id=%s", method, request_id)

        try:
            result = self._handle_method(method, params)
        except _MethodNotFound as exc:
            if is_notification:
                return None
            return self._make_error(request_id, self.METHOD_NOT_FOUND, str(exc))
        except _InvalidParams as exc:
            if is_notification:
                return None
            return self._make_error(request_id, self.INVALID_PARAMS, str(exc))
        except Exception as exc:
            logger.error("Error handling %s: %s\n%s", method, exc, traceback.format_exc())
            if is_notification:
                return None
            return self._make_error(request_id, self.INTERNAL_ERROR, str(exc))

        if is_notification:
            return None
        return self._make_response(request_id, result)

    def _handle_method(self, method: str, params: dict) -> Any:
        if method == "initialize":
            return self._handle_initialize(params)

        if method == "notifications/initialized":
            self._initialized = True
            return None

        if method == "tools/list":
            return self._handle_tools_list(params)

        if method == "tools/call":
            return self._handle_tools_call(params)

        if method == "ping":
            return {}

        if method.startswith("notifications/"):
            logger.debug("Ignoring notification: %s", method)
            return None

        raise _MethodNotFound(f"Unknown method: {method}")

    # ------------------------------------------------------------------
    # MCP handlers
    # ------------------------------------------------------------------

    def _handle_initialize(self, params: dict) -> dict:
        client = (params.get("clientInfo") or {}).get("name", "unknown")
        logger.info("Initialize from client: %s", client)
        capabilities: Dict[str, Any] = {}
        if self._tools:
            capabilities["tools"] = {"listChanged": False}
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": capabilities,
            "serverInfo": {"name": self.name, "version": self.version},
        }

    def _handle_tools_list(self, params: dict) -> dict:
        return {
            "tools": [
                {
                    "name": name,
                    "description": info["description"],
                    "inputSchema": info["input_schema"],
                }
                for name, info in self._tools.items()
            ]
        }

    def _handle_tools_call(self, params: dict) -> dict:
        """Validate arguments, run the handler, normalize its result."""
        tool_name = params.get("name", "")
        arguments = params.get("arguments") or {}

        if tool_name not in self._tools:
            raise _InvalidParams(f"Unknown tool: {tool_name}")
        tool = self._tools[tool_name]

        try:
            args = tool["args_model"].model_validate(arguments)
        except ValidationError as exc:
            logger.warning("Tool %s rejected arguments: %d error(s)", tool_name, exc.error_count())
            return error_response(format_validation_error(tool_name, exc))

        logger.debug("Calling tool %s", tool_name)
        try:
            result = tool["handler"](args)
        except Exception as exc:
            logger.error("Tool %s raised: %s\n%s", tool_name, exc, traceback.format_exc())
            return error_response(f"Error: {exc}")

        if is_tool_response(result):
            return result
        if isinstance(result, str):
            text = result
        else:
            text = json.dumps(result, indent=2, default=str)
        return {"content": [{"type": "text", "text": text}]}

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Read and dispatch messages until stdin closes."""
        logger.info("MCP server '%s' v%s starting (protocol %s)", self.name, self.version, PROTOCOL_VERSION)

        try:
            while True:
                msg = self._read_message()
                if msg is None:
                    logger.info("EOF on stdin, shutting down.")
                    break
                if msg is PARSE_FAILED:
                    self._write_message(self._make_error(None, self.PARSE_ERROR, "Parse error"))
                    continue
                response = self.handle_message(msg)
                if response is not None:
                    self._write_message(response)
        except KeyboardInterrupt:
            logger.info("Interrupted, shutting down.")
        except Exception as exc:
            logger.critical("Fatal error in main loop: %s\n%s", exc, traceback.format_exc())
            sys.exit(1)


class _MethodNotFound(Exception):
    """Raised when a JSON-RPC method is not found."""


class _InvalidParams(Exception):
    """Raised when a request names a tool that does not exist."""
