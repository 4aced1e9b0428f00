from __future__ import annotations

import json
import sys
import threading
from typing import Any, TextIO

from ..app_context import AppContext
from ..tools.base import Invocation

DEFAULT_PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class RpcError(Exception):
    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class StdioServer:
    """Newline-delimited JSON-RPC 2.0 server over a pair of text streams.

    Supported methods: initialize, ping, tools/list, tools/call. Notifications
    (requests without an id) are accepted and never answered. Each tools/call
    runs on its own thread so a slow command does not hold up other requests;
    output lines are serialized by a lock.
    """

    def __init__(self, app: AppContext, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.app = app
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self._write_lock = threading.Lock()
        self._workers: list[threading.Thread] = []

    def _send(self, msg: dict[str, Any]) -> None:
        line = json.dumps(msg, ensure_ascii=False) + "\n"
        with self._write_lock:
            self.stdout.write(line)
            self.stdout.flush()

    def _reply(self, rid: Any, result: Any = None, error: RpcError | None = None) -> dict[str, Any]:
        msg: dict[str, Any] = {"jsonrpc": "2.0", "id": rid}
        if error is not None:
            msg["error"] = {"code": error.code, "message": error.message}
        else:
            msg["result"] = result
        return msg

    # ---- methods ----

    def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        version = params.get("protocolVersion")
        if not isinstance(version, str) or not version:
            version = DEFAULT_PROTOCOL_VERSION
        s = self.app.settings
        return {
            "protocolVersion": version,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {"name": s.name, "version": s.version},
        }

    def _tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": [spec.to_mcp() for spec in self.app.tools.list_specs()]}

    def _tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        if not isinstance(name, str):
            raise RpcError(INVALID_PARAMS, "tools/call requires a string 'name'")
        args = params.get("arguments")
        res = self.app.dispatcher.dispatch(Invocation(tool_name=name, arguments=args if args is not None else {}))
        return res.to_dict()

    def handle(self, req: Any) -> dict[str, Any] | None:
        """Handle one decoded request; returns the response, or None for notifications."""
        if not isinstance(req, dict):
            return self._reply(None, error=RpcError(INVALID_REQUEST, "Request must be a JSON object"))

        is_notification = "id" not in req
        rid = req.get("id")
        method = req.get("method")
        params = req.get("params")

        if is_notification:
            return None
        if not isinstance(method, str):
            return self._reply(rid, error=RpcError(INVALID_REQUEST, "Missing method"))
        if params is None:
            params = {}
        if not isinstance(params, dict):
            return self._reply(rid, error=RpcError(INVALID_PARAMS, "params must be an object"))

        handlers = {
            "initialize": self._initialize,
            "ping": lambda _p: {},
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
        }
        fn = handlers.get(method)
        if fn is None:
            return self._reply(rid, error=RpcError(METHOD_NOT_FOUND, f"Unknown method: {method}"))
        try:
            return self._reply(rid, fn(params))
        except RpcError as e:
            return self._reply(rid, error=e)
        except Exception as e:
            return self._reply(rid, error=RpcError(INTERNAL_ERROR, str(e)))

    def _handle_and_send(self, req: Any) -> None:
        resp = self.handle(req)
        if resp is not None:
            self._send(resp)

    def serve(self) -> None:
        """Read requests until stdin closes, then wait for in-flight tool calls."""
        for line in self.stdin:
            line = line.strip()
            if not line:
                continue
            try:
                req = json.loads(line)
            except json.JSONDecodeError:
                self._send(self._reply(None, error=RpcError(PARSE_ERROR, "Parse error")))
                continue

            if isinstance(req, dict) and req.get("method") == "tools/call" and "id" in req:
                t = threading.Thread(target=self._handle_and_send, args=(req,), daemon=True)
                self._workers = [w for w in self._workers if w.is_alive()]
                self._workers.append(t)
                t.start()
            else:
                self._handle_and_send(req)

        for t in self._workers:
            t.join()
