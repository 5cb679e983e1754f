import asyncio
import contextlib
import json
import logging
from dataclasses import dataclass
from typing import Any

from meridian.exceptions import ClientNotConnectedError, RequestTimeoutError

from .base import BaseClient

JSONRPC_VERSION = "2.0"
REQUEST_TIMEOUT_SECONDS = 5.0


@dataclass
class PendingRequest:
    """An outstanding request awaiting its response or its timeout."""

    method: str
    future: asyncio.Future
    timer: asyncio.TimerHandle | None = None


class StdioClient(BaseClient):
    """Client for MCP servers using newline-delimited JSON-RPC over stdio.

    Requests are correlated with responses by id only, so several requests
    can be in flight at once and responses may arrive in any order. Every
    request expires after a fixed timeout; its pending entry is removed by
    whichever comes first, the response or the timeout.
    """

    def __init__(
        self,
        *,
        client_name: str = "working-client",
        client_version: str = "1.0.0",
        protocol_version: str = "2024-11-05",
        timeout_seconds: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self._client_name = client_name
        self._client_version = client_version
        self._protocol_version = protocol_version
        self._timeout_seconds = timeout_seconds

        self._process: asyncio.subprocess.Process | None = None
        self._next_id = 1
        self._pending: dict[int, PendingRequest] = {}
        self._reader_tasks: list[asyncio.Task] = []

        self._log = logging.getLogger(self.__class__.__name__)

    @property
    def pending_count(self) -> int:
        """Number of requests still waiting for a response."""
        return len(self._pending)

    async def connect(self, command: str, args: list[str] | None = None) -> dict[str, Any]:
        """Spawn the server, start the stream readers and run the handshake."""
        self._process = await asyncio.create_subprocess_exec(
            command,
            *(args or []),
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        self._reader_tasks = [
            asyncio.create_task(self._read_responses(self._process.stdout)),
            asyncio.create_task(self._read_diagnostics(self._process.stderr)),
        ]

        init_response = await self.request("initialize", self._build_init_params())
        await self.notify("notifications/initialized")

        self._log.info("Connected to MCP server")
        return init_response

    def _build_init_params(self) -> dict[str, Any]:
        """Build the MCP initialize request params."""
        return {
            "protocolVersion": self._protocol_version,
            "capabilities": {},
            "clientInfo": {"name": self._client_name, "version": self._client_version},
        }

    async def request(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send a request and wait for the response with the same id.

        Raises:
            ClientNotConnectedError: If connect() has not been called.
            RequestTimeoutError: If no response arrives within the timeout.
        """
        request_id = self._next_id
        self._next_id += 1

        loop = asyncio.get_running_loop()
        pending = PendingRequest(method=method, future=loop.create_future())
        self._pending[request_id] = pending
        pending.timer = loop.call_later(self._timeout_seconds, self._expire, request_id)

        message = {"jsonrpc": JSONRPC_VERSION, "id": request_id, "method": method, "params": params or {}}
        try:
            await self._write(message)
        except Exception:
            self._discard(request_id)
            raise

        return await pending.future

    async def notify(self, method: str, params: dict[str, Any] | None = None) -> None:
        """Send a notification; no response is expected."""
        message: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "method": method}
        if params is not None:
            message["params"] = params
        await self._write(message)

    async def _write(self, message: dict[str, Any]) -> None:
        """Write one JSON-RPC message line to the server's stdin."""
        if self._process is None or self._process.stdin is None:
            raise ClientNotConnectedError()
        self._process.stdin.write((json.dumps(message) + "\n").encode("utf-8"))
        await self._process.stdin.drain()

    def _expire(self, request_id: int) -> None:
        """Timer callback: fail the request if it is still pending."""
        pending = self._pending.pop(request_id, None)
        if pending is None:
            return
        self._log.warning(f"Request {request_id} ({pending.method}) timed out")
        if not pending.future.done():
            pending.future.set_exception(RequestTimeoutError(pending.method, request_id, self._timeout_seconds))

    def _discard(self, request_id: int) -> None:
        pending = self._pending.pop(request_id, None)
        if pending is not None and pending.timer is not None:
            pending.timer.cancel()

    def _dispatch(self, message: Any) -> None:
        """Route a parsed message to the pending request with the same id."""
        if not isinstance(message, dict):
            self._log.warning(f"Ignoring non-object message: {message!r}")
            return
        if "method" in message:
            self._log.debug(f"Ignoring server message: {message['method']}")
            return

        request_id = message.get("id")
        pending = self._pending.pop(request_id, None) if type(request_id) is int else None
        if pending is None:
            self._log.debug(f"No pending request for response id {request_id!r}")
            return

        if pending.timer is not None:
            pending.timer.cancel()
        if not pending.future.done():
            pending.future.set_result(message)

    async def _read_responses(self, stream: asyncio.StreamReader) -> None:
        """Read newline-delimited JSON from the server's stdout until EOF."""
        while True:
            try:
                line = await stream.readline()
            except ValueError as e:
                # Line over the reader limit; the stream drops it
                self._log.error(f"Dropping oversized response line: {e}")
                continue
            if not line:
                self._log.debug("Server output closed")
                return

            text = line.decode("utf-8", errors="replace").strip()
            if not text:
                continue

            try:
                message = json.loads(text)
            except json.JSONDecodeError as e:
                self._log.error(f"Failed to parse response: {e}: {text[:200]}")
                continue

            self._dispatch(message)

    async def _read_diagnostics(self, stream: asyncio.StreamReader) -> None:
        """Log the server's stderr output line by line."""
        while True:
            try:
                line = await stream.readline()
            except ValueError as e:
                self._log.warning(f"Dropping oversized server log line: {e}")
                continue
            if not line:
                return
            text = line.decode("utf-8", errors="replace").rstrip()
            if text:
                self._log.info(f"Server log: {text}")

    async def close(self) -> None:
        """Kill the server process. In-flight requests are left to time out."""
        for task in self._reader_tasks:
            task.cancel()
        await asyncio.gather(*self._reader_tasks, return_exceptions=True)
        self._reader_tasks = []

        if self._process is not None:
            if self._process.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    self._process.kill()
            await self._process.wait()
            self._process = None

    def is_alive(self) -> bool:
        """Check if server process is running."""
        return self._process is not None and self._process.returncode is None
