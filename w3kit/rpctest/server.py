"""A fake JSON-RPC endpoint that answers one request defined in a golden file.

Golden files define a single request and the corresponding response::

    // Comments and empty lines are ignored.
    // The request starts with ">".
    > {"jsonrpc":"2.0","id":1,"method":"eth_chainId"}
    // The response starts with "<".
    < {"jsonrpc":"2.0","id":1,"result":"0x1"}
"""

from __future__ import annotations

import io
import json
import logging
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import IO, Any

_log = logging.getLogger(__name__)


class GoldenError(Exception):
    """Raised when the golden file or a request to the server is invalid."""


class Server:
    """Serve a golden file over HTTP on a local port.

    Errors found while serving are answered with status 500 and raised again
    by :meth:`close`.
    """

    def __init__(self, reader: IO[Any] | str | bytes) -> None:
        if isinstance(reader, str):
            reader = io.StringIO(reader)
        elif isinstance(reader, (bytes, bytearray)):
            reader = io.BytesIO(reader)
        self._reader = reader
        self._lock = threading.Lock()
        self._loaded = False
        self._load_error: GoldenError | None = None
        self._request = b""
        self._response = b""
        self._errors: list[GoldenError] = []
        self._closed = False

        self._httpd = ThreadingHTTPServer(("127.0.0.1", 0), self._make_handler())
        self._thread = threading.Thread(target=self._httpd.serve_forever, daemon=True)
        self._thread.start()

    @classmethod
    def from_file(cls, filename: str) -> Server:
        """Return a server for the golden file with the given name."""
        return cls(open(filename, "rb"))

    def url(self) -> str:
        """Return the server's endpoint URL."""
        host, port = self._httpd.server_address[:2]
        return f"http://{host}:{port}"

    def close(self) -> None:
        """Shut the server down and raise the first error found while serving."""
        if not self._closed:
            self._closed = True
            self._httpd.shutdown()
            self._httpd.server_close()
            self._thread.join()
        if self._errors:
            raise self._errors[0]

    def __enter__(self) -> Server:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _make_handler(self) -> type[BaseHTTPRequestHandler]:
        server = self

        class _Handler(BaseHTTPRequestHandler):
            def _serve(self) -> None:
                length = int(self.headers.get("Content-Length") or 0)
                body = self.rfile.read(length)
                try:
                    out = server._answer(body)
                except GoldenError as exc:
                    self._reply(500, "text/plain", str(exc).encode())
                    return
                self._reply(200, "application/json", out)

            def _reply(self, status: int, content_type: str, payload: bytes) -> None:
                self.send_response(status)
                self.send_header("Content-Type", content_type)
                self.send_header("Content-Length", str(len(payload)))
                self.end_headers()
                self.wfile.write(payload)

            do_POST = _serve
            do_GET = _serve

            def log_message(self, format: str, *args: Any) -> None:
                # Route access logs to the logging module instead of stderr.
                _log.debug("%s - " + format, self.address_string(), *args)

        return _Handler

    def _answer(self, body: bytes) -> bytes:
        try:
            self._load()
            if body != self._request:
                raise GoldenError(
                    "invalid request body (-want, +got)\n"
                    f"-{self._request.decode(errors='replace')}\n"
                    f"+{body.decode(errors='replace')}"
                )
        except GoldenError as exc:
            self._errors.append(exc)
            raise
        return self._response

    def _load(self) -> None:
        with self._lock:
            if not self._loaded:
                self._loaded = True
                try:
                    self._read_golden()
                except GoldenError as exc:
                    self._load_error = exc
                    raise
                finally:
                    close = getattr(self._reader, "close", None)
                    if close is not None:
                        close()
            elif self._load_error is not None:
                raise self._load_error

    def _read_golden(self) -> None:
        try:
            for raw in self._reader:
                line = raw.encode() if isinstance(raw, str) else bytes(raw)
                line = line.removesuffix(b"\n").removesuffix(b"\r")
                if not line:
                    continue
                marker = line[:1]
                if marker == b">":
                    self._request = line.strip(b"> ")
                elif marker == b"<":
                    self._response = line.strip(b"< ")
                elif marker == b"/":
                    continue
                else:
                    text = line.decode(errors="replace")
                    raise GoldenError(f"invalid line {json.dumps(text)}")
        except OSError as exc:
            raise GoldenError(f"failed to scan file: {exc}") from exc