import asyncio
import json
import logging
import time
from http import HTTPStatus
from typing import Any, Callable, Dict, List, Optional, Tuple, Type
from urllib.parse import parse_qs, urlparse

from .request import Request
from .response import Response, error_response

logger = logging.getLogger(__name__)

# Default limit for request bodies (10MB)
MAX_BODY_BYTES = 10 * 1024 * 1024

HEAD_TIMEOUT = 5.0
BODY_TIMEOUT = 30.0
DISCARD_CHUNK = 64 * 1024


class RequestError(Exception):
    """Raised while reading a request that should still get a reply."""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(message)


class HTTPServer:
    def __init__(self, host: str = '0.0.0.0', port: int = 8080, max_body_bytes: int = MAX_BODY_BYTES):
        self.host = host
        self.port = port
        self.max_body_bytes = max_body_bytes
        self.routes: Dict[Tuple[str, str], Callable] = {}
        self.error_handlers: Dict[Type[BaseException], Callable[[BaseException], Response]] = {}

    def route(self, path: str, methods: Optional[List] = None):
        """Decorator for registering route handlers"""
        if methods is None:
            methods = ['GET']

        def decorator(handler):
            for method in methods:
                self.routes[(method.upper(), path)] = handler
            return handler
        return decorator

    def error_handler(self, exc_type: Type[BaseException]):
        """Decorator for turning an exception type raised by a handler into a response"""
        def decorator(handler):
            self.error_handlers[exc_type] = handler
            return handler
        return decorator

    async def parse_request(self, reader: asyncio.StreamReader) -> Optional[Request]:
        """
        Read one request from the stream.

        Returns None when the peer closed the connection or went quiet.
        Raises RequestError for requests that arrived but cannot be served.
        """
        try:
            start_line = await asyncio.wait_for(reader.readline(), timeout=HEAD_TIMEOUT)
        except asyncio.TimeoutError:
            return None
        if not start_line:
            return None

        parts = start_line.decode('latin-1').strip().split(' ', 2)
        if len(parts) != 3:
            raise RequestError(400, "Malformed request line")
        method, target, version = parts

        headers = await self._read_headers(reader)
        body = await self._read_body(reader, headers)

        url = urlparse(target)
        return Request(
            method=method.upper(),
            path=url.path,
            headers=headers,
            query_params=parse_qs(url.query),
            body=body,
            version=version
        )

    async def _read_headers(self, reader: asyncio.StreamReader) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        while True:
            try:
                line = await asyncio.wait_for(reader.readline(), timeout=HEAD_TIMEOUT)
            except asyncio.TimeoutError:
                raise RequestError(400, "Timed out reading headers") from None

            if line in (b'\r\n', b'\n', b''):
                return headers

            name, sep, value = line.decode('latin-1').partition(':')
            if sep:
                headers[name.strip().lower()] = value.strip()

    async def _read_body(self, reader: asyncio.StreamReader, headers: Dict[str, str]) -> bytes:
        raw_length = headers.get('content-length', '0')
        try:
            content_length = int(raw_length)
        except ValueError:
            raise RequestError(400, f"Invalid content-length: {raw_length!r}") from None
        if content_length < 0:
            raise RequestError(400, f"Invalid content-length: {raw_length!r}")
        if content_length == 0:
            return b''

        if content_length > self.max_body_bytes:
            # Drain the body so the error reply is not lost to a reset
            await self._discard(reader, content_length)
            raise RequestError(
                413, f"Request body too large: {content_length} > {self.max_body_bytes} bytes"
            )

        try:
            return await asyncio.wait_for(reader.readexactly(content_length), timeout=BODY_TIMEOUT)
        except (asyncio.TimeoutError, asyncio.IncompleteReadError):
            raise RequestError(400, "Incomplete request body") from None

    async def _discard(self, reader: asyncio.StreamReader, remaining: int) -> None:
        try:
            while remaining > 0:
                chunk = await asyncio.wait_for(
                    reader.read(min(remaining, DISCARD_CHUNK)), timeout=BODY_TIMEOUT
                )
                if not chunk:
                    return
                remaining -= len(chunk)
        except asyncio.TimeoutError:
            logger.debug(f"Gave up discarding body, {remaining} bytes left")

    def build_response(self, response: Response) -> bytes:
        """Serialize a response, filling in the standard headers"""
        try:
            reason = HTTPStatus(response.status).phrase
        except ValueError:
            reason = 'Unknown'

        headers = {'content-type': 'text/plain', **response.headers}
        headers['content-length'] = str(len(response.body))
        headers['connection'] = 'keep-alive'
        headers['server'] = 'LedgerKVGateway/1.0'

        head = f"HTTP/1.1 {response.status} {reason}\r\n"
        head += ''.join(f"{name}: {value}\r\n" for name, value in headers.items())
        return head.encode('latin-1') + b'\r\n' + response.body

    def _find_error_handler(self, exc: BaseException) -> Optional[Callable[[BaseException], Response]]:
        # Most specific registered base class wins
        for klass in type(exc).__mro__:
            handler = self.error_handlers.get(klass)
            if handler is not None:
                return handler
        return None

    async def handle_request(self, request: Request) -> Response:
        """Route request to appropriate handler"""
        handler = self.routes.get((request.method, request.path))

        if handler is None:
            if any(path == request.path for _, path in self.routes):
                return error_response(405, f"Method {request.method} not allowed on {request.path}")
            return error_response(404, f"Route not found: {request.path}")

        try:
            return _as_response(await handler(request))
        except Exception as e:
            error_handler = self._find_error_handler(e)
            if error_handler is not None:
                return error_handler(e)

            logger.exception(f"Handler error on {request.method} {request.path}: {e}")
            return error_response(500, f"Internal error: {e}")

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Serve requests on one connection until it closes or asks to"""
        peer = writer.get_extra_info('peername')

        try:
            while True:
                try:
                    request = await self.parse_request(reader)
                except RequestError as e:
                    logger.warning(f"Rejected request from {peer}: {e.message}")
                    writer.write(self.build_response(error_response(e.status, e.message)))
                    await writer.drain()
                    break

                if request is None:
                    break

                started = time.perf_counter()
                response = await self.handle_request(request)
                writer.write(self.build_response(response))
                await writer.drain()

                logger.debug(
                    f"{request.method} {request.path} -> {response.status} "
                    f"({len(response.body)} bytes, {(time.perf_counter() - started) * 1000:.2f}ms)"
                )

                if request.headers.get('connection', '').lower() == 'close':
                    break

        except ConnectionResetError:
            pass
        except Exception as e:
            logger.error(f"Connection error from {peer}: {e}")
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except (ConnectionError, OSError) as e:
                logger.debug(f"Error closing connection from {peer}: {e}")

    async def start(self):
        """Bind and serve until cancelled"""
        server = await asyncio.start_server(self.handle_client, self.host, self.port)

        host, self.port = server.sockets[0].getsockname()[:2]
        logger.info(f'Ledger KV gateway running on http://{host}:{self.port}')

        try:
            async with server:
                await server.serve_forever()
        except asyncio.CancelledError:
            logger.info("Gateway shutdown requested")
        finally:
            await self.shutdown(server)

    async def shutdown(self, server):
        server.close()
        await server.wait_closed()
        logger.info("Gateway stopped")


def _as_response(result: Any) -> Response:
    if isinstance(result, Response):
        return result
    if isinstance(result, dict):
        return Response(
            status=200,
            headers={'content-type': 'application/json'},
            body=json.dumps(result).encode()
        )
    if isinstance(result, str):
        return Response(status=200, body=result.encode())
    if isinstance(result, bytes):
        return Response(status=200, body=result)
    raise TypeError(f"Handler returned {type(result).__name__}, expected Response, dict, str or bytes")
