"""
Async client for the contract gateway.

Binary keys and values are hex encoded before they leave the client and
decoded on the way back, so callers work with bytes only.
"""

import asyncio
import json
from typing import Any

from ledgerkv.contract.codec import decode_hex, encode_batch, encode_hex
from ledgerkv.models.exceptions import NotFoundError


class GatewayError(Exception):
    """Raised when the gateway answers with an unexpected status."""

    def __init__(self, status: int, message: str, code: str | None = None):
        self.status = status
        self.message = message
        self.code = code
        super().__init__(f"Gateway returned {status}: {message}")


class LedgerKVClient:
    """
    Client for the key-value contract gateway.

    Provides:
    - put(batch): Write a batch of byte keys and values
    - get(key): Read a value, None if absent
    - get_all(): Read every pair
    - remove(key): Delete a key, False if absent
    - key_exists(key): Check for a key
    """

    def __init__(self, host: str, port: int, timeout: float = 5.0):
        self.host = host
        self.port = port
        self.timeout = timeout

    async def request(
        self,
        method: str,
        path: str,
        body: dict | None = None,
    ) -> tuple[int, dict]:
        """
        Make an HTTP request and return status code and parsed JSON response.

        Args:
            method: HTTP method.
            path: Request path.
            body: JSON body to send, if any.

        Returns:
            Tuple of (status code, decoded JSON body).

        Raises:
            GatewayError: With status 0 if the connection drops or the
                reply is not HTTP.
        """
        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(self.host, self.port), timeout=self.timeout
        )

        try:
            body_bytes = b""
            if body is not None:
                body_bytes = json.dumps(body).encode()

            request_line = f"{method} {path} HTTP/1.1\r\n"
            headers = f"Host: {self.host}\r\n"

            if body is not None:
                headers += "Content-Type: application/json\r\n"
            headers += f"Content-Length: {len(body_bytes)}\r\n"
            headers += "Connection: close\r\n"
            headers += "\r\n"

            writer.write(request_line.encode() + headers.encode() + body_bytes)
            await writer.drain()

            raw = await asyncio.wait_for(reader.read(), timeout=self.timeout)
        except ConnectionError as e:
            raise GatewayError(0, f"Connection lost: {e}") from e
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError:
                pass

        response_text = raw.decode("utf-8", errors="replace")
        head, sep, body_text = response_text.partition("\r\n\r\n")
        status_parts = head.split("\r\n", 1)[0].split(" ", 2)
        if not sep or len(status_parts) < 2 or not status_parts[1].isdigit():
            raise GatewayError(0, f"Malformed reply from gateway: {response_text[:80]!r}")
        status_code = int(status_parts[1])

        try:
            body_json = json.loads(body_text) if body_text else {}
        except json.JSONDecodeError:
            body_json = {"raw": body_text}

        return status_code, body_json

    async def submit(self, function: str, *args: str) -> str:
        return await self._invoke("/transactions/submit", function, args)

    async def evaluate(self, function: str, *args: str) -> str:
        return await self._invoke("/transactions/evaluate", function, args)

    async def _invoke(self, path: str, function: str, args: tuple[str, ...]) -> str:
        status, body = await self.request(
            "POST", path, body={"function": function, "args": list(args)}
        )
        if status != 200:
            raise GatewayError(status, body.get("error", body.get("raw", "")), body.get("code"))
        return body["payload"]

    async def metadata(self) -> dict[str, Any]:
        status, body = await self.request("GET", "/contract")
        if status != 200:
            raise GatewayError(status, body.get("error", ""), body.get("code"))
        return body

    async def put(self, batch: dict[bytes, bytes]) -> None:
        pairs = {encode_hex(key): encode_hex(value) for key, value in batch.items()}
        await self.submit("put", encode_batch(pairs))

    async def get(self, key: bytes) -> bytes | None:
        try:
            payload = await self.evaluate("get", encode_hex(key))
        except GatewayError as e:
            if e.code == NotFoundError.code:
                return None
            raise
        return decode_hex(payload)

    async def get_all(self) -> dict[bytes, bytes]:
        payload = await self.evaluate("getAll")
        pairs = json.loads(payload)
        return {decode_hex(key): decode_hex(value) for key, value in pairs.items()}

    async def remove(self, key: bytes) -> bool:
        try:
            await self.submit("delete", encode_hex(key))
        except GatewayError as e:
            if e.code == NotFoundError.code:
                return False
            raise
        return True

    async def key_exists(self, key: bytes) -> bool:
        return await self.evaluate("keyExists", encode_hex(key)) == "true"
