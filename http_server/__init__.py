"""
Minimal asyncio HTTP/1.1 server used as the contract gateway.
"""

from http_server.request import Request
from http_server.response import Response, response
from http_server.server import HTTPServer

__all__ = ["HTTPServer", "Request", "Response", "response"]
