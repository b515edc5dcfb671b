"""
App-wide CORS middleware with paths that answer their own CORS.
"""
from typing import Iterable
from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send


class AppCORSMiddleware(CORSMiddleware):
    """
    CORSMiddleware that passes requests for exempt paths straight through.

    Exempt routes set their own (permissive) CORS headers, including on
    pre-flight requests, so the configured origin list never applies to them.
    """

    def __init__(self, app: ASGIApp, exempt_paths: Iterable[str] = (), **kwargs):
        super().__init__(app, **kwargs)
        self.exempt_paths = frozenset(exempt_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"].rstrip("/") in self.exempt_paths:
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
