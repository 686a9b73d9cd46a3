"""
Async JSON-RPC client for the upstream Odoo server.

This is the I/O boundary - every outbound call happens here.

- One client per inbound request: its cookie jar carries the Odoo session
  from the authenticate call to the dependent call, and nowhere else
- No retries; a fixed deadline on each whole call turns slow calls into failures
- Every transport-level failure surfaces as UpstreamError
"""
import asyncio
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from app.config import Settings, get_settings
from app.schemas import JsonRpcRequest, JsonRpcResponse
from app.session import session_marker


class UpstreamError(Exception):
    """Network failure, timeout, non-2xx status or unreadable envelope."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class OdooReply:
    """Parsed envelope plus the exact bytes the upstream sent."""

    def __init__(self, body: JsonRpcResponse, content: bytes):
        self.body = body
        self.content = content

    @property
    def uid(self) -> Optional[Any]:
        return self.body.uid


class OdooClient:
    """
    JSON-RPC client bound to one base URL and one set of credentials.

    Usage:
        async with OdooClient(settings) as odoo:
            auth = await odoo.authenticate()
            if auth.uid:
                reply = await odoo.call_kw("res.partner", "search_read", [[]])
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.UPSTREAM_TIMEOUT_SECONDS),
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> "OdooClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _timeout_message(self) -> str:
        timeout_ms = int(self.settings.UPSTREAM_TIMEOUT_SECONDS * 1000)
        return f"timeout of {timeout_ms}ms exceeded"

    async def call(self, url: str, params: dict[str, Any]) -> OdooReply:
        """
        POST one JSON-RPC `call` envelope and parse the reply.

        Raises:
            UpstreamError: on any transport-level failure
        """
        envelope = JsonRpcRequest(params=params)
        payload = envelope.model_dump(exclude={"id"} if envelope.id is None else None)

        try:
            # deadline spans connect, send and the full body read
            response = await asyncio.wait_for(
                self._client.post(url, json=payload),
                self.settings.UPSTREAM_TIMEOUT_SECONDS,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise UpstreamError(self._timeout_message()) from e
        except httpx.HTTPError as e:
            raise UpstreamError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            raise UpstreamError(
                f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
            if not isinstance(data, dict):
                raise ValueError("envelope is not an object")
            body = JsonRpcResponse.model_validate(data)
        except (ValueError, ValidationError) as e:
            raise UpstreamError("Invalid JSON-RPC response from upstream") from e

        return OdooReply(body, response.content)

    async def authenticate(self) -> OdooReply:
        """
        Open an Odoo session with the configured credentials.

        The uid, when present, is recorded on the session marker; the reply
        is returned either way so callers decide what a missing uid means.
        """
        reply = await self.call(
            self.settings.authenticate_url,
            {
                "db": self.settings.ODOO_DATABASE,
                "login": self.settings.ODOO_USERNAME,
                "password": self.settings.ODOO_PASSWORD,
            },
        )

        if reply.uid:
            session_marker.record(reply.uid)
            print(f"  Session uid: {reply.uid}")

        return reply

    async def call_kw(
        self,
        model: str,
        method: str,
        args: list[Any],
        kwargs: Optional[dict[str, Any]] = None,
    ) -> OdooReply:
        """Invoke `model.method(*args, **kwargs)` through the dataset endpoint."""
        return await self.call(
            self.settings.call_kw_url(model, method),
            {
                "model": model,
                "method": method,
                "args": args,
                "kwargs": kwargs or {},
            },
        )
