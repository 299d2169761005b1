"""PayEvo transactions API client and the relay policy both handlers share."""

from typing import Any
from urllib.parse import quote

import httpx
from starlette.responses import JSONResponse, Response

from pixgate.common.config import Settings
from pixgate.common.errors import UpstreamError, UpstreamUnreachable
from pixgate.common.logging import logger
from pixgate.common.metrics import upstream_latency_seconds, upstream_requests_total


class PayEvoClient:
    """Issues at most one call to PayEvo per handler invocation. No retries."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.endpoint = settings.payevo_endpoint
        self.auth = settings.payevo_auth
        self.timeout = settings.payevo_timeout_seconds
        self.service_name = settings.service_name
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "accept": "application/json",
            "authorization": self.auth,
        }

    def transaction_url(self, transaction_id: str) -> str:
        return f"{self.endpoint.rstrip('/')}/{quote(transaction_id, safe='')}"

    async def create_transaction(self, payload: dict[str, Any]) -> httpx.Response:
        return await self._request("create_transaction", "POST", self.endpoint, json=payload)

    async def get_transaction(self, transaction_id: str) -> httpx.Response:
        return await self._request("get_transaction", "GET", self.transaction_url(transaction_id))

    async def _request(self, operation: str, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send one request; transport failures become `UpstreamUnreachable`."""

        with upstream_latency_seconds.labels(service=self.service_name, operation=operation).time():
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                    response = await client.request(method, url, headers=self._headers(), **kwargs)
            except httpx.HTTPError as exc:
                upstream_requests_total.labels(
                    service=self.service_name,
                    operation=operation,
                    outcome="unreachable",
                ).inc()
                logger.exception("payevo %s failed: %s", operation, exc)
                raise UpstreamUnreachable() from exc

        outcome = "success" if response.is_success else "rejected"
        upstream_requests_total.labels(service=self.service_name, operation=operation, outcome=outcome).inc()
        logger.info("payevo %s status=%s", operation, response.status_code)
        return response


def parse_body(response: httpx.Response) -> Any:
    """Upstream JSON body, or None when it is empty or not JSON."""

    try:
        return response.json()
    except ValueError:
        return None


def relay(response: httpx.Response, data: Any, fallback_message: str) -> Response:
    """Turn a PayEvo reply into the handler's reply.

    2xx bodies and statuses pass through unchanged. Anything else raises
    `UpstreamError` with PayEvo's status, its `message` when it sent one, and
    the parsed body as details. `data` is `parse_body(response)`, parsed once
    by the caller.
    """

    if not response.is_success:
        message = data.get("message") if isinstance(data, dict) else None
        if not isinstance(message, str):
            message = fallback_message
        raise UpstreamError(message, response.status_code, details=data)
    if response.status_code == 204:
        return Response(status_code=204)
    return JSONResponse(data, status_code=response.status_code)
