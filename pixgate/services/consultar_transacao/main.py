"""HTTP surface for transaction lookup (`GET /consultar-transacao`)."""

import httpx
from fastapi import FastAPI, Request

from pixgate.common.config import Settings
from pixgate.common.errors import MethodNotAllowed
from pixgate.common.http import HANDLER_METHODS, create_service_app, require_payevo_auth
from pixgate.common.logging import configure_logging
from pixgate.common.payevo import PayEvoClient
from pixgate.common.startup import log_startup_config
from pixgate.common.tracing import setup_tracing
from pixgate.services.consultar_transacao.service import TransactionLookupService


def create_app(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> FastAPI:
    """Build the transaction-lookup app around one settings object."""

    app = create_service_app("pixgate consultar-transacao", settings, allow_methods="GET, OPTIONS")
    service = TransactionLookupService(PayEvoClient(settings, transport))

    @app.api_route("/consultar-transacao", methods=HANDLER_METHODS)
    @app.api_route("/consultar-transacao/{transaction_path:path}", methods=HANDLER_METHODS)
    async def consultar_transacao(request: Request):
        """Relay PayEvo's view of one transaction."""

        if request.method != "GET":
            raise MethodNotAllowed()
        require_payevo_auth(settings)
        return await service.lookup(request.query_params.get("id"), request.url.path)

    return app


settings = Settings()
configure_logging(settings.service_name, settings.log_level)
setup_tracing(settings.service_name, settings.otel_exporter_otlp_endpoint)
log_startup_config(settings)
app = create_app(settings)
