"""HTTP surface for PIX charge creation (`POST /gerar-pix`)."""

import httpx
from fastapi import FastAPI, Request

from pixgate.common.config import Settings
from pixgate.common.errors import MethodNotAllowed
from pixgate.common.http import HANDLER_METHODS, create_service_app, read_json_body, require_payevo_auth
from pixgate.common.logging import configure_logging
from pixgate.common.payevo import PayEvoClient
from pixgate.common.startup import log_startup_config
from pixgate.common.tracing import setup_tracing
from pixgate.services.gerar_pix.service import ChargeService


def create_app(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> FastAPI:
    """Build the charge-creation app around one settings object."""

    app = create_service_app("pixgate gerar-pix", settings, allow_methods="POST, OPTIONS")
    service = ChargeService(PayEvoClient(settings, transport))

    @app.api_route("/gerar-pix", methods=HANDLER_METHODS)
    async def gerar_pix(request: Request):
        """Validate a PIX charge and forward it to PayEvo."""

        if request.method != "POST":
            raise MethodNotAllowed()
        require_payevo_auth(settings)
        body = await read_json_body(request)
        return await service.create_charge(body)

    return app


settings = Settings()
configure_logging(settings.service_name, settings.log_level)
setup_tracing(settings.service_name, settings.otel_exporter_otlp_endpoint)
log_startup_config(settings)
app = create_app(settings)
