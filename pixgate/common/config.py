"""Environment-driven settings shared by both PIX handlers.

Each service process builds one `Settings` at startup and hands it to its
app factory. Handlers never read the environment themselves (see
`.env.example`).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PAYEVO_ENDPOINT = "https://apiv2.payevo.com.br/functions/v1/transactions"


class Settings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "pixgate"
    log_level: str = "INFO"
    payevo_endpoint: str = DEFAULT_PAYEVO_ENDPOINT
    payevo_auth: str = ""
    payevo_timeout_seconds: float = 30.0
    allowed_origins: str = "*"
    otel_exporter_otlp_endpoint: str | None = None
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def allowed_origin_list(self) -> list[str]:
        """Comma-separated `ALLOWED_ORIGINS`, trimmed, empty entries dropped."""

        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def payevo_configured(self) -> bool:
        return bool(self.payevo_auth)
