"""CORS header resolution for the PIX handlers."""

ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"


def resolve_allow_origin(allowed_origins: list[str], origin: str | None) -> str:
    """Pick the `Access-Control-Allow-Origin` value for one request.

    A wildcard entry allows everything. Otherwise a listed origin is echoed
    back and anything else gets the first configured origin.
    """

    if "*" in allowed_origins:
        return "*"
    if origin and origin in allowed_origins:
        return origin
    return allowed_origins[0] if allowed_origins else "*"


def build_cors_headers(allowed_origins: list[str], origin: str | None, allow_methods: str) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": resolve_allow_origin(allowed_origins, origin),
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Access-Control-Allow-Methods": allow_methods,
        "Vary": "Origin",
    }
