"""Transaction lookup against PayEvo."""

from starlette.responses import Response

from pixgate.common.errors import BadRequest
from pixgate.common.logging import logger, transaction_id_ctx
from pixgate.common.payevo import PayEvoClient, parse_body, relay


ROUTE_SEGMENT = "/consultar-transacao/"
MISSING_ID = "Parâmetro 'id' obrigatório"
UPSTREAM_FALLBACK = "Erro ao consultar transação"


def resolve_transaction_id(query_id: str | None, path: str) -> str | None:
    """Pick the transaction id from `?id=` or from `/consultar-transacao/<id>`.

    The query parameter wins. The path form works under any mount prefix.
    """

    if query_id:
        return query_id
    _, found, rest = path.partition(ROUTE_SEGMENT)
    if not found:
        return None
    if rest.startswith("/"):
        rest = rest[1:]
    return rest or None


class TransactionLookupService:
    """Reads transaction status from PayEvo."""

    def __init__(self, client: PayEvoClient) -> None:
        self.client = client

    async def lookup(self, query_id: str | None, path: str) -> Response:
        transaction_id = resolve_transaction_id(query_id, path)
        if not transaction_id:
            raise BadRequest(MISSING_ID)
        transaction_id_ctx.set(transaction_id)
        logger.info("looking up transaction")
        response = await self.client.get_transaction(transaction_id)
        return relay(response, parse_body(response), UPSTREAM_FALLBACK)
