"""Drive a running deployment end to end: create a PIX charge, then poll it.

The base URL is where both functions are served (e.g. Supabase `/functions/v1`).

Example:
    python scripts/smoke_pix.py --base-url http://localhost:8000 --polls 3
"""

import argparse
import asyncio
import json
import sys

import httpx


def build_charge(amount: int, name: str, email: str, document: str, phone: str) -> dict:
    """One-item charge body in the shape `/gerar-pix` accepts."""

    return {
        "items": [{"title": "Inscrição", "unitPrice": amount, "quantity": 1, "tangible": False}],
        "amount": amount,
        "customer": {
            "name": name,
            "email": email,
            "phone": phone,
            "document": {"number": document, "type": "CPF"},
        },
    }


def json_or_none(resp: httpx.Response):
    """Reply body as JSON, or None for empty and non-JSON bodies."""

    try:
        return resp.json()
    except ValueError:
        return None


async def run(args: argparse.Namespace, transport: httpx.AsyncBaseTransport | None = None) -> int:
    """Create one charge and poll its status; return the process exit code."""

    base_url = args.base_url.rstrip("/")
    charge = build_charge(args.amount, args.name, args.email, args.document, args.phone)
    async with httpx.AsyncClient(timeout=args.timeout, transport=transport) as client:
        resp = await client.post(f"{base_url}/gerar-pix", json=charge)
        print(f"gerar-pix status={resp.status_code}")
        data = json_or_none(resp)
        if data is None:
            print(resp.text or "<empty body>")
        else:
            print(json.dumps(data, indent=2, ensure_ascii=False))
        if not resp.is_success:
            return 1

        transaction_id = data.get("id") if isinstance(data, dict) else None
        if not transaction_id:
            print("no transaction id in reply, skipping lookup")
            return 0

        for attempt in range(1, args.polls + 1):
            lookup = await client.get(f"{base_url}/consultar-transacao", params={"id": transaction_id})
            body = json_or_none(lookup)
            status = body.get("status") if isinstance(body, dict) else None
            print(f"poll={attempt} http={lookup.status_code} transaction_status={status}")
            if attempt < args.polls:
                await asyncio.sleep(args.interval)
    return 0


def main() -> None:
    """Parse CLI args and run the smoke test."""

    parser = argparse.ArgumentParser(description="Create a PIX charge and poll its status.")
    parser.add_argument("--base-url", required=True)
    parser.add_argument("--amount", type=int, default=100, help="Amount in cents")
    parser.add_argument("--name", default="Teste Smoke")
    parser.add_argument("--email", default="smoke@example.com")
    parser.add_argument("--document", default="123.456.789-09")
    parser.add_argument("--phone", default="(11) 98888-7777")
    parser.add_argument("--polls", type=int, default=1)
    parser.add_argument("--interval", type=float, default=5.0)
    parser.add_argument("--timeout", type=float, default=30.0)
    args = parser.parse_args()

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
