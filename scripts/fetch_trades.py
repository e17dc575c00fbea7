"""Fetch and classify futarchy trades from Supabase.

Usage:
    PYTHONPATH=src python scripts/fetch_trades.py --user 0xabc...
    PYTHONPATH=src python scripts/fetch_trades.py --proposal 0xProposal --limit 20

Requires FUTARCHY_SUPABASE_URL / FUTARCHY_SUPABASE_KEY, and
FUTARCHY_MARKET_METADATA_PATH for role-based pricing.
"""

import argparse
import asyncio
import logging

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logger = logging.getLogger("fetch_trades")
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


def separator(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}\n")


async def main(user: str | None, proposal: str | None, limit: int) -> None:
    from futarchy.container import Container

    container = Container()
    settings = container.settings()

    separator("Futarchy trade history")
    print(f"Supabase: {'configured' if settings.supabase_url else 'NOT SET'}")
    print(f"Metadata: {settings.market_metadata_path or 'none (symbol heuristics only)'}")

    service = container.trade_service()
    try:
        result = await service.formatted_trades(user_address=user, proposal_id=proposal, limit=limit)
    finally:
        await container.http_client().close()

    separator(f"{result.count} trades")
    for trade in result.trades:
        print(
            f"{trade.timestamp:%Y-%m-%d %H:%M}  {trade.operation_side.value:<4} {trade.outcome_side.value:<7} "
            f"{trade.token_out.amount} {trade.token_out.symbol} -> {trade.token_in.amount} {trade.token_in.symbol}"
            f"  @ {trade.price}"
        )

    summary = result.summary
    separator("Summary")
    print(f"Outcomes:   {', '.join(f'{k.value}={v}' for k, v in summary.outcomes.items())}")
    print(f"Operations: {', '.join(f'{k.value}={v}' for k, v in summary.operations.items())}")
    print(f"Range:      {summary.date_range.start} .. {summary.date_range.end}")
    print(f"Tokens:     {', '.join(summary.unique_tokens)}")
    print(f"Pools:      {len(summary.unique_pools)}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--user", help="Trader address")
    parser.add_argument("--proposal", help="Proposal ID")
    parser.add_argument("--limit", type=int, default=100)
    args = parser.parse_args()
    asyncio.run(main(args.user, args.proposal, args.limit))
