"""Example: Retry an HTTP health check, sleeping for each pulled duration.

The loop, the attempt limit and the sleep belong to the caller; the strategy
only says how long to wait.

Run: python http_retry.py http://localhost:8989/healthz
"""

import asyncio
import logging
import sys
from itertools import islice

import httpx

from retry_durations import Strategy

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(message)s")
logger = logging.getLogger("examples.http_retry")

MAX_ATTEMPTS = 6


async def fetch_with_retry(client: httpx.AsyncClient, url: str) -> str:
    delays = Strategy.builder().duration(0.5).duration_max(8).jitter(0.2).build()

    for attempt, delay in enumerate(islice(delays, MAX_ATTEMPTS - 1), start=1):
        try:
            resp = await client.get(url)
            resp.raise_for_status()
            return resp.text
        except httpx.HTTPError as exc:
            logger.warning(
                "Attempt %d failed (%s), retrying in %.1fs", attempt, exc, delay.total_seconds()
            )
            await asyncio.sleep(delay.total_seconds())

    resp = await client.get(url)
    resp.raise_for_status()
    return resp.text


async def main() -> None:
    url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8989/healthz"
    async with httpx.AsyncClient(timeout=5.0) as client:
        body = await fetch_with_retry(client, url)
    print(f"Server health: {body}")


if __name__ == "__main__":
    asyncio.run(main())
