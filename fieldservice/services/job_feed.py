"""
Client for the job and client listings of a running Field Service API.

Both lists are fetched concurrently. A failed fetch is not retried and
never raises: it is logged and contributes an empty list, so callers can
render an empty state (or "Unknown Client" placeholders) from partial data.
"""

import asyncio
import logging
from typing import Optional

import httpx
from pydantic import BaseModel

from ..calendar import CalendarJob, parse_jobs

logger = logging.getLogger(__name__)

JOBS_PATH = "/jobs/calendar-feed"
CLIENTS_PATH = "/clients"


class FeedResult(BaseModel):
    jobs: list[CalendarJob] = []
    clients: list[dict] = []
    loaded: bool = False
    failed: list[str] = []


class JobFeedClient:
    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = {"Authorization": f"Bearer {token}"} if token else {}
        self.timeout = timeout
        self.transport = transport

    async def _get_list(self, client: httpx.AsyncClient, path: str) -> Optional[list]:
        """GET a JSON list; None on any failure"""
        try:
            response = await client.get(path)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Fetching {path} failed: HTTP {e.response.status_code}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Fetching {path} failed: {e}")
            return None
        except ValueError as e:
            logger.error(f"Fetching {path} returned invalid JSON: {e}")
            return None

        if not isinstance(payload, list):
            logger.error(f"Fetching {path} returned {type(payload).__name__}, expected a list")
            return None
        return payload

    async def fetch(self) -> FeedResult:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            raw_jobs, raw_clients = await asyncio.gather(
                self._get_list(client, JOBS_PATH),
                self._get_list(client, CLIENTS_PATH),
            )

        failed = []
        if raw_jobs is None:
            failed.append("jobs")
        if raw_clients is None:
            failed.append("clients")

        jobs = parse_jobs([r for r in raw_jobs or [] if isinstance(r, dict)])
        clients = [c for c in raw_clients or [] if isinstance(c, dict)]
        logger.info(f"Feed loaded: {len(jobs)} jobs, {len(clients)} clients")
        return FeedResult(jobs=jobs, clients=clients, loaded=True, failed=failed)


def fetch_feed(base_url: str, token: Optional[str] = None, **kwargs) -> FeedResult:
    """Blocking wrapper around JobFeedClient.fetch"""
    return asyncio.run(JobFeedClient(base_url, token, **kwargs).fetch())
