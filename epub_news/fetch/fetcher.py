"""
HTTP fetching of article pages.

One GET per article, no retries and no backoff: a failed article is simply
reported in the run summary. Transport errors (timeouts, resets, non-2xx
statuses) are raised as httpx exceptions and categorized by the caller.
"""

from __future__ import annotations

import httpx

from ..config import FetchConfig


def build_client(cfg: FetchConfig) -> httpx.AsyncClient:
    """Create the HTTP client shared by every request of a run.

    Args:
        cfg: Fetch configuration (timeout, User-Agent, proxy settings)

    Returns:
        An AsyncClient following redirects; the caller owns and closes it
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(cfg.timeout_seconds),
        headers={
            "User-Agent": cfg.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        },
        follow_redirects=True,
        trust_env=cfg.trust_env,
    )


async def fetch_article(
    client: httpx.AsyncClient,
    url: str,
    headers: dict[str, str] | None = None,
) -> str:
    """Fetch the raw HTML of an article page.

    Args:
        client: Shared HTTP client
        url: The article URL to fetch
        headers: Optional source-specific headers (e.g. a session cookie)

    Returns:
        The response body text

    Raises:
        httpx.HTTPError: On any transport failure or non-success status
    """
    resp = await client.get(url, headers=headers)
    resp.raise_for_status()
    return resp.text
