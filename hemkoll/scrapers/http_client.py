"""HTTP fetching for listing pages"""

import asyncio

import httpx


async def fetch_html(
    url: str,
    *,
    timeout: float,
    headers: dict[str, str] | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """GET *url* and return the body text; non-2xx raises httpx.HTTPStatusError

    *timeout* bounds the whole request, not just each socket operation.
    Raises asyncio.TimeoutError when it runs out.
    """
    if client is None:
        async with httpx.AsyncClient(follow_redirects=True) as own_client:
            return await fetch_html(url, timeout=timeout, headers=headers, client=own_client)

    resp = await asyncio.wait_for(
        client.get(url, headers=headers, timeout=timeout),
        timeout=timeout,
    )
    resp.raise_for_status()
    return resp.text
