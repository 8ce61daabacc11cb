"""
milcheck web: page fetching for the mirror status and news views.

- fetch(url, timeout): GET a page and return its text.
- fetch_all(urls, timeout): one worker per URL; bodies come back in the order of urls.

Any transport failure or non-2xx answer becomes a FetchError.
"""
from concurrent.futures import ThreadPoolExecutor

import requests

from .faults import FetchError
from .logs import get_logger

logger = get_logger(__name__)

USER_AGENT = "milcheck (+https://archlinux.org/mirrors/status/)"


def fetch(url, timeout=30.0):
    logger.debug("GET %s", url)
    try:
        response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exception:
        raise FetchError("could not fetch %s: %s" % (url, exception), url=url) from exception
    logger.debug("GET %s -> %d (%d bytes)", url, response.status_code, len(response.content))
    return response.text


def fetch_all(urls, timeout=30.0):
    urls = list(urls)
    if not urls:
        return []
    with ThreadPoolExecutor(max_workers=len(urls), thread_name_prefix="milcheck-http") as pool:
        futures = [pool.submit(fetch, url, timeout) for url in urls]
        return [future.result() for future in futures]


__all__ = (
    "fetch",
    "fetch_all",
)
