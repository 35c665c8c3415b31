import logging
from typing import Callable, Optional

import requests

from wordcrawl.domain.http_response import HttpResponse
from wordcrawl.exceptions import HttpFetchError

logger = logging.getLogger(__name__)


class HttpService:
    """Downloads remote documents for the page parser.

    `http_client` is a `requests.get`-compatible callable, injected so tests
    can pass a Mock. Transport failures surface as `HttpFetchError`; HTTP
    error statuses are returned to the caller.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: float = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    @property
    def headers(self) -> dict:
        return {"User-Agent": self.user_agent}

    def fetch(self, url: str, timeout: Optional[float] = None) -> HttpResponse:
        effective_timeout = self.timeout if timeout is None else timeout
        try:
            resp = self.http_client(url, headers=self.headers, timeout=effective_timeout)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        # requests follows redirects; relative links resolve against where we landed
        final_url = getattr(resp, "url", None)
        if not isinstance(final_url, str) or not final_url:
            final_url = url
        elif final_url != url:
            logger.debug("Redirected %s -> %s", url, final_url)

        content_type = resp.headers.get("Content-Type") if hasattr(resp, "headers") else None
        return HttpResponse(resp.status_code, resp.text, content_type, final_url)
