from typing import NamedTuple, Optional


class HttpResponse(NamedTuple):
    """Response from an HTTP fetch: status, decoded body, Content-Type and final URL."""
    status_code: int
    text: str
    content_type: Optional[str] = None
    url: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return 200 <= int(self.status_code) < 300
