import logging
import re
from datetime import timedelta
from pathlib import Path
from typing import Callable, Iterable, Optional, Pattern, Protocol, Tuple
from urllib.parse import urljoin, urlparse
from urllib.request import url2pathname

from bs4 import BeautifulSoup
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction

from wordcrawl.domain.parse_result import ParseResult, ParseResultBuilder
from wordcrawl.exceptions import HttpFetchError
from wordcrawl.services.http_service import HttpService

logger = logging.getLogger(__name__)

WHITESPACE = re.compile(r"\s+")
NON_WORD_CHARACTERS = re.compile(r"\W", re.ASCII)

# Elements whose text is not document content
_NON_CONTENT_TAGS = ("script", "style", "noscript", "template")
_NON_TEXT_STRINGS = (Comment, CData, Declaration, Doctype, ProcessingInstruction)


def is_parseable_content_type(content_type: Optional[str]) -> bool:
    """True for text/*, */xml and *+xml (such as XHTML), or when the server sent no type."""
    if not content_type:
        return True
    mime = content_type.split(";", 1)[0].strip().lower()
    return mime.startswith("text/") or mime.endswith("/xml") or mime.endswith("+xml")


class DocumentParser(Protocol):
    def parse(self, url: str) -> ParseResult: ...


class PageParser:
    """Parses local (`file:`) and remote documents into words and links.

    `parse` never raises: a document that cannot be fetched or parsed counts
    as having no words and no links.
    """

    def __init__(
        self,
        http_service: HttpService,
        timeout: timedelta = timedelta(seconds=10),
        ignored_words: Iterable[Pattern[str]] = (),
        soup_factory: Optional[Callable[[str], BeautifulSoup]] = None,
    ):
        self._http_service = http_service
        self._timeout = timeout
        self._ignored_words = tuple(ignored_words)
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    def parse(self, url: str) -> ParseResult:
        try:
            parsed = urlparse(url)
        except ValueError:
            logger.warning("Invalid URL %r", url)
            return ParseResult.empty()
        if not parsed.scheme:
            logger.warning("URL without scheme %r", url)
            return ParseResult.empty()

        try:
            document = self._read_document(url, parsed.scheme, parsed.path)
        except (HttpFetchError, OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", url, e)
            return ParseResult.empty()
        except Exception:
            logger.exception("Unexpected error reading %s", url)
            return ParseResult.empty()
        if document is None:
            return ParseResult.empty()

        base_url, body = document
        try:
            return self._extract(base_url, body)
        except Exception:
            logger.exception("Error parsing document %s", url)
            return ParseResult.empty()

    def _read_document(self, url: str, scheme: str, path: str) -> Optional[Tuple[str, str]]:
        """Return (base URL for relative links, body), or None when there is nothing to parse."""
        if scheme == "file":
            return url, Path(url2pathname(path)).read_text(encoding="utf-8")

        response = self._http_service.fetch(url, timeout=self._timeout.total_seconds())
        if not response.is_success:
            logger.warning("Non-success status for %s: %s", url, response.status_code)
            return None
        if not is_parseable_content_type(response.content_type):
            logger.warning("Unsupported content type for %s: %s", url, response.content_type)
            return None
        return response.url or url, response.text

    def _extract(self, url: str, body: str) -> ParseResult:
        soup = self._soup_factory(body)
        builder = ParseResultBuilder()

        for a in soup.find_all("a", href=True):
            builder.add_link(urljoin(url, a.get("href").strip()))

        for tag in _NON_CONTENT_TAGS:
            for element in soup.find_all(tag):
                element.decompose()

        for text in soup.find_all(string=True):
            if isinstance(text, _NON_TEXT_STRINGS):
                continue
            for word in self._words(str(text)):
                builder.add_word(word)

        result = builder.build()
        logger.debug("Parsed %s: %d distinct words, %d links", url, len(result.word_counts), len(result.links))
        return result

    def _words(self, text: str):
        for token in WHITESPACE.split(text.strip()):
            if not token:
                continue
            if any(p.fullmatch(token) for p in self._ignored_words):
                continue
            word = NON_WORD_CHARACTERS.sub("", token)
            if word:
                yield word.lower()
