import re
from datetime import timedelta

from wordcrawl.domain.config import CrawlerConfig
from wordcrawl.exceptions import ConfigurationError


def _as_list(value, key: str) -> list:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError(f"{key} must be a string or a list of strings")
    return list(value)


def _as_int(value, key: str, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigurationError(f"{key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from e


class CrawlerConfigParser:
    """Parse a JSON/YAML dict into a CrawlerConfig.

    Responsibility: schema/validation for config files.
    It does NOT perform filesystem IO. Unknown keys are ignored.
    """

    def parse(self, data: dict) -> CrawlerConfig:
        if not isinstance(data, dict):
            raise ConfigurationError("configuration must be a mapping")

        try:
            ignored_urls = [re.compile(p) for p in _as_list(data.get("ignoredUrls"), "ignoredUrls")]
            ignored_words = [re.compile(p) for p in _as_list(data.get("ignoredWords"), "ignoredWords")]
        except (re.error, TypeError) as e:
            raise ConfigurationError(f"invalid pattern: {e}") from e

        try:
            return CrawlerConfig(
                start_pages=tuple(_as_list(data.get("startPages"), "startPages")),
                ignored_urls=tuple(ignored_urls),
                ignored_words=tuple(ignored_words),
                parallelism=_as_int(data.get("parallelism"), "parallelism", -1),
                implementation_override=str(data.get("implementationOverride") or ""),
                max_depth=_as_int(data.get("maxDepth"), "maxDepth", 0),
                timeout=timedelta(seconds=_as_int(data.get("timeoutSeconds"), "timeoutSeconds", 1)),
                popular_word_count=_as_int(data.get("popularWordCount"), "popularWordCount", 0),
                profile_output_path=str(data.get("profileOutputPath") or ""),
                result_path=str(data.get("resultPath") or ""),
            )
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
