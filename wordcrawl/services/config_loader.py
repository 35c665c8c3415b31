import json
import logging
import os
from typing import Optional

import yaml

from wordcrawl.domain.config import CrawlerConfig
from wordcrawl.exceptions import ConfigurationError
from wordcrawl.services.crawler_config_parser import CrawlerConfigParser

logger = logging.getLogger(__name__)

YAML_EXTENSIONS = (".yml", ".yaml")


class ConfigurationLoader:
    """Filesystem IO for crawl configuration files (JSON or YAML).

    Responsibility: locate, read and decode the file; schema checks are
    delegated to `CrawlerConfigParser`.
    """

    def __init__(self, path: str, parser: Optional[CrawlerConfigParser] = None):
        if not path:
            raise ValueError("path is required")
        self.path = os.fspath(path)
        self.parser = parser or CrawlerConfigParser()

    def load(self) -> CrawlerConfig:
        if not os.path.isfile(self.path):
            raise ConfigurationError(f"Configuration file not found: {self.path}")
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return self.read(f.read())
        except OSError as e:
            raise ConfigurationError(f"Failed to read {self.path}: {e}") from e

    def read(self, text: str) -> CrawlerConfig:
        try:
            if self.path.endswith(YAML_EXTENSIONS):
                data = yaml.safe_load(text)
            else:
                data = json.loads(text)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Invalid configuration in {self.path}: {e}") from e
        if not data:
            raise ConfigurationError(f"Empty configuration file: {self.path}")

        config = self.parser.parse(data)
        logger.info("Loaded configuration from %s: %r", self.path, config)
        return config
