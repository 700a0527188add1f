"""Configuration management for bulletin statistics extraction."""

import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import yaml

from .extractor import ANCHOR_PHRASE, COUNT_PATTERN, PERCENT_PATTERN, ExtractorSettings
from .segments import CLAUSE_DELIMITERS, ScanOrder

logger = logging.getLogger(__name__)

MANIFEST_URL = "https://www.chinacdc.cn/jkzt/crb/zl/szkb_11803/jszl_13141/"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/111.0.0.0 Safari/537.36"
)


@dataclass
class RunConfig:
    """Configuration for a single extraction run.

    Attributes:
        manifest_url: Index page listing the bulletins
        output_path: Where the JSON records are written
        featured_selector: CSS selector of the featured (first) entry
        entries_selector: CSS selector of the remaining entries
        paragraph_selector: CSS selector of bulletin body paragraphs
        user_agent: User agent string for HTTP requests
        request_timeout: HTTP request timeout in seconds
        politeness_delay: Seconds to wait between requests
        max_retries: Transport-level retries for 429/5xx responses
        limit: Process only the first N bulletins (None = all)
        anchor_phrase: Literal marking the statistics paragraph
        count_pattern: Regex with (date, count) groups
        percent_pattern: Regex with (date, percent) groups
        delimiters: Clause delimiter characters
        count_scan_order: 'reverse' or 'forward' for clauses before the anchor
        percent_scan_order: 'reverse' or 'forward' for clauses after the anchor
        count_scan_window: Max clauses tried before the anchor
        percent_scan_window: Max clauses tried after the anchor
    """

    manifest_url: str = MANIFEST_URL
    output_path: Path = field(default_factory=lambda: Path("stats.json"))

    # Page structure
    featured_selector: str = ".main .cn-main .cn-main-right .item-top .item-top-text"
    entries_selector: str = ".main .cn-main .cn-main-right .item-top .item-bottom ul li"
    paragraph_selector: str = ".TRS_Editor .TRS_Editor p"

    # HTTP behavior
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: int = 30
    politeness_delay: float = 0.5
    max_retries: int = 3
    limit: Optional[int] = None

    # Extraction heuristic
    anchor_phrase: str = ANCHOR_PHRASE
    count_pattern: str = COUNT_PATTERN
    percent_pattern: str = PERCENT_PATTERN
    delimiters: str = CLAUSE_DELIMITERS
    count_scan_order: str = ScanOrder.REVERSE.value
    percent_scan_order: str = ScanOrder.REVERSE.value
    count_scan_window: Optional[int] = None
    percent_scan_window: Optional[int] = None

    def __post_init__(self):
        """Validate and normalize configuration."""
        if isinstance(self.output_path, str):
            self.output_path = Path(self.output_path)

        parsed = urlparse(self.manifest_url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValueError(f"Invalid manifest_url: {self.manifest_url}")

        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.politeness_delay < 0:
            raise ValueError(f"politeness_delay cannot be negative, got {self.politeness_delay}")
        if self.max_retries < 0:
            raise ValueError(f"max_retries cannot be negative, got {self.max_retries}")
        if self.limit is not None and self.limit < 1:
            raise ValueError(f"limit must be at least 1, got {self.limit}")

        # Fail early on bad heuristic settings
        self.extractor_settings()

        logger.debug(f"Configuration initialized for {parsed.netloc}")

    def extractor_settings(self) -> ExtractorSettings:
        """Build the extractor settings carried by this configuration."""
        return ExtractorSettings(
            anchor_phrase=self.anchor_phrase,
            count_pattern=self.count_pattern,
            percent_pattern=self.percent_pattern,
            delimiters=self.delimiters,
            count_scan_order=self.count_scan_order,
            percent_scan_order=self.percent_scan_order,
            count_scan_window=self.count_scan_window,
            percent_scan_window=self.percent_scan_window,
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "RunConfig":
        """Load configuration from YAML file."""
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys in {path}: {', '.join(map(str, unknown))}")

        return cls(**data)

    @classmethod
    def from_env(cls) -> "RunConfig":
        """Load configuration from BULLETIN_* environment variables."""
        kwargs = {}
        if os.getenv("BULLETIN_MANIFEST_URL"):
            kwargs['manifest_url'] = os.environ["BULLETIN_MANIFEST_URL"]
        if os.getenv("BULLETIN_OUTPUT"):
            kwargs['output_path'] = Path(os.environ["BULLETIN_OUTPUT"])
        if os.getenv("BULLETIN_USER_AGENT"):
            kwargs['user_agent'] = os.environ["BULLETIN_USER_AGENT"]
        if os.getenv("BULLETIN_REQUEST_TIMEOUT"):
            kwargs['request_timeout'] = int(os.environ["BULLETIN_REQUEST_TIMEOUT"])
        if os.getenv("BULLETIN_POLITENESS_DELAY"):
            kwargs['politeness_delay'] = float(os.environ["BULLETIN_POLITENESS_DELAY"])
        if os.getenv("BULLETIN_LIMIT"):
            kwargs['limit'] = int(os.environ["BULLETIN_LIMIT"])
        return cls(**kwargs)

    def to_yaml(self, path: Path):
        """Save configuration to YAML file."""
        data = asdict(self)
        data['output_path'] = str(data['output_path'])

        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True)
