"""Statistics extraction from a single bulletin paragraph."""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Pattern

from .errors import MalformedBulletinError
from .models import ExtractionResult
from .normalize import TEN_THOUSAND, parse_count
from .segments import (
    CLAUSE_DELIMITERS,
    ScanOrder,
    first_match,
    order_segments,
    split_segments,
)

logger = logging.getLogger(__name__)

ANCHOR_PHRASE = '检测阳性率'

# Date (optional year) followed within 1-6 chars by a count, optionally in 万
COUNT_PATTERN = r'((?:\d{4}年)?\d+月\d+日).{1,6}?((?:\d+\.)?\d+(?:万)?)'

# Date (optional year) followed within 1-4 chars by a percentage
PERCENT_PATTERN = r'((?:\d{4}年)?\d+月\d+日).{1,4}?((?:\d+\.)?\d+%)'


@dataclass
class ExtractorSettings:
    """Tunable parts of the extraction heuristic.
    
    Attributes:
        anchor_phrase: Literal marking a paragraph that holds the statistics
        count_pattern: Regex with (date, count) groups, tried before the anchor
        percent_pattern: Regex with (date, percent) groups, tried after the anchor
        delimiters: Clause delimiter characters
        count_scan_order: Order for clauses before the anchor
        percent_scan_order: Order for clauses after the anchor
        count_scan_window: Max clauses tried before the anchor (None = all)
        percent_scan_window: Max clauses tried after the anchor (None = all)
        unit: Ten-thousand unit suffix
    """

    anchor_phrase: str = ANCHOR_PHRASE
    count_pattern: str = COUNT_PATTERN
    percent_pattern: str = PERCENT_PATTERN
    delimiters: str = CLAUSE_DELIMITERS
    count_scan_order: ScanOrder = ScanOrder.REVERSE
    percent_scan_order: ScanOrder = ScanOrder.REVERSE
    count_scan_window: Optional[int] = None
    percent_scan_window: Optional[int] = None
    unit: str = TEN_THOUSAND

    def __post_init__(self):
        if not self.anchor_phrase:
            raise ValueError("anchor_phrase cannot be empty")
        self.count_scan_order = ScanOrder.parse(self.count_scan_order)
        self.percent_scan_order = ScanOrder.parse(self.percent_scan_order)
        for name in ('count_scan_window', 'percent_scan_window'):
            window = getattr(self, name)
            if window is not None and window < 1:
                raise ValueError(f"{name} must be at least 1, got {window}")


class StatisticsExtractor:
    """Parse count and positivity percentage out of a paragraph."""

    def __init__(self, settings: Optional[ExtractorSettings] = None):
        self.settings = settings or ExtractorSettings()
        self._count_re: Pattern = re.compile(self.settings.count_pattern, re.ASCII)
        self._percent_re: Pattern = re.compile(self.settings.percent_pattern, re.ASCII)

    def extract(self, paragraph: str) -> Optional[ExtractionResult]:
        """Extract statistics from one whitespace-collapsed paragraph.
        
        Args:
            paragraph: Paragraph text with all whitespace removed
            
        Returns:
            ExtractionResult, or None if the anchor phrase is absent
            
        Raises:
            MalformedBulletinError: anchor present but a value is missing
                or the count cannot be normalized
        """
        settings = self.settings
        anchor_at = paragraph.find(settings.anchor_phrase)
        if anchor_at == -1:
            return None
        
        before_text = paragraph[:anchor_at]
        after_text = paragraph[anchor_at + len(settings.anchor_phrase):]
        
        count_match = first_match(
            order_segments(
                split_segments(before_text, settings.delimiters),
                settings.count_scan_order,
                settings.count_scan_window,
            ),
            self._count_re,
        )
        if count_match is None:
            raise MalformedBulletinError('count', paragraph)
        
        count = parse_count(count_match.value, settings.unit)
        if count is None:
            raise MalformedBulletinError('count-value', paragraph, detail=count_match.value)
        
        percent_match = first_match(
            order_segments(
                split_segments(after_text, settings.delimiters),
                settings.percent_scan_order,
                settings.percent_scan_window,
            ),
            self._percent_re,
        )
        if percent_match is None:
            raise MalformedBulletinError('percent', paragraph)
        
        logger.debug(
            f"Extracted count {count} ({count_match.date}), "
            f"percent {percent_match.value} ({percent_match.date})"
        )
        return ExtractionResult(
            count=count,
            count_date=count_match.date,
            positive_percent=percent_match.value,
            positive_percent_date=percent_match.date,
        )


def extract_statistics(paragraph: str,
                       settings: Optional[ExtractorSettings] = None) -> Optional[ExtractionResult]:
    """Convenience wrapper around StatisticsExtractor.extract."""
    return StatisticsExtractor(settings).extract(paragraph)
