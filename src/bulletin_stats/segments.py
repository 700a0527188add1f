"""Clause segmentation and first-match scanning over segments."""

import enum
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Pattern, Sequence, Union

logger = logging.getLogger(__name__)

# Full-width comma, semicolon and full stop
CLAUSE_DELIMITERS = '，；。'


class ScanOrder(str, enum.Enum):
    """Order in which candidate segments are tried."""

    FORWARD = 'forward'
    REVERSE = 'reverse'

    @classmethod
    def parse(cls, value: Union[str, "ScanOrder"]) -> "ScanOrder":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"Invalid scan order: {value!r}. Expected one of "
                f"{[o.value for o in cls]}"
            ) from None


@dataclass(frozen=True)
class SegmentMatch:
    """First segment that matched, with its two capture groups."""

    date: str
    value: str
    segment: str
    position: int


def split_segments(text: str, delimiters: str = CLAUSE_DELIMITERS) -> List[str]:
    """Split text into clauses on any of the delimiter characters.

    Empty clauses are kept so positions line up with the source text.
    """
    if not delimiters:
        return [text]
    return re.split('[' + re.escape(delimiters) + ']', text)


def order_segments(segments: Sequence[str], order: ScanOrder = ScanOrder.REVERSE,
                   window: Optional[int] = None) -> List[str]:
    """Arrange segments in scan order, optionally keeping only the first `window`."""
    ordered = list(segments)
    if ScanOrder.parse(order) is ScanOrder.REVERSE:
        ordered.reverse()
    if window is not None:
        ordered = ordered[:window]
    return ordered


def first_match(segments: Iterable[str], pattern: Union[str, Pattern]) -> Optional[SegmentMatch]:
    """Return the capture groups of the first segment matching pattern.

    The pattern must have two capture groups: a date and a value. Segments
    are tried in the order given; later matches are ignored.
    """
    if isinstance(pattern, str):
        pattern = re.compile(pattern, re.ASCII)
    
    for position, segment in enumerate(segments):
        match = pattern.search(segment)
        if match:
            logger.debug(f"Segment {position} matched: {segment}")
            return SegmentMatch(
                date=match.group(1),
                value=match.group(2),
                segment=segment,
                position=position,
            )
    return None
