"""Data models for bulletins and extracted statistics."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class BulletinReference:
    """One bulletin listed on the index page. Identity is the link."""

    title: str
    date: str
    link: str

    def to_dict(self) -> Dict[str, str]:
        return {'title': self.title, 'date': self.date, 'link': self.link}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BulletinReference":
        return cls(title=data['title'], date=data['date'], link=data['link'])


@dataclass(frozen=True)
class ExtractionResult:
    """Statistics parsed from a single paragraph.

    Attributes:
        count: Reported count, already normalized (finite, non-negative)
        count_date: Date token preceding the count, e.g. '10月5日'
        positive_percent: Percentage as matched, e.g. '20.5%'
        positive_percent_date: Date token preceding the percentage
    """

    count: float
    count_date: str
    positive_percent: str
    positive_percent_date: str

    def to_dict(self) -> Dict[str, Any]:
        count = self.count
        if float(count).is_integer():
            count = int(count)
        return {
            'count': count,
            'countDate': self.count_date,
            'positivePercent': self.positive_percent,
            'positivePercentDate': self.positive_percent_date,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractionResult":
        return cls(
            count=float(data['count']),
            count_date=data['countDate'],
            positive_percent=data['positivePercent'],
            positive_percent_date=data['positivePercentDate'],
        )


@dataclass(frozen=True)
class BulletinRecord:
    """Output record: the bulletin and its statistics (None on a miss)."""

    post: BulletinReference
    data: Optional[ExtractionResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'data': self.data.to_dict() if self.data is not None else None,
            'post': self.post.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BulletinRecord":
        stats = data.get('data')
        return cls(
            post=BulletinReference.from_dict(data['post']),
            data=ExtractionResult.from_dict(stats) if stats else None,
        )


@dataclass(frozen=True)
class ScanResult:
    """Outcome of scanning one bulletin page.

    `found` is False when no paragraph contains the anchor phrase; that is
    a miss, not an error.
    """

    post: BulletinReference
    data: Optional[ExtractionResult] = None
    paragraph_index: Optional[int] = None

    @property
    def found(self) -> bool:
        return self.data is not None

    def to_record(self) -> BulletinRecord:
        return BulletinRecord(post=self.post, data=self.data)
