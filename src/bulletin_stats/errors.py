"""Exception hierarchy for bulletin statistics extraction."""

from typing import Optional


class BulletinStatsError(Exception):
    """Base class for all errors raised by this package."""


class StructureError(BulletinStatsError):
    """The index page no longer has the expected shape."""


class FetchError(BulletinStatsError):
    """A page could not be downloaded."""

    def __init__(self, url: str, message: str):
        super().__init__(f"Failed to fetch {url}: {message}")
        self.url = url


class MalformedBulletinError(BulletinStatsError):
    """Anchor phrase found, but the surrounding prose could not be parsed.

    Attributes:
        reason: Which step failed ('count', 'count-value' or 'percent')
        paragraph: Whitespace-collapsed paragraph text
        detail: Offending token, if any
        link: Bulletin link, filled in by the scanner
    """

    def __init__(self, reason: str, paragraph: str, detail: Optional[str] = None,
                 link: Optional[str] = None):
        self.reason = reason
        self.paragraph = paragraph
        self.detail = detail
        self.link = link
        super().__init__(self._format())

    def _format(self) -> str:
        message = f"Malformed bulletin ({self.reason})"
        if self.detail is not None:
            message += f": {self.detail!r}"
        if self.link:
            message += f" in {self.link}"
        return message

    def with_link(self, link: str) -> "MalformedBulletinError":
        """Attach the bulletin link and refresh the message."""
        self.link = link
        self.args = (self._format(),)
        return self
