"""Bulletin index and page retrieval over HTTP."""

import logging
import time
from contextlib import contextmanager
from typing import Iterator, List, Optional

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import RunConfig
from .errors import FetchError, StructureError
from .models import BulletinReference
from .utils import collapse_whitespace, find_iso_date, resolve_link

logger = logging.getLogger(__name__)


class BulletinPage:
    """A fetched and parsed HTML page."""

    def __init__(self, url: str, soup: BeautifulSoup):
        self.url = url
        self.soup = soup

    def paragraphs(self, selector: str) -> List[str]:
        """Whitespace-collapsed text of every element matching selector, in order."""
        return [collapse_whitespace(p.get_text()) for p in self.soup.select(selector)]


class BulletinSource:
    """Fetch the bulletin index and bulletin pages with a shared session.

    Usable as a context manager; the session is closed on exit.
    """

    def __init__(self, config: RunConfig, session: Optional[requests.Session] = None):
        """Initialize source.

        Args:
            config: Run configuration
            session: Pre-built session (a retrying session is created if None)
        """
        self.config = config
        self.session = session or self._create_session()
        self._last_request_time = 0.0

    def _create_session(self) -> requests.Session:
        """Create requests session with retry logic.

        Returns:
            Configured session
        """
        session = requests.Session()

        retry_strategy = Retry(
            total=self.config.max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"]
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            'User-Agent': self.config.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'zh-CN,zh;q=0.9,en;q=0.8',
        })

        return session

    def _wait(self) -> None:
        """Wait the politeness delay since the last request."""
        elapsed = time.time() - self._last_request_time
        if self._last_request_time and elapsed < self.config.politeness_delay:
            time.sleep(self.config.politeness_delay - elapsed)
        self._last_request_time = time.time()

    def _get(self, url: str) -> requests.Response:
        self._wait()
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.config.request_timeout)
        except requests.exceptions.RequestException as e:
            raise FetchError(url, str(e)) from e

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            response.close()
            raise FetchError(url, str(e)) from e
        return response

    @contextmanager
    def open_page(self, url: str) -> Iterator[BulletinPage]:
        """Fetch and parse a page; the response is released on every exit path.

        Args:
            url: Page URL

        Yields:
            Parsed page

        Raises:
            FetchError: request failed after transport retries
        """
        response = self._get(url)
        try:
            # Let BeautifulSoup sniff the charset from the markup
            soup = BeautifulSoup(response.content, 'html.parser')
            yield BulletinPage(response.url or url, soup)
        finally:
            response.close()

    def list_bulletins(self) -> List[BulletinReference]:
        """Read the featured entry and the remaining entries from the index page.

        Returns:
            Bulletins in page order, featured entry first

        Raises:
            StructureError: featured entry, link or date missing
        """
        manifest_url = self.config.manifest_url
        logger.info(f"Reading bulletin index {manifest_url}")

        with self.open_page(manifest_url) as page:
            featured = page.soup.select_one(self.config.featured_selector)
            if featured is None:
                raise StructureError(f"No featured entry on {manifest_url}")

            items = [featured] + page.soup.select(self.config.entries_selector)
            bulletins = [parse_entry(item, page.url) for item in items]

        logger.info(f"Found {len(bulletins)} bulletins")
        return bulletins

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "BulletinSource":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


def parse_entry(item, base_url: str) -> BulletinReference:
    """Build a BulletinReference from one index entry element.

    The entry must hold an <a> with an href and a <span> right after it
    whose text contains a YYYY-MM-DD date.

    Args:
        item: BeautifulSoup element of the entry
        base_url: URL of the index page, for relative links

    Returns:
        BulletinReference

    Raises:
        StructureError: link, title anchor or date missing
    """
    anchor = item.select_one('a')
    if anchor is None:
        raise StructureError(f"Index entry without link: {item}")

    link = resolve_link(anchor.get('href', ''), base_url)
    if link is None:
        raise StructureError(f"Index entry with unusable href: {anchor}")

    title = anchor.get_text().strip()

    date_span = item.select_one('a + span')
    date = find_iso_date(date_span.get_text()) if date_span is not None else None
    if date is None:
        raise StructureError(f"Index entry without date: {item}")

    return BulletinReference(title=title, date=date, link=link)
