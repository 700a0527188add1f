"""Utility functions and helpers."""

import logging
import re
from typing import Optional
from urllib.parse import urljoin, urlparse, urlunparse

ISO_DATE_RE = re.compile(r'\d{4}-\d{2}-\d{2}')
WHITESPACE_RE = re.compile(r'\s+')


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging with proper formatting.
    
    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def collapse_whitespace(text: str) -> str:
    """Remove every whitespace run, not just leading and trailing ones.

    Bulletin prose is Chinese, so spaces and line breaks inside a paragraph
    are layout noise that would otherwise split date and number tokens.
    Full-width spaces (U+3000) are removed too.
    """
    if not text:
        return ""
    return WHITESPACE_RE.sub('', text)


def find_iso_date(text: str) -> Optional[str]:
    """Return the first YYYY-MM-DD substring of text, or None."""
    if not text:
        return None
    match = ISO_DATE_RE.search(text)
    return match.group(0) if match else None


def resolve_link(href: str, base_url: str) -> Optional[str]:
    """Resolve a (possibly relative) href against the page it was found on.
    
    Args:
        href: Raw href attribute
        base_url: URL of the page holding the link
        
    Returns:
        Absolute http(s) URL without fragment, or None if unusable
    """
    if not href:
        return None
    
    href = href.strip()
    
    if href.startswith(('mailto:', 'tel:', 'javascript:', 'data:', '#')):
        return None
    
    parsed = urlparse(urljoin(base_url, href))
    
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        return None
    
    # Rebuild without fragment
    return urlunparse((
        parsed.scheme,
        parsed.netloc,
        parsed.path,
        parsed.params,
        parsed.query,
        ''
    ))
