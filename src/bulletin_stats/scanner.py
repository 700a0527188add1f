"""Scan the paragraphs of one bulletin page for statistics."""

import logging
from typing import Iterable, Optional

from .errors import MalformedBulletinError
from .extractor import StatisticsExtractor
from .models import BulletinReference, ScanResult

logger = logging.getLogger(__name__)


def scan_paragraphs(
    paragraphs: Iterable[str],
    post: BulletinReference,
    extractor: Optional[StatisticsExtractor] = None
) -> ScanResult:
    """Return the statistics of the first paragraph that yields any.
    
    Only the first paragraph containing the anchor phrase is used; later
    paragraphs are not examined once it has been parsed.
    
    Args:
        paragraphs: Whitespace-collapsed paragraphs, in page order
        post: Bulletin the paragraphs belong to
        extractor: Extractor to apply (default settings if None)
        
    Returns:
        ScanResult with found=False when no paragraph has the anchor phrase
        
    Raises:
        MalformedBulletinError: the anchor paragraph could not be parsed
    """
    extractor = extractor or StatisticsExtractor()
    
    for index, paragraph in enumerate(paragraphs):
        try:
            data = extractor.extract(paragraph)
        except MalformedBulletinError as e:
            e.with_link(post.link)
            raise
        
        if data is not None:
            logger.debug(f"Statistics found in paragraph {index} of {post.link}")
            return ScanResult(post=post, data=data, paragraph_index=index)
    
    return ScanResult(post=post)
