"""Main orchestration pipeline for bulletin statistics extraction."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from tqdm import tqdm

from .config import RunConfig
from .extractor import StatisticsExtractor
from .models import BulletinRecord, BulletinReference
from .scanner import scan_paragraphs
from .sink import write_records
from .source import BulletinSource

logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    """State shared by every step of one run.
    
    Attributes:
        config: Run configuration
        source: Page source used for the index and every bulletin
        extractor: Paragraph extractor built from the configuration
        records: Output records, in discovery order
        misses: Bulletins where no statistics paragraph was found
    """
    
    config: RunConfig
    source: BulletinSource
    extractor: StatisticsExtractor
    records: List[BulletinRecord] = field(default_factory=list)
    misses: List[BulletinReference] = field(default_factory=list)


def process_bulletin(context: RunContext, post: BulletinReference) -> BulletinRecord:
    """Fetch one bulletin and extract its statistics.
    
    The page is held only while its paragraphs are scanned and is released
    even when extraction raises.
    
    Args:
        context: Run context
        post: Bulletin to process
        
    Returns:
        Record with data=None when no statistics paragraph was found
        
    Raises:
        MalformedBulletinError: statistics paragraph could not be parsed
        FetchError: page could not be downloaded
    """
    with context.source.open_page(post.link) as page:
        paragraphs = page.paragraphs(context.config.paragraph_selector)
        logger.debug(f"{len(paragraphs)} paragraphs in {post.link}")
        result = scan_paragraphs(paragraphs, post, context.extractor)
    
    if not result.found:
        logger.warning(f"No count found for {post.date}: {post.link}")
        context.misses.append(post)
    
    return result.to_record()


def run_pipeline(
    config: RunConfig,
    source: Optional[BulletinSource] = None,
    write_output: bool = True
) -> List[BulletinRecord]:
    """Run the full extraction: list bulletins, process each, write output.
    
    Bulletins are processed one at a time, in index order. Malformed
    bulletins and fetch failures abort the run; misses do not.
    
    Args:
        config: Run configuration
        source: Page source (an HTTP source is created and closed if None)
        write_output: Whether to write config.output_path
        
    Returns:
        One record per processed bulletin, in discovery order
    """
    owns_source = source is None
    if owns_source:
        source = BulletinSource(config)
    
    context = RunContext(
        config=config,
        source=source,
        extractor=StatisticsExtractor(config.extractor_settings()),
    )
    
    try:
        bulletins = source.list_bulletins()
        if config.limit is not None:
            bulletins = bulletins[:config.limit]
        
        for post in tqdm(bulletins, desc="Bulletins", unit="post"):
            logger.info(f"Processing {post.date} {post.link}")
            context.records.append(process_bulletin(context, post))
    finally:
        if owns_source:
            source.close()
    
    found = len(context.records) - len(context.misses)
    logger.info(f"Extracted statistics from {found}/{len(context.records)} bulletins")
    
    if write_output:
        write_records(context.records, config.output_path)
    
    return context.records
