"""Bulletin statistics extraction package.

Reads public-health bulletins from an index page and extracts, from the
first paragraph mentioning the positivity rate, the reported count with
its date and the positivity percentage with its date.
"""

__version__ = "1.0.0"

from .config import RunConfig
from .utils import setup_logging
from .errors import BulletinStatsError, FetchError, MalformedBulletinError, StructureError
from .models import BulletinRecord, BulletinReference, ExtractionResult, ScanResult
from .normalize import parse_count
from .segments import ScanOrder, SegmentMatch, first_match, split_segments
from .extractor import ExtractorSettings, StatisticsExtractor, extract_statistics
from .scanner import scan_paragraphs
from .source import BulletinSource
from .sink import read_records, write_records
from .pipeline import RunContext, run_pipeline

__all__ = [
    # Configuration
    'RunConfig',
    
    # Utilities
    'setup_logging',
    
    # Errors
    'BulletinStatsError',
    'FetchError',
    'MalformedBulletinError',
    'StructureError',
    
    # Models
    'BulletinRecord',
    'BulletinReference',
    'ExtractionResult',
    'ScanResult',
    
    # Parsing
    'parse_count',
    'ScanOrder',
    'SegmentMatch',
    'first_match',
    'split_segments',
    'ExtractorSettings',
    'StatisticsExtractor',
    'extract_statistics',
    'scan_paragraphs',
    
    # I/O
    'BulletinSource',
    'read_records',
    'write_records',
    
    # Pipeline
    'RunContext',
    'run_pipeline',
]
