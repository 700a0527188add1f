"""JSON output of extraction records."""

import json
import logging
from pathlib import Path
from typing import List, Sequence

from .models import BulletinRecord

logger = logging.getLogger(__name__)


def write_records(records: Sequence[BulletinRecord], output_path: Path) -> Path:
    """Write records as an indented JSON array, in the order given.
    
    Args:
        records: Records in discovery order
        output_path: Destination file (parent directories are created)
        
    Returns:
        Path written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump([r.to_dict() for r in records], f, ensure_ascii=False, indent=2)
        f.write('\n')
    
    logger.info(f"Wrote {len(records)} records to {output_path}")
    return output_path


def read_records(input_path: Path) -> List[BulletinRecord]:
    """Load records previously written by write_records."""
    with open(input_path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return [BulletinRecord.from_dict(item) for item in data]
