"""
Snapshot storage for raw gist batches.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Union

from ..models.records import SourceBatch

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Writes each fetched batch to its own JSON file. Write-only."""
    
    def __init__(self, data_dir: Union[str, Path] = "data"):
        self.data_dir = Path(data_dir)
    
    @staticmethod
    def serialize(batch: SourceBatch) -> str:
        """Serialize a batch with every field GitHub sent."""
        return json.dumps([[gist.model_dump(mode="json") for gist in gists] for gists in batch])
    
    def write(self, payload: str) -> Path:
        """
        Write a serialized batch to a new file.
        
        Args:
            payload: Serialized batch
            
        Returns:
            Path of the written file
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        path = self.data_dir / f"gists-{stamp}.json"
        path.write_text(payload, encoding="utf-8")
        logger.info(f"Saved gist snapshot to {path}")
        return path
    
    def write_batch(self, batch: SourceBatch) -> Path:
        return self.write(self.serialize(batch))
