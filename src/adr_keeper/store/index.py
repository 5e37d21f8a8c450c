"""
Index Builder

Regenerates the store's README.md listing from the current record files.
"""

from typing import List, Optional

from adr_keeper.exceptions import IndexWriteFailed
from adr_keeper.logging_config import get_logger
from adr_keeper.store.scanner import RecordStore

logger = get_logger("store.index")


INDEX_HEADING = "# Architecture Decision Records"


class IndexBuilder:
    """Builds the index file as a pure function of the record set."""

    def __init__(self, store: RecordStore):
        self.store = store

    def render(self, records: Optional[List[str]] = None) -> str:
        """Render the index content, records in filename order.

        Raises:
            StoreUnavailable: If the directory cannot be read
        """
        if records is None:
            records = self.store.list_record_files()

        lines: List[str] = [INDEX_HEADING, ""]
        for filename in sorted(records):
            lines.append(f"- [{self.store.display_title(filename)}]({filename})")
        return "\n".join(lines) + "\n"

    def rebuild(self) -> int:
        """Overwrite the index file and return the number of entries.

        Raises:
            StoreUnavailable: If the directory cannot be read
            IndexWriteFailed: If the index file cannot be written
        """
        records = self.store.list_record_files()
        content = self.render(records)
        path = self.store.config.index_path
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise IndexWriteFailed(
                f"Cannot write index {path}",
                path=str(path),
                details=str(e)
            ) from e

        logger.debug("Wrote index %s with %d entries", path, len(records))
        return len(records)
