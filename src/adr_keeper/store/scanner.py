"""
Record Store Scanner

Lists the store directory, tells records apart from the reserved index and
template files, and derives numbering and display titles from filenames.
"""

import re
from pathlib import Path
from typing import List, Optional

from adr_keeper.config import StoreConfig
from adr_keeper.exceptions import StoreUnavailable, RecordUnreadable, RecordWriteFailed
from adr_keeper.logging_config import get_logger
from adr_keeper.store.slug import slugify

logger = get_logger("store.scanner")


def extract_display_title(filename: str, extension: str = ".md") -> str:
    """Derive a human-readable title from a record filename.

    Everything up to the first hyphen is dropped, so
    ``adr-001-database-choice.md`` -> ``001 Database Choice`` and
    ``001-database-choice.md`` -> ``Database Choice``. Names without a
    hyphen are returned unchanged.
    """
    name = filename[:-len(extension)] if extension and filename.endswith(extension) else filename

    parts = name.split("-", 1)
    if len(parts) < 2:
        return filename

    words = parts[1].replace("-", " ").split(" ")
    title = " ".join(word.capitalize() for word in words)
    return re.sub(r"\bAdr\b", "ADR", title)


class RecordStore:
    """File-system access to one record directory."""

    def __init__(self, config: StoreConfig):
        self.config = config

    @property
    def root(self) -> Path:
        return self.config.store_dir

    def path_for(self, filename: str) -> Path:
        return self.root / filename

    def _number_prefix(self, number: str) -> str:
        return f"{self.config.record_prefix}-{number}-"

    def number_of(self, filename: str) -> Optional[str]:
        """Return the digits of a record filename's sequence number, or None."""
        match = re.match(rf"^{re.escape(self.config.record_prefix)}-(\d+)-", filename)
        return match.group(1) if match else None

    def format_number(self, number: str) -> str:
        """Normalize a purely numeric sequence number to the configured width.

        Extra leading zeros are dropped first, so ``0001`` and ``1`` both
        name the same record as ``001``.
        """
        number = number.strip()
        if number.isdigit():
            return str(int(number)).zfill(self.config.number_width)
        return number

    def record_filename(self, number: str, title: str) -> str:
        return f"{self._number_prefix(number)}{slugify(title)}{self.config.record_extension}"

    def list_record_files(self) -> List[str]:
        """List record filenames in sorted order.

        Raises:
            StoreUnavailable: If the directory cannot be read
        """
        try:
            entries = list(self.root.iterdir())
        except OSError as e:
            raise StoreUnavailable(
                f"Cannot read record directory {self.root}",
                path=str(self.root),
                details=str(e)
            ) from e

        reserved = self.config.reserved_files
        records = [
            entry.name for entry in entries
            if entry.name.endswith(self.config.record_extension)
            and entry.name not in reserved
            and not entry.is_dir()
        ]
        return sorted(records)

    def find_by_number(self, number: str) -> Optional[str]:
        """Return the record filename for a sequence number, or None.

        Digit-only numbers are compared by value, so ``1`` finds
        ``adr-0001-x.md``.
        """
        prefix = self._number_prefix(number)
        try:
            records = self.list_record_files()
        except StoreUnavailable as e:
            logger.debug("Treating store as empty: %s", e.message)
            return None
        for filename in records:
            if filename.startswith(prefix):
                return filename
            digits = self.number_of(filename)
            if digits is not None and number.isdigit() and int(digits) == int(number):
                return filename
        return None

    def exists(self, number: str) -> bool:
        """Check whether a record with this number exists.

        An absent or unreadable directory counts as "no records".
        """
        return self.find_by_number(number) is not None

    def next_sequence_number(self) -> str:
        """Return the number after the highest one in use.

        Gaps are not filled. Unparsable filenames are skipped. The result is
        padded to the widest number seen, and never narrower than the
        configured width.
        """
        highest = 0
        width = self.config.number_width

        try:
            records = self.list_record_files()
        except StoreUnavailable:
            records = []

        for filename in records:
            digits = self.number_of(filename)
            if digits is None:
                continue
            highest = max(highest, int(digits))
            width = max(width, len(digits))

        return str(highest + 1).zfill(width)

    def ensure_store(self) -> None:
        """Create the store directory if needed."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreUnavailable(
                f"Cannot create record directory {self.root}",
                path=str(self.root),
                details=str(e)
            ) from e

    def read_record(self, filename: str) -> str:
        path = self.path_for(filename)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise RecordUnreadable(
                f"Cannot read existing ADR {path}",
                filename=str(path),
                details=str(e)
            ) from e

    def write_record(self, filename: str, content: str) -> Path:
        path = self.path_for(filename)
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise RecordWriteFailed(
                f"Cannot write ADR {path}",
                filename=str(path),
                details=str(e)
            ) from e
        return path

    def remove_record(self, filename: str) -> None:
        """Delete a record file. OSError propagates to the caller."""
        self.path_for(filename).unlink()

    def display_title(self, filename: str) -> str:
        return extract_display_title(filename, self.config.record_extension)
