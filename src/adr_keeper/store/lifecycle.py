"""
Record Lifecycle Controller

Decides whether an invocation creates or updates a record, persists it, and
rebuilds the index. No state survives between invocations: every call
re-scans the store directory.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from adr_keeper.config import StoreConfig
from adr_keeper.exceptions import (
    ADRError, MissingTitle, StoreUnavailable, IndexWriteFailed
)
from adr_keeper.logging_config import get_logger
from adr_keeper.store.index import IndexBuilder
from adr_keeper.store.record import merge_status, parse_record, replace_title
from adr_keeper.store.scanner import RecordStore
from adr_keeper.store.template import load_template, render_template

logger = get_logger("store.lifecycle")


class LifecycleState(Enum):
    START = "start"
    CLASSIFY = "classify"
    CREATE_NEW = "create_new"
    UPDATE_EXISTING = "update_existing"
    PERSIST = "persist"
    REINDEX_ALL = "reindex_all"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class RecordOutcome:
    """What a single create-or-update invocation did."""
    number: str
    title: str
    status: str
    path: Path
    created: bool
    renamed: bool = False
    previous_path: Optional[Path] = None
    status_changed: bool = True
    cleanup_error: Optional[str] = None
    index_error: Optional[IndexWriteFailed] = None

    @property
    def action(self) -> str:
        if self.created:
            return "created"
        return "renamed" if self.renamed else "updated"

    @property
    def ok(self) -> bool:
        """True when both the record and the index were written."""
        return self.index_error is None


class LifecycleController:
    """Create-or-update orchestration over one record store."""

    def __init__(
        self,
        config: StoreConfig,
        today: Optional[Callable[[], date]] = None
    ):
        self.config = config
        self.store = RecordStore(config)
        self.index = IndexBuilder(self.store)
        self._today = today or date.today
        self.state = LifecycleState.START

    def _enter(self, state: LifecycleState):
        logger.debug("%s -> %s", self.state.value, state.value)
        self.state = state

    def apply(self, number: str, status: str, title: Optional[str] = None) -> RecordOutcome:
        """Create the record if its number is unused, otherwise update it.

        Args:
            number: Sequence number (digits are zero-padded to the store width)
            status: Target status
            title: Title; required for new records, triggers a rename on
                existing ones when it differs from the current heading

        Returns:
            RecordOutcome describing the result

        Raises:
            MissingTitle: New record without a title
            StoreUnavailable: Store directory cannot be created
            RecordUnreadable: Existing record cannot be read
            RecordWriteFailed: Record cannot be written
        """
        self.state = LifecycleState.START
        try:
            number = self.store.format_number(number)
            title = title.strip() if title else ""

            self._enter(LifecycleState.CLASSIFY)
            existing = self.store.find_by_number(number)

            if existing is None:
                outcome, content = self._create(number, status, title)
            else:
                outcome, content = self._update(existing, number, status, title)

            self._persist(outcome, content)
        except ADRError:
            self._enter(LifecycleState.ABORTED)
            raise

        self._reindex(outcome)
        self._enter(LifecycleState.DONE)
        return outcome

    def _create(self, number: str, status: str, title: str):
        self._enter(LifecycleState.CREATE_NEW)
        if not title:
            raise MissingTitle(
                f"A title is required to create ADR {number}",
                number=number
            )

        self.store.ensure_store()
        filename = self.store.record_filename(number, title)
        content = render_template(
            load_template(self.config),
            number=number,
            status=status,
            title=title,
            date=self._today().isoformat(),
        )
        outcome = RecordOutcome(
            number=number,
            title=title,
            status=status,
            path=self.store.path_for(filename),
            created=True,
        )
        return outcome, content

    def _update(self, filename: str, number: str, status: str, title: str):
        self._enter(LifecycleState.UPDATE_EXISTING)
        number = self.store.number_of(filename) or number
        original = self.store.read_record(filename)
        current = parse_record(original)

        content = merge_status(original, status)
        new_filename = filename
        if title and title not in (current.title, current.heading_text):
            content = replace_title(content, title)
            new_filename = self.store.record_filename(number, title)
        else:
            title = current.title

        renamed = new_filename != filename
        outcome = RecordOutcome(
            number=number,
            title=title,
            status=status,
            path=self.store.path_for(new_filename),
            created=False,
            renamed=renamed,
            previous_path=self.store.path_for(filename) if renamed else None,
            status_changed=status != current.status,
        )
        return outcome, content

    def _persist(self, outcome: RecordOutcome, content: str):
        self._enter(LifecycleState.PERSIST)
        self.store.write_record(outcome.path.name, content)
        logger.debug("Wrote %s", outcome.path)

        if outcome.previous_path is None:
            return
        try:
            self.store.remove_record(outcome.previous_path.name)
        except OSError as e:
            outcome.cleanup_error = str(e)
            logger.debug(
                "Renamed ADR written to %s but could not remove %s: %s",
                outcome.path, outcome.previous_path, e
            )

    def _reindex(self, outcome: RecordOutcome):
        self._enter(LifecycleState.REINDEX_ALL)
        try:
            self.index.rebuild()
        except IndexWriteFailed as e:
            outcome.index_error = e
        except StoreUnavailable as e:
            outcome.index_error = IndexWriteFailed(
                f"Cannot rebuild index for {self.config.store_dir}",
                path=str(self.config.index_path),
                details=e.details or e.message,
            )
        if outcome.index_error is not None:
            logger.debug("ADR saved but index update failed: %s", outcome.index_error.message)

    def reindex(self) -> int:
        """Rebuild the index on its own."""
        return self.index.rebuild()
