"""
adr-keeper Record Store

Slug, template, scanning, status merging, index and lifecycle components.
"""

from adr_keeper.store.index import IndexBuilder
from adr_keeper.store.lifecycle import LifecycleController, LifecycleState, RecordOutcome
from adr_keeper.store.scanner import RecordStore, extract_display_title

__all__ = [
    "IndexBuilder",
    "LifecycleController",
    "LifecycleState",
    "RecordOutcome",
    "RecordStore",
    "extract_display_title",
]
