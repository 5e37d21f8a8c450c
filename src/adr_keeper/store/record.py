"""
Record text parsing

Reads the structured fields (title heading, status, previous status) out of
a record's markdown and rewrites them without touching any other line.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional


STATUS_MARKER = "**Status**:"
PREVIOUS_STATUS_MARKER = "**Previous Status**:"

_HEADING_RE = re.compile(r"^#\s+")
_ADR_PREFIX_RE = re.compile(r"^(ADR\s+\d+:\s*)(.*)$", re.IGNORECASE)


@dataclass
class RecordDocument:
    """Structured view of a record body."""
    lines: List[str] = field(default_factory=list)
    title: str = ""
    heading_text: str = ""
    status: str = ""
    previous_status: Optional[str] = None
    heading_index: Optional[int] = None
    status_index: Optional[int] = None


def _field_value(line: str, marker: str) -> str:
    return line[len(marker):].strip()


def _trailing_whitespace(line: str) -> str:
    return line[len(line.rstrip()):]


def _line_ending(lines: List[str]) -> str:
    return "\r" if lines and lines[0].endswith("\r") else ""


def _heading_title(line: str) -> str:
    text = _HEADING_RE.sub("", line).strip()
    match = _ADR_PREFIX_RE.match(text)
    return match.group(2).strip() if match else text


def parse_record(text: str) -> RecordDocument:
    """Parse a record body into its structured fields.

    The first ``# `` line is the heading; the first ``**Status**:`` and
    ``**Previous Status**:`` lines hold the two status fields.
    """
    doc = RecordDocument(lines=text.split("\n"))

    for i, line in enumerate(doc.lines):
        if doc.heading_index is None and _HEADING_RE.match(line):
            doc.heading_index = i
            doc.heading_text = _HEADING_RE.sub("", line).strip()
            doc.title = _heading_title(line)
        elif doc.status_index is None and line.startswith(STATUS_MARKER):
            doc.status_index = i
            doc.status = _field_value(line, STATUS_MARKER)
        elif doc.previous_status is None and line.startswith(PREVIOUS_STATUS_MARKER):
            doc.previous_status = _field_value(line, PREVIOUS_STATUS_MARKER)

    return doc


def merge_status(text: str, new_status: str) -> str:
    """Set the status of a record body, keeping the old one as previous status.

    Re-applying the current status returns ``text`` unchanged. Otherwise all
    status and previous-status lines are dropped and exactly one of each is
    written where the first status line was (after the heading, or at the
    top, when there was none).
    """
    doc = parse_record(text)
    if new_status == doc.status:
        return text

    suffix = ""
    insert_at = None
    kept: List[str] = []
    for i, line in enumerate(doc.lines):
        if line.startswith(STATUS_MARKER) or line.startswith(PREVIOUS_STATUS_MARKER):
            if i == doc.status_index:
                insert_at = len(kept)
                suffix = _trailing_whitespace(line)
            continue
        kept.append(line)

    if insert_at is None:
        suffix = _line_ending(doc.lines)
        insert_at = 0
        for i, line in enumerate(kept):
            if _HEADING_RE.match(line):
                insert_at = i + 1
                break

    new_lines = [f"{STATUS_MARKER} {new_status}{suffix}"]
    if doc.status:
        new_lines.append(f"{PREVIOUS_STATUS_MARKER} {doc.status}{suffix}")

    kept[insert_at:insert_at] = new_lines
    return "\n".join(kept)


def replace_title(text: str, new_title: str) -> str:
    """Rewrite the title in the heading line, keeping any ``ADR <n>:`` prefix."""
    doc = parse_record(text)
    if doc.heading_index is None:
        return f"# {new_title}\n{text}"

    line = doc.lines[doc.heading_index]
    marker = _HEADING_RE.match(line).group(0)
    rest = line[len(marker):]
    suffix = _trailing_whitespace(rest)
    match = _ADR_PREFIX_RE.match(rest.strip())
    prefix = match.group(1) if match else ""

    doc.lines[doc.heading_index] = f"{marker}{prefix}{new_title}{suffix}"
    return "\n".join(doc.lines)
