"""Tests for the record lifecycle controller."""

import logging
from datetime import date

import pytest


@pytest.fixture
def store_config(tmp_path):
    from adr_keeper.config import StoreConfig

    return StoreConfig(store_dir=tmp_path / "docs" / "adr")


@pytest.fixture
def controller(store_config):
    """Controller with a fixed clock."""
    from adr_keeper.store.lifecycle import LifecycleController

    return LifecycleController(store_config, today=lambda: date(2024, 3, 20))


def _write(config, filename, content):
    config.store_dir.mkdir(parents=True, exist_ok=True)
    path = config.store_dir / filename
    path.write_text(content)
    return path


class TestCreate:
    """Test creating new records."""

    def test_create_new_record(self, controller, store_config):
        """Test a new number with a title creates a file from the default template."""
        from adr_keeper.store.lifecycle import LifecycleState

        outcome = controller.apply("001", "Proposed", "Use PostgreSQL")

        path = store_config.store_dir / "adr-001-use-postgresql.md"
        assert outcome.created is True
        assert outcome.action == "created"
        assert outcome.path == path
        assert outcome.ok is True
        assert controller.state == LifecycleState.DONE

        content = path.read_text()
        assert content.startswith("# ADR 001: Use PostgreSQL\n")
        assert "**Status**: Proposed" in content
        assert "**Date**: 2024-03-20" in content

    def test_create_builds_directory_and_index(self, controller, store_config):
        """Test the store directory and index are created on first run."""
        controller.apply("001", "Proposed", "First Decision")

        index = store_config.index_path.read_text()
        assert "- [001 First Decision](adr-001-first-decision.md)" in index

    def test_create_pads_number(self, controller, store_config):
        """Test a bare number is zero-padded."""
        outcome = controller.apply("7", "Proposed", "Seven")

        assert outcome.number == "007"
        assert (store_config.store_dir / "adr-007-seven.md").exists()

    def test_create_uses_template_override(self, controller, store_config):
        """Test template.md in the store is rendered."""
        _write(store_config, "template.md", "{{number}}|{{title}}|{{status}}|{{date}}|{{title}}")

        outcome = controller.apply("002", "Accepted", "Custom")
        assert outcome.path.read_text() == "002|Custom|Accepted|2024-03-20|Custom"

    def test_create_without_title_fails(self, controller, store_config):
        """Test MissingTitle leaves the store untouched."""
        from adr_keeper.exceptions import MissingTitle
        from adr_keeper.store.lifecycle import LifecycleState

        with pytest.raises(MissingTitle) as exc_info:
            controller.apply("001", "Accepted")

        assert exc_info.value.number == "001"
        assert controller.state == LifecycleState.ABORTED
        assert not store_config.store_dir.exists()

    def test_create_blank_title_fails(self, controller):
        """Test a whitespace-only title counts as missing."""
        from adr_keeper.exceptions import MissingTitle

        with pytest.raises(MissingTitle):
            controller.apply("001", "Accepted", "   ")

    def test_create_store_unavailable(self, tmp_path):
        """Test an uncreatable store aborts before writing."""
        from adr_keeper.config import StoreConfig
        from adr_keeper.exceptions import StoreUnavailable
        from adr_keeper.store.lifecycle import LifecycleController

        blocker = tmp_path / "docs"
        blocker.write_text("file in the way")
        controller = LifecycleController(StoreConfig(store_dir=blocker / "adr"))

        with pytest.raises(StoreUnavailable):
            controller.apply("001", "Accepted", "Blocked")

    def test_create_write_failure(self, controller, store_config):
        """Test RecordWriteFailed when the target path cannot be written."""
        from adr_keeper.exceptions import RecordWriteFailed

        store_config.store_dir.mkdir(parents=True)
        (store_config.store_dir / "adr-001-blocked.md").mkdir()

        with pytest.raises(RecordWriteFailed):
            controller.apply("001", "Accepted", "Blocked")
        assert not store_config.index_path.exists()


class TestUpdate:
    """Test updating existing records."""

    def test_update_status(self, controller, store_config):
        """Test an existing number needs no title and gets status history."""
        path = _write(
            store_config, "adr-002-existing.md",
            "# ADR 002: Existing\n\n**Status**: Accepted\n\nTest content"
        )

        outcome = controller.apply("002", "Superseded")

        assert outcome.created is False
        assert outcome.action == "updated"
        assert outcome.title == "Existing"
        assert outcome.status_changed is True
        assert path.read_text() == (
            "# ADR 002: Existing\n\n"
            "**Status**: Superseded\n"
            "**Previous Status**: Accepted\n\n"
            "Test content"
        )
        assert store_config.store_dir.joinpath("README.md").exists()

    def test_update_same_status_is_noop(self, controller, store_config):
        """Test re-applying the status leaves the file byte-identical."""
        original = "# ADR 002: Existing\n\n**Status**: Accepted  \n\nBody\n"
        path = _write(store_config, "adr-002-existing.md", original)

        outcome = controller.apply("002", "Accepted")

        assert outcome.status_changed is False
        assert path.read_text() == original

    def test_update_never_creates_second_file(self, controller, store_config):
        """Test updating with the same title keeps a single file per number."""
        _write(store_config, "adr-003-cache.md", "# ADR 003: Cache\n**Status**: Proposed\n")

        controller.apply("003", "Accepted", "Cache")

        records = sorted(p.name for p in store_config.store_dir.glob("adr-003-*"))
        assert records == ["adr-003-cache.md"]

    def test_update_with_padded_lookup(self, controller, store_config):
        """Test '3' finds adr-003."""
        _write(store_config, "adr-003-cache.md", "# ADR 003: Cache\n**Status**: Proposed\n")

        outcome = controller.apply("3", "Accepted")
        assert outcome.created is False

    def test_update_with_wider_number(self, controller, store_config):
        """Test '0001' finds adr-001 instead of creating a second record."""
        path = _write(store_config, "adr-001-x.md", "# ADR 001: X\n**Status**: Proposed\n")

        outcome = controller.apply("0001", "Accepted")

        assert outcome.created is False
        assert outcome.path == path
        assert sorted(p.name for p in store_config.store_dir.glob("adr-*")) == ["adr-001-x.md"]

    def test_rename_keeps_stored_width(self, controller, store_config):
        """Test a rename keeps the width of the number already on disk."""
        _write(store_config, "adr-0012-alpha.md", "# ADR 0012: Alpha\n**Status**: Proposed\n")

        outcome = controller.apply("12", "Accepted", "Beta")

        assert outcome.created is False
        assert outcome.path.name == "adr-0012-beta.md"

    def test_repeated_title_with_custom_template(self, controller, store_config):
        """Test re-applying a title that looks like an 'ADR x:' prefix leaves the heading alone."""
        store_config.store_dir.mkdir(parents=True)
        store_config.template_path.write_text("# {{title}}\n\n**Status**: {{status}}\n")

        controller.apply("001", "Proposed", "ADR format: MADR")
        outcome = controller.apply("001", "Accepted", "ADR format: MADR")

        content = outcome.path.read_text()
        assert outcome.renamed is False
        assert content.startswith("# ADR format: MADR\n")
        assert "**Status**: Accepted" in content

    def test_rename_on_title_change(self, controller, store_config):
        """Test a new title renames the file and removes the old one."""
        old = _write(
            store_config, "adr-005-alpha.md",
            "# ADR 005: Alpha\n\n**Status**: Proposed\n\nBody\n"
        )

        outcome = controller.apply("005", "Accepted", "Beta")

        new = store_config.store_dir / "adr-005-beta.md"
        assert outcome.renamed is True
        assert outcome.action == "renamed"
        assert outcome.previous_path == old
        assert outcome.path == new
        assert not old.exists()

        content = new.read_text()
        assert content.startswith("# ADR 005: Beta\n")
        assert "**Status**: Accepted" in content
        assert "**Previous Status**: Proposed" in content

        index = store_config.index_path.read_text()
        assert "adr-005-beta.md" in index
        assert "adr-005-alpha.md" not in index

    def test_rename_cleanup_failure_is_warning(self, controller, store_config, monkeypatch, caplog):
        """Test a failed removal still reports success and leaves the warning to the caller."""
        from adr_keeper.store.scanner import RecordStore

        old = _write(store_config, "adr-005-alpha.md", "# ADR 005: Alpha\n**Status**: Proposed\n")

        def fail_remove(self, filename):
            raise PermissionError("read-only directory")

        monkeypatch.setattr(RecordStore, "remove_record", fail_remove)

        with caplog.at_level(logging.DEBUG, logger="adr_keeper"):
            outcome = controller.apply("005", "Accepted", "Beta")

        assert outcome.renamed is True
        assert outcome.cleanup_error == "read-only directory"
        assert outcome.ok is True
        assert (store_config.store_dir / "adr-005-beta.md").exists()
        assert old.exists()
        assert "could not remove" in caplog.text
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    def test_case_only_title_change_keeps_file(self, controller, store_config):
        """Test a title change with the same slug rewrites the heading only."""
        path = _write(store_config, "adr-006-alpha.md", "# ADR 006: Alpha\n**Status**: Proposed\n")

        outcome = controller.apply("006", "Proposed", "ALPHA")

        assert outcome.renamed is False
        assert path.read_text().startswith("# ADR 006: ALPHA\n")

    def test_update_unreadable_record(self, controller, store_config):
        """Test RecordUnreadable for undecodable content."""
        from adr_keeper.exceptions import RecordUnreadable
        from adr_keeper.store.lifecycle import LifecycleState

        store_config.store_dir.mkdir(parents=True)
        (store_config.store_dir / "adr-001-bad.md").write_bytes(b"\xff\xfe broken")

        with pytest.raises(RecordUnreadable):
            controller.apply("001", "Accepted")
        assert controller.state == LifecycleState.ABORTED

    def test_update_write_failure_skips_index(self, controller, store_config, monkeypatch):
        """Test RecordWriteFailed stops before the index rebuild."""
        from adr_keeper.exceptions import RecordWriteFailed
        from adr_keeper.store.index import IndexBuilder

        _write(store_config, "adr-001-test.md", "test content")
        calls = []
        monkeypatch.setattr(IndexBuilder, "rebuild", lambda self: calls.append(1))

        def fail_write(path, *args, **kwargs):
            raise PermissionError("read-only file")

        monkeypatch.setattr("pathlib.Path.write_text", fail_write)

        with pytest.raises(RecordWriteFailed):
            controller.apply("001", "Superseded")
        assert calls == []


class TestReindex:
    """Test index failure handling."""

    def test_index_failure_keeps_record(self, controller, store_config):
        """Test an index write failure is reported without rolling back."""
        from adr_keeper.exceptions import IndexWriteFailed

        store_config.store_dir.mkdir(parents=True)
        store_config.index_path.mkdir()

        outcome = controller.apply("002", "Accepted", "Test Decision")

        assert outcome.created is True
        assert outcome.path.exists()
        assert isinstance(outcome.index_error, IndexWriteFailed)
        assert outcome.ok is False

    def test_next_run_heals_index(self, controller, store_config):
        """Test a later run rebuilds the full index."""
        store_config.store_dir.mkdir(parents=True)
        store_config.index_path.mkdir()
        controller.apply("001", "Accepted", "First")

        store_config.index_path.rmdir()
        controller.apply("002", "Accepted", "Second")

        index = store_config.index_path.read_text()
        assert "adr-001-first.md" in index
        assert "adr-002-second.md" in index

    def test_reindex(self, controller, store_config):
        """Test standalone reindex counts records."""
        _write(store_config, "adr-001-a.md", "x")
        _write(store_config, "adr-002-b.md", "x")

        assert controller.reindex() == 2
