"""Tests for run-scoped failure collection."""

import json

import pytest

from shopaction.diagnostics import create_failure_collector
from shopaction.diagnostics import failure_collector as collector_module
from shopaction.validation import validate_actions


@pytest.fixture
def errors_dir(tmp_path):
    return tmp_path / "_errors"


@pytest.fixture
def collector(errors_dir):
    return create_failure_collector(errors_dir, command="validate")


class TestFailureCollector:
    """Test FailureCollector."""

    def test_nothing_to_flush(self, collector, errors_dir):
        collector.record_success("a.json")
        assert not collector.has_failures()
        assert collector.flush_to_filesystem() is None
        assert not errors_dir.exists()

    def test_counts_by_cause(self, collector):
        collector.collect_failure("a.json", validate_actions("").failure)
        collector.collect_failure("b.json", validate_actions("{}").failure)
        collector.collect_failure("c.json", validate_actions("{}").failure)
        collector.record_success("d.json")

        counts = collector.get_failure_counts()
        assert counts["blank"] == 1
        assert counts["envelope"] == 2
        assert counts["syntax"] == 0
        assert collector.total_validated == 4

    def test_flush_writes_summary_and_index(self, collector, errors_dir):
        failure = validate_actions('{"actions":[{"name":"add"}]}').failure
        failure_id = collector.collect_failure("bad.json", failure)

        summary_file = collector.flush_to_filesystem()
        assert summary_file == errors_dir / f"{collector.run_id}.json"

        summary = json.loads(summary_file.read_text(encoding="utf-8"))
        assert summary["command"] == "validate"
        assert summary["total_failures"] == 1
        entry = summary["failures"][0]
        assert entry["failure_id"] == failure_id
        assert entry["source"] == "bad.json"
        assert entry["cause"] == "element_errors"
        assert entry["message"].startswith("Action[0]: ")

        index = json.loads((errors_dir / "index.json").read_text(encoding="utf-8"))
        assert index["total_runs"] == 1
        assert index["runs"][0]["run_id"] == collector.run_id

    def test_corrupt_index_replaced(self, collector, errors_dir):
        errors_dir.mkdir(parents=True)
        (errors_dir / "index.json").write_text("{broken")
        collector.collect_failure("a.json", validate_actions("").failure)

        collector.flush_to_filesystem()
        index = json.loads((errors_dir / "index.json").read_text(encoding="utf-8"))
        assert index["total_runs"] == 1

    def test_index_bounded(self, errors_dir, monkeypatch):
        monkeypatch.setattr(collector_module, "MAX_INDEXED_RUNS", 2)
        run_files = []
        for i in range(3):
            c = create_failure_collector(errors_dir, command="validate")
            c.start_time = c.start_time.replace(second=i)
            c.collect_failure("a.json", validate_actions("").failure)
            run_files.append(c.flush_to_filesystem())

        index = json.loads((errors_dir / "index.json").read_text(encoding="utf-8"))
        assert index["total_runs"] == 2
        assert not run_files[0].exists()
        assert run_files[2].exists()
