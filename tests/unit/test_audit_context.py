"""Tests for RunContext and the run manifest."""

import json
import re
from pathlib import Path

import pytest

from maildedup.audit import RunContext, generate_run_id
from maildedup.errors import DeleteFailure


def _manifest(output_dir: Path) -> dict:
    return json.loads((output_dir / "run.json").read_text(encoding="utf-8"))


@pytest.mark.unit
def test_generate_run_id_format() -> None:
    run_id = generate_run_id()

    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T[\d:.]+Z__[0-9a-f]{8}", run_id)
    assert generate_run_id() != run_id


@pytest.mark.unit
def test_start_writes_run_started(tmp_path: Path) -> None:
    output_dir = tmp_path / "audit"

    run = RunContext.start(output_dir, config={"workers": 2}, argv=["maildedup", "dedupe"])
    run.finish()

    first = json.loads((output_dir / "events.jsonl").read_text().splitlines()[0])
    assert first["event"] == "run_started"
    assert first["data"]["config"] == {"workers": 2}
    assert first["data"]["argv"] == ["maildedup", "dedupe"]


@pytest.mark.unit
def test_manifest_records_stages_and_inputs(tmp_path: Path) -> None:
    output_dir = tmp_path / "audit"
    run = RunContext.start(output_dir, config={})

    run.start_stage("ingest", expected=3)
    run.record_inventory(Path("/home/u/Mail"), total_files=3, total_records=2, skipped_files=["/x"])
    run.finish_stage("ingest", counters={"records": 2})
    run.finish(status="success", records_processed=2)

    manifest = _manifest(output_dir)
    assert manifest["status"] == "success"
    assert manifest["maildir"] == {
        "root": "Mail",
        "total_files": 3,
        "total_records": 2,
        "skipped_files": ["/x"],
    }
    (stage,) = manifest["stages"]
    assert stage["name"] == "ingest"
    assert stage["counters"] == {"records": 2}
    assert stage["finished_at"] is not None
    assert "click" in manifest["environment"]["dependencies"]


@pytest.mark.unit
def test_finish_stage_requires_start(tmp_path: Path) -> None:
    run = RunContext.start(tmp_path, config={})

    with pytest.raises(ValueError, match="Stage not started"):
        run.finish_stage("group")
    run.finish()


@pytest.mark.unit
def test_record_error_with_path(tmp_path: Path) -> None:
    run = RunContext.start(tmp_path, config={})

    run.record_error(DeleteFailure("/mail/x", "Permission denied"), stage="delete", path="/mail/x")
    run.finish(status="partial")

    (error,) = _manifest(tmp_path)["errors"]
    assert error["exception_class"] == "DeleteFailure"
    assert error["path"] == "/mail/x"
    assert error["traceback"] is None


@pytest.mark.unit
def test_context_manager_marks_failure(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError):
        with RunContext.start(tmp_path, config={}):
            raise RuntimeError("boom")

    manifest = _manifest(tmp_path)
    assert manifest["status"] == "failed"
    assert manifest["errors"][0]["message"] == "boom"
    assert "RuntimeError" in manifest["errors"][0]["traceback"]


@pytest.mark.unit
def test_events_artifact_hash(tmp_path: Path) -> None:
    with RunContext.start(tmp_path, config={}):
        pass

    (artifact,) = _manifest(tmp_path)["artifacts"]
    assert artifact["path"] == "events.jsonl"
    assert artifact["bytes"] == (tmp_path / "events.jsonl").stat().st_size
    assert artifact["sha256"].startswith("sha256:")
    assert not (tmp_path / "run.tmp").exists()
