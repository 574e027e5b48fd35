"""Tests for schema validation of manifests and events."""

import json
from collections.abc import Callable
from pathlib import Path

import jsonschema
import pytest

from maildedup.audit import RunContext
from maildedup.engine import DedupConfig, run_dedup, run_deletion

_SCHEMAS_DIR = Path(__file__).parent.parent.parent / "schemas"


@pytest.fixture(scope="module")
def manifest_schema() -> dict:
    """Load run manifest JSON schema."""
    with (_SCHEMAS_DIR / "run_manifest.schema.json").open() as f:
        return json.load(f)


@pytest.fixture(scope="module")
def event_schema() -> dict:
    """Load log event JSON schema."""
    with (_SCHEMAS_DIR / "log_event.schema.json").open() as f:
        return json.load(f)


@pytest.fixture
def audited_run(tmp_path: Path, write_message: Callable[..., Path]) -> Path:
    """Run detection and deletion with an audit directory, return the directory."""
    write_message("mail/INBOX/cur/1")
    write_message("mail/Sent/cur/1")
    write_message("mail/junk", data=b"\x00\x01\x02")
    output_dir = tmp_path / "audit"

    run = RunContext.start(output_dir, config=DedupConfig().to_dict())
    result = run_dedup(tmp_path / "mail", run=run)
    run_deletion(result.results, run=run)
    run.finish(status="success", records_processed=result.total_records)
    return output_dir


@pytest.mark.unit
def test_schemas_are_valid(manifest_schema: dict, event_schema: dict) -> None:
    jsonschema.Draft202012Validator.check_schema(manifest_schema)
    jsonschema.Draft202012Validator.check_schema(event_schema)


@pytest.mark.unit
def test_generated_manifest_validates(audited_run: Path, manifest_schema: dict) -> None:
    with (audited_run / "run.json").open() as f:
        jsonschema.validate(instance=json.load(f), schema=manifest_schema)


@pytest.mark.unit
def test_generated_events_validate(audited_run: Path, event_schema: dict) -> None:
    with (audited_run / "events.jsonl").open() as f:
        events = [json.loads(line) for line in f]

    names = {e["event"] for e in events}
    assert names >= {"run_started", "file_skipped", "file_deleted", "run_finished"}
    for event in events:
        jsonschema.validate(instance=event, schema=event_schema)


@pytest.mark.unit
def test_manifest_rejects_unknown_status(audited_run: Path, manifest_schema: dict) -> None:
    with (audited_run / "run.json").open() as f:
        manifest = json.load(f)
    manifest["status"] = "finished"

    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance=manifest, schema=manifest_schema)


@pytest.mark.unit
def test_event_rejects_extra_fields(event_schema: dict) -> None:
    event = {
        "ts": "2026-01-01T00:00:00.000001Z",
        "run_id": "r",
        "level": "INFO",
        "event": "x",
        "data": {},
        "unexpected": 1,
    }

    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance=event, schema=event_schema)
