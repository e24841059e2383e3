"""Tests for the JSON-lines error sink."""

import json
from datetime import datetime, timezone

import pytest

from ticketflow.adapters.error_log.jsonl_sink import JsonlErrorLogSink


def test_daily_file_name(tmp_path):
    sink = JsonlErrorLogSink(tmp_path)
    path = sink.path_for(datetime(2026, 5, 17, 23, 59, tzinfo=timezone.utc))
    assert path == tmp_path / "errors-2026-05-17.jsonl"


@pytest.mark.asyncio
async def test_appends_one_line_per_entry(tmp_path):
    sink = JsonlErrorLogSink(tmp_path / "nested" / "logs")
    await sink.write({"ticketId": "t-1", "error": {"name": "X"}})
    await sink.write({"ticketId": "t-2", "error": {"name": "Y"}})

    files = list((tmp_path / "nested" / "logs").glob("errors-*.jsonl"))
    assert len(files) == 1
    lines = files[0].read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["ticketId"] for line in lines] == ["t-1", "t-2"]


@pytest.mark.asyncio
async def test_unwritable_directory_raises(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    with pytest.raises(OSError):
        await JsonlErrorLogSink(blocker).write({"ticketId": "t-1"})
