"""Unit tests for JSONEmitter and RecordFormat."""

import json
import threading

import pytest

from csvjson.core.channel import RecordChannel
from csvjson.core.emitter import JSONEmitter, RecordFormat
from csvjson.errors import ChannelCancelled, OutputError

PEOPLE = [
    {"name": "Alice", "age": "30"},
    {"name": "Bob", "age": "25"},
]


def test_compact_output(tmp_path):
    out = tmp_path / "out.json"
    count = JSONEmitter(out).write(iter(PEOPLE))

    assert count == 2
    assert out.read_text() == (
        '[{"name":"Alice","age":"30"},{"name":"Bob","age":"25"}]'
    )


def test_pretty_output(tmp_path):
    out = tmp_path / "out.json"
    JSONEmitter(out, RecordFormat.PRETTY).write(iter(PEOPLE))

    expected = (
        "[\n"
        "   {\n"
        '      "name": "Alice",\n'
        '      "age": "30"\n'
        "   },\n"
        "   {\n"
        '      "name": "Bob",\n'
        '      "age": "25"\n'
        "   }]\n"
    )
    assert out.read_text() == expected


def test_empty_compact(tmp_path):
    out = tmp_path / "out.json"
    assert JSONEmitter(out).write(iter([])) == 0
    assert out.read_text() == "[]"


def test_empty_pretty(tmp_path):
    out = tmp_path / "out.json"
    JSONEmitter(out, RecordFormat.PRETTY).write(iter([]))
    assert out.read_text() == "[\n]\n"
    assert json.loads(out.read_text()) == []


def test_pretty_and_compact_parse_equal(tmp_path):
    compact = tmp_path / "compact.json"
    pretty = tmp_path / "pretty.json"
    JSONEmitter(compact, RecordFormat.COMPACT).write(iter(PEOPLE))
    JSONEmitter(pretty, RecordFormat.PRETTY).write(iter(PEOPLE))

    assert json.loads(compact.read_text()) == json.loads(pretty.read_text())


def test_sorted_keys(tmp_path):
    out = tmp_path / "out.json"
    fmt = RecordFormat.COMPACT.with_sorted_keys()
    JSONEmitter(out, fmt).write(iter(PEOPLE))

    assert out.read_text() == (
        '[{"age":"30","name":"Alice"},{"age":"25","name":"Bob"}]'
    )


def test_from_flag():
    assert RecordFormat.from_flag(False) == RecordFormat.COMPACT
    assert RecordFormat.from_flag(True) == RecordFormat.PRETTY
    assert RecordFormat.from_flag(True).with_sorted_keys().sort_keys
    assert RecordFormat.from_flag(True).with_sorted_keys().pretty


def test_non_ascii_is_written_as_utf8(tmp_path):
    out = tmp_path / "out.json"
    JSONEmitter(out).write(iter([{"city": "München"}]))

    assert out.read_bytes() == '[{"city":"München"}]'.encode("utf-8")


def test_special_characters_are_escaped(tmp_path):
    out = tmp_path / "out.json"
    record = {"note": 'say "hi"\nnext\tline \\ end'}
    JSONEmitter(out).write(iter([record]))

    assert json.loads(out.read_text()) == [record]


def test_unwritable_output_is_fatal(tmp_path):
    out = tmp_path / "missing_dir" / "out.json"
    with pytest.raises(OutputError, match="Cannot open"):
        JSONEmitter(out).write(iter(PEOPLE))


def test_unencodable_record_is_fatal(tmp_path):
    out = tmp_path / "out.json"
    with pytest.raises(OutputError, match="Cannot encode"):
        JSONEmitter(out).write(iter([{"a": object()}]))


def test_run_drains_channel_and_sets_done(tmp_path):
    out = tmp_path / "out.json"
    channel = RecordChannel(capacity=5)
    for record in PEOPLE:
        channel.send(record)
    channel.close()
    done = threading.Event()

    emitter = JSONEmitter(out)
    emitter.run(channel, done)

    assert done.is_set()
    assert emitter.records_written == 2
    assert json.loads(out.read_text()) == PEOPLE


def test_run_sets_done_on_failure(tmp_path):
    channel = RecordChannel()
    channel.cancel()
    done = threading.Event()

    with pytest.raises(ChannelCancelled):
        JSONEmitter(tmp_path / "out.json").run(channel, done)

    assert done.is_set()
    assert not (tmp_path / "out.json").exists()
