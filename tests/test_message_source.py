from __future__ import annotations

import json

import pytest

from smsledger.adapters.message_source import load_messages, to_raw_message


def _write(tmp_path, payload) -> str:
    path = tmp_path / "export.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_loads_records_and_skips_bodies_without_digits(tmp_path) -> None:
    path = _write(
        tmp_path,
        [
            {"id": 1, "address": "VM-HDFCBK", "body": "Rs 500 debited", "date": 1000},
            {"id": 2, "address": "FRIEND", "body": "see you soon", "date": 2000},
            {"id": 3, "sender": "HDFCBK", "body": "Rs 10,000 credited", "date": "3000"},
        ],
    )

    messages = load_messages(path)

    assert [message.id for message in messages] == ["1", "3"]
    assert messages[0].sender == "VM-HDFCBK"
    assert messages[1].received_at == 3000


def test_since_filter_is_exclusive(tmp_path) -> None:
    path = _write(
        tmp_path,
        [
            {"id": 1, "address": "A", "body": "Rs 1", "date": 1000},
            {"id": 2, "address": "A", "body": "Rs 2", "date": 2000},
        ],
    )
    assert [message.id for message in load_messages(path, since=1000)] == ["2"]


def test_missing_id_uses_position() -> None:
    message = to_raw_message({"address": "A", "body": "Rs 1", "date": 5}, 4)
    assert message.id == "4"


def test_missing_field_reports_record_index(tmp_path) -> None:
    path = _write(tmp_path, [{"id": 1, "address": "A", "date": 1}])
    with pytest.raises(ValueError, match="Record 0"):
        load_messages(path)


def test_non_array_export_is_rejected(tmp_path) -> None:
    path = _write(tmp_path, {"messages": []})
    with pytest.raises(ValueError):
        load_messages(path)


def test_invalid_json_is_rejected(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(ValueError):
        load_messages(str(path))
