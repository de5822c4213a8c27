from __future__ import annotations

import json

from billing_client.infrastructure.storage import JsonFileSessionStorage, MemorySessionStorage


def test_memory_storage_roundtrip() -> None:
    storage = MemorySessionStorage({"token": "a"})

    storage.set("user", "{}")
    storage.remove("token")
    storage.remove("missing")

    assert storage.get("token") is None
    assert storage.snapshot() == {"user": "{}"}


def test_json_file_survives_new_instance(tmp_path) -> None:
    path = tmp_path / "nested" / "session.json"

    JsonFileSessionStorage(path).set("token", "tok-1")

    assert JsonFileSessionStorage(path).get("token") == "tok-1"
    assert json.loads(path.read_text(encoding="utf-8")) == {"token": "tok-1"}
    assert not path.with_suffix(".json.tmp").exists()


def test_json_file_missing_reads_empty(tmp_path) -> None:
    storage = JsonFileSessionStorage(tmp_path / "absent.json")

    assert storage.get("token") is None
    storage.remove("token")
    assert not storage.path.exists()


def test_json_file_corrupt_reads_empty_and_is_replaced_on_write(tmp_path) -> None:
    path = tmp_path / "session.json"
    path.write_text("{broken", encoding="utf-8")
    storage = JsonFileSessionStorage(path)

    assert storage.get("token") is None

    storage.set("token", "tok-2")
    assert storage.get("token") == "tok-2"


def test_json_file_ignores_non_string_values(tmp_path) -> None:
    path = tmp_path / "session.json"
    path.write_text(json.dumps({"token": 42, "user": "{}"}), encoding="utf-8")
    storage = JsonFileSessionStorage(path)

    assert storage.get("token") is None
    assert storage.get("user") == "{}"


def test_json_file_non_object_reads_empty(tmp_path) -> None:
    path = tmp_path / "session.json"
    path.write_text("[1, 2]", encoding="utf-8")

    assert JsonFileSessionStorage(path).get("token") is None
