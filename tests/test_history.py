import threading
from pathlib import Path

import pytest

from humandiff.data.history import HistoryStore
from humandiff.rewrite.settings import TargetAudience, TransformationMode, Verbosity

from conftest import make_response


def test_new_store_creates_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "history.parquet"

    store = HistoryStore(str(path))

    assert path.exists()
    assert store.read().is_empty()
    assert store.list() == []


def test_append_and_get_round_trip(history) -> None:
    response = make_response(
        mode=TransformationMode.TONE,
        formality=80,
        target_audience=TargetAudience.ACADEMIC,
        verbosity=Verbosity.DETAILED,
        deep_humanization=False,
    )

    assert history.append(response) == "t-1"

    assert history.get("t-1") == response


def test_list_is_newest_first(history) -> None:
    history.append(make_response(id="old", timestamp=1_000))
    history.append(make_response(id="new", timestamp=3_000))
    history.append(make_response(id="middle", timestamp=2_000))

    assert [record.id for record in history.list()] == ["new", "middle", "old"]
    assert [record.id for record in history.list(limit=2)] == ["new", "middle"]


def test_list_ties_prefer_latest_append(history) -> None:
    history.append(make_response(id="first", timestamp=5_000))
    history.append(make_response(id="second", timestamp=5_000))

    assert [record.id for record in history.list()] == ["second", "first"]


def test_duplicate_id_is_rejected(history) -> None:
    history.append(make_response())

    with pytest.raises(ValueError, match="already exists"):
        history.append(make_response())


def test_blank_text_is_rejected(history) -> None:
    with pytest.raises(ValueError, match="humanized_text cannot be empty"):
        history.append(make_response(humanized="   "))


def test_get_missing_raises_key_error(history) -> None:
    with pytest.raises(KeyError):
        history.get("missing")


def test_delete(history) -> None:
    history.append(make_response(id="keep"))
    history.append(make_response(id="drop"))

    assert history.delete("drop") is True
    assert history.delete("drop") is False
    assert [record.id for record in history.list()] == ["keep"]


def test_store_reopens_existing_file(tmp_path: Path) -> None:
    path = str(tmp_path / "history.parquet")
    HistoryStore(path).append(make_response())

    assert [record.id for record in HistoryStore(path).list()] == ["t-1"]


def test_list_during_concurrent_appends(history) -> None:
    errors = []
    done = threading.Event()

    def reader():
        while not done.is_set():
            try:
                history.list()
            except Exception as e:
                errors.append(e)

    thread = threading.Thread(target=reader)
    thread.start()
    try:
        for n in range(40):
            history.append(make_response(id=f"t-{n}", original="word " * 2000, humanized="text " * 2000))
    finally:
        done.set()
        thread.join()

    assert errors == []
    assert len(history.list()) == 40


def test_writes_leave_no_temp_files(tmp_path: Path) -> None:
    store = HistoryStore(str(tmp_path / "history.parquet"))
    store.append(make_response(id="a"))
    store.delete("a")

    assert [p.name for p in tmp_path.iterdir()] == ["history.parquet"]
