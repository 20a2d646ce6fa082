import importlib.util
from pathlib import Path

import polars as pl

from humandiff.data.history import HistoryStore
from humandiff.rewrite.settings import TransformationMode

from conftest import make_response

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "build_diff_stats.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("build_diff_stats", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_build_diff_stats(tmp_path) -> None:
    history_path = str(tmp_path / "history.parquet")
    store = HistoryStore(history_path)
    store.append(make_response(id="a"))
    store.append(
        make_response(
            id="b",
            original="alpha beta",
            humanized="ALPHA BETA",
            mode=TransformationMode.VOCABULARY,
        )
    )
    output_path = tmp_path / "out" / "stats.parquet"

    df = _load_script().build_diff_stats(history_path, str(output_path), window=3)

    assert output_path.exists()
    assert pl.read_parquet(output_path).equals(df)
    rows = {row["event_id"]: row for row in df.iter_rows(named=True)}
    assert rows["a"]["added_words"] == 1
    assert rows["a"]["removed_words"] == 0
    assert rows["b"]["mode"] == "vocabulary"
    assert rows["b"]["change_ratio"] == 1.0


def test_build_diff_stats_empty_history(tmp_path) -> None:
    df = _load_script().build_diff_stats(
        str(tmp_path / "history.parquet"), str(tmp_path / "stats.parquet"), window=3
    )

    assert df.is_empty()
