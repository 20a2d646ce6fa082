import pytest

from humandiff.data.history import HistoryStore
from humandiff.rewrite.settings import (
    TargetAudience,
    TransformationMode,
    TransformationResponse,
    Verbosity,
)


def make_response(id="t-1", original="The quick fox", humanized="The quick brown fox", timestamp=1_700_000_000_123, **overrides):
    fields = dict(
        id=id,
        original_text=original,
        humanized_text=humanized,
        mode=TransformationMode.PARAPHRASE,
        formality=50,
        target_audience=TargetAudience.GENERAL,
        verbosity=Verbosity.BALANCED,
        deep_humanization=True,
        timestamp=timestamp,
    )
    fields.update(overrides)
    return TransformationResponse(**fields)


@pytest.fixture
def history(tmp_path):
    return HistoryStore(str(tmp_path / "history.parquet"))


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    for name in (
        "HUMANDIFF_API_URL",
        "HUMANDIFF_API_KEY",
        "HUMANDIFF_TIMEOUT",
        "HUMANDIFF_LOOKAHEAD_WINDOW",
        "HUMANDIFF_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HUMANDIFF_HISTORY_PATH", str(tmp_path / "env-history.parquet"))
