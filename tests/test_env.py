import os

import pytest

from tripview.core.env import load_dotenv_if_present, resolve_project_path


@pytest.fixture(autouse=True)
def _fresh_dotenv_lookup():
    load_dotenv_if_present.cache_clear()
    yield
    load_dotenv_if_present.cache_clear()


def test_dotenv_marks_root_and_never_overrides_process_env(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("TRIPVIEW_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    nested = tmp_path / "notebooks" / "scratch"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)
    monkeypatch.setenv("TRIPVIEW_LOG_LEVEL", "ERROR")

    assert load_dotenv_if_present() == (tmp_path / ".env").resolve()
    assert resolve_project_path("data/itinerary.yaml") == (tmp_path / "data" / "itinerary.yaml").resolve()

    assert os.environ["TRIPVIEW_LOG_LEVEL"] == "ERROR"


def test_absolute_paths_are_returned_as_is(tmp_path):
    target = tmp_path / "trip.yaml"
    assert resolve_project_path(target) == target
    assert resolve_project_path(str(target)) == target
