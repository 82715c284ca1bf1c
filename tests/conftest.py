import pytest


@pytest.fixture(autouse=True)
def _isolated_cache_dir(tmp_path, monkeypatch):
    # Never touch the user's real scan cache from tests.
    monkeypatch.setenv("GOUML_CACHE_DIR", str(tmp_path / "gouml-cache"))
    yield
