import pytest


@pytest.fixture(autouse=True)
def passmeter_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    monkeypatch.setenv("PASSMETER_HOME", str(home))
    return home
