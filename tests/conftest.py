import pytest

from eta.interpreter import Interpreter


@pytest.fixture
def interp():
    """A fresh interpreter; definitions persist across eval calls within a test."""
    return Interpreter()


@pytest.fixture
def no_auto_import(monkeypatch):
    monkeypatch.setenv("ETA_AUTO_IMPORT", "0")
