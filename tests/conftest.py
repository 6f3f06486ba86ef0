import pytest

from lox.interpreter import Interpreter
from lox.types.environment import Environment


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture
def env():
    return Environment()


@pytest.fixture
def run_lox(interp, capsys):
    """Run a program on a fresh interpreter and return what it printed."""

    def _run(source: str) -> str:
        interp.run(source)
        return capsys.readouterr().out

    return _run


@pytest.fixture
def lox_file(tmp_path):
    def _write(source: str, name: str = "main.lox") -> str:
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return str(path)

    return _write
