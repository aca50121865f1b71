import pytest

from lox.interpreter import Interpreter


# Every test gets an interpreter whose ``print`` output is collected in a list
# instead of going to stdout, so assertions can look at printed lines directly.


@pytest.fixture
def output():
    return []


@pytest.fixture
def interp(output):
    return Interpreter(output=output.append)


@pytest.fixture
def run(interp, output):
    """Run a program and return everything it printed so far."""

    def _run(source: str) -> list[str]:
        interp.run(source)
        return output

    return _run
