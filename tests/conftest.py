import pytest

from fontpool.ui.cli.state import reset_cli_state


@pytest.fixture(autouse=True)
def _isolated_cli_state():
    reset_cli_state()
    yield
    reset_cli_state()
