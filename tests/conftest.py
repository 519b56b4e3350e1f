import pytest
from click.testing import CliRunner

from numberline.config import NO_CONFIG_ENV_VAR


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clear_no_config(monkeypatch):
    monkeypatch.delenv(NO_CONFIG_ENV_VAR, raising=False)
