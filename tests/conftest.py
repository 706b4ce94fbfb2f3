"""Test configuration utilities and shared fixtures."""

import sys
from collections.abc import Iterator
from pathlib import Path

# Make ``src`` importable when tests run without an editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from swetax.backend.app import create_app  # noqa: E402
from swetax.backend.config import rate_tables  # noqa: E402


@pytest.fixture()
def app() -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app()
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()


@pytest.fixture()
def isolated_rates_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Path]:
    """Yield a writable copy of the rate tables patched into the loader."""

    rates_path = tmp_path / "rates.yaml"
    rates_path.write_text(rate_tables.RATES_FILE.read_text("utf-8"), "utf-8")

    monkeypatch.setattr(rate_tables, "CONFIG_DIRECTORY", tmp_path)
    monkeypatch.setattr(rate_tables, "RATES_FILE", rates_path)
    rate_tables.load_rate_tables.cache_clear()

    yield rates_path

    rate_tables.load_rate_tables.cache_clear()
