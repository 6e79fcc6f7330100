"""Tests for the application runner."""

from unittest.mock import patch

from movieshelf import main
from movieshelf.config import Settings


def test_run_serves_on_configured_host_and_port() -> None:
    configured = Settings(_env_file=None, api_host="127.0.0.1", api_port=9001, log_level="WARNING")

    with patch.object(main, "settings", configured), patch.object(main.uvicorn, "run") as run:
        main.run()

    run.assert_called_once_with(
        "movieshelf.main:app", host="127.0.0.1", port=9001, log_level="warning"
    )
