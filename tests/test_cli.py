from unittest.mock import patch

from krillin.cli import main

VALID_CONFIG = """
[server]
host = "127.0.0.1"
port = 9999

[openai]
api_key = "placeholder"

[openai.whisper]
api_key = "placeholder"
"""


def test_invalid_config_does_not_start(tmp_path):
    with patch("flask.Flask.run") as run:
        status = main(["--config", str(tmp_path / "missing.toml")])
    assert status == 1
    run.assert_not_called()


def test_valid_config_starts_server(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(VALID_CONFIG, encoding="utf-8")
    with patch("flask.Flask.run") as run:
        status = main(["--config", str(path)])
    assert status == 0
    run.assert_called_once_with(host="127.0.0.1", port=9999)


def test_server_failure_returns_error(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(VALID_CONFIG, encoding="utf-8")
    with patch("flask.Flask.run", side_effect=OSError("address in use")):
        status = main(["--config", str(path)])
    assert status == 1