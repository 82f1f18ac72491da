import pytest

from krillin.config import (
    Config,
    ConfigError,
    check_config,
    load_config,
    save_config,
    validate_config,
)


def _ready_config() -> Config:
    config = Config()
    config.openai.api_key = "placeholder"
    config.openai.whisper.api_key = "placeholder"
    return config


def test_defaults_pinned():
    config = Config()
    assert config.server.port == 8888
    assert config.server.host == "127.0.0.1"
    assert config.app.transcribe_provider == "openai"


def test_load_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "absent.toml") == Config()


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.toml"
    config = _ready_config()
    config.app.segment_duration = 12
    config.aliyun.oss.bucket = "media-bucket"
    save_config(config, path)
    assert path.exists()
    assert load_config(path) == config


def test_partial_file_keeps_other_defaults(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[app]\nsegment_duration = 7\n", encoding="utf-8")
    loaded = load_config(path)
    assert loaded.app.segment_duration == 7
    assert loaded.server == Config().server
    assert loaded.app.transcribe_parallel_num == Config().app.transcribe_parallel_num


def test_invalid_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[app\nbroken", encoding="utf-8")
    assert load_config(path) == Config()


def test_from_dict_rejects_wrong_type():
    with pytest.raises(ConfigError, match="server.port"):
        Config.from_dict({"server": {"port": "eighty"}})


def test_from_dict_rejects_non_table():
    with pytest.raises(ConfigError):
        Config.from_dict({"openai": "nope"})


def test_to_dict_excludes_parsed_proxy():
    data = Config().to_dict()
    assert "parsed_proxy" not in data["app"]
    assert Config.from_dict(data) == Config()


def test_check_config_parses_proxy():
    config = _ready_config()
    config.app.proxy = "http://proxy.example.com:3128"
    check_config(config, "linux")
    assert config.app.parsed_proxy.hostname == "proxy.example.com"
    assert config.app.parsed_proxy.port == 3128


def test_check_config_rejects_bad_proxy():
    config = _ready_config()
    config.app.proxy = "http://[::1"
    with pytest.raises(ConfigError):
        check_config(config, "linux")


def test_openai_transcribe_needs_whisper_key():
    config = _ready_config()
    config.openai.whisper.api_key = ""
    with pytest.raises(ConfigError, match="OpenAI"):
        validate_config(config, "linux")


def test_fasterwhisper_model_must_be_known():
    config = _ready_config()
    config.app.transcribe_provider = "fasterwhisper"
    config.local_model.fasterwhisper = "huge"
    with pytest.raises(ConfigError, match="fasterwhisper"):
        validate_config(config, "linux")


def test_whisperkit_requires_macos():
    config = _ready_config()
    config.app.transcribe_provider = "whisperkit"
    with pytest.raises(ConfigError, match="macos"):
        validate_config(config, "linux")
    check_config(config, "darwin")
    assert config.app.parsed_proxy.geturl() == ""


def test_whispercpp_requires_windows():
    config = _ready_config()
    config.app.transcribe_provider = "whispercpp"
    with pytest.raises(ConfigError, match="windows"):
        validate_config(config, "darwin")


def test_aliyun_speech_needs_keys():
    config = _ready_config()
    config.app.transcribe_provider = "aliyun"
    config.aliyun.speech.access_key_id = "placeholder"
    with pytest.raises(ConfigError, match="阿里云语音"):
        validate_config(config, "linux")


@pytest.mark.parametrize(
    ("field", "value", "message"),
    [
        ("transcribe_provider", "unknown", "不支持的转录提供商"),
        ("llm_provider", "unknown", "不支持的LLM提供商"),
        ("llm_provider", "aliyun", "百炼"),
    ],
)
def test_provider_errors(field, value, message):
    config = _ready_config()
    setattr(config.app, field, value)
    with pytest.raises(ConfigError, match=message):
        validate_config(config, "linux")