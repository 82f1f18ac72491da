"""Application configuration: defaults, TOML persistence and validation."""

from __future__ import annotations

import logging
import sys
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any
from urllib.parse import SplitResult, urlsplit

import tomli_w

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config") / "config.toml"
FASTERWHISPER_MODELS = ("tiny", "medium", "large-v2")


class ConfigError(ValueError):
    """Raised when the configuration is malformed or incomplete."""


@dataclass
class App:
    segment_duration: int = 5
    transcribe_parallel_num: int = 10
    translate_parallel_num: int = 5
    transcribe_max_attempts: int = 3
    translate_max_attempts: int = 3
    proxy: str = ""
    parsed_proxy: SplitResult | None = field(
        default=None, compare=False, repr=False, metadata={"persist": False}
    )
    transcribe_provider: str = "openai"
    llm_provider: str = "openai"


@dataclass
class Server:
    host: str = "127.0.0.1"
    port: int = 8888


@dataclass
class LocalModel:
    fasterwhisper: str = "large-v2"
    whisperkit: str = "large-v2"
    whispercpp: str = "large-v2"


@dataclass
class OpenAiWhisper:
    base_url: str = ""
    api_key: str = ""


@dataclass
class Openai:
    base_url: str = ""
    model: str = ""
    api_key: str = ""
    whisper: OpenAiWhisper = field(default_factory=OpenAiWhisper)


@dataclass
class AliyunOss:
    access_key_id: str = ""
    access_key_secret: str = ""
    bucket: str = ""


@dataclass
class AliyunSpeech:
    access_key_id: str = ""
    access_key_secret: str = ""
    app_key: str = ""


@dataclass
class AliyunBailian:
    api_key: str = ""


@dataclass
class Aliyun:
    oss: AliyunOss = field(default_factory=AliyunOss)
    speech: AliyunSpeech = field(default_factory=AliyunSpeech)
    bailian: AliyunBailian = field(default_factory=AliyunBailian)


@dataclass
class Config:
    app: App = field(default_factory=App)
    server: Server = field(default_factory=Server)
    local_model: LocalModel = field(default_factory=LocalModel)
    openai: Openai = field(default_factory=Openai)
    aliyun: Aliyun = field(default_factory=Aliyun)

    def to_dict(self) -> dict[str, Any]:
        """Return the persisted settings as nested plain dictionaries."""
        return _to_dict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Config":
        """Build a configuration, taking defaults for every key not in ``data``."""
        return _build(cls, data, "")


def _persisted(f) -> bool:
    return f.metadata.get("persist", True)


def _to_dict(obj: Any) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for f in fields(obj):
        if not _persisted(f):
            continue
        value = getattr(obj, f.name)
        result[f.name] = _to_dict(value) if is_dataclass(value) else value
    return result


def _build(cls: type, data: Any, path: str) -> Any:
    if not isinstance(data, Mapping):
        raise ConfigError(f"{path or 'config'}: expected a table")
    instance = cls()
    for f in fields(cls):
        if not _persisted(f) or f.name not in data:
            continue
        key = f"{path}.{f.name}" if path else f.name
        value = data[f.name]
        current = getattr(instance, f.name)
        if is_dataclass(current):
            value = _build(type(current), value, key)
        elif type(value) is not type(current):
            raise ConfigError(
                f"{key}: expected {type(current).__name__}, got {type(value).__name__}"
            )
        setattr(instance, f.name, value)
    return instance


def _current_os() -> str:
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform


def validate_config(config: Config, platform: str | None = None) -> None:
    """Check that the chosen providers are usable; raise ConfigError if not."""
    system = platform if platform is not None else _current_os()
    provider = config.app.transcribe_provider
    if provider == "openai":
        if not config.openai.whisper.api_key:
            raise ConfigError("使用OpenAI转写服务需要配置 OpenAI API Key")
    elif provider == "fasterwhisper":
        if config.local_model.fasterwhisper not in FASTERWHISPER_MODELS:
            raise ConfigError("检测到开启了fasterwhisper，但模型选型配置不正确，请检查配置")
    elif provider == "whisperkit":
        if system != "darwin":
            logger.error("whisperkit只支持macos (当前系统: %s)", system)
            raise ConfigError("whisperkit只支持macos")
        if config.local_model.whisperkit != "large-v2":
            raise ConfigError("检测到开启了whisperkit，但模型选型配置不正确，请检查配置")
    elif provider == "whispercpp":
        if system != "windows":
            logger.error("whispercpp only support windows (current os: %s)", system)
            raise ConfigError("whispercpp only support windows")
        if config.local_model.whispercpp != "large-v2":
            raise ConfigError("检测到开启了whisper.cpp，但模型选型配置不正确，请检查配置")
    elif provider == "aliyun":
        speech = config.aliyun.speech
        if not (speech.access_key_id and speech.access_key_secret and speech.app_key):
            raise ConfigError("使用阿里云语音服务需要配置相关密钥")
    else:
        raise ConfigError("不支持的转录提供商")

    llm = config.app.llm_provider
    if llm == "openai":
        if not config.openai.api_key:
            raise ConfigError("使用OpenAI LLM服务需要配置 OpenAI API Key")
    elif llm == "aliyun":
        if not config.aliyun.bailian.api_key:
            raise ConfigError("使用阿里云百炼服务需要配置 API Key")
    else:
        raise ConfigError("不支持的LLM提供商")


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> Config:
    """Read the configuration file, or return defaults when it is absent or unreadable."""
    path = Path(path)
    if not path.exists():
        return Config()
    logger.info("已找到配置文件，从配置文件中加载配置")
    try:
        with path.open("rb") as handle:
            return Config.from_dict(tomllib.load(handle))
    except (tomllib.TOMLDecodeError, ConfigError, OSError) as exc:
        logger.error("加载配置文件失败: %s", exc)
        return Config()


def save_config(config: Config, path: str | Path = DEFAULT_CONFIG_PATH) -> None:
    """Write the configuration as TOML, creating the directory if needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as handle:
        tomli_w.dump(config.to_dict(), handle)


def check_config(config: Config, platform: str | None = None) -> None:
    """Parse the proxy address and validate the provider settings."""
    try:
        config.app.parsed_proxy = urlsplit(config.app.proxy)
    except ValueError as exc:
        raise ConfigError(f"invalid proxy address: {exc}") from exc
    validate_config(config, platform)