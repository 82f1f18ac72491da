"""Request and response shapes of the subtitle task API."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _value(data: Mapping[str, Any], key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


def _unsigned(data: Mapping[str, Any], key: str, bits: int) -> int:
    value = _value(data, key, 0)
    if type(value) is not int:
        raise ValueError(f"{key}: expected an integer")
    if not 0 <= value < 1 << bits:
        raise ValueError(f"{key}: {value} out of range for uint{bits}")
    return value


def _signed(data: Mapping[str, Any], key: str) -> int:
    value = _value(data, key, 0)
    if type(value) is not int:
        raise ValueError(f"{key}: expected an integer")
    if not -(1 << 63) <= value < 1 << 63:
        raise ValueError(f"{key}: {value} out of range")
    return value


def _text(data: Mapping[str, Any], key: str) -> str:
    value = _value(data, key, "")
    if not isinstance(value, str):
        raise ValueError(f"{key}: expected a string")
    return value


def _text_list(data: Mapping[str, Any], key: str) -> list[str]:
    value = _value(data, key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{key}: expected a list of strings")
    return list(value)


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what}: expected an object")
    return data


@dataclass
class StartVideoSubtitleTaskReq:
    app_id: int = 0
    url: str = ""
    origin_language: str = ""
    target_lang: str = ""
    bilingual: int = 0
    translation_subtitle_pos: int = 0
    modal_filter: int = 0
    tts: int = 0
    tts_voice_code: int = 0
    tts_voice_clone_src_file_url: str = ""
    replace: list[str] = field(default_factory=list)
    language: str = ""
    embed_subtitle_video_type: str = ""
    vertical_major_title: str = ""
    vertical_minor_title: str = ""
    origin_language_word_one_line: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StartVideoSubtitleTaskReq":
        """Decode a JSON request body; raise ValueError on bad types or ranges."""
        data = _mapping(data, "request")
        return cls(
            app_id=_unsigned(data, "app_id", 32),
            url=_text(data, "url"),
            origin_language=_text(data, "origin_lang"),
            target_lang=_text(data, "target_lang"),
            bilingual=_unsigned(data, "bilingual", 8),
            translation_subtitle_pos=_unsigned(data, "translation_subtitle_pos", 8),
            modal_filter=_unsigned(data, "modal_filter", 8),
            tts=_unsigned(data, "tts", 8),
            tts_voice_code=_unsigned(data, "tts_voice_code", 8),
            tts_voice_clone_src_file_url=_text(data, "tts_voice_clone_src_file_url"),
            replace=_text_list(data, "replace"),
            language=_text(data, "language"),
            embed_subtitle_video_type=_text(data, "embed_subtitle_video_type"),
            vertical_major_title=_text(data, "vertical_major_title"),
            vertical_minor_title=_text(data, "vertical_minor_title"),
            origin_language_word_one_line=_signed(data, "origin_language_word_one_line"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the request with its JSON keys."""
        return {
            "app_id": self.app_id,
            "url": self.url,
            "origin_lang": self.origin_language,
            "target_lang": self.target_lang,
            "bilingual": self.bilingual,
            "translation_subtitle_pos": self.translation_subtitle_pos,
            "modal_filter": self.modal_filter,
            "tts": self.tts,
            "tts_voice_code": self.tts_voice_code,
            "tts_voice_clone_src_file_url": self.tts_voice_clone_src_file_url,
            "replace": list(self.replace),
            "language": self.language,
            "embed_subtitle_video_type": self.embed_subtitle_video_type,
            "vertical_major_title": self.vertical_major_title,
            "vertical_minor_title": self.vertical_minor_title,
            "origin_language_word_one_line": self.origin_language_word_one_line,
        }


@dataclass
class StartVideoSubtitleTaskResData:
    task_id: str = ""


@dataclass
class StartVideoSubtitleTaskRes:
    error: int = 0
    msg: str = ""
    data: StartVideoSubtitleTaskResData | None = None


@dataclass
class GetVideoSubtitleTaskReq:
    task_id: str = ""


@dataclass
class VideoInfo:
    title: str = ""
    description: str = ""
    translated_title: str = ""
    translated_description: str = ""
    language: str = ""


@dataclass
class SubtitleInfo:
    name: str = ""
    download_url: str = ""


def _video_info(data: Any) -> VideoInfo:
    data = _mapping(data, "video_info")
    return VideoInfo(
        title=_text(data, "title"),
        description=_text(data, "description"),
        translated_title=_text(data, "translated_title"),
        translated_description=_text(data, "translated_description"),
        language=_text(data, "language"),
    )


def _subtitle_info(data: Any) -> SubtitleInfo:
    data = _mapping(data, "subtitle_info")
    return SubtitleInfo(name=_text(data, "name"), download_url=_text(data, "download_url"))


@dataclass
class GetVideoSubtitleTaskResData:
    task_id: str = ""
    process_percent: int = 0
    video_info: VideoInfo | None = None
    subtitle_info: list[SubtitleInfo] = field(default_factory=list)
    target_language: str = ""
    speech_download_url: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GetVideoSubtitleTaskResData":
        """Decode task status data; raise ValueError on bad types or ranges."""
        data = _mapping(data, "data")
        raw_video = data.get("video_info")
        raw_subtitles = _value(data, "subtitle_info", [])
        if not isinstance(raw_subtitles, list):
            raise ValueError("subtitle_info: expected a list")
        return cls(
            task_id=_text(data, "task_id"),
            process_percent=_unsigned(data, "process_percent", 8),
            video_info=None if raw_video is None else _video_info(raw_video),
            subtitle_info=[_subtitle_info(item) for item in raw_subtitles],
            target_language=_text(data, "target_language"),
            speech_download_url=_text(data, "speech_download_url"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the status data with its JSON keys."""
        video = self.video_info
        return {
            "task_id": self.task_id,
            "process_percent": self.process_percent,
            "video_info": None
            if video is None
            else {
                "title": video.title,
                "description": video.description,
                "translated_title": video.translated_title,
                "translated_description": video.translated_description,
                "language": video.language,
            },
            "subtitle_info": [
                {"name": info.name, "download_url": info.download_url}
                for info in self.subtitle_info
            ],
            "target_language": self.target_language,
            "speech_download_url": self.speech_download_url,
        }


@dataclass
class GetVideoSubtitleTaskRes:
    error: int = 0
    msg: str = ""
    data: GetVideoSubtitleTaskResData | None = None