"""Subtitle task settings, task results and the backend's reply envelope."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from krillin.api import SubtitleResult, SubtitleTask

INTERFACE_LANGUAGE = "zh_cn"
_SHORT_NAME_LIMIT = 20


class TaskError(RuntimeError):
    """Raised when the backend reports a failure or answers with garbage."""


def bool_to_int(value: bool) -> int:
    """Encode a flag the way the API expects: 1 for yes, 2 for no."""
    return 1 if value else 2


def base_name(path: str) -> str:
    """Return the last element of a slash- or backslash-separated path."""
    trimmed = path.rstrip("/\\")
    if not trimmed:
        return "/" if path else "."
    return trimmed.replace("\\", "/").rsplit("/", 1)[-1]


def short_name(name: str) -> str:
    """Shorten a file name for display, keeping at most 20 characters."""
    if len(name) > _SHORT_NAME_LIMIT:
        return name[:17] + "..."
    return name


def format_file_list(header: str, paths: Iterable[str]) -> str:
    """Return ``header`` followed by one numbered line per path's base name."""
    lines = "".join(f"{number}. {base_name(path)}\n" for number, path in enumerate(paths, 1))
    return header + lines


def parse_envelope(payload: Any) -> dict[str, Any]:
    """Check a backend reply and return its data; raise TaskError on failure."""
    if not isinstance(payload, Mapping):
        raise TaskError("invalid response")
    error = payload.get("error")
    if error is None:
        error = 0
    if type(error) is not int:
        raise TaskError("invalid response: error is not an integer")
    if error not in (0, 200):
        raise TaskError(str(payload.get("msg") or ""))
    data = payload.get("data")
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise TaskError("invalid response: data is not an object")
    return dict(data)


@dataclass
class TaskResult:
    """Outcome of one finished subtitle task."""

    file_name: str
    task_id: str
    subtitle_info: list[SubtitleResult] = field(default_factory=list)
    speech_download_url: str = ""

    @classmethod
    def from_data(
        cls, file_name: str, data: Mapping[str, Any], task_id: str | None = None
    ) -> "TaskResult":
        """Build a result from a task status reply's data."""
        subtitles = [
            SubtitleResult(
                name=str(item.get("name") or ""),
                download_url=str(item.get("download_url") or ""),
            )
            for item in data.get("subtitle_info") or []
            if isinstance(item, Mapping)
        ]
        return cls(
            file_name=file_name,
            task_id=task_id if task_id is not None else str(data.get("task_id") or ""),
            subtitle_info=subtitles,
            speech_download_url=str(data.get("speech_download_url") or ""),
        )

    @property
    def output_dir(self) -> str:
        """Directory, relative to the working directory, holding the task's output."""
        return f"/tasks/{self.task_id}/output"


@dataclass
class TaskSettings:
    """User choices that every subtitle task request is built from."""

    source_lang: str = "en"
    target_lang: str = "zh_cn"
    bilingual_enabled: bool = True
    bilingual_position: int = 1
    voiceover_enabled: bool = False
    voiceover_gender: int = 2
    voiceover_audio_path: str = ""
    filler_filter: bool = True
    embed_subtitle: str = "none"
    vertical_titles: tuple[str, str] = ("", "")

    def set_vertical_titles(self, main_title: str, sub_title: str) -> None:
        """Set the main and sub title used for portrait videos."""
        self.vertical_titles = (main_title, sub_title)

    def build_task(self, url: str) -> SubtitleTask:
        """Return the task request for the video at ``url``."""
        major, minor = self.vertical_titles
        return SubtitleTask(
            url=url,
            language=INTERFACE_LANGUAGE,
            origin_lang=self.source_lang,
            target_lang=self.target_lang,
            bilingual=bool_to_int(self.bilingual_enabled),
            translation_subtitle_pos=self.bilingual_position,
            tts=bool_to_int(self.voiceover_enabled),
            tts_voice_code=self.voiceover_gender,
            tts_voice_clone_src_file_url=self.voiceover_audio_path,
            modal_filter=bool_to_int(self.filler_filter),
            embed_subtitle_video_type=self.embed_subtitle,
            vertical_major_title=major,
            vertical_minor_title=minor,
        )