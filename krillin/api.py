"""Subtitle task records and task creation in the local task directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any


@dataclass
class WordReplacement:
    from_: str = ""
    to: str = ""


@dataclass
class SubtitleTask:
    url: str = ""
    language: str = ""
    origin_lang: str = ""
    target_lang: str = ""
    bilingual: int = 0
    translation_subtitle_pos: int = 0
    tts: int = 0
    tts_voice_code: int = 0
    tts_voice_clone_src_file_url: str = ""
    modal_filter: int = 0
    replace: list[str] = field(default_factory=list)
    embed_subtitle_video_type: str = ""
    vertical_major_title: str = ""
    vertical_minor_title: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the task as JSON, leaving out optional fields that are empty."""
        result: dict[str, Any] = {
            "url": self.url,
            "language": self.language,
            "origin_lang": self.origin_lang,
            "target_lang": self.target_lang,
            "bilingual": self.bilingual,
            "translation_subtitle_pos": self.translation_subtitle_pos,
            "tts": self.tts,
        }
        if self.tts_voice_code:
            result["tts_voice_code"] = self.tts_voice_code
        if self.tts_voice_clone_src_file_url:
            result["tts_voice_clone_src_file_url"] = self.tts_voice_clone_src_file_url
        result["modal_filter"] = self.modal_filter
        if self.replace:
            result["replace"] = list(self.replace)
        result["embed_subtitle_video_type"] = self.embed_subtitle_video_type
        if self.vertical_major_title:
            result["vertical_major_title"] = self.vertical_major_title
        if self.vertical_minor_title:
            result["vertical_minor_title"] = self.vertical_minor_title
        return result


@dataclass
class SubtitleResult:
    name: str = ""
    download_url: str = ""


@dataclass
class TaskStatus:
    task_id: str = ""
    process_percent: int = 0
    status: str = ""
    message: str = ""
    subtitle_info: list[SubtitleResult] | None = None
    speech_download_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the status as JSON."""
        return {
            "task_id": self.task_id,
            "process_percent": self.process_percent,
            "status": self.status,
            "message": self.message,
            "subtitle_info": None
            if self.subtitle_info is None
            else [
                {"name": item.name, "download_url": item.download_url}
                for item in self.subtitle_info
            ],
            "speech_download_url": self.speech_download_url,
        }


def generate_task_id(now: datetime | None = None) -> str:
    """Return a task id derived from the given (or current) time."""
    moment = now if now is not None else datetime.now()
    return "task-" + moment.strftime("%Y%m%d%H%M%S")


def create_subtitle_task(task: SubtitleTask, base_dir: str | Path = ".") -> TaskStatus:
    """Create the task's directory under ``base_dir/tasks`` and report it as created."""
    task_id = generate_task_id()
    task_dir = Path(base_dir) / "tasks" / task_id
    try:
        task_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OSError(f"创建任务目录失败: {exc}") from exc
    return TaskStatus(task_id=task_id, process_percent=0, status="created", message="任务已创建")


def _lookup_status(task_id: str) -> TaskStatus:
    # No progress record is kept for these tasks; they are reported as in progress.
    return TaskStatus(
        task_id=task_id, process_percent=50, status="processing", message="正在处理中"
    )


def _attach_downloads(status: TaskStatus) -> TaskStatus:
    task_id = status.task_id
    status.subtitle_info = [
        SubtitleResult(name="字幕.srt", download_url=f"/tasks/{task_id}/output/subtitle.srt"),
        SubtitleResult(name="字幕.ass", download_url=f"/tasks/{task_id}/output/subtitle.ass"),
    ]
    if not status.speech_download_url:
        status.speech_download_url = f"/tasks/{task_id}/output/speech.mp3"
    return status


def get_subtitle_task_status(task_id: str) -> TaskStatus:
    """Return the task's status, with download links once it is complete."""
    status = _lookup_status(task_id)
    if status.process_percent >= 100:
        _attach_downloads(status)
    return status