"""Client that uploads videos, starts subtitle tasks and follows them to completion."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Mapping, Sequence
from contextlib import ExitStack
from pathlib import Path
from typing import Any

import requests

from krillin.config import Config
from krillin.tasks import (
    TaskError,
    TaskResult,
    TaskSettings,
    base_name,
    parse_envelope,
    short_name,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float, str], None]


def _default_base_url() -> str:
    server = Config().server
    return f"http://{server.host}:{server.port}"


def _percent(data: Mapping[str, Any]) -> int:
    value = data.get("process_percent")
    return value if type(value) is int else 0


class SubtitleManager:
    """Drives subtitle tasks on the backend for one or more videos."""

    def __init__(
        self,
        base_url: str | None = None,
        session: requests.Session | None = None,
        poll_interval: float = 2.0,
    ) -> None:
        self.base_url = (base_url if base_url is not None else _default_base_url()).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.poll_interval = poll_interval
        self.settings = TaskSettings()
        self.video_url = ""
        self.video_paths: list[str] = []
        self.results: list[TaskResult] = []
        self.on_progress: ProgressCallback | None = None

    @property
    def _task_endpoint(self) -> str:
        return f"{self.base_url}/api/capability/subtitleTask"

    def _report(self, fraction: float, label: str) -> None:
        if self.on_progress is not None:
            self.on_progress(fraction, label)

    def _wait(self) -> None:
        if self.poll_interval > 0:
            time.sleep(self.poll_interval)

    def upload_files(self, paths: Sequence[str | os.PathLike]) -> list[str]:
        """Upload local videos in one request; remember and return their server paths."""
        if not paths:
            return []
        try:
            with ExitStack() as stack:
                parts = [
                    ("file", (base_name(os.fspath(path)), stack.enter_context(open(path, "rb"))))
                    for path in paths
                ]
                response = self.session.post(f"{self.base_url}/api/file", files=parts)
        except requests.RequestException as exc:
            raise TaskError(f"上传文件失败: {exc}") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise TaskError(f"解析响应失败: {exc}") from exc
        stored = parse_envelope(payload).get("file_path") or []
        stored_paths = [stored] if isinstance(stored, str) else [str(p) for p in stored]
        self.video_paths = list(stored_paths)
        if stored_paths:
            self.video_url = stored_paths[0]
        return stored_paths

    def _create_task(self, url: str) -> str:
        task = self.settings.build_task(url)
        try:
            response = self.session.post(self._task_endpoint, json=task.to_dict())
        except requests.RequestException as exc:
            raise TaskError(f"发送任务请求失败: {exc}") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise TaskError(f"解析响应失败: {exc}") from exc
        return str(parse_envelope(payload).get("task_id") or "")

    def _fetch_status(self, task_id: str) -> Any:
        try:
            response = self.session.get(self._task_endpoint, params={"taskId": task_id})
        except requests.RequestException as exc:
            logger.error("获取任务状态失败: %s", exc)
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("解析响应失败: %s", exc)
            return None

    def start_task(self) -> list[TaskResult]:
        """Run the task for the chosen video(s) until done; return the results."""
        if len(self.video_paths) > 1:
            return self.process_multiple_videos()
        if len(self.video_paths) == 1:
            self.video_url = self.video_paths[0]
        task_id = self._create_task(self.video_url)
        result = self._poll_task_status(task_id)
        self.results = [result]
        return list(self.results)

    def _poll_task_status(self, task_id: str) -> TaskResult:
        last_percent = 0
        while True:
            self._wait()
            payload = self._fetch_status(task_id)
            if payload is None:
                continue
            try:
                data = parse_envelope(payload)
            except TaskError as exc:
                logger.error("获取任务状态失败: %s", exc)
                continue
            percent = _percent(data)
            if percent != last_percent:
                self._report(percent / 100.0, f"{percent}%")
                last_percent = percent
            if percent >= 100:
                return TaskResult.from_data(base_name(self.video_url), data)

    def process_multiple_videos(self) -> list[TaskResult]:
        """Run one task per uploaded video in turn; skip videos whose task fails to start."""
        original_url = self.video_url
        self.results = []
        self._report(0.0, "0%")
        total = len(self.video_paths)
        try:
            for index, url in enumerate(self.video_paths):
                file_name = base_name(url)
                self._report(index / total, f"处理: {index + 1}/{total}\n{short_name(file_name)}")
                self.video_url = url
                try:
                    task_id = self._create_task(url)
                except TaskError as exc:
                    logger.error("任务创建失败: %s", exc)
                    continue
                self.results.append(self.wait_task_completed(task_id, file_name))
        finally:
            self.video_url = original_url
        return list(self.results)

    def wait_task_completed(self, task_id: str, file_name: str) -> TaskResult:
        """Poll the task until it reaches 100 percent and return its result."""
        last_percent = 0
        while True:
            payload = self._fetch_status(task_id)
            if not isinstance(payload, Mapping):
                self._wait()
                continue
            data = payload.get("data")
            if not isinstance(data, Mapping):
                data = {}
            percent = _percent(data)
            if percent != last_percent:
                self._report(percent / 100.0, f"{percent}%")
                last_percent = percent
            if percent >= 100:
                return TaskResult.from_data(file_name, data, task_id=task_id)
            self._wait()

    def download_file(self, download_url: str, destination: str | os.PathLike) -> Path:
        """Fetch ``download_url`` from the backend and save it at ``destination``."""
        try:
            response = self.session.get(self.base_url + download_url, stream=True)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise TaskError(f"下载失败: {exc}") from exc
        target = Path(destination)
        try:
            with target.open("wb") as handle:
                for chunk in response.iter_content(chunk_size=65536):
                    handle.write(chunk)
        except (OSError, requests.RequestException) as exc:
            raise TaskError(f"保存文件失败: {exc}") from exc
        return target