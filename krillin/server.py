"""HTTP backend: subtitle task endpoints and file upload/download."""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask, jsonify, redirect, request, send_file

from krillin.api import SubtitleTask, create_subtitle_task, get_subtitle_task_status
from krillin.config import Config, load_config
from krillin.dto import StartVideoSubtitleTaskReq, StartVideoSubtitleTaskResData
from krillin.response import Response

logger = logging.getLogger(__name__)


def _reply(response: Response):
    return jsonify(response.to_dict()), 200


def _fail(message: str):
    return _reply(Response(error=-1, msg=message, data=None))


def _to_task(req: StartVideoSubtitleTaskReq) -> SubtitleTask:
    return SubtitleTask(
        url=req.url,
        language=req.language,
        origin_lang=req.origin_language,
        target_lang=req.target_lang,
        bilingual=req.bilingual,
        translation_subtitle_pos=req.translation_subtitle_pos,
        tts=req.tts,
        tts_voice_code=req.tts_voice_code,
        tts_voice_clone_src_file_url=req.tts_voice_clone_src_file_url,
        modal_filter=req.modal_filter,
        replace=list(req.replace),
        embed_subtitle_video_type=req.embed_subtitle_video_type,
        vertical_major_title=req.vertical_major_title,
        vertical_minor_title=req.vertical_minor_title,
    )


def create_app(upload_dir: str = "./uploads", root_dir: str | Path = ".") -> Flask:
    """Build the Flask application serving the backend API."""
    app = Flask(__name__, static_folder=None)
    root = Path(root_dir)
    upload_prefix = upload_dir.rstrip("/") or "."

    @app.post("/api/capability/subtitleTask")
    def start_subtitle_task():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return _fail("参数错误")
        try:
            req = StartVideoSubtitleTaskReq.from_dict(payload)
        except ValueError:
            return _fail("参数错误")
        try:
            status = create_subtitle_task(_to_task(req), root)
        except OSError as exc:
            return _fail(str(exc))
        data = StartVideoSubtitleTaskResData(task_id=status.task_id)
        return _reply(Response(error=0, msg="成功", data=data))

    @app.get("/api/capability/subtitleTask")
    def get_subtitle_task():
        task_id = request.args.get("taskId", "")
        status = get_subtitle_task_status(task_id)
        return _reply(Response(error=0, msg="成功", data=status))

    @app.post("/api/file")
    def upload_file():
        if request.mimetype != "multipart/form-data":
            return _fail("未能获取文件")
        uploads = request.files.getlist("file")
        if not uploads:
            return _fail("未上传任何文件")
        saved: list[str] = []
        for upload in uploads:
            name = Path(upload.filename or "").name
            save_path = f"{upload_prefix}/{name}"
            try:
                if not name:
                    raise OSError("empty file name")
                Path(upload_prefix).mkdir(parents=True, exist_ok=True)
                upload.save(save_path)
            except OSError:
                return _fail("文件保存失败: " + (upload.filename or ""))
            saved.append("local:" + save_path)
        return _reply(Response(error=0, msg="文件上传成功", data={"file_path": saved}))

    @app.get("/api/file/", defaults={"requested": ""})
    @app.get("/api/file/<path:requested>")
    def download_file(requested: str):
        if not requested:
            return _fail("文件路径为空")
        base = root.resolve()
        target = (base / requested.lstrip("/")).resolve()
        if not target.is_relative_to(base) or not target.is_file():
            return _fail("文件不存在")
        return send_file(target, as_attachment=True, download_name=target.name)

    @app.get("/")
    def index():
        return redirect("/static", code=301)

    return app


def start_backend(config: Config | None = None) -> None:
    """Run the backend on the configured host and port until stopped."""
    conf = config if config is not None else load_config()
    app = create_app()
    logger.info("服务启动 host=%s port=%d", conf.server.host, conf.server.port)
    app.run(host=conf.server.host, port=conf.server.port)