# krillin

An HTTP backend and a client library for video subtitle tasks: configuration
for transcription and LLM providers, task creation, file upload and download,
and a client that starts tasks and follows them until they finish.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Configuration

`krillin.config.load_config(path)` reads `./config/config.toml` by default.
Keys you leave out keep their defaults. If the file is missing or cannot be
parsed, the defaults are used. The defaults are:

- server host `127.0.0.1`, port `8888`
- segment duration `5`
- `openai` as both the transcription provider and the LLM provider
- `large-v2` for every local model

```toml
[app]
transcribe_provider = "openai"
llm_provider = "openai"
proxy = ""

[server]
host = "127.0.0.1"
port = 8888

[openai]
api_key = "placeholder"

[openai.whisper]
api_key = "placeholder"
```

`save_config(config, path)` writes a `Config` back as TOML and creates the
directory if it does not exist.

`check_config(config, platform)` parses `app.proxy`, then calls
`validate_config`. It raises `ConfigError` when a provider is unsupported or
lacks its credentials.

Supported transcription providers:

- `openai`
- `fasterwhisper`, with model `tiny`, `medium` or `large-v2`
- `whisperkit`, on `darwin` only
- `whispercpp`, on `windows` only
- `aliyun`

Supported LLM providers are `openai` and `aliyun`.

## Running the server

```
krillin-server [--config PATH]
```

The command loads and checks the configuration and exits with status 1 if the
check fails. Otherwise it serves, on the configured host and port, the
application built by `krillin.server.create_app`:

- `POST /api/capability/subtitleTask` starts a task. It creates
  `tasks/<task id>` and returns `{"task_id": ...}`. The task id is
  `task-` followed by the current time as `YYYYmmddHHMMSS`.
- `GET /api/capability/subtitleTask?taskId=...` reports a task's status.
- `POST /api/file` saves each file in the multipart `file` field under
  `./uploads`. It returns the saved paths as `local:./uploads/<name>`.
- `GET /api/file/<path>` sends a file below the working directory as an
  attachment.
- `GET /` redirects to `/static`.

Every JSON reply is the envelope `krillin.response.Response`:
`{"error": ..., "msg": ..., "data": ...}`. `error` is `0` on success and `-1`
on failure.

## Using the client

```python
from krillin.client import SubtitleManager

manager = SubtitleManager("http://127.0.0.1:8888", poll_interval=2.0)
manager.settings.target_lang = "zh_cn"
manager.upload_files(["talk.mp4"])
results = manager.start_task()
```

`upload_files` sends all files in one request and remembers the server paths.
`start_task` works on the single uploaded file or on `video_url`. With more
than one upload it calls `process_multiple_videos`. That method runs one task
per video in turn and skips any video whose task fails to start.

Each finished task gives a `krillin.tasks.TaskResult` holding its subtitle
links and speech link. `download_file(download_url, destination)` saves one of
them to disk. Set `on_progress` to a callable `(fraction, label)` to follow
progress. Failures raise `krillin.tasks.TaskError`.

`krillin.tasks.TaskSettings` holds the options that `build_task` turns into a
`krillin.api.SubtitleTask`:

- source and target language
- bilingual subtitles and whether the translation sits above (`1`) or below (`2`)
- dubbing and its voice (`1` female, `2` male)
- an optional voice-clone sample
- the filler-word filter
- subtitle embedding: `none`, `horizontal`, `vertical` or `all`
- main and sub titles for vertical video

Flags go to the API as `1` for yes and `2` for no.

`krillin.theme.CustomTheme` gives the light and dark colour palettes and the
sizes of the interface theme.

## What this package does not do

- It does no transcription, translation, dubbing or subtitle embedding. The
  server only creates a task's directory.
- The status endpoint always reports tasks at 50 percent (`processing`). A
  client following a task on this server therefore never sees it finish.
- There is no desktop window and no web front end. `/static` serves nothing.