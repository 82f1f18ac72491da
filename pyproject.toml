[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "krillin"
version = "0.1.0"
description = "HTTP backend and client for video subtitle translation and dubbing tasks"
requires-python = ">=3.11"
keywords = ["subtitles", "translation", "dubbing", "video", "transcription"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
]
dependencies = [
    "flask",
    "requests",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
krillin-server = "krillin.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["krillin"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
ignore_missing_imports = true
