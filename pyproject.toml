[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "k7tui"
version = "0.1.0"
description = "Terminal client for a video management service: accounts, chunked video uploads, a video library view and live WebSocket notifications."
requires-python = ">=3.10"
keywords = ["tui", "terminal", "urwid", "video", "upload", "websocket", "notifications"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
]
dependencies = [
    "urwid",
    "websocket-client",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
k7tui = "k7tui.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["k7tui"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
