[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "liveflow"
version = "0.1.0"
description = "Building blocks for live streaming: RTMP chunking, connections and handshake, media packets, and HLS playlist and segment handling."
requires-python = ">=3.10"
dependencies = []
keywords = ["rtmp", "hls", "live", "streaming", "video", "m3u8", "chunk", "handshake"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["liveflow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
