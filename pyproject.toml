[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ipcdemo"
version = "0.1.0"
description = "Small demonstrations of inter-process and inter-thread communication through files and shared memory"
requires-python = ">=3.10"
keywords = ["ipc", "shared-memory", "threads", "education", "benchmark"]
classifiers = [
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Intended Audience :: Education",
    "Topic :: Education",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ipcdemo-benchmark = "ipcdemo.benchmark:main"
ipcdemo-file-writer = "ipcdemo.filechannel:writer_main"
ipcdemo-file-reader = "ipcdemo.filechannel:reader_main"
ipcdemo-mem-writer = "ipcdemo.memchannel:writer_main"
ipcdemo-mem-reader = "ipcdemo.memchannel:reader_main"
ipcdemo-threaded = "ipcdemo.threaded:main"

[tool.hatch.build.targets.wheel]
packages = ["ipcdemo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
