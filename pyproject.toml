[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sipflow"
version = "0.1.0"
description = "Core model for a SIP message flow viewer: key bindings, call groups, SDP media, display filters, payload diffs and capture export helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["sip", "voip", "telephony", "call-flow", "filter", "rtp", "sdp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Telephony",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sipflow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
