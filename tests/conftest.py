"""Shared pytest fixtures for buildlog-compdb tests."""

import pytest

# Two threads; thread 0002 wraps its command over three lines.
SAMPLE_LOG = """\
BUILD: Computing Include file dependencies:
0001>BUILDMSG: Processing /src/base
0002>Compiling /src/net ***************
0001>cl /nologo /c /Zi /DWIN32 string.cpp
0002>cl /nologo /c /Od
0002>   /DUNICODE socket.c
0002>   http/request.cpp
0001>Linking /src/base
BUILD: Done
"""


@pytest.fixture
def sample_log() -> str:
    return SAMPLE_LOG


@pytest.fixture
def log_file(tmp_path, sample_log):
    path = tmp_path / "buildfre.log"
    path.write_text(sample_log)
    return path
