"""Tests for RawCommand source detection and entry extraction."""

from __future__ import annotations

import os

import pytest

from buildlog_compdb.exceptions import PathResolutionError
from buildlog_compdb.extractor import entries_from_raw_command, extract_entries, resolve_path
from buildlog_compdb.models import RawCommand

# ── Source file detection ────────────────────────────────────────────────


class TestSourceFiles:
    def test_c_and_cpp(self):
        raw = RawCommand(directory="/src", lines=["cl /c foo.cpp", "bar.c"])
        assert raw.source_files == ["foo.cpp", "bar.c"]

    @pytest.mark.parametrize(
        "token",
        ["program.cppx", "library.ccpp", "foo.CPP", "foo.C", "foo.cpps", "foo.h", "foo.cc"],
    )
    def test_near_matches_rejected(self, token: str):
        raw = RawCommand(directory="/src", lines=[f"cl /c {token}"])
        assert raw.source_files == []

    def test_tokens_split_on_any_whitespace(self):
        raw = RawCommand(directory="/src", lines=["cl\t/c\ta.c  b.cpp"])
        assert raw.source_files == ["a.c", "b.cpp"]

    def test_full_command_joins_with_single_space(self):
        raw = RawCommand(directory="/src", lines=["cl /c", "/DX", "a.c"])
        assert raw.full_command == "cl /c /DX a.c"


# ── Path resolution ──────────────────────────────────────────────────────


class TestResolvePath:
    def test_relative(self):
        assert resolve_path("/src/net", "http/request.cpp") == "/src/net/http/request.cpp"

    def test_absolute_token_unchanged(self):
        assert resolve_path("/src/net", "/other/x.c") == "/other/x.c"

    def test_dot_segments_normalized(self):
        assert resolve_path("/src/net/./sub", "../x.c") == "/src/net/x.c"

    def test_relative_directory_made_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert resolve_path("build", "a.c") == os.path.join(str(tmp_path), "build", "a.c")

    def test_nul_byte_raises(self):
        with pytest.raises(PathResolutionError) as exc_info:
            resolve_path("/src", "bad\0name.c")
        assert "bad" in exc_info.value.path


# ── Entry extraction ─────────────────────────────────────────────────────


class TestEntriesFromRawCommand:
    def test_two_sources_share_directory_and_command(self):
        raw = RawCommand(directory="/src/base", lines=["cl /nologo /c foo.cpp bar.c"])
        entries = entries_from_raw_command(raw)

        assert len(entries) == 2
        assert {e.directory for e in entries} == {"/src/base"}
        assert {e.command for e in entries} == {"cl /nologo /c foo.cpp bar.c"}
        assert [e.file for e in entries] == ["/src/base/foo.cpp", "/src/base/bar.c"]

    def test_no_sources(self):
        raw = RawCommand(directory="/src", lines=["cl /c /Fo:x.obj"])
        assert entries_from_raw_command(raw) == []

    def test_directory_normalized(self):
        raw = RawCommand(directory="/src/net/", lines=["cl a.c"])
        entry = entries_from_raw_command(raw)[0]
        assert entry.directory == "/src/net"

    def test_extract_entries_keeps_log_order(self):
        raws = [
            RawCommand(directory="/a", lines=["cl x.c"]),
            RawCommand(directory="/b", lines=["cl /c"]),
            RawCommand(directory="/c", lines=["cl y.cpp", "z.c"]),
        ]
        files = [e.file for e in extract_entries(raws)]
        assert files == ["/a/x.c", "/c/y.cpp", "/c/z.c"]
