from datetime import datetime, timezone

import pytest

from adapters import output_writer
from adapters.output_writer import persist, resolve_output_path
from core.domain.errors import OutputWriteError


def test_auto_path_under_runtime_namespace(workdir):
    now = datetime(2026, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
    path = resolve_output_path(None, file_extension="svg", namespace="gemini-designer", now=now)
    assert path == workdir / ".runtime" / "gemini-designer" / "20260304-050607.svg"
    assert path.parent.is_dir()
    assert not path.exists()


def test_explicit_path_used_verbatim_and_parent_created(tmp_path):
    target = tmp_path / "deep" / "er" / "page.html"
    assert resolve_output_path(target, file_extension="md", namespace="x") == target
    assert target.parent.is_dir()


def test_persist_single_trailing_newline_and_overwrite(tmp_path):
    target = tmp_path / "out.md"
    target.write_text("old content that is longer\n")
    persist("new\n\n", target)
    assert target.read_text() == "new\n"
    assert [p.name for p in tmp_path.iterdir()] == ["out.md"]


def test_persist_failure_leaves_nothing_behind(tmp_path, monkeypatch):
    target = tmp_path / "out.html"

    def boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(output_writer.os, "replace", boom)
    with pytest.raises(OutputWriteError) as exc:
        persist("<p>hi</p>", target)
    assert "disk full" in str(exc.value)
    assert list(tmp_path.iterdir()) == []


def test_existing_directory_as_destination_is_rejected(tmp_path):
    (tmp_path / "outdir").mkdir()
    with pytest.raises(OutputWriteError) as exc:
        resolve_output_path(tmp_path / "outdir", file_extension="md", namespace="x")
    assert "is a directory" in str(exc.value)
    with pytest.raises(OutputWriteError):
        persist("hi", tmp_path / "outdir")


def test_parent_that_is_a_file_is_reported(tmp_path):
    (tmp_path / "blocker").write_text("")
    with pytest.raises(OutputWriteError) as exc:
        resolve_output_path(tmp_path / "blocker" / "out.md", file_extension="md", namespace="x")
    assert "blocker" in str(exc.value)
