"""Tests for the directory scanner and pass/fail partitioning."""

import os

import pytest

from loopgate.config import LANGUAGE_CONFIGS, ScanConfig
from loopgate.errors import GrammarNotAvailableError, ScanError
from loopgate.scanner import (
    DirectoryScanner,
    FunctionReport,
    ParseFailure,
    ScanResult,
    exceeds_threshold,
    scan_directory,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _nested_loops(name, depth):
    """Go function with *depth* strictly nested loops."""
    lines = [f"func {name}() {{"]
    for level in range(depth):
        lines.append("\t" * (level + 1) + "for {")
    for level in reversed(range(depth)):
        lines.append("\t" * (level + 1) + "}")
    lines.append("}")
    return "\n".join(lines) + "\n"


def _go_file(path, *functions):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("package main\n\n" + "\n".join(functions))
    return path


def _scan(root, **kwargs):
    return DirectoryScanner(ScanConfig(root=str(root), **kwargs)).scan()


# ---------------------------------------------------------------------------
# exceeds_threshold
# ---------------------------------------------------------------------------


def test_depth_at_threshold_passes():
    assert exceeds_threshold(3, 3) is False


def test_depth_above_threshold_fails():
    assert exceeds_threshold(4, 3) is True


def test_zero_depth_passes_zero_threshold():
    assert exceeds_threshold(0, 0) is False


# ---------------------------------------------------------------------------
# ScanResult
# ---------------------------------------------------------------------------


def test_empty_result_is_success():
    assert ScanResult().success is True


def test_result_success_tracks_failed_list():
    result = ScanResult()
    result.add_report(FunctionReport(path="a.go", name="A", depth=1, failed=False))
    assert result.success
    result.add_error(ParseFailure(path="b.go", message="boom"))
    assert not result.success
    assert result.passed == ["Function A in file a.go, loop depth: 1"]
    assert result.failed == ["Error in file b.go: boom"]


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


def test_end_to_end_partition(tmp_path):
    path = _go_file(tmp_path / "main.go", _nested_loops("A", 1), _nested_loops("B", 3))
    result = _scan(tmp_path, threshold=2)
    assert result.passed == [f"Function A in file {path}, loop depth: 1"]
    assert result.failed == [f"Function B in file {path}, loop depth: 3"]
    assert result.success is False


def test_threshold_boundary(tmp_path):
    _go_file(tmp_path / "main.go", _nested_loops("Three", 3), _nested_loops("Four", 4))
    result = _scan(tmp_path, threshold=3)
    assert [r.name for r in result.reports if not r.failed] == ["Three"]
    assert [r.name for r in result.reports if r.failed] == ["Four"]


def test_function_without_loops_always_passes(tmp_path):
    _go_file(tmp_path / "main.go", "func flat() {\n}\n")
    result = _scan(tmp_path, threshold=0)
    assert result.success
    assert result.reports[0].depth == 0


def test_only_matching_suffix_is_scanned(tmp_path):
    _go_file(tmp_path / "main.go", _nested_loops("A", 1))
    (tmp_path / "notes.txt").write_text("for for for")
    (tmp_path / "script.py").write_text("def f(:\n")
    result = _scan(tmp_path)
    assert [r.name for r in result.reports] == ["A"]
    assert result.success


def test_python_language_scans_py_files(tmp_path):
    (tmp_path / "mod.py").write_text(
        "def f(xs):\n    for x in xs:\n        for y in x:\n            pass\n"
    )
    _go_file(tmp_path / "main.go", _nested_loops("A", 5))
    result = _scan(tmp_path, language="python", threshold=1)
    assert [(r.name, r.depth) for r in result.reports] == [("f", 2)]
    assert not result.success


def test_csharp_foreach_nesting_fails_threshold(tmp_path):
    (tmp_path / "Foo.cs").write_text(
        "public class Foo {\n"
        "  public void Bar(int[] xs) {\n"
        "    foreach (var x in xs) {\n"
        "      for (int i = 0; i < x; i++) {\n"
        "      }\n"
        "    }\n"
        "  }\n"
        "\n"
        "  public void Each(int[] xs) {\n"
        "    foreach (var x in xs) {\n"
        "    }\n"
        "  }\n"
        "}\n"
    )
    result = _scan(tmp_path, language="csharp", threshold=1)
    assert [(r.name, r.depth, r.failed) for r in result.reports] == [
        ("Bar", 2, True),
        ("Each", 1, False),
    ]
    assert not result.success


def test_parse_error_is_recorded_and_scan_continues(tmp_path):
    broken = tmp_path / "a_broken.go"
    broken.write_text("package main\n\nfunc broken( {\n")
    good = _go_file(tmp_path / "b_good.go", _nested_loops("Good", 1))
    result = _scan(tmp_path)
    assert len(result.errors) == 1
    assert result.failed[0].startswith(f"Error in file {broken}: ")
    assert result.passed == [f"Function Good in file {good}, loop depth: 1"]
    assert result.success is False


def test_ignored_directory_contributes_nothing(tmp_path):
    _go_file(tmp_path / "main.go", _nested_loops("A", 1))
    _go_file(tmp_path / "vendor" / "lib.go", _nested_loops("Deep", 9))
    _go_file(tmp_path / "vendor" / "nested" / "more.go", _nested_loops("Deeper", 9))
    (tmp_path / "testdata").mkdir()
    (tmp_path / "testdata" / "bad.go").write_text("func {{{")
    result = _scan(tmp_path, ignore_dirs=frozenset({"vendor", "testdata"}))
    assert [r.name for r in result.reports] == ["A"]
    assert result.errors == []
    assert result.success


def test_ignore_matches_basename_not_path(tmp_path):
    _go_file(tmp_path / "pkg" / "vendor" / "lib.go", _nested_loops("Deep", 5))
    _go_file(tmp_path / "pkg" / "vendored" / "lib.go", _nested_loops("Kept", 1))
    result = _scan(tmp_path, ignore_dirs=frozenset({"vendor", "pkg/vendored"}))
    assert [r.name for r in result.reports] == ["Kept"]


def test_ignored_root_scans_nothing(tmp_path):
    root = tmp_path / "vendor"
    _go_file(root / "lib.go", _nested_loops("Deep", 5))
    result = _scan(root, ignore_dirs=frozenset({"vendor"}))
    assert result.reports == []
    assert result.success


def test_ignored_directory_is_logged(tmp_path, capsys):
    _go_file(tmp_path / "vendor" / "lib.go", _nested_loops("Deep", 5))
    _scan(tmp_path, ignore_dirs=frozenset({"vendor"}))
    assert "ignore dir: vendor" in capsys.readouterr().err


def test_report_order_is_deterministic(tmp_path):
    for name in ["zeta", "alpha", "mid"]:
        _go_file(tmp_path / name / f"{name}.go", _nested_loops(name.capitalize(), 1))
    _go_file(tmp_path / "root.go", _nested_loops("Root", 1))
    first = _scan(tmp_path)
    second = _scan(tmp_path)
    assert first.passed == second.passed
    assert [r.name for r in first.reports] == ["Root", "Alpha", "Mid", "Zeta"]


def test_scan_directory_wrapper(tmp_path):
    _go_file(tmp_path / "main.go", _nested_loops("A", 4))
    result = scan_directory(ScanConfig(root=str(tmp_path)))
    assert result.failed == [f"Function A in file {os.path.join(str(tmp_path), 'main.go')}, loop depth: 4"]


# ---------------------------------------------------------------------------
# Fatal errors
# ---------------------------------------------------------------------------


def test_missing_root_raises_scan_error(tmp_path):
    missing = tmp_path / "nope"
    with pytest.raises(ScanError) as info:
        _scan(missing)
    assert info.value.path == str(missing)


def test_missing_grammar_raises_before_walking(tmp_path, monkeypatch):
    config = dict(LANGUAGE_CONFIGS["go"], grammar_module="tree_sitter_not_installed")
    monkeypatch.setitem(LANGUAGE_CONFIGS, "cobol", config)
    with pytest.raises(GrammarNotAvailableError):
        _scan(tmp_path / "does-not-matter", language="cobol")
