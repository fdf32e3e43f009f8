from __future__ import annotations

from pathlib import Path
from tempfile import TemporaryDirectory

from goanalyzer.file_walker import iter_go_files


def _tree(root: Path) -> None:
    (root / "a.go").write_text("package a", encoding="utf-8")
    (root / "a_test.go").write_text("package a", encoding="utf-8")
    (root / "b.txt").write_text("nope", encoding="utf-8")
    for sub in ("sub", "vendor", "testdata"):
        (root / sub).mkdir()
        (root / sub / "c.go").write_text("package c", encoding="utf-8")


def test_iter_go_files_filters_tests_vendor_and_non_go():
    with TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        _tree(root)

        matches = iter_go_files(root)
        relative = [str(Path(path).relative_to(root)) for path in matches]

    assert relative == ["a.go", str(Path("sub") / "c.go")]


def test_iter_go_files_with_tests_and_custom_excludes():
    with TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        _tree(root)

        matches = iter_go_files(root, excludes={"sub"}, include_tests=True)
        relative = {str(Path(path).relative_to(root)) for path in matches}

    assert relative == {
        "a.go",
        "a_test.go",
        str(Path("vendor") / "c.go"),
        str(Path("testdata") / "c.go"),
    }
