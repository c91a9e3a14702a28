"""CLI behaviour tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from swiftscan.cli import _build_parser, main
from tests._fixtures.tree_builder import TreeBuilder


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("VERBOSE", raising=False)


def _run(argv: list[str]) -> int:
    try:
        main(argv)
    except SystemExit as exc:
        return int(exc.code or 0)
    return 0


def test_cli_accepts_verbose_before_and_after_command() -> None:
    parser = _build_parser()

    assert parser.parse_args(["--verbose", "find-roots", "."]).verbose is True
    assert parser.parse_args(["find-roots", ".", "-v"]).verbose is True
    assert parser.parse_args(["find-roots", "."]).verbose is False


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["scan"],
        ["scan", "a.swift", "b.swift"],
        ["find-roots"],
        ["find-roots", "a", "b"],
        ["find-definitions", "types.txt"],
    ],
)
def test_cli_wrong_argument_count_exits_with_usage(argv: list[str], capsys) -> None:
    code = _run(argv)

    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "usage:" in captured.err


def test_scan_prints_artifact_path(tmp_path: Path, capsys) -> None:
    source = tmp_path / "Model.swift"
    source.write_text("import Foundation\nclass MyClass {}\nenum MyEnum {}\n", encoding="utf-8")

    code = _run(["scan", str(source), "--output-dir", str(tmp_path / "out")])

    captured = capsys.readouterr()
    artifact = Path(captured.out.strip())
    assert code == 0
    assert artifact.parent == tmp_path / "out"
    assert artifact.read_text(encoding="utf-8") == "MyClass\nMyEnum\n"


def test_scan_reports_missing_file(tmp_path: Path, capsys) -> None:
    code = _run(["scan", str(tmp_path / "missing.swift")])

    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert captured.err.startswith("Error: ")


def test_scan_uses_configured_output_dir(tmp_path: Path, capsys) -> None:
    (tmp_path / ".swiftscan.yml").write_text("output_dir: results\n", encoding="utf-8")
    source = tmp_path / "View.swift"
    source.write_text("struct View {}\n", encoding="utf-8")

    code = _run(["scan", str(source)])

    artifact = Path(capsys.readouterr().out.strip())
    assert code == 0
    assert artifact.parent == tmp_path.resolve() / "results"


def test_invalid_config_is_reported(tmp_path: Path, capsys) -> None:
    (tmp_path / ".swiftscan.yml").write_text("- not a mapping\n", encoding="utf-8")
    source = tmp_path / "Model.swift"
    source.write_text("class Model {}\n", encoding="utf-8")

    code = _run(["scan", str(source)])

    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert captured.err.startswith("Error: ")


def test_non_utf8_config_is_reported_for_scan(tmp_path: Path, capsys) -> None:
    (tmp_path / ".swiftscan.yml").write_bytes(b"verbose: \xff\n")
    source = tmp_path / "Model.swift"
    source.write_text("class Model {}\n", encoding="utf-8")

    code = _run(["scan", str(source)])

    captured = capsys.readouterr()
    assert code == 1
    assert captured.err.startswith("Error: ")


def test_find_roots_ignores_unreadable_config(tree: TreeBuilder, tmp_path: Path, capsys) -> None:
    (tmp_path / ".swiftscan.yml").write_bytes(b"verbose: \xff\n")
    tree.packages(["Core"])

    code = _run(["find-roots", tree.path()])

    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.splitlines() == [tree.path(), tree.path("Core")]
    assert "WARNING" in captured.err


def test_scan_reports_unwritable_output_dir(tmp_path: Path, capsys) -> None:
    source = tmp_path / "Model.swift"
    source.write_text("class Model {}\n", encoding="utf-8")
    blocker = tmp_path / "occupied"
    blocker.write_text("", encoding="utf-8")

    code = _run(["scan", str(source), "--output-dir", str(blocker)])

    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert captured.err.startswith("Error: ")


def test_log_file_option_records_debug_output(tree: TreeBuilder, tmp_path: Path, capsys) -> None:
    tree.packages(["Core"])
    log_file = tmp_path / "swiftscan.log"

    code = _run(["--log-file", str(log_file), "-v", "find-roots", tree.path()])

    assert code == 0
    assert capsys.readouterr().out.splitlines() == [tree.path(), tree.path("Core")]
    for handler in logging.getLogger("swiftscan").handlers:
        handler.flush()
    assert "DEBUG swiftscan.root_locator" in log_file.read_text(encoding="utf-8")


def test_verbose_env_logs_to_stderr_only(tmp_path: Path, capsys, monkeypatch) -> None:
    monkeypatch.setenv("VERBOSE", "true")
    source = tmp_path / "Model.swift"
    source.write_text("class Model {}\n", encoding="utf-8")

    code = _run(["scan", str(source), "--output-dir", str(tmp_path / "out")])

    captured = capsys.readouterr()
    assert code == 0
    assert len(captured.out.splitlines()) == 1
    assert "[swiftscan] DEBUG" in captured.err


def test_find_roots_prints_sorted_roots(tree: TreeBuilder, capsys) -> None:
    tree.packages(["Packages/Network", "Packages/Core", ".build/checkouts/Dep"])

    code = _run(["find-roots", tree.path()])

    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.splitlines() == [
        tree.path(),
        tree.path("Packages/Core"),
        tree.path("Packages/Network"),
    ]


def test_find_roots_stops_at_package_root(tree: TreeBuilder, capsys) -> None:
    tree.packages(["", "Nested"])

    code = _run(["find-roots", tree.path()])

    assert code == 0
    assert capsys.readouterr().out.splitlines() == [tree.path()]


def test_find_roots_missing_directory_is_not_an_error(tmp_path: Path, capsys) -> None:
    missing = str(tmp_path / "nowhere")

    code = _run(["find-roots", missing])

    assert code == 0
    assert capsys.readouterr().out.splitlines() == [missing]


def test_scan_then_find_definitions(tree: TreeBuilder, tmp_path: Path, capsys) -> None:
    tree.packages(["App"])
    tree.write(
        {
            "App/Sources/Order.swift": "struct Order {\n    let item: Item\n}\n",
            "App/Sources/Item.swift": "final class Item {}\n",
            "App/Sources/Unrelated.swift": "enum Color {}\n",
        }
    )
    out_dir = tmp_path / "out"

    assert _run(["scan", tree.path("App/Sources/Order.swift"), "--output-dir", str(out_dir)]) == 0
    types_file = capsys.readouterr().out.strip()
    assert Path(types_file).read_text(encoding="utf-8") == "Item\nOrder\n"

    assert _run(["find-definitions", types_file, tree.path(), "--output-dir", str(out_dir)]) == 0
    artifact = Path(capsys.readouterr().out.strip())
    assert artifact.read_text(encoding="utf-8").splitlines() == [
        tree.path("App/Sources/Item.swift"),
        tree.path("App/Sources/Order.swift"),
    ]


def test_find_definitions_reports_missing_types_file(tmp_path: Path, capsys) -> None:
    code = _run(["find-definitions", str(tmp_path / "missing.txt"), str(tmp_path)])

    captured = capsys.readouterr()
    assert code == 1
    assert captured.err.startswith("Error: ")
