from __future__ import annotations

import json
from pathlib import Path
from tempfile import TemporaryDirectory

from goanalyzer.config import AnalyzerConfig
from goanalyzer.pipeline import analyze, analyze_file, analyze_root, main
from goanalyzer.parser import GoParser
from goanalyzer.storage import load_graph, load_result


SERVER = """package app

// Server accepts connections.
type Server struct{}

func NewServer() *Server {
    return &Server{}
}

func (s *Server) Start() {
    s.listen()
}

func (s *Server) listen() {}
"""

MAIN = """package main

func main() {
    s := app.NewServer()
    s.Start()
}
"""

FACTS = {
    "files": {
        "cmd/main.go": {
            "uses": [
                {
                    "line": 4,
                    "column": 14,
                    "object": {"name": "NewServer", "path": "app/server.go", "package": "app"},
                }
            ],
            "selections": [
                {
                    "line": 5,
                    "column": 7,
                    "receiver": "*Server",
                    "method": {"name": "Start", "path": "app/server.go", "package": "app"},
                }
            ],
        }
    }
}


def _write_repo(root: Path) -> None:
    (root / "app").mkdir()
    (root / "cmd").mkdir()
    (root / "app" / "server.go").write_text(SERVER, encoding="utf-8")
    (root / "cmd" / "main.go").write_text(MAIN, encoding="utf-8")
    (root / "app" / "server_test.go").write_text(
        "package app\n\nfunc TestStart() {}\n", encoding="utf-8"
    )
    (root / "facts.json").write_text(json.dumps(FACTS), encoding="utf-8")


def _resolved(result) -> set[tuple[str, str]]:
    return {
        (edge.caller, edge.callee)
        for edge in result.call_relationships
        if edge.is_resolved
    }


def test_analyze_root_with_facts_resolves_across_files():
    with TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        _write_repo(root)
        config = AnalyzerConfig(root=tmpdir, facts_path=str(root / "facts.json"))

        result = analyze_root(config)

    ids = {node.id for node in result.nodes}
    assert ids == {
        "app.server.Server",
        "app.server.NewServer",
        "app.server.Server.Start",
        "app.server.Server.listen",
        "cmd.main.main",
    }
    assert _resolved(result) == {
        ("app.server.Server.Start", "app.server.Server.listen"),
        ("cmd.main.main", "app.server.NewServer"),
        ("cmd.main.main", "app.server.Server.Start"),
    }


def test_analysis_is_deterministic():
    parser = GoParser()
    sources = [
        parser.parse_text(SERVER, "app/server.go", root="/repo"),
        parser.parse_text(MAIN, "cmd/main.go", root="/repo"),
    ]

    first = analyze(sources).to_dict()
    second = analyze(list(reversed(sources))).to_dict()

    def _key(item):
        return json.dumps(item, sort_keys=True)

    assert sorted(map(_key, first["nodes"])) == sorted(map(_key, second["nodes"]))
    assert sorted(map(_key, first["call_relationships"])) == sorted(
        map(_key, second["call_relationships"])
    )


def test_analyze_file_single_file_mode():
    with TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "test_resolved.go"
        path.write_text(
            """package testpkg

func Caller() {
    InternalFunc()
    fmt.Println()
}

func InternalFunc() {}
""",
            encoding="utf-8",
        )

        result = analyze_file(str(path), tmpdir)

    by_callee = {edge.callee: edge for edge in result.call_relationships}
    assert by_callee["test_resolved.InternalFunc"].is_resolved
    assert not by_callee["fmt.Println"].is_resolved


def test_main_writes_result_and_graph():
    with TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        _write_repo(root)
        out_path = root / "analysis.json"
        graph_path = root / "graph.json"

        code = main(
            [
                "--root",
                tmpdir,
                "--facts",
                str(root / "facts.json"),
                "--include-tests",
                "--output",
                str(out_path),
                "--graph",
                str(graph_path),
            ]
        )

        assert code == 0
        result = load_result(out_path)
        graph = load_graph(graph_path)

    assert "app.server_test.TestStart" in {node.id for node in result.nodes}
    server = next(node for node in result.nodes if node.id == "app.server.Server")
    assert server.has_docstring
    assert server.docstring == "Server accepts connections."
    assert graph.has_edge("cmd.main.main", "app.server.Server.Start")


def test_main_prints_json_for_selected_files(capsys):
    with TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        _write_repo(root)

        code = main(["--root", tmpdir, "--file", str(root / "app" / "server.go")])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert {node["relative_path"] for node in payload["nodes"]} == {
        str(Path("app") / "server.go")
    }
    assert payload["call_relationships"][0]["relationship_type"] == "calls"


def test_main_reports_parse_errors():
    with TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        _write_repo(root)
        (root / "broken.go").write_text("package broken\n\nfunc (\n", encoding="utf-8")

        code = main(["--root", tmpdir])

    assert code == 1


def test_main_reports_malformed_input():
    with TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        _write_repo(root)
        (root / "latin1.go").write_bytes(b"package p\n\n// caf\xe9\nfunc F() {}\n")
        (root / "bad_facts.json").write_text("{}", encoding="utf-8")

        bad_source = main(["--root", tmpdir])
        (root / "latin1.go").unlink()
        bad_facts = main(["--root", tmpdir, "--facts", str(root / "bad_facts.json")])

    assert bad_source == 1
    assert bad_facts == 1
