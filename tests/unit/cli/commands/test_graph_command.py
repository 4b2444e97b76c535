"""Tests for the graph command."""

import json

import pytest
from click.testing import CliRunner

from importchain.cli.main import main


@pytest.fixture
def project(make_files, monkeypatch):
    root = make_files({
        "src/index.ts": 'import "./a";\n',
        "src/a.ts": 'import "./b";\n',
        "src/b.ts": "",
    })
    monkeypatch.chdir(root)
    return root


class TestGraphCommand:
    def test_prints_stats(self, project):
        result = CliRunner().invoke(main, ["graph", "src/index.ts"])

        assert result.exit_code == 0
        assert "Import Graph" in result.output
        assert "total nodes" in result.output

    def test_show_pattern(self, project):
        result = CliRunner().invoke(main, ["graph", "src/index.ts", "--show", "a.ts"])

        assert f"{project / 'src/a.ts'}:" in result.output
        assert f"    -> {project / 'src/b.ts'}" in result.output

    def test_writes_json(self, project):
        result = CliRunner().invoke(main, ["graph", "src/index.ts", "-o", "out/graph.json"])

        assert result.exit_code == 0
        data = json.loads((project / "out/graph.json").read_text())
        assert data["entry_points"] == [str(project / "src/index.ts")]
        assert data["nodes"][str(project / "src/a.ts")]["imports"] == [str(project / "src/b.ts")]
        assert data["stats"]["total_nodes"] == 3


class TestMain:
    def test_help_lists_commands(self):
        result = CliRunner().invoke(main, ["--help"])

        assert result.exit_code == 0
        for command in ("trace", "inspect", "graph"):
            assert command in result.output
