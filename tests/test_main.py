from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from lsysparse.main import main

BUSH = (
    "generations:5\n"
    "angle:20\n"
    "scale:0.6\n"
    "axiom:F\n"
    "F (0.5) -> F[+F]F\n"
    "F (0.5) -> F[-F]F\n"
)


class TestMain:
    def test_json_output(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        source = tmp_path / "bush.lsys"
        source.write_text(BUSH, encoding="utf-8")
        assert main([str(source)]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["generations"] == 5
        assert payload["axiom"] == ["F"]
        alternatives = payload["productions"][0]["alternatives"]
        assert [option["probability"] for option in alternatives] == [0.5, 0.5]

    def test_source_output_from_stdin(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(BUSH.encode("utf-8"))))
        assert main(["-", "--format", "source"]) == 0
        assert capsys.readouterr().out == (
            "generations:5\n"
            "angle:20.0\n"
            "scale:0.6\n"
            "axiom:F\n"
            "F (0.5) -> F[+F]F\n"
            "F (0.5) -> F[-F]F\n"
        )

    def test_config_aliases(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        config = tmp_path / "config.toml"
        config.write_text('[parser.aliases]\nG = "move_forward"\n', encoding="utf-8")
        source = tmp_path / "g.lsys"
        source.write_text("generations:1\nangle:90\nscale:1\naxiom:G\nG -> GG\n", encoding="utf-8")
        assert main([str(source), "--config", str(config), "--format", "source"]) == 0
        assert capsys.readouterr().out.endswith("axiom:F\nF -> FF\n")

    def test_syntax_error_exit_code(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        source = tmp_path / "broken.lsys"
        source.write_text(BUSH.replace("F (0.5) -> F[-F]F", "F (0.5) F[-F]F"), encoding="utf-8")
        assert main([str(source)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert 'Expecting "->" here: "F[-F]F"' in captured.err

    def test_invalid_utf8_exit_code(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        source = tmp_path / "latin1.lsys"
        source.write_bytes(BUSH.replace("angle:20", "angle:\xb0").encode("latin-1"))
        assert main([str(source)]) == 1
        assert "Expecting UTF-8 text" in capsys.readouterr().err
