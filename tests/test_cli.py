import json
from pathlib import Path
from typing import Any

import pytest

from graph_worksheet import cli


def test_affine_json_output(capsys: Any) -> None:
    cli.main(["affine", "-a", "-1", "-b", "2", "--x1", "3", "--x2", "-1"])
    out = json.loads(capsys.readouterr().out)
    assert out["function"] == "y = -1x + 2"
    assert out["points"] == [[-1, 3], [3, -1]]
    assert out["table"] == {"header": ["x", "-1", "3"], "values": ["y = -1x + 2", "3", "-1"]}
    assert out["domain"] == [-5, 5]
    assert out["label_anchor"] is not None


def test_fraction_coefficient_with_equals_form(capsys: Any) -> None:
    cli.main(["quadratic", "-a=-3/4"])
    out = json.loads(capsys.readouterr().out)
    assert out["function"] == "y = -0.75x²"
    assert out["points"][0] == [-2, -3]


def test_validation_error_exits_with_message() -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["affine", "-a", "2", "-b", "1", "--x1", "1", "--x2", "1.0"])
    assert str(exc.value.code) == "Error: Please enter two different x values."


def test_html_table(capsys: Any) -> None:
    cli.main(["origin", "--demo", "--html"])
    out = capsys.readouterr().out
    assert out.startswith("<figure>")
    assert "<th>x</th><th>0</th><th>3</th>" in out


def test_png_and_document_outputs(tmp_path: Path, capsys: Any) -> None:
    png = tmp_path / "graph.png"
    doc = tmp_path / "sheet.docx"
    cli.main(["affine", "--demo", "--png", str(png), "--out", str(doc)])
    assert png.read_bytes().startswith(b"\x89PNG")
    assert doc.is_file()
    assert "Worksheet written" in capsys.readouterr().err


def test_overflowing_input_exits_with_message() -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["quadratic", "-a", "1e308"])
    assert str(exc.value.code).startswith("Error: Values are too large to plot")
