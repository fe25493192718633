"""
test_cli.py - Testes da interface de linha de comando

Proposito:
    Validar saida, diagnosticos e codigos de retorno de transform/check/render.
"""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from eenum import __version__
from eenum.cli import main
from eenum.parser.transformer import read_forms


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_transform_prints_forms(runner, fixtures_dir):
    result = runner.invoke(main, ["transform", str(fixtures_dir / "colors.forms")])
    assert result.exit_code == 0
    forms = read_forms(result.output)
    assert len(forms) == 15
    assert "{attribute,1,export,[{to_int,2},{to_atom,2},{keys,1},{values,1}]}." in result.output
    assert result.output.rstrip().endswith("{eof,23}.")


def test_transform_reports_warnings(runner, fixtures_dir):
    result = runner.invoke(main, ["transform", str(fixtures_dir / "invalid.forms")])
    assert result.exit_code == 0
    assert "invalid.erl:3: [WARNING] invalid enum 'bad'" in result.output
    assert "invalid.erl:5: [WARNING] enum 'dup' already defined" in result.output
    assert "invalid.erl:6: [WARNING] invalid enum" in result.output


def test_transform_strict_fails_on_warnings(runner, fixtures_dir):
    result = runner.invoke(main, ["transform", "--strict", str(fixtures_dir / "invalid.forms")])
    assert result.exit_code == 1


def test_transform_strict_passes_clean_unit(runner, fixtures_dir):
    result = runner.invoke(main, ["transform", "--strict", str(fixtures_dir / "colors.forms")])
    assert result.exit_code == 0


def test_transform_source(runner, fixtures_dir):
    result = runner.invoke(main, ["transform", "--source", str(fixtures_dir / "colors.forms")])
    assert result.exit_code == 0
    assert result.output.startswith("to_int(colors, Enum) ->\n    colors_to_int(Enum);\n")
    assert "keys(status) ->\n    [ok, error, fatal];" in result.output


def test_transform_output_and_json(runner, fixtures_dir, tmp_path):
    out = tmp_path / "colors.out.forms"
    json_path = tmp_path / "colors.json"
    result = runner.invoke(
        main,
        [
            "transform",
            str(fixtures_dir / "colors.forms"),
            "-o",
            str(out),
            "--json",
            str(json_path),
        ],
    )
    assert result.exit_code == 0
    assert result.output == ""
    assert len(read_forms(out.read_text(encoding="utf-8"))) == 15
    assert json.loads(json_path.read_text(encoding="utf-8"))["stats"]["functions"] == 8


def test_transform_stats(runner, fixtures_dir):
    result = runner.invoke(main, ["transform", "--stats", str(fixtures_dir / "colors.forms")])
    assert result.exit_code == 0
    assert "Stats:" in result.output
    assert "  functions: 8" in result.output


def test_transform_pass_through_echoes_unit(runner, fixtures_dir):
    path = fixtures_dir / "plain.forms"
    result = runner.invoke(main, ["transform", str(path)])
    assert result.exit_code == 0
    assert read_forms(result.output) == read_forms(path.read_text(encoding="utf-8"))


def test_transform_syntax_error(runner, tmp_path):
    path = tmp_path / "bad.forms"
    path.write_text("{attribute,1,module,m}\n{eof,2}.\n", encoding="utf-8")
    result = runner.invoke(main, ["transform", str(path)])
    assert result.exit_code == 1
    assert "Cada forma deve terminar com '.'" in result.output


def test_transform_malformed_unit(runner, tmp_path):
    path = tmp_path / "nofile.forms"
    path.write_text("{attribute,1,module,m}.\n{eof,2}.\n", encoding="utf-8")
    result = runner.invoke(main, ["transform", str(path)])
    assert result.exit_code == 1
    assert "erro:" in result.output


def test_check(runner, fixtures_dir):
    result = runner.invoke(main, ["check", str(fixtures_dir / "colors.forms")])
    assert result.exit_code == 0
    assert "OK (6 forms)" in result.output


def test_check_syntax_error(runner, tmp_path):
    path = tmp_path / "bad.forms"
    path.write_text("{attribute,1,module,Colors}.\n", encoding="utf-8")
    result = runner.invoke(main, ["check", str(path)])
    assert result.exit_code == 1
    assert "Caractere inesperado" in result.output


def test_check_bad_based_integer(runner, tmp_path):
    path = tmp_path / "bad.forms"
    path.write_text("{attribute,1,module,m}.\n{attribute,2,x,1#0}.\n", encoding="utf-8")
    result = runner.invoke(main, ["check", str(path)])
    assert result.exit_code == 1
    assert "bad.forms:2:" in result.output
    assert "Base 1" in result.output
    assert "Traceback" not in result.output


def test_transform_bad_digits_for_base(runner, tmp_path):
    path = tmp_path / "bad.forms"
    path.write_text(
        "{attribute,1,file,{\"m.erl\",1}}.\n"
        "{attribute,1,module,m}.\n"
        "{attribute,3,enum,{e,[{a,2#9}]}}.\n"
        "{eof,4}.\n",
        encoding="utf-8",
    )
    result = runner.invoke(main, ["transform", str(path)])
    assert result.exit_code == 1
    assert "Digitos invalidos para a base 2" in result.output


def test_render(runner, fixtures_dir):
    result = runner.invoke(main, ["render", str(fixtures_dir / "status_columns.forms")])
    assert result.exit_code == 0
    assert "status_to_atom(5) ->\n    error;" in result.output
    assert "-export" not in result.output


def test_missing_file(runner, tmp_path):
    result = runner.invoke(main, ["transform", str(tmp_path / "missing.forms")])
    assert result.exit_code == 2
