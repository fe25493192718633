"""
cli.py - Interface de linha de comando do eenum

Proposito:
    Expor comandos para transformar, verificar e renderizar unidades de
    formas abstratas com declaracoes -enum.
    Gerencia saida de diagnosticos e codigos de retorno.

Componentes principais:
    - main: grupo principal Click
    - transform/check/render: comandos CLI

Dependencias criticas:
    - click: CLI
    - eenum.api: leitura + transformacao
    - eenum.printer: saida em termos ou codigo fonte

Exemplo de uso:
    eenum transform colors.forms -o colors.out.forms --json colors.json

Notas de implementacao:
    - Diagnosticos usam o formato arquivo:linha: [SEVERITY] mensagem.
    - --strict faz avisos resultarem em codigo de saida 1.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

try:
    import click
except ImportError:
    raise ImportError(
        "click nao encontrado. CLI requer instalacao com: pip install eenum[cli]"
    )

from eenum import __version__
from eenum.api import transform_file
from eenum.ast.results import EnumDiagnostic
from eenum.compiler import MalformedUnitError, TransformResult, TransformStats
from eenum.exporters.json_export import export_json
from eenum.parser.lexer import FormsSyntaxError
from eenum.parser.transformer import read_forms_file
from eenum.printer import render_forms, render_source


HELP_EPILOG = (
    "Examples:\n"
    "  eenum transform colors.forms\n"
    "  eenum transform colors.forms -o colors.out.forms --json colors.json\n"
    "  eenum render colors.forms\n"
)


@click.group(epilog=HELP_EPILOG)
@click.version_option(__version__, prog_name="eenum")
@click.option("-v", "--verbose", is_flag=True, help="Log transform steps")
def main(verbose: bool) -> None:
    """eenum - enum accessors generated from -enum attributes"""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("unit", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", "output_path", type=click.Path(dir_okay=False))
@click.option("--source", "as_source", is_flag=True, help="Print generated functions as Erlang source")
@click.option("--json", "json_path", type=click.Path(dir_okay=False), help="Write the enum table as JSON")
@click.option("--strict", is_flag=True, help="Treat warnings as errors")
@click.option("--stats", is_flag=True, help="Show transform statistics")
def transform(
    unit: str,
    output_path: str | None,
    as_source: bool,
    json_path: str | None,
    strict: bool,
    stats: bool,
) -> None:
    """Apply the enum transform to a unit of abstract forms."""
    result = _load(unit)

    _print_diagnostics(result.filename, result.all_errors(), "ERROR")
    _print_diagnostics(result.filename, result.all_warnings(), "WARNING")

    if stats:
        _print_stats(result.stats)

    exit_code = 1 if result.has_errors() or (strict and result.has_warnings()) else 0

    if result.success:
        text = render_source(result.generated) if as_source else render_forms(result.forms)
        if output_path:
            Path(output_path).write_text(text, encoding="utf-8")
        else:
            click.echo(text, nl=False)
        if json_path:
            export_json(result, Path(json_path))

    raise SystemExit(exit_code)


@main.command()
@click.argument("unit", type=click.Path(exists=True, dir_okay=False))
def check(unit: str) -> None:
    """Parse a unit without transforming it."""
    try:
        forms = read_forms_file(Path(unit))
    except FormsSyntaxError as exc:
        click.echo(click.style(exc.message, fg="red"), err=True)
        raise SystemExit(1)
    click.echo(click.style(f"OK ({len(forms)} forms)", fg="green"))


@main.command()
@click.argument("unit", type=click.Path(exists=True, dir_okay=False))
def render(unit: str) -> None:
    """Print the generated accessors as Erlang source."""
    result = _load(unit)
    _print_diagnostics(result.filename, result.all_warnings(), "WARNING")
    click.echo(render_source(result.generated), nl=False)


def _load(unit: str) -> TransformResult:
    try:
        return transform_file(Path(unit))
    except FormsSyntaxError as exc:
        click.echo(click.style(exc.message, fg="red"), err=True)
        raise SystemExit(1)
    except MalformedUnitError as exc:
        click.echo(click.style(f"erro: {unit}: {exc}", fg="red"), err=True)
        raise SystemExit(1)


def _print_diagnostics(filename: str, diagnostics: Iterable[EnumDiagnostic], severity_label: str) -> None:
    color = "red" if severity_label == "ERROR" else "yellow"
    for diagnostic in diagnostics:
        line = f"{filename}:{diagnostic.location}: [{severity_label}] {diagnostic.to_diagnostic()}"
        click.echo(click.style(line, fg=color), err=True)


def _print_stats(stats: TransformStats) -> None:
    click.echo("Stats:", err=True)
    click.echo(f"  declarations: {stats.declaration_count}", err=True)
    click.echo(f"  enums: {stats.enum_count}", err=True)
    click.echo(f"  entries: {stats.entry_count}", err=True)
    click.echo(f"  functions: {stats.function_count}", err=True)
    click.echo(f"  warnings: {stats.warning_count}", err=True)


if __name__ == "__main__":
    main()
