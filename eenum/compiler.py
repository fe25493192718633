"""
compiler.py - Orquestrador da transformacao de enums (parse transform)

Proposito:
    Executar a transformacao completa sobre uma unidade de formas abstratas:
    descobrir declaracoes -enum, montar a tabela, decidir o desfecho e
    montar a unidade final com as funcoes geradas.

Componentes principais:
    - parse_transform: ponto de entrada da transformacao
    - TransformContext: estado de uma unica invocacao
    - TransformResult/TransformStats: resultado e estatisticas
    - MalformedUnitError: unidade sem file/module/eof

Dependencias criticas:
    - eenum.semantic.table_builder: validacao das declaracoes
    - eenum.semantic.synthesizer: geracao das funcoes

Exemplo de uso:
    result = parse_transform(forms)
    if result.has_warnings():
        print(result.get_diagnostics())

Notas de implementacao:
    - Unidade sem enums validos e devolvida intacta (mesmo objeto).
    - O canal de erros existe, mas nenhuma regra atual o alimenta.
    - Todo estado mutavel vive no TransformContext da chamada.
    - Com mais de um eof, so o primeiro e removido e as linhas geradas partem
      do ultimo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from eenum.ast.nodes import (
    Atom,
    AttributeForm,
    EnumTable,
    EofForm,
    Form,
    FunctionForm,
    PositionStyle,
)
from eenum.ast.results import DiagnosticCollector, EnumDiagnostic, ErrorSeverity
from eenum.semantic.synthesizer import ACCESSOR_EXPORTS, FunctionSynthesizer
from eenum.semantic.table_builder import EnumTableBuilder, find_declarations

logger = logging.getLogger(__name__)

FILE_ATTRIBUTE = Atom("file")
EXPORT_ATTRIBUTE = Atom("export")


class MalformedUnitError(ValueError):
    """Unidade sem o atributo file, o atributo de modulo ou o marcador eof."""


class TransformOutcome(Enum):
    PASS_THROUGH = "pass_through"
    TRANSFORMED = "transformed"
    FAILED = "failed"


@dataclass
class TransformStats:
    declaration_count: int = 0
    enum_count: int = 0
    entry_count: int = 0
    function_count: int = 0
    warning_count: int = 0
    error_count: int = 0


@dataclass
class TransformContext:
    filename: str
    style: PositionStyle
    collector: DiagnosticCollector = field(default_factory=DiagnosticCollector)


@dataclass
class TransformResult:
    outcome: TransformOutcome
    filename: str
    forms: Optional[Sequence[Form]]
    warnings: Dict[str, List[EnumDiagnostic]] = field(default_factory=dict)
    errors: Dict[str, List[EnumDiagnostic]] = field(default_factory=dict)
    table: EnumTable = field(default_factory=EnumTable)
    generated: List[FunctionForm] = field(default_factory=list)
    stats: TransformStats = field(default_factory=TransformStats)

    @property
    def success(self) -> bool:
        return self.outcome is not TransformOutcome.FAILED

    def has_errors(self) -> bool:
        return any(self.errors.values())

    def has_warnings(self) -> bool:
        return any(self.warnings.values())

    def all_warnings(self) -> List[EnumDiagnostic]:
        return [w for diagnostics in self.warnings.values() for w in diagnostics]

    def all_errors(self) -> List[EnumDiagnostic]:
        return [e for diagnostics in self.errors.values() for e in diagnostics]

    def get_diagnostics(self) -> str:
        lines: List[str] = []
        for severity, mapping in (("ERROR", self.errors), ("WARNING", self.warnings)):
            for filename, diagnostics in mapping.items():
                for diagnostic in diagnostics:
                    lines.append(
                        f"{filename}:{diagnostic.location}: [{severity}] {diagnostic.to_diagnostic()}"
                    )
        return "\n".join(lines)

    def to_return_value(self) -> Any:
        """
        Valor de retorno no formato de um parse transform Erlang.

        Returns:
            Forms | ("warning", Forms, [(File, Warnings)]) | ("error", [(File, Errors)], [])
        """
        if self.outcome is TransformOutcome.FAILED:
            return (
                Atom("error"),
                [(name, [d.to_tuple() for d in diags]) for name, diags in self.errors.items()],
                [],
            )
        if self.has_warnings():
            return (
                Atom("warning"),
                self.forms,
                [(name, [d.to_tuple() for d in diags]) for name, diags in self.warnings.items()],
            )
        return self.forms


def parse_transform(forms: Sequence[Form]) -> TransformResult:
    """
    Aplica a transformacao de enums a uma unidade.

    Args:
        forms: formas da unidade: atributo file, atributo de modulo, ..., eof

    Returns:
        TransformResult com o desfecho, as formas finais e os diagnosticos

    Raises:
        MalformedUnitError: se a unidade nao tiver a estrutura esperada
    """
    file_form, module_form, body = _split_unit(forms)
    filename = file_form.value[0]
    context = TransformContext(
        filename=filename,
        style=PositionStyle.of(module_form.position),
    )

    declarations = find_declarations(body)
    table = EnumTableBuilder(context.collector).build(declarations)
    stats = TransformStats(
        declaration_count=len(declarations),
        enum_count=len(table),
        entry_count=table.entry_count(),
    )

    if not table:
        warnings = context.collector.drain(ErrorSeverity.WARNING)
        stats.warning_count = len(warnings)
        logger.info("%s: nenhum enum valido, unidade inalterada", filename)
        return TransformResult(
            outcome=TransformOutcome.PASS_THROUGH,
            filename=filename,
            forms=forms,
            warnings=_by_file(filename, warnings),
            table=table,
            stats=stats,
        )

    if context.collector.has_errors():
        errors = context.collector.drain(ErrorSeverity.ERROR)
        stats.error_count = len(errors)
        logger.info("%s: transformacao falhou com %d erros", filename, len(errors))
        return TransformResult(
            outcome=TransformOutcome.FAILED,
            filename=filename,
            forms=None,
            errors=_by_file(filename, errors),
            table=table,
            stats=stats,
        )

    new_forms, generated = _assemble(context, file_form, module_form, body, table)
    warnings = context.collector.drain(ErrorSeverity.WARNING)
    stats.function_count = len(generated)
    stats.warning_count = len(warnings)
    logger.info(
        "%s: %d enums, %d funcoes geradas, %d avisos",
        filename,
        stats.enum_count,
        stats.function_count,
        stats.warning_count,
    )
    return TransformResult(
        outcome=TransformOutcome.TRANSFORMED,
        filename=filename,
        forms=new_forms,
        warnings=_by_file(filename, warnings),
        table=table,
        generated=generated,
        stats=stats,
    )


def _assemble(
    context: TransformContext,
    file_form: AttributeForm,
    module_form: AttributeForm,
    body: Sequence[Form],
    table: EnumTable,
) -> tuple[List[Form], List[FunctionForm]]:
    # o contador parte do eof final; so o primeiro eof sai do corpo
    seed_line = body[-1].position.line
    eof_index = next(i for i, form in enumerate(body) if isinstance(form, EofForm))
    remaining = [form for i, form in enumerate(body) if i != eof_index]

    export = AttributeForm(
        position=context.style.encode(module_form.position.line),
        name=EXPORT_ATTRIBUTE,
        value=list(ACCESSOR_EXPORTS),
    )
    generated, last_line = FunctionSynthesizer(context.style).synthesize(table, seed_line)
    eof = EofForm(context.style.encode(last_line + 1))

    new_forms: List[Form] = [file_form, module_form, export, *remaining, *generated, eof]
    return new_forms, generated


def _split_unit(forms: Sequence[Form]) -> tuple[AttributeForm, AttributeForm, Sequence[Form]]:
    if len(forms) < 3:
        raise MalformedUnitError("Unidade precisa de atributo file, atributo de modulo e eof")

    file_form, module_form = forms[0], forms[1]
    if not (
        isinstance(file_form, AttributeForm)
        and file_form.name == FILE_ATTRIBUTE
        and isinstance(file_form.value, tuple)
        and len(file_form.value) == 2
        and isinstance(file_form.value[0], str)
    ):
        raise MalformedUnitError("Primeira forma deve ser {attribute, _, file, {Arquivo, Linha}}")
    if not isinstance(module_form, AttributeForm):
        raise MalformedUnitError("Segunda forma deve ser o atributo de modulo")
    if not isinstance(forms[-1], EofForm):
        raise MalformedUnitError("Ultima forma deve ser {eof, _}")

    return file_form, module_form, forms[2:]


def _by_file(filename: str, diagnostics: List[EnumDiagnostic]) -> Dict[str, List[EnumDiagnostic]]:
    return {filename: diagnostics} if diagnostics else {}
