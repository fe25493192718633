"""
table_builder.py - Descoberta e validacao das declaracoes -enum

Proposito:
    Encontrar os atributos -enum de uma unidade, validar e normalizar cada
    um em uma sequencia ordenada de (atomo, codigo) e montar a EnumTable.
    Declaracoes invalidas ou duplicadas sao descartadas com aviso.

Componentes principais:
    - find_declarations: coleta os atributos -enum na ordem da unidade
    - normalize_entries: dobra sobre as entradas com contador implicito
    - EnumTableBuilder: monta a tabela e registra os diagnosticos

Dependencias criticas:
    - eenum.ast.nodes: formas, Atom, EnumEntry, EnumTable
    - eenum.ast.results: Ok/Err e diagnosticos

Exemplo de uso:
    builder = EnumTableBuilder(collector)
    table = builder.build(find_declarations(forms))

Notas de implementacao:
    - A primeira declaracao de um nome vence; as seguintes geram DuplicateEnum.
    - Um nome cuja declaracao anterior foi invalida nao conta como duplicado.
    - Nenhuma regra produz erro fatal; apenas avisos.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Tuple

from eenum.ast.nodes import (
    Atom,
    AttributeForm,
    EnumDeclaration,
    EnumEntry,
    EnumTable,
    EofForm,
    Form,
    LinePosition,
    Position,
    is_atom,
    is_integer,
)
from eenum.ast.results import (
    DiagnosticCollector,
    DuplicateEnum,
    Err,
    InvalidEnum,
    InvalidEnumDeclaration,
    Ok,
    Result,
)

logger = logging.getLogger(__name__)

ENUM_ATTRIBUTE = Atom("enum")


def find_declarations(forms: Iterable[Form]) -> List[EnumDeclaration]:
    """Coleta os atributos -enum da unidade; marcadores eof no meio sao pulados."""
    declarations: List[EnumDeclaration] = []
    for form in forms:
        match form:
            case EofForm():
                continue
            case AttributeForm(name=name, position=position, value=value) if name == ENUM_ATTRIBUTE:
                declarations.append(EnumDeclaration(payload=value, line=position.line))
    return declarations


def normalize_entries(
    name: Atom,
    raw_entries: Any,
    location: Position,
) -> Result[Tuple[EnumEntry, ...], InvalidEnum]:
    """
    Normaliza as entradas de um enum.

    Atomos soltos recebem o proximo codigo; pares {Atomo, Inteiro} so sao
    aceitos se o inteiro for >= ao proximo codigo. Qualquer outra entrada
    invalida o enum inteiro.
    """
    if raw_entries == "":
        # "" e [] sao o mesmo termo no Erlang
        raw_entries = []
    if not isinstance(raw_entries, list):
        return Err(InvalidEnum(location=location, name=name))

    next_code = 0
    validated: List[EnumEntry] = []
    for raw in raw_entries:
        match raw:
            case Atom():
                entry = EnumEntry(raw, next_code)
            case (Atom() as key, code) if (
                isinstance(raw, tuple) and is_integer(code) and code >= next_code
            ):
                entry = EnumEntry(key, code)
            case _:
                return Err(InvalidEnum(location=location, name=name))
        validated.append(entry)
        next_code = entry.code + 1
    return Ok(tuple(validated))


@dataclass
class EnumTableBuilder:
    collector: DiagnosticCollector = field(default_factory=DiagnosticCollector)

    def build(self, declarations: Iterable[EnumDeclaration]) -> EnumTable:
        table = EnumTable()
        for declaration in declarations:
            self.add_declaration(table, declaration)
        return table

    def add_declaration(self, table: EnumTable, declaration: EnumDeclaration) -> None:
        location = LinePosition(declaration.line)
        name = declaration.name

        if not is_atom(name):
            logger.debug("Declaracao -enum invalida na linha %d", declaration.line)
            self.collector.record(InvalidEnumDeclaration(location=location))
            return

        if name in table:
            logger.debug("Enum %s duplicado na linha %d", name, declaration.line)
            self.collector.record(DuplicateEnum(location=location, name=name))
            return

        match normalize_entries(name, declaration.entries, location):
            case Ok(value=entries):
                logger.debug("Enum %s com %d entradas", name, len(entries))
                table.insert(name, entries)
            case Err(error=error):
                logger.debug("Enum %s descartado na linha %d", name, declaration.line)
                self.collector.record(error)
