"""
synthesizer.py - Sintese das funcoes de acesso aos enums

Proposito:
    Gerar, a partir da EnumTable validada, as formas de funcao que
    convertem entre atomos e codigos inteiros: to_int/2, <enum>_to_int/1,
    to_atom/2, <enum>_to_atom/1, keys/1 e values/1.

Componentes principais:
    - FunctionSynthesizer: gera as funcoes em ordem deterministica
    - ACCESSOR_EXPORTS: funcoes exportadas pela unidade transformada

Dependencias criticas:
    - eenum.ast.nodes: FunctionForm, Clause e expressoes

Exemplo de uso:
    synthesizer = FunctionSynthesizer(PositionStyle.LINE)
    functions, last_line = synthesizer.synthesize(table, seed_line=eof_line)

Notas de implementacao:
    - Toda funcao termina com a clausula catch-all que lanca throw(bad_enum).
    - As linhas vem de um contador virtual a partir da linha do eof original:
      cada clausula de despacho avanca uma linha, cada familia avanca uma
      linha extra ao terminar.
    - Todas as posicoes usam o estilo da unidade (linha ou linha+coluna).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from eenum.ast.nodes import (
    Atom,
    AtomLiteral,
    Call,
    Clause,
    Cons,
    EnumEntry,
    EnumTable,
    Expression,
    FunctionForm,
    IntegerLiteral,
    Nil,
    Position,
    PositionStyle,
    Var,
)

logger = logging.getLogger(__name__)

TO_INT = Atom("to_int")
TO_ATOM = Atom("to_atom")
KEYS = Atom("keys")
VALUES = Atom("values")
BAD_ENUM = Atom("bad_enum")

ACCESSOR_EXPORTS = [(TO_INT, 2), (TO_ATOM, 2), (KEYS, 1), (VALUES, 1)]

EnumItems = Sequence[Tuple[Atom, Tuple[EnumEntry, ...]]]


def enum_to_int_name(name: Atom) -> Atom:
    return Atom(f"{name.name}_to_int")


def enum_to_atom_name(name: Atom) -> Atom:
    return Atom(f"{name.name}_to_atom")


@dataclass(frozen=True)
class FunctionSynthesizer:
    style: PositionStyle

    def synthesize(self, table: EnumTable, seed_line: int) -> Tuple[List[FunctionForm], int]:
        """
        Gera todas as funcoes de acesso.

        Args:
            table: enums validados, em ordem de descoberta
            seed_line: linha do marcador de fim da unidade original

        Returns:
            Tupla (funcoes em ordem de emissao, proxima linha livre)
        """
        enums = list(table)

        to_int, line = self.dispatcher(TO_INT, enums, seed_line, enum_to_int_name)
        to_int_funs, line = self.dedicated(enums, line, enum_to_int_name, self._to_int_clause)
        to_atom, line = self.dispatcher(TO_ATOM, enums, line, enum_to_atom_name)
        to_atom_funs, line = self.dedicated(enums, line, enum_to_atom_name, self._to_atom_clause)
        keys, line = self.listing(KEYS, enums, line, lambda pos, e: AtomLiteral(pos, e.name))
        values, line = self.listing(VALUES, enums, line, lambda pos, e: IntegerLiteral(pos, e.code))

        functions = [to_int, *to_int_funs, to_atom, *to_atom_funs, keys, values]
        for function in functions:
            logger.debug("Funcao sintetizada %s/%d", function.name, function.arity)
        return functions, line

    def dispatcher(
        self,
        name: Atom,
        enums: EnumItems,
        line: int,
        target: Callable[[Atom], Atom],
    ) -> Tuple[FunctionForm, int]:
        """name(Enum, X) -> <enum>_to_...(X), uma clausula por enum."""
        clauses: List[Clause] = []
        current = line
        for enum_name, _entries in enums:
            pos = self.position(current)
            clauses.append(
                Clause(
                    position=pos,
                    patterns=(AtomLiteral(pos, enum_name), Var(pos, "Enum")),
                    guards=(),
                    body=(Call(pos, AtomLiteral(pos, target(enum_name)), (Var(pos, "Enum"),)),),
                )
            )
            current += 1
        next_line = current + 1
        clauses.append(self.catch_all(next_line, 2))
        return FunctionForm(self.position(line), name, 2, tuple(clauses)), next_line

    def dedicated(
        self,
        enums: EnumItems,
        line: int,
        function_name: Callable[[Atom], Atom],
        make_clause: Callable[[Position, EnumEntry], Clause],
    ) -> Tuple[List[FunctionForm], int]:
        functions: List[FunctionForm] = []
        current = line
        for enum_name, entries in enums:
            pos = self.position(current)
            clauses = [make_clause(pos, entry) for entry in entries]
            clauses.append(self.catch_all(current, 1))
            functions.append(FunctionForm(pos, function_name(enum_name), 1, tuple(clauses)))
            current += 1
        return functions, current + 1

    def listing(
        self,
        name: Atom,
        enums: EnumItems,
        line: int,
        element: Callable[[Position, EnumEntry], Expression],
    ) -> Tuple[FunctionForm, int]:
        """keys/1 e values/1: uma clausula por enum retornando a lista ordenada."""
        pos = self.position(line)
        clauses = [
            Clause(
                position=pos,
                patterns=(AtomLiteral(pos, enum_name),),
                guards=(),
                body=(self.list_expression(pos, [element(pos, e) for e in entries]),),
            )
            for enum_name, entries in enums
        ]
        clauses.append(self.catch_all(line, 1))
        return FunctionForm(pos, name, 1, tuple(clauses)), line + 1

    def catch_all(self, line: int, arity: int) -> Clause:
        pos = self.position(line)
        return Clause(
            position=pos,
            patterns=tuple(Var(pos, "_") for _ in range(arity)),
            guards=(),
            body=(Call(pos, AtomLiteral(pos, Atom("throw")), (AtomLiteral(pos, BAD_ENUM),)),),
        )

    def list_expression(self, pos: Position, elements: List[Expression]) -> Expression:
        result: Expression = Nil(pos)
        for element in reversed(elements):
            result = Cons(pos, element, result)
        return result

    def position(self, line: int) -> Position:
        return self.style.encode(line)

    def _to_int_clause(self, pos: Position, entry: EnumEntry) -> Clause:
        return Clause(pos, (AtomLiteral(pos, entry.name),), (), (IntegerLiteral(pos, entry.code),))

    def _to_atom_clause(self, pos: Position, entry: EnumEntry) -> Clause:
        return Clause(pos, (IntegerLiteral(pos, entry.code),), (), (AtomLiteral(pos, entry.name),))
