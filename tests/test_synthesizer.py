"""
test_synthesizer.py - Testes da sintese das funcoes de acesso

Proposito:
    Validar ordem das funcoes, clausulas catch-all, numeracao de linhas
    e uniformidade do estilo de posicao.
"""

from __future__ import annotations

import dataclasses

from eenum.ast.nodes import (
    Atom,
    AtomLiteral,
    Call,
    Clause,
    Cons,
    EnumEntry,
    EnumTable,
    IntegerLiteral,
    LineColumnPosition,
    LinePosition,
    Nil,
    PositionStyle,
    Var,
)
from eenum.semantic.synthesizer import FunctionSynthesizer


def _table() -> EnumTable:
    table = EnumTable()
    table.insert(
        Atom("colors"),
        (EnumEntry(Atom("red"), 0), EnumEntry(Atom("green"), 1), EnumEntry(Atom("blue"), 2)),
    )
    table.insert(
        Atom("status"),
        (EnumEntry(Atom("ok"), 0), EnumEntry(Atom("error"), 5), EnumEntry(Atom("fatal"), 6)),
    )
    return table


def _positions(node) -> list:
    """Todas as posicoes de um no e de seus filhos."""
    found = []
    if isinstance(node, (LinePosition, LineColumnPosition)):
        return [node]
    if isinstance(node, tuple):
        for child in node:
            found.extend(_positions(child))
        return found
    if dataclasses.is_dataclass(node):
        for f in dataclasses.fields(node):
            found.extend(_positions(getattr(node, f.name)))
    return found


def _is_catch_all(clause: Clause, arity: int) -> bool:
    pos = clause.position
    return clause.patterns == tuple(Var(pos, "_") for _ in range(arity)) and clause.body == (
        Call(pos, AtomLiteral(pos, Atom("throw")), (AtomLiteral(pos, Atom("bad_enum")),)),
    )


def test_function_order():
    functions, _ = FunctionSynthesizer(PositionStyle.LINE).synthesize(_table(), 8)
    assert [(f.name.name, f.arity) for f in functions] == [
        ("to_int", 2),
        ("colors_to_int", 1),
        ("status_to_int", 1),
        ("to_atom", 2),
        ("colors_to_atom", 1),
        ("status_to_atom", 1),
        ("keys", 1),
        ("values", 1),
    ]


def test_every_function_ends_with_catch_all():
    functions, _ = FunctionSynthesizer(PositionStyle.LINE).synthesize(_table(), 8)
    for function in functions:
        assert _is_catch_all(function.clauses[-1], function.arity)
        assert not any(_is_catch_all(c, function.arity) for c in function.clauses[:-1])


def test_line_numbering_follows_virtual_counter():
    functions, last_line = FunctionSynthesizer(PositionStyle.LINE).synthesize(_table(), 8)
    assert [f.position.line for f in functions] == [8, 11, 12, 14, 17, 18, 20, 21]
    assert last_line == 22

    to_int = functions[0]
    assert [c.position.line for c in to_int.clauses] == [8, 9, 11]
    to_atom = functions[3]
    assert [c.position.line for c in to_atom.clauses] == [14, 15, 17]
    status_to_int = functions[2]
    assert {c.position.line for c in status_to_int.clauses} == {12}


def test_dispatcher_delegates_to_dedicated_function():
    functions, _ = FunctionSynthesizer(PositionStyle.LINE).synthesize(_table(), 8)
    first = functions[0].clauses[0]
    pos = LinePosition(8)
    assert first.patterns == (AtomLiteral(pos, Atom("colors")), Var(pos, "Enum"))
    assert first.body == (Call(pos, AtomLiteral(pos, Atom("colors_to_int")), (Var(pos, "Enum"),)),)


def test_dedicated_clauses_map_entries():
    functions, _ = FunctionSynthesizer(PositionStyle.LINE).synthesize(_table(), 8)
    status_to_int = functions[2]
    pairs = [(c.patterns[0].value.name, c.body[0].value) for c in status_to_int.clauses[:-1]]
    assert pairs == [("ok", 0), ("error", 5), ("fatal", 6)]

    status_to_atom = functions[5]
    pairs = [(c.patterns[0].value, c.body[0].value.name) for c in status_to_atom.clauses[:-1]]
    assert pairs == [(0, "ok"), (5, "error"), (6, "fatal")]


def test_keys_and_values_build_cons_lists():
    functions, _ = FunctionSynthesizer(PositionStyle.LINE).synthesize(_table(), 8)
    keys, values = functions[6], functions[7]
    pos = LinePosition(20)
    assert keys.clauses[0].body == (
        Cons(
            pos,
            AtomLiteral(pos, Atom("red")),
            Cons(pos, AtomLiteral(pos, Atom("green")), Cons(pos, AtomLiteral(pos, Atom("blue")), Nil(pos))),
        ),
    )
    pos = LinePosition(21)
    assert values.clauses[1].body == (
        Cons(
            pos,
            IntegerLiteral(pos, 0),
            Cons(pos, IntegerLiteral(pos, 5), Cons(pos, IntegerLiteral(pos, 6), Nil(pos))),
        ),
    )


def test_column_style_is_applied_uniformly():
    functions, _ = FunctionSynthesizer(PositionStyle.LINE_COLUMN).synthesize(_table(), 8)
    positions = [p for f in functions for p in _positions(f)]
    assert positions
    assert all(isinstance(p, LineColumnPosition) and p.column == 1 for p in positions)


def test_line_style_is_applied_uniformly():
    functions, _ = FunctionSynthesizer(PositionStyle.LINE).synthesize(_table(), 8)
    positions = [p for f in functions for p in _positions(f)]
    assert all(isinstance(p, LinePosition) for p in positions)


def test_single_enum_numbering():
    table = EnumTable()
    table.insert(Atom("status"), (EnumEntry(Atom("ok"), 0),))
    functions, last_line = FunctionSynthesizer(PositionStyle.LINE).synthesize(table, 4)
    assert [f.position.line for f in functions] == [4, 6, 8, 10, 12, 13]
    assert last_line == 14
