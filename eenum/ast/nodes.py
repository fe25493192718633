"""
nodes.py - Dataclasses da AST de formas abstratas manipuladas pelo eenum

Proposito:
    Definir os termos, posicoes e nos de forma (atributos, funcoes, clausulas,
    expressoes) sobre os quais a transformacao de enums trabalha.
    Centraliza tambem o modelo de dados das enumeracoes validadas.

Componentes principais:
    - Atom: atomo Erlang, distinto de str (que modela strings)
    - LinePosition, LineColumnPosition, PositionStyle: modelo de posicoes
    - AttributeForm, FunctionForm, EofForm, RawForm: formas de topo
    - Clause, AtomLiteral, IntegerLiteral, Var, Call, Cons, Nil: corpo das funcoes
    - EnumDeclaration, EnumEntry, EnumTable: dados das enumeracoes
    - SourceLocation: localizacao em arquivo texto (erros de leitura)

Dependencias criticas:
    - dataclasses: nos imutaveis (frozen)
    - enum: PositionStyle

Exemplo de uso:
    from eenum.ast.nodes import Atom, PositionStyle
    style = PositionStyle.of(mod.position)
    pos = style.encode(12)

Notas de implementacao:
    - Todos os nos sao frozen; a transformacao nunca altera formas originais.
    - Formas nao reconhecidas ficam em RawForm com o termo original intacto.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union


_UNQUOTED_ATOM = re.compile(r"[a-z][A-Za-z0-9_@]*\Z")

_RESERVED_WORDS = frozenset(
    {
        "after", "and", "andalso", "band", "begin", "bnot", "bor", "bsl",
        "bsr", "bxor", "case", "catch", "cond", "div", "else", "end", "fun",
        "if", "let", "maybe", "not", "of", "or", "orelse", "receive", "rem",
        "try", "when", "xor",
    }
)


@dataclass(frozen=True)
class Atom:
    name: str

    def __str__(self) -> str:
        return self.name

    def quoted(self) -> str:
        """Representacao do atomo como o Erlang imprime com ~p."""
        if _UNQUOTED_ATOM.match(self.name) and self.name not in _RESERVED_WORDS:
            return self.name
        escaped = self.name.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"


def is_atom(value: Any) -> bool:
    return isinstance(value, Atom)


def is_integer(value: Any) -> bool:
    # bool herda de int, mas true/false sao atomos no Erlang
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class SourceLocation:
    file: Path
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": str(self.file),
            "line": self.line,
            "column": self.column,
        }


# =============================================================================
# Posicoes
# =============================================================================


@dataclass(frozen=True)
class LinePosition:
    line: int

    def to_term(self) -> int:
        return self.line

    def __str__(self) -> str:
        return str(self.line)


@dataclass(frozen=True)
class LineColumnPosition:
    line: int
    column: int = 1

    def to_term(self) -> Tuple[int, int]:
        return (self.line, self.column)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


Position = Union[LinePosition, LineColumnPosition]


def position_from_term(term: Any) -> Position:
    """Converte a anotacao de posicao de uma forma (Line ou {Line, Col})."""
    if is_integer(term):
        return LinePosition(term)
    if (
        isinstance(term, tuple)
        and len(term) == 2
        and is_integer(term[0])
        and is_integer(term[1])
    ):
        return LineColumnPosition(term[0], term[1])
    raise ValueError(f"Posicao nao reconhecida: {term!r}")


class PositionStyle(Enum):
    LINE = "line"
    LINE_COLUMN = "line_column"

    @classmethod
    def of(cls, position: Position) -> "PositionStyle":
        match position:
            case LinePosition():
                return cls.LINE
            case LineColumnPosition():
                return cls.LINE_COLUMN
        raise ValueError(f"Posicao nao reconhecida: {position!r}")

    def encode(self, line: int) -> Position:
        if self is PositionStyle.LINE:
            return LinePosition(line)
        return LineColumnPosition(line, 1)


# =============================================================================
# Expressoes e clausulas
# =============================================================================


@dataclass(frozen=True)
class AtomLiteral:
    position: Position
    value: Atom


@dataclass(frozen=True)
class IntegerLiteral:
    position: Position
    value: int


@dataclass(frozen=True)
class Var:
    position: Position
    name: str


@dataclass(frozen=True)
class Nil:
    position: Position


@dataclass(frozen=True)
class Cons:
    position: Position
    head: "Expression"
    tail: "Expression"


@dataclass(frozen=True)
class Call:
    position: Position
    function: "Expression"
    args: Tuple["Expression", ...]


Expression = Union[AtomLiteral, IntegerLiteral, Var, Nil, Cons, Call]


@dataclass(frozen=True)
class Clause:
    position: Position
    patterns: Tuple[Expression, ...]
    guards: Tuple[Tuple[Expression, ...], ...]
    body: Tuple[Expression, ...]


# =============================================================================
# Formas de topo
# =============================================================================


@dataclass(frozen=True)
class AttributeForm:
    position: Position
    name: Atom
    value: Any


@dataclass(frozen=True)
class FunctionForm:
    position: Position
    name: Atom
    arity: int
    clauses: Tuple[Clause, ...]


@dataclass(frozen=True)
class EofForm:
    position: Position


@dataclass(frozen=True)
class RawForm:
    term: Any


Form = Union[AttributeForm, FunctionForm, EofForm, RawForm]


# =============================================================================
# Enumeracoes
# =============================================================================


@dataclass(frozen=True)
class EnumDeclaration:
    """Payload bruto de um atributo -enum, ainda nao validado."""

    payload: Any
    line: int

    @property
    def name(self) -> Any:
        if isinstance(self.payload, tuple) and len(self.payload) == 2:
            return self.payload[0]
        return None

    @property
    def entries(self) -> Any:
        if isinstance(self.payload, tuple) and len(self.payload) == 2:
            return self.payload[1]
        return None


@dataclass(frozen=True)
class EnumEntry:
    name: Atom
    code: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name.name, "code": self.code}


@dataclass
class EnumTable:
    """Enumeracoes validadas, na ordem em que foram descobertas."""

    enums: Dict[Atom, Tuple[EnumEntry, ...]] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.enums

    def __len__(self) -> int:
        return len(self.enums)

    def __iter__(self):
        return iter(self.enums.items())

    def insert(self, name: Atom, entries: Tuple[EnumEntry, ...]) -> None:
        self.enums[name] = entries

    def get(self, name: Atom) -> Optional[Tuple[EnumEntry, ...]]:
        return self.enums.get(name)

    def names(self) -> Tuple[Atom, ...]:
        return tuple(self.enums)

    def entry_count(self) -> int:
        return sum(len(entries) for entries in self.enums.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            name.name: [entry.to_dict() for entry in entries]
            for name, entries in self.enums.items()
        }
