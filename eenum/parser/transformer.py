"""
transformer.py - Conversao de parse tree para termos e formas abstratas

Proposito:
    Transformar a arvore concreta do Lark em termos Python (Atom, int, str,
    tuple, list) e depois em nos tipados de forma (AttributeForm, EofForm,
    FunctionForm, RawForm).

Componentes principais:
    - TermTransformer: Transformer do Lark que produz termos
    - FormReader: converte termos de topo em formas da AST
    - read_terms/read_forms/read_forms_file: atalhos de leitura

Dependencias criticas:
    - lark: Transformer, Token e metadados de parsing
    - eenum.ast.nodes: definicoes dos nos da AST

Exemplo de uso:
    from eenum.parser.transformer import read_forms
    forms = read_forms(open("colors.forms").read(), "colors.forms")

Notas de implementacao:
    - Funcoes cujo corpo ou guarda sai do conjunto fechado de expressoes
      viram RawForm.
    - Strings Erlang sao str; listas impropria nao sao aceitas.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List

from lark import Token, Transformer, v_args
from lark.exceptions import VisitError

from eenum.ast.nodes import (
    Atom,
    AtomLiteral,
    AttributeForm,
    Call,
    Clause,
    Cons,
    EofForm,
    Expression,
    Form,
    FunctionForm,
    IntegerLiteral,
    Nil,
    RawForm,
    SourceLocation,
    Var,
    is_atom,
    is_integer,
    position_from_term,
)
from eenum.parser.lexer import FormsSyntaxError, parse_string

_SIMPLE_ESCAPES = {
    "b": "\b",
    "d": "\x7f",
    "e": "\x1b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "s": " ",
    "t": "\t",
    "v": "\v",
}

_ESCAPE = re.compile(
    r"\\(?:\^(?P<ctrl>.)|x\{(?P<hexlong>[0-9A-Fa-f]+)\}|x(?P<hex>[0-9A-Fa-f]{2})"
    r"|(?P<oct>[0-7]{1,3})|(?P<char>.))",
    re.DOTALL,
)


def _unescape(text: str) -> str:
    def replace(match: re.Match) -> str:
        if match.group("ctrl") is not None:
            return chr(ord(match.group("ctrl")) & 0x1F)
        if match.group("hexlong") is not None:
            return chr(int(match.group("hexlong"), 16))
        if match.group("hex") is not None:
            return chr(int(match.group("hex"), 16))
        if match.group("oct") is not None:
            return chr(int(match.group("oct"), 8))
        char = match.group("char")
        return _SIMPLE_ESCAPES.get(char, char)

    return _ESCAPE.sub(replace, text)


@dataclass
class _Tail:
    term: Any


class TermTransformer(Transformer):
    def __init__(self, filename: str | Path):
        super().__init__()
        self.file_path = Path(filename)

    def start(self, items: List[Any]) -> List[Any]:
        return list(items)

    def form(self, items: List[Any]) -> Any:
        return items[0]

    def atom(self, items: List[Token]) -> Atom:
        return Atom(items[0].value)

    @v_args(meta=True)
    def quoted_atom(self, meta: Any, items: List[Token]) -> Atom:
        return Atom(self._unescape(meta, items[0].value[1:-1]))

    def integer(self, items: List[Token]) -> int:
        return int(items[0].value)

    @v_args(meta=True)
    def based_integer(self, meta: Any, items: List[Token]) -> int:
        text = items[0].value
        sign = -1 if text.startswith("-") else 1
        base_text, digits = text.lstrip("-").split("#", 1)
        base = int(base_text)
        if not 2 <= base <= 36:
            raise self._error(meta, f"Base {base} fora do intervalo 2..36 em {text}")
        try:
            return sign * int(digits, base)
        except ValueError as exc:
            raise self._error(meta, f"Digitos invalidos para a base {base} em {text}") from exc

    def float(self, items: List[Token]) -> float:
        return float(items[0].value)

    @v_args(meta=True)
    def char(self, meta: Any, items: List[Token]) -> int:
        return ord(self._unescape(meta, items[0].value[1:]))

    @v_args(meta=True)
    def string(self, meta: Any, items: List[Token]) -> str:
        return "".join(self._unescape(meta, token.value[1:-1]) for token in items)

    def tuple(self, items: List[Any]) -> tuple:
        return tuple(items)

    def nil(self, items: List[Any]) -> list:
        return []

    def tail(self, items: List[Any]) -> _Tail:
        return _Tail(items[0])

    @v_args(meta=True)
    def list(self, meta: Any, items: List[Any]) -> list:
        if items and isinstance(items[-1], _Tail):
            tail = items[-1].term
            if not isinstance(tail, list):
                raise self._error(meta, "Listas improprias nao sao suportadas")
            return items[:-1] + tail
        return items

    def _unescape(self, meta: Any, text: str) -> str:
        try:
            return _unescape(text)
        except (ValueError, OverflowError) as exc:
            raise self._error(meta, "Escape de caractere fora do intervalo Unicode") from exc

    def _error(self, meta: Any, message: str) -> FormsSyntaxError:
        location = SourceLocation(file=self.file_path, line=meta.line, column=meta.column)
        return FormsSyntaxError(message=f"erro: {location}: {message}", location=location)


class _UnsupportedTerm(ValueError):
    pass


class FormReader:
    """Converte termos de topo nas formas conhecidas pela transformacao."""

    def read(self, terms: List[Any]) -> List[Form]:
        return [self.read_form(term) for term in terms]

    def read_form(self, term: Any) -> Form:
        try:
            return self._read_form(term)
        except _UnsupportedTerm:
            return RawForm(term)

    def _read_form(self, term: Any) -> Form:
        if not isinstance(term, tuple) or not term or not is_atom(term[0]):
            raise _UnsupportedTerm(term)
        match term[0].name, len(term):
            case "attribute", 4 if is_atom(term[2]):
                return AttributeForm(self._position(term[1]), term[2], term[3])
            case "eof", 2:
                return EofForm(self._position(term[1]))
            case "function", 5 if is_atom(term[2]) and is_integer(term[3]):
                clauses = tuple(self._clause(c) for c in self._list(term[4]))
                return FunctionForm(self._position(term[1]), term[2], term[3], clauses)
        raise _UnsupportedTerm(term)

    def _clause(self, term: Any) -> Clause:
        if not (isinstance(term, tuple) and len(term) == 5 and term[0] == Atom("clause")):
            raise _UnsupportedTerm(term)
        _, pos, patterns, guards, body = term
        return Clause(
            position=self._position(pos),
            patterns=tuple(self._expression(p) for p in self._list(patterns)),
            guards=tuple(self._guard(g) for g in self._list(guards)),
            body=tuple(self._expression(b) for b in self._list(body)),
        )

    def _expression(self, term: Any) -> Expression:
        if not isinstance(term, tuple) or len(term) < 2 or not is_atom(term[0]):
            raise _UnsupportedTerm(term)
        match term[0].name, len(term):
            case "atom", 3 if is_atom(term[2]):
                return AtomLiteral(self._position(term[1]), term[2])
            case "integer", 3 if is_integer(term[2]):
                return IntegerLiteral(self._position(term[1]), term[2])
            case "var", 3 if is_atom(term[2]):
                return Var(self._position(term[1]), term[2].name)
            case "nil", 2:
                return Nil(self._position(term[1]))
            case "cons", 4:
                return Cons(
                    self._position(term[1]),
                    self._expression(term[2]),
                    self._expression(term[3]),
                )
            case "call", 4:
                return Call(
                    self._position(term[1]),
                    self._expression(term[2]),
                    tuple(self._expression(a) for a in self._list(term[3])),
                )
        raise _UnsupportedTerm(term)

    def _guard(self, term: Any) -> tuple:
        """Uma guarda e uma lista de testes unidos por ','."""
        return tuple(self._expression(test) for test in self._list(term))

    def _list(self, term: Any) -> list:
        if not isinstance(term, list):
            raise _UnsupportedTerm(term)
        return term

    def _position(self, term: Any):
        try:
            return position_from_term(term)
        except ValueError as exc:
            raise _UnsupportedTerm(term) from exc


def read_terms(content: str, filename: str = "<string>") -> List[Any]:
    """Le todos os termos (um por forma) de um texto."""
    tree = parse_string(content, filename)
    try:
        return TermTransformer(filename).transform(tree)
    except VisitError as exc:
        if isinstance(exc.orig_exc, FormsSyntaxError):
            raise exc.orig_exc from exc
        raise


def read_forms(content: str, filename: str = "<string>") -> List[Form]:
    """Le uma unidade de compilacao escrita como termos Erlang."""
    return FormReader().read(read_terms(content, filename))


def read_forms_file(path: Path | str) -> List[Form]:
    file_path = Path(path)
    return read_forms(file_path.read_text(encoding="utf-8"), str(file_path))
