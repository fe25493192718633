"""
evaluator.py - Interpretador das funcoes sintetizadas

Proposito:
    Executar as FunctionForm geradas pela transformacao sem um runtime
    Erlang: casamento de clausulas em ordem (a primeira vence), chamadas
    locais e throw/1. Permite conferir que to_int, to_atom, keys e values
    fazem o que a tabela de enums declara.

Componentes principais:
    - EnumModule: conjunto de funcoes chamaveis por nome/aridade
    - EvaluationError, ErlangThrow, BadEnum: erros de execucao
    - FunctionClauseError, UndefinedFunctionError: chamadas sem clausula/funcao

Dependencias criticas:
    - eenum.ast.nodes: clausulas e expressoes

Exemplo de uso:
    module = EnumModule(result.generated)
    module.to_int("colors", "green")  # -> 1

Notas de implementacao:
    - Guardas nao sao suportadas; as funcoes sintetizadas nao tem guardas.
    - Variaveis '_' casam com qualquer valor e nunca sao ligadas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from eenum.ast.nodes import (
    Atom,
    AtomLiteral,
    Call,
    Clause,
    Cons,
    Expression,
    Form,
    FunctionForm,
    IntegerLiteral,
    Nil,
    Var,
    is_integer,
)
from eenum.semantic.synthesizer import BAD_ENUM, KEYS, TO_ATOM, TO_INT, VALUES

THROW = Atom("throw")


class EvaluationError(Exception):
    """Falha ao executar uma funcao sintetizada."""


@dataclass
class ErlangThrow(EvaluationError):
    value: Any

    def __str__(self) -> str:
        return f"throw({self.value!r})"


class BadEnum(ErlangThrow):
    """throw(bad_enum): enum, chave ou codigo desconhecido."""

    def __init__(self) -> None:
        super().__init__(BAD_ENUM)


@dataclass
class FunctionClauseError(EvaluationError):
    name: Atom
    arguments: Tuple[Any, ...]

    def __str__(self) -> str:
        return f"nenhuma clausula de {self.name}/{len(self.arguments)} casa com {self.arguments!r}"


@dataclass
class UndefinedFunctionError(EvaluationError):
    name: Atom
    arity: int

    def __str__(self) -> str:
        return f"funcao indefinida {self.name}/{self.arity}"


def _as_atom(value: Any) -> Any:
    return Atom(value) if isinstance(value, str) else value


class EnumModule:
    """Modulo executavel formado pelas funcoes de uma unidade."""

    def __init__(self, forms: Iterable[Form]):
        self.functions: Dict[Tuple[Atom, int], FunctionForm] = {
            (form.name, form.arity): form
            for form in forms
            if isinstance(form, FunctionForm)
        }

    def call(self, name: Atom | str, *args: Any) -> Any:
        key = (_as_atom(name), len(args))
        function = self.functions.get(key)
        if function is None:
            if key == (THROW, 1):
                self._throw(args[0])
            raise UndefinedFunctionError(key[0], key[1])

        for clause in function.clauses:
            bindings = self._match_clause(clause, args)
            if bindings is not None:
                return self._eval_body(clause, bindings)
        raise FunctionClauseError(function.name, tuple(args))

    # Atalhos para as funcoes de acesso geradas

    def to_int(self, enum: Atom | str, key: Atom | str) -> int:
        return self.call(TO_INT, _as_atom(enum), _as_atom(key))

    def to_atom(self, enum: Atom | str, code: int) -> Atom:
        return self.call(TO_ATOM, _as_atom(enum), code)

    def keys(self, enum: Atom | str) -> List[Atom]:
        return self.call(KEYS, _as_atom(enum))

    def values(self, enum: Atom | str) -> List[int]:
        return self.call(VALUES, _as_atom(enum))

    # =========================================================================
    # Casamento e avaliacao
    # =========================================================================

    def _match_clause(self, clause: Clause, args: Tuple[Any, ...]) -> Optional[Dict[str, Any]]:
        if len(clause.patterns) != len(args):
            return None
        if clause.guards:
            raise EvaluationError("Guardas nao sao suportadas pelo interpretador")
        bindings: Dict[str, Any] = {}
        for pattern, value in zip(clause.patterns, args):
            if not self._match(pattern, value, bindings):
                return None
        return bindings

    def _match(self, pattern: Expression, value: Any, bindings: Dict[str, Any]) -> bool:
        match pattern:
            case AtomLiteral(value=atom):
                return value == atom
            case IntegerLiteral(value=integer):
                return is_integer(value) and value == integer
            case Var(name="_"):
                return True
            case Var(name=name):
                if name in bindings:
                    return bindings[name] == value
                bindings[name] = value
                return True
            case Nil():
                return value == []
            case Cons(head=head, tail=tail):
                if not isinstance(value, list) or not value:
                    return False
                return self._match(head, value[0], bindings) and self._match(
                    tail, value[1:], bindings
                )
        raise EvaluationError(f"Padrao nao suportado: {pattern!r}")

    def _eval_body(self, clause: Clause, bindings: Dict[str, Any]) -> Any:
        result: Any = None
        for expr in clause.body:
            result = self._eval(expr, bindings)
        return result

    def _eval(self, expr: Expression, bindings: Dict[str, Any]) -> Any:
        match expr:
            case AtomLiteral(value=atom):
                return atom
            case IntegerLiteral(value=integer):
                return integer
            case Var(name=name):
                if name not in bindings:
                    raise EvaluationError(f"Variavel nao ligada: {name}")
                return bindings[name]
            case Nil():
                return []
            case Cons(head=head, tail=tail):
                tail_value = self._eval(tail, bindings)
                if not isinstance(tail_value, list):
                    raise EvaluationError("Listas improprias nao sao suportadas")
                return [self._eval(head, bindings)] + tail_value
            case Call(function=function, args=args):
                name = self._eval(function, bindings)
                if not isinstance(name, Atom):
                    raise EvaluationError(f"Nome de funcao invalido: {name!r}")
                return self.call(name, *(self._eval(a, bindings) for a in args))
        raise EvaluationError(f"Expressao nao suportada: {expr!r}")

    def _throw(self, value: Any) -> None:
        if value == BAD_ENUM:
            raise BadEnum()
        raise ErlangThrow(value)
