"""
printer.py - Escrita de formas como termos Erlang e como codigo fonte

Proposito:
    Converter formas da AST de volta para termos e imprimi-los no mesmo
    formato aceito pelo leitor (um termo por forma, terminado por '.').
    Renderizar as funcoes sintetizadas como codigo Erlang legivel.

Componentes principais:
    - form_to_term/expression_to_term: nos -> termos Python
    - format_term: termos -> texto
    - render_forms: unidade completa em texto de termos
    - render_source: funcoes em sintaxe Erlang

Dependencias criticas:
    - eenum.ast.nodes: nos e termos

Exemplo de uso:
    from eenum.printer import render_forms
    text = render_forms(result.forms)

Notas de implementacao:
    - render_forms seguido de read_forms devolve formas iguais.
    - Guardas saem como "when G1, G2; G3"; funcoes lidas como RawForm viram
      um comentario com nome e aridade.
    - Strings sao impressas com escapes; listas de inteiros continuam listas.
"""

from __future__ import annotations

from typing import Any, Iterable, List

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
    Var,
)

_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
    "\x1b": "\\e",
    "\x7f": "\\d",
}


# =============================================================================
# Nos -> termos
# =============================================================================


def expression_to_term(expr: Expression) -> tuple:
    match expr:
        case AtomLiteral(position=pos, value=value):
            return (Atom("atom"), pos.to_term(), value)
        case IntegerLiteral(position=pos, value=value):
            return (Atom("integer"), pos.to_term(), value)
        case Var(position=pos, name=name):
            return (Atom("var"), pos.to_term(), Atom(name))
        case Nil(position=pos):
            return (Atom("nil"), pos.to_term())
        case Cons(position=pos, head=head, tail=tail):
            return (Atom("cons"), pos.to_term(), expression_to_term(head), expression_to_term(tail))
        case Call(position=pos, function=function, args=args):
            return (
                Atom("call"),
                pos.to_term(),
                expression_to_term(function),
                [expression_to_term(a) for a in args],
            )
    raise TypeError(f"Expressao desconhecida: {expr!r}")


def clause_to_term(clause: Clause) -> tuple:
    return (
        Atom("clause"),
        clause.position.to_term(),
        [expression_to_term(p) for p in clause.patterns],
        [[expression_to_term(test) for test in guard] for guard in clause.guards],
        [expression_to_term(b) for b in clause.body],
    )


def form_to_term(form: Form) -> Any:
    match form:
        case AttributeForm(position=pos, name=name, value=value):
            return (Atom("attribute"), pos.to_term(), name, value)
        case FunctionForm(position=pos, name=name, arity=arity, clauses=clauses):
            return (
                Atom("function"),
                pos.to_term(),
                name,
                arity,
                [clause_to_term(c) for c in clauses],
            )
        case EofForm(position=pos):
            return (Atom("eof"), pos.to_term())
        case RawForm(term=term):
            return term
    raise TypeError(f"Forma desconhecida: {form!r}")


# =============================================================================
# Termos -> texto
# =============================================================================


def format_string(value: str) -> str:
    out = []
    for char in value:
        if char in _STRING_ESCAPES:
            out.append(_STRING_ESCAPES[char])
        elif ord(char) < 0x20:
            out.append(f"\\x{{{ord(char):X}}}")
        else:
            out.append(char)
    return '"' + "".join(out) + '"'


def format_float(value: float) -> str:
    text = repr(value)
    mantissa, sep, exponent = text.partition("e")
    if "." not in mantissa:
        mantissa += ".0"
    return mantissa + sep + exponent


def format_term(term: Any) -> str:
    if isinstance(term, Atom):
        return term.quoted()
    if isinstance(term, bool):
        return "true" if term else "false"
    if isinstance(term, int):
        return str(term)
    if isinstance(term, float):
        return format_float(term)
    if isinstance(term, str):
        return format_string(term)
    if isinstance(term, tuple):
        return "{" + ",".join(format_term(t) for t in term) + "}"
    if isinstance(term, list):
        return "[" + ",".join(format_term(t) for t in term) + "]"
    raise TypeError(f"Termo nao representavel: {term!r}")


def render_forms(forms: Iterable[Form]) -> str:
    """Imprime a unidade no formato lido por eenum.parser.transformer.read_forms."""
    return "".join(f"{format_term(form_to_term(form))}.\n" for form in forms)


# =============================================================================
# Codigo fonte Erlang
# =============================================================================


def expression_to_source(expr: Expression) -> str:
    match expr:
        case AtomLiteral(value=value):
            return value.quoted()
        case IntegerLiteral(value=value):
            return str(value)
        case Var(name=name):
            return name
        case Nil():
            return "[]"
        case Cons():
            return _list_to_source(expr)
        case Call(function=function, args=args):
            return f"{expression_to_source(function)}({', '.join(expression_to_source(a) for a in args)})"
    raise TypeError(f"Expressao desconhecida: {expr!r}")


def _list_to_source(expr: Expression) -> str:
    elements: List[str] = []
    while isinstance(expr, Cons):
        elements.append(expression_to_source(expr.head))
        expr = expr.tail
    if isinstance(expr, Nil):
        return "[" + ", ".join(elements) + "]"
    return "[" + ", ".join(elements) + " | " + expression_to_source(expr) + "]"


def function_to_source(function: FunctionForm) -> str:
    name = function.name.quoted()
    lines = []
    for index, clause in enumerate(function.clauses):
        patterns = ", ".join(expression_to_source(p) for p in clause.patterns)
        body = ", ".join(expression_to_source(b) for b in clause.body)
        end = "." if index == len(function.clauses) - 1 else ";"
        lines.append(f"{name}({patterns}){guards_to_source(clause.guards)} ->\n    {body}{end}")
    return "\n".join(lines)


def guards_to_source(guards: Iterable[Iterable[Expression]]) -> str:
    """Sequencia de guardas: testes unidos por ',' e guardas por ';'."""
    alternatives = [", ".join(expression_to_source(test) for test in guard) for guard in guards]
    if not alternatives:
        return ""
    return " when " + "; ".join(alternatives)


def render_source(forms: Iterable[Form]) -> str:
    """Renderiza as funcoes (e o -export) da unidade como codigo Erlang."""
    chunks: List[str] = []
    for form in forms:
        match form:
            case FunctionForm():
                chunks.append(function_to_source(form))
            case RawForm(term=(Atom(name="function"), _, Atom() as name, int() as arity, *_)):
                # corpo fora do conjunto de expressoes suportado
                chunks.append(f"%% {name.quoted()}/{arity}: corpo nao representavel")
            case AttributeForm(name=Atom(name="export"), value=exports):
                names = ", ".join(f"{n.quoted()}/{a}" for n, a in exports)
                chunks.append(f"-export([{names}]).")
    return "\n\n".join(chunks) + ("\n" if chunks else "")
