"""
lexer.py - Carregamento e execucao do parser Lark de termos Erlang

Proposito:
    Ler a gramatica de formas e expor funcoes de parsing para arquivos e strings.
    Centraliza a criacao do parser LALR usado pelo leitor de unidades.

Componentes principais:
    - load_grammar: leitura do arquivo forms.lark do pacote
    - create_parser: construcao do parser Lark
    - parse_file/parse_string: parsing com tratamento de erros

Dependencias criticas:
    - lark: parser LALR e excecoes de sintaxe
    - importlib.resources: acesso a dados do pacote

Exemplo de uso:
    from eenum.parser.lexer import parse_file
    tree = parse_file("colors.forms")

Notas de implementacao:
    - Parser e gramatica ficam em cache (imutaveis, seguros entre invocacoes).
    - Erros de sintaxe geram FormsSyntaxError com SourceLocation.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Optional

from lark import Lark, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken

from eenum.ast.nodes import SourceLocation
from eenum.error_handler import create_pedagogical_error


@dataclass
class FormsSyntaxError(Exception):
    """
    Erro de sintaxe com localizacao precisa.

    Attributes:
        message: descricao do erro (ja formatada para o usuario)
        location: localizacao no arquivo fonte
        expected: lista de tokens esperados (quando disponivel)
    """

    message: str
    location: SourceLocation
    expected: Optional[list[str]] = None

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


@lru_cache(maxsize=1)
def load_grammar() -> str:
    """Carrega o arquivo forms.lark a partir do pacote eenum.grammar."""
    grammar_path = resources.files("eenum.grammar").joinpath("forms.lark")
    return grammar_path.read_text(encoding="utf-8")


@lru_cache(maxsize=1)
def create_parser() -> Lark:
    """Cria o parser LALR de termos."""
    grammar_text = load_grammar()
    return Lark(
        grammar_text,
        parser="lalr",
        lexer="contextual",
        maybe_placeholders=False,
        propagate_positions=True,
    )


def parse_string(content: str, filename: str) -> Tree:
    """Parseia uma sequencia de formas a partir de uma string."""
    parser = create_parser()
    try:
        return parser.parse(content)
    except UnexpectedToken as exc:
        pedagogical_msg = create_pedagogical_error(exc, content, filename)
        location = SourceLocation(file=Path(filename), line=exc.line, column=exc.column)
        expected = sorted(exc.expected) if exc.expected else None
        raise FormsSyntaxError(
            message=pedagogical_msg,
            location=location,
            expected=expected,
        ) from exc
    except UnexpectedCharacters as exc:
        pedagogical_msg = create_pedagogical_error(exc, content, filename)
        location = SourceLocation(file=Path(filename), line=exc.line, column=exc.column)
        raise FormsSyntaxError(
            message=pedagogical_msg,
            location=location,
        ) from exc
    except UnexpectedEOF as exc:
        pedagogical_msg = create_pedagogical_error(exc, content, filename)
        location = SourceLocation(file=Path(filename), line=content.count("\n") + 1, column=1)
        raise FormsSyntaxError(
            message=pedagogical_msg,
            location=location,
        ) from exc


def parse_file(path: Path | str) -> Tree:
    """Parseia uma sequencia de formas a partir de um arquivo."""
    file_path = Path(path)
    content = file_path.read_text(encoding="utf-8")
    return parse_string(content, str(file_path))
