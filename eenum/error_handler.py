"""
error_handler.py - Mensagens de erro pedagogicas para o leitor de formas

Proposito:
    Transformar erros brutos do Lark em mensagens que apontam o trecho
    problematico de um arquivo de formas abstratas e sugerem a correcao.
    Detecta os enganos mais comuns ao escrever termos Erlang a mao.

Componentes principais:
    - FormsErrorHandler: detector de padroes e formatador de erros
    - create_pedagogical_error: fabrica usada pelo lexer

Dependencias criticas:
    - lark.exceptions: UnexpectedToken, UnexpectedCharacters, UnexpectedEOF
    - eenum.ast.nodes: SourceLocation

Exemplo de uso:
    from eenum.error_handler import FormsErrorHandler
    handler = FormsErrorHandler()
    message = handler.handle_unexpected_token(exc, source, "colors.forms")

Notas de implementacao:
    - Nao tenta corrigir; apenas sugere.
    - Mostra uma linha de contexto antes e depois do erro.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken

from eenum.ast.nodes import SourceLocation


class FormsErrorHandler:
    """
    Gerador de mensagens de erro pedagogicas.

    Example:
        handler = FormsErrorHandler()
        try:
            tree = parser.parse(content)
        except UnexpectedToken as e:
            print(handler.handle_unexpected_token(e, content))
    """

    friendly_names = {
        "ATOM": "atomo",
        "QUOTED_ATOM": "atomo entre aspas simples",
        "INT": "inteiro",
        "BASED_INT": "inteiro com base",
        "FLOAT": "float",
        "CHAR": "caractere $c",
        "STRING": "texto entre aspas",
        "DOT": "'.'",
        "COMMA": "','",
        "VBAR": "'|'",
        "LBRACE": "'{'",
        "RBRACE": "'}'",
        "LSQB": "'['",
        "RSQB": "']'",
        "$END": "fim do arquivo",
    }

    def handle_unexpected_token(
        self,
        error: UnexpectedToken,
        source: str,
        filename: str | Path = "<unknown>",
    ) -> str:
        location = SourceLocation(
            file=Path(filename),
            line=error.line,
            column=error.column,
        )
        context_lines = self._get_context_lines(source, error.line)
        current_line = self._get_line(source, error.line)

        if self._is_missing_terminator(error):
            return self._format_missing_terminator(location, current_line, error.column)

        token_repr = repr(str(error.token)) if error.token else "<EOF>"
        msg = f"erro: {location}: Token inesperado {token_repr}\n"
        msg += self._format_context(context_lines, error.line)

        if error.expected:
            expected_friendly = self._humanize_expected_tokens(sorted(error.expected))
            msg += f"\nEsperado: {', '.join(expected_friendly[:5])}"
            if len(expected_friendly) > 5:
                msg += f" (e {len(expected_friendly) - 5} outros)"

        return msg.rstrip()

    def handle_unexpected_characters(
        self,
        error: UnexpectedCharacters,
        source: str,
        filename: str | Path = "<unknown>",
    ) -> str:
        location = SourceLocation(
            file=Path(filename),
            line=error.line,
            column=error.column,
        )
        current_line = self._get_line(source, error.line)
        char_repr = repr(error.char) if hasattr(error, "char") else "<unknown>"

        msg = f"erro: {location}: Caractere inesperado {char_repr}\n"
        msg += f"    {current_line}\n"
        msg += f"    {' ' * (max(error.column, 1) - 1)}^ aqui\n"

        msg += "\nVerifique:\n"
        if error.char in {'"', "'"}:
            msg += "  - Aspas abertas mas nao fechadas\n"
        if error.char.isupper() or error.char == "_":
            msg += "  - Atomos iniciados em maiuscula precisam de aspas simples: 'Nome'\n"
        msg += "  - Caracteres fora da sintaxe de termos Erlang\n"

        return msg.rstrip()

    def handle_unexpected_eof(
        self,
        error: UnexpectedEOF,
        source: str,
        filename: str | Path = "<unknown>",
    ) -> str:
        lines = source.splitlines() or [""]
        location = SourceLocation(file=Path(filename), line=len(lines), column=len(lines[-1]) + 1)
        return (
            f"erro: {location}: Fim de arquivo inesperado\n"
            f"    {lines[-1]}\n\n"
            "Verifique se todos os '{', '[' e aspas foram fechados."
        )

    # =========================================================================
    # DETECTORES DE PADROES
    # =========================================================================

    def _is_missing_terminator(self, error: UnexpectedToken) -> bool:
        """Forma completa seguida de outra forma sem o '.' entre elas."""
        expected = set(error.expected or ())
        return "DOT" in expected and getattr(error.token, "type", "") in {"LBRACE", "$END"}

    # =========================================================================
    # FORMATADORES
    # =========================================================================

    def _format_missing_terminator(
        self,
        location: SourceLocation,
        line: str,
        column: int,
    ) -> str:
        marker = " " * (max(column, 1) - 1) + "^"
        return (
            f"erro: {location}: Cada forma deve terminar com '.'\n"
            f"    {line}\n"
            f"    {marker} falta '.' antes daqui\n\n"
            "Exemplo:\n"
            "    {attribute,1,module,colors}.\n"
            "    {eof,2}."
        )

    def _format_context(self, context_lines: List[str], line_number: int) -> str:
        if len(context_lines) < 2:
            return "".join(f"    {line}\n" for line in context_lines)
        msg = "\nContexto:\n"
        first = max(1, line_number - 1)
        for offset, ctx_line in enumerate(context_lines):
            prefix = ">>>" if first + offset == line_number else "   "
            msg += f"{prefix} {ctx_line}\n"
        return msg

    # =========================================================================
    # UTILITARIOS
    # =========================================================================

    def _get_line(self, source: str, line_number: int) -> str:
        lines = source.splitlines()
        if 1 <= line_number <= len(lines):
            return lines[line_number - 1]
        return ""

    def _get_context_lines(
        self,
        source: str,
        line_number: int,
        context: int = 1,
    ) -> List[str]:
        lines = source.splitlines()
        idx = line_number - 1
        start = max(0, idx - context)
        end = min(len(lines), idx + context + 1)
        return lines[start:end]

    def _humanize_expected_tokens(self, expected: List[str]) -> List[str]:
        return [self.friendly_names.get(token, token) for token in expected]


def create_pedagogical_error(
    exc: Exception,
    source: str,
    filename: str | Path = "<unknown>",
) -> str:
    """
    Factory function para criar mensagens pedagogicas a partir de excecoes.

    Args:
        exc: Excecao do Lark (UnexpectedToken, UnexpectedCharacters ou UnexpectedEOF)
        source: Conteudo completo do arquivo
        filename: Nome do arquivo

    Returns:
        Mensagem de erro formatada
    """
    handler = FormsErrorHandler()

    if isinstance(exc, UnexpectedToken):
        return handler.handle_unexpected_token(exc, source, filename)
    elif isinstance(exc, UnexpectedCharacters):
        return handler.handle_unexpected_characters(exc, source, filename)
    elif isinstance(exc, UnexpectedEOF):
        return handler.handle_unexpected_eof(exc, source, filename)
    else:
        return f"erro: {filename}: {str(exc)}"
