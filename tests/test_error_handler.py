"""
test_error_handler.py - Testes para mensagens pedagogicas de erro

Valida que o FormsErrorHandler detecta enganos comuns ao escrever
termos Erlang e gera mensagens que apontam o trecho problematico.
"""

import pytest

from eenum.error_handler import FormsErrorHandler, create_pedagogical_error
from eenum.parser.lexer import FormsSyntaxError, parse_string


def _message(source: str, filename: str = "test.forms") -> str:
    with pytest.raises(FormsSyntaxError) as excinfo:
        parse_string(source, filename)
    return excinfo.value.message


class TestPedagogicalErrors:
    """Mensagens geradas a partir de erros reais do parser."""

    def test_valid_unit_has_no_error(self):
        parse_string("{attribute,1,module,m}.\n{eof,2}.\n", "ok.forms")

    def test_missing_terminator_between_forms(self):
        msg = _message("{attribute,1,module,m}\n{eof,2}.\n")
        assert "Cada forma deve terminar com '.'" in msg
        assert "test.forms:2:1" in msg
        assert "falta '.' antes daqui" in msg

    def test_missing_terminator_at_end_of_file(self):
        msg = _message("{attribute,1,module,m}.\n{eof,2}")
        assert "Cada forma deve terminar com '.'" in msg

    def test_unexpected_token_lists_expected(self):
        msg = _message("{attribute,1,module,m.\n")
        assert "Token inesperado '.'" in msg
        assert "Esperado:" in msg
        assert "','" in msg
        assert "'}'" in msg

    def test_unexpected_token_shows_context(self):
        msg = _message("{attribute,1,module,m}.\n{eof,,2}.\n{x}.\n")
        assert "Contexto:" in msg
        assert ">>> {eof,,2}." in msg

    def test_uppercase_atom_hint(self):
        msg = _message("{attribute,1,module,Colors}.\n")
        assert "Caractere inesperado 'C'" in msg
        assert "precisam de aspas simples" in msg
        assert "^ aqui" in msg

    def test_unclosed_quote_hint(self):
        msg = _message("{attribute,1,module,'colors}.\n")
        assert "Aspas abertas mas nao fechadas" in msg

    def test_other_character(self):
        msg = _message("{a,#}.\n")
        assert "Caractere inesperado '#'" in msg
        assert "precisam de aspas simples" not in msg


def test_friendly_names_cover_punctuation():
    handler = FormsErrorHandler()
    assert handler._humanize_expected_tokens(["DOT", "RBRACE", "UNKNOWN"]) == ["'.'", "'}'", "UNKNOWN"]


def test_factory_falls_back_for_other_exceptions():
    msg = create_pedagogical_error(ValueError("boom"), "", "x.forms")
    assert msg == "erro: x.forms: boom"
