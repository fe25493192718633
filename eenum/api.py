"""
api.py - API publica para transformacao em memoria

Proposito:
    Expor funcoes para ler uma unidade escrita como termos Erlang e
    aplicar a transformacao de enums em uma unica chamada, a partir de
    uma string ou de um arquivo.

Componentes principais:
    - transform_string(): le e transforma conteudo em memoria
    - transform_file(): le e transforma um arquivo
    - load_module(): transforma e devolve o EnumModule executavel

Dependencias criticas:
    - eenum.parser.transformer: read_forms
    - eenum.compiler: parse_transform

Exemplo de uso:
    import eenum
    result = eenum.transform_string(text, "colors.forms")
    print(eenum.render_forms(result.forms))
"""

from __future__ import annotations

from pathlib import Path

from eenum.compiler import TransformResult, parse_transform
from eenum.parser.transformer import read_forms
from eenum.semantic.evaluator import EnumModule


def transform_string(content: str, filename: str = "<string>") -> TransformResult:
    """
    Le a unidade contida em content e aplica a transformacao.

    Raises:
        FormsSyntaxError: texto nao e uma sequencia de termos valida
        MalformedUnitError: unidade sem file/module/eof
    """
    return parse_transform(read_forms(content, filename))


def transform_file(path: Path | str) -> TransformResult:
    file_path = Path(path)
    return transform_string(file_path.read_text(encoding="utf-8"), str(file_path))


def load_module(content: str, filename: str = "<string>") -> EnumModule:
    """Transforma a unidade e devolve suas funcoes (escritas e geradas) prontas para chamar."""
    result = transform_string(content, filename)
    return EnumModule(result.forms or [])
