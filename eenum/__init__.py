"""
eenum: Parse transform de enums para formas abstratas Erlang

Le atributos -enum({Nome, [Entradas]}) de uma unidade de compilacao e gera
funcoes de acesso entre atomos e codigos inteiros: to_int/2, to_atom/2,
keys/1, values/1 e as funcoes dedicadas <enum>_to_int/1 e <enum>_to_atom/1.

API em memoria (eenum.transform_string):
    >>> import eenum
    >>> result = eenum.transform_string(text, "colors.forms")
    >>> if result.success:
    ...     print(eenum.render_forms(result.forms))

Transformacao direta (eenum.parse_transform):
    >>> forms = eenum.read_forms(text, "colors.forms")
    >>> result = eenum.parse_transform(forms)
    >>> eenum.EnumModule(result.generated).to_int("colors", "green")
    1
"""

__version__ = "0.3.0"

# API em memoria
from eenum.api import (
    load_module,
    transform_file,
    transform_string,
)

# Transformacao
from eenum.compiler import (
    MalformedUnitError,
    TransformOutcome,
    TransformResult,
    TransformStats,
    parse_transform,
)

# AST
from eenum.ast.nodes import (
    Atom,
    AttributeForm,
    EnumEntry,
    EnumTable,
    EofForm,
    FunctionForm,
    LineColumnPosition,
    LinePosition,
    PositionStyle,
    RawForm,
)

# Diagnosticos
from eenum.ast.results import (
    DiagnosticCollector,
    DuplicateEnum,
    InvalidEnum,
    InvalidEnumDeclaration,
    format_error,
)

# Leitura, escrita e execucao
from eenum.parser.lexer import FormsSyntaxError
from eenum.parser.transformer import read_forms, read_forms_file
from eenum.printer import render_forms, render_source
from eenum.semantic.evaluator import BadEnum, EnumModule

__all__ = [
    # API em memoria
    "load_module",
    "transform_file",
    "transform_string",
    # Transformacao
    "MalformedUnitError",
    "TransformOutcome",
    "TransformResult",
    "TransformStats",
    "parse_transform",
    # AST
    "Atom",
    "AttributeForm",
    "EnumEntry",
    "EnumTable",
    "EofForm",
    "FunctionForm",
    "LineColumnPosition",
    "LinePosition",
    "PositionStyle",
    "RawForm",
    # Diagnosticos
    "DiagnosticCollector",
    "DuplicateEnum",
    "InvalidEnum",
    "InvalidEnumDeclaration",
    "format_error",
    # Leitura, escrita e execucao
    "FormsSyntaxError",
    "read_forms",
    "read_forms_file",
    "render_forms",
    "render_source",
    "BadEnum",
    "EnumModule",
]
