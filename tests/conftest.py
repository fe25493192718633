"""
conftest.py - Fixtures compartilhadas para testes do eenum

Proposito:
    Fornecer fixtures comuns para leitura, transformacao e execucao.

Componentes principais:
    - paths para fixtures
    - make_unit: monta unidades de formas sem passar pelo leitor

Dependencias criticas:
    - pytest: gerenciamento de fixtures
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, List

import pytest

from eenum.ast.nodes import Atom, AttributeForm, EofForm, Form, PositionStyle


def build_unit(
    *payloads: Any,
    style: PositionStyle = PositionStyle.LINE,
    filename: str = "unit.erl",
    eof_line: int | None = None,
) -> List[Form]:
    """Unidade file/module + um atributo -enum por payload + eof."""
    forms: List[Form] = [
        AttributeForm(style.encode(1), Atom("file"), (filename, 1)),
        AttributeForm(style.encode(1), Atom("module"), Atom("unit")),
    ]
    for offset, payload in enumerate(payloads):
        forms.append(AttributeForm(style.encode(3 + offset), Atom("enum"), payload))
    forms.append(EofForm(style.encode(eof_line or 3 + len(payloads))))
    return forms


@pytest.fixture()
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture()
def make_unit() -> Callable[..., List[Form]]:
    return build_unit


@pytest.fixture()
def colors_text(fixtures_dir: Path) -> str:
    return (fixtures_dir / "colors.forms").read_text(encoding="utf-8")


@pytest.fixture()
def colors_payload() -> tuple:
    return (Atom("colors"), [Atom("red"), Atom("green"), Atom("blue")])


@pytest.fixture()
def status_payload() -> tuple:
    return (Atom("status"), [Atom("ok"), (Atom("error"), 5), Atom("fatal")])
