"""
results.py - Tipos de resultado e diagnosticos da transformacao de enums

Proposito:
    Definir Result/Ok/Err inspirados em Elm para fluxo de erros tipado.
    Centralizar os diagnosticos da transformacao (avisos e erros) e o
    coletor que os acumula durante uma unica invocacao.

Componentes principais:
    - Result, Ok, Err: tipos genericos para sucesso/erro
    - EnumDiagnostic e subclasses: DuplicateEnum, InvalidEnum, InvalidEnumDeclaration
    - DiagnosticCollector: canais de avisos e erros de uma invocacao
    - format_error: texto de cada tipo de diagnostico

Dependencias criticas:
    - eenum.ast.nodes: Atom e Position
    - dataclasses/typing/enum: estrutura e tipagem

Exemplo de uso:
    from eenum.ast.results import DiagnosticCollector, DuplicateEnum
    collector = DiagnosticCollector()
    collector.record(DuplicateEnum(location=LinePosition(3), name=Atom("dup")))

Notas de implementacao:
    - O coletor e criado por invocacao; nunca existe estado global.
    - Nao ha deduplicacao: diagnosticos repetidos aparecem todos.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ClassVar, Generic, List, Optional, TypeVar, Union

from eenum.ast.nodes import Atom, Position

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")

SOURCE_TAG = "eenum"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Representa sucesso com valor."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Result[U, E]":
        return Ok(fn(self.value))

    def and_then(self, fn: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        return fn(self.value)


@dataclass(frozen=True)
class Err(Generic[E]):
    """Representa falha com erro tipado."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise ValueError(f"Tentou unwrap() em Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, fn: Callable[[T], U]) -> "Result[U, E]":
        return self

    def and_then(self, fn: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        return self


Result = Union[Ok[T], Err[E]]


class ErrorSeverity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class EnumDiagnostic:
    """Classe base para os diagnosticos da transformacao."""

    location: Position
    severity: ErrorSeverity = field(init=False, default=ErrorSeverity.WARNING)
    DEFAULT_SEVERITY: ClassVar[ErrorSeverity] = ErrorSeverity.WARNING

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", self.DEFAULT_SEVERITY)

    @property
    def source(self) -> str:
        return SOURCE_TAG

    def to_diagnostic(self) -> str:
        return format_error(self)

    def to_tuple(self) -> tuple:
        """Forma {Position, Module, Descriptor} esperada pelo driver do compilador."""
        return (self.location, self.source, self)


@dataclass(frozen=True)
class DuplicateEnum(EnumDiagnostic):
    """Enum com nome ja declarado anteriormente na unidade."""

    name: Atom


@dataclass(frozen=True)
class InvalidEnum(EnumDiagnostic):
    """Enum com entradas mal formadas; descartado por inteiro."""

    name: Atom


@dataclass(frozen=True)
class InvalidEnumDeclaration(EnumDiagnostic):
    """Atributo -enum cujo payload nao e {Nome, Entradas} com Nome atomo."""


def format_error(diagnostic: EnumDiagnostic) -> str:
    match diagnostic:
        case DuplicateEnum(name=name):
            return f"enum '{name.quoted()}' already defined"
        case InvalidEnum(name=name):
            return f"invalid enum '{name.quoted()}'"
        case InvalidEnumDeclaration():
            return "invalid enum"
    raise ValueError(f"Diagnostico desconhecido: {diagnostic!r}")


@dataclass
class DiagnosticCollector:
    """Acumulador de diagnosticos de uma unica invocacao da transformacao."""

    errors: List[EnumDiagnostic] = field(default_factory=list)
    warnings: List[EnumDiagnostic] = field(default_factory=list)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def is_valid(self) -> bool:
        return not self.has_errors()

    def record(
        self,
        diagnostic: EnumDiagnostic,
        channel: Optional[ErrorSeverity] = None,
    ) -> None:
        match channel or diagnostic.severity:
            case ErrorSeverity.ERROR:
                self.errors.append(diagnostic)
            case ErrorSeverity.WARNING:
                self.warnings.append(diagnostic)

    def drain(self, channel: ErrorSeverity) -> List[EnumDiagnostic]:
        """Retorna os diagnosticos do canal em ordem de descoberta e o esvazia."""
        if channel is ErrorSeverity.ERROR:
            drained, self.errors = self.errors, []
        else:
            drained, self.warnings = self.warnings, []
        return drained

    def to_diagnostics(self) -> str:
        lines: list[str] = []
        if self.errors:
            lines.append("=== ERROS ===")
            for err in self.errors:
                lines.append(f"{err.location}: {err.to_diagnostic()}")
        if self.warnings:
            lines.append("=== AVISOS ===")
            for warn in self.warnings:
                lines.append(f"{warn.location}: {warn.to_diagnostic()}")
        return "\n".join(lines)
