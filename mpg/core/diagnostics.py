"""
Diagnostics reported back to Terraform by resources and validators.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    summary: str
    detail: str
    attribute: str | None = None  # Attribute path the diagnostic points at, None for general diagnostics


@dataclass
class Diagnostics:
    """Ordered collection of diagnostics produced while handling a single request."""

    items: list[Diagnostic] = field(default_factory=list)

    def add_error(self, summary: str, detail: str) -> None:
        self.items.append(Diagnostic(Severity.ERROR, summary, detail))

    def add_warning(self, summary: str, detail: str) -> None:
        self.items.append(Diagnostic(Severity.WARNING, summary, detail))

    def add_attribute_error(self, attribute: str, summary: str, detail: str) -> None:
        self.items.append(Diagnostic(Severity.ERROR, summary, detail, attribute))

    def add_attribute_warning(self, attribute: str, summary: str, detail: str) -> None:
        self.items.append(Diagnostic(Severity.WARNING, summary, detail, attribute))

    def extend(self, other: "Diagnostics") -> None:
        self.items.extend(other.items)

    def has_error(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.items)

    def errors(self) -> list[Diagnostic]:
        return [d for d in self.items if d.severity == Severity.ERROR]

    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.items if d.severity == Severity.WARNING]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def error_to_diagnostic(diagnostics: Diagnostics, summary: str, error: BaseException | None) -> None:
    """Append an error diagnostic with the error message as detail when error is set."""
    if error is not None:
        diagnostics.add_error(summary, str(error))
