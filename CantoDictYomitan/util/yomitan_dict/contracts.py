from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class CantoDictError(Exception):
    """Base class for errors raised while building the dictionary."""


class MalformedInputError(CantoDictError, ValueError):
    def __init__(self, column: str, value: str, line: Optional[int] = None, reason: str = ""):
        location = f" on line {line}" if line is not None else ""
        super().__init__(f"Column '{column}'{location} is not valid JSON ({reason}): {value!r}")
        self.column = column
        self.value = value
        self.line = line


class MissingColumnError(CantoDictError, ValueError):
    def __init__(self, column: str, line: Optional[int] = None):
        location = f" on line {line}" if line is not None else ""
        super().__init__(f"Required column '{column}' is empty or missing{location}")
        self.column = column
        self.line = line


class KanjiBankNotSupportedError(CantoDictError, NotImplementedError):
    pass


@dataclass(frozen=True)
class Entry:
    """One decoded CantoDict row: a compound, a character or an example sentence."""

    kind: str
    id: Any
    surface_form: str
    readings: Dict[str, str] = field(default_factory=dict)
    pos: List[str] = field(default_factory=list)
    definition: str = ""
    notes: Optional[str] = None
    variants: List[str] = field(default_factory=list)
    similar: List[Any] = field(default_factory=list)
    flag: Any = None
    compound_refs: List[Any] = field(default_factory=list)
    sentence_refs: List[Any] = field(default_factory=list)
    character_refs: List[Any] = field(default_factory=list)
    frequency: Optional[float] = None
    dialect: Optional[str] = None

    @property
    def key(self) -> str:
        return entry_key(self.kind, self.id)

    def reading(self, scheme: str) -> str:
        return self.readings.get(scheme) or ""


def entry_key(kind: str, entry_id: Any) -> str:
    return f"{kind},{entry_id}"
