from __future__ import annotations

"""Explicit result types for the never-failing palette operations.

The generator, mixer and formatter never raise on bad input or on color
math failures. Instead they return values whose "nothing usable" variant
is part of the type:

* :class:`PaletteResult` – a sequence of tokens plus an optional error code
  (an empty result is the error signal);
* ``Optional[str]`` for the mixed base color;
* :class:`FormattedColor` – text plus a :class:`FormatStatus`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

NOT_AVAILABLE = "N/A"
FORMAT_ERROR = "Error"
UNNAMED_PREFIX = "~"
FALLBACK_COLOR = "#ff0000"

# PaletteResult.error codes
INVALID_INPUT = "invalid-input"
ADAPTER_FAILURE = "adapter-failure"


@dataclass(frozen=True)
class PaletteResult:
    """Ordered palette tokens; empty with ``error`` set when generation failed."""

    colors: Tuple[str, ...] = ()
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "PaletteResult":
        return cls(colors=(), error=error)

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.colors)

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[str]:
        return iter(self.colors)

    def __getitem__(self, index: int) -> str:
        return self.colors[index]

    def __bool__(self) -> bool:
        return bool(self.colors)


class FormatStatus(Enum):
    """Outcome of rendering a color as text."""

    OK = "ok"
    UNNAMED = "unnamed"
    NOT_AVAILABLE = "not_available"
    ERROR = "error"


@dataclass(frozen=True)
class FormattedColor:
    text: str
    status: FormatStatus = FormatStatus.OK

    @property
    def usable(self) -> bool:
        """True when ``text`` is a real rendering (copyable) rather than a sentinel."""
        return self.status in (FormatStatus.OK, FormatStatus.UNNAMED)

    def __str__(self) -> str:
        return self.text


__all__ = [
    "NOT_AVAILABLE",
    "FORMAT_ERROR",
    "UNNAMED_PREFIX",
    "FALLBACK_COLOR",
    "INVALID_INPUT",
    "ADAPTER_FAILURE",
    "PaletteResult",
    "FormatStatus",
    "FormattedColor",
]
