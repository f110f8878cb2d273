"""Symbol table types.

This module defines the letter-to-code mapping used by the encoder:
- DigitCode: An opaque digit string that can never become a number
- SymbolEntry: One letter's code and glyph reference
- SymbolSet: A complete (or partial) mapping for one glyph set
- SymbolSetInfo: Metadata-only view used to populate pickers
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class DigitCode:
    """The digits written for one letter.

    Codes such as "01" must keep their leading zero all the way to the
    display. The value is held as text and the type deliberately offers no
    numeric conversion, so ``int(code)`` raises ``TypeError``.

    Attributes:
        text: The code exactly as authored
    """

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f"DigitCode requires str, got {type(self.text).__name__}")
        if not self.text:
            raise ValueError("DigitCode cannot be empty")

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True, slots=True)
class SymbolEntry:
    """A single letter's entry in a symbol set.

    Attributes:
        code: Digit code displayed for the letter (e.g. "41" for "m")
        glyph_ref: File name of the letter's artwork (e.g. "m.svg")
    """

    code: DigitCode
    glyph_ref: str

    def __post_init__(self) -> None:
        if not isinstance(self.code, DigitCode):
            raise TypeError("SymbolEntry.code must be a DigitCode")
        if not self.glyph_ref:
            raise ValueError("SymbolEntry.glyph_ref cannot be empty")

    @classmethod
    def of(cls, code: str, glyph_ref: str) -> "SymbolEntry":
        """Build an entry from plain strings."""
        return cls(code=DigitCode(code), glyph_ref=glyph_ref)


class SymbolSetStatus(str, Enum):
    """Availability of a symbol set."""

    AVAILABLE = "available"
    COMING_SOON = "coming_soon"


@dataclass(frozen=True)
class SymbolSet:
    """A named mapping from lowercase letters to symbol entries.

    The mapping may cover only part of the alphabet; missing letters are
    reported when encoding, not when loading. Instances are read-only: the
    ``symbols`` mapping is exposed through a read-only proxy.

    Attributes:
        id: Symbol set identifier (also its directory name)
        display_name: Human readable name
        status: Whether the set can be selected
        symbols: Letter to entry mapping
    """

    id: str
    display_name: str
    status: SymbolSetStatus
    symbols: Mapping[str, SymbolEntry] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbols", MappingProxyType(dict(self.symbols)))

    @property
    def is_available(self) -> bool:
        """Check if the set can be selected."""
        return self.status is SymbolSetStatus.AVAILABLE

    def get(self, letter: str) -> SymbolEntry | None:
        """Look up a letter, returning None when it is not mapped."""
        return self.symbols.get(letter)

    def missing_letters(self) -> list[str]:
        """List the letters a-z that have no entry."""
        return [chr(c) for c in range(ord("a"), ord("z") + 1) if chr(c) not in self.symbols]

    def info(self) -> "SymbolSetInfo":
        """Get the metadata-only view of this set."""
        return SymbolSetInfo(id=self.id, display_name=self.display_name, status=self.status)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the configuration record layout.

        Returns:
            Dictionary with glyphSet, displayName, status and letters fields
        """
        return {
            "glyphSet": self.id,
            "displayName": self.display_name,
            "status": self.status.value,
            "letters": {
                letter: {"code": entry.code.text, "glyphFile": entry.glyph_ref}
                for letter, entry in sorted(self.symbols.items())
            },
        }


@dataclass(frozen=True, slots=True)
class SymbolSetInfo:
    """Metadata about a symbol set, without its letters.

    Attributes:
        id: Symbol set identifier
        display_name: Human readable name
        status: Availability
    """

    id: str
    display_name: str
    status: SymbolSetStatus

    @property
    def is_available(self) -> bool:
        """Check if the set can be selected."""
        return self.status is SymbolSetStatus.AVAILABLE
