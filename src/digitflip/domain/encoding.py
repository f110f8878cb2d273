"""Encoded output types.

The encoder turns a phrase into a sequence of elements, one per input
character, already reversed for display:
- Letter: A mapped letter with its code and glyph reference
- WordBreak: A space in the input
- EncodedResult: The reversed sequence plus display helpers
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from digitflip.domain.symbols import DigitCode

WORD_BREAK_SEPARATOR = "   "


class ValidationError(Enum):
    """Problems with user input, checked live as the user types.

    Members are listed in reporting priority order.
    """

    INVALID_CHARACTERS = "Invalid characters, use a-z characters only"
    CHARACTER_LIMIT_EXCEEDED = "Character limit exceeded"

    @property
    def message(self) -> str:
        """User-facing message for this error."""
        return self.value


@dataclass(frozen=True, slots=True)
class Letter:
    """An encoded letter.

    Attributes:
        char: The lowercase input letter
        code: Its digit code
        glyph_ref: File name of its artwork
    """

    char: str
    code: DigitCode
    glyph_ref: str


@dataclass(frozen=True, slots=True)
class WordBreak:
    """A word boundary (one input space)."""


EncodedElement = Letter | WordBreak


def format_digits(
    elements: Iterable[EncodedElement],
    word_break_separator: str = WORD_BREAK_SEPARATOR,
) -> str:
    """Build the digit line for a sequence of elements.

    Letters inside a word are separated by a single space. Every word break
    contributes its own full separator; consecutive breaks are never merged.

    Args:
        elements: Elements in display order
        word_break_separator: Text emitted for each word break

    Returns:
        The digit line, with every code exactly as authored

    Examples:
        >>> hi = [Letter("i", DigitCode("1"), "i.svg"), Letter("h", DigitCode("4"), "h.svg")]
        >>> format_digits(hi)
        '1 4'
    """
    parts: list[str] = []
    prev_was_letter = False

    for element in elements:
        if isinstance(element, Letter):
            if prev_was_letter:
                parts.append(" ")
            parts.append(element.code.text)
            prev_was_letter = True
        else:
            parts.append(word_break_separator)
            prev_was_letter = False

    return "".join(parts)


@dataclass(frozen=True)
class EncodedResult:
    """The result of encoding a phrase.

    Attributes:
        elements: Elements in reversed order, ready for display
        word_break_separator: Separator used by ``digit_display``
    """

    elements: tuple[EncodedElement, ...]
    word_break_separator: str = WORD_BREAK_SEPARATOR

    @property
    def digit_display(self) -> str:
        """The "write these numbers" line."""
        return format_digits(self.elements, self.word_break_separator)

    @property
    def glyph_refs(self) -> list[str | None]:
        """Glyph file names in display order (None for word breaks)."""
        return [e.glyph_ref if isinstance(e, Letter) else None for e in self.elements]

    @property
    def letters(self) -> list[Letter]:
        """Only the letter elements, in display order."""
        return [e for e in self.elements if isinstance(e, Letter)]

    def reversed(self) -> "EncodedResult":
        """Return the same result with the element order reversed."""
        return EncodedResult(
            elements=tuple(reversed(self.elements)),
            word_break_separator=self.word_break_separator,
        )

    def __len__(self) -> int:
        return len(self.elements)
