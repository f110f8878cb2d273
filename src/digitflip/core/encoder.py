"""Phrase encoding.

The encoder validates user input, maps each letter to its digit code and
glyph, and reverses the whole sequence so that the written digits read as the
original phrase once the page is turned upside down.
"""

from digitflip.config import EncoderConfig
from digitflip.domain import (
    EncodedElement,
    EncodedResult,
    Letter,
    SymbolSet,
    ValidationError,
    WordBreak,
)
from digitflip.exceptions import MissingMappingError

ALLOWED_CHARACTERS = frozenset("abcdefghijklmnopqrstuvwxyz ")


class Encoder:
    """Validates and encodes phrases.

    Example:
        encoder = Encoder()
        if encoder.validate(text) is None and not encoder.is_blank(text):
            result = encoder.encode(text, symbol_set)
            print(result.digit_display)
    """

    def __init__(self, config: EncoderConfig | None = None) -> None:
        self.config = config or EncoderConfig()

    def validate(self, raw: str) -> ValidationError | None:
        """Check input as typed.

        Invalid characters are reported before an exceeded length, and only
        the first problem found is returned.

        Args:
            raw: Input text, any case

        Returns:
            The validation error, or None if the input is acceptable

        Examples:
            >>> Encoder().validate("hello!")
            <ValidationError.INVALID_CHARACTERS: 'Invalid characters, use a-z characters only'>
            >>> Encoder().validate("hi you") is None
            True
        """
        text = raw.lower()
        if any(c not in ALLOWED_CHARACTERS for c in text):
            return ValidationError.INVALID_CHARACTERS
        if len(text) > self.config.max_input_length:
            return ValidationError.CHARACTER_LIMIT_EXCEEDED
        return None

    @staticmethod
    def is_blank(raw: str) -> bool:
        """Check if the input holds nothing but whitespace."""
        return not "".join(raw.split())

    def encode(self, raw: str, symbol_set: SymbolSet) -> EncodedResult:
        """Encode a validated phrase.

        Args:
            raw: Input that passed ``validate``
            symbol_set: Active symbol set

        Returns:
            Elements in reversed (display) order

        Raises:
            MissingMappingError: On the first letter the set does not map
        """
        elements: list[EncodedElement] = []

        for char in raw.lower():
            if char == " ":
                elements.append(WordBreak())
                continue
            entry = symbol_set.get(char)
            if entry is None:
                raise MissingMappingError(char)
            elements.append(Letter(char=char, code=entry.code, glyph_ref=entry.glyph_ref))

        elements.reverse()
        return EncodedResult(
            elements=tuple(elements),
            word_break_separator=self.config.word_break_separator,
        )
