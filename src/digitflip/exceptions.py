"""Exception hierarchy for DigitFlip."""

CONFIGURATION_ERROR_MESSAGE = "Could not load glyph configuration. Check letter_map.json."


class DigitFlipError(Exception):
    """Base exception for all DigitFlip errors."""

    pass


class ConfigurationError(DigitFlipError):
    """A symbol set configuration record could not be loaded.

    The message is fixed so that the presentation layer can show a stable
    notice regardless of which tier failed or why.
    """

    def __init__(
        self,
        symbol_set_id: str,
        message: str = CONFIGURATION_ERROR_MESSAGE,
    ) -> None:
        self.symbol_set_id = symbol_set_id
        self.message = message
        super().__init__(message)


class MappingError(DigitFlipError):
    """Errors caused by an incomplete or inconsistent symbol set."""

    pass


class MissingMappingError(MappingError):
    """A letter of the input has no entry in the active symbol set."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"No mapping found for '{char}'")


class StoreError(DigitFlipError):
    """Errors raised by glyph stores."""

    pass


class UnsafeFileNameError(StoreError):
    """A file reference points outside its symbol set directory."""

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f"Refusing to read '{file_name}' outside the symbol set directory")
