"""Internal tokenizer for path command strings.

This is an internal module used by the path parser.
Not intended for public use.
"""

SEPARATORS = frozenset(" ,\t\n\r\f")
DIGITS = frozenset("0123456789")
NUMBER_START = DIGITS | frozenset(".-+")


class PathScanner:
    """Cursor over a path command string.

    Numbers may be separated by whitespace, a comma, or nothing at all when a
    sign or a second decimal point starts the next number ("10-5", "0.5.5").
    Arc flags are read one character at a time because they may abut the
    following number ("0110 20" is flags 0 and 1, then 10 and 20).
    """

    def __init__(self, data: str) -> None:
        self._data = data
        self._index = 0

    @property
    def position(self) -> int:
        """Current offset into the command string."""
        return self._index

    def at_end(self) -> bool:
        """Check if only separators remain."""
        self.skip_separators()
        return self._index >= len(self._data)

    def skip_separators(self) -> None:
        """Advance past whitespace and commas."""
        data = self._data
        while self._index < len(data) and data[self._index] in SEPARATORS:
            self._index += 1

    def peek_command(self) -> str | None:
        """Return the next command letter without consuming it.

        Returns:
            The letter, or None if the next token is not a letter.
            Exponent markers are never commands.
        """
        self.skip_separators()
        if self._index >= len(self._data):
            return None
        char = self._data[self._index]
        if char.isalpha() and char not in "eE":
            return char
        return None

    def next_command(self) -> str | None:
        """Consume and return the next command letter."""
        command = self.peek_command()
        if command is not None:
            self._index += 1
        return command

    def has_number(self) -> bool:
        """Check if the next token starts a number."""
        self.skip_separators()
        return self._index < len(self._data) and self._data[self._index] in NUMBER_START

    def next_number(self) -> float | None:
        """Consume the next number.

        Accepts an optional sign, integer digits, a fractional part and an
        exponent. A token without any mantissa digit ("-", ".") is rejected
        and the cursor is left where it was.

        Returns:
            The parsed value, or None if no number is present
        """
        self.skip_separators()
        data = self._data
        start = i = self._index
        n = len(data)

        if i < n and data[i] in "+-":
            i += 1

        mantissa_digits = 0
        while i < n and data[i] in DIGITS:
            i += 1
            mantissa_digits += 1

        if i < n and data[i] == ".":
            i += 1
            while i < n and data[i] in DIGITS:
                i += 1
                mantissa_digits += 1

        if mantissa_digits == 0:
            return None

        # Only take the exponent if digits follow it
        if i < n and data[i] in "eE":
            j = i + 1
            if j < n and data[j] in "+-":
                j += 1
            if j < n and data[j] in DIGITS:
                while j < n and data[j] in DIGITS:
                    j += 1
                i = j

        self._index = i
        return float(data[start:i])

    def next_flag(self) -> bool | None:
        """Consume a single-character arc flag.

        Returns:
            True for "1", False for "0", None for anything else
        """
        self.skip_separators()
        if self._index >= len(self._data):
            return None
        char = self._data[self._index]
        if char == "0":
            self._index += 1
            return False
        if char == "1":
            self._index += 1
            return True
        return None

    def next_numbers(self, count: int) -> list[float] | None:
        """Consume ``count`` numbers as one coordinate group.

        Returns:
            The numbers, or None (cursor restored) if the group is incomplete
        """
        start = self._index
        values: list[float] = []
        for _ in range(count):
            value = self.next_number()
            if value is None:
                self._index = start
                return None
            values.append(value)
        return values

    def restore(self, position: int) -> None:
        """Move the cursor back to a previously saved position."""
        self._index = position
