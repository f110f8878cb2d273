"""DigitFlip - Write a phrase in digits that reads correctly upside down.

DigitFlip maps each letter of a short phrase to a digit code and a vector
glyph, then reverses the sequence so that rotating the written row by 180
degrees reveals the original phrase.

Example:
    $ digitflip flip "hi you"

This prints the digit line "0 0 6   1 4" and can write an SVG preview of the
glyph row together with its flipped rendering.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
