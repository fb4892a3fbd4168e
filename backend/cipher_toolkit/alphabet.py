from typing import Callable, NamedTuple, Optional

from .modmath import ALPHABET_SIZE, true_mod

UPPER_BASE = ord('A')  # 65
LOWER_BASE = ord('a')  # 97


class Letter(NamedTuple):
    char: str
    value: int  # 0-25
    base: int
    index: int  # counts letters only

    def to_char(self, value: int) -> str:
        """Render a 0-25 value in this letter's case"""
        return chr(self.base + true_mod(value, ALPHABET_SIZE))


def letter_base(char: str) -> Optional[int]:
    """Base code point for A-Z / a-z, None for anything else."""
    if 'A' <= char <= 'Z':
        return UPPER_BASE
    if 'a' <= char <= 'z':
        return LOWER_BASE
    return None


def is_letter(char: str) -> bool:
    return letter_base(char) is not None


def map_letters(text: str, substitute: Callable[[Letter], int]) -> str:
    """
    Apply `substitute` to every Latin letter of `text`, keeping its case.

    `substitute` gets a Letter and returns the new 0-25 value. Other characters
    are copied through and do not advance Letter.index, so key streams only
    move on letters.
    """
    out = []
    index = 0
    for char in text:
        base = letter_base(char)
        if base is None:
            out.append(char)
            continue
        letter = Letter(char, ord(char) - base, base, index)
        out.append(letter.to_char(substitute(letter)))
        index += 1
    return ''.join(out)


def count_letters(text: str) -> int:
    return sum(1 for char in text if is_letter(char))


def alphabetic_projection(text: str) -> str:
    """Uppercased letters-only subsequence of text"""
    return ''.join(char.upper() for char in text if is_letter(char))
