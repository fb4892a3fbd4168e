"""
Typed key variants.

Every cipher accepts the plain value a user types (an int, a string, a nested
list) and normalises it here. Validation happens when the key is built, so a
bad key fails before any character is transformed.
"""
from dataclasses import dataclass
from typing import List, Tuple, Union

from .errors import EmptyKeyError, InvalidKeyError
from .matrix import invert_matrix_mod26, is_valid_key_matrix, determinant
from .modmath import ALPHABET_SIZE, gcd, mod_inverse, true_mod


def normalize_letter_key(key: str) -> str:
    """Uppercase the key and drop everything that is not A-Z."""
    if not key:
        raise EmptyKeyError("Key cannot be empty", value=key)
    processed = ''.join(char for char in key.upper() if 'A' <= char <= 'Z')
    if not processed:
        raise EmptyKeyError("Key must contain at least one letter", value=key)
    return processed


def normalize_digit_key(key: str) -> str:
    if not key:
        raise EmptyKeyError("Key cannot be empty", value=key)
    processed = ''.join(char for char in key if '0' <= char <= '9')
    if not processed:
        raise EmptyKeyError("Key must contain at least one digit", value=key)
    return processed


def parse_column_key(key: str) -> Tuple[int, ...]:
    """Digit string -> column order digits. Unlike Gronsfeld, nothing is filtered."""
    if not key:
        raise EmptyKeyError("Key cannot be empty", value=key)
    if not all('0' <= char <= '9' for char in key):
        raise InvalidKeyError(f"Key must contain only digits, got {key!r}", value=key)
    return tuple(int(char) for char in key)


def require_minimum(name: str, value: int, minimum: int = 2) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < minimum:
        raise InvalidKeyError(f"{name} must be at least {minimum}, got {value!r}", value=value)
    return value


@dataclass(frozen=True)
class AffineKey:
    a: int
    b: int

    def __post_init__(self):
        if gcd(self.a, ALPHABET_SIZE) != 1:
            raise InvalidKeyError(f"Key A ({self.a}) must be coprime with 26", value=self.a)
        object.__setattr__(self, 'b', true_mod(self.b))

    @property
    def a_inverse(self) -> int:
        return mod_inverse(self.a)


@dataclass(frozen=True)
class KeyMatrix:
    rows: Tuple[Tuple[int, int], Tuple[int, int]]

    def __post_init__(self):
        if not is_valid_key_matrix(self.rows):
            raise InvalidKeyError("Invalid key matrix. Determinant must be coprime with 26.", value=self.rows)

    @classmethod
    def from_rows(cls, rows) -> "KeyMatrix":
        if isinstance(rows, cls):
            return rows
        try:
            normalized = tuple(tuple(int(x) for x in row) for row in rows)
        except (TypeError, ValueError):
            raise InvalidKeyError("Key matrix must be a 2x2 grid of integers", value=rows)
        return cls(normalized)

    @property
    def determinant(self) -> int:
        return determinant(self.rows)

    def inverse(self) -> "KeyMatrix":
        return KeyMatrix.from_rows(invert_matrix_mod26(self.rows))

    def as_lists(self) -> List[List[int]]:
        return [list(row) for row in self.rows]

    def __str__(self):
        return '[' + ','.join('[' + ','.join(str(x) for x in row) + ']' for row in self.rows) + ']'


@dataclass(frozen=True)
class GrilleMask:
    """Rectangular hole pattern, True = hole."""
    holes: Tuple[Tuple[bool, ...], ...]

    def __post_init__(self):
        if not self.holes or not self.holes[0]:
            raise EmptyKeyError("Grille mask cannot be empty", value=self.holes)
        cols = len(self.holes[0])
        if any(len(row) != cols for row in self.holes):
            raise InvalidKeyError("Mask must be a rectangular grid", value=self.holes)

    @classmethod
    def parse(cls, mask: Union[str, "GrilleMask"]) -> "GrilleMask":
        if isinstance(mask, cls):
            return mask
        lines = [line.strip() for line in (mask or '').strip().splitlines()]
        if not lines:
            raise EmptyKeyError("Grille mask cannot be empty", value=mask)
        for line in lines:
            bad = set(line) - {'0', '1'}
            if bad:
                raise InvalidKeyError(
                    f"Mask may only contain 0 and 1, found {''.join(sorted(bad))!r}", value=mask)
        return cls(tuple(tuple(cell == '1' for cell in line) for line in lines))

    @property
    def rows(self) -> int:
        return len(self.holes)

    @property
    def cols(self) -> int:
        return len(self.holes[0])

    @property
    def hole_count(self) -> int:
        return sum(sum(row) for row in self.holes)

    def render(self) -> List[str]:
        return [''.join('1' if hole else '0' for hole in row) for row in self.holes]
