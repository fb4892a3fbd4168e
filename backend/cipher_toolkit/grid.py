"""
Grid staging for the transposition ciphers.

A transposition is a read order over the filled cells of a grid. Encryption
fills the grid row-major and reads it in that order; decryption writes the
ciphertext along the same order and reads row-major. Cells hold None until
filled, so a space in the text is ordinary payload.
"""
import math
from typing import Iterable, List, Optional, Sequence, Tuple

Position = Tuple[int, int]

EMPTY_CELL = '·'


class Grid:
    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        self.cells: List[List[Optional[str]]] = [[None] * cols for _ in range(rows)]

    @classmethod
    def for_text(cls, length: int, cols: int) -> "Grid":
        """Smallest grid with `cols` columns that holds `length` characters"""
        return cls(max(1, math.ceil(length / cols)), cols)

    def fill_row_major(self, text: str) -> "Grid":
        for index, char in enumerate(text):
            self.cells[index // self.cols][index % self.cols] = char
        return self

    def place(self, positions: Iterable[Position], text: str) -> "Grid":
        for (r, c), char in zip(positions, text):
            self.cells[r][c] = char
        return self

    def read(self, positions: Iterable[Position]) -> str:
        return ''.join(self.cells[r][c] for r, c in positions if self.cells[r][c] is not None)

    def read_row_major(self) -> str:
        return ''.join(cell for row in self.cells for cell in row if cell is not None)

    def render(self) -> List[str]:
        return [' '.join(EMPTY_CELL if cell is None else cell for cell in row) for row in self.cells]


def row_major_filled(length: int, rows: int, cols: int) -> List[List[bool]]:
    """Which cells a row-major fill of `length` characters occupies"""
    return [[r * cols + c < length for c in range(cols)] for r in range(rows)]


def zigzag_rails(length: int, rails: int) -> List[int]:
    """Rail index of every character when written in a zig-zag"""
    pattern = []
    rail = 0
    direction = 1
    for _ in range(length):
        pattern.append(rail)
        if rail == 0:
            direction = 1
        elif rail == rails - 1:
            direction = -1
        rail += direction
    return pattern


def spiral_order(rows: int, cols: int) -> List[Position]:
    """Clockwise spiral from the top-left corner"""
    order = []
    top, bottom = 0, rows - 1
    left, right = 0, cols - 1

    while top <= bottom and left <= right:
        for c in range(left, right + 1):
            order.append((top, c))
        top += 1

        for r in range(top, bottom + 1):
            order.append((r, right))
        right -= 1

        if top <= bottom:
            for c in range(right, left - 1, -1):
                order.append((bottom, c))
            bottom -= 1

        if left <= right:
            for r in range(bottom, top - 1, -1):
                order.append((r, left))
            left += 1

    return order


def ranked_columns(ranks: Sequence) -> List[List[int]]:
    """
    Group column indexes by ascending rank, ties kept left to right.

    [3, 1, 2, 4] -> [[1], [2], [0], [3]]
    [4, 3, 2, 1, 4, 3] -> [[3], [2], [1, 5], [0, 4]]
    """
    groups = {}
    for col, rank in enumerate(ranks):
        groups.setdefault(rank, []).append(col)
    return [groups[rank] for rank in sorted(groups)]
