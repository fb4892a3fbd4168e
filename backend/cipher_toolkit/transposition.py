from typing import List, Optional, Sequence, Union

import numpy as np

from .errors import TextTooLongError
from .grid import EMPTY_CELL, Grid, Position, ranked_columns, row_major_filled, spiral_order, zigzag_rails
from .keys import GrilleMask, normalize_letter_key, parse_column_key, require_minimum
from .trace import TraceSink, record_result, sink_or_null

ROTATIONS = 4


def _mode(encrypt: bool) -> str:
    return 'Encrypting' if encrypt else 'Decrypting'


def _record_grid(steps: TraceSink, grid: Grid) -> None:
    for line in grid.render():
        steps.record(line)


# --- Rail Fence ---

def rail_fence(text: str, rails: int, encrypt: bool = True, trace: Optional[TraceSink] = None) -> str:
    require_minimum("Number of rails", rails)
    steps = sink_or_null(trace)
    steps.record(f"Rail Fence Cipher: {_mode(encrypt)} with {rails} rails")

    pattern = zigzag_rails(len(text), rails)
    # rails past the text length stay empty
    touched = min(rails, len(text))
    # positions rail by rail, left to right
    order = sorted(range(len(text)), key=lambda i: (pattern[i], i))

    if encrypt:
        steps.record("Rail fence pattern:")
        for rail in range(touched):
            steps.record(''.join(char if pattern[i] == rail else EMPTY_CELL for i, char in enumerate(text)))
        result = ''.join(text[i] for i in order)
    else:
        out: List[str] = [''] * len(text)
        for char, i in zip(text, order):
            out[i] = char
        steps.record("Filled rail fence pattern:")
        for rail in range(touched):
            steps.record(' '.join(out[i] for i in order if pattern[i] == rail))
        result = ''.join(out)

    return record_result(steps, result)


# --- Route (spiral) ---

def route(text: str, rows: int, cols: int, encrypt: bool = True, trace: Optional[TraceSink] = None) -> str:
    require_minimum("Number of rows", rows)
    require_minimum("Number of columns", cols)
    if len(text) > rows * cols:
        raise TextTooLongError(
            f"Text is too long for a {rows}×{cols} grid. Maximum length is {rows * cols} characters.",
            value=len(text))

    steps = sink_or_null(trace)
    steps.record(f"Route Cipher: {_mode(encrypt)} with {rows}×{cols} grid using spiral route")

    filled = row_major_filled(len(text), rows, cols)
    order = [(r, c) for r, c in spiral_order(rows, cols) if filled[r][c]]
    grid = Grid(rows, cols)

    if encrypt:
        grid.fill_row_major(text)
        steps.record("Grid arrangement:")
        _record_grid(steps, grid)
        result = grid.read(order)
    else:
        grid.place(order, text)
        steps.record("Filled grid:")
        _record_grid(steps, grid)
        result = grid.read_row_major()

    return record_result(steps, result)


# --- Columnar ---

def _column_positions(length: int, rows: int, ranks: Sequence, interleave: bool) -> List[Position]:
    """
    Read order over the cells a row-major fill of `length` characters occupies.

    Plain columnar reads each ranked column top to bottom. Myszkowski
    (interleave=True) reads columns sharing a rank together, row by row.
    """
    cols = len(ranks)
    filled = row_major_filled(length, rows, cols)
    order = []
    for group in ranked_columns(ranks):
        if interleave:
            order.extend((r, c) for r in range(rows) for c in group if filled[r][c])
        else:
            order.extend((r, c) for c in group for r in range(rows) if filled[r][c])
    return order


def _columnar(text: str, digits: Sequence[int], encrypt: bool, steps: TraceSink) -> str:
    grid = Grid.for_text(len(text), len(digits))
    order = _column_positions(len(text), grid.rows, digits, interleave=False)
    key_line = f"Key: {' '.join(str(d) for d in digits)}"

    if encrypt:
        grid.fill_row_major(text)
        steps.record("Grid arrangement:")
        steps.record(key_line)
        _record_grid(steps, grid)
        result = grid.read(order)
    else:
        # a short last row leaves the rightmost columns one cell shorter
        lengths = [sum(1 for r, c in order if c == col) for col in range(len(digits))]
        steps.record(f"Column lengths: {' '.join(str(n) for n in lengths)}")
        grid.place(order, text)
        steps.record("Filled grid:")
        steps.record(key_line)
        _record_grid(steps, grid)
        result = grid.read_row_major()

    return record_result(steps, result)


def columnar(text: str, key: str, encrypt: bool = True, trace: Optional[TraceSink] = None) -> str:
    """Columns are read in ascending key digit order; equal digits left to right."""
    digits = parse_column_key(key)
    steps = sink_or_null(trace)
    steps.record(f"Columnar Transposition Cipher: {_mode(encrypt)} with key \"{key}\"")
    return _columnar(text, digits, encrypt, steps)


def double_transposition(text: str, key1: str, key2: str, encrypt: bool = True,
                         trace: Optional[TraceSink] = None) -> str:
    digits1 = parse_column_key(key1)
    digits2 = parse_column_key(key2)
    steps = sink_or_null(trace)
    steps.record(f"Double Transposition Cipher: {_mode(encrypt)} with keys \"{key1}\" and \"{key2}\"")

    if encrypt:
        steps.record("First transposition:")
        first = _columnar(text, digits1, True, steps)
        steps.record("Second transposition:")
        result = _columnar(first, digits2, True, steps)
    else:
        steps.record("First transposition (reverse of second encryption):")
        first = _columnar(text, digits2, False, steps)
        steps.record("Second transposition (reverse of first encryption):")
        result = _columnar(first, digits1, False, steps)

    return record_result(steps, result)


# --- Myszkowski ---

def myszkowski_ranks(key: str) -> List[int]:
    """1-based rank of every key letter among the key's distinct letters"""
    unique = sorted(set(key))
    return [unique.index(char) + 1 for char in key]


def myszkowski(text: str, key: str, encrypt: bool = True, trace: Optional[TraceSink] = None) -> str:
    processed = normalize_letter_key(key)
    ranks = myszkowski_ranks(processed)
    steps = sink_or_null(trace)
    steps.record(f"Myszkowski Transposition Cipher: {_mode(encrypt)} with key \"{processed}\"")

    grid = Grid.for_text(len(text), len(processed))
    order = _column_positions(len(text), grid.rows, ranks, interleave=True)

    if encrypt:
        grid.fill_row_major(text)
        steps.record("Grid arrangement:")
    else:
        grid.place(order, text)
        steps.record("Filled grid:")
    steps.record(f"Key: {' '.join(processed)}")
    steps.record(f"Numeric values: {' '.join(str(r) for r in ranks)}")
    _record_grid(steps, grid)

    result = grid.read(order) if encrypt else grid.read_row_major()
    return record_result(steps, result)


# --- Grille ---

def grille_positions(mask: GrilleMask) -> List[List[Position]]:
    """
    Cells exposed by each of the four clockwise rotations, row-major within
    a rotation.

    Rotating swaps the mask's dimensions (new[j][rows-1-i] = old[i][j]), so a
    non-square mask is overlaid on the fixed rows x cols grid and holes that
    fall outside it are skipped. A cell already exposed by an earlier rotation
    is not exposed again.
    """
    rows, cols = mask.rows, mask.cols
    holes = np.array(mask.holes, dtype=bool)
    claimed = set()
    per_rotation = []

    for _ in range(ROTATIONS):
        exposed = []
        for r, c in zip(*np.nonzero(holes)):
            pos = (int(r), int(c))
            if pos[0] < rows and pos[1] < cols and pos not in claimed:
                claimed.add(pos)
                exposed.append(pos)
        per_rotation.append(exposed)
        holes = np.rot90(holes, -1)

    return per_rotation


def _grille_capacity(mask: GrilleMask, exposed: int) -> str:
    holes = mask.hole_count
    if exposed == holes * ROTATIONS:
        return f"{exposed} characters ({holes} holes × {ROTATIONS} rotations)"
    return (f"{exposed} characters (the {holes} holes expose only {exposed} distinct cells "
            f"over {ROTATIONS} rotations, not {holes * ROTATIONS})")


def grille(text: str, mask: Union[str, GrilleMask], encrypt: bool = True,
           trace: Optional[TraceSink] = None) -> str:
    grille_mask = GrilleMask.parse(mask)
    per_rotation = grille_positions(grille_mask)
    order = [pos for exposed in per_rotation for pos in exposed]
    capacity = _grille_capacity(grille_mask, len(order))
    if len(text) > len(order):
        raise TextTooLongError(
            f"Text is too long for this grille. Maximum length is {capacity}.", value=len(text))

    rows, cols = grille_mask.rows, grille_mask.cols
    steps = sink_or_null(trace)
    steps.record(f"Grilles Cipher: {_mode(encrypt)} with {rows}×{cols} grille")
    steps.record(f"Capacity: {capacity}")
    steps.record("Grille pattern (1 = hole, 0 = solid):")
    for line in grille_mask.render():
        steps.record(line)

    grid = Grid(rows, cols)
    used = order[:len(text)]

    if encrypt:
        start = 0
        for rotation, exposed in enumerate(per_rotation):
            if start >= len(text):
                break
            batch = exposed[:len(text) - start]
            steps.record(f"Rotation {rotation * 90}°:")
            grid.place(batch, text[start:start + len(batch)])
            start += len(batch)
            _record_grid(steps, grid)
        result = grid.read_row_major()
    else:
        grid.place(sorted(used), text)
        steps.record("Filled grid:")
        _record_grid(steps, grid)

        wanted = set(used)
        out = []
        for rotation, exposed in enumerate(per_rotation):
            steps.record(f"Rotation {rotation * 90}°:")
            for r, c in exposed:
                if (r, c) in wanted:
                    char = grid.cells[r][c]
                    out.append(char)
                    steps.record(f"Reading {char} at position ({r},{c})")
        result = ''.join(out)

    return record_result(steps, result)
