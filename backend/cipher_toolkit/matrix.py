import numpy as np
from typing import List, Optional, Sequence

from .errors import InvalidKeyError
from .modmath import ALPHABET_SIZE, gcd, mod_inverse, true_mod


def _as_matrix(matrix) -> Optional[np.ndarray]:
    try:
        m = np.array(matrix, dtype=np.int64)
    except (TypeError, ValueError):
        # ragged rows or non-numeric entries
        return None
    if m.shape != (2, 2):
        return None
    return m


def determinant(matrix) -> int:
    m = np.asarray(matrix, dtype=np.int64)
    return int(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])


def is_valid_key_matrix(matrix) -> bool:
    """2x2 and determinant coprime with 26"""
    m = _as_matrix(matrix)
    if m is None:
        return False
    return gcd(true_mod(determinant(m)), ALPHABET_SIZE) == 1


def invert_matrix_mod26(matrix) -> List[List[int]]:
    """
    Inverse of a 2x2 key matrix modulo 26:
       det = a*d - b*c  (mod 26)
       inverse = det^(-1) * [[d, -b], [-c, a]]  (mod 26)
    """
    if not is_valid_key_matrix(matrix):
        raise InvalidKeyError("Invalid key matrix. Determinant must be coprime with 26.", value=matrix)

    m = _as_matrix(matrix)
    det_inv = mod_inverse(true_mod(determinant(m)))
    adj = np.array([
        [m[1, 1], -m[0, 1]],
        [-m[1, 0], m[0, 0]]
    ], dtype=np.int64)
    return np.mod(adj * det_inv, ALPHABET_SIZE).tolist()


def multiply_block(matrix, block: Sequence[int]) -> List[int]:
    """M * v mod 26 for a 2-vector"""
    m = np.asarray(matrix, dtype=np.int64)
    v = np.asarray(block, dtype=np.int64)
    return [int(x) for x in np.mod(m @ v, ALPHABET_SIZE)]
