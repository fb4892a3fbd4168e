from typing import Optional, Union

from .alphabet import Letter, map_letters
from .keys import AffineKey
from .modmath import ALPHABET_SIZE, true_mod
from .trace import TraceSink, record_result, sink_or_null


def atbash(text: str, trace: Optional[TraceSink] = None) -> str:
    """A <-> Z, B <-> Y, ... in both cases. Self-inverse."""
    steps = sink_or_null(trace)
    steps.record("Atbash Cipher: Replacing each letter with its reverse in the alphabet (A↔Z, B↔Y, etc.)")

    def reflect(letter: Letter) -> int:
        y = ALPHABET_SIZE - 1 - letter.value
        steps.record(f"{letter.char} → {letter.to_char(y)}")
        return y

    return record_result(steps, map_letters(text, reflect))


def caesar(text: str, shift: int, encrypt: bool = True, trace: Optional[TraceSink] = None) -> str:
    steps = sink_or_null(trace)
    k = true_mod(shift)
    steps.record(f"Caesar Cipher: {'Encrypting' if encrypt else 'Decrypting'} with shift key {k}")

    def rotate(letter: Letter) -> int:
        if encrypt:
            y = true_mod(letter.value + k)
            steps.record(f"{letter.char} → {letter.to_char(y)} ({letter.value} + {k} mod 26 = {y})")
        else:
            y = true_mod(letter.value - k)
            steps.record(f"{letter.char} → {letter.to_char(y)} ({letter.value} - {k} mod 26 = {y})")
        return y

    return record_result(steps, map_letters(text, rotate))


def affine(text: str, a: Union[int, AffineKey], b: int = 0, encrypt: bool = True,
           trace: Optional[TraceSink] = None) -> str:
    """
    E(x) = (a*x + b) mod 26
    D(y) = a^(-1) * (y - b) mod 26
    `a` must be coprime with 26, otherwise InvalidKeyError.
    """
    key = a if isinstance(a, AffineKey) else AffineKey(a, b)
    steps = sink_or_null(trace)
    steps.record(f"Affine Cipher: {'Encrypting' if encrypt else 'Decrypting'} with keys A={key.a}, B={key.b}")

    a_inv = 0
    if not encrypt:
        a_inv = key.a_inverse
        steps.record(f"Calculated modular inverse of {key.a} mod 26 = {a_inv}")

    def substitute(letter: Letter) -> int:
        x = letter.value
        if encrypt:
            y = true_mod(key.a * x + key.b)
            steps.record(f"{letter.char} → {letter.to_char(y)} ({key.a} × {x} + {key.b} mod 26 = {y})")
        else:
            y = true_mod(a_inv * (x - key.b))
            steps.record(f"{letter.char} → {letter.to_char(y)} ({a_inv} × ({x} - {key.b}) mod 26 = {y})")
        return y

    return record_result(steps, map_letters(text, substitute))
