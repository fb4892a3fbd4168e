import math
from typing import List, Optional

from .alphabet import Letter, count_letters, map_letters
from .keys import normalize_digit_key, normalize_letter_key
from .modmath import true_mod
from .trace import TraceSink, record_result, sink_or_null


class KeyStream:
    """
    Per-letter shifts derived from a key.

    symbols are the key characters shown in the trace; shift_of maps one of
    them to its numeric shift. A cycling stream wraps around, a fixed one is
    read by position and may grow with extend().
    """

    def __init__(self, symbols: str, cycle: bool = True, digits: bool = False):
        self.symbols: List[str] = list(symbols)
        self.cycle = cycle
        self.digits = digits

    def symbol(self, index: int) -> str:
        if self.cycle:
            return self.symbols[index % len(self.symbols)]
        return self.symbols[index]

    def shift_of(self, symbol: str) -> int:
        if self.digits:
            return int(symbol)
        return ord(symbol) - ord('A')

    def extend(self, symbol: str) -> None:
        self.symbols.append(symbol)

    def __str__(self):
        return ''.join(self.symbols)


def _shift_letters(text: str, stream: KeyStream, encrypt: bool, steps: TraceSink) -> str:
    """Vigenère style add/subtract of the key stream, one shift per letter"""

    def shift(letter: Letter) -> int:
        symbol = stream.symbol(letter.index)
        k = stream.shift_of(symbol)
        if encrypt:
            y = true_mod(letter.value + k)
            steps.record(f"{letter.char} + {symbol} → {letter.to_char(y)} ({letter.value} + {k} mod 26 = {y})")
        else:
            y = true_mod(letter.value - k)
            steps.record(f"{letter.char} - {symbol} → {letter.to_char(y)} ({letter.value} - {k} mod 26 = {y})")
        return y

    return map_letters(text, shift)


def vigenere(text: str, key: str, encrypt: bool = True, trace: Optional[TraceSink] = None) -> str:
    processed = normalize_letter_key(key)
    steps = sink_or_null(trace)
    steps.record(f"Vigenère Cipher: {'Encrypting' if encrypt else 'Decrypting'} with key \"{processed}\"")
    result = _shift_letters(text, KeyStream(processed), encrypt, steps)
    return record_result(steps, result)


def gronsfeld(text: str, key: str, encrypt: bool = True, trace: Optional[TraceSink] = None) -> str:
    """Vigenère with the digits 0-9 as shifts."""
    processed = normalize_digit_key(key)
    steps = sink_or_null(trace)
    steps.record(f"Gronsfeld Cipher: {'Encrypting' if encrypt else 'Decrypting'} with key \"{processed}\"")
    result = _shift_letters(text, KeyStream(processed, digits=True), encrypt, steps)
    return record_result(steps, result)


def beaufort(text: str, key: str, trace: Optional[TraceSink] = None) -> str:
    """C = (K - P) mod 26, the same call encrypts and decrypts."""
    processed = normalize_letter_key(key)
    stream = KeyStream(processed)
    steps = sink_or_null(trace)
    steps.record(f"Beaufort Cipher: Processing with key \"{processed}\" (encryption and decryption are identical)")

    def reciprocal(letter: Letter) -> int:
        symbol = stream.symbol(letter.index)
        k = stream.shift_of(symbol)
        y = true_mod(k - letter.value)
        steps.record(f"{symbol} - {letter.char} → {letter.to_char(y)} ({k} - {letter.value} mod 26 = {y})")
        return y

    return record_result(steps, map_letters(text, reciprocal))


def autokey(text: str, key: str, encrypt: bool = True, trace: Optional[TraceSink] = None) -> str:
    """
    Key stream = key followed by the plaintext.

    Encryption appends each plaintext letter as it is consumed; decryption can
    only append a letter once it has recovered it, so the stream is rebuilt one
    character at a time in both directions.
    """
    processed = normalize_letter_key(key)
    stream = KeyStream(processed, cycle=False)
    steps = sink_or_null(trace)
    steps.record(f"Auto Key Cipher: {'Encrypting' if encrypt else 'Decrypting'} with initial key \"{processed}\"")
    if encrypt:
        steps.record("Encryption: Using key + plaintext as the running key")
    else:
        steps.record("Decryption: Building the key as we decrypt")

    def shift(letter: Letter) -> int:
        # index < len(stream.symbols) always holds: the stream gains one symbol per letter
        symbol = stream.symbol(letter.index)
        k = stream.shift_of(symbol)
        if encrypt:
            y = true_mod(letter.value + k)
            steps.record(f"{letter.char} + {symbol} → {letter.to_char(y)} ({letter.value} + {k} mod 26 = {y})")
            stream.extend(letter.char.upper())
        else:
            y = true_mod(letter.value - k)
            steps.record(f"{letter.char} - {symbol} → {letter.to_char(y)} ({letter.value} - {k} mod 26 = {y})")
            stream.extend(chr(ord('A') + y))
        return y

    return record_result(steps, map_letters(text, shift))


def running_key(text: str, key: str, encrypt: bool = True, trace: Optional[TraceSink] = None) -> str:
    processed = normalize_letter_key(key)
    steps = sink_or_null(trace)
    steps.record(f"Running Key Cipher: {'Encrypting' if encrypt else 'Decrypting'} with key \"{processed}\"")

    # Tile the key once so it covers every letter of the text
    repeats = max(1, math.ceil(count_letters(text) / len(processed)))
    stream = KeyStream(processed * repeats, cycle=False)
    if repeats > 1:
        steps.record(f"Extended key: \"{stream}\"")

    result = _shift_letters(text, stream, encrypt, steps)
    return record_result(steps, result)
