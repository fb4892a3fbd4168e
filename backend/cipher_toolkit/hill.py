from typing import Optional

from .alphabet import alphabetic_projection, is_letter
from .keys import KeyMatrix
from .matrix import multiply_block
from .trace import TraceSink, record_result, sink_or_null

BLOCK_SIZE = 2
FILLER = 'X'


def hill(text: str, matrix, encrypt: bool = True, trace: Optional[TraceSink] = None) -> str:
    """
    2x2 Hill cipher over the uppercased letters of `text`.

    Letters are padded with 'X' to an even count and multiplied block by block
    with the key matrix (or its inverse mod 26 when decrypting). The output
    letters go back into the original letter positions in their original
    case; other characters stay where they were. A filler letter that has no
    position left is appended at the end.
    """
    key = KeyMatrix.from_rows(matrix)
    steps = sink_or_null(trace)
    steps.record(f"Hill Cipher: {'Encrypting' if encrypt else 'Decrypting'} with key matrix {key}")

    active = key
    if not encrypt:
        active = key.inverse()
        steps.record(f"Calculated inverse matrix: {active}")

    letters = alphabetic_projection(text)
    if len(letters) % BLOCK_SIZE:
        letters += FILLER
    steps.record(f"Processed text: \"{letters}\"")

    transformed = []
    for i in range(0, len(letters), BLOCK_SIZE):
        block = letters[i:i + BLOCK_SIZE]
        vector = [ord(c) - ord('A') for c in block]
        out = ''.join(chr(ord('A') + y) for y in multiply_block(active.rows, vector))
        steps.record(f"[{','.join(block)}] → [{','.join(out)}] (Matrix multiplication)")
        transformed.append(out)
    stream = ''.join(transformed)

    # Restore positions and case
    result = []
    last_lower = False
    index = 0
    for char in text:
        if is_letter(char):
            last_lower = char.islower()
            result.append(stream[index].lower() if last_lower else stream[index])
            index += 1
        else:
            result.append(char)
    tail = stream[index:]
    result.append(tail.lower() if last_lower else tail)

    return record_result(steps, ''.join(result))
