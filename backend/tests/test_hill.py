import pytest

from cipher_toolkit.alphabet import alphabetic_projection
from cipher_toolkit.errors import InvalidKeyError
from cipher_toolkit.hill import hill
from cipher_toolkit.keys import KeyMatrix
from cipher_toolkit.trace import StepTrace

KEY = [[5, 8], [3, 7]]


def test_hill_block():
    assert hill("HI", KEY) == "VZ"
    assert hill("VZ", KEY, encrypt=False) == "HI"


def test_hill_pads_odd_text():
    # HELLO -> HELLOX; the filler block spills one letter past the input
    assert hill("Hello", KEY) == "Pxnguv"
    assert hill("Pxnguv", KEY, encrypt=False) == "Hellox"


def test_hill_keeps_punctuation_in_place():
    out = hill("Hi, there!", KEY)
    assert out[2:4] == ", "
    assert out[9] == "!"


def test_hill_round_trip_on_projection():
    text = "Meet me at the Old Bridge!"
    letters = alphabetic_projection(text)
    decrypted = hill(hill(text, KEY), KEY, encrypt=False)
    assert alphabetic_projection(decrypted) == letters + ("X" if len(letters) % 2 else "")


def test_hill_trace_shows_inverse():
    trace = StepTrace()
    hill("VZ", KEY, encrypt=False, trace=trace)
    assert trace[0] == "Hill Cipher: Decrypting with key matrix [[5,8],[3,7]]"
    assert trace[1] == "Calculated inverse matrix: [[3,4],[21,17]]"
    assert "[V,Z] → [H,I] (Matrix multiplication)" in trace.lines


@pytest.mark.parametrize("matrix", [[[2, 4], [6, 8]], [[1, 2], [3]], [[13, 0], [0, 1]], "abcd"])
def test_hill_rejects_bad_matrix(matrix):
    with pytest.raises(InvalidKeyError):
        hill("HI", matrix)


def test_key_matrix_variant():
    key = KeyMatrix.from_rows(KEY)
    assert key.determinant == 11
    assert key.inverse().as_lists() == [[3, 4], [21, 17]]
    assert hill("HI", key) == "VZ"
