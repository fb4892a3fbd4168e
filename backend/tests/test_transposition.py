import pytest

from cipher_toolkit.errors import EmptyKeyError, InvalidKeyError, TextTooLongError
from cipher_toolkit.grid import ranked_columns, spiral_order, zigzag_rails
from cipher_toolkit.keys import GrilleMask
from cipher_toolkit.trace import StepTrace
from cipher_toolkit.transposition import (
    columnar, double_transposition, grille, grille_positions, myszkowski, myszkowski_ranks, rail_fence, route,
)

GRILLE = "1000\n0001\n0010\n0100"


def test_zigzag_and_spiral_orders():
    assert zigzag_rails(7, 3) == [0, 1, 2, 1, 0, 1, 2]
    assert spiral_order(2, 3) == [(0, 0), (0, 1), (0, 2), (1, 2), (1, 1), (1, 0)]
    assert ranked_columns([3, 1, 2, 4]) == [[1], [2], [0], [3]]
    assert ranked_columns([4, 3, 2, 1, 4, 3]) == [[3], [2], [1, 5], [0, 4]]


def test_rail_fence():
    assert rail_fence("WEAREDISCOVEREDFLEEATONCE", 3) == "WECRLTEERDSOEEFEAOCAIVDEN"
    assert rail_fence("WECRLTEERDSOEEFEAOCAIVDEN", 3, encrypt=False) == "WEAREDISCOVEREDFLEEATONCE"


def test_rail_fence_more_rails_than_text():
    assert rail_fence("AB", 5) == "AB"
    assert rail_fence("AB", 5, encrypt=False) == "AB"


def test_rail_fence_keeps_spaces():
    text = "we are discovered"
    assert rail_fence(rail_fence(text, 4), 4, encrypt=False) == text


@pytest.mark.parametrize("rails", [0, 1, -3])
def test_rail_fence_needs_two_rails(rails):
    with pytest.raises(InvalidKeyError):
        rail_fence("text", rails)


def test_route_spiral():
    assert route("HELLOWORLDAB", 3, 4) == "HELLRBADLOWO"
    assert route("HELLRBADLOWO", 3, 4, encrypt=False) == "HELLOWORLDAB"


def test_route_skips_unfilled_cells():
    assert route("HELLO", 2, 3) == "HELOL"
    assert route("HELOL", 2, 3, encrypt=False) == "HELLO"


def test_route_rejects_overflow_and_small_grid():
    with pytest.raises(TextTooLongError):
        route("TOO LONG TEXT", 3, 4)
    with pytest.raises(InvalidKeyError):
        route("TEXT", 1, 4)


def test_columnar_padded_grid():
    assert columnar("HELLOWORLD  ", "3124") == "EWDLO HOLLR "
    assert columnar("EWDLO HOLLR ", "3124", encrypt=False) == "HELLOWORLD  "


def test_columnar_short_last_row():
    assert columnar("HELLOWORLD", "3124") == "EWDLOHOLLR"
    assert columnar("EWDLOHOLLR", "3124", encrypt=False) == "HELLOWORLD"


def test_columnar_decrypt_trace_has_column_lengths():
    trace = StepTrace()
    columnar("EWDLOHOLLR", "3124", encrypt=False, trace=trace)
    assert "Column lengths: 3 3 2 2" in trace.lines
    assert trace[-1] == 'Final result: "HELLOWORLD"'


@pytest.mark.parametrize("key", ["1121", "0", "907", "54321"])
def test_columnar_round_trip(key):
    text = "Attack at dawn, hold the bridge."
    assert columnar(columnar(text, key), key, encrypt=False) == text


def test_columnar_key_validation():
    with pytest.raises(EmptyKeyError):
        columnar("text", "")
    with pytest.raises(InvalidKeyError):
        columnar("text", "31a4")


def test_double_transposition():
    assert double_transposition("HELLOWORLD", "3124", "2413") == "DOEOLLLWHR"
    assert double_transposition("DOEOLLLWHR", "3124", "2413", encrypt=False) == "HELLOWORLD"


def test_double_transposition_validates_both_keys():
    trace = StepTrace()
    with pytest.raises(InvalidKeyError):
        double_transposition("HELLO", "3124", "24x3", trace=trace)
    assert len(trace) == 0


def test_myszkowski():
    assert myszkowski_ranks("TOMATO") == [4, 3, 2, 1, 4, 3]
    assert myszkowski("WEAREDISCOVEREDFLEEATONCE", "TOMATO") == "ROFOACDTEDSEEEACWEIVRLENE"
    assert myszkowski("ROFOACDTEDSEEEACWEIVRLENE", "tomato", encrypt=False) == "WEAREDISCOVEREDFLEEATONCE"


def test_myszkowski_round_trip_with_spaces():
    text = "we are discovered, flee at once"
    assert myszkowski(myszkowski(text, "BALLOON"), "BALLOON", encrypt=False) == text


def test_myszkowski_empty_key():
    with pytest.raises(EmptyKeyError):
        myszkowski("text", "1234")


def test_grille_full():
    assert grille("ABCDEFGHIJKLMNOP", GRILLE) == "AMIEFJNBKGCOPDHL"
    assert grille("AMIEFJNBKGCOPDHL", GRILLE, encrypt=False) == "ABCDEFGHIJKLMNOP"


def test_grille_partial_text():
    assert grille("HELLO", GRILLE) == "HOELL"
    assert grille("HOELL", GRILLE, encrypt=False) == "HELLO"


def test_grille_non_square_mask():
    mask = GrilleMask.parse("110\n000")
    assert [len(p) for p in grille_positions(mask)] == [2, 1, 1, 1]
    assert grille("ABCDE", mask) == "ABECD"
    assert grille("ABECD", mask, encrypt=False) == "ABCDE"


def test_grille_too_long():
    with pytest.raises(TextTooLongError) as exc:
        grille("ABCDEFGHIJKLMNOPQ", GRILLE)
    assert exc.value.value == 17


@pytest.mark.parametrize("mask,error", [
    ("10\n1", InvalidKeyError),
    ("10\n2x", InvalidKeyError),
    ("", EmptyKeyError),
    ("  \n ", EmptyKeyError),
])
def test_grille_mask_validation(mask, error):
    with pytest.raises(error):
        grille("AB", mask)


def test_grille_trace_records_rotations():
    trace = StepTrace()
    grille("ABCDEFGH", GRILLE, trace=trace)
    assert trace[0] == "Grilles Cipher: Encrypting with 4×4 grille"
    assert "Rotation 0°:" in trace.lines
    assert "Rotation 90°:" in trace.lines
    assert "Rotation 180°:" not in trace.lines


def test_rail_fence_trace_only_shows_touched_rails():
    trace = StepTrace()
    assert rail_fence("HI", 2_000_000, trace=trace) == "HI"
    assert trace.lines == [
        "Rail Fence Cipher: Encrypting with 2000000 rails",
        "Rail fence pattern:",
        "H·",
        "·I",
        'Final result: "HI"',
    ]


def test_grille_trace_shows_capacity():
    trace = StepTrace()
    grille("AB", GRILLE, trace=trace)
    assert trace[1] == "Capacity: 16 characters (4 holes × 4 rotations)"


def test_grille_overlapping_mask_capacity_message():
    with pytest.raises(TextTooLongError) as exc:
        grille("ABCDE", "11\n11")
    assert "the 4 holes expose only 4 distinct cells over 4 rotations, not 16" in str(exc.value)
