import pytest

from cipher_toolkit import registry
from cipher_toolkit.errors import InvalidKeyError, UnknownAlgorithmError

TEXT = "Meet me at the Old Bridge, 10pm!"

ROUND_TRIP_PARAMS = {
    "atbash": {},
    "caesar": {"shift": 7},
    "affine": {"key_a": 5, "key_b": 8},
    "vigenere": {"key": "SECRET"},
    "gronsfeld": {"key": "31415"},
    "beaufort": {"key": "SECRET"},
    "autokey": {"key": "SECRET"},
    "running": {"key": "SECRET"},
    "railfence": {"rails": 3},
    "route": {"rows": 6, "cols": 6},
    "columnar": {"key": "3124"},
    "double": {"key": "3124", "key2": "2413"},
    "myszkowski": {"key": "SECRET"},
    "grilles": {"mask": "100010\n000001\n001000\n010000\n000100\n000000"},
}


def test_all_fifteen_algorithms_registered():
    ids = [info["id"] for info in registry.list_algorithms()]
    assert len(ids) == 15
    assert set(ids) == set(ROUND_TRIP_PARAMS) | {"hill"}


@pytest.mark.parametrize("algorithm_id", sorted(ROUND_TRIP_PARAMS))
def test_round_trip(algorithm_id):
    params = ROUND_TRIP_PARAMS[algorithm_id]
    text = TEXT[:16] if algorithm_id == "grilles" else TEXT
    encrypted, _ = registry.run(algorithm_id, text, encrypt=True, **params)
    decrypted, steps = registry.run(algorithm_id, encrypted, encrypt=False, **params)
    assert decrypted == text
    assert steps[-1] == f'Final result: "{text}"'


def test_run_returns_steps():
    result, steps = registry.run("caesar", "Hello", shift=3)
    assert result == "Khoor"
    assert steps[0] == "Caesar Cipher: Encrypting with shift key 3"


def test_run_ignores_unrelated_params():
    result, _ = registry.run("caesar", "Hello", shift=3, rails=9, key="IGNORED")
    assert result == "Khoor"


def test_reciprocal_algorithms_ignore_mode():
    assert registry.get_algorithm("beaufort").reciprocal
    assert registry.run("beaufort", "HELLO", encrypt=False, key="KEY")[0] == "DANZQ"


def test_missing_key_parameter():
    with pytest.raises(InvalidKeyError) as exc:
        registry.run("affine", "text", key_a=5)
    assert exc.value.value == ["key_b"]


def test_unknown_algorithm():
    with pytest.raises(UnknownAlgorithmError):
        registry.run("enigma", "text")


def test_presets_are_valid_keys():
    p = registry.PRESETS
    registry.run("hill", "HELLO", matrix=p["matrix"])
    registry.run("columnar", "HELLO", key=p["columnar_key"])
    registry.run("double", "HELLO", key=p["double_keys"][0], key2=p["double_keys"][1])
    registry.run("grilles", "HELLO", mask=p["mask"])
    registry.run("route", "HELLO", rows=p["rows"], cols=p["cols"])
    registry.run("affine", "HELLO", key_a=p["key_a"], key_b=p["key_b"])
