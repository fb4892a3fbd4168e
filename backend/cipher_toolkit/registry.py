import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from .errors import InvalidKeyError, UnknownAlgorithmError
from .hill import hill
from .polyalphabetic import autokey, beaufort, gronsfeld, running_key, vigenere
from .substitution import affine, atbash, caesar
from .trace import StepTrace
from .transposition import columnar, double_transposition, grille, myszkowski, rail_fence, route

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Algorithm:
    id: str
    name: str
    description: str
    category: str  # substitution | polyalphabetic | polygraphic | transposition
    subcategory: str  # monoalphabetic | none
    params: Tuple[str, ...]
    func: Callable[..., str]
    reciprocal: bool = False  # same call encrypts and decrypts, no mode flag

    def info(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "subcategory": self.subcategory,
            "params": list(self.params),
            "reciprocal": self.reciprocal,
        }


_ALGORITHMS = [
    # Single substitution - monoalphabetic
    Algorithm("atbash", "Atbash Cipher", "A simple substitution cipher that reverses the alphabet",
              "substitution", "monoalphabetic", (), atbash, reciprocal=True),
    Algorithm("caesar", "Caesar Cipher", "Shifts each letter by a fixed number of positions",
              "substitution", "monoalphabetic", ("shift",), caesar),
    Algorithm("affine", "Affine Cipher", "Uses a mathematical function to substitute letters",
              "substitution", "monoalphabetic", ("key_a", "key_b"), affine),

    # Multiple substitution - polyalphabetic
    Algorithm("vigenere", "Vigenère Cipher", "A polyalphabetic substitution cipher using a keyword",
              "polyalphabetic", "none", ("key",), vigenere),
    Algorithm("gronsfeld", "Gronsfeld Cipher", "Similar to Vigenère but uses numbers as the key",
              "polyalphabetic", "none", ("key",), gronsfeld),
    Algorithm("beaufort", "Beaufort Cipher", "A reciprocal cipher related to the Vigenère cipher",
              "polyalphabetic", "none", ("key",), beaufort, reciprocal=True),
    Algorithm("autokey", "Auto Key Cipher", "Uses the plaintext itself as part of the key",
              "polyalphabetic", "none", ("key",), autokey),
    Algorithm("running", "Running Key Cipher", "Uses a long text as the key",
              "polyalphabetic", "none", ("key",), running_key),

    # Multiple substitution - polygraphic
    Algorithm("hill", "Hill Cipher", "Uses matrix multiplication for encryption",
              "polygraphic", "none", ("matrix",), hill),

    # Transposition
    Algorithm("railfence", "Rail Fence Cipher", "Writes text in a zigzag pattern",
              "transposition", "none", ("rails",), rail_fence),
    Algorithm("route", "Route Cipher", "Writes text in a grid and reads it in a specific pattern",
              "transposition", "none", ("rows", "cols"), route),
    Algorithm("columnar", "Columnar Cipher", "Arranges text in columns and reads by column order",
              "transposition", "none", ("key",), columnar),
    Algorithm("double", "Double Transposition", "Applies columnar transposition twice",
              "transposition", "none", ("key", "key2"), double_transposition),
    Algorithm("myszkowski", "Myszkowski Cipher", "A variation of the columnar transposition cipher",
              "transposition", "none", ("key",), myszkowski),
    Algorithm("grilles", "Grilles Cipher", "Uses a perforated card for transposition",
              "transposition", "none", ("mask",), grille),
]

ALGORITHMS: Dict[str, Algorithm] = {alg.id: alg for alg in _ALGORITHMS}

# Keys the toolkit starts out with
PRESETS = {
    "shift": 3,
    "key_a": 5,
    "key_b": 8,
    "key": "SECRET",
    "rails": 3,
    "rows": 3,
    "cols": 4,
    "matrix": [[5, 8], [3, 7]],
    "columnar_key": "3124",
    "double_keys": ["3124", "2413"],
    "mask": "1000\n0001\n0010\n0100",
}


def get_algorithm(algorithm_id: str) -> Algorithm:
    try:
        return ALGORITHMS[algorithm_id]
    except KeyError:
        raise UnknownAlgorithmError(f"Algorithm not implemented: {algorithm_id!r}", value=algorithm_id)


def list_algorithms() -> List[dict]:
    return [alg.info() for alg in ALGORITHMS.values()]


def run(algorithm_id: str, text: str, encrypt: bool = True, **params) -> Tuple[str, List[str]]:
    """
    Run one algorithm and return (result, trace lines).

    Only the key parameters the algorithm declares are used; missing ones
    raise InvalidKeyError before anything is transformed.
    """
    algorithm = get_algorithm(algorithm_id)
    missing = [name for name in algorithm.params if params.get(name) is None]
    if missing:
        raise InvalidKeyError(f"{algorithm.name} requires key parameter(s): {', '.join(missing)}",
                              value=missing)

    args = [params[name] for name in algorithm.params]
    trace = StepTrace()
    logger.debug("Running %s (encrypt=%s) on %d characters", algorithm.id, encrypt, len(text))

    if algorithm.reciprocal:
        result = algorithm.func(text, *args, trace=trace)
    else:
        result = algorithm.func(text, *args, encrypt=encrypt, trace=trace)
    return result, trace.lines
