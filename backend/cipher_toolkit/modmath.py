from .errors import NoInverseError

ALPHABET_SIZE = 26


def true_mod(n: int, m: int = ALPHABET_SIZE) -> int:
    """Remainder in [0, m) for negative n as well"""
    # Python floors the quotient, so % never goes negative for m > 0
    return n % m


def gcd(a: int, b: int) -> int:
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def mod_inverse(a: int, m: int = ALPHABET_SIZE) -> int:
    """Multiplicative inverse of a modulo m."""
    # m is the alphabet size, so a linear search is instant
    a = true_mod(a, m)
    for x in range(1, m):
        if (a * x) % m == 1:
            return x
    raise NoInverseError(f"Modular inverse does not exist for a={a} and m={m}", value=a)
