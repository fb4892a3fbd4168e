class CipherError(ValueError):
    """Base class for every failure raised by the cipher engine."""

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value


class EmptyKeyError(CipherError):
    """Key has no usable symbols left after filtering."""


class InvalidKeyError(CipherError):
    """Key fails an algorithm specific structural or numeric check."""


class NoInverseError(InvalidKeyError):
    """Modular inverse requested for a value that is not invertible."""


class TextTooLongError(CipherError):
    """Text does not fit into the grid the key describes."""


class UnknownAlgorithmError(CipherError):
    pass
