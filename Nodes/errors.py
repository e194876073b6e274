class KDTreeError(Exception):
    """Error base de todas las operaciones del KD-tree."""


class InvalidPointError(KDTreeError, TypeError):
    """Las coordenadas no forman un vector valido."""


class DimensionMismatchError(KDTreeError, ValueError):
    """El punto no tiene la dimension del arbol."""

    def __init__(self, expected, got):
        self.expected = expected
        self.got = got
        super().__init__(f"Dimension incorrecta: se esperaba {expected}, se recibio {got}")


class IndexOutOfRangeError(KDTreeError, IndexError):
    """Acceso a un eje fuera de [0, dimension)."""
