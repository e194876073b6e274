import numpy as np

from Nodes.errors import InvalidPointError, IndexOutOfRangeError


class Point:
    """Punto inmutable de K coordenadas con un payload opcional.

    Las coordenadas se guardan como un arreglo numpy de solo lectura.
    x, y, z son accesos directos a los tres primeros ejes.
    """

    __slots__ = ("_coords", "_payload")

    def __init__(self, coordinates, payload=None):
        if isinstance(coordinates, Point):
            coords = coordinates.coordinates
        elif isinstance(coordinates, (list, tuple, np.ndarray)):
            try:
                coords = np.array(coordinates, dtype=float)
            except (TypeError, ValueError):
                raise InvalidPointError(f"Punto invalido {coordinates!r}: coordenadas no numericas")
        else:
            raise InvalidPointError(
                f"Punto invalido {coordinates!r}: debe ser Point, lista, tupla o numpy.ndarray"
            )

        if coords.ndim != 1 or coords.size == 0:
            raise InvalidPointError(f"Punto invalido {coordinates!r}: se espera un vector 1-D no vacio")

        coords = coords.copy()
        coords.flags.writeable = False
        object.__setattr__(self, "_coords", coords)
        object.__setattr__(self, "_payload", payload)

    def __setattr__(self, name, value):
        raise AttributeError("Point es inmutable")

    @property
    def coordinates(self):
        return self._coords

    @property
    def payload(self):
        return self._payload

    @property
    def dimension(self):
        return self._coords.size

    # acceso rapido para 1D, 2D y 3D
    @property
    def x(self):
        return self[0]

    @property
    def y(self):
        return self[1]

    @property
    def z(self):
        return self[2]

    def __getitem__(self, axis):
        if axis < 0 or axis >= self._coords.size:
            raise IndexOutOfRangeError(
                f"{axis} fuera de rango, debe estar entre 0 y {self._coords.size - 1}"
            )
        return self._coords[axis]

    def __len__(self):
        return self._coords.size

    def __iter__(self):
        return iter(self._coords)

    def distance_sq(self, other):
        """Distancia euclidiana al cuadrado (sin raiz)."""
        diff = self._coords - other.coordinates
        return float(diff @ diff)

    def distance(self, other):
        return float(np.sqrt(self.distance_sq(other)))

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        if not np.array_equal(self._coords, other.coordinates):
            return False
        return _same_payload(self._payload, other.payload)

    def __hash__(self):
        return hash(tuple(self._coords.tolist()))

    def __repr__(self):
        coords = ", ".join(repr(c) for c in self._coords.tolist())
        if self._payload is None:
            return f"Point([{coords}])"
        return f"Point([{coords}], payload={self._payload!r})"


def _same_payload(a, b):
    if a is b:
        return True
    # payloads numpy: == devuelve un arreglo
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return bool(np.array_equal(a, b))
    return bool(a == b)


def as_point(value):
    """Devuelve value si ya es un Point, si no lo construye."""
    if isinstance(value, Point):
        return value
    return Point(value)
