class SearchResult:
    """Par (punto, distancia al cuadrado) devuelto por las busquedas.

    El orden es por distancia descendente: el resultado mas lejano es el
    "menor", asi queda en la cima de un heap de minimos (heapq) y es el
    primero en ser descartado.
    """

    __slots__ = ("point", "distance")

    def __init__(self, point, distance):
        self.point = point
        self.distance = distance

    @property
    def value(self):
        return self.point

    def __lt__(self, other):
        return self.distance > other.distance

    def __gt__(self, other):
        return self.distance < other.distance

    def __repr__(self):
        return f"SearchResult({self.point!r}, distance={self.distance!r})"
