import heapq

import numpy as np


class BestK:
    """Coleccion acotada con los k resultados mas cercanos vistos.

    Se guarda como heap: por el orden de SearchResult la cima es siempre
    el peor resultado retenido.
    """

    def __init__(self, capacity=1):
        if isinstance(capacity, bool) or not isinstance(capacity, (int, np.integer)) or capacity < 1:
            raise ValueError(f"k debe ser un entero >= 1, se recibio {capacity}")
        self.capacity = capacity
        self.held = []

    def is_full(self):
        return len(self.held) == self.capacity

    def worst(self):
        if not self.held:
            return None
        return self.held[0]

    def add(self, result):
        if not self.is_full():
            heapq.heappush(self.held, result)
        elif result.distance < self.held[0].distance:
            # entra el nuevo y sale el peor
            heapq.heapreplace(self.held, result)
        return self

    def values(self):
        """Resultados ordenados por distancia ascendente."""
        return sorted(self.held, key=lambda r: r.distance)

    def __len__(self):
        return len(self.held)

    def __repr__(self):
        return f"BestK({self.values()})"
