import numpy as np

from Nodes.Best_k import BestK
from Nodes.Point import as_point
from Nodes.Search_result import SearchResult
from Nodes.errors import DimensionMismatchError
from trees.logger import logger

DEFAULT_DIMENSION = 2
DEFAULT_K = 1


def _check_dimension(dimension):
    if isinstance(dimension, bool) or not isinstance(dimension, (int, np.integer)) or dimension < 1:
        raise ValueError(f"dimension debe ser un entero positivo, se recibio {dimension!r}")
    return int(dimension)


class KDTree:
    """KD-tree de dimension K sobre puntos en espacio euclidiano.

    Cada nodo es a su vez un KDTree: guarda un punto (value), el eje en el
    que divide (depth mod K) y sus subarboles left/right, que pueden ser
    None si no hay puntos de ese lado. Un arbol vacio tiene value = None.
    """

    def __init__(self, points=None, dimension=DEFAULT_DIMENSION, depth=0):
        self.dimension = _check_dimension(dimension)
        self.axis = depth % self.dimension   # el eje rota al bajar por el arbol
        self.value = None
        self.left = None
        self.right = None

        if points is None:
            return
        points = [self._validate(p) for p in points]
        if not points:
            return

        logger.debug("Construyendo KDTree: %d puntos, dimension %d", len(points), self.dimension)
        self._build(points, depth)

    @classmethod
    def build(cls, points, dimension=DEFAULT_DIMENSION, depth=0):
        return cls(points, dimension, depth)

    def _validate(self, point):
        point = as_point(point)
        if point.dimension != self.dimension:
            raise DimensionMismatchError(self.dimension, point.dimension)
        return point

    def _build(self, points, depth):
        """Ordena por el eje del nodo y divide por la mediana."""
        keys = np.array([p.coordinates[self.axis] for p in points])
        order = np.argsort(keys, kind="stable")
        sorted_points = [points[i] for i in order]

        pivot = len(sorted_points) // 2
        self.value = sorted_points[pivot]

        left_points = sorted_points[:pivot]
        right_points = sorted_points[pivot + 1:]
        if left_points:
            self.left = self._subtree(left_points, depth + 1)
        if right_points:
            self.right = self._subtree(right_points, depth + 1)

    def _subtree(self, points, depth):
        tree = KDTree(None, self.dimension, depth)
        tree._build(points, depth)
        return tree

    # --- estructura ---
    def is_leaf(self):
        return self.left is None and self.right is None

    def max_depth(self):
        """Profundidad maxima: 0 si esta vacio, 1 para una hoja.
        Recorre todo el arbol."""
        if self.value is None:
            return 0
        deepest = 0
        stack = [(self, 1)]
        while stack:
            node, depth = stack.pop()
            # un nodo vaciado por remove() no suma nivel
            if node.value is None:
                continue
            deepest = max(deepest, depth)
            for child in (node.left, node.right):
                if child is not None:
                    stack.append((child, depth + 1))
        return deepest

    def is_balanced(self):
        """Solo compara las profundidades de los dos hijos de la raiz."""
        if self.value is None or self.is_leaf():
            return True
        left_depth = self.left.max_depth() if self.left is not None else 0
        right_depth = self.right.max_depth() if self.right is not None else 0
        return abs(left_depth - right_depth) <= 1

    # --- mutacion ---
    def insert_point(self, point):
        """Inserta sin rebalancear; el arbol puede desbalancearse."""
        self._insert(self._validate(point))

    def _insert(self, point):
        node = self
        while node.value is not None:
            # en empate va a la derecha
            if point[node.axis] >= node.value[node.axis]:
                if node.right is None:
                    node.right = node._subtree([point], node.axis + 1)
                    return
                node = node.right
            else:
                if node.left is None:
                    node.left = node._subtree([point], node.axis + 1)
                    return
                node = node.left
        node.value = point

    def remove(self):
        """Quita el valor de este nodo y reconstruye el subarbol que cuelga de el."""
        if self.value is None:
            return
        logger.debug("Eliminando %r", self.value)

        points = []
        if self.left is not None:
            self.left.each(points.append)
        if self.right is not None:
            self.right.each(points.append)

        # axis = profundidad mod K se mantiene en el subarbol
        tree = KDTree(points, self.dimension, self.axis)
        self.value = tree.value
        self.left = tree.left
        self.right = tree.right

    def rebuild(self, exclude=None):
        """Devuelve un arbol nuevo y balanceado con los mismos puntos.

        Los puntos iguales a alguno de `exclude` no se incluyen.
        """
        exclude = [] if exclude is None else [as_point(p) for p in exclude]
        points = [p for p in self if p not in exclude]
        logger.debug("Reconstruyendo KDTree con %d puntos", len(points))
        return KDTree(points, self.dimension)

    # --- recorridos ---
    def each(self, visitor):
        """In-order, entrega solo los puntos."""
        for point in self:
            visitor(point)

    def pre_order(self, visitor):
        visitor(self)
        if self.left is not None:
            self.left.pre_order(visitor)
        if self.right is not None:
            self.right.pre_order(visitor)

    def in_order(self, visitor):
        if self.left is not None:
            self.left.in_order(visitor)
        visitor(self)
        if self.right is not None:
            self.right.in_order(visitor)

    def post_order(self, visitor):
        if self.left is not None:
            self.left.post_order(visitor)
        if self.right is not None:
            self.right.post_order(visitor)
        visitor(self)

    def __iter__(self):
        # in-order con pila explicita
        stack = []
        node = self
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            if node.value is not None:
                yield node.value
            node = node.right

    def __len__(self):
        count = 0
        for _ in self:
            count += 1
        return count

    # --- busqueda ---
    def nearest(self, target):
        """Punto mas cercano a target, o None si el arbol esta vacio."""
        results = self.nearest_k(target, 1)
        return results[0] if results else None

    def nearest_k(self, target, k=DEFAULT_K):
        """Hasta k SearchResult ordenados por distancia ascendente."""
        target = self._validate(target)
        best = BestK(k)
        self._nearest_k(target, best)
        results = best.values()
        logger.debug("nearest_k(k=%d): %d resultados", k, len(results))
        return results

    def _nearest_k(self, target, best):
        # un subarbol puede quedar vacio tras remove()
        if self.value is None:
            return

        my_result = SearchResult(self.value, target.distance_sq(self.value))
        if self.is_leaf():
            best.add(my_result)
            return

        target_coord = target[self.axis]
        split_coord = self.value[self.axis]
        if target_coord < split_coord:
            unsearched = self.right
            if self.left is not None:
                self.left._nearest_k(target, best)
        elif target_coord > split_coord:
            unsearched = self.left
            if self.right is not None:
                self.right._nearest_k(target, best)
        elif self.left is not None:
            unsearched = self.right
            self.left._nearest_k(target, best)
        else:
            unsearched = self.left
            self.right._nearest_k(target, best)

        # hasta tener k candidatos no se puede podar
        if unsearched is not None and not (best.is_full() and self._axis_too_far_from(target, best)):
            unsearched._nearest_k(target, best)

        # el nodo se agrega despues de decidir la poda
        best.add(my_result)

    def _axis_too_far_from(self, target, best):
        """La hiperesfera de radio = peor distancia no cruza el plano de corte."""
        d = self.value[self.axis] - target[self.axis]
        return best.worst().distance < d * d

    # --- depuracion ---
    def print_tree(self, offset=0):
        """Imprime el arbol rotado 90 grados (la derecha queda arriba)."""
        if self.right is not None:
            self.right.print_tree(offset + 2)
        print(" " * offset + ("" if self.value is None else str(self.value)))
        if self.left is not None:
            self.left.print_tree(offset + 2)

    def __repr__(self):
        return f"KDTree(dimension={self.dimension}, axis={self.axis}, value={self.value!r})"
