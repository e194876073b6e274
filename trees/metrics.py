import time
import random
import tracemalloc
import gc
import math

from Nodes.Best_k import BestK
from Nodes.Point import Point, as_point
from Nodes.Search_result import SearchResult
from .KD_tree import KDTree
from .logger import logger


def linear_nearest_k(points, target, k=1):
    """Busqueda exhaustiva: compara target con todos los puntos.
    Sirve de referencia para validar y comparar con el KDTree."""
    target = as_point(target)
    best = BestK(k)
    for p in points:
        p = as_point(p)
        best.add(SearchResult(p, target.distance_sq(p)))
    return best.values()


def _random_points(n, dimension, scale):
    return [Point([random.random() * scale for _ in range(dimension)], payload=i) for i in range(n)]


def benchmark_kdtree(sizes, dimension=2, queries=100, k=1, scale=100.0):
    """Construye arboles con puntos aleatorios y mide construccion y consultas.
    Retorna dict con listas: sizes, build_times, query_times, brute_times, mem_peaks, depths, balanced
    """
    sizes = list(sizes)
    build_times = []
    query_times = []
    brute_times = []
    mem_peaks = []
    depths = []
    balanced = []

    for n in sizes:
        points = _random_points(n, dimension, scale)
        targets = [Point([random.random() * scale for _ in range(dimension)]) for _ in range(queries)]

        gc.collect()
        tracemalloc.start()
        start = time.perf_counter()

        tree = KDTree(points, dimension)

        elapsed = time.perf_counter() - start
        current, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        start = time.perf_counter()
        for t in targets:
            tree.nearest_k(t, k)
        q_elapsed = time.perf_counter() - start

        start = time.perf_counter()
        for t in targets:
            linear_nearest_k(points, t, k)
        b_elapsed = time.perf_counter() - start

        build_times.append(elapsed)
        query_times.append(q_elapsed)
        brute_times.append(b_elapsed)
        mem_peaks.append(peak)
        depths.append(tree.max_depth())
        balanced.append(tree.is_balanced())

        logger.debug("benchmark n=%d: build %.4fs, %d consultas %.4fs (lineal %.4fs)",
                     n, elapsed, queries, q_elapsed, b_elapsed)

    return {
        'sizes': sizes,
        'build_times': build_times,
        'query_times': query_times,
        'brute_times': brute_times,
        'mem_peaks': mem_peaks,
        'depths': depths,
        'balanced': balanced
    }


def analyze_kdtree_instance(tree: KDTree):
    """Analiza un KDTree existente: tamano, profundidad frente a la optima y hojas."""
    leaves = []

    def walk(node):
        if node.value is not None and node.is_leaf():
            leaves.append(node)

    tree.pre_order(walk)

    n = len(tree)
    depth = tree.max_depth()
    optimal = math.ceil(math.log2(n + 1)) if n > 0 else 0

    return {
        'points': n,
        'max_depth': depth,
        'optimal_depth': optimal,
        'balanced': tree.is_balanced(),
        'num_leaves': len(leaves)
    }
