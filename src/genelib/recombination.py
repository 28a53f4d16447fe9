"""
Recombination primitives for chromosome implementations.

Stateless helpers for picking crossover points, ranges and index sets, plus
the common sequence crossovers: single-point, two-point, uniform and
partially-matched (PMX). Sequence crossovers accept lists, tuples or strings
and return children of the same type as their inputs.
"""

import random
from typing import Any, List, Sequence, Tuple, TypeVar

S = TypeVar("S", bound=Sequence[Any])


def bool_chance(rate: float) -> bool:
    """Bernoulli draw: True with probability `rate`."""
    return random.random() < rate


def get_crossover_point(length: int) -> int:
    """Return a random cut point in [0, length]."""
    return random.randint(0, length)


def get_crossover_range(length: int) -> Tuple[int, int]:
    """Return two random cut points, smaller first."""
    a = get_crossover_point(length)
    b = get_crossover_point(length)
    return (a, b) if a < b else (b, a)


def get_crossover_indices(length: int) -> List[int]:
    """Return the indices to swap in a uniform crossover, each chosen with probability 0.5."""
    return [i for i in range(length) if bool_chance(0.5)]


def pick_crossover_indices(length: int) -> List[int]:
    """Return a random sample of exactly half (rounded down) of the indices."""
    return random.sample(range(length), length // 2)


def get_random_indices(length: int, rate: float) -> List[int]:
    """Return indices chosen independently with probability `rate`, e.g. for mutation."""
    return [i for i in range(length) if bool_chance(rate)]


def _rebuild(template: S, items: List[Any]) -> S:
    if isinstance(template, str):
        return "".join(items)
    if isinstance(template, tuple):
        return tuple(items)
    return items


def single_point_crossover(left: S, right: S) -> Tuple[S, S]:
    """Swap the tails of two sequences after a random cut point."""
    point = get_crossover_point(len(left))
    left_child = list(left[:point]) + list(right[point:])
    right_child = list(right[:point]) + list(left[point:])
    return _rebuild(left, left_child), _rebuild(right, right_child)


def two_point_crossover(left: S, right: S) -> Tuple[S, S]:
    """Swap the segments of two sequences between two random cut points."""
    start, end = get_crossover_range(len(left))
    left_child = list(left[:start]) + list(right[start:end]) + list(left[end:])
    right_child = list(right[:start]) + list(left[start:end]) + list(right[end:])
    return _rebuild(left, left_child), _rebuild(right, right_child)


def uniform_crossover(left: S, right: S) -> Tuple[S, S]:
    """Swap the items at a random set of indices."""
    left_child = list(left)
    right_child = list(right)
    for i in get_crossover_indices(len(left)):
        left_child[i], right_child[i] = right[i], left[i]
    return _rebuild(left, left_child), _rebuild(right, right_child)


def pmx(left: S, right: S) -> Tuple[S, S]:
    """
    Partially-matched crossover for permutations.

    Items inside a random range are swapped between the parents. Items
    outside it are kept, except where keeping one would duplicate an item
    that moved in; those are replaced by following the mapping between the
    two swapped segments until a free item is reached.

    Args:
        left: First parent, a sequence with no repeated items
        right: Second parent, same length and same items as left

    Returns:
        Two children, each a permutation of the parents' items
    """
    start, end = get_crossover_range(len(left))
    left_segment = list(left[start:end])
    right_segment = list(right[start:end])
    left_child = []
    right_child = []
    for i in range(len(left)):
        if start <= i < end:
            left_item = right_segment[i - start]
            right_item = left_segment[i - start]
        else:
            left_item = _resolve_pmx_item(left[i], right_segment, left_segment)
            right_item = _resolve_pmx_item(right[i], left_segment, right_segment)
        left_child.append(left_item)
        right_child.append(right_item)
    return _rebuild(left, left_child), _rebuild(right, right_child)


def _resolve_pmx_item(item: Any, incoming: List[Any], outgoing: List[Any]) -> Any:
    while item in incoming:
        item = outgoing[incoming.index(item)]
    return item
