"""
Crossover operators for the knapsack GA.

Implements probabilistic single-point crossover at the chromosome midpoint.
"""

from typing import List, Sequence, Tuple

import numpy as np


def single_point_crossover(
    parent_a: Sequence[int],
    parent_b: Sequence[int],
    crossover_rate: float,
    rng: np.random.Generator
) -> Tuple[List[int], List[int]]:
    """
    Combine two parent gene sequences using midpoint crossover.

    With probability `crossover_rate` both parents are cut at
    len // 2 and their tails are swapped. Otherwise the children are
    exact copies of the parents.

    Args:
        parent_a: Genes of the first parent
        parent_b: Genes of the second parent
        crossover_rate: Probability of recombining
        rng: Random number generator

    Returns:
        Tuple of (child_a_genes, child_b_genes), newly allocated lists

    Raises:
        ValueError: If parents differ in length
    """
    if len(parent_a) != len(parent_b):
        raise ValueError(
            f"Parents must have equal length, got {len(parent_a)} and {len(parent_b)}"
        )

    if rng.random() < crossover_rate:
        mid = len(parent_a) // 2
        child_a = list(parent_a[:mid]) + list(parent_b[mid:])
        child_b = list(parent_b[:mid]) + list(parent_a[mid:])
    else:
        child_a = list(parent_a)
        child_b = list(parent_b)

    return child_a, child_b
