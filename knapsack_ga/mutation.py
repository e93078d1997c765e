"""
Mutation operators for the knapsack GA.

Implements independent per-gene bit-flip mutation.
"""

import numpy as np

from .data_models import Chromosome


def mutate(
    chromosome: Chromosome,
    mutation_rate: float,
    rng: np.random.Generator
) -> None:
    """
    Flip each gene independently with probability `mutation_rate`.

    Operates in place. The chromosome's fitness is stale afterwards and
    must be re-evaluated before it is used.

    Args:
        chromosome: Chromosome to mutate
        mutation_rate: Per-gene flip probability
        rng: Random number generator
    """
    draws = rng.random(len(chromosome.genes))
    for i, draw in enumerate(draws):
        if draw < mutation_rate:
            chromosome.genes[i] = 1 - chromosome.genes[i]
