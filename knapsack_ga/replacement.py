"""
Survivor selection for the knapsack GA.

Elitist N-of-(N+M) truncation: parents and offspring compete in one pool,
the N fittest survive, and the survivors are shuffled before the next
generation samples from them.
"""

from typing import List, Sequence

import numpy as np

from .data_models import Chromosome


def select_survivors(
    population: Sequence[Chromosome],
    offspring: Sequence[Chromosome],
    rng: np.random.Generator
) -> List[Chromosome]:
    """
    Return the N best individuals out of N + M.

    Args:
        population: Current generation (N individuals)
        offspring: Newly bred individuals (M individuals, M may be < N)
        rng: Random number generator used for the final shuffle

    Returns:
        Shuffled list of the len(population) fittest individuals
    """
    pool = list(population) + list(offspring)
    # sorted() is stable, equal fitness keeps concatenation order
    pool = sorted(pool, key=lambda chromosome: chromosome.fitness)

    n_pool = len(pool)
    survivors = [pool[n_pool - 1 - i] for i in range(len(population))]

    # Generator.shuffle is an in-place Fisher-Yates
    rng.shuffle(survivors)
    return survivors
