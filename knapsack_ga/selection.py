"""
Parent selection for the knapsack GA.

Tournament selection where both parents come from one shared sample
sequence: parent A is the fittest sampled individual and parent B is the
individual that held the lead just before A took it.
"""

from typing import Sequence, Tuple

import numpy as np

from .data_models import Chromosome


def tournament_selection(
    population: Sequence[Chromosome],
    rng: np.random.Generator,
    rounds: int = 10
) -> Tuple[Chromosome, Chromosome]:
    """
    Select a parent pair by tournament sampling.

    Draws `rounds` uniformly random indices. Whenever a drawn individual is
    strictly fitter than the current leader, the old leader becomes the
    runner-up and the drawn index becomes the leader. The leader starts at
    index 0 with fitness 0, so if no sampled individual has positive fitness
    both parents are population[0].

    Args:
        population: Population to sample from
        rng: Random number generator
        rounds: Number of samples drawn

    Returns:
        Tuple of (parent_a, parent_b)

    Raises:
        ValueError: If population is empty
    """
    if len(population) == 0:
        raise ValueError("Cannot select parents from an empty population")

    best_idx = 0
    runner_up_idx = 0
    max_fitness = 0

    for _ in range(rounds):
        idx = int(rng.integers(0, len(population)))
        # Strict comparison: first seen wins on ties
        if population[idx].fitness > max_fitness:
            max_fitness = population[idx].fitness
            runner_up_idx = best_idx
            best_idx = idx

    return population[best_idx], population[runner_up_idx]
