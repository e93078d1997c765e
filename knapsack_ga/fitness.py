"""
Fitness evaluation for the knapsack GA.

Fitness is the total value of the selected items, or 0 when the selection
exceeds the capacity. Infeasible selections are not penalised gradually;
they score the same as the empty selection.
"""

from typing import Sequence

from .data_models import Chromosome


def evaluate(
    chromosome: Chromosome,
    weights: Sequence[float],
    values: Sequence[float],
    capacity: float
) -> float:
    """
    Score a chromosome and store the result on it.

    Args:
        chromosome: Chromosome to score (fitness is overwritten)
        weights: Item weights, parallel to the genes
        values: Item values, parallel to the genes
        capacity: Maximum total weight

    Returns:
        The fitness written onto the chromosome

    Raises:
        ValueError: If weights, values and genes differ in length
    """
    if not len(weights) == len(values) == len(chromosome.genes):
        raise ValueError(
            f"Length mismatch: {len(chromosome.genes)} genes, "
            f"{len(weights)} weights, {len(values)} values"
        )

    fitness = 0
    total_weight = 0
    for gene, weight, value in zip(chromosome.genes, weights, values):
        if gene == 1:
            fitness += value
            total_weight += weight

    if total_weight > capacity:
        fitness = 0

    chromosome.fitness = fitness
    return fitness


def evaluate_population(
    population: Sequence[Chromosome],
    weights: Sequence[float],
    values: Sequence[float],
    capacity: float
) -> None:
    """Evaluate every chromosome of a population in order."""
    for chromosome in population:
        evaluate(chromosome, weights, values, capacity)
