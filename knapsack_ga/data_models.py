"""
Data models for the knapsack GA.

Core data structures representing items, chromosomes, the best-found record,
the problem definition, GA parameters and the per-generation run state.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Optional, Any, Sequence, Tuple, List

import numpy as np


@dataclass(frozen=True)
class Item:
    """
    A single knapsack item.

    Attributes:
        weight: Non-negative weight counted against the capacity
        value: Non-negative value added to fitness when the item is chosen
        name: Optional label used only for presentation
    """
    weight: float
    value: float
    name: Optional[str] = None

    def __post_init__(self):
        """Validate item."""
        if self.weight < 0:
            raise ValueError(f"Item weight must be non-negative, got {self.weight}")
        if self.value < 0:
            raise ValueError(f"Item value must be non-negative, got {self.value}")


@dataclass
class Chromosome:
    """
    Binary inclusion vector over the item list (individual in GA population).

    Attributes:
        genes: One 0/1 gene per item, in item order
        fitness: Score written by the fitness evaluator (0 until evaluated)
    """
    genes: List[int]
    fitness: float = 0

    @classmethod
    def create(cls, length: int, rng: np.random.Generator) -> "Chromosome":
        """
        Create a chromosome with uniformly random genes.

        Args:
            length: Number of genes (item count)
            rng: Random number generator

        Returns:
            New Chromosome with fitness 0
        """
        return cls(genes=rng.integers(0, 2, size=length).tolist())

    def copy_genes(self) -> List[int]:
        """Return an independent snapshot of the genes."""
        return list(self.genes)

    def copy(self) -> "Chromosome":
        """
        Create a deep copy of this chromosome.

        Returns:
            New Chromosome with copied genes and the same fitness
        """
        return Chromosome(genes=self.copy_genes(), fitness=self.fitness)

    def selected_indices(self) -> List[int]:
        """Indices of genes set to 1."""
        return [i for i, gene in enumerate(self.genes) if gene == 1]

    def __len__(self) -> int:
        """Number of genes."""
        return len(self.genes)


@dataclass(frozen=True)
class BestRecord:
    """
    Snapshot of a generation's best chromosome.

    Attributes:
        genes: Copy of the winning genes (never aliases a live chromosome)
        fitness: Fitness of the winning chromosome
    """
    genes: Tuple[int, ...]
    fitness: float

    @classmethod
    def from_chromosome(cls, chromosome: Chromosome) -> "BestRecord":
        return cls(genes=tuple(chromosome.copy_genes()), fitness=chromosome.fitness)

    def selected_items(self, items: Sequence[Item]) -> List[Tuple[int, Item]]:
        """
        Map selected gene positions back to items.

        Args:
            items: Item list in gene order

        Returns:
            List of (index, item) for every gene set to 1
        """
        return [(i, items[i]) for i, gene in enumerate(self.genes) if gene == 1]

    def total_weight(self, items: Sequence[Item]) -> float:
        return sum(item.weight for _, item in self.selected_items(items))

    def total_value(self, items: Sequence[Item]) -> float:
        return sum(item.value for _, item in self.selected_items(items))


@dataclass(frozen=True)
class KnapsackProblem:
    """
    Problem data derived from the item list.

    Attributes:
        items: Original items, in gene order
        weights: Item weights, parallel to items
        values: Item values, parallel to items
        capacity: Maximum total weight of a feasible selection
    """
    items: Tuple[Item, ...]
    weights: Tuple[float, ...]
    values: Tuple[float, ...]
    capacity: float

    @classmethod
    def from_items(cls, items: Sequence[Item], capacity: float) -> "KnapsackProblem":
        """
        Build parallel weight/value arrays from an item list.

        Raises:
            ValueError: If the item list is empty or capacity is negative
        """
        if not items:
            raise ValueError("KnapsackProblem must contain at least one item")
        if capacity < 0:
            raise ValueError(f"Capacity must be non-negative, got {capacity}")

        items = tuple(items)
        return cls(
            items=items,
            weights=tuple(item.weight for item in items),
            values=tuple(item.value for item in items),
            capacity=capacity,
        )

    def __len__(self) -> int:
        """Number of items (chromosome length)."""
        return len(self.items)


@dataclass(frozen=True)
class GAConfig:
    """
    GA parameters.

    Attributes:
        population_cap: Number of chromosomes per generation
        max_capacity: Knapsack capacity used by the fitness function
        max_generation: Number of generation transitions to run
        mutation_rate: Per-gene flip probability
        crossover_rate: Probability that a parent pair is recombined
        tournament_rounds: Samples drawn per tournament
        random_seed: Seed for the run's random generator (None = random)
    """
    population_cap: int = 25
    max_capacity: float = 400
    max_generation: int = 100
    mutation_rate: float = 0.1
    crossover_rate: float = 0.75
    tournament_rounds: int = 10
    random_seed: Optional[int] = None

    def __post_init__(self):
        """Validate parameters."""
        for name in ("population_cap", "max_generation", "tournament_rounds"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        for name in ("max_capacity", "mutation_rate", "crossover_rate"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")
        if self.population_cap <= 0:
            raise ValueError(f"population_cap must be positive, got {self.population_cap}")
        if self.max_generation < 0:
            raise ValueError(f"max_generation must be non-negative, got {self.max_generation}")
        if self.max_capacity < 0:
            raise ValueError(f"max_capacity must be non-negative, got {self.max_capacity}")
        for name in ("mutation_rate", "crossover_rate"):
            rate = getattr(self, name)
            if not 0.0 <= rate <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {rate}")
        if self.tournament_rounds <= 0:
            raise ValueError(f"tournament_rounds must be positive, got {self.tournament_rounds}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GAConfig":
        """
        Create config from dictionary (e.g., from YAML).

        Raises:
            ValueError: If the dictionary contains unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown GA config keys: {sorted(unknown)}")
        return cls(**data)

    def with_overrides(self, **overrides) -> "GAConfig":
        return replace(self, **overrides)


class RunPhase(Enum):
    """Lifecycle of one engine run."""
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    EVALUATING = "evaluating"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class RunState:
    """
    Immutable snapshot of a run, passed from one generation step to the next.

    Attributes:
        phase: Current lifecycle phase
        generation: Generation index (0 after initialization)
        population: Current population, exactly population_cap chromosomes
        best: Best record of the latest recorded generation
        average_fitness: Average fitness of the latest recorded generation
    """
    phase: RunPhase
    generation: int = 0
    population: Tuple[Chromosome, ...] = field(default_factory=tuple)
    best: Optional[BestRecord] = None
    average_fitness: Optional[float] = None

    def evolve(self, **changes) -> "RunState":
        """Return a copy of this state with the given fields replaced."""
        return replace(self, **changes)
