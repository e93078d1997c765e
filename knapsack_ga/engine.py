"""
Generational GA engine for the knapsack problem.

The run is a bounded sequence of generation steps over an immutable
RunState. Each step is a plain function so a single generation can be
exercised in isolation; GAEngine wires the steps together, owns the random
generator and forwards progress and the final result to injected callbacks.

Lifecycle:
    UNINITIALIZED -> INITIALIZED -> EVALUATING(0..max_generation) -> TERMINAL
"""

from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .data_models import (
    BestRecord,
    Chromosome,
    GAConfig,
    Item,
    KnapsackProblem,
    RunPhase,
    RunState,
)
from .fitness import evaluate, evaluate_population
from .selection import tournament_selection
from .crossover import single_point_crossover
from .mutation import mutate
from .replacement import select_survivors

ProgressCallback = Callable[[float, int], None]
ResultCallback = Callable[[BestRecord, Sequence[Item]], None]
GenerationCallback = Callable[[RunState], None]


def initialize_population(
    problem: KnapsackProblem,
    config: GAConfig,
    rng: np.random.Generator
) -> RunState:
    """
    Create and evaluate the initial population.

    Args:
        problem: Knapsack problem data
        config: GA parameters
        rng: Random number generator

    Returns:
        RunState in EVALUATING phase at generation 0
    """
    population = []
    for _ in range(config.population_cap):
        candidate = Chromosome.create(len(problem), rng)
        evaluate(candidate, problem.weights, problem.values, problem.capacity)
        population.append(candidate)

    return RunState(
        phase=RunPhase.EVALUATING,
        generation=0,
        population=tuple(population),
    )


def summarize_population(population: Sequence[Chromosome]) -> Tuple[float, int]:
    """
    Average fitness and index of the fittest chromosome.

    The first chromosome wins ties.

    Returns:
        Tuple of (average_fitness, best_index)
    """
    best_idx = 0
    max_fitness = population[0].fitness
    total = 0
    for idx, chromosome in enumerate(population):
        if chromosome.fitness > max_fitness:
            max_fitness = chromosome.fitness
            best_idx = idx
        total += chromosome.fitness

    return total / len(population), best_idx


def record_generation(state: RunState) -> RunState:
    """
    Compute generation statistics and snapshot the generation's best.

    The best record is replaced every generation, even when the previous
    record was fitter.
    """
    average_fitness, best_idx = summarize_population(state.population)
    return state.evolve(
        best=BestRecord.from_chromosome(state.population[best_idx]),
        average_fitness=average_fitness,
    )


def breed_offspring(
    population: Sequence[Chromosome],
    problem: KnapsackProblem,
    config: GAConfig,
    rng: np.random.Generator
) -> List[Chromosome]:
    """
    Produce population_cap // 2 pairs of evaluated children.

    Each pair: tournament selection, crossover, mutation of both children,
    fitness evaluation of both children.

    Returns:
        List of 2 * (population_cap // 2) evaluated chromosomes
    """
    offspring = []
    for _ in range(config.population_cap // 2):
        parent_a, parent_b = tournament_selection(
            population, rng, rounds=config.tournament_rounds
        )
        genes_a, genes_b = single_point_crossover(
            parent_a.genes, parent_b.genes, config.crossover_rate, rng
        )
        children = [Chromosome(genes=genes_a), Chromosome(genes=genes_b)]
        for child in children:
            mutate(child, config.mutation_rate, rng)
        evaluate_population(children, problem.weights, problem.values, problem.capacity)
        offspring.extend(children)

    return offspring


def next_generation(
    state: RunState,
    problem: KnapsackProblem,
    config: GAConfig,
    rng: np.random.Generator
) -> RunState:
    """
    Breed offspring, select survivors and advance the generation counter.

    Args:
        state: Current run state (EVALUATING)
        problem: Knapsack problem data
        config: GA parameters
        rng: Random number generator

    Returns:
        New RunState for generation + 1

    Raises:
        ValueError: If the state is not in the EVALUATING phase
    """
    if state.phase is not RunPhase.EVALUATING:
        raise ValueError(f"Cannot advance a run in phase {state.phase.value}")

    offspring = breed_offspring(state.population, problem, config, rng)
    survivors = select_survivors(state.population, offspring, rng)

    return state.evolve(
        generation=state.generation + 1,
        population=tuple(survivors),
    )


class GAEngine:
    """
    Runs the generational loop for one knapsack instance.

    Args:
        items: Items in gene order
        config: GA parameters (defaults if omitted)
        rng: Random generator; built from config.random_seed if omitted
        on_progress: Called once per generation with (average_fitness, generation)
        on_result: Called once at termination with (best_record, items)
        on_generation: Called once per generation with the recorded RunState
    """

    def __init__(self,
                 items: Sequence[Item],
                 config: Optional[GAConfig] = None,
                 rng: Optional[np.random.Generator] = None,
                 on_progress: Optional[ProgressCallback] = None,
                 on_result: Optional[ResultCallback] = None,
                 on_generation: Optional[GenerationCallback] = None):
        self.items = list(items)
        self.config = config or GAConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.random_seed)
        self.on_progress = on_progress
        self.on_result = on_result
        self.on_generation = on_generation
        self.problem: Optional[KnapsackProblem] = None
        self.state = RunState(phase=RunPhase.UNINITIALIZED)

    def initialize(self) -> RunState:
        """Derive the problem arrays from the item list."""
        if self.state.phase is not RunPhase.UNINITIALIZED:
            return self.state

        self.problem = KnapsackProblem.from_items(self.items, self.config.max_capacity)
        self.state = RunState(phase=RunPhase.INITIALIZED)
        return self.state

    def run(self) -> RunState:
        """
        Run the GA to its generation budget.

        A finished engine does no further work: calling run() again returns
        the terminal state without invoking any callback.

        Returns:
            Terminal RunState; its `best` is the reported answer
        """
        if self.state.phase is RunPhase.TERMINAL:
            return self.state

        self.initialize()
        state = initialize_population(self.problem, self.config, self.rng)

        for _ in range(self.config.max_generation):
            state = self._record(state)
            state = next_generation(state, self.problem, self.config, self.rng)
        state = self._record(state)

        self.state = state.evolve(phase=RunPhase.TERMINAL)
        if self.on_result is not None:
            self.on_result(self.state.best, self.problem.items)

        return self.state

    def _record(self, state: RunState) -> RunState:
        state = record_generation(state)
        if self.on_progress is not None:
            self.on_progress(state.average_fitness, state.generation)
        if self.on_generation is not None:
            self.on_generation(state)
        return state


def solve(items: Sequence[Item], config: Optional[GAConfig] = None, **kwargs) -> BestRecord:
    """
    Run a GA with the given items and return the reported best record.

    Keyword arguments are forwarded to GAEngine.
    """
    return GAEngine(items, config, **kwargs).run().best
