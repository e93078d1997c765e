"""
Knapsack GA

Generational genetic algorithm for the 0/1 knapsack problem: choose a
subset of items maximising total value without exceeding a capacity.

Key Features:
- Binary chromosomes, one gene per item
- Hard capacity constraint (infeasible selections score 0)
- Shared-sequence tournament selection, midpoint crossover, bit-flip mutation
- Elitist N-of-(N+M) replacement with shuffle
- Seedable numpy random generator injected through the whole run
- Progress and result reporting through callbacks

Modules:
- data_models: Core data structures (Item, Chromosome, BestRecord, GAConfig, RunState)
- fitness: Capacity-constrained fitness evaluation
- selection: Tournament parent selection
- crossover: Single-point crossover
- mutation: Bit-flip mutation
- replacement: Survivor selection
- engine: Generation steps and GAEngine
- io_utils: Item CSV/YAML loading, result and history export
- reporting: Console, history and plot callbacks
- orchestration: End-to-end run workflow
- cli: Run configuration loading, validation and the knapsack-ga command
"""

__version__ = "0.1.0"

from .data_models import Item, Chromosome, BestRecord, GAConfig, KnapsackProblem, RunPhase, RunState
from .engine import GAEngine, solve

__all__ = [
    "Item",
    "Chromosome",
    "BestRecord",
    "GAConfig",
    "KnapsackProblem",
    "RunPhase",
    "RunState",
    "GAEngine",
    "solve",
]
