"""
Reporting utilities for the knapsack GA.

Callbacks that plug into GAEngine: console progress output, an in-memory
fitness history, a matplotlib fitness chart and a console presenter for the
final best combination. The engine itself never imports this module.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .data_models import BestRecord, Item, RunState


class ConsoleProgressReporter:
    """Prints the best and average fitness of every `every`-th generation."""

    def __init__(self, every: int = 1, last_generation: Optional[int] = None):
        self.every = max(1, every)
        self.last_generation = last_generation

    def __call__(self, state: RunState) -> None:
        if state.generation % self.every != 0 and state.generation != self.last_generation:
            return
        print(f"  Generation: {state.generation:4d}  "
              f"BEST: {state.best.fitness}  AVG: {state.average_fitness:.2f}")


class FitnessHistory:
    """
    Records per-generation statistics of a run.

    Use as the engine's on_generation callback.
    """

    def __init__(self):
        self.generations: List[int] = []
        self.average_fitness: List[float] = []
        self.best_fitness: List[float] = []

    def __call__(self, state: RunState) -> None:
        self.generations.append(state.generation)
        self.average_fitness.append(state.average_fitness)
        self.best_fitness.append(state.best.fitness)

    def rows(self) -> List[Tuple[int, float, float]]:
        """Rows of (generation, average_fitness, best_fitness)."""
        return list(zip(self.generations, self.average_fitness, self.best_fitness))

    def __len__(self) -> int:
        return len(self.generations)


def plot_fitness_history(
    history: FitnessHistory,
    output_path: Path,
    figsize: Tuple[int, int] = (10, 6)
) -> Path:
    """
    Plot average and best fitness per generation and save as PNG.

    Args:
        history: Recorded fitness history
        output_path: Path to save PNG file
        figsize: Figure size (width, height) in inches

    Returns:
        Path to saved PNG file
    """
    # Non-interactive backend to avoid display issues
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(history.generations, history.average_fitness, label='Average fitness', color='tab:blue')
    ax.plot(history.generations, history.best_fitness, label='Generation best',
            color='tab:orange', linestyle='--')
    ax.set_xlabel('Generation')
    ax.set_ylabel('Fitness')
    ax.set_title('Fitness per generation')
    ax.grid(True, alpha=0.3)
    ax.legend()

    fig.tight_layout()
    fig.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return output_path


def print_best_combination(best: BestRecord, items: Sequence[Item]) -> None:
    """Print the chosen items and their totals."""
    selected = best.selected_items(items)

    print()
    print("=" * 70)
    print("BEST COMBINATION")
    print("=" * 70)
    if not selected:
        print("  (no items selected)")
    for idx, item in selected:
        name = item.name or f"item_{idx:03d}"
        print(f"  [{idx:3d}] {name:<30} weight={item.weight:<8} value={item.value}")
    print("-" * 70)
    print(f"  Items selected: {len(selected)}/{len(items)}")
    print(f"  Total weight:   {best.total_weight(items)}")
    print(f"  Total value:    {best.total_value(items)}")
    print(f"  Fitness:        {best.fitness}")
