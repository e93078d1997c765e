"""
Orchestration module for the knapsack GA.

Implements the end-to-end run workflow: configuration, item loading,
engine run, console reporting and result export.
"""

from typing import Dict
from pathlib import Path
import numpy as np

from .cli import load_ga_config
from .data_models import RunState
from .engine import GAEngine
from .io_utils import load_items, save_best_record, save_fitness_history
from .reporting import (
    ConsoleProgressReporter,
    FitnessHistory,
    plot_fitness_history,
    print_best_combination,
)


def run_knapsack(run_config: Dict) -> RunState:
    """
    Run the GA on the configured item list and export the results.

    Args:
        run_config: Run configuration dict from YAML

    Algorithm:
        1. Load GA config (run_config['ga_config'] or packaged defaults),
           apply run_config['ga'] overrides
        2. Setup RNG (use run_config['random_seed'] or GA config seed)
        3. Load items from run_config['input']['items']
        4. Create output directory: run_config['output']['root']
        5. Run GAEngine with console and history reporters
        6. Print best combination
        7. Save best_solution.csv, fitness_history.csv and optionally
           fitness_history.png

    Returns:
        Terminal RunState of the engine
    """
    print("=" * 70)
    print("KNAPSACK GA")
    print("=" * 70)

    # Load GA configuration
    ga_config_path = run_config.get('ga_config')
    print(f"Loading GA config from: {ga_config_path or 'packaged defaults'}")
    ga_config = load_ga_config(ga_config_path, run_config.get('ga'))

    # Setup RNG
    seed = run_config.get('random_seed', ga_config.random_seed)
    if seed is None:
        seed = int(np.random.randint(0, 2**31))
    print(f"Random seed: {seed}")
    ga_config = ga_config.with_overrides(random_seed=seed)
    rng = np.random.default_rng(seed)

    # Load items
    items_path = run_config['input']['items']
    print(f"Loading items from: {items_path}")
    items = load_items(items_path)
    print(f"Items: {len(items)}")
    print(f"Capacity: {ga_config.max_capacity}")
    print(f"Population: {ga_config.population_cap}, generations: {ga_config.max_generation}")
    print(f"Mutation rate: {ga_config.mutation_rate}, crossover rate: {ga_config.crossover_rate}")

    # Create output directory
    output_config = run_config['output']
    output_root = Path(output_config['root'])
    overwrite = output_config.get('overwrite', False)

    if output_root.exists() and not overwrite:
        raise FileExistsError(
            f"Output directory already exists: {output_root}\n"
            f"Set 'output.overwrite: true' in config to overwrite"
        )

    output_root.mkdir(parents=True, exist_ok=overwrite)
    print(f"Output directory: {output_root}\n")

    # Run
    history = FitnessHistory()
    console = ConsoleProgressReporter(
        every=output_config.get('progress_every', 1),
        last_generation=ga_config.max_generation,
    )

    def on_generation(state: RunState) -> None:
        history(state)
        console(state)

    print(f"Running {ga_config.max_generation} generations...")
    engine = GAEngine(
        items,
        ga_config,
        rng=rng,
        on_result=print_best_combination,
        on_generation=on_generation,
    )
    final_state = engine.run()

    # Save results
    best_path = save_best_record(
        final_state.best, items, output_root / 'best_solution.csv', overwrite=overwrite
    )
    history_path = save_fitness_history(history.rows(), output_root / 'fitness_history.csv')

    plot_path = None
    if output_config.get('plot', True):
        plot_path = plot_fitness_history(history, output_root / 'fitness_history.png')

    # Print summary
    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Generations run: {final_state.generation}")
    print(f"Best fitness: {final_state.best.fitness}")
    print(f"Best solution: {best_path}")
    print(f"Fitness history: {history_path}")
    if plot_path is not None:
        print(f"Fitness plot: {plot_path}")

    return final_state
