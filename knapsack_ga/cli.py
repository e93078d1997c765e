"""
CLI module for the knapsack GA.

Handles run configuration loading, validation, dispatch to the run
orchestration and the knapsack-ga command line.
"""

import argparse
from typing import Dict, Any, List, Optional
from pathlib import Path
import yaml

from .data_models import GAConfig

DEFAULT_GA_CONFIG = Path(__file__).parent / 'ga_config.yaml'


class ConfigValidationError(Exception):
    """Raised when run configuration is invalid."""
    pass


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    return config


def load_ga_config(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> GAConfig:
    """
    Load GA parameters from YAML and apply overrides.

    Args:
        config_path: Path to GA config YAML (packaged defaults if None)
        overrides: Parameter values taking precedence over the file

    Returns:
        Validated GAConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If the file or an override is invalid
    """
    config_file = Path(config_path) if config_path else DEFAULT_GA_CONFIG

    if not config_file.exists():
        raise FileNotFoundError(f"GA configuration file not found: {config_file}")

    try:
        with open(config_file, 'r') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in GA configuration file: {e}")

    if not isinstance(data, dict):
        raise ConfigValidationError("GA configuration must be a mapping")

    data.update(overrides or {})

    try:
        return GAConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(f"Invalid GA configuration: {e}")


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ConfigValidationError("Run configuration must be a mapping")

    # Check common required fields
    for field in ['input', 'output']:
        if field not in config:
            raise ConfigValidationError(f"Missing required field: '{field}'")

    # Validate input section
    if not isinstance(config['input'], dict):
        raise ConfigValidationError("'input' must be a dictionary")

    if 'items' not in config['input']:
        raise ConfigValidationError("Missing required field: 'input.items'")

    items_path = Path(config['input']['items'])
    if not items_path.exists():
        raise ConfigValidationError(f"Items file not found: {items_path}")

    # Validate output section
    if not isinstance(config['output'], dict):
        raise ConfigValidationError("'output' must be a dictionary")

    if 'root' not in config['output']:
        raise ConfigValidationError("Missing required field: 'output.root'")

    # Optional sections
    if 'ga' in config and not isinstance(config['ga'], dict):
        raise ConfigValidationError("'ga' must be a dictionary")

    seed = config.get('random_seed')
    if seed is not None and (not isinstance(seed, int) or seed < 0):
        raise ConfigValidationError(
            f"'random_seed' must be a non-negative integer, got: {seed}"
        )

    every = config['output'].get('progress_every', 1)
    if not isinstance(every, int) or every <= 0:
        raise ConfigValidationError(
            f"'output.progress_every' must be a positive integer, got: {every}"
        )


def run_from_config(config_path: str) -> None:
    """
    Load run configuration and execute the run.

    Called by main() after argument parsing.

    Args:
        config_path: Path to run configuration YAML file

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)

    print(f"Validating configuration...")
    validate_run_config(config)

    from .orchestration import run_knapsack
    run_knapsack(config)

    print("\nRun completed successfully!")


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point (installed as ``knapsack-ga``)."""
    parser = argparse.ArgumentParser(
        prog='knapsack-ga',
        description="Knapsack GA - solve a 0/1 knapsack instance with a genetic algorithm",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  knapsack-ga examples/knapsack_run.yaml        # Solve the camping-gear instance
  knapsack-ga --config examples/knapsack_run.yaml

Outputs (written to output.root):
  best_solution.csv     per-item selection of the reported best record
  fitness_history.csv   average and best fitness per generation
  fitness_history.png   fitness chart (when output.plot is true)
        """
    )

    parser.add_argument(
        'config',
        nargs='?',
        help='Run configuration YAML file'
    )

    parser.add_argument(
        '--config', '-c',
        dest='config_option',
        metavar='CONFIG',
        help='Run configuration YAML file (alternative to the positional argument)'
    )

    args = parser.parse_args(argv)
    config_path = args.config_option or args.config
    if config_path is None:
        parser.error("a run configuration file is required")

    try:
        run_from_config(config_path)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 1
    except Exception as e:
        print(f"\nError: {e}")
        return 1

    return 0
