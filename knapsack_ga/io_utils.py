"""
I/O utilities for the knapsack GA.

Handles item list parsing (CSV or YAML), best-solution export and
fitness-history export.
"""

import csv
from pathlib import Path
from typing import List, Sequence, Tuple, Union

import yaml

from .data_models import BestRecord, Item

ITEM_COLUMNS = ['name', 'weight', 'value']


def load_items(items_path: Union[str, Path]) -> List[Item]:
    """
    Load an item list from a CSV or YAML file.

    CSV format:
        name,weight,value
        tent,20,35
        stove,5,12
        ...

    YAML format is a list of mappings with the same keys (name optional).

    Args:
        items_path: Path to items file

    Returns:
        List of Item objects, in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file format is invalid
    """
    items_path = Path(items_path)

    if not items_path.exists():
        raise FileNotFoundError(f"Items file not found: {items_path}")

    if items_path.suffix.lower() in ('.yaml', '.yml'):
        return _load_items_yaml(items_path)

    items = []
    with open(items_path, 'r', newline='') as f:
        reader = csv.DictReader(f)

        # Validate header
        if reader.fieldnames is None or not all(
            col in reader.fieldnames for col in ['weight', 'value']
        ):
            raise ValueError(
                f"Invalid CSV format in {items_path}. Expected columns: name,weight,value"
            )

        for row in reader:
            items.append(Item(
                weight=_parse_number(row['weight']),
                value=_parse_number(row['value']),
                name=row.get('name') or None,
            ))

    return items


def _load_items_yaml(items_path: Path) -> List[Item]:
    with open(items_path, 'r') as f:
        data = yaml.safe_load(f)

    if isinstance(data, dict):
        data = data.get('items')

    if not isinstance(data, list):
        raise ValueError(f"Invalid items file {items_path}: expected a list of items")

    items = []
    for entry in data:
        if not isinstance(entry, dict) or 'weight' not in entry or 'value' not in entry:
            raise ValueError(f"Invalid item entry in {items_path}: {entry}")
        items.append(Item(
            weight=_coerce_number(entry['weight'], items_path),
            value=_coerce_number(entry['value'], items_path),
            name=entry.get('name'),
        ))

    return items


def _parse_number(text: str) -> Union[int, float]:
    """Parse an int where possible so integer fitness stays integral."""
    try:
        return int(text)
    except ValueError:
        return float(text)


def _coerce_number(value, items_path: Path) -> Union[int, float]:
    """Accept YAML numbers and numeric strings such as '5'."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid number in {items_path}: {value!r}")
    if isinstance(value, (int, float)):
        return value
    try:
        return _parse_number(str(value).strip())
    except ValueError:
        raise ValueError(f"Invalid number in {items_path}: {value!r}")


def save_best_record(
    best: BestRecord,
    items: Sequence[Item],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save the best record as a per-item CSV.

    CSV format:
        index,name,weight,value,selected

    Args:
        best: Best record to save
        items: Items in gene order
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved CSV file

    Raises:
        FileExistsError: If file exists and overwrite=False
        ValueError: If the record and item list differ in length
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    if len(best.genes) != len(items):
        raise ValueError(
            f"Best record has {len(best.genes)} genes but there are {len(items)} items"
        )

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['index'] + ITEM_COLUMNS + ['selected'])

        for idx, (gene, item) in enumerate(zip(best.genes, items)):
            name = item.name or f"item_{idx:03d}"
            writer.writerow([idx, name, item.weight, item.value, gene])

    return output_path


def save_fitness_history(
    history: Sequence[Tuple[int, float, float]],
    output_path: Union[str, Path]
) -> Path:
    """
    Save per-generation statistics to CSV.

    Args:
        history: Rows of (generation, average_fitness, best_fitness)
        output_path: Path for output CSV

    Returns:
        Path to saved CSV file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['generation', 'average_fitness', 'best_fitness'])
        for row in history:
            writer.writerow(list(row))

    return output_path
