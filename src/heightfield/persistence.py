"""Heightfield persistence: save and load generated grids."""

import json
import logging
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

import numpy as np

from .config import GenerationOptions
from .grid import Grid

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def save_heightfield(path: Path, grid: Grid, options: GenerationOptions) -> None:
    """Save a heightfield to disk.

    Uses numpy's compressed .npz format. Strategy fields holding custom
    callables are recorded by name only.

    Args:
        path: Output path (should end with .npz).
        grid: Heightfield to save.
        options: Generation options used.
    """
    metadata = {
        "version": FORMAT_VERSION,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "options": {
            name: _jsonable(getattr(options, name))
            for name in GenerationOptions.model_fields
        },
    }

    np.savez_compressed(
        path,
        heights=grid.values,
        metadata=np.frombuffer(json.dumps(metadata).encode("utf-8"), dtype=np.uint8),
    )

    file_size = path.stat().st_size / 1024
    logger.info(f"Saved heightfield to {path} ({file_size:.1f} KB)")


def load_heightfield(path: Path) -> tuple[Grid, dict[str, Any]]:
    """Load a heightfield from disk.

    Args:
        path: Path to .npz file.

    Returns:
        Tuple of (grid, metadata dict).

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If file format is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Heightfield file not found: {path}")

    with np.load(path) as data:
        if "heights" not in data:
            raise ValueError("Invalid heightfield file: missing 'heights' array")
        heights = data["heights"].astype(np.float64)

        if "metadata" in data:
            metadata = json.loads(data["metadata"].tobytes().decode("utf-8"))
        else:
            metadata = {}

    if heights.ndim != 2:
        raise ValueError(f"Invalid heightfield file: heights have shape {heights.shape}")

    grid = Grid(heights)
    logger.info(f"Loaded heightfield from {path}: {grid.width}x{grid.height}")
    return grid, metadata


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, np.ndarray):
        return f"pixels{list(value.shape)}"
    return getattr(value, "__name__", repr(value))
