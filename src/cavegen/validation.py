"""Post-generation validation of finished caves."""

import numpy as np
import structlog
from scipy import ndimage

from .classification import MAX_COST
from .generator import GenerationResult
from .grid import Grid
from .rooms import RoomGraph

logger = structlog.get_logger()


class ValidationResult:
    """Result of cave validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_cave(result: GenerationResult) -> ValidationResult:
    """Validate a generated cave against its structural invariants.

    Args:
        result: Output of a generation run.

    Returns:
        ValidationResult with any errors/warnings.
    """
    validation = ValidationResult()

    # Check 1: Cost values in range
    _check_cost_range(result.grid, validation)

    # Check 2: Room graph
    _check_rooms(result.rooms, validation)

    # Check 3: Outer ring is void
    _check_edge_void(result.grid, validation)

    # Check 4: Ground forms one orthogonally connected mass
    _check_single_cave(result.grid, validation)

    if validation.passed:
        logger.info("validation_passed", warnings=len(validation.warnings))
    else:
        logger.warning("validation_failed", errors=validation.errors)

    for warning in validation.warnings:
        logger.warning("validation_warning", message=warning)

    return validation


def _check_cost_range(grid: Grid, result: ValidationResult) -> None:
    """Check every cell is void (0) or a cost in [1, 8]."""
    over = int(np.sum(grid.cells > MAX_COST))
    if over > 0:
        result.add_error(f"{over} cells have cost above {MAX_COST}")


def _check_rooms(rooms: RoomGraph, result: ValidationResult) -> None:
    """Check main room uniqueness, accessibility and connection symmetry."""
    if len(rooms) == 0:
        result.add_error("No rooms survived pruning")
        return

    main_count = sum(1 for room in rooms if room.is_main)
    if main_count != 1:
        result.add_error(f"Expected exactly one main room, found {main_count}")

    unreachable = [room.index for room in rooms if not room.is_accessible]
    if unreachable:
        result.add_error(f"Rooms not accessible from main room: {unreachable}")

    for room in rooms:
        for other in room.connected:
            if room.index not in rooms[other].connected:
                result.add_error(
                    f"Connection {room.index}->{other} is not symmetric"
                )


def _check_edge_void(grid: Grid, result: ValidationResult) -> None:
    """Check the outermost ring of cells is void."""
    cells = grid.cells
    if cells.size == 0:
        return
    ring = np.concatenate([cells[0, :], cells[-1, :], cells[1:-1, 0], cells[1:-1, -1]])
    non_void = int(np.count_nonzero(ring))
    if non_void > 0:
        result.add_warning(f"Edge has {non_void} ground cells")


def _check_single_cave(grid: Grid, result: ValidationResult) -> None:
    """Check ground is a single 4-connected component."""
    if grid.cells.size == 0:
        return
    structure = ndimage.generate_binary_structure(2, 1)  # 4-connected
    _, num_features = ndimage.label(grid.ground_mask(), structure=structure)

    if num_features > 1:
        result.add_warning(f"Ground splits into {num_features} disconnected areas")
