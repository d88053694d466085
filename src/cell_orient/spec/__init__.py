"""Constants and cell complex data structures."""

from .constants import (
    EPS_ZERO,
    EPS_CLOSE,
    EPS_DET,
    BFS_UNREACHABLE,
    NO_PREDECESSOR,
)
from .structures import (
    Cell,
    CellComplex,
    Simplex,
    validate_complex,
)
