"""Pick the single face region to classify in a frame."""
from typing import Optional, Sequence

from ..core.entities import Region


def select_face(candidates: Sequence[Region]) -> Optional[Region]:
    """Return the candidate with the largest area.

    Ties keep the region seen first; an empty candidate set yields None.
    """
    best: Optional[Region] = None
    for region in candidates:
        if best is None or region.area > best.area:
            best = region
    return best
