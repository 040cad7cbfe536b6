from __future__ import annotations

from typing import Optional, Protocol, Sequence

import numpy as np

from ..core.constants import FACE_DESCRIPTOR_LENGTH, FACE_MAX_DISTANCE
from ..core.exceptions import ValidationError


class FaceComparator(Protocol):
    """External capability: similarity percentage (0-100) between two descriptors."""

    def compare(self, candidate: Sequence[float], stored: Sequence[float]) -> float:
        raise NotImplementedError


class EuclideanFaceComparator(FaceComparator):
    """Similarity from the Euclidean distance of face-api style descriptors.

    Distance 0 maps to 100% and ``max_distance`` (or more) to 0%.
    """

    def __init__(self, *, max_distance: float = FACE_MAX_DISTANCE, descriptor_length: Optional[int] = FACE_DESCRIPTOR_LENGTH):
        if max_distance <= 0:
            raise ValueError("max_distance must be positive")
        self._max_distance = float(max_distance)
        self._descriptor_length = descriptor_length

    def compare(self, candidate: Sequence[float], stored: Sequence[float]) -> float:
        known = np.asarray(stored, dtype=float)
        unknown = np.asarray(candidate, dtype=float)
        if known.shape != unknown.shape or known.ndim != 1:
            raise ValidationError("Face descriptors must have the same length")
        if self._descriptor_length is not None and unknown.shape[0] != self._descriptor_length:
            raise ValidationError(f"face_descriptor must be an array of {self._descriptor_length} numbers")

        distance = float(np.linalg.norm(unknown - known))
        similarity = max(0.0, min(100.0, (1.0 - distance / self._max_distance) * 100.0))
        return round(similarity, 2)
