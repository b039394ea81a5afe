"""
Parameter calculation utilities for disparity processing.

This module derives the written output region from the image geometry and
the search parameters, and validates parameter combinations before the
engine touches any pixel.
"""

import numpy as np
from typing import List, Tuple

from utils.logger_config import get_logger
from .search_data import SearchParameters, SearchRegion
from ..errors import PreconditionViolation

logger = get_logger(__name__)

# Offsets are stored in an 8-bit map, so the largest offset must fit in a uint8.
MAX_NUM_DISPARITIES = 255


def computed_region(image_shape: Tuple[int, int], params: SearchParameters) -> SearchRegion:
    """
    Return the rows and columns the engine writes for an image of ``image_shape``.

    Rows span ``[w, H - w - 1)`` and columns span
    ``[max_disparity + w, W + min_disparity - w - 1)``, with ``w = block_size // 2``.
    Either range may be empty or inverted.
    """
    height, width = image_shape[:2]
    w = params.half_block
    return SearchRegion(
        row_start=w,
        row_stop=height - w - 1,
        col_start=params.max_disparity + w,
        col_stop=width + params.min_disparity - w - 1
    )


def _is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


class DisparityParameterCalculator:
    """Validates search parameters against image geometry."""

    def __init__(self):
        self.logger = get_logger(__name__)

    def calculate_search_region(
        self,
        image_shape: Tuple[int, int],
        params: SearchParameters
    ) -> SearchRegion:
        """
        Calculate the output region for the given geometry.

        Args:
            image_shape: (height, width) of the input images
            params: Search parameters

        Returns:
            SearchRegion: Rows and columns that will be written
        """
        region = computed_region(image_shape, params)
        self.logger.debug(f"Search region for {image_shape[1]}x{image_shape[0]}: {region.to_dict()}")
        return region

    def check_parameters(
        self,
        image_shape: Tuple[int, int],
        params: SearchParameters
    ) -> List[str]:
        """
        Collect every problem with ``params`` for images of ``image_shape``.

        Args:
            image_shape: (height, width) of the input images
            params: Search parameters to check

        Returns:
            List[str]: Human-readable problems, empty if the parameters are usable
        """
        problems = []

        for name in ('num_disparities', 'min_disparity', 'block_size'):
            if not _is_integer(getattr(params, name)):
                problems.append(f"{name} must be an integer, got {getattr(params, name)!r}")
        if problems:
            return problems

        if params.block_size <= 0 or params.block_size % 2 == 0:
            problems.append(f"block_size must be positive and odd, got {params.block_size}")

        if not 0 <= params.num_disparities <= MAX_NUM_DISPARITIES:
            problems.append(f"num_disparities must be in [0, {MAX_NUM_DISPARITIES}], "
                            f"got {params.num_disparities}")

        if problems:
            return problems

        region = computed_region(image_shape, params)
        if region.is_empty:
            return problems

        # Bounds of the patches read for the first and last written columns
        if params.max_disparity < 0:
            problems.append(f"num_disparities + min_disparity must be non-negative, got "
                            f"{params.max_disparity}: feature patches would start left of column 0")
        if params.min_disparity > 1:
            problems.append(f"min_disparity must be at most 1, got {params.min_disparity}: "
                            f"feature patches would run past column {image_shape[1] - 1}")

        return problems

    def validate_parameters(
        self,
        image_shape: Tuple[int, int],
        params: SearchParameters
    ) -> SearchRegion:
        """
        Validate parameters and return the region they produce.

        Raises:
            PreconditionViolation: If any check in ``check_parameters`` fails
        """
        problems = self.check_parameters(image_shape, params)
        if problems:
            raise PreconditionViolation("; ".join(problems))

        region = self.calculate_search_region(image_shape, params)
        if region.is_empty:
            self.logger.warning(f"Search region is empty for image {image_shape[1]}x{image_shape[0]} "
                                f"with {params.to_dict()}; no disparities will be computed")
        return region
