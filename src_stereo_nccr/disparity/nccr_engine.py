"""
NCCR (normalized cross-correlation) block-matching engine for stereo disparity.

For every pixel of the written region, a square feature patch taken from the
left image is slid across a horizontal search strip of the right image. The
offset of the best-scoring position inside the strip is written to an 8-bit
disparity map.
"""

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from typing import Dict, Any, Optional

from utils.logger_config import get_logger
from .search_data import SearchParameters, SearchRegion
from .parameter_calculator import DisparityParameterCalculator
from ..errors import InputError

logger = get_logger(__name__)


def match_template_ccorr_normed(image: np.ndarray, template: np.ndarray) -> np.ndarray:
    """
    Score every placement of ``template`` inside ``image`` with NCCR.

    score = sum(A * B) / sqrt(sum(A^2) * sum(B^2)), where A is the image window
    and B the template. Windows with a zero denominator score 0. Scores are
    clipped to [-1, 1].

    Args:
        image: 2-D search area, at least as large as the template
        template: 2-D patch to look for

    Returns:
        np.ndarray: Score map of shape (H - h + 1, W - w + 1)
    """
    image = np.asarray(image, dtype=np.float64)
    template = np.asarray(template, dtype=np.float64)

    windows = sliding_window_view(image, template.shape)
    cross = np.einsum('rcij,ij->rc', windows, template)
    window_energy = np.einsum('rcij,rcij->rc', windows, windows)
    template_energy = np.sum(template * template)

    denominator = np.sqrt(window_energy * template_energy)
    scores = np.zeros_like(cross)
    np.divide(cross, denominator, out=scores, where=denominator > 0)
    return np.clip(scores, -1.0, 1.0)


def best_match_offset(scores: np.ndarray) -> int:
    """
    Horizontal position of the maximum score.

    The first maximum in row-major scan order wins, so among equal scores
    the leftmost offset is returned.
    """
    _, col = np.unravel_index(np.argmax(scores), scores.shape)
    return int(col)


def _validate_stereo_images(left_image: np.ndarray, right_image: np.ndarray) -> None:
    """
    Validate stereo image pair for compatibility.

    Raises:
        InputError: If images are missing, not 2-D uint8, empty or differently shaped
    """
    if left_image is None or right_image is None:
        raise InputError("Input images cannot be None")

    for side, image in (('left', left_image), ('right', right_image)):
        if not isinstance(image, np.ndarray) or image.ndim != 2:
            raise InputError(f"{side} image must be a 2-D grayscale array, "
                             f"got shape {getattr(image, 'shape', None)}")
        if image.dtype != np.uint8:
            raise InputError(f"{side} image must be uint8, got {image.dtype}")
        if image.size == 0:
            raise InputError(f"{side} image is empty: shape={image.shape}")

    if left_image.shape != right_image.shape:
        raise InputError(f"Image shapes don't match: "
                         f"left={left_image.shape}, right={right_image.shape}")


def compute_dispmap(
    left_image: np.ndarray,
    right_image: np.ndarray,
    num_disparities: int,
    min_disparity: int = 0,
    block_size: int = 21
) -> np.ndarray:
    """
    Compute a disparity map from a rectified grayscale stereo pair.

    Each written cell holds the raw offset of the best match inside the
    search strip, in [0, num_disparities]. Offset 0 is the leftmost strip
    position, i.e. the true disparity ``num_disparities + min_disparity``;
    see ``DisparityProcessor.offsets_to_disparity`` for the conversion.
    Cells outside the search region are left at 0.

    Args:
        left_image: Left rectified image (H x W, uint8)
        right_image: Right rectified image (H x W, uint8)
        num_disparities: Number of candidate offsets beyond the first
        min_disparity: Minimum disparity, may be negative
        block_size: Odd side length of the matching patch

    Returns:
        np.ndarray: Disparity map (H x W, uint8)

    Raises:
        InputError: If the images are incompatible
        PreconditionViolation: If the parameters do not fit the image geometry
    """
    _validate_stereo_images(left_image, right_image)

    params = SearchParameters(num_disparities=num_disparities,
                              min_disparity=min_disparity,
                              block_size=block_size)
    region = DisparityParameterCalculator().validate_parameters(left_image.shape, params)

    dispmap = np.zeros(left_image.shape, dtype=np.uint8)
    if region.is_empty:
        return dispmap

    logger.info(f"Computing NCCR disparity: {params.to_dict()}, "
                f"rows=[{region.row_start}, {region.row_stop}), "
                f"cols=[{region.col_start}, {region.col_stop})")

    w = params.half_block
    max_disparity = params.max_disparity
    for y in region.rows:
        for x in region.cols:
            feature = left_image[y - w:y + w + 1, x - w:x + w + 1]
            strip = right_image[y - w:y + w + 1,
                                x - w - max_disparity:x + w + 1 - min_disparity]
            scores = match_template_ccorr_normed(strip, feature)
            dispmap[y, x] = best_match_offset(scores)
        logger.debug(f"Row {y} done")

    return dispmap


class NCCREngine:
    """Holds a configured set of search parameters and runs the NCCR search."""

    def __init__(self, params: Optional[SearchParameters] = None):
        """
        Initialize NCCR engine.

        Args:
            params: Search parameters, configured later when omitted
        """
        self.params = params
        self.logger = get_logger(__name__)
        self.last_region: Optional[SearchRegion] = None

    def configure_parameters(
        self,
        num_disparities: int,
        min_disparity: int = 0,
        block_size: int = 21
    ) -> None:
        """Set the search parameters used by ``compute_disparity``."""
        self.params = SearchParameters(num_disparities=num_disparities,
                                       min_disparity=min_disparity,
                                       block_size=block_size)
        self.logger.info(f"NCCR parameters configured: "
                         f"minDisp={min_disparity}, numDisp={num_disparities}, "
                         f"blockSize={block_size}")

    def compute_disparity(self, left_image: np.ndarray, right_image: np.ndarray) -> np.ndarray:
        """
        Compute the raw-offset disparity map for a stereo pair.

        Raises:
            RuntimeError: If parameters are not configured
        """
        if self.params is None:
            raise RuntimeError("NCCR parameters not configured. Call configure_parameters() first.")

        dispmap = compute_dispmap(left_image, right_image,
                                  self.params.num_disparities,
                                  self.params.min_disparity,
                                  self.params.block_size)
        self.last_region = DisparityParameterCalculator().calculate_search_region(
            left_image.shape, self.params)
        return dispmap

    def get_configuration_info(self) -> Dict[str, Any]:
        return {
            'configured': self.params is not None,
            'parameters': self.params.to_dict() if self.params is not None else None,
            'last_region': self.last_region.to_dict() if self.last_region is not None else None
        }
