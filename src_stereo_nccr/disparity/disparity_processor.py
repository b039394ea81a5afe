"""
Disparity map processing utilities.

This module handles post-processing of raw-offset disparity maps including
conversion to true disparities, statistics over the written region, and
metadata assembly.
"""

import numpy as np
from typing import Dict, Any, Optional

from utils.logger_config import get_logger
from .search_data import SearchParameters, SearchRegion

logger = get_logger(__name__)


class DisparityProcessor:
    """Handles post-processing and analysis of disparity maps."""

    def __init__(self):
        self.logger = get_logger(__name__)

    def offsets_to_disparity(
        self,
        dispmap: np.ndarray,
        params: SearchParameters,
        region: SearchRegion
    ) -> np.ndarray:
        """
        Convert raw strip offsets to true disparities.

        Strip offset ``k`` corresponds to disparity ``max_disparity - k``.

        Args:
            dispmap: Raw-offset map from the engine
            params: Search parameters used to compute the map
            region: Region written by the engine

        Returns:
            np.ndarray: float32 disparity map, NaN outside the written region
        """
        disparity = np.full(dispmap.shape, np.nan, dtype=np.float32)
        rows, cols = region.as_slices()
        disparity[rows, cols] = params.max_disparity - dispmap[rows, cols].astype(np.float32)
        return disparity

    def assess_disparity_quality(
        self,
        dispmap: np.ndarray,
        params: SearchParameters,
        region: SearchRegion
    ) -> Dict[str, Any]:
        """
        Summarize the offsets written by the engine.

        Offsets at either end of the strip usually mean the true match lies
        outside the searched range, so their share is reported separately.

        Args:
            dispmap: Raw-offset map from the engine
            params: Search parameters used to compute the map
            region: Region written by the engine

        Returns:
            Dict[str, Any]: Quality assessment metrics
        """
        total_pixels = int(dispmap.size)
        quality_metrics = {
            'total_pixels': total_pixels,
            'written_pixels': region.pixel_count,
            'coverage_percentage': float(100 * region.pixel_count / total_pixels) if total_pixels else 0.0
        }

        if region.is_empty:
            quality_metrics.update({
                'offset_range': None,
                'offset_histogram': [],
                'dominant_offset': None,
                'edge_ratio': 0.0,
                'quality_level': 'empty'
            })
            self.logger.warning("Disparity quality assessment: no pixels were written")
            return quality_metrics

        rows, cols = region.as_slices()
        written = dispmap[rows, cols]
        histogram = np.bincount(written.ravel(), minlength=params.num_disparities + 1)
        at_edges = int(np.sum((written == 0) | (written == params.num_disparities)))
        edge_ratio = at_edges / written.size

        quality_metrics.update({
            'offset_range': {
                'min': int(written.min()),
                'max': int(written.max()),
                'mean': float(written.mean()),
                'std': float(written.std())
            },
            'offset_histogram': histogram.tolist(),
            'dominant_offset': int(np.argmax(histogram)),
            'edge_ratio': float(edge_ratio)
        })

        if edge_ratio < 0.1:
            quality_level = 'good'
        elif edge_ratio < 0.3:
            quality_level = 'fair'
        else:
            quality_level = 'poor'
        quality_metrics['quality_level'] = quality_level

        self.logger.info(f"Disparity quality assessment: {quality_level} "
                         f"({quality_metrics['coverage_percentage']:.1f}% coverage, "
                         f"{100 * edge_ratio:.1f}% at search edges)")

        return quality_metrics

    def create_disparity_metadata(
        self,
        dispmap: np.ndarray,
        params: SearchParameters,
        region: SearchRegion,
        quality_metrics: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Create metadata for disparity results.

        Args:
            dispmap: Raw-offset map from the engine
            params: Search parameters used
            region: Region written by the engine
            quality_metrics: Optional quality assessment results

        Returns:
            Dict[str, Any]: Metadata
        """
        return {
            'disparity_info': {
                'shape': list(dispmap.shape),
                'dtype': str(dispmap.dtype),
                'value_semantics': 'raw_strip_offset'
            },
            'search_parameters': params.to_dict(),
            'search_region': region.to_dict(),
            'quality_metrics': quality_metrics or self.assess_disparity_quality(dispmap, params, region)
        }
