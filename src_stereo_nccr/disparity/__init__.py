"""
Disparity calculation module for stereo vision processing.

This module contains the NCCR block-matching engine, search parameter
validation, and disparity post-processing.
"""

from .search_data import SearchParameters, SearchRegion
from .nccr_engine import NCCREngine, compute_dispmap, match_template_ccorr_normed
from .parameter_calculator import DisparityParameterCalculator, computed_region
from .disparity_processor import DisparityProcessor

__all__ = [
    'SearchParameters',
    'SearchRegion',
    'NCCREngine',
    'compute_dispmap',
    'match_template_ccorr_normed',
    'DisparityParameterCalculator',
    'computed_region',
    'DisparityProcessor'
]
