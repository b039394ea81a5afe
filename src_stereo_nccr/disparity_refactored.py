"""
Stereo disparity calculation pipeline.

This module wires image loading, the NCCR engine, post-processing and
visualization together for one stereo pair.
"""

import numpy as np
from typing import Dict, Any, Optional

from .disparity.nccr_engine import NCCREngine
from .disparity.parameter_calculator import DisparityParameterCalculator
from .disparity.disparity_processor import DisparityProcessor
from .disparity.search_data import SearchRegion

from utils.image_processing import ImageProcessor
from utils.visualizer import DisparityVisualizer
from utils.logger_config import get_logger


class DisparityCalculator:
    """
    Main disparity calculation coordinator class.

    Runs load, validate, compute, assess and output steps for the stereo
    pair named in the program options.
    """

    def __init__(self, options, visualizer: Optional[DisparityVisualizer] = None):
        """
        Initialize disparity calculator.

        Args:
            options: ProgramOptions with image paths and search parameters
            visualizer: Renderer for the result (a JET visualizer by default)
        """
        self.options = options
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

        self.nccr_engine = NCCREngine(options.search)
        self.parameter_calculator = DisparityParameterCalculator()
        self.disparity_processor = DisparityProcessor()
        self.visualizer = visualizer or DisparityVisualizer()

        self.region: Optional[SearchRegion] = None
        self.metadata: Dict[str, Any] = {}

    def create_disparity(self) -> np.ndarray:
        """
        Main entry point: compute, report and output the disparity map.

        Returns:
            np.ndarray: Raw-offset disparity map

        Raises:
            InputError: If the images cannot be loaded or do not match
            PreconditionViolation: If the parameters do not fit the images
        """
        left_image, right_image = ImageProcessor.load_stereo_pair(
            self.options.left_image, self.options.right_image)

        # Reject bad parameters before any pixel is matched
        self.region = self.parameter_calculator.validate_parameters(
            left_image.shape, self.options.search)

        dispmap = self.nccr_engine.compute_disparity(left_image, right_image)

        quality_metrics = self.disparity_processor.assess_disparity_quality(
            dispmap, self.options.search, self.region)
        self.metadata = self.disparity_processor.create_disparity_metadata(
            dispmap, self.options.search, self.region, quality_metrics)

        self._output_results(dispmap)
        return dispmap

    def _output_results(self, dispmap: np.ndarray) -> None:
        if self.options.save_path is not None:
            self.visualizer.save_dispmap(dispmap, self.options.save_path)
        if self.options.show:
            self.visualizer.show_dispmap(dispmap)

    def get_processing_info(self) -> Dict[str, Any]:
        return {
            'left_image': str(self.options.left_image),
            'right_image': str(self.options.right_image),
            'engine_info': self.nccr_engine.get_configuration_info(),
            'region': self.region.to_dict() if self.region is not None else None,
            'metadata': self.metadata
        }
