"""
Image loading utilities for stereo vision applications.

This module decodes grayscale stereo pairs from disk and validates that the
two images can be matched against each other.
"""

import cv2
import numpy as np
from typing import Tuple, Dict, Any, Union
from pathlib import Path

from utils.logger_config import get_logger
from src_stereo_nccr.errors import InputError

logger = get_logger(__name__)


class ImageProcessor:
    """Handles image decoding and validation for stereo matching."""

    @staticmethod
    def load_grayscale_image(path: Union[str, Path]) -> np.ndarray:
        """
        Decode an image file as 8-bit grayscale.

        Args:
            path: Image file path

        Returns:
            np.ndarray: H x W uint8 image

        Raises:
            InputError: If the file is missing, cannot be decoded or is empty
        """
        path = Path(path)
        if not path.is_file():
            raise InputError(f"Image file not found: {path}")

        image = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
        if image is None:
            raise InputError(f"Could not decode image: {path}")
        if image.size == 0:
            raise InputError(f"Image has no pixels: {path}")

        logger.debug(f"Loaded {path.name}: {image.shape[1]}x{image.shape[0]}")
        return image

    @staticmethod
    def validate_image_pair(left_image: np.ndarray, right_image: np.ndarray) -> bool:
        """
        Validate that two images are compatible for stereo matching.

        Raises:
            InputError: If images are missing or their shapes differ
        """
        if left_image is None or right_image is None:
            raise InputError("One or both images are None")

        if left_image.shape != right_image.shape:
            raise InputError(f"Image shapes don't match: "
                             f"left={left_image.shape}, right={right_image.shape}")

        if left_image.ndim != 2:
            raise InputError(f"Expected grayscale images, got shape {left_image.shape}")

        return True

    @staticmethod
    def load_stereo_pair(
        left_path: Union[str, Path],
        right_path: Union[str, Path]
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Load and validate a rectified grayscale stereo pair.

        Returns:
            Tuple[np.ndarray, np.ndarray]: (left_image, right_image)

        Raises:
            InputError: If either image cannot be loaded or the pair is incompatible
        """
        left_image = ImageProcessor.load_grayscale_image(left_path)
        right_image = ImageProcessor.load_grayscale_image(right_path)
        ImageProcessor.validate_image_pair(left_image, right_image)

        logger.info(f"Loaded stereo pair: {left_image.shape[1]}x{left_image.shape[0]}")
        return left_image, right_image

    @staticmethod
    def get_image_info(image: np.ndarray) -> Dict[str, Any]:
        """Get basic information about an image."""
        return {
            'shape': list(image.shape),
            'width': int(image.shape[1]),
            'height': int(image.shape[0]),
            'dtype': str(image.dtype),
            'min_value': int(image.min()) if image.size else None,
            'max_value': int(image.max()) if image.size else None,
            'mean_value': float(image.mean()) if image.size else None
        }
