"""
Visualization utilities for disparity maps.

Maps are min-max normalized to the full 8-bit range and rendered with a
pseudocolor palette (blue for low offsets, red for high ones).
"""

import cv2
import numpy as np
from typing import Union
from pathlib import Path

from utils.logger_config import get_logger

logger = get_logger(__name__)

DEFAULT_WINDOW_NAME = "disparity_map"


class DisparityVisualizer:
    """Renders disparity maps for display or saving."""

    def __init__(self, colormap: int = cv2.COLORMAP_JET, window_name: str = DEFAULT_WINDOW_NAME):
        self.colormap = colormap
        self.window_name = window_name

    def colorize_dispmap(self, dispmap: np.ndarray) -> np.ndarray:
        """
        Create a color-mapped disparity image.

        Args:
            dispmap: Single-channel disparity map

        Returns:
            np.ndarray: Color-mapped image (BGR format)
        """
        disp_norm = cv2.normalize(
            dispmap, None,
            alpha=0, beta=255,
            norm_type=cv2.NORM_MINMAX,
            dtype=cv2.CV_8U
        )
        return cv2.applyColorMap(disp_norm, self.colormap)

    def show_dispmap(self, dispmap: np.ndarray) -> None:
        """Display the colorized map and block until a key is pressed."""
        disp_color = self.colorize_dispmap(dispmap)
        cv2.imshow(self.window_name, disp_color)
        logger.info(f"Showing '{self.window_name}', press any key to close")
        cv2.waitKey()
        cv2.destroyWindow(self.window_name)

    def save_dispmap(self, dispmap: np.ndarray, output_path: Union[str, Path]) -> Path:
        """
        Write the colorized map to an image file.

        Raises:
            OSError: If the image could not be written
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            written = cv2.imwrite(str(output_path), self.colorize_dispmap(dispmap))
        except cv2.error as e:
            raise OSError(f"Failed to write disparity image {output_path}: {e}") from e
        if not written:
            raise OSError(f"Failed to write disparity image: {output_path}")
        logger.info(f"Saved disparity image: {output_path}")
        return output_path


def show_dispmap(dispmap: np.ndarray, window_name: str = DEFAULT_WINDOW_NAME) -> None:
    DisparityVisualizer(window_name=window_name).show_dispmap(dispmap)
