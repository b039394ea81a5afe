"""Command-line and JSON configuration for the disparity pipeline."""
