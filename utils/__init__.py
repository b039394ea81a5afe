"""Logging, image loading and visualization helpers."""
