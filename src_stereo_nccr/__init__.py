"""
NCCR block-matching stereo disparity toolkit.

The ``disparity`` subpackage holds the matching engine; the pipeline that
loads, computes and displays a map lives in ``disparity_refactored``.
"""
