# -*- coding: utf-8 -*-
"""
QR Code Functional Areas Module

Locates the finder patterns of a QR code so they can be styled apart from
the data modules.

Functions:
    finder_positions: Top-left corners of the three finder patterns
    build_finder_mask: Boolean grid marking finder pattern modules
"""

from typing import List, Tuple

import numpy as np


FINDER_SIZE = 7


def finder_positions(size: int) -> List[Tuple[int, int]]:
    """
    Return the (row, col) of the top-left module of each 7x7 finder pattern.

    Example:
        >>> finder_positions(21)
        [(0, 0), (0, 14), (14, 0)]
    """
    return [(0, 0), (0, size - FINDER_SIZE), (size - FINDER_SIZE, 0)]


def build_finder_mask(size: int) -> np.ndarray:
    """
    Build a mask of the finder pattern modules.

    Pattern: 1111111
             1000001
             1011101
             1011101
             1011101
             1000001
             1111111

    The whole 7x7 block is marked, light ring included; separators are not.

    Returns:
        np.ndarray: (size, size) bool array, True inside a finder pattern
    """
    mask = np.zeros((size, size), dtype=bool)
    for (r0, c0) in finder_positions(size):
        mask[r0:r0 + FINDER_SIZE, c0:c0 + FINDER_SIZE] = True
    return mask
