# This file is part of layerplan.
# Copyright (C) 2024 by the layerplan developers.
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Small geometry and arithmetic helpers shared by the layer model"""

import logging

import numpy as np

logger = logging.getLogger(__name__)


class Rect (object):
    """Bounds of a cel or layer, in document pixels.

    The painter composites each plan item at its bounds.  A zero-sized
    Rect is empty, and grows to fit whatever it's expanded to include:

    >>> r = Rect()
    >>> r.empty()
    True
    >>> r.expand_to_include_rect(Rect(0, 10, 5, 15))
    >>> r
    Rect(0, 10, 5, 15)
    >>> r.expand_to_include_rect(Rect(-1, 10, 1, 30))
    >>> r
    Rect(-1, 10, 6, 30)
    >>> r.expand_to_include_point(8, 2)
    >>> tuple(r)
    (-1, 2, 10, 38)
    >>> r == Rect(-1, 2, 10, 38)
    True

    """

    def __init__(self, x=0, y=0, w=0, h=0):
        object.__init__(self)
        self.x = x
        self.y = y
        self.w = w
        self.h = h

    def __iter__(self):
        """Yields x, y, w, h: so tuple(rect) works"""
        return iter((self.x, self.y, self.w, self.h))

    def __eq__(self, other):
        if not isinstance(other, Rect):
            return NotImplemented
        return tuple(self) == tuple(other)

    def empty(self):
        """True if the rectangle covers no pixels."""
        return self.w == 0 or self.h == 0

    def expand_to_include_point(self, x, y):
        """Grows the rectangle to cover pixel (x, y)"""
        self.expand_to_include_rect(Rect(x, y, 1, 1))

    def expand_to_include_rect(self, other):
        """Grows the rectangle to the union of itself and another"""
        if other.empty():
            return
        if self.empty():
            self.x, self.y, self.w, self.h = other
            return
        right = max(self.x + self.w, other.x + other.w)
        bottom = max(self.y + self.h, other.y + other.h)
        self.x = min(self.x, other.x)
        self.y = min(self.y, other.y)
        self.w = right - self.x
        self.h = bottom - self.y

    def __repr__(self):
        return 'Rect(%d, %d, %d, %d)' % tuple(self)


def clamp(x, lo, hi):
    """Clamp a value to the closed range [lo, hi]

    >>> clamp(1000, -1, 3)
    3
    >>> clamp(-1000, -1, 3)
    -1
    >>> clamp(2, -1, 3)
    2
    """
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def alpha_bbox(image, x=0, y=0):
    """Bounding box of the non-transparent pixels in an RGBA array

    :param numpy.ndarray image: array of shape (h, w, 4)
    :param int x: X offset of the image's top-left pixel
    :param int y: Y offset of the image's top-left pixel
    :rtype: Rect

    Fully transparent and zero-sized images have an empty bbox.

    >>> img = np.zeros((4, 6, 4), dtype='uint8')
    >>> alpha_bbox(img).empty()
    True
    >>> img[1:3, 2, 3] = 255
    >>> alpha_bbox(img, x=10, y=20)
    Rect(12, 21, 1, 2)
    """
    if image is None or image.size == 0:
        return Rect()
    rows, cols = np.nonzero(image[..., 3])
    if len(rows) == 0:
        return Rect()
    top, bottom = int(rows.min()), int(rows.max())
    left, right = int(cols.min()), int(cols.max())
    return Rect(x + left, y + top, right - left + 1, bottom - top + 1)


def _test():
    import doctest
    doctest.testmod()


if __name__ == '__main__':
    _test()
