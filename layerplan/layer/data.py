# This file is part of layerplan.
# Copyright (C) 2024 by the layerplan developers.
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Data layer classes, and the per-frame cels they hold"""


## Imports

import logging
import weakref

import numpy as np

import layerplan.helpers as helpers
from . import core

logger = logging.getLogger(__name__)


## Class defs


class Cel (object):
    """The drawable content of one layer at one frame

    A cel holds an RGBA image positioned in document coordinates, an
    opacity, and a z-index.  The z-index asks for the cel to be drawn
    earlier (negative) or later (positive) than its layer's natural
    place among its siblings, measured in sibling slots.

    >>> img = np.zeros((2, 2, 4), dtype='uint8')
    >>> cel = Cel(3, image=img, z_index="-2")
    >>> cel.frame, cel.z_index
    (3, -2)
    >>> cel.visible
    True
    >>> cel.opacity = 0
    >>> cel.visible
    False

    """

    def __init__(self, frame, image=None, x=0, y=0, z_index=0, opacity=1.0):
        super(Cel, self).__init__()
        self.frame = int(frame)
        if image is None:
            image = np.zeros((0, 0, 4), dtype='uint8')
        self.image = np.asarray(image)
        self.x = int(x)
        self.y = int(y)
        self.z_index = z_index
        self.opacity = opacity
        self._layer_ref = None

    @property
    def z_index(self):
        """Requested displacement among sibling slots (int)"""
        return self._z_index

    @z_index.setter
    def z_index(self, z_index):
        self._z_index = int(z_index)

    @property
    def opacity(self):
        """Opacity multiplier, from 0.0 to 1.0"""
        return self._opacity

    @opacity.setter
    def opacity(self, opacity):
        self._opacity = helpers.clamp(float(opacity), 0.0, 1.0)

    @property
    def visible(self):
        """False if the cel can have no effect on the composite"""
        return self._opacity > 0.0

    @property
    def layer(self):
        """The layer which owns this cel, or None"""
        if self._layer_ref is not None:
            return self._layer_ref()
        return None

    def get_bbox(self):
        """Bounds of the cel's non-transparent pixels

        :rtype: layerplan.helpers.Rect
        """
        return helpers.alpha_bbox(self.image, self.x, self.y)

    def __repr__(self):
        return "<%s frame=%d z_index=%d>" % (
            self.__class__.__name__,
            self.frame,
            self.z_index,
        )


class ImageLayer (core.LayerBase):
    """A content layer holding at most one cel per frame

    >>> layer = ImageLayer(name="ink")
    >>> cel = layer.add_cel(Cel(0))
    >>> layer.get_cel(0) is cel
    True
    >>> layer.get_cel(1) is None
    True
    >>> cel.layer is layer
    True

    """

    DEFAULT_NAME = u"Image"

    TYPE_DESCRIPTION = u"Image Layer"

    def __init__(self, **kwargs):
        super(ImageLayer, self).__init__(**kwargs)
        self._cels = {}

    ## Cel access

    def add_cel(self, cel):
        """Adds a cel, replacing any existing cel at its frame

        :returns: the cel which was added
        """
        old = self._cels.get(cel.frame)
        if old is not None and old is not cel:
            old._layer_ref = None
        self._cels[cel.frame] = cel
        cel._layer_ref = weakref.ref(self)
        return cel

    def remove_cel(self, frame):
        """Removes and returns the cel at a frame

        :raises KeyError: if there is no cel at that frame
        """
        cel = self._cels.pop(frame)
        cel._layer_ref = None
        return cel

    @property
    def cels(self):
        """All cels, in frame order"""
        return [self._cels[f] for f in sorted(self._cels)]

    ## Plannable implementation

    def get_cel(self, frame):
        return self._cels.get(frame)

    ## Info methods

    def get_bbox(self, frame):
        """Returns the bounds of the cel at a frame (empty if none)"""
        cel = self._cels.get(frame)
        if cel is None:
            return helpers.Rect()
        return cel.get_bbox()


## Module testing


def _test():
    """Run doctest strings"""
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS)


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    _test()
