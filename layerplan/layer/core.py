# This file is part of layerplan.
# Copyright (C) 2024 by the layerplan developers.
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Core layer classes etc."""


## Imports

import logging
import weakref

import layerplan.helpers as helpers
from .rendering import NodeKind
from .rendering import Plannable

logger = logging.getLogger(__name__)


## Base class defs


class LayerBase (Plannable):
    """Base class defining the layer API

    Layers support the Plannable interface, and are planned and painted
    with the "get_*_plan()" and "render()" methods of their root layer
    stack, or directly with layerplan.layer.plan.

    Layers are minimally aware of the tree structure they reside in, in
    that they contain a weak reference to their parent group and to the
    root of their tree.  The root decides which frames exist.

    The base class behaves as a content layer with no cels at all.

    """

    ## Class constants

    #: Forms the default name.
    DEFAULT_NAME = u"Layer"

    #: A string for the layer type.
    TYPE_DESCRIPTION = None

    kind = NodeKind.CONTENT

    ## Construction

    def __init__(self, name=None, **kwargs):
        """Construct a new layer

        :param name: The name for the new layer.
        :param **kwargs: Ignored.

        All layer subclasses must permit construction without
        parameters.
        """
        super(LayerBase, self).__init__()
        self._name = None
        self._visible = True
        self._group_ref = None
        self._root_ref = None
        self.name = name

    ## Properties

    @property
    def group(self):
        """The group of the current layer.

        Returns None if the layer is not in a group.

        >>> from . import group
        >>> outer = group.LayerStack()
        >>> inner = group.LayerStack()
        >>> scribble = LayerBase()
        >>> outer.append(inner)
        >>> inner.append(scribble)
        >>> outer.group is None
        True
        >>> inner.group == outer
        True
        >>> scribble.group == inner
        True
        """
        if self._group_ref is not None:
            return self._group_ref()
        return None

    @group.setter
    def group(self, group):
        if group is None:
            self._group_ref = None
        else:
            self._group_ref = weakref.ref(group)

    @property
    def root(self):
        """The root of the layer tree structure

        Only RootLayerStack instances or None are permitted.
        You won't normally need to adjust this: it's automatically
        maintained by intermediate and root `LayerStack` elements in
        the tree whenever layers are added or removed.

        >>> from . import tree
        >>> root = tree.RootLayerStack()
        >>> layer = LayerBase()
        >>> root.append(layer)
        >>> layer.root                 #doctest: +ELLIPSIS
        <RootLayerStack...>
        >>> layer.root is root
        True
        """
        if self._root_ref is not None:
            return self._root_ref()
        return None

    @root.setter
    def root(self, newroot):
        if newroot is None:
            self._root_ref = None
        else:
            self._root_ref = weakref.ref(newroot)

    @property
    def name(self):
        """The layer's name, for display purposes

        Values must permit conversion to a string.  Setting None
        restores the class's default name.

        >>> layer = LayerBase()
        >>> layer.name
        'Layer'
        >>> layer.name = 42
        >>> layer.name
        '42'
        """
        return self._name

    @name.setter
    def name(self, name):
        if name is not None:
            name = str(name)
        else:
            name = self.DEFAULT_NAME
        self._name = name

    @property
    def visible(self):
        """Whether the layer has a visible effect on its backdrop.

        Values must permit conversion to a `bool`.  Invisible layers
        keep their place among their siblings when the tree is planned,
        but contribute no plan items.
        """
        return self._visible

    @visible.setter
    def visible(self, visible):
        self._visible = bool(visible)

    @property
    def branch_visible(self):
        """Check whether the layer's branch is visible.

        Returns True if the layer's group and all of its parents are
        visible, False otherwise.

        >>> from . import group
        >>> outer = group.LayerStack()
        >>> inner = group.LayerStack()
        >>> scribble = LayerBase()
        >>> outer.append(inner)
        >>> inner.append(scribble)
        >>> outer.visible = False
        >>> outer.branch_visible
        True
        >>> inner.branch_visible
        False
        >>> scribble.branch_visible
        False
        """
        group = self.group
        if group is None:
            return True
        return group.visible and group.branch_visible

    ## Plannable implementation

    def get_plan_children(self):
        return ()

    def get_cel(self, frame):
        return None

    def has_frame(self, frame):
        """True if the frame exists in this layer's tree

        Layers which are not part of a rooted tree accept any
        non-negative frame.

        >>> from . import tree
        >>> root = tree.RootLayerStack(frame_count=3)
        >>> layer = LayerBase()
        >>> layer.has_frame(7)
        True
        >>> root.append(layer)
        >>> layer.has_frame(2), layer.has_frame(3)
        (True, False)
        """
        root = self.root
        if root is not None and root is not self:
            return root.has_frame(frame)
        return frame >= 0

    ## Info methods

    def get_bbox(self, frame):
        """Returns the nominal bounds of the layer at a frame

        :rtype: layerplan.helpers.Rect

        The base implementation has no data, and an empty bbox.
        """
        return helpers.Rect()

    def is_empty(self, frame):
        """True if the layer has nothing to draw at a frame"""
        return self.get_bbox(frame).empty()

    def __repr__(self):
        """Simplified repr() of a layer"""
        if self.name:
            return "<%s %r>" % (self.__class__.__name__, self.name)
        else:
            return "<%s>" % (self.__class__.__name__)

    def __bool__(self):
        """Layers are never false.

        >>> sample = LayerBase()
        >>> bool(sample)
        True

        """
        return True

    def __eq__(self, layer):
        """Two layers are only equal if they are the same object"""
        return self is layer

    def __hash__(self):
        """Return a hash for the layer (identity only)"""
        return id(self)


## Module testing


def _test():
    """Run doctest strings"""
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS)


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    _test()
