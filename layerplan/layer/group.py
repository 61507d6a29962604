# This file is part of layerplan.
# Copyright (C) 2024 by the layerplan developers.
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Layer group classes (stacks)"""


## Imports

import logging

import layerplan.helpers as helpers
from layerplan.errors import LayerCycleError
from . import core
from .rendering import NodeKind

logger = logging.getLogger(__name__)


## Class defs

class LayerStack (core.LayerBase):
    """Ordered stack of layers, linear but nestable

    A stack's sub-layers are stored in stacking order: the first
    element in the sequence, index ``0``, is the bottom-most layer and
    is composited first.  This is also the order in which the planner
    assigns sibling slots.

    Layer stacks support list-like access to their child layers.  Using
    the `insert()`, `pop()`, `remove()` methods or index-based access
    and assignment maintains the group and root references of the
    affected layers and all of their descendents.

    """

    ## Class constants

    DEFAULT_NAME = u"Group"

    TYPE_DESCRIPTION = u"Layer Group"

    kind = NodeKind.GROUP

    ## Construction and other lifecycle stuff

    def __init__(self, **kwargs):
        """Initialize, with no sub-layers.

        Despite an empty layer stack having a zero length, it never
        tests as False under any circumstances. All layers and layer
        groups work this way.

        >>> g = LayerStack()
        >>> len(g)
        0
        >>> if not g:
        ...    raise ValueError("len=0 group tests as False, incorrectly")
        >>> bool(g)
        True

        """
        self._layers = []  # must be done before supercall
        super(LayerStack, self).__init__(**kwargs)

    def clear(self):
        """Removes all child layers"""
        removed = list(self._layers)
        self._layers[:] = []
        for layer in removed:
            self._disown(layer)

    def __repr__(self):
        """String representation of a stack

        >>> repr(LayerStack(name='test'))
        "<LayerStack len=0 'test'>"
        """
        if self.name:
            return '<%s len=%d %r>' % (self.__class__.__name__, len(self),
                                       self.name)
        else:
            return '<%s len=%d>' % (self.__class__.__name__, len(self))

    ## Tree references

    def _check_adoptable(self, layer):
        """Refuse layers which would turn the tree into a cycle

        >>> outer = LayerStack(name="outer")
        >>> inner = LayerStack(name="inner")
        >>> outer.append(inner)
        >>> inner.append(outer)   # doctest: +ELLIPSIS
        Traceback (most recent call last):
        ...
        layerplan.errors.LayerCycleError: ...
        """
        ancestor = self
        while ancestor is not None:
            if ancestor is layer:
                logger.error("Refusing to adopt %r into %r", layer, self)
                raise LayerCycleError(
                    "%r cannot be added inside itself" % (layer,),
                    layer=layer,
                )
            ancestor = ancestor.group

    def _disown(self, orphan):
        """Process a removed child (group & root reset)"""
        orphan.group = None
        _set_root(orphan, None)

    def _adopt(self, adoptee):
        """Process an added child (set group & root)"""
        adoptee.group = self
        _set_root(adoptee, self.root)

    ## Basic list-of-layers access

    def __len__(self):
        """Return the number of layers in the stack

        >>> stack = LayerStack()
        >>> len(stack)
        0
        >>> from . import data
        >>> stack.append(data.ImageLayer())
        >>> len(stack)
        1
        """
        return len(self._layers)

    def __iter__(self):
        """Iterates across child layers, bottom-most first"""
        return iter(self._layers)

    def append(self, layer):
        """Appends a layer on top of the others"""
        self._check_adoptable(layer)
        self._layers.append(layer)
        self._adopt(layer)

    def remove(self, layer):
        """Removes a layer by equality"""
        oldindex = self._layers.index(layer)
        removed = self._layers.pop(oldindex)
        self._disown(removed)

    def pop(self, index=None):
        """Removes a layer by index (default: the topmost)"""
        if index is None:
            removed = self._layers.pop()
        else:
            removed = self._layers.pop(self._normidx(index))
        self._disown(removed)
        return removed

    def _normidx(self, i, insert=False):
        """Normalize an index for array-like access

        >>> from . import data
        >>> group = LayerStack()
        >>> group.append(data.ImageLayer())
        >>> group.append(data.ImageLayer())
        >>> group.append(data.ImageLayer())
        >>> group._normidx(-4, insert=True)
        0
        >>> group._normidx(1)
        1
        >>> group._normidx(999)
        999
        >>> group._normidx(999, insert=True)
        3
        """
        if i < 0:
            i = len(self) + i
        if insert:
            return max(0, min(len(self), i))
        return i

    def insert(self, index, layer):
        """Adds a layer before an index"""
        self._check_adoptable(layer)
        index = self._normidx(index, insert=True)
        self._layers.insert(index, layer)
        self._adopt(layer)

    def __setitem__(self, index, layer):
        """Replaces the layer at an index"""
        self._check_adoptable(layer)
        index = self._normidx(index)
        oldlayer = self._layers[index]
        self._layers[index] = layer
        self._disown(oldlayer)
        self._adopt(layer)

    def __getitem__(self, index):
        """Fetches the layer at an index"""
        return self._layers[index]

    def index(self, layer):
        """Fetches the index of a child layer, by equality"""
        return self._layers.index(layer)

    ## Plannable implementation

    def get_plan_children(self):
        return tuple(self._layers)

    ## Info methods

    def get_bbox(self, frame):
        """Returns the union of the child layers' bounds at a frame"""
        result = helpers.Rect()
        for layer in self._layers:
            result.expand_to_include_rect(layer.get_bbox(frame))
        return result


## Module functions


def _set_root(layer, root):
    """Recursively sets the root ref of a layer and its descendents"""
    layer.root = root
    if isinstance(layer, LayerStack):
        for child in layer:
            _set_root(child, root)


## Module testing


def _test():
    """Run doctest strings"""
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS)


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    _test()
