# This file is part of layerplan.
# Copyright (C) 2024 by the layerplan developers.
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Whole-tree stuff in the layer model: the root stack."""


## Imports

import logging

from . import group
from . import plan
from .rendering import Spec

logger = logging.getLogger(__name__)


## Class defs


class RootLayerStack (group.LayerStack):
    """Specialized document root layer stack

    In addition to the basic layerplan.layer.group.LayerStack
    implementation, this class's methods and properties provide:

     * the range of frames which exist in the document;
     * planning whole frames, or one composed item per branch; and
     * painting a plan, item by item, with a Painter.

    In other words, root layer stacks handle anything that needs
    document-scale oversight of the tree structure to operate.

    Be careful to maintain global uniqueness of layers within the root
    layer stack.  A layer appearing twice is planned twice.

    """

    ## Class constants

    DEFAULT_NAME = u"Root"

    ## Initialization

    def __init__(self, frame_count=1, **kwargs):
        """Construct, with an initial frame count

        :param int frame_count: number of frames in the document
        """
        super(RootLayerStack, self).__init__(**kwargs)
        self._frame_count = 1
        self.frame_count = frame_count

    ## Terminal root access

    @property
    def root(self):
        """Layer stack root: itself, in this case"""
        return self

    @root.setter
    def root(self, newroot):
        raise ValueError("Cannot set the root of the root layer stack")

    ## Frames

    @property
    def frame_count(self):
        """Number of frames in the document (a positive int)

        >>> root = RootLayerStack()
        >>> root.frame_count
        1
        >>> root.frame_count = 0
        Traceback (most recent call last):
        ...
        ValueError: frame_count must be at least 1, not 0
        """
        return self._frame_count

    @frame_count.setter
    def frame_count(self, frame_count):
        frame_count = int(frame_count)
        if frame_count < 1:
            raise ValueError(
                "frame_count must be at least 1, not %d" % (frame_count,)
            )
        self._frame_count = frame_count

    def has_frame(self, frame):
        return 0 <= frame < self._frame_count

    ## Planning and painting

    def _get_render_spec(self, spec=None, **kwargs):
        """Returns a Spec, either the one given or one built from kwargs"""
        if spec is None:
            spec = Spec(**kwargs)
        elif kwargs:
            raise TypeError("pass either a spec or keyword options, not both")
        return spec

    def get_render_plan(self, spec=None, **kwargs):
        """Plans the whole tree

        :param layerplan.layer.rendering.Spec spec: what to plan
        :param **kwargs: Spec fields, if `spec` is not given
        :returns: plan items, bottom-most first
        :rtype: list

        >>> from . import test
        >>> root, leaves = test.make_test_stack()
        >>> [i.layer.name for i in root.get_render_plan(frame=0)]
        ['00', '01', '02', '10', '11', '12']
        >>> root.get_render_plan(frame=0, compose_groups=True)
        [<Item 'Root' composed>]
        """
        spec = self._get_render_spec(spec, **kwargs)
        render_plan = plan.RenderPlan.new_from_spec(spec)
        render_plan.add_layer(self, spec.frame)
        return render_plan.items

    def get_compose_plan(self, frame=0):
        """Plans each visible top-level layer as one opaque unit

        :param int frame: frame to plan
        :returns: one composed item per visible child of the root
        :rtype: list

        This is what thumbnails and previews use: one pre-rendered
        surface per top-level branch, regardless of what's inside.

        >>> from . import test
        >>> root, leaves = test.make_test_stack()
        >>> root.get_compose_plan(0)
        [<Item '0' composed>, <Item '1' composed>]
        """
        render_plan = plan.RenderPlan(compose_groups=True)
        for child in self:
            if child.visible:
                render_plan.add_layer(child, frame)
        return render_plan.items

    def render(self, painter, spec=None, **kwargs):
        """Plans the tree, then hands each item to a painter in order

        :param layerplan.layer.rendering.Painter painter: consumer
        :param layerplan.layer.rendering.Spec spec: what to plan
        :param **kwargs: Spec fields, if `spec` is not given
        :returns: the plan which was painted
        :rtype: list
        """
        spec = self._get_render_spec(spec, **kwargs)
        items = self.get_render_plan(spec)
        logger.debug("Painting %d item(s) for %r", len(items), spec)
        for item in items:
            if item.composed:
                painter.paint_layer(item.layer)
            else:
                painter.paint_cel(item.layer, item.cel)
        return items


## Module testing


def _test():
    """Run doctest strings"""
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS)


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    _test()
