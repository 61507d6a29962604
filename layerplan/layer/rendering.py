# This file is part of layerplan.
# Copyright (C) 2024 by the layerplan developers.
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Abstract definitions of how layer trees are planned and painted.

Planning is performed by layerplan.layer.plan against anything which
implements the Plannable interface here.  The layer model in this
package is one such implementation, but the planner never depends on
it directly.

"""

# Imports:

import abc


# Public constants:

class NodeKind:
    """Kind values for Plannable.kind."""

    #: A leaf holding at most one cel per frame.
    CONTENT = 1

    #: A branch holding an ordered sequence of child nodes.
    GROUP = 2


# Classes and interfaces:

class Spec (object):
    """Selection criteria for a render plan."""

    def __init__(self, **kwargs):
        """Initialize with optional field info from **kwargs."""
        super(Spec, self).__init__()

        #: The frame to plan.
        #: Default: 0.
        #: Type: int.
        self.frame = kwargs.get("frame", 0)

        #: Flag: treat each added node as one opaque, pre-composed unit.
        #: No recursion into groups happens in this mode.
        #: Default: False.
        self.compose_groups = bool(kwargs.get("compose_groups", False))

        #: Limitation: plan *only* these layers, if specified.
        #: If a child layer is present here,
        #: its entire parent chain must be present too.
        #: Layers left out still occupy their slot among their siblings.
        #: Default: None.
        #: Type: set() of Plannables.
        self.layers = kwargs.get("layers", None)

    def cacheable(self):
        """True if a plan for this spec depends only on the tree."""
        return self.layers is None

    def __repr__(self):
        return "<Spec frame=%r compose_groups=%r layers=%s>" % (
            self.frame,
            self.compose_groups,
            "all" if self.layers is None else len(self.layers),
        )


class Plannable (metaclass=abc.ABCMeta):
    """Abstract interface for nodes of a tree that can be planned.

    A node is either a content node, holding at most one cel per frame,
    or a group node, holding an ordered sequence of children.  Every
    node has a visible flag.  Nodes are compared and hashed by
    identity.

    """

    #: What sort of node this is: a NodeKind value.
    kind = NodeKind.CONTENT

    #: Whether the node contributes anything to the composite.
    visible = True

    @abc.abstractmethod
    def get_plan_children(self):
        """Returns the child nodes, bottom-most first.

        :rtype: sequence

        Content nodes return an empty sequence.  Groups may too.

        """

    @abc.abstractmethod
    def get_cel(self, frame):
        """Returns the content unit for a frame, or None.

        :param int frame: frame index
        :returns: an object with ``z_index`` and ``visible`` attributes

        Groups which return a cel here are displaced among their
        siblings by its ``z_index``, but the cel itself is never
        planned as an item.  An invisible cel counts as absent, for
        groups and content alike.

        """

    def has_frame(self, frame):
        """True if the tree this node belongs to has the given frame."""
        return frame >= 0


class Painter (metaclass=abc.ABCMeta):
    """Abstract interface for things which consume render plans.

    A painter is handed plan items strictly in order, bottom-most
    first.  It is responsible for everything the planner does not
    decide: pixels, blend modes, opacity, and placement at the
    item's nominal bounds.

    """

    @abc.abstractmethod
    def paint_cel(self, layer, cel):
        """Composite one cel of a content layer."""

    @abc.abstractmethod
    def paint_layer(self, layer):
        """Composite a whole layer or group as one opaque unit."""
