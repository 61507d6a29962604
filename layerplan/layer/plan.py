# This file is part of layerplan.
# Copyright (C) 2024 by the layerplan developers.
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Render plans: the order in which a layer tree's cels are composited.

A render plan is a flat list of items, bottom-most first.  Item ``0``
is drawn first and ends up underneath everything else.

Each group of siblings is resolved on its own.  Its children occupy
one virtual slot each, numbered from the bottom in stacking order, and
that includes children which are invisible or have no cel at the
planned frame: they keep their slot but produce nothing.  A cel's
``z_index`` asks for it to move up (positive) or down (negative) by
that many slots.  The move is clamped to the group's own slots, so
nothing ever leaves its group.  A nested group is resolved first, then
placed into its parent as one unbroken block at the group's own slot.

Here's a small stack of four layers, bottom to top:

>>> from . import test
>>> root, (a, b, c, d) = test.make_zindex_stack()
>>> [item.layer.name for item in get_render_plan(root, 0)]
['a', 'b', 'c', 'd']

Moving the bottom cel up by two slots puts it just below the top one.

>>> a.get_cel(0).z_index = 2
>>> [item.layer.name for item in get_render_plan(root, 0)]
['b', 'c', 'a', 'd']

Oversized requests are clamped to the edges of the group.

>>> a.get_cel(0).z_index = 1000
>>> [item.layer.name for item in get_render_plan(root, 0)]
['b', 'c', 'd', 'a']

"""


## Imports

import logging
import numbers
from collections import namedtuple

import layerplan.helpers as helpers
from layerplan.errors import ContractViolation
from layerplan.errors import InvalidFrameError
from layerplan.errors import LayerCycleError
from .rendering import NodeKind

logger = logging.getLogger(__name__)


## Class defs


class Item (object):
    """One entry in a render plan

    Normal plans hold items naming a layer and the cel to draw for it.
    Compose-mode plans hold items naming only a layer, which the painter
    is expected to render as a whole, opaque unit.

    >>> from . import data
    >>> layer = data.ImageLayer(name="ink")
    >>> cel = layer.add_cel(data.Cel(0))
    >>> Item(layer, cel)
    <Item 'ink' <Cel frame=0 z_index=0>>
    >>> Item(layer).composed
    True
    >>> Item(layer, cel) == Item(layer, cel)
    True
    """

    __slots__ = ("_layer", "_cel")

    def __init__(self, layer, cel=None):
        super(Item, self).__init__()
        self._layer = layer
        self._cel = cel

    @property
    def layer(self):
        """The layer (or group) this item draws"""
        return self._layer

    @property
    def cel(self):
        """The cel to draw, or None for a composed item"""
        return self._cel

    @property
    def composed(self):
        """True if the whole layer is drawn as one unit"""
        return self._cel is None

    def __eq__(self, other):
        if not isinstance(other, Item):
            return NotImplemented
        return self._layer is other._layer and self._cel is other._cel

    def __hash__(self):
        return hash((id(self._layer), id(self._cel)))

    def __repr__(self):
        name = getattr(self._layer, "name", None)
        label = repr(name) if name is not None else repr(self._layer)
        if self._cel is None:
            return "<Item %s composed>" % (label,)
        return "<Item %s %r>" % (label, self._cel)


#: A sibling's claim on a position within its group while it is
#: being resolved: its baseline slot, its clamped destination slot,
#: the z-index it asked for (clamped to the sibling range), and the
#: items it brings along as one block.
_Candidate = namedtuple(
    "_Candidate",
    ["baseline", "target", "request", "items"],
)


class RenderPlan (object):
    """Accumulates layers, and lists the items to draw for them

    Layers are added one at a time with `add_layer()`.  Layers added to
    the same plan behave as siblings, in the order they were added, so
    adding a whole tree's root gives the plan for the entire tree.

    >>> from . import test
    >>> root, leaves = test.make_zindex_stack()
    >>> plan = RenderPlan()
    >>> plan.add_layer(root, 0)
    >>> len(plan.items)
    4

    In compose mode, each added layer yields exactly one item, and
    groups are never looked into.

    >>> plan = RenderPlan(compose_groups=True)
    >>> plan.add_layer(root, 0)
    >>> plan.items
    [<Item 'root' composed>]

    The item list is rebuilt from the tree each time it is asked for.
    Nothing is cached, so edits made to the tree in between show up.

    """

    def __init__(self, compose_groups=False, layers=None):
        """Initialize an empty plan

        :param bool compose_groups: plan whole layers, not their cels
        :param set layers: only plan these layers (default: all)
        """
        super(RenderPlan, self).__init__()
        self._compose_groups = bool(compose_groups)
        self._layers = layers
        self._added = []

    @classmethod
    def new_from_spec(cls, spec):
        """Creates an empty plan configured by a rendering.Spec"""
        return cls(compose_groups=spec.compose_groups, layers=spec.layers)

    @property
    def compose_groups(self):
        return self._compose_groups

    def add_layer(self, layer, frame):
        """Adds a layer (or a whole group) to the plan

        :param layer: the layer, which must implement Plannable
        :param int frame: frame to plan
        :raises ContractViolation: if `layer` is None
        :raises InvalidFrameError: if `layer` has no such frame
        """
        if layer is None:
            logger.error("add_layer() called with no layer")
            raise ContractViolation("cannot plan a missing (None) layer")
        _check_frame(layer, frame)
        self._added.append((layer, frame))

    @property
    def items(self):
        """The ordered list of items to draw, bottom-most first"""
        if self._compose_groups:
            items = [
                Item(layer) for (layer, frame) in self._added
                if self._is_plannable(layer)
            ]
        else:
            slots = [
                self._get_candidate(layer, frame, i, len(self._added), [])
                for i, (layer, frame) in enumerate(self._added)
            ]
            items = _resolve_slots(slots)
        logger.debug(
            "Planned %d item(s) for %d added layer(s)%s",
            len(items),
            len(self._added),
            " (compose mode)" if self._compose_groups else "",
        )
        return items

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    ## Internals

    def _is_plannable(self, layer):
        if not layer.visible:
            return False
        if self._layers is not None and layer not in self._layers:
            return False
        return True

    def _get_candidate(self, layer, frame, baseline, count, ancestors):
        """Resolves one sibling to its candidate, or None

        :param layer: the sibling to resolve
        :param int frame: frame being planned
        :param int baseline: the sibling's slot in its group
        :param int count: number of slots in its group
        :param list ancestors: groups being resolved, outermost first
        """
        if not self._is_plannable(layer):
            return None

        cel = layer.get_cel(frame)

        if layer.kind == NodeKind.GROUP:
            if any(layer is a for a in ancestors):
                logger.error("Layer cycle detected at %r", layer)
                raise LayerCycleError(
                    "%r contains itself" % (layer,),
                    layer=layer,
                )
            ancestors.append(layer)
            children = list(layer.get_plan_children())
            slots = [
                self._get_candidate(child, frame, i, len(children), ancestors)
                for i, child in enumerate(children)
            ]
            ancestors.pop()
            items = _resolve_slots(slots)
            z_index = 0
            if cel is not None and cel.visible:
                z_index = cel.z_index
        else:
            if cel is None or not cel.visible:
                return None
            items = [Item(layer, cel)]
            z_index = cel.z_index

        if not items:
            return None

        displacement = helpers.clamp(z_index, -baseline, count - 1 - baseline)
        if displacement != z_index:
            logger.debug(
                "Clamped z-index of %r from %d to %d (slot %d of %d)",
                layer, z_index, displacement, baseline, count,
            )
        return _Candidate(
            baseline=baseline,
            target=baseline + displacement,
            request=helpers.clamp(z_index, 1 - count, count - 1),
            items=items,
        )


## Module functions


def get_render_plan(layer, frame, compose_groups=False, layers=None):
    """Plans a layer or a whole tree in one call

    :param layer: root of the subtree to plan (a Plannable)
    :param int frame: frame to plan
    :param bool compose_groups: plan `layer` as one opaque unit
    :param set layers: only plan these layers (default: all)
    :returns: items, bottom-most first
    :rtype: list

    >>> from . import test
    >>> root, (a, b, c, d) = test.make_zindex_stack()
    >>> d.get_cel(0).z_index = -3
    >>> [item.layer.name for item in get_render_plan(root, 0)]
    ['d', 'a', 'b', 'c']
    >>> get_render_plan(root, 0, compose_groups=True)
    [<Item 'root' composed>]
    """
    plan = RenderPlan(compose_groups=compose_groups, layers=layers)
    plan.add_layer(layer, frame)
    return plan.items


def _check_frame(layer, frame):
    """Raise InvalidFrameError unless the layer's tree has the frame"""
    if isinstance(frame, bool) or not isinstance(frame, numbers.Integral):
        logger.error("Frame %r is not an integer", frame)
        raise InvalidFrameError(
            "frame must be an integer, not %r" % (frame,),
            frame=frame,
        )
    if frame < 0 or not layer.has_frame(frame):
        logger.error("Frame %d does not exist for %r", frame, layer)
        raise InvalidFrameError(
            "frame %d does not exist for %r" % (frame, layer),
            frame=frame,
        )


def _resolve_slots(slots):
    """Flattens one group's slots into a single ordered item list

    :param list slots: one entry per virtual slot, in baseline order:
        a _Candidate, or None for a slot which contributes nothing
    :rtype: list

    Empty slots are simply skipped.  They still count when the
    candidates' targets were clamped and computed, so a cel moving
    down past an empty slot spends one unit of its displacement on it.

    Candidates are ordered by target slot.  Candidates which land on
    the same slot are ordered by the z-index they asked for, lowest
    first, and then by baseline: a cel which moved up onto a slot goes
    above the one which started there, and a cel which moved down onto
    it goes below.  Requests are capped at the group's size, so that
    oversized z-indexes never change the order.

    >>> A = _Candidate(0, 2, 2, ["a"])
    >>> B = _Candidate(1, 0, -1, ["b"])
    >>> C = _Candidate(2, 2, 0, ["c"])
    >>> D = _Candidate(3, 2, -1, ["d"])
    >>> _resolve_slots([A, B, C, D])
    ['b', 'd', 'c', 'a']

    Equal requests keep their stacking order, even when one was clamped.

    >>> A = _Candidate(0, 0, -1, ["a"])
    >>> B = _Candidate(1, 0, -1, ["b"])
    >>> _resolve_slots([B, A])
    ['a', 'b']
    >>> _resolve_slots([None, None])
    []
    """
    occupied = [c for c in slots if c is not None]
    occupied.sort(key=lambda c: (c.target, c.request, c.baseline))
    items = []
    for candidate in occupied:
        items.extend(candidate.items)
    return items


## Module testing


def _test():
    """Run doctest strings"""
    import doctest
    doctest.testmod(optionflags=doctest.ELLIPSIS)


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    _test()
