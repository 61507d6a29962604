# This file is part of layerplan.
# Copyright (C) 2024 by the layerplan developers.
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.


"""Error classes raised by the layer model and the render planner"""


class ContractViolation (Exception):
    """A caller broke the planner's preconditions.

    Covers programming errors like passing None instead of a layer,
    asking for a frame the tree does not have, or handing over a layer
    graph which loops back on itself.  These are never transient: the
    same call with the same arguments always fails the same way, so
    there is nothing to retry.

    The stringification should name the offending argument.  Callers
    are expected to let these propagate; they indicate a bug in the
    calling code rather than bad document data.

    """


class InvalidFrameError (ContractViolation, ValueError):
    """The frame index is not one the layer tree recognizes.

    Raised for non-integer and negative frames, and for frames at or
    beyond the end of the tree's frame range.

    """

    def __init__(self, msg, frame=None):
        super(InvalidFrameError, self).__init__(msg)
        self.frame = frame


class LayerCycleError (ContractViolation):
    """A group was reached again while its contents were being planned.

    Layer trees must be trees.  Layer stacks refuse to adopt one of
    their own ancestors, but other Plannable implementations may not
    be so careful, and the planner refuses to walk the result.

    """

    def __init__(self, msg, layer=None):
        super(LayerCycleError, self).__init__(msg)
        self.layer = layer
