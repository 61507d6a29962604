# This file is part of layerplan.
# Copyright (C) 2024 by the layerplan developers.
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Layers holding per-frame cels or other layers, and how to plan them.

Users will normally interact with `ImageLayer`s,
which hold one cel per frame of the document.
Each cel carries an image and a z-index,
which nudges it up or down among its layer's siblings when drawn.

Layers are arranged in ordered stacks,
which can be nested to form a tree structure.
Image layers form the leaves, and stacks form the branches.
Layer stacks are also layers in every sense, including the root one,
and are subject to the same constraints.
Layers must be unique within the tree structure.

A render plan lists the cels of a tree in the order they must be
composited for one frame, bottom-most first.
See layerplan.layer.plan.

"""

from .rendering import *
from .core import *
from .data import *
from .group import *
from .tree import *
from .plan import *
