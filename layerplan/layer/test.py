# This file is part of layerplan.
# Copyright (C) 2024 by the layerplan developers.
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Sample layer trees for doctests and the test suite"""

import numpy as np


def make_test_image(w=2, h=2, alpha=255):
    """Makes a small, uniformly filled RGBA image"""
    image = np.zeros((h, w, 4), dtype='uint8')
    image[..., 3] = alpha
    return image


def make_test_stack():
    """Makes a simple test RootLayerStack (2 branches of 3 leaves each)

    Every leaf has a cel at frame 0.

    :return: The root stack, and a list of its leaves.
    :rtype: tuple

    """
    import layerplan.layer.group
    import layerplan.layer.data
    import layerplan.layer.tree
    root = layerplan.layer.tree.RootLayerStack()
    leaves = []
    for branch_name in ('0', '1'):
        branch = layerplan.layer.group.LayerStack(name=branch_name)
        root.append(branch)
        for leaf_name in ('0', '1', '2'):
            leaf = layerplan.layer.data.ImageLayer(
                name=branch_name + leaf_name,
            )
            leaf.add_cel(layerplan.layer.data.Cel(0, make_test_image()))
            branch.append(leaf)
            leaves.append(leaf)
    return (root, leaves)


def make_zindex_stack(names=('a', 'b', 'c', 'd'), empty=()):
    """Makes a flat RootLayerStack of image layers, bottom to top

    :param names: names of the image layers, bottom-most first
    :param empty: names of layers which get no cel at frame 0
    :return: The root stack, and a tuple of its layers.
    :rtype: tuple

    All the cels at frame 0 start off with a z-index of zero.

    """
    import layerplan.layer.data
    import layerplan.layer.tree
    root = layerplan.layer.tree.RootLayerStack(name='root')
    layers = []
    for name in names:
        layer = layerplan.layer.data.ImageLayer(name=name)
        if name not in empty:
            layer.add_cel(layerplan.layer.data.Cel(0, make_test_image()))
        root.append(layer)
        layers.append(layer)
    return (root, tuple(layers))
