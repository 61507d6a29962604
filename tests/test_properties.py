#!/usr/bin/env python
# Checks general properties of render plans against many random trees.

import random
import unittest

from layerplan.layer import data
from layerplan.layer import group
from layerplan.layer import plan
from layerplan.layer import test
from layerplan.layer import tree

N_TREES = 200
FRAMES = 3


def make_random_tree(rng, max_depth=3, max_children=5):
    """Builds a random multi-frame tree, with holes and hidden layers"""
    root = tree.RootLayerStack(frame_count=FRAMES)
    counter = [0]

    def populate(stack, depth):
        for i in range(rng.randint(0, max_children)):
            counter[0] += 1
            name = "L%d" % (counter[0],)
            if depth < max_depth and rng.random() < 0.3:
                child = group.LayerStack(name=name)
                stack.append(child)
                populate(child, depth + 1)
            else:
                child = data.ImageLayer(name=name)
                for frame in range(FRAMES):
                    if rng.random() < 0.2:
                        continue
                    child.add_cel(data.Cel(
                        frame,
                        test.make_test_image(),
                        z_index=rng.randint(-6, 6),
                        opacity=rng.choice([0.0, 0.5, 1.0, 1.0]),
                    ))
                stack.append(child)
            child.visible = rng.random() > 0.15

    populate(root, 0)
    return root


def visible_descendants(layer):
    """Visible layers below a layer, skipping hidden branches entirely"""
    for child in layer.get_plan_children():
        if not child.visible:
            continue
        yield child
        for descendant in visible_descendants(child):
            yield descendant


def drawable_cels(root, frame):
    """All cels which could appear in a plan for the frame"""
    result = set()
    for layer in visible_descendants(root):
        cel = layer.get_cel(frame)
        if isinstance(layer, data.ImageLayer) and cel and cel.visible:
            result.add(cel)
    return result


def is_contiguous_run(needle, haystack):
    if not needle:
        return True
    for start in range(len(haystack) - len(needle) + 1):
        if haystack[start:start + len(needle)] == needle:
            return True
    return False


class PlanPropertyTests (unittest.TestCase):

    def trees(self):
        rng = random.Random(0x2a)
        for i in range(N_TREES):
            yield make_random_tree(rng)

    def test_only_drawable_cels(self):
        for root in self.trees():
            for frame in range(FRAMES):
                items = plan.get_render_plan(root, frame)
                cels = [i.cel for i in items]
                drawable = drawable_cels(root, frame)
                self.assertLessEqual(len(items), len(drawable))
                self.assertEqual(set(cels), drawable)
                self.assertEqual(len(set(cels)), len(cels))
                for item in items:
                    self.assertTrue(item.layer.visible)
                    self.assertTrue(item.cel.visible)
                    self.assertIs(item.layer.get_cel(frame), item.cel)

    def test_group_blocks_stay_intact(self):
        for root in self.trees():
            for frame in range(FRAMES):
                items = plan.get_render_plan(root, frame)
                for layer in visible_descendants(root):
                    if not isinstance(layer, group.LayerStack):
                        continue
                    block = plan.get_render_plan(layer, frame)
                    self.assertTrue(
                        is_contiguous_run(block, items),
                        "%r's block is split up" % (layer,),
                    )

    def test_idempotent(self):
        for root in self.trees():
            for frame in range(FRAMES):
                self.assertEqual(
                    plan.get_render_plan(root, frame),
                    plan.get_render_plan(root, frame),
                )

    def test_clamp_law(self):
        rng = random.Random(7)
        for root in self.trees():
            for frame in range(FRAMES):
                cels = list(drawable_cels(root, frame))
                if not cels:
                    continue
                cel = rng.choice(cels)
                count = len(cel.layer.group)
                for edge in (count - 1, -(count - 1)):
                    cel.z_index = edge
                    expected = plan.get_render_plan(root, frame)
                    sign = 1 if edge >= 0 else -1
                    for extra in (1, 5, 1000):
                        cel.z_index = edge + sign * extra
                        self.assertEqual(
                            plan.get_render_plan(root, frame),
                            expected,
                        )


if __name__ == '__main__':
    unittest.main()
