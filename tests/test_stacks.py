"""Tests for breeze.stacks."""

from __future__ import annotations

from breeze.stacks import ConditionalFrame, ConditionalStack, LoopStack
from breeze.values import TemplateArray, TemplateValue, ValueKind


def _array(*items: str) -> TemplateArray:
    return TemplateArray(list(items), ValueKind.STRING)


class TestLoopStack:
    def test_push_top_pop(self):
        stack = LoopStack()
        assert stack.top() is None
        frame = stack.push(_array("a", "b"), "item", 10)
        assert stack.top() is frame
        assert frame.index == 0
        assert frame.body_start == 10
        assert stack.pop() is frame
        assert stack.depth == 0

    def test_pop_empty_is_noop(self):
        stack = LoopStack()
        assert stack.pop() is None
        assert len(stack) == 0

    def test_current_item(self):
        stack = LoopStack()
        frame = stack.push(_array("a", "b"), "item", 0)
        frame.index = 1
        assert frame.current() == TemplateValue.string("b")

    def test_lookup_innermost_first(self):
        stack = LoopStack()
        stack.push(_array("outer"), "x", 0)
        stack.push(_array("y1"), "y", 5)
        stack.push(_array("inner"), "x", 9)
        assert stack.lookup("x").data == "inner"
        assert stack.lookup("y").data == "y1"
        assert stack.lookup("z") is None

    def test_iterates_innermost_first(self):
        stack = LoopStack()
        stack.push(_array("a"), "first", 0)
        stack.push(_array("b"), "second", 0)
        assert [frame.item_name for frame in stack] == ["second", "first"]

    def test_context_manager_clears(self):
        with LoopStack() as stack:
            stack.push(_array("a"), "x", 0)
            stack.push(_array("b"), "y", 0)
        assert stack.depth == 0


class TestConditionalStack:
    def test_suppression_truth_table(self):
        assert not ConditionalFrame(condition_met=True, in_else_branch=False).suppressed
        assert ConditionalFrame(condition_met=True, in_else_branch=True).suppressed
        assert ConditionalFrame(condition_met=False, in_else_branch=False).suppressed
        assert not ConditionalFrame(condition_met=False, in_else_branch=True).suppressed

    def test_only_innermost_frame_counts(self):
        stack = ConditionalStack()
        assert not stack.suppressed
        stack.push(False, 0)
        assert stack.suppressed
        stack.push(True, 5)
        assert not stack.suppressed
        stack.pop()
        assert stack.suppressed

    def test_else_branch(self):
        stack = ConditionalStack()
        frame = stack.push(False, 3)
        frame.in_else_branch = True
        assert not stack.suppressed
        assert frame.position == 3

    def test_stacks_nest_independently(self):
        with LoopStack() as loops, ConditionalStack() as conditions:
            loops.push(_array("a"), "x", 0)
            conditions.push(True, 1)
            loops.push(_array("b"), "y", 2)
            conditions.push(False, 3)
            assert loops.depth == 2
            assert conditions.depth == 2
            conditions.pop()
            assert loops.depth == 2
        assert loops.depth == 0
        assert conditions.depth == 0
