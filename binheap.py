#! /usr/bin/env python3

"""
binheap - array-backed binary heap, min or max.

A heap is a tree which maintains the heap property: the value of
a parent node is greater-than-or-equal-to (max-heap) or
less-than-or-equal-to (min-heap) the values of its children.
The property is transitive, so the root holds the largest (or
smallest) value in the heap.  Siblings are not ordered with
respect to each other.

The tree is stored in a list, in breadth-first order: the
children of index i are at 2i+1 and 2i+2, and its parent is
at (i-1) // 2.

Values must be totally ordered (x < y and x > y).  None and
float NaN are refused, since neither can be ordered.

This implementation is not threadsafe.

Example:

    h = Heap(Mode.MIN)
    h.push(1)
    h.push(100)
    h.push(2)
    h.pop()  # => 1
    h.pop()  # => 2
    h.pop()  # => 100
    h.pop()  # => EmptyHeap

Requires Python >= 3.8, for typing.Protocol.
"""

import argparse
import enum
import math
import sys
import typing


class Ordered(typing.Protocol):
    """
    Anything with x < y and x > y forming a total order.
    """

    def __lt__(self, other: typing.Any) -> bool:
        ...

    def __gt__(self, other: typing.Any) -> bool:
        ...


V = typing.TypeVar("V", bound=Ordered)


class Mode(enum.Enum):
    MIN = "min"
    MAX = "max"


class HeapError(Exception):
    "base class for heap errors"


class EmptyHeap(HeapError, IndexError):
    "peek, pop or replace on a heap with nothing in it"


class InvalidValue(HeapError, ValueError):
    "value that cannot be ordered (None, NaN)"


class InvariantViolation(HeapError, AssertionError):
    """
    The heap property does not hold.  From a Heap, this is a bug
    in the heap itself, not in the caller.
    """


def _parent(pos: int) -> int:
    return (pos - 1) >> 1


def _is_unorderable(value: typing.Any) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def _in_order(mode: Mode, parent: typing.Any, child: typing.Any) -> bool:
    """
    True if parent may sit above child.  Equal values are fine
    either way.
    """
    if mode is Mode.MIN:
        return not child < parent
    return not child > parent


def check_heap(
    values: typing.Sequence[typing.Any],
    mode: Mode,
    allow_absent: bool = False,
) -> bool:
    """
    Return True if values, taken as a list-layout tree, has the
    heap property for the given mode.

    Only parent/child edges are compared; the property is
    transitive, so that is enough.

    If allow_absent is true, None marks an empty slot: an edge
    with None at either end is taken as satisfied, which skips
    everything below the empty slot.  Otherwise None is just a
    value that cannot be ordered, and makes the heap invalid.
    """
    # Stop at 1: the root has no parent.
    for pos in range(len(values) - 1, 0, -1):
        child = values[pos]
        parent = values[_parent(pos)]
        if child is None or parent is None:
            if allow_absent:
                continue
            return False
        if not _in_order(mode, parent, child):
            return False
    return True


class Heap(typing.Generic[V]):
    """
    Heap implements a min or max heap over any ordered values.

    The mode is fixed when the heap is made.  The heap can start
    empty or be built from any iterable of values (which are
    copied; the caller's container is never touched).

    If checked is true, every mutating operation verifies the
    heap property afterward and raises InvariantViolation if it
    does not hold.  This costs O(n) per operation and is meant
    for tests and debugging.

    Iterating over the heap yields the values in list order, not
    sorted order.  Do not modify the heap while iterating over it.
    """

    def __init__(
        self,
        mode: Mode = Mode.MIN,
        values: typing.Optional[typing.Iterable[V]] = None,
        name: str = "heap",
        checked: bool = False,
    ) -> None:
        self._mode = mode
        self.name = name
        self.checked = checked
        self.debug_verbose = False
        self.heap = []  # type: typing.List[V]
        if values is not None:
            self.heapify(values)

    @property
    def mode(self) -> Mode:
        return self._mode

    def __str__(self) -> str:
        vals = ", ".join(str(v) for v in self.heap)
        return f"[{vals}] (size = {len(self.heap)}, valid = {self.is_valid()})"

    def __repr__(self) -> str:
        return "{}({}, {!r}, name={!r})".format(
            self.__class__.__name__, self._mode, self.heap, self.name
        )

    def heapify(self, values: typing.Iterable[V]) -> None:
        """
        Replace the contents of the heap with values, then
        restore the heap property bottom up.  Existing contents,
        if any, are discarded!
        """
        x = list(values)
        for v in x:
            self._check_value(v)
        self.heap = x
        for pos in reversed(range(len(x) // 2)):
            self._siftdown(pos)
        self._check_invariant()

    def __len__(self) -> int:
        return len(self.heap)

    def __bool__(self) -> bool:
        return len(self.heap) > 0

    def size(self) -> int:
        return len(self.heap)

    def is_empty(self) -> bool:
        return len(self.heap) == 0

    def __iter__(self) -> typing.Iterator[V]:
        return iter(self.heap)

    iterate = __iter__

    def copy(self) -> "Heap[V]":
        """
        Return a new heap with its own list holding the same
        values.  The values themselves are not copied.
        """
        new = self.__class__(self._mode, name=self.name, checked=self.checked)
        new.heap = list(self.heap)
        return new

    __copy__ = copy

    def peek(self) -> V:
        """
        Return the smallest (or largest, if max-heap) item
        without removing it.
        """
        if not self.heap:
            raise EmptyHeap(f"peek on empty heap {self.name}")
        return self.heap[0]

    def push(self, item: V) -> None:
        """
        Push item onto heap, maintaining the heap invariant.
        """
        self._check_value(item)
        self.heap.append(item)
        self._siftup(len(self.heap) - 1)
        self._check_invariant()

    insert = push

    def pop(self) -> V:
        """
        Pop the smallest (or largest, if max-heap) item off the
        heap, maintaining the heap invariant.
        """
        if not self.heap:
            raise EmptyHeap(f"pop from empty heap {self.name}")
        ret = self.heap[0]
        lastelt = self.heap.pop()
        if self.heap:
            self.heap[0] = lastelt
            self._siftdown(0)
        self._check_invariant()
        return ret

    extract = pop

    def replace(self, item: V) -> V:
        """
        Equivalent to calling pop() first, then push(item), but
        with one sift instead of two.  Note that because it *is*
        equivalent to the two-call sequence, it may return an item
        that sorts above (for a min-heap) the to-be-pushed item.
        Use pushpop() to avoid that.
        """
        if not self.heap:
            raise EmptyHeap(f"replace on empty heap {self.name}")
        self._check_value(item)
        ret = self.heap[0]
        self.heap[0] = item
        self._siftdown(0)
        self._check_invariant()
        return ret

    replace_root = replace

    def pushpop(self, item: V) -> V:
        """
        Fast version of push followed by pop.  If item would
        come out first anyway (or the heap is empty), the heap is
        left alone and item is returned.
        """
        self._check_value(item)
        if self.heap and not _in_order(self._mode, item, self.heap[0]):
            item = self.replace(item)
        return item

    def is_valid(self) -> bool:
        """
        Report whether the heap property holds.  O(n); for tests
        and debug checks, not for the hot path.
        """
        return check_heap(self.heap, self._mode)

    def debug_assert(self, verbose: bool = False) -> None:
        """
        Verify that the heap possesses the heap property, raising
        InvariantViolation at the first parent/child pair that
        does not.

        This is exported, but is meant only for debugging.
        """
        self.debug_verbose = verbose
        if verbose:
            print(f'checking "{self.name}", len={len(self.heap)}')
        rel = "<=" if self._mode is Mode.MIN else ">="
        for pos in range(len(self.heap) - 1, 0, -1):
            parentpos = _parent(pos)
            parent, child = self.heap[parentpos], self.heap[pos]
            if self.debug_verbose:
                print(f"{self.name}: {parent} s.b.{rel} {child}")
            if not _in_order(self._mode, parent, child):
                raise InvariantViolation(
                    f"bad heap: {self.name} at {parentpos}: {parent}, "
                    f"vs child {pos} {child}"
                )

    def _check_value(self, item: typing.Any) -> None:
        if _is_unorderable(item):
            raise InvalidValue(f"cannot add {item!r} to heap {self.name}")

    def _check_invariant(self) -> None:
        if self.checked:
            self.debug_assert(self.debug_verbose)

    def _siftup(self, pos: int) -> None:
        """
        Move the item at pos toward the root, swapping it with
        its parent until the parent is in order with it.
        """
        heap = self.heap
        while pos > 0:
            parentpos = _parent(pos)
            if _in_order(self._mode, heap[parentpos], heap[pos]):
                break
            heap[parentpos], heap[pos] = heap[pos], heap[parentpos]
            pos = parentpos

    def _siftdown(self, pos: int) -> None:
        """
        Move the item at pos toward the leaves.  The subtrees
        under pos must already be heaps.

        If the item is out of order with either child, swap it
        with whichever child should be the new parent: the larger
        in a max-heap, the smaller in a min-heap.  On a tie the
        left child wins.
        """
        heap = self.heap
        mode = self._mode
        endpos = len(heap)
        while True:
            childpos = 2 * pos + 1  # left child
            if childpos >= endpos:
                break
            rightpos = childpos + 1
            item = heap[pos]
            if rightpos < endpos:
                left, right = heap[childpos], heap[rightpos]
                if _in_order(mode, item, left) and _in_order(mode, item, right):
                    break
                if not _in_order(mode, left, right):
                    childpos = rightpos
            elif _in_order(mode, item, heap[childpos]):
                break
            heap[pos], heap[childpos] = heap[childpos], heap[pos]
            pos = childpos


# Fixed cases for --self-check: (name, values, mode, expected).
SELF_CHECKS = [
    ("Empty", [], Mode.MAX, True),
    ("Empty", [], Mode.MIN, True),
    ("Unary", [1], Mode.MAX, True),
    ("Unary", [1], Mode.MIN, True),
    ("One two three", [1, 2, 3], Mode.MAX, False),
    ("One two three", [1, 2, 3], Mode.MIN, True),
    ("Equal", [1, 1, 1], Mode.MIN, True),
    ("Equal", [1, 1, 1], Mode.MAX, True),
    (
        "Complex",
        [1, 2, 100, 3, 4, 9998, 9999, 9, 3, 5, 101, 10001, 9998, 9999, 9999],
        Mode.MIN,
        True,
    ),
    (
        "Complex invalid",
        [1, 2, 100, 3, 4, 9998, 9999, 9, 3, 5, 101, 10001, 9998, 1, 9999],
        Mode.MIN,
        False,
    ),
]


def self_check(verbose: bool = False) -> bool:
    """
    Run SELF_CHECKS through check_heap, printing one line per case.
    Return True if every case came out as expected.
    """
    ok = True
    for name, values, mode, expected in SELF_CHECKS:
        got = check_heap(values, mode)
        status = "ok" if got == expected else "FAILED"
        if got != expected:
            ok = False
        print(f"{name} ({mode.value}): {status}")
        if verbose:
            print(f"    {values} valid={got}, expected {expected}")
    return ok


def main(argv: typing.Optional[typing.List[str]] = None) -> int:
    """
    Build a heap from the command line values and pop it empty,
    or run the built-in checks.
    """
    parser = argparse.ArgumentParser(
        prog="binheap", description="binary heap demonstration"
    )
    parser.add_argument("values", nargs="*", type=int, help="values to push")
    parser.add_argument("--max", action="store_true", help="use a max-heap")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument(
        "--self-check", action="store_true", help="run built-in validation cases"
    )
    args = parser.parse_args(argv)

    if args.self_check:
        return 0 if self_check(args.verbose) else 1

    mode = Mode.MAX if args.max else Mode.MIN
    h = Heap(mode, name="cli", checked=True)  # type: Heap[int]
    h.debug_verbose = args.verbose
    for v in args.values:
        h.push(v)
    print(h)
    print("Popping...")
    while h:
        print(h.pop())
        if args.verbose:
            print(h)
    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
