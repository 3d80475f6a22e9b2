# This file is part of arbitrary-interop.
#
# Copyright the arbitrary-interop Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""This module implements the value tree that a strategy hands to a runner.

A value tree holds one buffer and the value the generator derived from it,
and knows how to propose simpler buffers when asked. The runner drives it
with three calls:

* ``current()`` returns the value of the current buffer.
* ``simplify()`` replaces the current buffer with a strictly smaller one
  and returns True, or returns False once there is nothing left to try.
* ``complement()`` undoes the last successful ``simplify()``. The runner
  calls it when the simpler value no longer exhibits the failure it is
  interested in, and the tree then never proposes that candidate again.

The search runs in two phases. First we look for a shorter buffer by binary
searching over prefix lengths. Once no prefix is any good, we walk over the
buffer from left to right and binary search each byte towards zero. Every
proposal is either shorter than the current buffer or the same length with
one byte lowered, and the lower end of each binary search only ever goes
up, so the search terminates after O(log(n) + 9n) runs of the generator
for a buffer of n bytes.

Candidates that the generator cannot use are skipped without bothering the
runner. Candidates that produce a value equal to the current one are adopted
without a proposal, as they cannot change the outcome of the test, and the
search carries on from them. They are only kept if the same call goes on to
install a candidate: a call that returns False leaves the tree as it found
it.
"""

from enum import Enum, IntEnum
from typing import Generic, Optional, TypeVar

import attr

from arbitrary_interop._settings import settings as Settings
from arbitrary_interop.errors import StopGeneration
from arbitrary_interop.generators import Generator, check_generator
from arbitrary_interop.reporting import debug_report

T = TypeVar("T")


class TreeState(IntEnum):
    initial = 0
    shrinking = 1
    exhausted = 2

    def __repr__(self):
        return f"TreeState.{self.name}"


class ShrinkPhase(Enum):
    length = "length"
    bytes = "bytes"


@attr.s(slots=True, frozen=True)
class ShrinkRecord:
    """A buffer and the value generated from it."""

    buffer = attr.ib()
    value = attr.ib()


@attr.s(slots=True, frozen=True)
class _Undo:
    record = attr.ib()
    # The lower bound of the binary search that produced the record which
    # replaced this one, were it to be rejected.
    rejected_lo = attr.ib()


def values_agree(left, right):
    if left is right:
        return True
    try:
        return bool(left == right)
    except (TypeError, ValueError):
        # e.g. numpy arrays, where == is elementwise and has no truth value.
        return False


class ArbValueTree(Generic[T]):
    """The shrinkable value produced by a single draw from an
    :class:`~arbitrary_interop.strategy.ArbStrategy`.

    A tree is meant to be driven by a single caller. Separate trees share
    nothing mutable, so different trees may be used from different threads.
    """

    def __init__(
        self,
        generator: Generator[T],
        buffer: bytes,
        value: T,
        settings: Optional[Settings] = None,
    ) -> None:
        check_generator(generator)
        self.generator = generator
        self.settings = settings if settings is not None else Settings.default
        self.__current = ShrinkRecord(buffer=bytes(buffer), value=value)
        self.__undo: Optional[_Undo] = None
        self.__state = TreeState.initial
        self.__phase = ShrinkPhase.length
        # Candidates below lo are known not to be worth proposing: prefix
        # lengths in the length phase, values of the byte at index in the
        # bytes phase.
        self.__lo = 0
        self.__index = 0
        self.calls = 0

    @classmethod
    def from_buffer(
        cls, generator: Generator[T], buffer: bytes, settings: Optional[Settings] = None
    ) -> "ArbValueTree[T]":
        """Build a tree by running ``generator`` over a known buffer, e.g. to
        replay a failure. Raises whatever the generator raises."""
        check_generator(generator)
        value, _ = generator.consume(bytes(buffer), 0)
        return cls(generator, buffer, value, settings=settings)

    def __repr__(self):
        return (
            f"{type(self).__name__}(current={self.__current.value!r}, "
            f"buffer_size={len(self.__current.buffer)}, state={self.__state!r})"
        )

    @property
    def buffer(self) -> bytes:
        return self.__current.buffer

    @property
    def state(self) -> TreeState:
        return self.__state

    def debug(self, message):
        debug_report(message, self.settings)

    def current(self) -> T:
        return self.__current.value

    def simplify(self) -> bool:
        """Try to install a strictly smaller buffer, returning True if one
        was found.

        Once this has returned False it will always return False, and
        :meth:`complement` will have nothing left to undo.
        """
        if self.__state == TreeState.exhausted:
            return False
        start = self.__current
        if self.__phase == ShrinkPhase.length:
            if self.__shrink_length():
                return True
            self.debug(
                f"No shorter buffer found, lowering bytes of the remaining "
                f"{len(self.buffer)}"
            )
            self.__phase = ShrinkPhase.bytes
            self.__lo = 0
            self.__index = 0
        if self.__shrink_bytes():
            return True
        self.debug(f"Shrinking exhausted after {self.calls} calls")
        # A call that returns False leaves the tree as it found it.
        self.__current = start
        self.__state = TreeState.exhausted
        self.__undo = None
        return False

    def complement(self) -> bool:
        """Undo the last successful :meth:`simplify`, returning True if there
        was one to undo.

        The undone candidate is never proposed again. Calling this twice in a
        row always returns False the second time.
        """
        if self.__undo is None:
            return False
        undo = self.__undo
        self.__undo = None
        self.debug(f"Reverting {self.__current.value!r} to {undo.record.value!r}")
        self.__current = undo.record
        self.__lo = undo.rejected_lo
        return True

    # The name some property-testing runners use.
    complicate = complement

    def __shrink_length(self):
        while self.__lo < len(self.buffer):
            size = (self.__lo + len(self.buffer)) // 2
            if self.__consider(self.buffer[:size], rejected_lo=size + 1):
                return True
        return False

    def __shrink_bytes(self):
        while self.__index < len(self.buffer):
            i = self.__index
            upper = self.buffer[i]
            if self.__lo >= upper:
                self.__index += 1
                self.__lo = 0
                continue
            value = (self.__lo + upper) // 2
            attempt = bytearray(self.buffer)
            attempt[i] = value
            if self.__consider(bytes(attempt), rejected_lo=value + 1):
                return True
        return False

    def __consider(self, buffer, rejected_lo):
        """Run the generator over ``buffer``. Returns True if it was installed
        as a new current record, in which case undoing it will set the lower
        bound of the search to ``rejected_lo``.

        Otherwise either the candidate was rejected and the lower bound has
        been raised, or it gave the same value as the current one and was
        adopted in place, and the caller should keep searching.
        """
        self.calls += 1
        try:
            value, _ = self.generator.consume(buffer, 0)
        except StopGeneration as e:
            self.debug(f"Rejected {len(buffer)} byte candidate: {e!r}")
            self.__lo = rejected_lo
            return False
        if values_agree(value, self.__current.value):
            self.debug(f"Adopted {len(buffer)} byte buffer with an unchanged value")
            self.__current = ShrinkRecord(buffer=buffer, value=self.__current.value)
            return False
        self.debug(f"Simplified {self.__current.value!r} to {value!r}")
        self.__undo = _Undo(record=self.__current, rejected_lo=rejected_lo)
        self.__current = ShrinkRecord(buffer=buffer, value=value)
        self.__state = TreeState.shrinking
        return True
