# This file is part of arbitrary-interop.
#
# Copyright the arbitrary-interop Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""The contract that buffer-consuming generators implement.

A generator deterministically derives a value from a byte buffer: running it
twice over the same buffer from the same cursor must give equal values and
the same new cursor. The value it returns must own all of its data and hold
no reference into the buffer, because strategies throw buffers away while
shrinking but the values drawn from them may still be in use.
"""

import functools
from collections.abc import Callable
from typing import Generic, Optional, TypeVar

from arbitrary_interop.errors import InvalidArgument
from arbitrary_interop.internal.validation import check_type, check_valid_size
from arbitrary_interop.unstructured import Unstructured

T = TypeVar("T")

SizeHint = tuple[int, Optional[int]]


class Generator(Generic[T]):
    """A Generator knows how to turn bytes into values of one type.

    Subclasses implement :meth:`consume`. They may also override
    :meth:`size_hint` to say how many bytes a value typically needs, which
    strategies use to pick the size of the first buffer they sample.
    """

    def consume(self, buffer: bytes, cursor: int) -> "tuple[T, int]":
        """Read a value from ``buffer`` starting at ``cursor``, returning the
        value and the position just past the last byte read.

        Raises :class:`~arbitrary_interop.errors.BufferExhausted` if the
        buffer ends too soon and
        :class:`~arbitrary_interop.errors.InvalidEncoding` if the bytes do not
        describe a valid value.
        """
        raise NotImplementedError(f"{type(self).__name__}.consume")

    def size_hint(self) -> SizeHint:
        """Returns ``(low, high)``: bounds on the number of bytes a value
        needs. ``high`` is None when there is no upper bound."""
        return (0, None)

    def generate(self, buffer: bytes) -> T:
        value, _ = self.consume(buffer, 0)
        return value


class FunctionGenerator(Generator[T]):
    """A generator defined by a function that reads from an
    :class:`~arbitrary_interop.unstructured.Unstructured`."""

    def __init__(
        self, function: Callable[[Unstructured], T], size_hint: SizeHint = (0, None)
    ) -> None:
        if not callable(function):
            raise InvalidArgument(f"function={function!r} is not callable")
        self.function = function
        self.__size_hint = check_size_hint(size_hint)
        functools.update_wrapper(self, function)

    def __repr__(self):
        return f"generator({getattr(self.function, '__qualname__', self.function)!s})"

    def __call__(self, source: Unstructured) -> T:
        return source.draw(self)

    def consume(self, buffer, cursor):
        source = Unstructured(buffer, cursor)
        value = self.function(source)
        return value, source.position

    def size_hint(self):
        return self.__size_hint


def generator(function=None, *, size_hint=(0, None)):
    """Turn a function taking an
    :class:`~arbitrary_interop.unstructured.Unstructured` into a
    :class:`Generator`.

    Can be used bare, as ``@generator``, or with a size hint, as
    ``@generator(size_hint=(4, 4))``.
    """
    if function is None:
        return functools.partial(generator, size_hint=size_hint)
    return FunctionGenerator(function, size_hint=size_hint)


def check_size_hint(size_hint):
    check_type(tuple, size_hint, "size_hint")
    if len(size_hint) != 2:
        raise InvalidArgument(
            f"size_hint={size_hint!r} must be a pair of (low, high) byte counts"
        )
    low, high = size_hint
    check_valid_size(low, "low")
    if high is not None:
        check_valid_size(high, "high")
        if high < low:
            raise InvalidArgument(f"Cannot have high={high} < low={low}")
    return size_hint


def check_generator(arg, name="generator"):
    if not isinstance(arg, Generator):
        hint = ""
        if callable(arg):
            hint = (
                " If it is a function reading from an Unstructured, decorate "
                "it with @generator first."
            )
        raise InvalidArgument(
            f"Expected a Generator but got {name}={arg!r} "
            f"(type={type(arg).__name__}).{hint}"
        )
