# This file is part of arbitrary-interop.
#
# Copyright the arbitrary-interop Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""A cursor over a finite byte buffer, which is what buffer-consuming
generators are written against.

Every read either consumes bytes from the front of the remaining buffer or
raises :class:`~arbitrary_interop.errors.BufferExhausted`. Reads always
return fresh ``bytes`` or ``int`` objects, never views into the buffer, so
a value assembled from them owns all of its data and stays valid after the
buffer it came from has been thrown away.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, TypeVar

from arbitrary_interop.errors import BufferExhausted, InvalidArgument
from arbitrary_interop.internal.validation import check_valid_size

if TYPE_CHECKING:
    from arbitrary_interop.generators import Generator

T = TypeVar("T")


class Unstructured:
    __slots__ = ("__buffer", "__position")

    def __init__(self, buffer: bytes, position: int = 0) -> None:
        if not isinstance(buffer, bytes):
            # Generators must never see the bytes change under them.
            buffer = bytes(buffer)
        check_valid_size(position, "position")
        if position > len(buffer):
            raise InvalidArgument(
                f"position={position} is past the end of a buffer of "
                f"{len(buffer)} bytes"
            )
        self.__buffer = buffer
        self.__position = position

    def __repr__(self):
        return f"Unstructured(position={self.__position}, remaining={self.remaining})"

    @property
    def position(self) -> int:
        return self.__position

    @property
    def remaining(self) -> int:
        return len(self.__buffer) - self.__position

    @property
    def is_empty(self) -> bool:
        return self.remaining == 0

    def read(self, n: int) -> bytes:
        """Consume and return the next ``n`` bytes."""
        check_valid_size(n, "n")
        if n > self.remaining:
            raise BufferExhausted(
                f"Needed {n} bytes but only {self.remaining} remain"
            )
        start = self.__position
        self.__position += n
        return self.__buffer[start : self.__position]

    def read_byte(self) -> int:
        return self.read(1)[0]

    def read_int(
        self, n: int, byteorder: str = "big", *, signed: bool = False
    ) -> int:
        """Consume ``n`` bytes and decode them as an integer."""
        return int.from_bytes(self.read(n), byteorder, signed=signed)

    def int_in_range(self, lower: int, upper: int) -> int:
        """Return an integer in the closed interval ``[lower, upper]``,
        consuming just enough bytes to cover the width of the interval.

        Smaller bytes give results closer to ``lower``, so a shrinker that
        lowers bytes moves the result towards ``lower``.
        """
        if lower > upper:
            raise InvalidArgument(f"Cannot have upper={upper} < lower={lower}")
        width = upper - lower
        if width == 0:
            return lower
        n = (width.bit_length() + 7) // 8
        return lower + self.read_int(n) % (width + 1)

    def boolean(self) -> bool:
        return self.read_byte() & 1 == 1

    def choose(self, elements: Sequence[T]) -> T:
        if not elements:
            raise InvalidArgument("Cannot choose from an empty sequence")
        return elements[self.int_in_range(0, len(elements) - 1)]

    def arbitrary_len(self, element_size: int = 1) -> int:
        """Return a collection length such that that many elements of
        ``element_size`` bytes each still fit in what remains of the buffer
        once the length itself has been read."""
        check_valid_size(element_size, "element_size", minimum=1)
        length = self.int_in_range(0, self.remaining // element_size)
        return min(length, self.remaining // element_size)

    def read_rest(self) -> bytes:
        """Consume and return everything that remains."""
        return self.read(self.remaining)

    def draw(self, generator: "Generator[Any]") -> Any:
        """Run another generator from the current position and advance past
        whatever it consumed."""
        from arbitrary_interop.generators import check_generator

        check_generator(generator)
        value, position = generator.consume(self.__buffer, self.__position)
        if not self.__position <= position <= len(self.__buffer):
            raise InvalidArgument(
                f"{generator!r} returned cursor position {position}, which is "
                f"outside [{self.__position}, {len(self.__buffer)}]"
            )
        self.__position = position
        return value
