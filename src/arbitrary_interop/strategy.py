# This file is part of arbitrary-interop.
#
# Copyright the arbitrary-interop Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from random import Random
from typing import Generic, Optional, TypeVar

from arbitrary_interop._settings import settings as Settings
from arbitrary_interop.errors import (
    BufferExhausted,
    GenerationError,
    InvalidArgument,
    StopGeneration,
)
from arbitrary_interop.generators import Generator, check_generator
from arbitrary_interop.internal.sampler import BufferSampler
from arbitrary_interop.internal.validation import check_random, check_valid_size
from arbitrary_interop.reporting import debug_report
from arbitrary_interop.tree import ArbValueTree

T = TypeVar("T")


class ArbStrategy(Generic[T]):
    """A shrinkable strategy for the values of a buffer-consuming generator.

    Each draw samples a random buffer, runs the generator over it and wraps
    the result in an :class:`~arbitrary_interop.tree.ArbValueTree` which can
    then be shrunk.
    """

    def __init__(
        self,
        generator: Generator[T],
        size: Optional[int] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        check_generator(generator)
        if settings is None:
            settings = Settings.default
        elif not isinstance(settings, Settings):
            raise InvalidArgument(
                f"settings={settings!r} is not a settings instance"
            )
        self.generator = generator
        self.settings = settings
        self.sampler = BufferSampler(settings)
        if size is None:
            size = self.sampler.initial_size(generator)
        else:
            check_valid_size(size, "size")
            if size > settings.max_buffer_size:
                raise InvalidArgument(
                    f"size={size} is larger than "
                    f"max_buffer_size={settings.max_buffer_size}"
                )
        self.size = size

    def __repr__(self):
        return f"ArbStrategy({self.generator!r}, size={self.size})"

    def debug(self, message):
        debug_report(message, self.settings)

    def draw(self, random: Random) -> ArbValueTree[T]:
        """Draw a fresh value tree, using ``random`` as the source of bytes.

        If the generator runs out of bytes we double the buffer and try
        again, up to the max_generation_attempts setting. Raises
        :class:`~arbitrary_interop.errors.GenerationError` if no value could
        be drawn, or immediately if the generator fails in any other way
        that it signals with
        :class:`~arbitrary_interop.errors.StopGeneration`.
        """
        check_random(random)
        size = self.size
        attempts = 0
        while True:
            attempts += 1
            buffer = self.sampler.sample(random, size)
            try:
                value, _ = self.generator.consume(buffer, 0)
            except BufferExhausted as e:
                if attempts >= self.settings.max_generation_attempts:
                    self.debug(f"Giving up after {attempts} exhausted buffers")
                    raise GenerationError(
                        f"{self.generator!r} ran out of bytes on each of "
                        f"{attempts} attempts, the last with {size} bytes. "
                        "Consider raising max_buffer_size or "
                        "max_generation_attempts.",
                        attempts=attempts,
                        size=size,
                    ) from e
                new_size = self.sampler.grow(size)
                if new_size > size:
                    self.debug(
                        f"Buffer of {size} bytes exhausted, retrying with {new_size}"
                    )
                else:
                    self.debug(
                        f"Buffer of {size} bytes exhausted, resampling at "
                        "max_buffer_size"
                    )
                size = new_size
                continue
            except StopGeneration as e:
                raise GenerationError(
                    f"{self.generator!r} rejected a buffer of {size} bytes as "
                    f"invalid: {e}",
                    attempts=attempts,
                    size=size,
                ) from e
            self.debug(f"Drew {value!r} from {size} bytes after {attempts} attempts")
            return ArbValueTree(self.generator, buffer, value, settings=self.settings)

    def example(self, random: Optional[Random] = None) -> T:
        """Draw a single value, for use when exploring interactively."""
        if random is None:
            random = Random()
        return self.draw(random).current()


def arb_sized(
    generator: Generator[T], size: int, settings: Optional[Settings] = None
) -> ArbStrategy[T]:
    """Constructs a strategy for ``generator`` which starts each draw from
    ``size`` bytes of random data."""
    return ArbStrategy(generator, size=size, settings=settings)


def arb(generator: Generator[T], settings: Optional[Settings] = None) -> ArbStrategy[T]:
    """Constructs a strategy for ``generator``.

    The size of the first buffer is a best-effort guess from the
    generator's :meth:`~arbitrary_interop.generators.Generator.size_hint`:
    its upper bound if it has one, otherwise twice its lower bound or the
    default_buffer_size setting, whichever is larger.
    """
    return ArbStrategy(generator, settings=settings)
