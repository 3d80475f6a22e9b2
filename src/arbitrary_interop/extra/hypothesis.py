# This file is part of arbitrary-interop.
#
# Copyright the arbitrary-interop Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""Use buffer-consuming generators in Hypothesis tests.

:func:`from_generator` wraps a generator as a Hypothesis strategy. Rather
than shrinking buffers itself, it lets Hypothesis draw and shrink the bytes,
so the generator gets the full benefit of Hypothesis' shrinker and example
database.
"""

from typing import Optional, TypeVar

from hypothesis import reject, strategies as st

from arbitrary_interop._settings import settings as Settings
from arbitrary_interop.errors import StopGeneration
from arbitrary_interop.generators import Generator
from arbitrary_interop.strategy import ArbStrategy

T = TypeVar("T")


def from_generator(
    generator: Generator[T], settings: Optional[Settings] = None
) -> st.SearchStrategy[T]:
    """Returns a Hypothesis strategy for the values of ``generator``.

    Buffers are between the generator's lower size bound and the initial
    buffer size that :func:`~arbitrary_interop.arb` would use. Buffers the
    generator cannot use are rejected, so a generator that usually needs
    more bytes than that should say so in its size hint.
    """
    strategy = ArbStrategy(generator, settings=settings)
    low, _ = generator.size_hint()

    def run(buffer):
        try:
            return generator.generate(buffer)
        except StopGeneration:
            reject()

    return st.binary(min_size=min(low, strategy.size), max_size=strategy.size).map(
        run
    )
