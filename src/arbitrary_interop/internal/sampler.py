# This file is part of arbitrary-interop.
#
# Copyright the arbitrary-interop Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import attr

from arbitrary_interop.internal.validation import check_valid_size


def uniform(random, n):
    """Returns a bytestring of length n, distributed uniformly at random."""
    return random.getrandbits(n * 8).to_bytes(n, "big")


@attr.s(slots=True, frozen=True)
class BufferSampler:
    """Samples the fresh buffers that generators are run over, and decides
    how big they should be."""

    settings = attr.ib()

    def initial_size(self, generator):
        """Pick the size of the first buffer to try for ``generator``.

        A generator with an upper bound on the bytes it needs gets exactly
        that many. Otherwise we give it twice its lower bound, or the
        configured default if that is bigger.
        """
        low, high = generator.size_hint()
        if high is not None:
            size = high
        else:
            size = max(2 * low, self.settings.default_buffer_size)
        return min(size, self.settings.max_buffer_size)

    def grow(self, size):
        """The size to try after a buffer of ``size`` bytes ran out."""
        return min(max(2 * size, 1), self.settings.max_buffer_size)

    def sample(self, random, size):
        check_valid_size(size, "size")
        return uniform(random, size)
