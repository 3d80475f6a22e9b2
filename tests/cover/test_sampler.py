# This file is part of arbitrary-interop.
#
# Copyright the arbitrary-interop Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from random import Random

import pytest

from arbitrary_interop import generator, settings
from arbitrary_interop.errors import InvalidArgument
from arbitrary_interop.internal.sampler import BufferSampler, uniform


def hinted(low, high):
    return generator(size_hint=(low, high))(lambda data: None)


@pytest.mark.parametrize(
    "low, high, expected",
    [
        (4, 4, 4),
        (0, 0, 0),
        (0, None, 256),
        (100, None, 256),
        (300, None, 600),
        (0, 10**9, 2**16),
        (10**9, None, 2**16),
    ],
)
def test_initial_size(low, high, expected):
    assert BufferSampler(settings()).initial_size(hinted(low, high)) == expected


def test_initial_size_uses_default_buffer_size():
    sampler = BufferSampler(settings(default_buffer_size=17))
    assert sampler.initial_size(hinted(0, None)) == 17


def test_default_buffer_size_is_clamped_to_the_maximum():
    sampler = BufferSampler(settings(default_buffer_size=1000, max_buffer_size=100))
    assert sampler.initial_size(hinted(0, None)) == 100


@pytest.mark.parametrize(
    "size, expected", [(0, 1), (1, 2), (256, 512), (40000, 2**16), (2**16, 2**16)]
)
def test_growth_doubles_up_to_the_maximum(size, expected):
    assert BufferSampler(settings()).grow(size) == expected


@pytest.mark.parametrize("n", [0, 1, 3, 256])
def test_samples_have_the_requested_size(n):
    buffer = BufferSampler(settings()).sample(Random(0), n)
    assert type(buffer) is bytes
    assert len(buffer) == n


def test_sampling_is_determined_by_the_random():
    sampler = BufferSampler(settings())
    assert sampler.sample(Random(1), 64) == sampler.sample(Random(1), 64)
    assert sampler.sample(Random(1), 64) != sampler.sample(Random(2), 64)


def test_cannot_sample_a_negative_size():
    with pytest.raises(InvalidArgument):
        BufferSampler(settings()).sample(Random(0), -1)


def test_uniform_is_uniform_ish():
    buffer = uniform(Random(0), 10000)
    assert len(set(buffer)) == 256
