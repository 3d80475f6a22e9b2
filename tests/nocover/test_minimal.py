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

from arbitrary_interop import GenerationError, arb, arb_sized

from tests.common.debug import NoSuchExample, minimal
from tests.common.generators import Rgb, always_invalid, byte_lists, rgb, u32_be


def test_minimal_colour_with_green_at_least_red():
    assert minimal(arb(rgb), lambda c: not (c.g == 0 or c.r > c.g)) == Rgb(0, 1, 0)


def test_minimal_colour_with_blue_above_red():
    assert minimal(arb(rgb), lambda c: c.b > c.r) == Rgb(0, 0, 1)


def test_minimal_long_list():
    assert minimal(arb(byte_lists), lambda xs: len(xs) >= 3) == [0, 0, 0]


def test_minimal_list_with_large_sum():
    xs = minimal(arb(byte_lists), lambda xs: sum(xs) >= 10)
    assert sum(xs) == 10


def test_minimal_anything_is_zero():
    assert minimal(arb(u32_be)) == 0


def test_minimal_from_oversized_buffers():
    assert minimal(arb_sized(byte_lists, 1024), lambda xs: len(xs) >= 2) == [0, 0]


@pytest.mark.parametrize("seed", range(10))
def test_minimal_list_containing_five(seed):
    xs = minimal(arb(byte_lists), lambda xs: 5 in xs, random=Random(seed))
    # The length byte comes first, so the list is cut just after the first
    # five before anything else is lowered.
    assert xs == [0] * (len(xs) - 1) + [5]


def test_no_examples_of_an_impossible_condition():
    with pytest.raises(NoSuchExample):
        minimal(arb(rgb), lambda c: c.r > 255, max_examples=10)


def test_minimal_needs_a_valid_generator():
    with pytest.raises(GenerationError):
        minimal(arb(always_invalid))
