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

from arbitrary_interop import (
    ArbStrategy,
    ArbValueTree,
    BufferExhausted,
    GenerationError,
    InvalidEncoding,
    StopGeneration,
    Verbosity,
    arb,
    arb_sized,
    generator,
    settings,
)
from arbitrary_interop.errors import InvalidArgument
from arbitrary_interop.reporting import with_reporter

from tests.common.generators import (
    Rgb,
    always_invalid,
    even_bytes,
    needs_bytes,
    rgb,
    u32_be,
)


def test_draw_returns_a_value_tree():
    tree = arb(u32_be).draw(Random(0))
    assert isinstance(tree, ArbValueTree)
    assert 0 <= tree.current() < 2**32
    assert len(tree.buffer) == 4


def test_draws_are_determined_by_the_random():
    strategy = arb(rgb)
    assert strategy.draw(Random(3)).current() == strategy.draw(Random(3)).current()


def test_draws_from_one_random_vary():
    strategy = arb(u32_be)
    random = Random(0)
    assert len({strategy.draw(random).current() for _ in range(20)}) > 1


def test_grows_the_buffer_until_the_generator_has_enough():
    messages = []
    strategy = arb(needs_bytes(1000), settings(verbosity=Verbosity.debug))
    assert strategy.size == 256
    with with_reporter(messages.append):
        tree = strategy.draw(Random(0))
    assert len(tree.current()) == 1000
    assert len(tree.buffer) == 1024
    assert messages[:2] == [
        "Buffer of 256 bytes exhausted, retrying with 512",
        "Buffer of 512 bytes exhausted, retrying with 1024",
    ]
    assert "after 3 attempts" in messages[2]


def test_growing_from_an_empty_buffer():
    @generator(size_hint=(0, 0))
    def liar(data):
        return data.read_byte()

    tree = arb(liar).draw(Random(0))
    assert len(tree.buffer) == 1


def test_gives_up_after_too_many_attempts():
    strategy = arb(
        needs_bytes(1000), settings(max_buffer_size=512, max_generation_attempts=3)
    )
    with pytest.raises(GenerationError) as err:
        strategy.draw(Random(0))
    assert err.value.attempts == 3
    assert err.value.size == 512
    assert isinstance(err.value.__cause__, BufferExhausted)


def test_invalid_encoding_is_not_retried():
    with pytest.raises(GenerationError) as err:
        arb(always_invalid).draw(Random(0))
    assert err.value.attempts == 1
    assert isinstance(err.value.__cause__, InvalidEncoding)


def test_other_generator_rejections_are_not_retried():
    @generator
    def unhelpful(data):
        raise StopGeneration("cannot say why")

    with pytest.raises(GenerationError) as err:
        arb(unhelpful).draw(Random(0))
    assert err.value.attempts == 1
    assert type(err.value.__cause__) is StopGeneration


def test_resamples_at_the_maximum_size():
    messages = []
    strategy = arb(
        needs_bytes(1000),
        settings(
            max_buffer_size=512,
            max_generation_attempts=3,
            verbosity=Verbosity.debug,
        ),
    )
    with with_reporter(messages.append):
        with pytest.raises(GenerationError):
            strategy.draw(Random(0))
    assert messages == [
        "Buffer of 256 bytes exhausted, retrying with 512",
        "Buffer of 512 bytes exhausted, resampling at max_buffer_size",
        "Giving up after 3 exhausted buffers",
    ]


def test_generation_errors_are_not_assertion_errors():
    assert not issubclass(GenerationError, AssertionError)


def test_other_errors_in_the_generator_propagate():
    @generator
    def broken(data):
        return 1 / 0

    with pytest.raises(ZeroDivisionError):
        arb(broken).draw(Random(0))


def test_invalid_encoding_can_fail_a_draw_of_a_partly_valid_generator():
    random = Random(0)
    values = []
    for _ in range(20):
        try:
            values.append(arb(even_bytes).draw(random).current())
        except GenerationError:
            pass
    assert values
    assert all(v % 2 == 0 for v in values)


def test_arb_sized_uses_the_given_size():
    tree = arb_sized(needs_bytes(10), 10).draw(Random(0))
    assert len(tree.buffer) == 10


@pytest.mark.parametrize("size", [-1, 2**16 + 1, 1.5, True])
def test_arb_sized_validates_size(size):
    with pytest.raises(InvalidArgument):
        arb_sized(u32_be, size)


def test_requires_a_generator():
    with pytest.raises(InvalidArgument):
        arb(lambda data: 1)


def test_requires_a_settings_object():
    with pytest.raises(InvalidArgument):
        ArbStrategy(u32_be, settings={"max_buffer_size": 10})


@pytest.mark.parametrize("random", [None, 0, "random"])
def test_draw_requires_a_random_source(random):
    with pytest.raises(InvalidArgument):
        arb(u32_be).draw(random)


def test_uses_the_default_settings_at_construction_time():
    settings.register_profile("tiny", default_buffer_size=7)
    settings.load_profile("tiny")
    assert arb(needs_bytes(3)).size == 7


def test_example_draws_a_value():
    assert isinstance(arb(rgb).example(), Rgb)
    assert isinstance(arb(u32_be).example(Random(0)), int)


def test_repr():
    assert repr(arb(u32_be)) == "ArbStrategy(generator(u32_be), size=4)"
