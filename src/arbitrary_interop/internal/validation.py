# This file is part of arbitrary-interop.
#
# Copyright the arbitrary-interop Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

from arbitrary_interop.errors import InvalidArgument


def check_type(typ, arg, name):
    if not isinstance(arg, typ):
        if isinstance(typ, tuple):
            assert len(typ) >= 2, "Use bare type instead of len-1 tuple"
            typ_string = "one of " + ", ".join(t.__name__ for t in typ)
        else:
            typ_string = typ.__name__
        raise InvalidArgument(
            f"Expected {typ_string} but got {name}={arg!r} (type={type(arg).__name__})"
        )


def check_valid_size(value, name, minimum=0):
    """Checks that value is an integer number of bytes no smaller than
    ``minimum``.

    Otherwise raises InvalidArgument.
    """
    if isinstance(value, bool):
        raise InvalidArgument(f"{name}={value!r} must be an integer, not a bool")
    check_type(int, value, name)
    if value < minimum:
        raise InvalidArgument(f"Invalid size {name}={value!r} < {minimum}")


def check_random(random, name="random"):
    """Checks that ``random`` can be used as a source of random bytes, which
    for us means that it has a ``getrandbits`` method like
    :class:`python:random.Random` does."""
    if not callable(getattr(random, "getrandbits", None)):
        raise InvalidArgument(
            f"{name}={random!r} (type={type(random).__name__}) is not a valid "
            "random source. Pass an instance of random.Random or anything "
            "else with a getrandbits method."
        )
