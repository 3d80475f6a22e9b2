# This file is part of arbitrary-interop.
#
# Copyright the arbitrary-interop Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.


class ArbitraryInteropException(Exception):
    """Generic parent class for exceptions thrown by arbitrary-interop."""


class InvalidArgument(ArbitraryInteropException, TypeError):
    """Used to indicate that the arguments to an arbitrary-interop function
    were in some manner incorrect."""


class InvalidState(ArbitraryInteropException):
    """The system is not in a state where you were allowed to do that."""


class StopGeneration(ArbitraryInteropException):
    """Raised by a generator to signal that it could not produce a value from
    the buffer it was given.

    Generators should raise one of the two subclasses below rather than this
    class directly, as the adapter treats them differently.
    """


class BufferExhausted(StopGeneration):
    """The generator needed more bytes than the buffer contained.

    When drawing a fresh value this is recovered from by sampling a larger
    buffer. While shrinking it just means that the candidate buffer was too
    short to be useful.
    """


class InvalidEncoding(StopGeneration, ValueError):
    """The generator rejected the content of the buffer as not describing a
    valid value.

    This is never retried with a bigger buffer: a draw that hits it fails
    with :class:`GenerationError`. While shrinking the candidate is simply
    skipped.
    """


class GenerationError(ArbitraryInteropException):
    """A strategy could not produce any value at all.

    This is a setup failure for the trial, not a counterexample: it means the
    pairing of adapter and generator (or the configured buffer limits) cannot
    work, and says nothing about the property under test. It is not an
    :class:`AssertionError`.
    """

    def __init__(self, message, attempts=0, size=0):
        super().__init__(message)
        self.attempts = attempts
        self.size = size
