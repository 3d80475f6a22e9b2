# This file is part of arbitrary-interop.
#
# Copyright the arbitrary-interop Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""Where diagnostic output goes.

Everything is sent to the current reporter, which prints by default and can
be swapped for the duration of a ``with`` block, for example to collect
messages in a list.
"""

import inspect

from arbitrary_interop._settings import Verbosity
from arbitrary_interop.utils.dynamicvariables import DynamicVariable


def default(value):
    try:
        print(value)
    except UnicodeEncodeError:
        print(value.encode("unicode_escape").decode("ascii"))


reporter = DynamicVariable(default)


def current_reporter():
    return reporter.value


def with_reporter(new_reporter):
    return reporter.with_value(new_reporter)


def to_text(textish):
    if inspect.isfunction(textish):
        textish = textish()
    if isinstance(textish, bytes):
        textish = textish.decode()
    return textish


def base_report(text):
    current_reporter()(to_text(text))


def debug_report(text, settings):
    """Report ``text`` if ``settings`` ask for debug output. ``text`` may be
    a function returning the message, which is then only called when the
    message is reported."""
    if settings.verbosity >= Verbosity.debug:
        base_report(text)
