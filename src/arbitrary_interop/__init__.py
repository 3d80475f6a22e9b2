# This file is part of arbitrary-interop.
#
# Copyright the arbitrary-interop Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

"""arbitrary-interop lets a buffer-consuming generator, a function which
derives a value from a finite stream of bytes, be used as a shrinkable
strategy in property-based tests.

Draws sample random buffers for the generator, and shrinking proposes
shorter and smaller buffers and re-runs the generator over them.
"""

from arbitrary_interop._settings import Verbosity, settings
from arbitrary_interop.errors import (
    BufferExhausted,
    GenerationError,
    InvalidEncoding,
    StopGeneration,
)
from arbitrary_interop.generators import Generator, generator
from arbitrary_interop.strategy import ArbStrategy, arb, arb_sized
from arbitrary_interop.tree import ArbValueTree, TreeState
from arbitrary_interop.unstructured import Unstructured
from arbitrary_interop.version import __version__, __version_info__

__all__ = [
    "ArbStrategy",
    "ArbValueTree",
    "BufferExhausted",
    "GenerationError",
    "Generator",
    "InvalidEncoding",
    "StopGeneration",
    "TreeState",
    "Unstructured",
    "Verbosity",
    "arb",
    "arb_sized",
    "generator",
    "settings",
    "__version__",
    "__version_info__",
]
