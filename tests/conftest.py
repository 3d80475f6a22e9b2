# This file is part of arbitrary-interop.
#
# Copyright the arbitrary-interop Authors.
# Individual contributors are listed in the git log.
#
# This Source Code Form is subject to the terms of the Mozilla Public License,
# v. 2.0. If a copy of the MPL was not distributed with this file, You can
# obtain one at https://mozilla.org/MPL/2.0/.

import pytest

from arbitrary_interop import settings
from arbitrary_interop._settings import local_settings

from tests.common.setup import run

run()


@pytest.fixture(autouse=True)
def restore_default_settings():
    # Tests that load profiles must not leak them into later tests.
    profile = settings._current_profile
    with local_settings(settings.default):
        yield
    settings.load_profile(profile)
