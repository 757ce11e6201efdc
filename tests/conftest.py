from datetime import datetime, timezone

import pytest

from buildgen.output.preamble import set_preamble

FIXED_TIMESTAMP = datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def pinned_preamble():
    set_preamble(timestamp=FIXED_TIMESTAMP, creator="test")
    yield
    set_preamble()
