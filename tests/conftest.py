from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

FIXED_TZ = timezone(timedelta(hours=-5))


@pytest.fixture
def now() -> datetime:
    """Tuesday 2026-03-10 08:30 at UTC-5; every relative date is computed from here."""
    return datetime(2026, 3, 10, 8, 30, 15, 123000, tzinfo=FIXED_TZ)
