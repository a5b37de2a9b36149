"""Tests for the database connection monitor."""

import asyncio

import pytest

from nutri_tracker.errors import DatabaseUnavailable
from nutri_tracker.services.database import DatabaseMonitor
from tests.conftest import FakeDatabaseProbe


def test_connect_retries_until_probe_succeeds() -> None:
    probe = FakeDatabaseProbe(failures=2)
    monitor = DatabaseMonitor(probe=probe, retries=5, retry_delay_seconds=0)

    asyncio.run(monitor.connect())

    assert probe.calls == 3
    assert monitor.connected is True


def test_connect_gives_up_after_fixed_attempts() -> None:
    probe = FakeDatabaseProbe(failures=10)
    monitor = DatabaseMonitor(probe=probe, retries=3, retry_delay_seconds=0)

    with pytest.raises(DatabaseUnavailable):
        asyncio.run(monitor.connect())

    assert probe.calls == 3
    assert monitor.connected is False


def test_check_records_lost_connection() -> None:
    probe = FakeDatabaseProbe()
    monitor = DatabaseMonitor(probe=probe, retries=1, retry_delay_seconds=0)
    asyncio.run(monitor.connect())

    probe.failures = 99

    assert asyncio.run(monitor.check()) is False
    assert monitor.connected is False
