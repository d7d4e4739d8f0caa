"""Tests for the fixed-interval pacer."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from arbantv_setup.domain.services.pacing import Pacer, PacingPolicy


@pytest.mark.asyncio
async def test_default_intervals(sleep):
    pacer = Pacer(sleep=sleep)

    await pacer.after_field()
    await pacer.before_indexes()
    await pacer.after_index()

    assert [call.args[0] for call in sleep.await_args_list] == [0.1, 3.0, 0.2]


@pytest.mark.asyncio
async def test_zero_interval_does_not_sleep(sleep):
    pacer = Pacer(PacingPolicy(after_field=0, before_indexes=0, after_index=0), sleep=sleep)

    await pacer.after_field()
    await pacer.before_indexes()
    await pacer.after_index()

    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_uses_asyncio_sleep_by_default():
    with patch("arbantv_setup.domain.services.pacing.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        await Pacer().after_index()

    mock_sleep.assert_awaited_once_with(0.2)


def test_policy_from_settings():
    settings = SimpleNamespace(
        setup_field_delay_seconds=0.5,
        setup_index_wait_seconds=10.0,
        setup_index_delay_seconds=1.0,
    )

    policy = PacingPolicy.from_settings(settings)

    assert policy == PacingPolicy(after_field=0.5, before_indexes=10.0, after_index=1.0)
