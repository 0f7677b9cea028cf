"""Shared fixtures."""

import logging
from uuid import UUID

import pytest
import structlog

from fakes import FakeClock, FakeFetcher, load_profile
from mojank.models.profile import Profile


@pytest.fixture
def notch() -> Profile:
    return load_profile("notch")


@pytest.fixture
def sensei() -> Profile:
    return load_profile("senseiwells")


@pytest.fixture
def santa() -> Profile:
    return Profile(id=UUID("c114a6c1-f7dc-431c-9289-53900bb98930"), name="SuperSanta")


@pytest.fixture
def fetcher(notch, sensei, santa) -> FakeFetcher:
    return FakeFetcher([notch, sensei, santa])


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def quiet_logging():
    """Drop all log output, restoring structlog defaults afterwards."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL))
    yield
    structlog.reset_defaults()
