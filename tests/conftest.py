"""Shared test fixtures."""

import pytest

from certainty_playwright.config.settings import get_settings
from certainty_playwright.element.subject import ElementSubject
from certainty_playwright.subject.failure import SoftAssertions

from tests.fakes import FakeElement


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; make sure environment changes in one test don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def soft():
    return SoftAssertions()


@pytest.fixture()
def make_subject(soft):
    """Build an ElementSubject over a FakeElement reporting into ``soft``."""

    def factory(**element_kwargs) -> ElementSubject:
        return ElementSubject(soft, FakeElement(**element_kwargs))

    return factory
