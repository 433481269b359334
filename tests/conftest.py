"""Shared fixtures for the command registry tests."""

import pytest

from command_registry.config import Settings
from command_registry.core import CommandPublisher, CommandStore, Reconciler, RegistrationService
from command_registry.host import InMemoryConfigStore, InMemoryHost


class FakeScheduler:
    """Records scheduled callbacks instead of starting timers."""

    def __init__(self):
        self.calls = []

    def schedule(self, delay, callback):
        self.calls.append((delay, callback))

    def fire_all(self):
        for _, callback in self.calls:
            callback()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def host():
    return InMemoryHost()


@pytest.fixture
def config_store():
    return InMemoryConfigStore()


@pytest.fixture
def store():
    return CommandStore()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def service(store, host, config_store, settings):
    publisher = CommandPublisher(host, host, settings)
    return RegistrationService(store, publisher, config_store)


@pytest.fixture
def reconciler(service, scheduler):
    return Reconciler(service, scheduler, reset_delay=1.0)
