"""
Kernel test configuration.

Shared fixtures for info list tests.
"""

import pytest


class RecordingScrollbar:
    """Remembers every set_range call."""

    def __init__(self):
        self.calls = []

    def set_range(self, min, max, page_size):
        self.calls.append((min, max, page_size))

    @property
    def last(self):
        return self.calls[-1] if self.calls else None


@pytest.fixture
def scrollbar():
    return RecordingScrollbar()
