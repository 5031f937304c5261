"""Shared fixtures: a deterministic gateway and fixed dates."""

import json
from datetime import date

import pytest

from larder.gateway import AIGateway

TODAY = date(2025, 3, 10)


class StubGateway(AIGateway):
    """Returns canned replies in order and records every prompt."""

    def __init__(self, *replies, error=None):
        self.replies = list(replies)
        self.error = error
        self.calls = []

    async def _generate(self, prompt, image=None):
        self.calls.append((prompt, image))
        if self.error is not None:
            raise self.error
        reply = self.replies.pop(0)
        if not isinstance(reply, str):
            reply = json.dumps(reply)
        return reply


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def stub_gateway():
    return StubGateway
