"""Pytest configuration and fixtures for shopaction tests."""

import json

import pytest


def action_dict(name: str = "add", context: str = "SHOP", **parameters) -> dict:
    """Build a raw action object as a model would emit it."""
    return {
        "context": context,
        "name": name,
        "parameters": [{"name": key, "value": value} for key, value in parameters.items()],
    }


@pytest.fixture
def make_action():
    """Factory for raw action objects."""
    return action_dict


@pytest.fixture
def make_payload():
    """Factory serializing raw action objects into an actions envelope."""
    def _make(*actions, **extra) -> str:
        return json.dumps({"actions": list(actions), **extra})
    return _make


@pytest.fixture
def single_add_payload():
    """Minimal valid payload with one action."""
    return '{"actions":[{"context":"SHOP","name":"add","parameters":[]}]}'


@pytest.fixture
def basket_payload(make_payload):
    """Valid payload with three ordered actions."""
    return make_payload(
        action_dict("add", item="apples", quantity=3),
        action_dict("remove", item="bread"),
        action_dict("clear"),
    )
