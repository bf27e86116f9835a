"""Pytest configuration and shared fixtures for the legacymd test suite.

This module provides shared fixtures and test configuration used across the
entire test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from legacymd.ast import Document, Emphasis, HashTag, Link, List, ListItem, Mention, Text
from legacymd.resolver import StaticUserResolver, UserInfo

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using Hypothesis")


@pytest.fixture
def users() -> list[UserInfo]:
    """Users known to the test resolver."""
    return [
        UserInfo(user_id=42, screen_name="jane", pretty_name="Jane Doe", email="jane@example.com"),
        UserInfo(user_id=7, screen_name="ann", pretty_name="Ann", email=None),
    ]


@pytest.fixture
def resolver(users) -> StaticUserResolver:
    """Resolver backed by the test users."""
    return StaticUserResolver(users)


@pytest.fixture
def sample_document(users) -> Document:
    """A document covering text, emphasis, entities, links and a list."""
    jane = users[0]
    return Document(
        children=[
            Text(content="Hello "),
            Mention(
                user_id=jane.user_id,
                pretty_name=jane.pretty_name,
                screen_name=jane.screen_name,
                email=jane.email,
            ),
            Text(content=", see "),
            Emphasis(content=[Text(content="this")]),
            Text(content=" "),
            HashTag(text="release"),
            Text(content=" at "),
            Link(url="https://example.com/notes", content=[Text(content="the notes")]),
            List(
                ordered=False,
                items=[
                    ListItem(children=[Text(content="first")]),
                    ListItem(children=[Text(content="second")]),
                ],
            ),
        ]
    )
