"""Shared pytest fixtures and configuration."""

import pytest

from issuebridge.integrations import Namespace, Project, User


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def project() -> Project:
    """A host project at gitlab-org/gitlab-ce."""
    return Project(id=7, path="gitlab-ce", namespace=Namespace(id=3, path="gitlab-org"))


@pytest.fixture
def author() -> User:
    return User(id=1, name="Ada Lovelace", username="ada")
