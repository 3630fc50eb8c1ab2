"""Pytest configuration for integration tests against real services."""

import os

import pytest
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@pytest.fixture(scope="session")
def database_url():
    """PostgreSQL URL for integration tests (SQLAlchemy style)."""
    return os.getenv("TEST_DATABASE_URL", "")


@pytest.fixture(scope="session")
def llm_api_available():
    """Check if any LLM API is available."""
    return any([
        os.getenv("TALE_LLM_MODEL"),
        os.getenv("ANTHROPIC_API_KEY"),
        os.getenv("OPENAI_API_KEY"),
        os.getenv("GOOGLE_API_KEY"),
    ])


@pytest.fixture(autouse=True)
def skip_if_no_database(request, database_url):
    """Skip tests marked with requires_database if TEST_DATABASE_URL not set."""
    if request.node.get_closest_marker("requires_database"):
        if not database_url:
            pytest.skip("TEST_DATABASE_URL not set")


@pytest.fixture(autouse=True)
def skip_if_no_llm_api(request, llm_api_available):
    """Skip tests marked with requires_llm_api if no key set."""
    if request.node.get_closest_marker("requires_llm_api"):
        if not llm_api_available:
            pytest.skip("No LLM API key set")
