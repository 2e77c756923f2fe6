"""
Shared fixtures for docseal tests.

Usage:
    python -m pytest tests/ -v
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from docseal import Agent, Collector, generate_key_pair


@pytest.fixture
def receiver_keys():
    return generate_key_pair()


@pytest.fixture
def collector(receiver_keys):
    return Collector(receiver_keys)


@pytest.fixture
def agent(collector):
    agent = Agent(collector.public_key)
    collector.register("agent-1", agent.public_key)
    return agent


@pytest.fixture
def secret():
    """A shared key between two throwaway key pairs."""
    from docseal import derive_shared_secret

    a = generate_key_pair()
    b = generate_key_pair()
    return derive_shared_secret(a.private_key, b.public_key)
