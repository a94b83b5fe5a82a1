"""Shared fixtures for the clear sky tool tests."""
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest

from clear_sky_mcp.clear_sky_tool.nws_client import NWSClient, PointMetadata

from .payloads import make_points_payload


@pytest.fixture
def point_metadata():
    return PointMetadata.from_payload(make_points_payload())


@pytest.fixture
def mock_client(point_metadata):
    client = AsyncMock(spec=NWSClient)
    client.get_point_metadata.return_value = point_metadata
    return client


@pytest.fixture
def client_factory(mock_client):
    """Stand-in for ``nws_client`` that records each time a client is opened."""
    opened = []

    @asynccontextmanager
    async def factory(settings):
        opened.append(settings)
        yield mock_client

    factory.opened = opened
    return factory
