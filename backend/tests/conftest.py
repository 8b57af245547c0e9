"""
Test configuration and fixtures.
Handler tests run against an in-memory object store; storage tests use moto.
"""
import os

# Set test environment before any imports
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
os.environ["ENVIRONMENT"] = "test"

import boto3
import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from moto import mock_aws

from imagehost.config import Settings
from imagehost.main import create_app
from imagehost.storage.s3_client import S3ObjectStore

from fakes import TEST_BUCKET, FakeObjectStore, make_settings


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def app(test_settings: Settings, fake_store: FakeObjectStore):
    return create_app(settings=test_settings, object_store=fake_store)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def small_limit_client(fake_store: FakeObjectStore) -> AsyncGenerator[AsyncClient, None]:
    """Client for an app that only accepts files up to 1 KiB."""
    app = create_app(settings=make_settings(max_upload_bytes=1024), object_store=fake_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture
def s3_client(aws_mock):
    client = boto3.client("s3", region_name="us-east-1")
    client.create_bucket(Bucket=TEST_BUCKET)
    return client


@pytest.fixture
def s3_store(s3_client) -> S3ObjectStore:
    return S3ObjectStore(
        bucket=TEST_BUCKET,
        access_key_id="testing",
        secret_access_key="testing",
        region="us-east-1",
    )
