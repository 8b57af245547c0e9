"""
Tests for the boto3-backed object store, using moto's S3 mock.
"""
from urllib.parse import parse_qs, urlparse

import pytest
import requests
from httpx import AsyncClient, ASGITransport

from imagehost.errors import StorageError
from imagehost.main import create_app
from imagehost.storage.s3_client import S3ObjectStore

from fakes import TEST_BUCKET, make_settings


class TestS3ObjectStore:
    """Tests for S3ObjectStore against moto."""

    def test_put_object_writes_body_and_metadata(self, s3_store: S3ObjectStore, s3_client):
        s3_store.put_object("abc", b"hello", "text/plain", {"originalname": "a.txt"})

        obj = s3_client.get_object(Bucket=TEST_BUCKET, Key="abc")
        assert obj["Body"].read() == b"hello"
        assert obj["ContentType"] == "text/plain"
        assert obj["Metadata"] == {"originalname": "a.txt"}

    def test_put_object_missing_bucket(self, s3_client):
        store = S3ObjectStore(
            bucket="no-such-bucket",
            access_key_id="testing",
            secret_access_key="testing",
            region="us-east-1",
        )

        with pytest.raises(StorageError) as exc_info:
            store.put_object("abc", b"hello", "text/plain", {"originalname": ""})

        assert exc_info.value.operation == "put"
        assert exc_info.value.key == "abc"

    def test_object_exists(self, s3_store: S3ObjectStore, s3_client):
        s3_client.put_object(Bucket=TEST_BUCKET, Key="abc", Body=b"hello")

        assert s3_store.object_exists("abc") is True
        assert s3_store.object_exists("missing") is False

    def test_presigned_url_expires_in_one_hour(self, s3_store: S3ObjectStore):
        url = s3_store.presigned_get_url("abc", 3600)

        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        assert parsed.path == f"/{TEST_BUCKET}/abc"
        assert query["X-Amz-Expires"] == ["3600"]
        assert "X-Amz-Signature" in query

    def test_ping(self, s3_store: S3ObjectStore):
        s3_store.ping()

    def test_ping_missing_bucket(self, s3_client):
        store = S3ObjectStore(
            bucket="no-such-bucket",
            access_key_id="testing",
            secret_access_key="testing",
            region="us-east-1",
        )

        with pytest.raises(StorageError):
            store.ping()

    def test_from_settings(self, s3_client):
        store = S3ObjectStore.from_settings(make_settings())
        assert store.bucket == TEST_BUCKET


class TestUploadRetrieveScenario:
    """Upload through the API, then follow the redirect target back to the bytes."""

    @pytest.mark.asyncio
    async def test_hello_round_trip(self, s3_store: S3ObjectStore, s3_client):
        app = create_app(settings=make_settings(), object_store=s3_store)
        transport = ASGITransport(app=app)

        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            upload = await ac.post("/upload", files={"file": ("a.txt", b"hello", "text/plain")})
            assert upload.status_code == 200
            data = upload.json()
            assert len(data["id"]) == 32
            assert data["pageUrl"].endswith(f"/i/{data['id']}")

            redirect = await ac.get(f"/i/{data['id']}")

        assert redirect.status_code == 302
        location = urlparse(redirect.headers["location"])
        assert location.path == f"/{TEST_BUCKET}/{data['id']}"
        assert parse_qs(location.query)["X-Amz-Expires"] == ["3600"]

        fetched = requests.get(redirect.headers["location"])
        assert fetched.status_code == 200
        assert fetched.content == b"hello"
        assert fetched.headers["content-type"] == "text/plain"

        obj = s3_client.get_object(Bucket=TEST_BUCKET, Key=data["id"])
        assert obj["Body"].read() == b"hello"
        assert obj["ContentType"] == "text/plain"
        assert obj["Metadata"] == {"originalname": "a.txt"}

    @pytest.mark.asyncio
    async def test_never_uploaded_id_is_404(self, s3_store: S3ObjectStore):
        app = create_app(settings=make_settings(), object_store=s3_store)
        transport = ASGITransport(app=app)

        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/i/0123456789abcdef0123456789abcdef")

        assert response.status_code == 404
