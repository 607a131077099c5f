"""
Shared test fixtures and utilities.
"""
import json
from datetime import datetime, timedelta, timezone
import boto3
import httpx
import jwt
import pytest
from moto import mock_aws
from landhud_api.core import config, dependencies

TEST_JWT_SECRET = "test-secret"
TEST_BUCKET = "lead-lists-test"
TEST_TABLE = "records-test"
TEST_WEBHOOK_URL = "https://processor.test/webhook/lead-list-upload"


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Point settings at the mocked AWS resources and a local processor URL."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.setenv("S3_BUCKET_NAME", TEST_BUCKET)
    monkeypatch.setenv("RECORDS_TABLE_NAME", TEST_TABLE)
    monkeypatch.setenv("APP_URL", "https://app.test")
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("LEAD_LIST_CALLBACK_SECRET", "")
    monkeypatch.setenv("STORAGE_PUBLIC_BASE_URL", "")
    monkeypatch.setenv("ENVIRONMENT", "test")

    config.settings = config.Settings(lead_list_webhook_url=TEST_WEBHOOK_URL)
    dependencies.clear_caches()
    yield
    dependencies.clear_caches()


@pytest.fixture
def aws():
    with mock_aws():
        yield


@pytest.fixture
def records_table(aws):
    """Create the import records table."""
    dynamodb = boto3.resource("dynamodb", region_name="us-east-1")
    table = dynamodb.create_table(
        TableName=TEST_TABLE,
        KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST"
    )
    yield table


@pytest.fixture
def bucket(aws):
    """Create the lead list bucket and return an S3 client."""
    s3 = boto3.client("s3", region_name="us-east-1")
    s3.create_bucket(Bucket=TEST_BUCKET)
    yield s3


@pytest.fixture
def auth_headers():
    """Generate valid JWT token and return authorization headers."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": "test_user",
        "exp": now + timedelta(hours=1),
        "iat": now
    }
    token = jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


class ProcessorStub:
    """Records webhook calls and answers with a configurable outcome."""

    def __init__(self):
        self.calls = []
        self.status_code = 200
        self.fail_transport = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append({"url": str(request.url), "json": json.loads(request.content)})
        if self.fail_transport:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(self.status_code, json={"ok": self.status_code < 400})

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def processor_stub():
    return ProcessorStub()
