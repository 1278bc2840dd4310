import pytest
import requests
import responses
from responses import matchers

from artrepl.client import ENDPOINT_PATH, ApiError, ArtifactoryClient, is_merge_error

BASE = "http://localhost:8082"
REPL_URL = f"{BASE}/artifactory/api/replications/lib-local"
MERGE_BODY = "Could not merge and save new descriptor [org.example.Conflict]"


@pytest.fixture
def client():
    c = ArtifactoryClient(BASE, token="token")
    c.retry_wait = 0
    return c


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


def test_replication_exists_when_head_succeeds(client, mocked):
    mocked.add(responses.HEAD, REPL_URL, status=200)
    assert client.replication_exists("lib-local") is True


def test_replication_does_not_exist_on_error(client, mocked):
    mocked.add(responses.HEAD, REPL_URL, status=404)
    assert client.replication_exists("lib-local") is False


def test_head_returns_status(client, mocked):
    mocked.add(responses.HEAD, REPL_URL, status=200)
    assert client.head(ENDPOINT_PATH + "lib-local") == 200


def test_get_decodes_json_and_sends_token(client, mocked):
    mocked.add(
        responses.GET,
        REPL_URL,
        json=[{"repoKey": "lib-local"}],
        match=[matchers.header_matcher({"Authorization": "Bearer token"})],
    )
    assert client.get(ENDPOINT_PATH + "lib-local") == [{"repoKey": "lib-local"}]


def test_get_empty_body_is_none(client, mocked):
    mocked.add(responses.GET, REPL_URL, body="")
    assert client.get(ENDPOINT_PATH + "lib-local") is None


def test_get_error_status_raises(client, mocked):
    mocked.add(responses.GET, REPL_URL, status=404, body="not found")
    with pytest.raises(ApiError) as info:
        client.get(ENDPOINT_PATH + "lib-local")
    assert info.value.status_code == 404
    assert info.value.body == "not found"


def test_transport_error_raises_api_error(client, mocked):
    mocked.add(responses.GET, REPL_URL, body=requests.ConnectionError("refused"))
    with pytest.raises(ApiError) as info:
        client.get(ENDPOINT_PATH + "lib-local")
    assert info.value.status_code is None


def test_put_sends_json_body(client, mocked):
    body = {"repoKey": "lib-local", "cronExp": "0 0 * * * ?"}
    mocked.add(
        responses.PUT,
        REPL_URL,
        status=201,
        body="",
        match=[matchers.json_params_matcher(body)],
    )
    assert client.put(ENDPOINT_PATH + "lib-local", body) is None
    assert len(mocked.calls) == 1


def test_trailing_slash_in_base_url(mocked):
    c = ArtifactoryClient(BASE + "/")
    mocked.add(responses.GET, REPL_URL, json={"enabled": True})
    assert c.get("/" + ENDPOINT_PATH + "lib-local") == {"enabled": True}


def test_post_retries_on_merge_error(client, mocked):
    mocked.add(responses.POST, REPL_URL, status=500, body=MERGE_BODY)
    mocked.add(responses.POST, REPL_URL, status=200, json={"ok": True})
    assert client.post(ENDPOINT_PATH + "lib-local", {}, retry_on_merge=True) == {"ok": True}
    assert len(mocked.calls) == 2


def test_merge_error_without_retry_raises(client, mocked):
    mocked.add(responses.POST, REPL_URL, status=500, body=MERGE_BODY)
    with pytest.raises(ApiError):
        client.post(ENDPOINT_PATH + "lib-local", {})
    assert len(mocked.calls) == 1


def test_retries_stop_after_max(client, mocked):
    client.max_retries = 2
    mocked.add(responses.DELETE, REPL_URL, status=500, body=MERGE_BODY)
    with pytest.raises(ApiError) as info:
        client.delete(ENDPOINT_PATH + "lib-local", retry_on_merge=True)
    assert info.value.status_code == 500
    assert len(mocked.calls) == 3


def test_delete_success(client, mocked):
    mocked.add(responses.DELETE, REPL_URL, status=204)
    result = client.delete(ENDPOINT_PATH + "lib-local")
    assert result is None
    assert len(mocked.calls) == 1
    assert mocked.calls[0].request.method == "DELETE"


def test_is_merge_error(mocked):
    mocked.add(responses.GET, REPL_URL, status=500, body=MERGE_BODY)
    mocked.add(responses.GET, f"{BASE}/other", status=500, body="boom")
    assert is_merge_error(requests.get(REPL_URL)) is True
    assert is_merge_error(requests.get(f"{BASE}/other")) is False
    assert is_merge_error(None) is False