"""The pull replication resource: one replication configured on a single repository."""

from __future__ import annotations

from typing import Any

from .bodies import PullReplication, ReplicationBody
from .client import ENDPOINT_PATH, ApiError, ArtifactoryClient
from .push import delete_replication
from .state import ResourceData
from .validation import (
    ValidationError,
    validate_cron,
    validate_int_at_least,
    validate_not_empty,
    validate_url,
)

_CREDENTIALS = ("password", "url", "username")


def _require(data: ResourceData, key: str) -> Any:
    value = data.get(key)
    if value is None:
        raise ValidationError(key, f'The argument "{key}" is required, but no definition was found.')
    return value


def validate_pull_replication(data: ResourceData) -> None:
    """Check the attributes of a pull replication; raise ValidationError on the first bad one."""
    _require(data, "repo_key")
    validate_cron(_require(data, "cron_exp"), "cron_exp")

    url = data.get("url")
    if url is not None:
        validate_url(url, "url")
    timeout = data.get("socket_timeout_millis")
    if timeout is not None:
        validate_int_at_least(timeout, 0, "socket_timeout_millis")
    for name in ("username", "password"):
        value = data.get(name)
        if value is not None:
            validate_not_empty(value, name)

    present = [name for name in _CREDENTIALS if data.get(name) is not None]
    if present and len(present) != len(_CREDENTIALS):
        listed = ",".join(_CREDENTIALS)
        raise ValidationError(present[0], f'"{present[0]}": all of `{listed}` must be specified')


def unpack_pull_replication(data: ResourceData) -> ReplicationBody:
    """Build the request body from resource state."""
    return ReplicationBody(
        repo_key=data.get("repo_key", ""),
        cron_exp=data.get("cron_exp", ""),
        enable_event_replication=bool(data.get("enable_event_replication", False)),
        url=data.get("url", ""),
        username=data.get("username", ""),
        password=data.get("password", ""),
        enabled=bool(data.get("enabled", False)),
        sync_deletes=bool(data.get("sync_deletes", False)),
        sync_properties=bool(data.get("sync_properties", False)),
        sync_statistics=bool(data.get("sync_statistics", False)),
        path_prefix=data.get("path_prefix", ""),
        check_binary_existence_in_filestore=bool(
            data.get("check_binary_existence_in_filestore", False)
        ),
    )


def pack_pull_replication(config: PullReplication, data: ResourceData) -> None:
    """Store a pull replication read from the API into resource state.

    The password comes back scrambled and the URL is not reported reliably, so
    neither is written back.
    """
    data.set("repo_key", config.repo_key)
    data.set("cron_exp", config.cron_exp)
    data.set("enable_event_replication", config.enable_event_replication)
    data.set("username", config.username)
    data.set("enabled", config.enabled)
    data.set("sync_deletes", config.sync_deletes)
    data.set("sync_properties", config.sync_properties)
    data.set("check_binary_existence_in_filestore", config.check_binary_existence_in_filestore)
    data.set("path_prefix", config.path_prefix)


def _decode_pull(result: Any) -> PullReplication:
    if isinstance(result, list):
        if len(result) > 1:
            raise ApiError("received more than one replication payload. expect only one in array")
        if not result:
            raise ApiError("received an empty replication payload")
        result = result[0]
    try:
        return PullReplication.from_payload(result)
    except ValueError as exc:
        raise ApiError(f"invalid replication payload: {exc}") from exc


class PullReplicationResource:
    """Create, read, update and delete pull replications."""

    def __init__(self, client: ArtifactoryClient) -> None:
        self.client = client

    def create(self, data: ResourceData) -> None:
        validate_pull_replication(data)
        body = unpack_pull_replication(data)
        self.client.put(
            ENDPOINT_PATH + body.repo_key, body.to_payload(proxy_field=None), retry_on_merge=True
        )
        data.set_id(body.repo_key)
        self.read(data)

    def read(self, data: ResourceData) -> None:
        result = self.client.get(ENDPOINT_PATH + data.id)
        pack_pull_replication(_decode_pull(result), data)

    def update(self, data: ResourceData) -> None:
        validate_pull_replication(data)
        body = unpack_pull_replication(data)
        self.client.post(
            ENDPOINT_PATH + body.repo_key, body.to_payload(proxy_field=None), retry_on_merge=True
        )
        data.set_id(body.repo_key)
        self.read(data)

    def delete(self, data: ResourceData) -> None:
        delete_replication(self.client, data)