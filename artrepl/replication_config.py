"""The replication config resource: several replications of one repository.

This is the older form of the push replication resource. It sends no per-entry
cron expression, keeps no passwords in state and has no checksum storage option.
"""

from __future__ import annotations

from typing import Any

from .bodies import MultiReplicationRequest, ReplicationBody
from .client import ENDPOINT_PATH, ApiError, ArtifactoryClient
from .push import delete_replication
from .state import ResourceData
from .validation import ValidationError, validate_cron, validate_int_at_least, validate_url

_STATE_KEYS = (
    "url",
    "socket_timeout_millis",
    "username",
    "enabled",
    "sync_deletes",
    "sync_properties",
    "sync_statistics",
    "path_prefix",
    "password",
)


def _require(data: ResourceData, key: str) -> Any:
    value = data.get(key)
    if value is None:
        raise ValidationError(key, f'The argument "{key}" is required, but no definition was found.')
    return value


def validate_replication_config(data: ResourceData) -> None:
    """Check the attributes of a replication config; raise ValidationError on the first bad one."""
    _require(data, "repo_key")
    validate_cron(_require(data, "cron_exp"), "cron_exp")
    for index, entry in enumerate(data.get("replications") or []):
        prefix = f"replications.{index}."
        url = entry.get("url")
        if url is not None:
            validate_url(url, prefix + "url")
        timeout = entry.get("socket_timeout_millis")
        if timeout is not None:
            validate_int_at_least(timeout, 0, prefix + "socket_timeout_millis")


def unpack_replication_config(data: ResourceData) -> MultiReplicationRequest:
    """Build the request body from resource state."""
    request = MultiReplicationRequest()
    repo = data.get("repo_key", "")
    entries, ok = data.get_ok("replications")
    if not ok:
        return request

    request.repo_key = repo
    request.cron_exp = data.get("cron_exp", "")
    request.enable_event_replication = bool(data.get("enable_event_replication", False))
    for index, entry in enumerate(entries):
        values = {key: entry[key] for key in _STATE_KEYS if entry.get(key) is not None}
        if "proxy" in entry:
            values["proxy"] = data.get(f"replications.{index}.proxy", "")
        request.replications.append(ReplicationBody(repo_key=repo, **values))
    return request


def pack_replication_config(
    repo_key: str, replications: list[ReplicationBody] | None, data: ResourceData
) -> None:
    """Store replications read from the API into resource state."""
    first = replications[0] if replications else None
    data.set("repo_key", repo_key)
    data.set("cron_exp", first.cron_exp if first else "")
    data.set("enable_event_replication", first.enable_event_replication if first else False)
    if replications is None:
        return

    data.set(
        "replications",
        [
            {
                "url": repl.url,
                "socket_timeout_millis": repl.socket_timeout_millis,
                "username": repl.username,
                "enabled": repl.enabled,
                "sync_deletes": repl.sync_deletes,
                "sync_properties": repl.sync_properties,
                "sync_statistics": repl.sync_statistics,
                "path_prefix": repl.path_prefix,
                "proxy": repl.proxy,
            }
            for repl in replications
        ],
    )


def _decode_replications(result: Any) -> list[ReplicationBody] | None:
    if result is None:
        return None
    if not isinstance(result, list):
        raise ApiError(f"expected a list of replications, got {type(result).__name__}")
    try:
        return [ReplicationBody.from_payload(item) for item in result]
    except ValueError as exc:
        raise ApiError(f"invalid replication payload: {exc}") from exc


class ReplicationConfigResource:
    """Create, read, update and delete replication configs."""

    def __init__(self, client: ArtifactoryClient) -> None:
        self.client = client

    def create(self, data: ResourceData) -> None:
        validate_replication_config(data)
        request = unpack_replication_config(data)
        self.client.put(ENDPOINT_PATH + "multiple/" + request.repo_key, request.to_payload())
        data.set_id(request.repo_key)
        self.read(data)

    def read(self, data: ResourceData) -> None:
        result = self.client.get(ENDPOINT_PATH + data.id)
        pack_replication_config(data.id, _decode_replications(result), data)

    def update(self, data: ResourceData) -> None:
        validate_replication_config(data)
        request = unpack_replication_config(data)
        self.client.post(ENDPOINT_PATH + data.id, request.to_payload())
        data.set_id(request.repo_key)
        self.read(data)

    def delete(self, data: ResourceData) -> None:
        delete_replication(self.client, data)