"""The push replication resource: several replications of one local repository."""

from __future__ import annotations

from typing import Any

from .bodies import MultiReplicationRequest, ReplicationBody
from .client import ENDPOINT_PATH, ApiError, ArtifactoryClient
from .state import ResourceData
from .validation import (
    ValidationError,
    validate_cron,
    validate_int_at_least,
    validate_not_empty,
    validate_url,
)

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
    "check_binary_existence_in_filestore",
)


def _require(data: ResourceData, key: str) -> Any:
    value = data.get(key)
    if value is None:
        raise ValidationError(key, f'The argument "{key}" is required, but no definition was found.')
    return value


def validate_push_replication(data: ResourceData) -> None:
    """Check the attributes of a push replication; raise ValidationError on the first bad one."""
    _require(data, "repo_key")
    validate_cron(_require(data, "cron_exp"), "cron_exp")
    for index, entry in enumerate(data.get("replications") or []):
        prefix = f"replications.{index}."
        validate_url(_require(data, prefix + "url"), prefix + "url")
        timeout = entry.get("socket_timeout_millis")
        if timeout is not None:
            validate_int_at_least(timeout, 0, prefix + "socket_timeout_millis")
        for name in ("username", "password"):
            validate_not_empty(_require(data, prefix + name), prefix + name)


def unpack_push_replication(data: ResourceData) -> MultiReplicationRequest:
    """Build the request body from resource state."""
    request = MultiReplicationRequest()
    repo = data.get("repo_key", "")
    cron = data.get("cron_exp", "")
    entries, ok = data.get_ok("replications")
    if not ok:
        return request

    request.repo_key = repo
    request.cron_exp = cron
    request.enable_event_replication = bool(data.get("enable_event_replication", False))
    for index, entry in enumerate(entries):
        values = {key: entry[key] for key in _STATE_KEYS if entry.get(key) is not None}
        if "proxy" in entry:
            values["proxy"] = data.get(f"replications.{index}.proxy", "")
        request.replications.append(ReplicationBody(repo_key=repo, cron_exp=cron, **values))
    return request


def pack_push_replication(
    repo_key: str, replications: list[ReplicationBody] | None, data: ResourceData
) -> None:
    """Store replications read from the API into resource state.

    Passwords never come back from the API, so each one is carried over from the
    state entry with the same URL.
    """
    first = replications[0] if replications else None
    data.set("repo_key", repo_key)
    data.set("cron_exp", first.cron_exp if first else "")
    data.set("enable_event_replication", first.enable_event_replication if first else False)
    if replications is None:
        return

    current = data.get("replications") or []
    packed = []
    for repl in replications:
        entry: dict[str, Any] = {
            "url": repl.url,
            "socket_timeout_millis": repl.socket_timeout_millis,
            "username": repl.username,
        }
        match = next((old for old in current if old.get("url") == repl.url), None)
        if match is not None:
            entry["password"] = match.get("password")
        entry.update(
            enabled=repl.enabled,
            sync_deletes=repl.sync_deletes,
            sync_properties=repl.sync_properties,
            sync_statistics=repl.sync_statistics,
            path_prefix=repl.path_prefix,
            proxy=repl.proxy,
            check_binary_existence_in_filestore=repl.check_binary_existence_in_filestore,
        )
        packed.append(entry)
    data.set("replications", packed)


def _decode_replications(result: Any) -> list[ReplicationBody] | None:
    if result is None:
        return None
    if not isinstance(result, list):
        raise ApiError(f"expected a list of replications, got {type(result).__name__}")
    try:
        return [ReplicationBody.from_payload(item) for item in result]
    except ValueError as exc:
        raise ApiError(f"invalid replication payload: {exc}") from exc


def delete_replication(client: ArtifactoryClient, data: ResourceData) -> None:
    """Delete every replication of the resource's repository."""
    client.delete(ENDPOINT_PATH + data.id, retry_on_merge=True)


class PushReplicationResource:
    """Create, read, update and delete push replications."""

    def __init__(self, client: ArtifactoryClient) -> None:
        self.client = client

    def create(self, data: ResourceData) -> None:
        validate_push_replication(data)
        request = unpack_push_replication(data)
        self.client.put(ENDPOINT_PATH + "multiple/" + request.repo_key, request.to_payload())
        data.set_id(request.repo_key)
        self.read(data)

    def read(self, data: ResourceData) -> None:
        result = self.client.get(ENDPOINT_PATH + data.id)
        pack_push_replication(data.id, _decode_replications(result), data)

    def update(self, data: ResourceData) -> None:
        validate_push_replication(data)
        request = unpack_push_replication(data)
        self.client.post(
            ENDPOINT_PATH + "multiple/" + data.id, request.to_payload(), retry_on_merge=True
        )
        self.read(data)

    def delete(self, data: ResourceData) -> None:
        delete_replication(self.client, data)