"""Wire formats of replication requests and responses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, TypeVar

_T = TypeVar("_T")


def _wire(name: str, default: Any) -> Any:
    return field(default=default, metadata={"json": name})


def _read(data: Mapping[str, Any], key: str, kind: type) -> Any:
    value = data.get(key)
    if value is None:
        return kind()
    if kind is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif isinstance(value, kind):
        return value
    raise ValueError(
        f"cannot decode {type(value).__name__} value {value!r} "
        f"into field {key!r} of type {kind.__name__}"
    )


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"cannot decode {type(data).__name__} into {what}")
    return data


def _decode_wire_fields(cls: type, data: Mapping[str, Any]) -> dict[str, Any]:
    return {
        f.name: _read(data, f.metadata["json"], type(f.default))
        for f in fields(cls)
        if "json" in f.metadata
    }


def _encode_wire_fields(obj: Any) -> dict[str, Any]:
    return {
        f.metadata["json"]: getattr(obj, f.name)
        for f in fields(obj)
        if "json" in f.metadata
    }


@dataclass
class ReplicationBody:
    """One replication target as exchanged with the replications API."""

    username: str = _wire("username", "")
    password: str = _wire("password", "")
    url: str = _wire("url", "")
    cron_exp: str = _wire("cronExp", "")
    repo_key: str = _wire("repoKey", "")
    enable_event_replication: bool = _wire("enableEventReplication", False)
    socket_timeout_millis: int = _wire("socketTimeoutMillis", 0)
    enabled: bool = _wire("enabled", False)
    sync_deletes: bool = _wire("syncDeletes", False)
    sync_properties: bool = _wire("syncProperties", False)
    sync_statistics: bool = _wire("syncStatistics", False)
    path_prefix: str = _wire("pathPrefix", "")
    check_binary_existence_in_filestore: bool = _wire("checkBinaryExistenceInFilestore", False)
    proxy: str = ""

    def to_payload(self, proxy_field: str | None = "proxy") -> dict[str, Any]:
        """Encode as JSON-ready data; the proxy goes under proxy_field, or is left out when None."""
        payload = _encode_wire_fields(self)
        if proxy_field is not None:
            payload[proxy_field] = self.proxy
        return payload

    @classmethod
    def from_payload(cls, data: Any) -> ReplicationBody:
        """Decode a replication as returned by the API, reading the proxy from "proxyRef"."""
        mapping = _require_mapping(data, cls.__name__)
        return cls(**_decode_wire_fields(cls, mapping), proxy=_read(mapping, "proxyRef", str))


@dataclass
class PullReplication:
    """A pull replication as configured on a remote repository."""

    enabled: bool = _wire("enabled", False)
    cron_exp: str = _wire("cronExp", "")
    sync_deletes: bool = _wire("syncDeletes", False)
    sync_properties: bool = _wire("syncProperties", False)
    path_prefix: str = _wire("pathPrefix", "")
    repo_key: str = _wire("repoKey", "")
    replication_key: str = _wire("replicationKey", "")
    enable_event_replication: bool = _wire("enableEventReplication", False)
    username: str = _wire("username", "")
    password: str = _wire("password", "")
    url: str = _wire("url", "")
    check_binary_existence_in_filestore: bool = _wire("checkBinaryExistenceInFilestore", False)

    @classmethod
    def from_payload(cls, data: Any) -> PullReplication:
        """Decode a pull replication object returned by the API."""
        return cls(**_decode_wire_fields(cls, _require_mapping(data, cls.__name__)))

    def to_payload(self) -> dict[str, Any]:
        """Encode as JSON-ready data."""
        return _encode_wire_fields(self)


@dataclass
class MultiReplicationRequest:
    """A request that configures several replications of one repository at once."""

    repo_key: str = ""
    cron_exp: str = ""
    enable_event_replication: bool = False
    replications: list[ReplicationBody] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """Encode as JSON-ready data; the repository key travels in the URL, and empty values are left out."""
        payload: dict[str, Any] = {}
        if self.cron_exp:
            payload["cronExp"] = self.cron_exp
        if self.enable_event_replication:
            payload["enableEventReplication"] = True
        if self.replications:
            payload["replications"] = [entry.to_payload("proxy") for entry in self.replications]
        return payload