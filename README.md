# artrepl

Manage repository replication settings on an Artifactory server.

The package holds a resource's desired settings in a small state object and
validates them. It sends them to the replications REST endpoint
(`artifactory/api/replications/`) and reads the server's answer back into
the same state.

## Installation

```
pip install artrepl
```

## Resources

- `PushReplicationResource` (`artrepl.push`) manages one or more push
  replications for a repository. It writes them through the `multiple/`
  endpoint. Passwords are not returned by the server, so they are carried over
  from the state entry that has the same URL.
- `PullReplicationResource` (`artrepl.pull`) manages one pull replication on a
  repository. If `url`, `username` or `password` is given, all three must be
  given.
- `ReplicationConfigResource` (`artrepl.replication_config`) is the older form
  of the multi-replication resource. It sends no per-entry cron expression,
  keeps no passwords in state and has no checksum storage option.

Each resource is built from an `ArtifactoryClient` and has `create`, `read`,
`update` and `delete` methods. Each method takes a `ResourceData` from
`artrepl.state`. The package also exposes the building blocks directly:

- `unpack_*` functions turn state into a request body.
- `pack_*` functions write an API answer back into state.
- `validate_*` functions check state before anything is sent.

The request and response formats are the dataclasses in `artrepl.bodies`:
`ReplicationBody`, `PullReplication` and `MultiReplicationRequest`.

## Example

```python
from artrepl.client import ArtifactoryClient
from artrepl.state import ResourceData
from artrepl.push import PushReplicationResource

client = ArtifactoryClient("https://artifactory.example.com", token="token")

data = ResourceData({
    "repo_key": "lib-local",
    "cron_exp": "0 0 * * * ?",
    "enable_event_replication": True,
    "replications": [
        {
            "url": "https://mirror.example.com/artifactory/lib-local",
            "username": "admin",
            "password": "password",
        }
    ],
})

PushReplicationResource(client).create(data)   # validates, sends, then reads back
print(data.id, data.get("replications"))
```

`ResourceData` addresses values by dotted paths, for example
`data.get("replications.0.url")`. Calling `set_id("")` marks a resource as
gone.

## Errors

Validation problems raise `artrepl.validation.ValidationError`, and the
failing attribute's path is in its `key` attribute. Validation covers the
following:

- cron expressions of 5 to 7 fields, or `@daily` and the like;
- http/https URLs with a host;
- negative socket timeouts;
- empty credentials.

HTTP failures and unexpected payloads raise `artrepl.client.ApiError`, which
carries `status_code` and `body`. Some calls pass `retry_on_merge=True`. When
such a call runs into Artifactory's "Could not merge and save new descriptor"
error, it is retried up to `ArtifactoryClient.max_retries` times.

`ArtifactoryClient.replication_exists(repo_key)` tells whether a repository
has a replication configured.

## Package layouts

`artrepl.layouts` holds the default repository layout for each package type.
It also records which repository classes each type supports, and which types
can be federated:

```python
from artrepl.layouts import default_repo_layout_ref, is_federated_supported, supports_repo_class

default_repo_layout_ref("maven")               # "maven-2-default"
supports_repo_class("terraform", "local")      # False
is_federated_supported("p2")                   # False
```

## What the package does not do

- It has no resource that handles one replication which may turn out to be
  either push or pull. For those, use `PullReplicationResource` or
  `PushReplicationResource`.
- It has no command-line tool. It is a library.
- `ResourceData` lives in memory only. Saving and loading state between runs
  is left to the caller.

## Running the tests

```
pip install -e ".[test]"
pytest
```