"""Default repository layouts and the repository classes each package type supports."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class SupportedRepoClasses:
    """The default layout of a package type and which repository classes it allows."""

    repo_layout_ref: str
    supported_repo_types: Mapping[str, bool]

    def supports(self, repo_class: str) -> bool:
        return self.supported_repo_types.get(repo_class, False)


_ALL = ("local", "remote", "virtual", "federated")
_NO_VIRTUAL = ("local", "remote", "federated")


def _entry(ref: str, enabled: Iterable[str], disabled: Iterable[str] = ()) -> SupportedRepoClasses:
    types = {name: False for name in disabled}
    types.update((name, True) for name in enabled)
    return SupportedRepoClasses(ref, MappingProxyType(types))


DEFAULT_REPO_LAYOUTS: Mapping[str, SupportedRepoClasses] = MappingProxyType(
    {
        "alpine": _entry("simple-default", _ALL),
        "bower": _entry("bower-default", _ALL),
        "cran": _entry("simple-default", _ALL),
        "cargo": _entry("simple-default", _NO_VIRTUAL),
        "chef": _entry("simple-default", _ALL),
        "cocoapods": _entry("simple-default", _NO_VIRTUAL),
        "composer": _entry("composer-default", _ALL),
        "conan": _entry("conan-default", _ALL),
        "conda": _entry("simple-default", _ALL),
        "debian": _entry("simple-default", _ALL),
        "docker": _entry("simple-default", _ALL),
        "gems": _entry("simple-default", _ALL),
        "generic": _entry("simple-default", _ALL),
        "gitlfs": _entry("simple-default", _ALL),
        "go": _entry("go-default", _ALL),
        "gradle": _entry("maven-2-default", _ALL),
        "helm": _entry("simple-default", _ALL),
        "ivy": _entry("ivy-default", _ALL),
        "maven": _entry("maven-2-default", _ALL),
        "npm": _entry("npm-default", _ALL),
        "nuget": _entry("nuget-default", _ALL),
        "opkg": _entry("simple-default", _ALL),
        "p2": _entry("simple-default", ("remote", "virtual")),
        "pub": _entry("simple-default", _ALL),
        "puppet": _entry("puppet-default", _ALL),
        "pypi": _entry("simple-default", _ALL),
        "sbt": _entry("sbt-default", _ALL),
        "terraform": _entry("simple-default", ("remote", "virtual", "federated"), ("local",)),
        "terraform_module": _entry("terraform-module-default", _ALL),
        "terraform_provider": _entry("terraform-provider-default", _ALL),
        "terraformbackend": _entry(
            "simple-default", ("local",), ("remote", "virtual", "federated")
        ),
        "vagrant": _entry("simple-default", ("local", "federated")),
        "vcs": _entry("simple-default", ("remote",)),
        "rpm": _entry("simple-default", _ALL),
        "swift": _entry("swift-default", _ALL),
    }
)

FEDERATED_REPO_TYPES: tuple[str, ...] = (
    "alpine",
    "bower",
    "cargo",
    "chef",
    "cocoapods",
    "composer",
    "conan",
    "conda",
    "cran",
    "debian",
    "docker",
    "gems",
    "generic",
    "gitlfs",
    "go",
    "gradle",
    "helm",
    "ivy",
    "maven",
    "npm",
    "nuget",
    "opkg",
    "puppet",
    "pypi",
    "rpm",
    "sbt",
    "terraform_module",
    "terraform_provider",
    "vagrant",
)


def supported_repo_classes(package_type: str) -> SupportedRepoClasses:
    """Return the layout entry for a package type."""
    try:
        return DEFAULT_REPO_LAYOUTS[package_type]
    except KeyError:
        raise ValueError(f"unknown package type {package_type!r}") from None


def default_repo_layout_ref(package_type: str) -> str:
    """Return the default repository layout of a package type."""
    return supported_repo_classes(package_type).repo_layout_ref


def supports_repo_class(package_type: str, repo_class: str) -> bool:
    """Tell whether a package type may be used for a repository class."""
    entry = DEFAULT_REPO_LAYOUTS.get(package_type)
    return entry is not None and entry.supports(repo_class)


def is_federated_supported(package_type: str) -> bool:
    """Tell whether federated repositories exist for a package type."""
    return package_type in FEDERATED_REPO_TYPES