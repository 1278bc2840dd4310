import pytest

from artrepl.layouts import (
    DEFAULT_REPO_LAYOUTS,
    FEDERATED_REPO_TYPES,
    default_repo_layout_ref,
    is_federated_supported,
    supported_repo_classes,
    supports_repo_class,
)


@pytest.mark.parametrize(
    "package_type, layout",
    [
        ("maven", "maven-2-default"),
        ("gradle", "maven-2-default"),
        ("npm", "npm-default"),
        ("terraform_provider", "terraform-provider-default"),
        ("generic", "simple-default"),
    ],
)
def test_default_layouts(package_type, layout):
    assert default_repo_layout_ref(package_type) == layout


def test_unknown_package_type_raises():
    with pytest.raises(ValueError):
        default_repo_layout_ref("nonexistent")
    assert supports_repo_class("nonexistent", "local") is False


def test_explicitly_disabled_classes():
    assert supports_repo_class("terraform", "local") is False
    assert supports_repo_class("terraform", "remote") is True
    assert supports_repo_class("terraformbackend", "local") is True
    assert supports_repo_class("terraformbackend", "remote") is False


def test_unlisted_classes_are_unsupported():
    assert supports_repo_class("vcs", "remote") is True
    assert supports_repo_class("vcs", "local") is False
    assert supports_repo_class("p2", "federated") is False
    assert supports_repo_class("cargo", "virtual") is False


def test_federated_types_support_federated_class():
    for package_type in FEDERATED_REPO_TYPES:
        assert is_federated_supported(package_type)
        assert supports_repo_class(package_type, "federated")


def test_non_federated_types():
    assert is_federated_supported("p2") is False
    assert is_federated_supported("vcs") is False


def test_entries_are_read_only():
    entry = supported_repo_classes("docker")
    with pytest.raises(TypeError):
        entry.supported_repo_types["local"] = False
    with pytest.raises(TypeError):
        DEFAULT_REPO_LAYOUTS["docker"] = entry
    assert supported_repo_classes("docker").supported_repo_types["local"] is True
    assert supports_repo_class("docker", "local") is True
    assert default_repo_layout_ref("docker") == "simple-default"