import pytest

from artrepl.state import ResourceData


def test_get_top_level_and_default():
    data = ResourceData({"repo_key": "lib-local"})
    assert data.get("repo_key") == "lib-local"
    assert data.get("cron_exp", "fallback") == "fallback"
    assert data.get("cron_exp") is None


def test_get_dotted_path_into_lists():
    data = ResourceData({"replications": [{"url": "http://localhost:8080", "proxy": "p"}]})
    assert data.get("replications.0.url") == "http://localhost:8080"
    assert data.get("replications.0.proxy") == "p"
    assert data.get("replications.1.url") is None
    assert data.get("replications.x.url") is None


def test_get_ok_zero_values_are_not_ok():
    data = ResourceData({"enabled": False, "path_prefix": "", "replications": [], "socket_timeout_millis": 0})
    for key in ("enabled", "path_prefix", "replications", "socket_timeout_millis", "missing"):
        _, ok = data.get_ok(key)
        assert ok is False


def test_get_ok_set_value():
    data = ResourceData({"enabled": True, "username": "admin"})
    assert data.get_ok("enabled") == (True, True)
    assert data.get_ok("username") == ("admin", True)


def test_set_round_trip():
    data = ResourceData()
    data.set("cron_exp", "0 0 * * * ?")
    assert data.get("cron_exp") == "0 0 * * * ?"
    assert data.values == {"cron_exp": "0 0 * * * ?"}


def test_set_nested_path():
    data = ResourceData({"replications": [{"proxy": "old"}]})
    data.set("replications.0.proxy", "new")
    assert data.get("replications.0.proxy") == "new"


def test_set_missing_parent_raises():
    data = ResourceData()
    with pytest.raises(KeyError):
        data.set("replications.0.proxy", "value")


def test_values_are_copied():
    source = {"replications": [{"url": "http://localhost"}]}
    data = ResourceData(source)
    data.set("replications.0.url", "https://localhost")
    assert source["replications"][0]["url"] == "http://localhost"


def test_set_id():
    data = ResourceData(id="lib-local")
    assert data.id == "lib-local"
    data.set_id("")
    assert data.id == ""