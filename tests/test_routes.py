import pytest

from routefetch.config.settings import ClientConfig
from routefetch.routes.catalog import find_route, iter_routes
from routefetch.routes.general import GeneralRoute
from routefetch.routes.users import RANDOM_USER_URL, UserRoute


def test_general_routes_use_configured_base():
    cfg = ClientConfig(api_key="k", base_url="https://api.example.com", version="v1")

    status = GeneralRoute.STATUS.endpoint(cfg)
    assert status.url == "https://api.example.com/v1/status"
    assert status.method == "GET"
    assert status.encoding == "json"
    assert status.headers is None
    assert status.parameters is None

    assert GeneralRoute.COMPATIBILITY.endpoint(cfg).url == "https://api.example.com/v1/compatibility"


def test_user_route_is_absolute():
    cfg = ClientConfig(api_key="k", base_url="https://api.example.com")
    ep = UserRoute.GET_USER.endpoint(cfg)
    assert ep.url == RANDOM_USER_URL
    assert ep.name == "users.get_user"


def test_catalog_lists_every_route_once():
    names = [r.route_name for r in iter_routes()]
    assert names == ["general.status", "general.compatibility", "users.get_user"]


def test_find_route():
    assert find_route("general.status") is GeneralRoute.STATUS
    assert find_route(" USERS.GET_USER ") is UserRoute.GET_USER
    with pytest.raises(KeyError):
        find_route("general.missing")


def test_endpoint_spec_is_immutable():
    ep = GeneralRoute.STATUS.endpoint(ClientConfig(api_key="k"))
    with pytest.raises(AttributeError):
        ep.url = "https://elsewhere.example.com"
