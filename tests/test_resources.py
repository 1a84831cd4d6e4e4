"""Tests for ssl_binder.resources."""

from unittest.mock import MagicMock, patch

from azure.core.exceptions import ResourceNotFoundError


def _make_resource(name, type_, resource_group="rg-web", principal_id=None):
    resource = MagicMock()
    resource.name = name
    resource.type = type_
    resource.id = f"/subscriptions/sub-123/resourceGroups/{resource_group}/providers/{type_}/{name}"
    if principal_id:
        resource.identity.principal_id = principal_id
    else:
        resource.identity = None
    return resource


# --- find_web_apps tests ---


@patch("ssl_binder.resources._get_credential")
@patch("ssl_binder.resources.ResourceManagementClient")
def test_find_web_apps_filters_by_type_and_name(mock_client_cls, mock_cred, config):
    from ssl_binder.resources import find_web_apps

    mock_client = mock_client_cls.return_value
    mock_client.resources.list.return_value = [
        _make_resource("web-01", "Microsoft.Web/sites", principal_id="pid-1"),
    ]

    apps = find_web_apps(config, "web-01")

    mock_client_cls.assert_called_once_with(mock_cred.return_value, "sub-123")
    mock_client.resources.list.assert_called_once_with(
        filter="resourceType eq 'Microsoft.Web/sites' and name eq 'web-01'"
    )
    assert len(apps) == 1
    assert apps[0].name == "web-01"
    assert apps[0].resource_group == "rg-web"
    assert apps[0].principal_id == "pid-1"


@patch("ssl_binder.resources._get_credential")
@patch("ssl_binder.resources.ResourceManagementClient")
def test_find_web_apps_escapes_quotes(mock_client_cls, mock_cred, config):
    from ssl_binder.resources import find_web_apps

    mock_client = mock_client_cls.return_value
    mock_client.resources.list.return_value = []

    find_web_apps(config, "o'brien")

    query = mock_client.resources.list.call_args.kwargs["filter"]
    assert "name eq 'o''brien'" in query


@patch("ssl_binder.resources._get_credential")
@patch("ssl_binder.resources.ResourceManagementClient")
def test_find_web_apps_without_identity(mock_client_cls, mock_cred, config):
    from ssl_binder.resources import find_web_apps

    mock_client = mock_client_cls.return_value
    mock_client.resources.list.return_value = [_make_resource("web-01", "Microsoft.Web/sites")]

    apps = find_web_apps(config, "web-01")

    assert apps[0].principal_id is None


@patch("ssl_binder.resources._get_credential")
@patch("ssl_binder.resources.ResourceManagementClient")
def test_find_web_apps_drops_name_mismatches(mock_client_cls, mock_cred, config):
    from ssl_binder.resources import find_web_apps

    mock_client = mock_client_cls.return_value
    mock_client.resources.list.return_value = [
        _make_resource("WEB-01", "Microsoft.Web/sites"),
        _make_resource("web-01-staging", "Microsoft.Web/sites"),
    ]

    apps = find_web_apps(config, "web-01")

    assert [a.name for a in apps] == ["WEB-01"]


@patch("ssl_binder.resources._get_credential")
@patch("ssl_binder.resources.ResourceManagementClient")
def test_find_web_apps_returns_every_match(mock_client_cls, mock_cred, config):
    from ssl_binder.resources import find_web_apps

    mock_client = mock_client_cls.return_value
    mock_client.resources.list.return_value = [
        _make_resource("web-01", "Microsoft.Web/sites", resource_group="rg-a"),
        _make_resource("web-01", "Microsoft.Web/sites", resource_group="rg-b"),
    ]

    apps = find_web_apps(config, "web-01")

    assert [a.resource_group for a in apps] == ["rg-a", "rg-b"]


# --- list_group_resources tests ---


@patch("ssl_binder.resources._get_credential")
@patch("ssl_binder.resources.ResourceManagementClient")
def test_list_group_resources_preserves_order(mock_client_cls, mock_cred, config):
    from ssl_binder.resources import list_group_resources

    mock_client = mock_client_cls.return_value
    mock_client.resources.list_by_resource_group.return_value = [
        _make_resource("kv-b", "Microsoft.KeyVault/vaults"),
        _make_resource("plan", "Microsoft.Web/serverfarms"),
        _make_resource("kv-a", "Microsoft.KeyVault/vaults"),
    ]

    resources = list_group_resources(config, "rg-web")

    mock_client.resources.list_by_resource_group.assert_called_once_with("rg-web")
    assert [r.name for r in resources] == ["kv-b", "plan", "kv-a"]
    assert resources[0].type == "Microsoft.KeyVault/vaults"


@patch("ssl_binder.resources._get_credential")
@patch("ssl_binder.resources.ResourceManagementClient")
def test_list_group_resources_missing_group_returns_none(mock_client_cls, mock_cred, config):
    from ssl_binder.resources import list_group_resources

    mock_client = mock_client_cls.return_value
    mock_client.resources.list_by_resource_group.side_effect = ResourceNotFoundError("ResourceGroupNotFound")

    assert list_group_resources(config, "rg-gone") is None


# --- _resource_group_from_id tests ---


def test_resource_group_from_id():
    from ssl_binder.resources import _resource_group_from_id

    rid = "/subscriptions/s/resourceGroups/rg-web/providers/Microsoft.Web/sites/web-01"
    assert _resource_group_from_id(rid) == "rg-web"


def test_resource_group_from_id_is_case_insensitive():
    from ssl_binder.resources import _resource_group_from_id

    rid = "/subscriptions/s/resourcegroups/RG-Web/providers/Microsoft.Web/sites/web-01"
    assert _resource_group_from_id(rid) == "RG-Web"


def test_resource_group_from_id_returns_none():
    from ssl_binder.resources import _resource_group_from_id

    assert _resource_group_from_id(None) is None
    assert _resource_group_from_id("") is None
    assert _resource_group_from_id("/subscriptions/s") is None
