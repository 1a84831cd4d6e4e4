"""Tests for ssl_binder.web."""

from unittest.mock import patch

from azure.mgmt.web.models import SslState

from ssl_binder.models import SslBindingRequest


def _request(**overrides):
    values = {
        "resource_group": "rg-web",
        "app_name": "web-01",
        "thumbprint": "A1B2C3",
        "hostname": "shop.example.com",
    }
    values.update(overrides)
    return SslBindingRequest(**values)


@patch("ssl_binder.web._get_credential")
@patch("ssl_binder.web.WebSiteManagementClient")
def test_create_sni_binding_params(mock_client_cls, mock_cred, config):
    from ssl_binder.web import create_sni_binding

    mock_client = mock_client_cls.return_value

    result = create_sni_binding(config, _request())

    mock_client_cls.assert_called_once_with(mock_cred.return_value, "sub-123")
    call = mock_client.web_apps.create_or_update_host_name_binding.call_args
    assert call.kwargs["resource_group_name"] == "rg-web"
    assert call.kwargs["name"] == "web-01"
    assert call.kwargs["host_name"] == "shop.example.com"
    binding = call.kwargs["host_name_binding"]
    assert binding.thumbprint == "A1B2C3"
    assert binding.ssl_state == SslState.SNI_ENABLED
    assert result is mock_client.web_apps.create_or_update_host_name_binding.return_value


@patch("ssl_binder.web._get_credential")
@patch("ssl_binder.web.WebSiteManagementClient")
def test_create_sni_binding_uses_request_state(mock_client_cls, mock_cred, config):
    from ssl_binder.web import create_sni_binding

    request = _request()
    create_sni_binding(config, request)

    call = mock_client_cls.return_value.web_apps.create_or_update_host_name_binding.call_args
    assert call.kwargs["host_name_binding"].ssl_state == SslState(request.ssl_state)


def test_sni_state_matches_platform_value():
    from ssl_binder.models import SNI_ENABLED

    assert SslState.SNI_ENABLED.value == SNI_ENABLED
