"""Tests for ssl_binder.auth."""

from unittest.mock import patch


@patch("ssl_binder.auth.DefaultAzureCredential")
def test_get_credential_is_cached(mock_cred_cls):
    from ssl_binder.auth import get_credential

    first = get_credential()
    second = get_credential()

    assert first is second
    assert first is mock_cred_cls.return_value
    mock_cred_cls.assert_called_once_with()
