import pytest
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials

from integrations import google_auth
from integrations.google_auth import SCOPES, load_google_credentials
from workflows.prospect_research.errors import GoogleAuthMissing
from workflows.prospect_research.settings import Settings


def test_refresh_token_credentials():
    creds = load_google_credentials(Settings(
        google_client_id="cid", google_client_secret="secret", google_refresh_token="rt",
    ))
    assert isinstance(creds, Credentials)
    assert creds.refresh_token == "rt"
    assert creds.client_id == "cid"
    assert creds.token_uri == google_auth.TOKEN_URI
    assert list(creds.scopes) == SCOPES


def test_partial_oauth_config_is_missing():
    with pytest.raises(GoogleAuthMissing):
        load_google_credentials(Settings(google_client_id="cid", google_refresh_token="rt"))


def test_nothing_configured_is_missing():
    with pytest.raises(GoogleAuthMissing):
        load_google_credentials(Settings())


def test_service_account_wins_when_configured(tmp_path, monkeypatch):
    key = tmp_path / "sa.json"
    key.write_text("{}")
    loaded = {}

    def fake_from_file(path, scopes):
        loaded.update(path=path, scopes=scopes)
        return "sa-creds"

    monkeypatch.setattr(service_account.Credentials, "from_service_account_file", fake_from_file)
    creds = load_google_credentials(Settings(
        google_service_account_file=str(key), google_client_id="cid",
        google_client_secret="secret", google_refresh_token="rt",
    ))
    assert creds == "sa-creds"
    assert loaded == {"path": str(key), "scopes": SCOPES}


def test_missing_service_account_file(tmp_path):
    with pytest.raises(GoogleAuthMissing):
        load_google_credentials(Settings(google_service_account_file=str(tmp_path / "nope.json")))
