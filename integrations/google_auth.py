from __future__ import annotations
import argparse
import os
from typing import Optional

from google.auth.credentials import Credentials as BaseCredentials
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
import gspread

from workflows.prospect_research.errors import GoogleAuthMissing
from workflows.prospect_research.settings import Settings

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]
TOKEN_URI = "https://oauth2.googleapis.com/token"
CREDENTIALS_PATH = "Creds/credentials.json"


def load_google_credentials(settings: Optional[Settings] = None) -> BaseCredentials:
    """Service account key when configured, else OAuth user creds from a stored refresh token.

    Sheets created by a service account live in that account's Drive, so the
    refresh-token path is the one to use when the sales team should own them.
    """
    settings = settings or Settings.from_env()

    if settings.google_service_account_file:
        if not os.path.exists(settings.google_service_account_file):
            raise GoogleAuthMissing(
                f"Service account key non trovata: {settings.google_service_account_file}"
            )
        return service_account.Credentials.from_service_account_file(
            settings.google_service_account_file, scopes=SCOPES
        )

    if settings.google_client_id and settings.google_client_secret and settings.google_refresh_token:
        return Credentials(
            token=None,
            refresh_token=settings.google_refresh_token,
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            token_uri=TOKEN_URI,
            scopes=SCOPES,
        )

    raise GoogleAuthMissing(
        "Credenziali Google mancanti: imposta GOOGLE_SERVICE_ACCOUNT_FILE oppure "
        "GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET e GOOGLE_REFRESH_TOKEN."
    )


def sheets_client(creds: BaseCredentials) -> gspread.Client:
    return gspread.authorize(creds)


def drive_service(creds: BaseCredentials):
    return build("drive", "v3", credentials=creds, cache_discovery=False)


def mint_refresh_token(client_secrets_path: str = CREDENTIALS_PATH) -> str:
    """Run the installed-app consent flow once and hand back the refresh token."""
    flow = InstalledAppFlow.from_client_secrets_file(client_secrets_path, SCOPES)
    # offline + consent so Google always returns a refresh token
    creds = flow.run_local_server(port=0, access_type="offline", prompt="consent")
    return creds.refresh_token


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Obtain a Google refresh token for Sheets + Drive.")
    parser.add_argument("--client-secrets", default=CREDENTIALS_PATH, help="OAuth client JSON downloaded from Google Cloud")
    args = parser.parse_args()

    token = mint_refresh_token(args.client_secrets)
    print("✅ Google authenticated. Store this value as GOOGLE_REFRESH_TOKEN:")
    print(token)
