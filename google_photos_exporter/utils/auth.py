"""Authentication utilities for Google Photos API."""

import logging
import os
from typing import Any, Callable, Optional

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from google_photos_exporter.models import AuthenticationError

logger = logging.getLogger(__name__)

# If modifying these scopes, delete the file token.json.
SCOPES = ["https://www.googleapis.com/auth/photoslibrary.readonly"]

CodeProvider = Callable[[str], str]


def prompt_for_code(auth_url: str) -> str:
    """Show the authorization URL and block until the user types the code."""
    print(
        "Go to the following link in your browser then type the "
        f"authorization code: \n{auth_url}"
    )
    return input().strip()


def load_token(token_path: str) -> Optional[Credentials]:
    """Load cached credentials, or None if the token file is missing or unreadable."""
    if not os.path.exists(token_path):
        return None
    try:
        return Credentials.from_authorized_user_file(token_path, SCOPES)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable token file %s: %s", token_path, e)
        return None


def save_token(token_path: str, creds: Credentials) -> None:
    """Persist credentials to the token file, readable by the owner only."""
    logger.info("Saving credential file to: %s", token_path)
    fd = os.open(token_path, os.O_RDWR | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as token:
        token.write(creds.to_json())


def load_client_flow(credentials_path: str, redirect_uri: Optional[str] = None) -> InstalledAppFlow:
    """Read the OAuth client secrets file.

    Args:
        credentials_path: Path to the OAuth client secrets file
        redirect_uri: Redirect URI to use, defaults to the first one registered
            in the client secrets file

    Returns:
        Flow bound to the client configuration

    Raises:
        AuthenticationError: If the client secrets cannot be read or parsed
    """
    try:
        flow = InstalledAppFlow.from_client_secrets_file(credentials_path, SCOPES)
        flow.redirect_uri = redirect_uri or flow.client_config["redirect_uris"][0]
    except (OSError, ValueError, KeyError, IndexError) as e:
        raise AuthenticationError(
            f"Unable to read client secret file {credentials_path}: {e}"
        ) from e
    return flow


def fetch_token_interactively(
    flow: InstalledAppFlow,
    code_provider: CodeProvider = prompt_for_code,
) -> Credentials:
    """Run the authorization-code flow, asking code_provider for the code.

    Args:
        flow: Flow built from the client secrets
        code_provider: Callable receiving the authorization URL and returning the code

    Returns:
        Freshly issued credentials

    Raises:
        AuthenticationError: If no code is entered or the exchange fails
    """
    auth_url, _ = flow.authorization_url(access_type="offline")

    try:
        code = code_provider(auth_url)
    except (EOFError, OSError) as e:
        raise AuthenticationError(f"Unable to read authorization code: {e}") from e
    if not code:
        raise AuthenticationError("Unable to read authorization code: empty input")

    try:
        flow.fetch_token(code=code)
    except Exception as e:
        raise AuthenticationError(f"Unable to retrieve token from web: {e}") from e

    return flow.credentials


def get_credentials(
    token_path: str,
    credentials_path: str,
    code_provider: CodeProvider = prompt_for_code,
) -> Credentials:
    """Get user credentials from storage.

    The client secrets are always read first. If there is no usable token
    file, let the user log in and save the result. Refreshing an expired
    token is left to the transport of the API client.

    Args:
        token_path: Path to token.json file
        credentials_path: Path to credentials.json file
        code_provider: Supplies the authorization code for a given URL

    Returns:
        Credentials object

    Raises:
        AuthenticationError: If the client secrets are unusable or the login fails
    """
    flow = load_client_flow(credentials_path)

    creds = load_token(token_path)
    if creds is None:
        creds = fetch_token_interactively(flow, code_provider)
        save_token(token_path, creds)

    return creds


def authenticate_google_photos(
    token_path: str = "token.json",
    credentials_path: str = "credentials.json",
    code_provider: CodeProvider = prompt_for_code,
) -> Any:
    """Authenticate with Google Photos API and build the service.

    Args:
        token_path: Path to token.json file
        credentials_path: Path to credentials.json file
        code_provider: Supplies the authorization code for a given URL

    Returns:
        Google Photos API service object

    Raises:
        AuthenticationError: If authentication fails
    """
    creds = get_credentials(token_path, credentials_path, code_provider)
    try:
        return build("photoslibrary", "v1", credentials=creds, static_discovery=False)
    except Exception as e:
        raise AuthenticationError(f"Error authenticating with Google Photos: {e}") from e
