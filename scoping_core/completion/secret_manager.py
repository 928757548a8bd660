"""
'completion/secret_manager.py': Reads the completion API key from Google Secret Manager.
"""
import logging
from typing import Optional

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import secretmanager


def secret_version_name(project_id: str, secret_name: str) -> str:
    return f"projects/{project_id}/secrets/{secret_name}/versions/latest"


def get_secret(project_id: str, secret_name: str, logger: Optional[logging.Logger] = None) -> Optional[str]:
    """
    Fetch the latest version of a secret.

    Returns:
        Optional[str]: The secret payload, or None when it cannot be read.
    """
    logger = logger or logging.getLogger("scoping.secrets")
    try:
        client = secretmanager.SecretManagerServiceClient()
        response = client.access_secret_version(request={"name": secret_version_name(project_id, secret_name)})
        return response.payload.data.decode("utf-8")
    except (GoogleAPIError, GoogleAuthError) as e:
        logger.error(f"[get_secret] Failed to read secret '{secret_name}': {e}")
        return None
