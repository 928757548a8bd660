"""
'firestore/client.py': Firestore client construction.
"""
from pathlib import Path
from typing import Optional

from google.cloud import firestore


def create_firestore_client(project_id: Optional[str] = None, credentials_path: Optional[str] = None) -> firestore.Client:
    """Initialize Firestore.

    Use exactly one:
    - ADC -> pass `project_id`.
    - Service account -> pass `credentials_path` (path to JSON).
    """
    if bool(project_id) == bool(credentials_path):
        raise ValueError("Provide exactly one of `project_id` (ADC) or `credentials_path`.")

    if project_id:
        return firestore.Client(project=project_id)

    p = Path(credentials_path)
    if not p.exists():
        raise FileNotFoundError(f"Service-account key not found: {p}")
    return firestore.Client.from_service_account_json(str(p))
