"""
'datastore/registry.py': Selects and builds the datastore backend.
"""
import logging
from typing import Optional

from .base import Datastore


def get_datastore(backend: str, settings=None, logger: Optional[logging.Logger] = None) -> Datastore:
    """
    Build the repositories for the requested backend.

    Args:
        backend (str): "firestore" or "memory".
        settings (Settings): Application settings (project, credentials, collection names).
        logger (Logger): Logger shared by the repositories.

    Returns:
        Datastore: The four entity repositories.

    Raises:
        ValueError: If the backend is unknown.
    """
    if backend == "memory":
        from .memory.service import create_memory_datastore
        return create_memory_datastore(logger)

    if backend == "firestore":
        from .firestore.client import create_firestore_client
        from .firestore.service import create_firestore_datastore

        if settings.credentials_path:
            client = create_firestore_client(credentials_path=settings.credentials_path)
        else:
            client = create_firestore_client(project_id=settings.project_id)
        return create_firestore_datastore(client, settings.collections, logger)

    raise ValueError(f"Unknown datastore backend: {backend}")
