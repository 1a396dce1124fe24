from __future__ import annotations

from jobboard.services.blob_store import BlobStore, build_blob_store
from jobboard.services.notifier import Notifier, build_notifier
from jobboard.services.oauth import OAuthClient


def get_notifier() -> Notifier:
    return build_notifier()


def get_blob_store() -> BlobStore:
    return build_blob_store()


def get_oauth_client() -> OAuthClient:
    return OAuthClient()
