from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path

import httpx

from jobboard.config import settings
from jobboard.errors import BlobStoreError, ValidationError


logger = logging.getLogger(__name__)

ALLOWED_SUFFIXES: dict[str, set[str]] = {
    "logo": {".png", ".jpg", ".jpeg", ".webp", ".svg", ".gif"},
    "license": {".pdf", ".png", ".jpg", ".jpeg"},
    "resume": {".pdf", ".doc", ".docx"},
}


def validate_upload(kind: str, filename: str | None, size: int) -> str:
    """Check an upload against its kind and return a filesystem-safe name."""
    if kind not in ALLOWED_SUFFIXES:
        raise ValidationError(f"Invalid upload type. Must be one of: {', '.join(sorted(ALLOWED_SUFFIXES))}")
    if not filename:
        raise ValidationError("No file provided")

    suffix = Path(filename).suffix.lower()
    if suffix not in ALLOWED_SUFFIXES[kind]:
        allowed = ", ".join(sorted(ALLOWED_SUFFIXES[kind]))
        raise ValidationError(f"Unsupported file type for {kind}. Allowed: {allowed}")

    if size == 0:
        raise ValidationError("Uploaded file is empty")
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if size > max_bytes:
        raise ValidationError(f"File exceeds {settings.max_upload_size_mb}MB")

    return re.sub(r"[^A-Za-z0-9._-]", "_", Path(filename).name)


class BlobStore(ABC):
    @abstractmethod
    def upload(self, filename: str, content: bytes, content_type: str | None, kind: str) -> str:
        """Store the file and return its public URL."""

    @abstractmethod
    def delete(self, url: str) -> None:
        """Remove a file previously returned by upload."""


class PinataBlobStore(BlobStore):
    """Pins files on IPFS through the Pinata API and serves them from its gateway."""

    def __init__(
        self,
        jwt: str,
        api_url: str = "https://api.pinata.cloud",
        gateway_url: str = "https://gateway.pinata.cloud",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.jwt = jwt
        self.api_url = api_url.rstrip("/")
        self.gateway_url = gateway_url.rstrip("/")
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.api_url,
            headers={"Authorization": f"Bearer {self.jwt}"},
            timeout=30,
            transport=self.transport,
        )

    def upload(self, filename: str, content: bytes, content_type: str | None, kind: str) -> str:
        if not self.jwt:
            logger.error("Upload of %s rejected: PINATA_JWT is not configured", filename)
            raise BlobStoreError()

        metadata = {"name": filename, "keyvalues": {"kind": kind}}
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        try:
            with self._client() as client:
                response = client.post(
                    "/pinning/pinFileToIPFS",
                    files=files,
                    data={"pinataMetadata": json.dumps(metadata)},
                )
                response.raise_for_status()
                cid = response.json()["IpfsHash"]
        except (httpx.HTTPError, KeyError, ValueError) as exc:
            logger.error("Pinata upload failed for %s", filename, exc_info=True)
            raise BlobStoreError() from exc

        url = f"{self.gateway_url}/ipfs/{cid}"
        logger.info("Uploaded %s (%s) to %s", filename, kind, url)
        return url

    def delete(self, url: str) -> None:
        cid = self.cid_from_url(url)
        if cid is None:
            logger.info("Skipping unpin of non-IPFS url %r", url)
            return
        try:
            with self._client() as client:
                response = client.delete(f"/pinning/unpin/{cid}")
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise BlobStoreError("Failed to delete file") from exc
        logger.info("Unpinned %s", cid)

    @staticmethod
    def cid_from_url(url: str | None) -> str | None:
        if not url or "/ipfs/" not in url:
            return None
        cid = url.split("/ipfs/", 1)[1].split("?", 1)[0].split("/", 1)[0]
        return cid or None


def build_blob_store() -> BlobStore:
    return PinataBlobStore(settings.pinata_jwt, settings.pinata_api_url, settings.pinata_gateway_url)
