"""Fetch a file at a given revision from the GitHub contents API."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from schemaguard.config import DEFAULT_API_URL

logger = logging.getLogger(__name__)


class SchemaSourceError(RuntimeError):
    """A schema version could not be retrieved."""


def decode_content(content: str, encoding: Optional[str]) -> str:
    """Decode a contents-API payload; base64 is decoded, anything else passes through."""
    if encoding != "base64":
        return content
    try:
        return base64.b64decode(content).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise SchemaSourceError(f"Could not decode base schema file: {e}") from e


class GitHubContentSource:
    """Reads files from one repository at arbitrary refs."""

    def __init__(
        self,
        repository: str,
        token: Optional[str] = None,
        api_url: str = DEFAULT_API_URL,
        session: Optional[Any] = None,
        timeout: float = 10.0,
    ):
        self.repository = repository
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.headers = {"Accept": "application/vnd.github+json"}
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    def content_url(self, path: str) -> str:
        return f"{self.api_url}/repos/{self.repository}/contents/{quote(path.lstrip('/'), safe='/')}"

    def fetch(self, path: str, ref: str) -> str:
        """
        Return the text of ``path`` at ``ref``.

        Raises:
            SchemaSourceError: HTTP failure, non-JSON body, or a response that
                is not a file (no ``content``)
        """
        url = self.content_url(path)
        logger.info("Fetching %s at %s from %s", path, ref, self.repository)
        try:
            response = self.session.get(
                url, params={"ref": ref}, headers=self.headers, timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise SchemaSourceError(f"Failed to fetch {path} at {ref}: {e}") from e
        except ValueError as e:
            raise SchemaSourceError(f"Invalid response for {path} at {ref}: {e}") from e

        if not isinstance(data, dict) or "content" not in data:
            raise SchemaSourceError("Could not retrieve base schema file")
        logger.debug("Fetched %s (%s encoding)", path, data.get("encoding"))
        return decode_content(data["content"], data.get("encoding"))
