# remote_client.py
"""Async read-only client for the ``lawyers`` collection in Cloud Firestore.

Talks to the Firestore REST API with httpx and retries transient failures
with tenacity. The hybrid data source depends only on the
:class:`RemoteReader` protocol, so tests and alternative stores can plug in
anything with the same three coroutines.

Usage:
    async with FirestoreClient() as client:
        page = await client.query_lawyers(["Family Law"], limit=20)
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional, Protocol, Sequence
from urllib.parse import quote

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    before_sleep_log,
)

import config
from models import LawyerId, LawyerRecord
from parsers.document_parser import document_to_lawyer, encode_value

logger = logging.getLogger(__name__)

# Firestore allows at most 30 values in an array-contains-any filter
MAX_ANY_VALUES = 30


class RemoteReadError(Exception):
    """Raised when a read against the remote store fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransientRemoteError(RemoteReadError):
    """A failure worth retrying (5xx, 429, transport errors)."""


class QueryPage(NamedTuple):
    """Decoded lawyers plus the number of documents the query returned.

    ``rows_read`` counts malformed documents that were skipped, so callers
    page through remote positions rather than decoded records.
    """

    lawyers: list[LawyerRecord]
    rows_read: int


class RemoteReader(Protocol):
    """What the hybrid data source needs from a remote store."""

    async def query_lawyers(
        self, categories: Sequence[str], limit: int, offset: int = 0
    ) -> QueryPage:
        ...

    async def query_featured(self, limit: int) -> list[LawyerRecord]:
        ...

    async def get_lawyer(self, lawyer_id: LawyerId) -> Optional[LawyerRecord]:
        ...


def documents_url(
    project_id: str | None = None,
    database: str | None = None,
    emulator_host: str | None = None,
) -> str:
    """Base URL of the documents resource, honouring the emulator."""
    project_id = project_id or config.FIRESTORE_PROJECT_ID
    database = database or config.FIRESTORE_DATABASE
    emulator_host = emulator_host if emulator_host is not None else config.FIRESTORE_EMULATOR_HOST
    if not project_id:
        raise ValueError("FIRESTORE_PROJECT_ID is not configured")
    base = f"http://{emulator_host}/v1" if emulator_host else config.FIRESTORE_BASE_URL
    return f"{base}/projects/{project_id}/databases/{database}/documents"


def build_directory_query(
    collection: str, categories: Sequence[str], limit: int, offset: int = 0
) -> dict:
    """Structured query: optional category filter, verified then rating desc."""
    query: dict = {
        "from": [{"collectionId": collection}],
        "orderBy": [
            {"field": {"fieldPath": "verified"}, "direction": "DESCENDING"},
            {"field": {"fieldPath": "rating"}, "direction": "DESCENDING"},
        ],
        "limit": limit,
    }
    if categories:
        query["where"] = {
            "fieldFilter": {
                "field": {"fieldPath": "categories"},
                "op": "ARRAY_CONTAINS_ANY",
                "value": encode_value(list(categories)[:MAX_ANY_VALUES]),
            }
        }
    if offset:
        query["offset"] = offset
    return query


def build_featured_query(collection: str, limit: int) -> dict:
    return {
        "from": [{"collectionId": collection}],
        "where": {
            "fieldFilter": {
                "field": {"fieldPath": "verified"},
                "op": "EQUAL",
                "value": encode_value(True),
            }
        },
        "orderBy": [{"field": {"fieldPath": "rating"}, "direction": "DESCENDING"}],
        "limit": limit,
    }


class FirestoreClient:
    """Async context manager providing retried, read-only Firestore access.

    Keeps one ``httpx.AsyncClient`` open for its lifetime. Transient errors
    are retried with exponential backoff; permission and query errors are
    raised straight away.
    """

    def __init__(
        self,
        project_id: str | None = None,
        api_key: str | None = None,
        collection: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = documents_url(project_id)
        self._api_key = api_key if api_key is not None else config.FIRESTORE_API_KEY
        self._collection = collection or config.LAWYERS_COLLECTION
        self._timeout = timeout if timeout is not None else config.REMOTE_TIMEOUT
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> FirestoreClient:
        params = {"key": self._api_key} if self._api_key else None
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            params=params,
            transport=self._transport,
        )
        logger.debug("Firestore client opened for %s", self._base_url)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("Firestore client closed")

    async def query_lawyers(
        self, categories: Sequence[str], limit: int, offset: int = 0
    ) -> QueryPage:
        query = build_directory_query(self._collection, categories, limit, offset)
        return await self._run_query(query)

    async def query_featured(self, limit: int) -> list[LawyerRecord]:
        page = await self._run_query(build_featured_query(self._collection, limit))
        return page.lawyers

    async def get_lawyer(self, lawyer_id: LawyerId) -> Optional[LawyerRecord]:
        """Point read by document id; None when the document does not exist.

        Ids that are not valid document ids ("", ".", "..") are never sent.
        """
        doc_id = str(lawyer_id).strip()
        if doc_id in ("", ".", ".."):
            logger.debug("Invalid document id %r", lawyer_id)
            return None
        url = f"{self._base_url}/{self._collection}/{quote(doc_id, safe='')}"
        response = await self._request("GET", url)
        if response is None:
            return None
        return document_to_lawyer(response.json())

    async def _run_query(self, structured_query: dict) -> QueryPage:
        response = await self._request(
            "POST",
            f"{self._base_url}:runQuery",
            json={"structuredQuery": structured_query},
        )
        if response is None:
            return QueryPage([], 0)
        lawyers = []
        rows_read = 0
        # Each row is {"document": {...}, "readTime": ...}; an empty result
        # is a single row without "document".
        for row in response.json():
            doc = row.get("document")
            if not doc:
                continue
            rows_read += 1
            lawyer = document_to_lawyer(doc)
            if lawyer is not None:
                lawyers.append(lawyer)
        if len(lawyers) < rows_read:
            logger.warning(
                "runQuery skipped %d malformed documents", rows_read - len(lawyers)
            )
        logger.debug("runQuery returned %d lawyers", len(lawyers))
        return QueryPage(lawyers, rows_read)

    async def _request(self, method: str, url: str, **kwargs) -> Optional[httpx.Response]:
        """Send with retry. Returns None on 404.

        The retry decorator is applied at call time so config values can be
        patched in tests.
        """

        @retry(
            retry=retry_if_exception_type(TransientRemoteError),
            stop=stop_after_attempt(config.MAX_RETRIES),
            wait=wait_exponential(
                multiplier=config.RETRY_BACKOFF_BASE,
                min=config.RETRY_BACKOFF_BASE,
                max=config.RETRY_BACKOFF_BASE * 2 ** config.MAX_RETRIES,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        async def _do_request() -> Optional[httpx.Response]:
            return await self._single_request(method, url, **kwargs)

        return await _do_request()

    async def _single_request(
        self, method: str, url: str, **kwargs
    ) -> Optional[httpx.Response]:
        if self._client is None:
            raise RuntimeError("FirestoreClient must be used as an async context manager")

        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            logger.warning("Transport error for %s: %s", url, exc)
            raise TransientRemoteError(f"Transport error: {exc}") from exc

        status = response.status_code
        if status == 404:
            logger.debug("404 Not Found: %s", url)
            return None
        if status == 429 or status >= 500:
            raise TransientRemoteError(f"HTTP {status}", status_code=status)
        if status >= 400:
            body = response.text
            if status == 400 and "index" in body.lower():
                logger.error(
                    "Missing Firestore composite index for this query; "
                    "create one for the filter and order fields: %s",
                    body[:500],
                )
            raise RemoteReadError(f"HTTP {status}: {body[:200]}", status_code=status)
        return response
