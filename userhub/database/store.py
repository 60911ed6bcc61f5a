"""
MongoDB-backed user store.

One :class:`UserStore` (and therefore one ``MongoClient``) exists per
process; the API resolves it from ``app.extensions`` instead of opening
its own connection.  Uniqueness of ``username`` and ``email`` is enforced
by unique indexes, so two racing inserts are settled by the server.

Every operation runs under ``pymongo.timeout`` so a hung server surfaces as
:class:`StoreUnavailableError` instead of blocking the request forever.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import pymongo
from bson import ObjectId
from bson.errors import BSONError, InvalidId
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError

from userhub.core.errors import (
    DuplicateKeyError,
    InvalidDocumentError,
    PersistenceError,
    StoreUnavailableError,
)
from userhub.core.telemetry import get_tracer
from userhub.database.models import UNIQUE_FIELDS, USERS_COLLECTION, User

logger = logging.getLogger(__name__)


def _translate(exc: PyMongoError) -> PersistenceError:
    """Map a driver exception onto the service's error taxonomy."""
    if isinstance(exc, MongoDuplicateKeyError):
        details = exc.details or {}
        return DuplicateKeyError(
            details.get("errmsg", str(exc)),
            {
                "code": exc.code,
                "keyPattern": details.get("keyPattern", {}),
                "keyValue": details.get("keyValue", {}),
            },
        )
    if isinstance(exc, ConnectionFailure) or exc.timeout:
        return StoreUnavailableError(str(exc))
    return PersistenceError(str(exc), {"code": getattr(exc, "code", None)})


class UserStore:
    def __init__(
        self,
        uri: Optional[str],
        db_name: str = "userhub",
        timeout_ms: int = 5000,
        *,
        client_factory: Callable[..., Any] = MongoClient,
    ):
        self.uri = uri
        self.db_name = db_name
        self.timeout_ms = timeout_ms
        self._client_factory = client_factory
        self._client: Any = None
        self._collection: Any = None
        self._indexes_ready = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def timeout(self) -> float:
        return self.timeout_ms / 1000.0

    @property
    def connected(self) -> bool:
        return self._collection is not None and self._indexes_ready

    def open(self) -> bool:
        """
        Create the client and make sure the unique indexes exist.

        Failure is logged and never raised: the HTTP listener keeps serving
        and writes report ``StoreUnavailableError`` until the server answers.
        """
        if not self.uri:
            logger.error("MONGODB_URI is not set; user creation is unavailable.")
            return False

        try:
            self._client = self._client_factory(
                self.uri,
                serverSelectionTimeoutMS=self.timeout_ms,
                connectTimeoutMS=self.timeout_ms,
            )
            database = self._client.get_default_database(default=self.db_name)
            self._collection = database[USERS_COLLECTION]
            self._ensure_indexes()
        except (PyMongoError, ValueError) as exc:
            # pymongo raises plain ValueError for some malformed URIs (bad port).
            logger.error(f"MongoDB connection failed: {exc}")
            return False

        logger.info("MongoDB connected")
        return True

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        self._collection = None
        self._indexes_ready = False

    def _ensure_indexes(self) -> None:
        with pymongo.timeout(self.timeout):
            for name in UNIQUE_FIELDS:
                self._collection.create_index(name, unique=True)
        self._indexes_ready = True

    def _require_collection(self) -> Any:
        if self._collection is None:
            raise StoreUnavailableError("User store is not connected.")
        # The server was down when open() ran; build the indexes before the
        # first write so uniqueness holds from that write on.
        if not self._indexes_ready:
            try:
                self._ensure_indexes()
            except PyMongoError as exc:
                raise _translate(exc) from exc
        return self._collection

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create_user(self, username: str, email: str) -> User:
        """Insert a user document; the store assigns ``_id``."""
        collection = self._require_collection()
        doc = {"username": username, "email": email}

        with get_tracer().start_as_current_span("userhub.store.create_user"):
            try:
                with pymongo.timeout(self.timeout):
                    result = collection.insert_one(doc)
            except PyMongoError as exc:
                raise _translate(exc) from exc
            except (BSONError, UnicodeEncodeError) as exc:
                # Raised while encoding the document, before it reaches the server.
                raise InvalidDocumentError(str(exc)) from exc

        doc["_id"] = result.inserted_id
        return User.from_document(doc)

    def get_user(self, user_id: str) -> Optional[User]:
        """Look a user up by identity.  Malformed ids simply match nothing."""
        collection = self._require_collection()
        try:
            oid = ObjectId(user_id)
        except (InvalidId, TypeError):
            return None

        try:
            with pymongo.timeout(self.timeout):
                doc = collection.find_one({"_id": oid})
        except PyMongoError as exc:
            raise _translate(exc) from exc

        return User.from_document(doc) if doc else None
