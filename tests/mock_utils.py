"""Mock utilities for Firestore."""

import unittest
import unittest.mock
from typing import Any, Optional

from google.api_core.exceptions import AlreadyExists
from mockfirestore import CollectionReference, MockFirestore, Query
from mockfirestore.document import DocumentReference

MOCK_SERVER_TIMESTAMP = "2023-01-01"

# Every module that reaches Firestore through ``firebase_admin.firestore``.
FIRESTORE_MODULES = [
    "tourney.firestore",
    "tourney.storage.firestore",
    "tourney.user.directory.firestore",
    "tourney.auth.routes.firestore",
    "tourney.tournament.services.firestore",
    "tourney.tournament.routes.firestore",
    "tourney.daily.services.firestore",
    "tourney.daily.results.firestore",
    "tourney.daily.routes.firestore",
]


class MockFieldFilter:
    def __init__(self, field_path: str, op_string: str, value: Any) -> None:
        self.field_path = field_path
        self.op_string = op_string
        self.value = value


class MockTransaction:
    """Applies transactional writes immediately and records them."""

    def __init__(self) -> None:
        self.writes: list[tuple[Any, Any]] = []

    def set(self, ref: Any, data: Any, merge: bool = False) -> None:
        self.writes.append((ref, data))
        ref.set(data)


class MockFirestoreBuilder:
    """Builder to modularize mockfirestore and firebase_admin patching."""

    @staticmethod
    def patch_db_read() -> None:
        """Apply monkeypatches to mockfirestore to support FieldFilter and equality."""

        def collection_where(
            self: Any,
            field_path: Optional[str] = None,
            op_string: Optional[str] = None,
            value: Any = None,
            filter: Any = None,
        ) -> Any:
            if filter:
                return self._where(filter.field_path, filter.op_string, filter.value)
            return self._where(field_path, op_string, value)

        if not hasattr(CollectionReference, "_where"):
            CollectionReference._where = CollectionReference.where
            CollectionReference.where = collection_where

        def query_where(
            self: Any,
            field_path: Optional[str] = None,
            op_string: Optional[str] = None,
            value: Any = None,
            filter: Any = None,
        ) -> Any:
            if filter:
                return self._where(filter.field_path, filter.op_string, filter.value)
            return self._where(field_path, op_string, value)

        if not hasattr(Query, "_where"):
            Query._where = Query.where
            Query.where = query_where

        def doc_ref_eq(self: Any, other: Any) -> bool:
            if not isinstance(other, DocumentReference):
                return False
            return self._path == other._path

        if not hasattr(DocumentReference, "_orig_eq"):
            DocumentReference._orig_eq = DocumentReference.__eq__
            DocumentReference.__eq__ = doc_ref_eq
        DocumentReference.__hash__ = lambda self: hash(tuple(self._path))

        # Patch DocumentReference.get to handle transaction argument
        if not hasattr(DocumentReference, "_orig_get"):
            DocumentReference._orig_get = DocumentReference.get

            def doc_ref_get(self: Any, transaction: Any = None) -> Any:
                """Handle transaction argument in get."""
                return self._orig_get()

            DocumentReference.get = doc_ref_get

    @staticmethod
    def patch_db_write() -> None:
        """Give DocumentReference a create() that fails on existing documents."""
        if getattr(DocumentReference, "_create_patched", False):
            return

        def doc_ref_create(self: Any, document_data: dict[str, Any]) -> Any:
            if self.get().exists:
                raise AlreadyExists(f"Document already exists: {self.id}")
            return self.set(document_data)

        DocumentReference.create = doc_ref_create
        DocumentReference._create_patched = True

    @staticmethod
    def build_firestore_module(mock_db: Any) -> unittest.mock.MagicMock:
        """Create a stand-in for ``firebase_admin.firestore`` backed by mock_db."""
        module = unittest.mock.MagicMock()
        module.client.return_value = mock_db
        module.FieldFilter = MockFieldFilter
        module.SERVER_TIMESTAMP = MOCK_SERVER_TIMESTAMP
        module.Query.DESCENDING = "DESCENDING"
        module.transactional = lambda func: func
        return module


MockFirestoreBuilder.patch_db_read()
MockFirestoreBuilder.patch_db_write()


class FirestoreTestCase(unittest.TestCase):
    """Base test case with an in-memory Firestore wired into every module."""

    def setUp(self) -> None:
        """Create the mock database and patch the firestore module everywhere."""
        self.mock_db = MockFirestore()
        self.mock_db.transaction = unittest.mock.MagicMock(
            side_effect=lambda **kwargs: MockTransaction()
        )
        self.mock_firestore_module = MockFirestoreBuilder.build_firestore_module(
            self.mock_db
        )
        for target in FIRESTORE_MODULES:
            patcher = unittest.mock.patch(target, new=self.mock_firestore_module)
            patcher.start()
            self.addCleanup(patcher.stop)

    def add_user(self, uid: str, name: str, email: str | None = None) -> None:
        """Store a user document."""
        data = {"name": name, "username": uid}
        if email:
            data["email"] = email
        self.mock_db.collection("users").document(uid).set(data)

    def read_doc(self, collection: str, doc_id: str) -> dict[str, Any]:
        """Return the stored data of a document."""
        return self.mock_db.collection(collection).document(doc_id).get().to_dict()
