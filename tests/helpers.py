import threading

import bson
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError
from pymongo.results import InsertOneResult


class FakeCollection:
    """In-memory stand-in for a pymongo collection with unique indexes."""

    def __init__(self, name, down=False):
        self.name = name
        self.down = down
        self.docs = {}
        self.unique = []
        # While set, insert_one raises it (server-side failures)
        self.fail_with = None
        self._lock = threading.Lock()

    def _check_up(self):
        if self.down:
            raise ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")

    def create_index(self, key, unique=False):
        self._check_up()
        if unique and key not in self.unique:
            self.unique.append(key)
        return f"{key}_1"

    def insert_one(self, doc):
        self._check_up()
        # The driver encodes before sending; encoding errors never reach the server.
        bson.encode(doc)
        if self.fail_with is not None:
            raise self.fail_with
        with self._lock:
            for key in self.unique:
                for existing in self.docs.values():
                    if existing.get(key) == doc.get(key):
                        errmsg = (
                            f"E11000 duplicate key error collection: userhub.{self.name} "
                            f'index: {key}_1 dup key: {{ {key}: "{doc.get(key)}" }}'
                        )
                        raise DuplicateKeyError(
                            errmsg,
                            11000,
                            {
                                "index": 0,
                                "code": 11000,
                                "errmsg": errmsg,
                                "keyPattern": {key: 1},
                                "keyValue": {key: doc.get(key)},
                            },
                        )
            doc.setdefault("_id", ObjectId())
            self.docs[doc["_id"]] = dict(doc)
        return InsertOneResult(doc["_id"], acknowledged=True)

    def find_one(self, query):
        self._check_up()
        doc = self.docs.get(query.get("_id"))
        return dict(doc) if doc else None


class FakeDatabase:
    def __init__(self, name, down=False):
        self.name = name
        self.down = down
        self.collections = {}

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name, down=self.down)
        return self.collections[name]


class FakeMongoClient:
    def __init__(self, uri, down=False, **kwargs):
        self.uri = uri
        self.kwargs = kwargs
        self.down = down
        self.closed = False
        self.databases = {}

    def get_default_database(self, default=None):
        if default not in self.databases:
            self.databases[default] = FakeDatabase(default, down=self.down)
        return self.databases[default]

    def close(self):
        self.closed = True


def unreachable_client(uri, **kwargs):
    """Client factory for a server that never answers."""
    return FakeMongoClient(uri, down=True, **kwargs)
