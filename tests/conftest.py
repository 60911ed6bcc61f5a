import pytest

from tests.helpers import FakeMongoClient
from userhub import create_app
from userhub.database.store import UserStore
from userhub.web import sockets


@pytest.fixture
def build_dir(tmp_path):
    build = tmp_path / "build"
    (build / "static" / "js").mkdir(parents=True)
    (build / "index.html").write_text("<!doctype html><title>userhub</title><div id=root></div>")
    (build / "static" / "js" / "main.js").write_text("console.log('hello');")
    return build


@pytest.fixture
def store():
    store = UserStore("mongodb://fake:27017/userhub", client_factory=FakeMongoClient)
    assert store.open()
    return store


@pytest.fixture
def app(store, build_dir):
    app = create_app({"TESTING": True, "STATIC_DIR": str(build_dir)}, store=store)
    yield app
    sockets.CONNECTIONS.clear()


@pytest.fixture
def client(app):
    return app.test_client()
