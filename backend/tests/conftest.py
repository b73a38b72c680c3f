import os

# Keep the application's default engine off the working directory
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from shortlinks.api.deps import get_directory
from shortlinks.database import Base, make_engine
from shortlinks.main import app
from shortlinks.services.directory import LinkDirectory
from shortlinks.services.links import LinkService
from shortlinks.services.redirect import RedirectResolver


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'links.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def directory(session_factory):
    return LinkDirectory(session_factory)


@pytest.fixture
def broken_directory(tmp_path):
    """A directory whose database has no tables, so every call fails"""
    engine = make_engine(f"sqlite:///{tmp_path / 'empty.db'}", timeout=1)
    yield LinkDirectory(sessionmaker(bind=engine))
    engine.dispose()


@pytest.fixture
def service(directory):
    return LinkService(directory)


@pytest.fixture
def resolver(directory):
    return RedirectResolver(directory)


@pytest.fixture
def client(directory):
    app.dependency_overrides[get_directory] = lambda: directory
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
