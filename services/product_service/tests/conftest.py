import os
import tempfile

# The engine is created at import time: point it at a throwaway SQLite file first.
_DB_DIR = tempfile.mkdtemp(prefix="product-service-")
os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{_DB_DIR}/products.sqlite3"

import pytest
from fastapi.testclient import TestClient

from product_service import repo
from product_service.main import app


@pytest.fixture
def client():
    repo.Base.metadata.drop_all(repo.engine)
    with TestClient(app) as c:
        yield c
