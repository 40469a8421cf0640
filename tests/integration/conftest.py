import pytest
from fastapi.testclient import TestClient

from cookmate.api.deps import get_completer
from cookmate.main import create_app


@pytest.fixture
def client_with(data_env):
    """TestClient factory; pass a completer to stand in for the LLM."""
    def make(completer=None):
        app = create_app()
        if completer is not None:
            app.dependency_overrides[get_completer] = lambda: completer
        return TestClient(app)
    return make
