"""
pytest configuration and fixtures for Quote App tests
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import Mock
import sys

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fastapi.testclient import TestClient

from api.app import create_app
from storage import MemStorage, Quote, SAMPLE_QUOTES
from client import FavoritesStore, MemoryPersistence, ShareService, QuotePresenter


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_quotes():
    """The eight reference quotes as catalog entries"""
    return [Quote(id=index, **data) for index, data in enumerate(SAMPLE_QUOTES, start=1)]


@pytest.fixture
def seeded_storage():
    """Catalog seeded with the reference quotes"""
    return MemStorage(seed=True)


@pytest.fixture
def empty_storage():
    """Empty catalog"""
    return MemStorage()


@pytest.fixture
def app(seeded_storage):
    """FastAPI app over the seeded catalog"""
    return create_app(seeded_storage)


@pytest.fixture
def client(app):
    """Test client for the seeded app"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def memory_persistence():
    """Session-only favorites persistence"""
    return MemoryPersistence()


@pytest.fixture
def favorites(memory_persistence):
    """Favorites store over in-memory persistence"""
    return FavoritesStore(memory_persistence)


@pytest.fixture
def share_capabilities():
    """Mocked platform share capabilities"""
    return {
        "clipboard": Mock(),
        "native_share": Mock(),
        "opener": Mock(),
    }


@pytest.fixture
def share_service(share_capabilities):
    """Share service with mocked capabilities"""
    return ShareService(page_url="http://localhost:3000/", **share_capabilities)


@pytest.fixture
def presenter(favorites, share_service, sample_quotes):
    """Presenter with the reference catalog loaded"""
    presenter = QuotePresenter(favorites, sharer=share_service)
    presenter.load_catalog(sample_quotes)
    return presenter


# Pytest configuration
def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
