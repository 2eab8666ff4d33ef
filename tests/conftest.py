# python
import pytest

from config_tree import Settings


@pytest.fixture
def nested_data():
    return {
        "app": {
            "name": "Settings app",
            "version": "1.0",
            "debug": False,
        },
        "database": {
            "host": "localhost",
            "port": 5432,
            "pool": {"size": 10, "timeout": 2.5},
        },
        "features": ["search", "export"],
        "owner": None,
    }


@pytest.fixture
def settings(nested_data):
    return Settings(nested_data)


@pytest.fixture
def frozen(nested_data):
    return Settings(nested_data, immutable=True)
