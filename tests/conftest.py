import pytest

from store import Store


@pytest.fixture
def data_path(tmp_path):
    return tmp_path / "finance-tracker-data.json"


@pytest.fixture
def store(data_path):
    return Store.open(data_path)
