import pytest

from src.formatting import FormatPolicy


@pytest.fixture
def flat_payload():
    return {"a": 5, "b": 3, "total": 8}


@pytest.fixture
def flat_pct_payload():
    return {
        "a": 5,
        "b": 3,
        "total": 8,
        "a_pct": "62,50%",
        "b_pct": "37,50%",
        "total_pct": "100%",
    }


@pytest.fixture
def matrix_payload():
    return {
        "04-2025": {"dev": 1, "test": 0, "total": 1},
        "05-2025": {"dev": 2, "test": 1, "total": 3},
    }


@pytest.fixture
def matrix_pct_payload():
    return {
        "04-2025": {"dev": 1, "test": 0, "total": 1, "dev_pct": "100%", "test_pct": "0%", "total_pct": "100%"},
        "05-2025": {"dev": 2, "test": 1, "total": 3, "dev_pct": "66,67%", "test_pct": "33,33%", "total_pct": "100%"},
    }


@pytest.fixture
def policy():
    return FormatPolicy()
