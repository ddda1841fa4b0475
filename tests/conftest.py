"""
Shared fixtures for the S-P table test suite.
"""
from contextlib import asynccontextmanager

import pytest
from fastapi.testclient import TestClient

from sptable.core.sp import RawResponseMatrix
from sptable.main import app


@asynccontextmanager
async def _test_lifespan(app):
    """No-op lifespan for tests."""
    yield


app.router.lifespan_context = _test_lifespan


def make_matrix(rows, student_prefix="s", problem_prefix="p"):
    """Build a RawResponseMatrix with generated ids s1..sN and p1..pM."""
    n_problems = len(rows[0]) if rows else 0
    return RawResponseMatrix(
        student_ids=tuple(f"{student_prefix}{i + 1}" for i in range(len(rows))),
        problem_ids=tuple(f"{problem_prefix}{j + 1}" for j in range(n_problems)),
        matrix=rows,
    )


@pytest.fixture
def build_matrix():
    """Factory for RawResponseMatrix objects with generated ids."""
    return make_matrix


@pytest.fixture
def client():
    """Test client for the application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def guttman_data():
    """Perfect Guttman pattern: scores 3, 2, 1 and correct counts 3, 2, 1."""
    return make_matrix([[1, 1, 1], [1, 1, 0], [1, 0, 0]])


@pytest.fixture
def tied_data():
    """Scores 2, 2, 1 and correct counts 3, 1, 1 with one misplaced answer."""
    return make_matrix([[1, 0, 1], [1, 1, 0], [1, 0, 0]])


@pytest.fixture
def aberrant_data():
    """
    Four students where s3 answers the two hardest problems only.

    Ranked CS: s1 0, s2 0, s3 2.0, s4 0.
    Ranked CP: p1 1.0, p2 0, p3 0, p4 1.0.
    D* = 2 / 3.
    """
    return make_matrix(
        [
            [1, 1, 1, 0],
            [1, 1, 0, 0],
            [0, 0, 1, 1],
            [1, 0, 0, 0],
        ]
    )


@pytest.fixture
def analyze_payload():
    """JSON body for the analyze endpoints."""
    return {
        "student_ids": ["s1", "s2", "s3", "s4"],
        "problem_ids": ["p1", "p2", "p3", "p4"],
        "matrix": [
            [1, 1, 1, 0],
            [1, 1, 0, 0],
            [0, 0, 1, 1],
            [1, 0, 0, 0],
        ],
    }
