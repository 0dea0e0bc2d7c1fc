"""Shared test fixtures."""

import asyncio

import pytest

from formation_catalog.core.catalog.builder import CatalogBuilder
from formation_catalog.core.catalog.sources import StaticIdentifierSource
from formation_catalog.models.entry import CatalogEntry
from tests.unit.fakes import FakeFetcher
from tests.unit.sample_docs import PYTHON_DOCUMENTS, PYTHON_IDENTIFIERS


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher(PYTHON_DOCUMENTS)


@pytest.fixture
def builder(fetcher: FakeFetcher) -> CatalogBuilder:
    """Builder over the Python sample documents; Rust is an empty section."""
    sources = {
        "Python": StaticIdentifierSource(PYTHON_IDENTIFIERS),
        "Rust": StaticIdentifierSource([]),
    }
    return CatalogBuilder(fetcher, sources, section="Python")


@pytest.fixture
def catalog(builder: CatalogBuilder) -> list[CatalogEntry]:
    """Return the built Python sample tree."""
    return asyncio.run(builder.build_catalog())
