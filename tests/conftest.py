"""Shared pytest fixtures for mapstyle tests.

Test Tiers:
- unit: Fast tests on in-memory inputs (default)
- integration: Palettes and style resolution composed end to end
"""

import pytest


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: fast unit tests on in-memory inputs")
    config.addinivalue_line("markers", "integration: palettes composed with style resolution")


@pytest.fixture
def primary_colors() -> list[str]:
    """Three distinct stops that survive hex round-tripping exactly."""
    return ["#FF0000", "#00FF00", "#0000FF"]


@pytest.fixture
def sample_values() -> list[float]:
    """Ten evenly spread observations."""
    return [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0]


@pytest.fixture
def feature_collection() -> dict:
    """GeoJSON FeatureCollection with a collection style and mixed overrides."""
    return {
        "type": "FeatureCollection",
        "style": {"color": "blue", "weight": 2},
        "features": [
            {
                "type": "Feature",
                "id": "co",
                "geometry": {"type": "Point", "coordinates": [-105.78, 39.80]},
                "properties": {"name": "Colorado", "style": {"color": "red"}},
            },
            {
                "type": "Feature",
                "id": "ut",
                "geometry": {"type": "Point", "coordinates": [-111.58, 40.60]},
                "properties": {"name": "Utah"},
            },
            {
                "type": "Feature",
                "id": "wy",
                "geometry": {"type": "Point", "coordinates": [-110.83, 43.59]},
                "properties": None,
            },
        ],
    }


@pytest.fixture
def topology() -> dict:
    """TopoJSON Topology with one GeometryCollection and one bare geometry."""
    return {
        "type": "Topology",
        "style": {"weight": 1},
        "arcs": [[[0, 0], [1, 1]]],
        "objects": {
            "counties": {
                "type": "GeometryCollection",
                "geometries": [
                    {"type": "LineString", "arcs": [0], "properties": {"style": {"color": "green"}}},
                    {"type": "LineString", "arcs": [0], "properties": {}},
                ],
            },
            "border": {"type": "LineString", "arcs": [0], "properties": {"style": {"weight": 4}}},
        },
    }


@pytest.fixture
def default_style() -> dict:
    """Caller defaults used by style tests."""
    return {"weight": 1, "opacity": 0.5}
