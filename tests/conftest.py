"""
Root test configuration and fixtures for the orgmatch project.

Provides shared fixtures for the unit tests:
- a sample org chart and the directory built from it
- a mock PocketBase client for the alias repository
- TEST_CONFIG and a config_loader fixture substituted via ConfigLoader.use

Note: sys.path manipulation is handled here to ensure imports work correctly.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from orgmatch.config import ConfigLoader  # noqa: E402
from orgmatch.directory import Directory, DirectoryEntry, build_directory, parse_org_chart  # noqa: E402
from orgmatch.settings import get_settings  # noqa: E402

TEST_DOMAIN = "techco.com"


def create_mock_pocketbase():
    """Create a mock PocketBase instance."""
    mock_pb = Mock()

    mock_collection = Mock()
    mock_collection.auth_with_password = Mock(return_value=True)

    # Mock list response
    mock_list_response = Mock()
    mock_list_response.items = []
    mock_list_response.total_items = 0
    mock_list_response.total_pages = 1
    mock_list_response.page = 1
    mock_list_response.per_page = 1

    mock_collection.get_full_list = Mock(return_value=[])
    mock_collection.get_list = Mock(return_value=mock_list_response)
    mock_collection.create = Mock(return_value=Mock(id="mock-id"))
    mock_collection.update = Mock()
    mock_collection.delete = Mock()

    # Make collection callable to return itself for chaining
    mock_pb.collection = Mock(return_value=mock_collection)

    return mock_pb


@pytest.fixture
def mock_pocketbase():
    """Create a mock PocketBase instance for tests that need it."""
    return create_mock_pocketbase()


@pytest.fixture(autouse=True)
def mock_all_external_services():
    """Automatically mock PocketBase to prevent real connections.

    Set SKIP_MOCKING=true for runs against a real PocketBase.
    """
    if os.environ.get("SKIP_MOCKING") == "true":
        yield {}
        return

    mock_pb = create_mock_pocketbase()
    with patch("orgmatch.aliases.repository.PocketBase") as mock_pb_class:
        mock_pb_class.return_value = mock_pb
        yield {"pocketbase": mock_pb, "pocketbase_class": mock_pb_class}


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the config singleton and cached settings around every test."""
    ConfigLoader.reset()
    get_settings.cache_clear()
    yield
    ConfigLoader.reset()
    get_settings.cache_clear()


# =============================================================================
# Org Chart Fixtures
# =============================================================================

SAMPLE_ORG_CHART = {
    "organization": {
        "ceo": {
            "name": "Dana Whitfield",
            "title": "Chief Executive Officer",
            "directReports": 2,
            "totalTeamSize": 11,
            "reports": [
                {
                    "name": "Luis Amadeo",
                    "title": "VP Agentic AI",
                    "directReports": 2,
                    "totalTeamSize": 4,
                    "reports": [
                        {
                            "name": "Priya Raman",
                            "title": "Engineering Manager",
                            "directReports": 2,
                            "totalTeamSize": 2,
                            "reports": [
                                {"name": "Luis Amadeo", "title": "Software Engineer"},
                                {"name": "Tom Becker", "title": "Software Engineer"},
                            ],
                        },
                        {"name": "Mei Chen", "title": "Staff Engineer"},
                    ],
                },
                {
                    "name": "Sarah Okafor",
                    "title": "VP Sales",
                    "directReports": 5,
                    "totalTeamSize": 5,
                    "reports": [
                        {"name": "John Smith", "title": "Account Executive"},
                        {"name": "Jane Smith", "title": "Account Executive"},
                        {"name": "John Adam Smith", "title": "Account Executive"},
                        {"name": "Jill Smith", "title": "Sales Engineer"},
                        {"name": "Madonna", "title": "Brand Ambassador"},
                    ],
                },
            ],
        }
    }
}

SAMPLE_DEPARTMENT_LABELS = {"Luis Amadeo": "AI Platform"}


@pytest.fixture
def org_chart_data():
    """Raw org-structure export payload."""
    return SAMPLE_ORG_CHART


@pytest.fixture
def org_root():
    """Validated root node of the sample org chart."""
    return parse_org_chart(SAMPLE_ORG_CHART)


@pytest.fixture
def directory(org_root):
    """Directory built from the sample org chart."""
    return build_directory(org_root, domain=TEST_DOMAIN, department_labels=SAMPLE_DEPARTMENT_LABELS)


def make_entry(canonical_id: str, name: str, department: str = "Engineering", **kwargs) -> DirectoryEntry:
    """Create a directory entry with sensible defaults."""
    title = kwargs.pop("title", "Engineer")
    return DirectoryEntry(canonical_id=canonical_id, name=name, title=title, department=department, **kwargs)


@pytest.fixture
def doe_directory():
    """Two people whose names differ only in the given name."""
    return Directory(
        [
            make_entry("john.doe@x.com", "John Doe"),
            make_entry("jane.doe@x.com", "Jane Doe", department="Sales"),
        ],
        domain="x.com",
    )


# =============================================================================
# Configuration Fixtures
# =============================================================================

TEST_CONFIG = {
    "identity.domain": TEST_DOMAIN,
    "matching.auto_accept_threshold": 80,
    "matching.ambiguity_margin": 10,
    "matching.candidate_floor": 50,
    "matching.max_candidates": 5,
    "matching.variant_similarity": 95,
    "directory.root_department": "Executive",
    "directory.department_labels": SAMPLE_DEPARTMENT_LABELS,
}


@pytest.fixture
def config_loader():
    """ConfigLoader populated from TEST_CONFIG and installed as the singleton."""
    loader = ConfigLoader(TEST_CONFIG, source="TEST_CONFIG")
    with ConfigLoader.use(loader):
        yield loader
