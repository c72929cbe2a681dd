"""Shared fixtures for form relay tests."""

import pytest


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset all module-level singletons and caches between tests."""
    yield

    # 1. Settings LRU cache
    from api.config import get_settings

    get_settings.cache_clear()

    # 2. HTTP client singleton
    import api.services.http_client as http_mod

    http_mod._client = None

    # 3. Section listing cache
    import api.services.asana as asana_mod

    asana_mod._sections_cache = None


@pytest.fixture
def mock_settings(monkeypatch):
    """Provide a Settings object with safe test defaults."""
    from api.config import Settings, get_settings

    test_settings = Settings(
        asana_access_token="test-token",
        asana_project_id="1200000000000001",
        asana_api_base="https://asana.test/api/1.0",
        section_ids={},
        section_cache_ttl=300,
    )

    get_settings.cache_clear()
    monkeypatch.setattr("api.config.get_settings", lambda: test_settings)

    # Patch get_settings in every module that imports it directly
    # (from api.config import get_settings creates a local binding that
    # the api.config monkeypatch above does not affect)
    for mod_path in [
        "api.main",
        "api.routers.webhook",
        "api.services.asana",
        "api.services.http_client",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings


@pytest.fixture
def sarah_form():
    return {
        "firstName": "Sarah",
        "lastName": "Johnson",
        "email": "sarah.johnson@example.com",
        "requestType": "Feature Requests",
        "description": "Add dark mode to dashboard",
        "priority": "High",
    }


@pytest.fixture
def sections_payload():
    return {
        "data": [
            {"gid": "111", "name": "🆕 New Customer Onboarding"},
            {"gid": "222", "name": "✨ Feature Requests"},
            {"gid": "333", "name": "❓ Something Else?"},
        ]
    }
