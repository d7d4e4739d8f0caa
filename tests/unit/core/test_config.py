import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from arbantv_setup.core.config import Settings, get_settings

REQUIRED_ENV = {
    "APPWRITE_PROJECT_ID": "proj_123",
    "APPWRITE_API_KEY": "key_abc",
    "APPWRITE_DATABASE_ID": "db_main",
}


def test_settings_defaults():
    """Test that settings load with correct defaults."""
    with patch.dict(os.environ, REQUIRED_ENV, clear=True):
        settings = Settings(_env_file=None)

    assert settings.appwrite_endpoint == "https://cloud.appwrite.io/v1"
    assert settings.creators_collection_id is None
    assert settings.setup_field_delay_seconds == 0.1
    assert settings.setup_index_wait_seconds == 3.0
    assert settings.setup_index_delay_seconds == 0.2
    assert settings.setup_wait_for_fields is True
    assert settings.log_format == "console"


def test_settings_env_override():
    """Test that unprefixed environment variables are read."""
    env = {
        **REQUIRED_ENV,
        "APPWRITE_ENDPOINT": "https://appwrite.example.com/v1/",
        "VIDEOS_COLLECTION_ID": "videos_col",
        "SETUP_INDEX_WAIT_SECONDS": "5",
        "SETUP_WAIT_FOR_FIELDS": "false",
        "LOG_LEVEL": "DEBUG",
    }
    with patch.dict(os.environ, env, clear=True):
        settings = Settings(_env_file=None)

    assert settings.appwrite_endpoint == "https://appwrite.example.com/v1"
    assert settings.appwrite_project_id == "proj_123"
    assert settings.videos_collection_id == "videos_col"
    assert settings.setup_index_wait_seconds == 5.0
    assert settings.setup_wait_for_fields is False
    assert settings.log_level == "DEBUG"


def test_blank_collection_id_is_missing():
    with patch.dict(os.environ, {**REQUIRED_ENV, "TAGS_COLLECTION_ID": "  "}, clear=True):
        settings = Settings(_env_file=None)

    assert settings.tags_collection_id is None


def test_missing_credentials_raise():
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

    missing = {error["loc"][0] for error in exc_info.value.errors()}
    assert missing == {"appwrite_project_id", "appwrite_api_key", "appwrite_database_id"}


def test_blank_credentials_raise():
    blank = {"APPWRITE_PROJECT_ID": "", "APPWRITE_API_KEY": "  ", "APPWRITE_DATABASE_ID": ""}
    with patch.dict(os.environ, blank, clear=True):
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

    invalid = {error["loc"][0] for error in exc_info.value.errors()}
    assert invalid == {"appwrite_project_id", "appwrite_api_key", "appwrite_database_id"}


def test_negative_delay_rejected():
    with patch.dict(os.environ, {**REQUIRED_ENV, "SETUP_FIELD_DELAY_SECONDS": "-1"}, clear=True):
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


def test_get_settings_is_cached():
    with patch.dict(os.environ, REQUIRED_ENV, clear=True):
        assert get_settings() is get_settings()
