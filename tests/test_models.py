import pytest

from moddata.exceptions import (
    APIError,
    APINotFoundError,
    ConfigParseError,
    ConfigValidationError,
    SlugListError,
    SlugListFormatError,
)
from moddata.models import ModListEntry, ModRecord, ServiceConfig, VersionInfo
from moddata.models.config import DEFAULT_SLUG_LIST_URL


class TestServiceConfig:
    def test_defaults(self):
        config = ServiceConfig.from_dict({}, environ={})
        assert config.slug_list_url == DEFAULT_SLUG_LIST_URL
        assert config.api_base_url == "https://api.modrinth.com/v2"
        assert config.cache_control == "s-maxage=3600, stale-while-revalidate"
        assert config.max_concurrent == 5
        assert config.route == "/api/mod-data"

    def test_table_and_unknown_keys(self):
        config = ServiceConfig.from_dict(
            {"moddata": {"port": "9000", "platform": "bedrock", "colour": "red"}},
            environ={},
        )
        assert config.port == 9000
        assert config.platform == "bedrock"

    def test_environment_overrides_file(self):
        config = ServiceConfig.from_dict(
            {"slug_list_url": "https://file/list.json", "port": 1},
            environ={
                "MODDATA_SLUG_LIST_URL": "https://env/list.json",
                "MODDATA_PORT": "8181",
            },
        )
        assert config.slug_list_url == "https://env/list.json"
        assert config.port == 8181

    @pytest.mark.parametrize("value", [0, -3, "ten", True, None])
    def test_invalid_max_concurrent_falls_back(self, value):
        config = ServiceConfig.from_dict({"max_concurrent": value}, environ={})
        assert config.max_concurrent == 5

    def test_empty_slug_list_url(self):
        with pytest.raises(ConfigValidationError):
            ServiceConfig.from_dict({"slug_list_url": ""}, environ={})

    def test_unknown_list_format(self):
        with pytest.raises(ConfigValidationError):
            ServiceConfig(slug_list_format="xml")

    def test_non_mapping(self):
        with pytest.raises(ConfigParseError):
            ServiceConfig.from_dict(["a"], environ={})


class TestModListEntry:
    @pytest.mark.parametrize("raw_type", [None, "", "missing"])
    def test_default_type(self, raw_type):
        data = {"slug": "sodium", "post_id": 4}
        if raw_type != "missing":
            data["type"] = raw_type
        assert ModListEntry.from_dict(data).type == "mod"

    def test_keeps_type_and_post_id(self):
        entry = ModListEntry.from_dict({"slug": "a", "post_id": "p-1", "type": "shader"})
        assert entry == ModListEntry(slug="a", post_id="p-1", type="shader")

    @pytest.mark.parametrize("data", [{"post_id": 1}, {"slug": ""}, "sodium", None])
    def test_invalid(self, data):
        with pytest.raises(ConfigValidationError):
            ModListEntry.from_dict(data)


def test_version_info_tolerates_missing_fields():
    version = VersionInfo.from_modrinth({"files": [{"url": None}]})
    assert version.game_versions == []
    assert version.loaders == []
    assert version.files[0].url == ""


def test_record_keys():
    record = ModRecord(
        post_id=1, platform="java", version="1.20", loader="fabric", link="l", type="mod"
    )
    assert list(record.to_dict()) == [
        "PostID",
        "Platform",
        "Version",
        "Loader",
        "Link",
        "Type",
    ]


def test_error_codes_and_serialisation():
    error = SlugListError("Failed to fetch mod list from GitHub.", context={"a": 1})
    assert isinstance(error, APIError)
    assert str(error) == "[E210] Failed to fetch mod list from GitHub."
    assert error.to_dict() == {
        "error": True,
        "code": "E210",
        "message": "Failed to fetch mod list from GitHub.",
        "context": {"a": 1},
        "type": "SlugListError",
    }


@pytest.mark.parametrize(
    "error_cls, body",
    [
        (SlugListError, "Failed to fetch mod list from GitHub."),
        (SlugListFormatError, "An unexpected error occurred during data fetching."),
        (APIError, "An unexpected error occurred during data fetching."),
        (APINotFoundError, "An unexpected error occurred during data fetching."),
        (ConfigValidationError, "An unexpected error occurred during data fetching."),
    ],
)
def test_public_message(error_cls, body):
    assert error_cls("internal detail").public_message == body
