import pytest
from pydantic import ValidationError

from app.templates.catalog import (
    build_catalog,
    build_desired_catalog,
    desired_variant,
    parse_template_name,
    partition_catalog,
    preset_for_template,
    variant_of,
)
from app.templates.constants import ENCODING_PROFILES, Variant
from app.templates.schemas import CatalogEntry, TemplateConfig


def test_desired_variant_follows_media_package_flag() -> None:
    assert desired_variant(False) is Variant.QVBR
    assert desired_variant(True) is Variant.MVOD


def test_config_accepts_cloudformation_properties() -> None:
    config = TemplateConfig.model_validate({
        "ServiceToken": "arn:aws:lambda:ap-south-1:123:function:cr",
        "Resource": "MediaConvertTemplates",
        "StackName": "vod",
        "EndPoint": "https://abc.mediaconvert.ap-south-1.amazonaws.com",
        "EnableMediaPackage": "true",
    })
    assert config.stack_name == "vod"
    assert config.enable_media_package is True


def test_config_is_immutable(config: TemplateConfig) -> None:
    with pytest.raises(ValidationError):
        config.stack_name = "other"


def test_config_requires_stack_name() -> None:
    with pytest.raises(ValidationError):
        TemplateConfig.model_validate({"EnableMediaPackage": "false"})


def test_standard_catalog_names_end_with_qvbr(config: TemplateConfig) -> None:
    items = build_desired_catalog(config)
    assert len(items) == len(ENCODING_PROFILES)
    for item in items:
        assert item.template.name.startswith("test_Ott_")
        assert item.template.name.endswith("_qvbr")
        assert item.preset.name.endswith("_qvbr")


def test_media_package_catalog_names_end_with_mvod(media_package_config: TemplateConfig) -> None:
    for item in build_desired_catalog(media_package_config):
        assert item.template.name.endswith("_mvod")
        assert item.preset.name.endswith("_mvod")


def test_catalog_follows_ladder_order() -> None:
    names = [item.template.name for item in build_catalog("test", Variant.QVBR)]
    assert names == [
        "test_Ott_2160p_Avc_Aac_16x9_qvbr",
        "test_Ott_1080p_Avc_Aac_16x9_qvbr",
        "test_Ott_720p_Avc_Aac_16x9_qvbr",
    ]


def test_each_template_references_its_own_preset() -> None:
    for item in build_catalog("test", Variant.MVOD):
        assert item.template.preset_names == [item.preset.name]


def test_variant_selects_container() -> None:
    qvbr = build_catalog("test", Variant.QVBR)[0]
    mvod = build_catalog("test", Variant.MVOD)[0]
    assert qvbr.preset.settings["ContainerSettings"]["Container"] == "MP4"
    assert mvod.preset.settings["ContainerSettings"]["Container"] == "M3U8"
    assert qvbr.template.settings["OutputGroups"][0]["OutputGroupSettings"]["Type"] == "FILE_GROUP_SETTINGS"
    assert mvod.template.settings["OutputGroups"][0]["OutputGroupSettings"]["Type"] == "HLS_GROUP_SETTINGS"


def test_build_is_deterministic(config: TemplateConfig) -> None:
    assert build_desired_catalog(config) == build_desired_catalog(config)


def test_to_request_uses_api_field_names() -> None:
    request = build_catalog("test", Variant.QVBR)[2].template.to_request()
    assert set(request) == {"Name", "Description", "Category", "Settings"}
    assert request["Name"] == "test_Ott_720p_Avc_Aac_16x9_qvbr"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("test_Ott_720p_Avc_Aac_16x9_qvbr", ("720p_Avc_Aac_16x9", Variant.QVBR)),
        ("test_Ott_1080p_Avc_Aac_16x9_mvod", ("1080p_Avc_Aac_16x9", Variant.MVOD)),
        ("test_Ott_720p_Avc_Aac_16x9_cmaf", None),
        ("other_Ott_720p_Avc_Aac_16x9_qvbr", None),
        ("System-Ott_Hls_Ts_Avc_Aac", None),
        ("test_Ott_qvbr", None),
    ],
)
def test_parse_template_name(name: str, expected) -> None:
    assert parse_template_name(name, "test") == expected


def test_variant_of() -> None:
    assert variant_of("test_Ott_720p_Avc_Aac_16x9_mvod", "test") is Variant.MVOD
    assert variant_of("test_Ott_720p_Avc_Aac_16x9_mvod", "prod") is None


def test_preset_for_template_matches_catalog() -> None:
    item = build_catalog("test", Variant.MVOD)[1]
    assert preset_for_template(item.template.name, "test") == item.preset.name
    assert preset_for_template("test_Ott_480p_Avc_Aac_4x3_mvod", "test") is None


def test_partition_catalog_ignores_unmanaged_names() -> None:
    entries = [
        CatalogEntry(Name="test_Ott_720p_Avc_Aac_16x9_mvod"),
        CatalogEntry(Name="test_Ott_1080p_Avc_Aac_16x9_qvbr"),
        CatalogEntry(Name="prod_Ott_720p_Avc_Aac_16x9_mvod"),
        CatalogEntry(Name="hand_made_template"),
    ]
    stale, current = partition_catalog(entries, "test", Variant.QVBR)
    assert [e.name for e in stale] == ["test_Ott_720p_Avc_Aac_16x9_mvod"]
    assert [e.name for e in current] == ["test_Ott_1080p_Avc_Aac_16x9_qvbr"]


def test_partition_empty_catalog() -> None:
    assert partition_catalog([], "test", Variant.MVOD) == ([], [])
