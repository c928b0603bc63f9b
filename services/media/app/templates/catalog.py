"""
MediaConvert templates — desired catalog and naming convention.

Pure functions: no SDK calls.  Which variant a remote template belongs to is
read from its name alone, so every name is produced and parsed here:

  Template:  {stack}_Ott_{profile}_{variant}      test_Ott_720p_Avc_Aac_16x9_qvbr
  Preset:    {stack}_{container}_{WxH}p_{variant}  test_Mp4_Avc_Aac_16x9_1280x720p_qvbr
"""
from __future__ import annotations

from app.templates.constants import (
    AUDIO_BITRATE,
    ENCODING_PROFILES,
    HLS_SEGMENT_LENGTH_SECS,
    TEMPLATE_CATEGORY,
    TEMPLATE_INFIX,
    Variant,
)
from app.templates.schemas import (
    CatalogEntry,
    CatalogItem,
    PresetDefinition,
    TemplateConfig,
    TemplateDefinition,
)

_CONTAINER_LABELS = {Variant.QVBR: "Mp4", Variant.MVOD: "Hls"}


# ── Naming ───────────────────────────────────────────────────────────────────

def desired_variant(enable_media_package: bool) -> Variant:
    return Variant.MVOD if enable_media_package else Variant.QVBR


def template_prefix(stack_name: str) -> str:
    return f"{stack_name}{TEMPLATE_INFIX}"


def template_name(stack_name: str, profile: str, variant: Variant) -> str:
    return f"{template_prefix(stack_name)}{profile}_{variant.value}"


def preset_name(stack_name: str, profile: str, variant: Variant) -> str:
    width, height, _, _ = ENCODING_PROFILES[profile]
    codec = profile.split("_", 1)[1]  # drop the leading resolution token
    label = _CONTAINER_LABELS[variant]
    return f"{stack_name}_{label}_{codec}_{width}x{height}p_{variant.value}"


def parse_template_name(name: str, stack_name: str) -> tuple[str, Variant] | None:
    """Split a managed template name into (profile, variant).

    Returns None for names outside the stack prefix or without a known
    variant token; those templates are not ours to touch.
    """
    prefix = template_prefix(stack_name)
    if not name.startswith(prefix):
        return None
    profile, sep, token = name[len(prefix):].rpartition("_")
    if not sep or not profile:
        return None
    try:
        return profile, Variant(token)
    except ValueError:
        return None


def variant_of(name: str, stack_name: str) -> Variant | None:
    parsed = parse_template_name(name, stack_name)
    return parsed[1] if parsed else None


def preset_for_template(name: str, stack_name: str) -> str | None:
    """Name of the preset a managed template depends on, if its profile is known."""
    parsed = parse_template_name(name, stack_name)
    if parsed is None or parsed[0] not in ENCODING_PROFILES:
        return None
    profile, variant = parsed
    return preset_name(stack_name, profile, variant)


def partition_catalog(
    entries: list[CatalogEntry],
    stack_name: str,
    desired: Variant,
) -> tuple[list[CatalogEntry], list[CatalogEntry]]:
    """Split managed entries into (stale, current) against the desired variant."""
    stale: list[CatalogEntry] = []
    current: list[CatalogEntry] = []
    for entry in entries:
        variant = variant_of(entry.name, stack_name)
        if variant is None:
            continue
        (current if variant is desired else stale).append(entry)
    return stale, current


# ── Settings builders ────────────────────────────────────────────────────────

def _video_description(width: int, height: int, max_bitrate: int, quality: int) -> dict:
    """QVBR H.264 video for one ladder rung."""
    return {
        "Width": width,
        "Height": height,
        "ScalingBehavior": "DEFAULT",
        "AfdSignaling": "NONE",
        "CodecSettings": {
            "Codec": "H_264",
            "H264Settings": {
                "RateControlMode": "QVBR",
                "QvbrSettings": {"QvbrQualityLevel": quality},
                "MaxBitrate": max_bitrate,
                "CodecProfile": "HIGH",
                "CodecLevel": "AUTO",
                "GopSize": 2,
                "GopSizeUnits": "SECONDS",
                "SceneChangeDetect": "TRANSITION_DETECTION",
            },
        },
    }


def _audio_description() -> dict:
    return {
        "CodecSettings": {
            "Codec": "AAC",
            "AacSettings": {
                "Bitrate": AUDIO_BITRATE,
                "CodingMode": "CODING_MODE_2_0",
                "SampleRate": 48000,
            },
        },
    }


def _container_settings(variant: Variant) -> dict:
    if variant is Variant.MVOD:
        return {"Container": "M3U8", "M3u8Settings": {}}
    return {"Container": "MP4", "Mp4Settings": {"MoovPlacement": "PROGRESSIVE_DOWNLOAD"}}


def _output_group(variant: Variant, preset: str, height: int) -> dict:
    """Output group referencing the rung's preset. Destinations are set per job."""
    if variant is Variant.MVOD:
        return {
            "Name": "HLS Group",
            "OutputGroupSettings": {
                "Type": "HLS_GROUP_SETTINGS",
                "HlsGroupSettings": {
                    "SegmentLength": HLS_SEGMENT_LENGTH_SECS,
                    "MinSegmentLength": 0,
                    "ManifestDurationFormat": "INTEGER",
                    "SegmentControl": "SEGMENTED_FILES",
                },
            },
            "Outputs": [{"Preset": preset, "NameModifier": f"_{height}p"}],
        }
    return {
        "Name": "File Group",
        "OutputGroupSettings": {
            "Type": "FILE_GROUP_SETTINGS",
            "FileGroupSettings": {},
        },
        "Outputs": [{"Preset": preset, "NameModifier": f"_{height}p"}],
    }


def _build_item(stack_name: str, profile: str, variant: Variant) -> CatalogItem:
    width, height, max_bitrate, quality = ENCODING_PROFILES[profile]
    preset = PresetDefinition(
        name=preset_name(stack_name, profile, variant),
        description=f"{stack_name} {height}p {variant.value} preset",
        category=TEMPLATE_CATEGORY,
        settings={
            "ContainerSettings": _container_settings(variant),
            "VideoDescription": _video_description(width, height, max_bitrate, quality),
            "AudioDescriptions": [_audio_description()],
        },
    )
    template = TemplateDefinition(
        name=template_name(stack_name, profile, variant),
        description=f"{stack_name} {profile} {variant.value} job template",
        category=TEMPLATE_CATEGORY,
        settings={
            "TimecodeConfig": {"Source": "ZEROBASED"},
            "AdAvailOffset": 0,
            "OutputGroups": [_output_group(variant, preset.name, height)],
        },
    )
    return CatalogItem(preset=preset, template=template)


# ── Catalog ──────────────────────────────────────────────────────────────────

def build_catalog(stack_name: str, variant: Variant) -> list[CatalogItem]:
    """One (preset, template) pair per encoding profile, in ladder order."""
    return [_build_item(stack_name, profile, variant) for profile in ENCODING_PROFILES]


def build_desired_catalog(config: TemplateConfig) -> list[CatalogItem]:
    return build_catalog(config.stack_name, desired_variant(config.enable_media_package))
