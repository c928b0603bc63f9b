"""
MediaConvert templates — static constants and enum types.
"""
import enum


class Variant(str, enum.Enum):
    """Naming token that marks which delivery path a template targets."""
    QVBR = "qvbr"  # standard MP4 output
    MVOD = "mvod"  # MediaPackage VOD ingest (HLS)


class RequestType(str, enum.Enum):
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"


class CustomResource(str, enum.Enum):
    ENDPOINT = "EndPoint"
    TEMPLATES = "MediaConvertTemplates"


SUCCESS = "success"

# <StackName>_Ott_<profile>_<variant>
TEMPLATE_INFIX = "_Ott_"

TEMPLATE_CATEGORY = "VOD"

# Encoding ladder rungs: descriptor -> (width, height, max bitrate, QVBR quality)
ENCODING_PROFILES: dict[str, tuple[int, int, int, int]] = {
    "2160p_Avc_Aac_16x9": (3840, 2160, 15_000_000, 9),
    "1080p_Avc_Aac_16x9": (1920, 1080, 8_500_000, 8),
    "720p_Avc_Aac_16x9": (1280, 720, 6_000_000, 7),
}

AUDIO_BITRATE = 96_000
HLS_SEGMENT_LENGTH_SECS = 6
