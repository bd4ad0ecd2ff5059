# track_proxy/services/isrc.py
import re

# 2 letters (country) + 3 alphanumeric (registrant) + 7 digits (year + designation)
ISRC_PATTERN = re.compile(r"[A-Z]{2}[A-Z0-9]{3}[0-9]{7}")

ISRC_FORMAT_HINT = (
    "ISRC must be 12 characters: 2 letters, 3 alphanumeric, 7 digits "
    "(e.g., USUM71505639)"
)


def normalize_isrc(isrc: str) -> str:
    return isrc.replace("-", "").upper()


def is_valid_isrc(isrc) -> bool:
    """
    檢查 ISRC 格式，hyphen 可有可無（US-UM7-1505639 == USUM71505639）
    """
    if not isrc or not isinstance(isrc, str):
        return False

    return ISRC_PATTERN.fullmatch(normalize_isrc(isrc)) is not None
