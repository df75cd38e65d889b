"""Human-readable formatting helpers for stream titles and names."""

_BYTE_UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]

# Codes that are languages or groups rather than ISO 3166 regions
_FLAG_OVERRIDES = {
    "en": "🇬🇧",
    "ja": "🇯🇵",
    "ko": "🇰🇷",
    "zh": "🇨🇳",
    "hi": "🇮🇳",
    "multi": "🌐",
}

_UNKNOWN_FLAG = "🏳️"


def format_bytes(size: int) -> str:
    """
    Format a byte count using 1024-based units.

    Examples:
        format_bytes(512) -> "512 B"
        format_bytes(1610612736) -> "1.5 GB"
    """
    value = float(size)
    unit = _BYTE_UNITS[0]
    for unit in _BYTE_UNITS:
        if abs(value) < 1024 or unit == _BYTE_UNITS[-1]:
            break
        value /= 1024

    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {unit}"


def flag_from_country_code(code: str) -> str:
    """Return the flag emoji for a two-letter country code."""
    normalized = (code or "").strip().lower()
    if normalized in _FLAG_OVERRIDES:
        return _FLAG_OVERRIDES[normalized]

    if len(normalized) != 2 or not normalized.isascii() or not normalized.isalpha():
        return _UNKNOWN_FLAG

    return "".join(chr(0x1F1E6 + ord(char) - ord("a")) for char in normalized)
