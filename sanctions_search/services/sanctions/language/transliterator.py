"""
Cyrillic to Latin transliteration for name matching.

ICAO Doc 9303 is the romanisation used in machine-readable travel documents,
which is how names appear on the watch-list.
"""

import iuliia

DEFAULT_SCHEME = "icao_doc_9303"


def get_scheme(scheme: str):
    found = iuliia.schemas.get(scheme)
    if found is None:
        raise ValueError(f"Unknown transliteration scheme: {scheme}")
    return found


def transliterate(text: str, scheme: str = DEFAULT_SCHEME) -> str:
    """
    Transliterate Cyrillic text with the named iuliia scheme.

    Characters outside the scheme are kept as they are.

    Args:
        text: Text to transliterate
        scheme: iuliia scheme name

    Returns:
        str: Romanised text

    Raises:
        ValueError: If the scheme is unknown
    """
    schema = get_scheme(scheme)
    if not text:
        return ""
    return schema.translate(text)
