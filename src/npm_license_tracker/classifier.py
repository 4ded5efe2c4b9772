"""License classification by substring matching.

Compound SPDX expressions are not parsed: "(MIT OR GPL-3.0)" counts as
permissive because it contains "MIT".
"""

from typing import Optional

PERMISSIVE_LICENSES = (
    "MIT",
    "BSD",
    "Apache",
    "ISC",
    "Unlicense",
    "CC0",
    "WTFPL",
    "Zlib",
)


def is_permissive_license(license_text: Optional[str]) -> bool:
    """Check whether a license string names a permissive license family.

    Args:
        license_text: Raw license string, possibly empty or None.

    Returns:
        True if the string contains any allow-listed family name
        (case-insensitive). Empty or unrecognized strings return False.
    """
    if not license_text:
        return False

    license_upper = license_text.upper()
    return any(family.upper() in license_upper for family in PERMISSIVE_LICENSES)
