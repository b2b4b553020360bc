"""
Translate requested details sections into RedisJSON path selectors.
"""

from typing import List, Optional

from shared.errors import InvalidSectionError

from ..store import ROOT_PATH

VALID_SECTIONS = frozenset({"socials", "website", "description", "phone", "hours"})


def resolve_sections(sections: Optional[str]) -> List[str]:
    """
    Return the path selectors for a comma-separated section list.

    ``None`` selects the whole document. Tokens are kept in request order,
    duplicates included; a single unknown token rejects the whole request.
    """
    if sections is None:
        return [ROOT_PATH]

    requested = sections.split(",")
    for section in requested:
        if section not in VALID_SECTIONS:
            raise InvalidSectionError(section, details={"valid_sections": sorted(VALID_SECTIONS)})

    return requested
