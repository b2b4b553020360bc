"""
Merge a location overview with its details document.
"""

from typing import Any, Dict, Optional

INTERNAL_ID_FIELD = "id"


def project_location(
    overview: Dict[str, str],
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build the client-facing location record.

    Without a details document the overview is returned as-is. Otherwise the
    details fields are added to the overview; overview values win when both
    define a field, and the internal ``id`` is dropped whichever side it came
    from.
    """
    if details is None:
        return dict(overview)

    merged: Dict[str, Any] = {**details, **overview}
    merged.pop(INTERNAL_ID_FIELD, None)
    return merged
