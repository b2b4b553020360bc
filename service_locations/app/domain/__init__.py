"""
Pure shaping helpers for location responses.

Nothing here touches Redis or the network; routes combine these with the
store so the rules can be tested without I/O.
"""

from .projector import project_location
from .sections import VALID_SECTIONS, resolve_sections

__all__ = ["project_location", "VALID_SECTIONS", "resolve_sections"]
