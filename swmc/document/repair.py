"""The single permitted input repair.

Some shipped definition files (``radiation_detector.xml``) carry the element
below twice, where the format allows it once. When it appears more than once
the first occurrence is dropped before parsing. Nothing else is repaired.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

KNOWN_DUPLICATE = '<particle_bounds x="0.2" y="0.2" z="0.2"/>'


def strip_known_duplicates(xml: str) -> str:
    """Remove the first copy of the known duplicated element, if duplicated."""
    if xml.count(KNOWN_DUPLICATE) > 1:
        logger.warning("Removing duplicate %s before parsing", KNOWN_DUPLICATE)
        return xml.replace(KNOWN_DUPLICATE, "", 1)
    return xml
