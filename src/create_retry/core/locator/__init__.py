"""Frame and element location for the compute console.

Selector fallbacks are ordered probes, each returning an optional match.
"""

from __future__ import annotations

from .locator import (
    LocatedElement,
    SelectorProbe,
    describe_buttons,
    find_action_frame,
    find_content_element,
    find_create_button,
    find_header_element,
    is_create_control,
    locate,
    selector_probe,
    walk_frames,
)

__all__ = [
    "LocatedElement",
    "SelectorProbe",
    "describe_buttons",
    "find_action_frame",
    "find_content_element",
    "find_create_button",
    "find_header_element",
    "is_create_control",
    "locate",
    "selector_probe",
    "walk_frames",
]
