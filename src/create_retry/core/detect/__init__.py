from __future__ import annotations

from .detector import (
    REDIRECT_MESSAGE,
    check_for_errors,
    check_instance_created,
    contains_keyword,
    is_instances_url,
)

__all__ = [
    "REDIRECT_MESSAGE",
    "check_for_errors",
    "check_instance_created",
    "contains_keyword",
    "is_instances_url",
]
