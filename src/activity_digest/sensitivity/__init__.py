"""Optional category-based filtering of sensitive browsing activity."""

from activity_digest.sensitivity.domains import CATEGORY_REGISTRY, CategoryInfo, category_label
from activity_digest.sensitivity.filter import (
    FILTERED_URL,
    SENSITIVE_SEARCH,
    SensitivityFilter,
    SensitivityReport,
    SensitivityResult,
)

__all__ = [
    "CATEGORY_REGISTRY",
    "CategoryInfo",
    "FILTERED_URL",
    "SENSITIVE_SEARCH",
    "SensitivityFilter",
    "SensitivityReport",
    "SensitivityResult",
    "category_label",
]
