"""Declarative page-head state: analytics, SEO metadata and structured data."""

from lingvoblog.head.analytics import analytics_elements, inject_analytics
from lingvoblog.head.document import HeadDocument, HeadElement, Placement
from lingvoblog.head.reconcile import (
    HeadOp,
    HeadPatch,
    OpKind,
    ReconcilePolicy,
    apply_patch,
    diff,
    reconcile,
)
from lingvoblog.head.seo import SeoProps, seo_elements, write_seo
from lingvoblog.head.structured_data import (
    ArticleProps,
    clear_home_structured_data,
    clear_structured_data,
    home_structured_data_elements,
    structured_data_elements,
    write_home_structured_data,
    write_structured_data,
)

__all__ = [
    "ArticleProps",
    "HeadDocument",
    "HeadElement",
    "HeadOp",
    "HeadPatch",
    "OpKind",
    "Placement",
    "ReconcilePolicy",
    "SeoProps",
    "analytics_elements",
    "apply_patch",
    "clear_home_structured_data",
    "clear_structured_data",
    "diff",
    "home_structured_data_elements",
    "inject_analytics",
    "reconcile",
    "seo_elements",
    "structured_data_elements",
    "write_home_structured_data",
    "write_seo",
    "write_structured_data",
]
