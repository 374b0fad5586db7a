"""
Crumb models and crumb class resolution.
"""
from redcrumbs.models.crumb import Crumb, snapshot_attributes
from redcrumbs.models.registry import (
    ClassLookup,
    CrumbClassRegistry,
    crumb_classes,
    resolve_crumb_class,
)

__all__ = [
    "Crumb",
    "snapshot_attributes",
    "ClassLookup",
    "CrumbClassRegistry",
    "crumb_classes",
    "resolve_crumb_class",
]
