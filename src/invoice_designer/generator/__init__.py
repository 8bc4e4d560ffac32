"""Default Design Generator: feature flags -> ready-to-edit Design."""

from .default_design import generate_default_design, generate_for_format
from .flags import FeatureFlags

__all__ = ["FeatureFlags", "generate_default_design", "generate_for_format"]
