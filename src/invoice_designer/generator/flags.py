"""
Module: generator.flags

Purpose:
    Template feature flags that drive the default design generator.
    Stored templates keep them as 0/1 integers; any truthy value counts.

Key Classes:
    - FeatureFlags: Page format plus boolean switches
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping

from invoice_designer.core.models.page import DEFAULT_PRESET

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeatureFlags:
    """
    Feature switches of an invoice template (immutable).

    Absent flags are False; an absent format is A4 portrait.
    """

    template_format: str = DEFAULT_PRESET
    show_logo: bool = False
    show_company_address: bool = False
    show_party_address: bool = False
    show_gstin: bool = False
    show_item_hsn: bool = False
    show_bank_details: bool = False
    show_signature: bool = False
    show_terms: bool = False
    show_less_column: bool = False

    @classmethod
    def flag_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls) if f.name != "template_format")

    @classmethod
    def all_enabled(cls, template_format: str = DEFAULT_PRESET) -> FeatureFlags:
        return cls(template_format, **{name: True for name in cls.flag_names()})

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"template_format": self.template_format}
        d.update({name: getattr(self, name) for name in self.flag_names()})
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FeatureFlags:
        """Build from stored flags (bools or 0/1); unknown keys are ignored."""
        return cls(
            template_format=data.get("template_format") or DEFAULT_PRESET,
            **{name: bool(data.get(name)) for name in cls.flag_names()},
        )
