"""Template persistence (file-backed reference implementation)."""

from .store import (
    JsonTemplateStore,
    TemplateNotFoundError,
    TemplateRecord,
    TemplateStore,
    open_template_design,
    save_template_design,
)

__all__ = [
    "JsonTemplateStore",
    "TemplateNotFoundError",
    "TemplateRecord",
    "TemplateStore",
    "open_template_design",
    "save_template_design",
]
