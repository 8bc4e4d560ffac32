"""
Module: storage.store

Purpose:
    Template persistence. A template record carries its name, voucher
    type, feature flags, the serialized design (None until the template
    is first customized) and the compiled artifacts the rendering engine
    uses.

    JsonTemplateStore keeps one JSON file per template under a root
    directory. Any other backend only needs the TemplateStore protocol.

Key Classes:
    - TemplateRecord: What ``load`` returns
    - TemplateStore: save/load protocol
    - JsonTemplateStore: File-backed implementation
    - TemplateNotFoundError: Unknown template id

Key Functions:
    - open_template_design(): Stored design, or a generated default
    - save_template_design(): Compile a session's design, save, mark clean

Dependencies:
    - portalocker (via storage.file_locking)
    - compiler, generator, core.utils.serialization

Used By:
    - scripts/compile_design.py
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Protocol

from invoice_designer.compiler import CompiledTemplate, compile_design
from invoice_designer.core.models.design import Design
from invoice_designer.core.schemas.validator import DesignFormatError
from invoice_designer.core.utils.serialization import export_design, import_design
from invoice_designer.designer.state import DesignerSession
from invoice_designer.generator import FeatureFlags, generate_for_format

from .file_locking import locked_read_json, locked_write_json

logger = logging.getLogger(__name__)


class TemplateNotFoundError(LookupError):
    """Raised when a template id is not in the store."""

    def __init__(self, template_id: str):
        super().__init__(f"Template not found: {template_id}")
        self.template_id = template_id


@dataclass(frozen=True)
class TemplateRecord:
    """
    A stored template (immutable).

    Attributes:
        template_id: Store identifier
        name: Display name
        voucher_type: e.g. "sales_invoice"
        layout_config: Serialized design JSON, or None if never customized
        features: Feature flags used to generate a default design
        compiled: Last compiled artifacts, if any were saved
    """

    template_id: str
    name: str
    voucher_type: str
    layout_config: Optional[str] = None
    features: FeatureFlags = field(default_factory=FeatureFlags)
    compiled: Optional[dict[str, str]] = None


class TemplateStore(Protocol):
    def save(
        self,
        template_id: Optional[str],
        name: str,
        voucher_type: str,
        design: Design,
        compiled: CompiledTemplate,
        features: Optional[FeatureFlags] = None,
    ) -> str: ...

    def load(self, template_id: str) -> TemplateRecord: ...


class JsonTemplateStore:
    """
    One ``<id>.json`` file per template under ``root``.

    Example:
        >>> store = JsonTemplateStore(Path("templates"))
        >>> template_id = store.save(None, "Sales", "sales_invoice", design, compile_design(design))
        >>> store.load(template_id).name
        'Sales'
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def _path(self, template_id: str) -> Path:
        return self.root / f"{template_id}.json"

    def exists(self, template_id: str) -> bool:
        return self._path(template_id).exists()

    def list_ids(self) -> list[str]:
        if not self.root.exists():
            return []
        return sorted(p.stem for p in self.root.glob("*.json"))

    def create(self, name: str, voucher_type: str, features: FeatureFlags) -> str:
        """Register a template that has flags but no customized design yet."""
        template_id = uuid.uuid4().hex
        locked_write_json(self._path(template_id), {
            "id": template_id,
            "name": name,
            "voucher_type": voucher_type,
            "layout_config": None,
            "features": features.to_dict(),
            "compiled": None,
            "updated_at": _now(),
        })
        logger.info(f"Created template {template_id} ({name})")
        return template_id

    def save(
        self,
        template_id: Optional[str],
        name: str,
        voucher_type: str,
        design: Design,
        compiled: CompiledTemplate,
        features: Optional[FeatureFlags] = None,
    ) -> str:
        """
        Save a design and its compiled artifacts.

        Args:
            template_id: Existing id to overwrite, or None for a new template
            features: Flags to store; None keeps the existing record's flags

        Returns:
            The saved template's id
        """
        if template_id is None:
            template_id = uuid.uuid4().hex
            existing_features = FeatureFlags()
        elif self.exists(template_id):
            existing_features = self.load(template_id).features
        else:
            existing_features = FeatureFlags()

        record = {
            "id": template_id,
            "name": name,
            "voucher_type": voucher_type,
            "layout_config": export_design(design),
            "features": (features or existing_features).to_dict(),
            "compiled": compiled.to_dict(),
            "updated_at": _now(),
        }
        locked_write_json(self._path(template_id), record)
        logger.info(f"Saved template {template_id} ({name}, {len(design.elements)} elements)")
        return template_id

    def load(self, template_id: str) -> TemplateRecord:
        """
        Load a template record.

        Raises:
            TemplateNotFoundError: If no template has this id
        """
        path = self._path(template_id)
        if not path.exists():
            raise TemplateNotFoundError(template_id)
        data = locked_read_json(path)
        logger.info(f"Loaded template {template_id}")
        return TemplateRecord(
            template_id=template_id,
            name=data.get("name", ""),
            voucher_type=data.get("voucher_type", ""),
            layout_config=data.get("layout_config"),
            features=FeatureFlags.from_dict(data.get("features") or {}),
            compiled=data.get("compiled"),
        )


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def open_template_design(record: TemplateRecord) -> Design:
    """
    The design to edit for a stored template.

    Falls back to the generated default for the template's flags when no
    design was ever saved, or the stored one cannot be imported.
    """
    if record.layout_config:
        try:
            return import_design(record.layout_config)
        except DesignFormatError as e:
            logger.warning(
                f"Stored design for template {record.template_id} is invalid, "
                f"using generated default: {e}"
            )
    return generate_for_format(record.features)


def save_template_design(
    store: TemplateStore,
    session: DesignerSession,
    template_id: Optional[str],
    name: str,
    voucher_type: str,
) -> str:
    """Compile the session's current design, save it, and mark the session clean."""
    design = session.get_design()
    template_id = store.save(template_id, name, voucher_type, design, compile_design(design))
    session.mark_clean()
    return template_id
