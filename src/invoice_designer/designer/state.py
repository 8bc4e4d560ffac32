"""
Module: designer.state

Purpose:
    The design state engine: single source of truth for one editing
    session. Owns the live Design plus view state (selection, zoom, grid)
    and a bounded undo/redo history.

    Structural edits (add, delete, duplicate, reorder) push a history
    snapshot. Field edits (move, resize, style tweaks, page/global
    settings) do not, so a drag does not flood the undo stack.

    Every operation is total: an id that does not exist is a silent no-op.

Key Classes:
    - DesignerState: Immutable snapshot of the session (design + view)
    - DesignerSession: The engine; all mutations go through its methods

Dependencies:
    - core.models: Design, Element, ElementKind
    - designer.defaults: per-kind defaults
    - designer.history: DesignHistory

Used By:
    - storage.store.save_template_design
    - editor front-ends (out of scope)
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping, Optional

from invoice_designer.common.thresholds import EDITOR, GEOMETRY
from invoice_designer.common.units import clamp_position, clamp_size, snap_to_grid
from invoice_designer.core.models.design import Design, create_blank_design
from invoice_designer.core.models.elements import Element, ElementKind

from .defaults import default_payload, default_size, default_styles
from .history import DesignHistory

logger = logging.getLogger(__name__)

StateListener = Callable[["DesignerState"], None]

_GEOMETRY_FIELDS = ("x", "y", "width", "height")


def generate_element_id() -> str:
    """``el_<epoch ms>_<5 random hex chars>``."""
    return f"el_{int(time.time() * 1000)}_{uuid.uuid4().hex[:5]}"


def clamp_zoom(value: float) -> float:
    return max(EDITOR.zoom_min, min(EDITOR.zoom_max, value))


def _clamp_geometry(element: Element) -> Element:
    """Keep position non-negative and size at or above the minimum."""
    clamped = replace(
        element,
        x=clamp_position(element.x),
        y=clamp_position(element.y),
        width=clamp_size(element.width),
        height=clamp_size(element.height),
    )
    return element if clamped == element else clamped


@dataclass(frozen=True)
class DesignerState:
    """
    Snapshot of an editing session (never persisted).

    Attributes:
        design: Current design
        selected_ids: Selected element ids, in selection order
        zoom: Canvas zoom, within [0.25, 2.0]
        is_dirty: Changed since the last load or save
        show_grid: Grid overlay visible
        snap_to_grid: Moves/resizes snap to the grid
        grid_size: Grid spacing in mm
    """

    design: Design
    selected_ids: tuple[str, ...] = ()
    zoom: float = EDITOR.default_zoom
    is_dirty: bool = False
    show_grid: bool = True
    snap_to_grid: bool = True
    grid_size: float = EDITOR.default_grid_size


class DesignerSession:
    """
    Design state engine for one editor session.

    Not safe for concurrent mutation; one logical editor owns a session.

    Example:
        >>> session = DesignerSession()
        >>> table_id = session.add_element("table")
        >>> session.selected_ids
        (table_id,)
        >>> session.undo()
        >>> session.design.elements
        ()
    """

    def __init__(
        self,
        design: Optional[Design] = None,
        *,
        history_capacity: int = EDITOR.history_capacity,
    ) -> None:
        initial = design if design is not None else create_blank_design()
        self._state = DesignerState(design=initial)
        self._history = DesignHistory(history_capacity)
        self._history.reset(initial)
        self._listeners: list[StateListener] = []

    # ─────────────────────────────────────────────────────────────────────────
    # State access
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def state(self) -> DesignerState:
        return self._state

    @property
    def design(self) -> Design:
        return self._state.design

    @property
    def elements(self) -> tuple[Element, ...]:
        return self._state.design.elements

    @property
    def selected_ids(self) -> tuple[str, ...]:
        return self._state.selected_ids

    @property
    def selected_elements(self) -> tuple[Element, ...]:
        selected = set(self._state.selected_ids)
        return tuple(el for el in self.elements if el.id in selected)

    @property
    def selected_element(self) -> Optional[Element]:
        """The selected element when exactly one is selected."""
        selected = self.selected_elements
        return selected[0] if len(selected) == 1 else None

    @property
    def zoom(self) -> float:
        return self._state.zoom

    @property
    def is_dirty(self) -> bool:
        return self._state.is_dirty

    @property
    def show_grid(self) -> bool:
        return self._state.show_grid

    @property
    def snap_to_grid(self) -> bool:
        return self._state.snap_to_grid

    @property
    def grid_size(self) -> float:
        return self._state.grid_size

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Call ``listener`` with the new state after every change.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: DesignerState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def _commit(self, design: Design, *, push_history: bool, **changes: Any) -> None:
        """Install a new design (marking dirty) and optionally snapshot it."""
        if push_history:
            self._history.push(design)
        self._set_state(replace(self._state, design=design, is_dirty=True, **changes))

    # ─────────────────────────────────────────────────────────────────────────
    # Element operations
    # ─────────────────────────────────────────────────────────────────────────

    def add_element(self, kind: ElementKind | str, overrides: Optional[Mapping[str, Any]] = None) -> str:
        """
        Add an element of ``kind`` with kind-appropriate defaults.

        The element is centred horizontally within the content area, placed
        a fixed offset below the top margin, stacked above everything else,
        then ``overrides`` are applied. It becomes the only selection.

        Returns:
            The new element's id
        """
        kind = ElementKind(kind)
        page = self.design.page_size
        width, height = default_size(kind)
        content_width = page.content_width
        width = min(width, content_width)

        element = Element(
            id=generate_element_id(),
            kind=kind,
            x=page.margins.left + (content_width - width) / 2,
            y=page.margins.top + GEOMETRY.new_element_top_offset,
            width=width,
            height=height,
            styles=default_styles(kind),
            visible=True,
            z_index=self.design.max_z_index + 1,
            **default_payload(kind),
        )
        element = _clamp_geometry(element)
        if overrides:
            try:
                element = _clamp_geometry(element.with_changes(overrides))
            except (ValueError, TypeError, KeyError) as e:
                logger.warning(f"Ignoring invalid overrides for new {kind} element: {dict(overrides)!r}: {e}")

        self._commit(
            self.design.with_element_added(element),
            push_history=True,
            selected_ids=(element.id,),
        )
        logger.debug(f"Added {kind} element {element.id}")
        return element.id

    def update_element(self, element_id: str, changes: Mapping[str, Any]) -> None:
        """Shallow-merge attribute changes into an element (no history)."""
        if not self.design.contains(element_id):
            logger.debug(f"update_element: no element {element_id!r}")
            return

        def apply(el: Element) -> Element:
            updated = el.with_changes(changes)
            if any(f in changes for f in _GEOMETRY_FIELDS):
                updated = _clamp_geometry(updated)
            return updated

        try:
            design = self.design.with_element_mapped(element_id, apply)
        except (ValueError, TypeError, KeyError) as e:
            logger.warning(f"Ignoring invalid change to element {element_id}: {dict(changes)!r}: {e}")
            return
        self._commit(design, push_history=False)

    def update_element_styles(self, element_id: str, changes: Mapping[str, Any]) -> None:
        """Shallow-merge style changes into an element's style bundle (no history)."""
        if not self.design.contains(element_id):
            logger.debug(f"update_element_styles: no element {element_id!r}")
            return
        self._commit(
            self.design.with_element_mapped(
                element_id, lambda el: replace(el, styles=el.styles.merged(changes))
            ),
            push_history=False,
        )

    def move_element(self, element_id: str, x: float, y: float) -> None:
        """
        Drag an element to (x, y), snapping to the grid when enabled.

        Locked elements do not move.
        """
        element = self.design.find(element_id)
        if element is None or element.locked:
            return
        if self._state.snap_to_grid:
            x = snap_to_grid(x, self._state.grid_size)
            y = snap_to_grid(y, self._state.grid_size)
        self.update_element(element_id, {"x": x, "y": y})

    def resize_element(
        self,
        element_id: str,
        width: float,
        height: float,
        x: Optional[float] = None,
        y: Optional[float] = None,
    ) -> None:
        """
        Resize an element (optionally moving its origin, as a corner drag does).

        Sizes snap to the grid when enabled and never drop below the
        minimum. Locked elements are not resized.
        """
        element = self.design.find(element_id)
        if element is None or element.locked:
            return
        changes: dict[str, float] = {"width": width, "height": height}
        if x is not None:
            changes["x"] = x
        if y is not None:
            changes["y"] = y
        if self._state.snap_to_grid:
            changes = {k: snap_to_grid(v, self._state.grid_size) for k, v in changes.items()}
        self.update_element(element_id, changes)

    def delete_element(self, element_id: str) -> None:
        """Remove an element and drop it from the selection."""
        if not self.design.contains(element_id):
            logger.debug(f"delete_element: no element {element_id!r}")
            return
        self._commit(
            self.design.with_elements_removed({element_id}),
            push_history=True,
            selected_ids=tuple(i for i in self._state.selected_ids if i != element_id),
        )

    def delete_selected_elements(self) -> None:
        """Remove every selected element and clear the selection."""
        selected = {i for i in self._state.selected_ids if self.design.contains(i)}
        if not selected:
            logger.debug("delete_selected_elements: nothing selected")
            return
        self._commit(
            self.design.with_elements_removed(selected),
            push_history=True,
            selected_ids=(),
        )

    def duplicate_element(self, element_id: str) -> Optional[str]:
        """
        Copy an element, offset by (+5mm, +5mm), stacked on top.

        Returns:
            The duplicate's id, or None if ``element_id`` does not exist
        """
        original = self.design.find(element_id)
        if original is None:
            logger.debug(f"duplicate_element: no element {element_id!r}")
            return None

        duplicate = replace(
            original,
            id=generate_element_id(),
            x=original.x + GEOMETRY.duplicate_offset,
            y=original.y + GEOMETRY.duplicate_offset,
            label=f"{original.label} (copy)" if original.label else None,
            z_index=self.design.max_z_index + 1,
        )
        self._commit(
            self.design.with_element_added(duplicate),
            push_history=True,
            selected_ids=(duplicate.id,),
        )
        return duplicate.id

    def move_element_to_front(self, element_id: str) -> None:
        """Stack the element above every other element."""
        if not self.design.contains(element_id):
            return
        top = self.design.max_z_index + 1
        self._commit(
            self.design.with_element_mapped(element_id, lambda el: replace(el, z_index=top)),
            push_history=True,
        )

    def move_element_to_back(self, element_id: str) -> None:
        """Give the element z-index 0 and shift every other element up by one."""
        if not self.design.contains(element_id):
            return
        elements = tuple(
            replace(el, z_index=0) if el.id == element_id else replace(el, z_index=el.z_index + 1)
            for el in self.elements
        )
        self._commit(self.design.with_elements(elements), push_history=True)

    # ─────────────────────────────────────────────────────────────────────────
    # Selection
    # ─────────────────────────────────────────────────────────────────────────

    def select_element(self, element_id: str, additive: bool = False) -> None:
        """
        Select an element.

        Without ``additive`` the selection becomes just this element; with
        it, the element's membership in the selection is toggled.
        """
        if not self.design.contains(element_id):
            return
        current = self._state.selected_ids
        if not additive:
            selected: tuple[str, ...] = (element_id,)
        elif element_id in current:
            selected = tuple(i for i in current if i != element_id)
        else:
            selected = current + (element_id,)
        self._set_state(replace(self._state, selected_ids=selected))

    def clear_selection(self) -> None:
        self._set_state(replace(self._state, selected_ids=()))

    # ─────────────────────────────────────────────────────────────────────────
    # View
    # ─────────────────────────────────────────────────────────────────────────

    def set_zoom(self, value: float) -> None:
        self._set_state(replace(self._state, zoom=clamp_zoom(value)))

    def toggle_grid(self) -> None:
        self._set_state(replace(self._state, show_grid=not self._state.show_grid))

    def toggle_snap_to_grid(self) -> None:
        self._set_state(replace(self._state, snap_to_grid=not self._state.snap_to_grid))

    def set_grid_size(self, value: float) -> None:
        """Set grid spacing in mm; non-positive values are ignored."""
        if value > 0:
            self._set_state(replace(self._state, grid_size=value))

    # ─────────────────────────────────────────────────────────────────────────
    # Global edits
    # ─────────────────────────────────────────────────────────────────────────

    def update_global_styles(self, changes: Mapping[str, Any]) -> None:
        """Shallow-merge page-wide style defaults (no history)."""
        design = replace(self.design, global_styles=self.design.global_styles.merged(changes))
        self._commit(design, push_history=False)

    def update_page_setup(self, changes: Mapping[str, Any]) -> None:
        """
        Shallow-merge page width/height/margins (no history).

        Changes that would produce an invalid page are ignored.
        """
        try:
            page_size = self.design.page_size.merged(changes)
        except ValueError as e:
            logger.warning(f"Ignoring invalid page setup change {dict(changes)!r}: {e}")
            return
        self._commit(replace(self.design, page_size=page_size), push_history=False)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def load_design(self, design: Design) -> None:
        """Replace the design wholesale; resets selection, dirty flag and history."""
        self._history.reset(design)
        self._set_state(replace(self._state, design=design, selected_ids=(), is_dirty=False))
        logger.debug(f"Loaded design with {len(design.elements)} elements")

    def get_design(self) -> Design:
        """
        The current design.

        Designs are immutable values, so the returned object can never
        observe or cause later edits to the session.
        """
        return self._state.design

    def mark_clean(self) -> None:
        self._set_state(replace(self._state, is_dirty=False))

    # ─────────────────────────────────────────────────────────────────────────
    # Undo / redo
    # ─────────────────────────────────────────────────────────────────────────

    def undo(self) -> None:
        design = self._history.undo()
        if design is not None:
            self._restore(design)

    def redo(self) -> None:
        design = self._history.redo()
        if design is not None:
            self._restore(design)

    def _restore(self, design: Design) -> None:
        """Install a history snapshot, dropping selected ids it does not contain."""
        selected = tuple(i for i in self._state.selected_ids if design.contains(i))
        self._set_state(replace(self._state, design=design, selected_ids=selected, is_dirty=True))
