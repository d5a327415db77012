"""pypdf-backed content stream interpreter feeding :class:`RulingExtractor`."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from pypdf import PdfReader
from pypdf.generic import ContentStream, DictionaryObject, IndirectObject, NameObject, StreamObject

from .clipping import WindingRule
from .engine import RulingExtractor
from .geometry import AffineTransform, PageGeometry, Point, Rect
from .options import ExtractionOptions
from .rulings import Ruling

LOGGER = logging.getLogger("pdfrulingx.interpreter")

__all__ = [
    "GraphicsState",
    "ContentStreamInterpreter",
    "page_geometry",
]

Operation = tuple[Sequence[Any], bytes]

_STROKE_OPS = {b"S", b"s"}
_FILL_OPS = {b"f", b"F", b"f*"}
_FILL_STROKE_OPS = {b"B", b"B*", b"b", b"b*"}
_CLOSING_PAINT_OPS = {b"s", b"b", b"b*"}
_EVEN_ODD_OPS = {b"f*", b"B*", b"b*", b"W*"}
_OPERAND_COUNTS = {b"m": 2, b"l": 2, b"c": 6, b"v": 4, b"y": 4, b"re": 4, b"cm": 6}


def _resolve(obj: object | None) -> object | None:
    if isinstance(obj, IndirectObject):
        try:
            return obj.get_object()
        except Exception:
            return None
    return obj


def _decode_operator(operator: object) -> bytes:
    if isinstance(operator, bytes):
        return operator
    if isinstance(operator, str):
        return operator.encode("latin-1", "ignore")
    return str(operator).encode("latin-1", "ignore")


def page_geometry(page: DictionaryObject) -> PageGeometry:
    """Read the crop box and rotation of a pypdf page."""

    try:
        crop = Rect.from_box([float(value) for value in page.cropbox])
    except Exception:
        crop = Rect.from_box([float(value) for value in page.mediabox])
    try:
        rotation = int(page.rotation)
    except Exception:
        rotation = 0
    return PageGeometry(crop_box=crop, rotation=rotation)


@dataclass(slots=True)
class GraphicsState:
    """Subset of the graphics state needed to place path coordinates."""

    ctm: AffineTransform = field(default_factory=AffineTransform.identity)

    def clone(self) -> "GraphicsState":
        return GraphicsState(ctm=self.ctm)


class ContentStreamInterpreter:
    """Replay a page's content stream into a :class:`RulingExtractor`.

    The interpreter owns the transformation-matrix stack and forwards
    ``q``/``Q`` so the extractor's clip region follows the graphics state.
    Construction operands are mapped to device space before the extractor
    sees them.
    """

    def __init__(
        self,
        page: DictionaryObject,
        reader: PdfReader | None = None,
        options: ExtractionOptions | None = None,
    ) -> None:
        self.page = page
        self.reader = reader if reader is not None else getattr(page, "pdf", None)
        self.options = options or ExtractionOptions()
        self.geometry = page_geometry(page)
        self.engine = RulingExtractor(self.geometry, self.options)
        self._states: list[GraphicsState] = [GraphicsState()]
        self._stack_floor = 1

    @property
    def state(self) -> GraphicsState:
        return self._states[-1]

    @property
    def rulings(self) -> tuple[Ruling, ...]:
        return self.engine.rulings

    def run(self) -> tuple[Ruling, ...]:
        """Interpret the page contents and return the collected rulings."""

        try:
            contents = self.page.get_contents()
        except Exception as exc:
            LOGGER.warning("Unreadable content stream, no rulings extracted: %s", exc)
            return self.rulings
        if contents is None:
            return self.rulings
        operations = self._parse(contents)
        if operations is None:
            LOGGER.warning("Unreadable content stream, no rulings extracted")
            return self.rulings
        resources = _resolve(self.page.get(NameObject("/Resources")))
        self.run_operations(operations, resources=resources)
        return self.rulings

    def run_operations(
        self,
        operations: Iterable[Operation],
        *,
        resources: object | None = None,
        depth: int = 0,
    ) -> None:
        """Dispatch already parsed ``(operands, operator)`` pairs in order."""

        for operands, raw_operator in operations:
            operator = _decode_operator(raw_operator)
            try:
                self._dispatch(operator, operands, resources, depth)
            except (TypeError, ValueError) as exc:
                LOGGER.debug("Skipping operator %r with bad operands %r: %s", operator, operands, exc)

    # -- Internal helpers -------------------------------------------------

    def _parse(self, contents: object) -> list[Operation] | None:
        try:
            stream = contents if isinstance(contents, ContentStream) else ContentStream(contents, self.reader)
            return list(stream.operations)
        except Exception as exc:
            LOGGER.debug("Failed to parse content stream: %s", exc)
            return None

    def _device(self, x: object, y: object) -> Point:
        return self.state.ctm.apply(float(x), float(y))

    def _dispatch(self, operator: bytes, operands: Sequence[Any], resources: object | None, depth: int) -> None:
        engine = self.engine
        expected = _OPERAND_COUNTS.get(operator)
        if expected is not None and len(operands) < expected:
            raise ValueError(f"expected {expected} operands")

        if operator == b"q":
            self._states.append(self.state.clone())
            engine.save_graphics_state()
        elif operator == b"Q":
            # States pushed outside the running form stay out of its reach.
            if len(self._states) > self._stack_floor:
                self._states.pop()
                engine.restore_graphics_state()
        elif operator == b"cm":
            matrix = AffineTransform.from_operands([float(value) for value in operands])
            self.state.ctm = self.state.ctm.concatenate(matrix)
        elif operator == b"m":
            engine.move_to(*self._device(operands[0], operands[1]))
        elif operator == b"l":
            point = self._device(operands[0], operands[1])
            if engine.get_current_point() is None:
                engine.move_to(*point)
            else:
                engine.line_to(*point)
        elif operator in (b"c", b"v", b"y"):
            self._curve(operator, operands)
        elif operator == b"h":
            engine.close_path()
        elif operator == b"re":
            x, y, width, height = (float(value) for value in operands[:4])
            engine.append_rectangle(
                self._device(x, y),
                self._device(x + width, y),
                self._device(x + width, y + height),
                self._device(x, y + height),
            )
        elif operator in (b"W", b"W*"):
            engine.clip(WindingRule.EVEN_ODD if operator in _EVEN_ODD_OPS else WindingRule.NONZERO)
        elif operator == b"n":
            engine.end_path()
        elif operator in _STROKE_OPS or operator in _FILL_OPS or operator in _FILL_STROKE_OPS:
            self._paint(operator)
        elif operator == b"Do" and operands:
            self._draw_xobject(operands[0], resources, depth)
        elif operator == b"INLINE IMAGE":
            engine.draw_image(operands)
        elif operator == b"sh" and operands:
            engine.shading_fill(operands[0])

    def _curve(self, operator: bytes, operands: Sequence[Any]) -> None:
        engine = self.engine
        current = engine.get_current_point()
        values = [float(value) for value in operands]
        if operator == b"c":
            c1 = self._device(values[0], values[1])
            c2 = self._device(values[2], values[3])
            end = self._device(values[4], values[5])
        elif operator == b"v":
            c1 = current
            c2 = self._device(values[0], values[1])
            end = self._device(values[2], values[3])
        else:
            c1 = self._device(values[0], values[1])
            end = self._device(values[2], values[3])
            c2 = end
        if current is None:
            engine.move_to(*end)
            return
        engine.curve_to(c1[0], c1[1], c2[0], c2[1], end[0], end[1])

    def _paint(self, operator: bytes) -> None:
        engine = self.engine
        if operator in _CLOSING_PAINT_OPS:
            engine.close_path()
        rule = WindingRule.EVEN_ODD if operator in _EVEN_ODD_OPS else WindingRule.NONZERO
        if operator in _STROKE_OPS:
            engine.stroke_path()
        elif operator in _FILL_OPS:
            engine.fill_path(rule)
        else:
            engine.fill_and_stroke_path(rule)

    def _draw_xobject(self, name: object, resources: object | None, depth: int) -> None:
        resources = _resolve(resources)
        if not isinstance(resources, DictionaryObject):
            return
        xobjects = _resolve(resources.get(NameObject("/XObject")))
        if not isinstance(xobjects, DictionaryObject):
            return
        xobject = _resolve(xobjects.get(str(name)))
        if not isinstance(xobject, StreamObject):
            return
        subtype = xobject.get(NameObject("/Subtype"))
        if subtype == "/Image":
            self.engine.draw_image(xobject)
        elif subtype == "/Form":
            self._show_form(xobject, resources, depth)

    def _show_form(self, form: StreamObject, parent_resources: DictionaryObject, depth: int) -> None:
        if depth >= self.options.max_form_depth:
            LOGGER.debug("Form XObject nesting deeper than %d ignored", self.options.max_form_depth)
            return
        operations = self._parse(form)
        if operations is None:
            LOGGER.warning("Unreadable form XObject content, skipped")
            return
        form_resources = _resolve(form.get(NameObject("/Resources"))) or parent_resources

        saved_depth = len(self._states)
        saved_floor = self._stack_floor
        self._states.append(self.state.clone())
        self.engine.save_graphics_state()
        self._stack_floor = len(self._states)
        try:
            matrix = _resolve(form.get(NameObject("/Matrix")))
            if matrix is not None and len(matrix) >= 6:
                transform = AffineTransform.from_operands([float(value) for value in matrix])
                self.state.ctm = self.state.ctm.concatenate(transform)
            bbox = _resolve(form.get(NameObject("/BBox")))
            if bbox is not None and len(bbox) >= 4:
                self.engine.clip_to_rect(self.state.ctm.transform_rect(Rect.from_box([float(v) for v in bbox])))
            self.run_operations(operations, resources=form_resources, depth=depth + 1)
        finally:
            # Unbalanced q operators inside the form must not leak out of it.
            while len(self._states) > saved_depth:
                self._states.pop()
                self.engine.restore_graphics_state()
            self._stack_floor = saved_floor
