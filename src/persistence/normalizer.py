from __future__ import annotations

"""Rebuilding typed state from untrusted persisted data.

Everything read back from storage goes through :func:`normalize` (or
:func:`decode_state` / :func:`load_state`, which add the JSON parse and the
store read in front of it). None of these functions raise: a value that
cannot be used becomes the caller's ``fallback``.

Saved palettes are coerced field by field using the policy table
``RECORD_POLICY``. Each entry names the record attribute, the stored keys
it may come from (canonical key first, then keys written by older
versions), the coercion that accepts or rejects a stored value, and the
default used when nothing acceptable is found. One broken record never
invalidates its siblings.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Collection,
    Dict,
    List,
    Mapping,
    Optional,
    Tuple,
)

from common.ids import IdAllocator, default_allocator
from common.settings import get as get_settings
from palette.color_types import PLACEHOLDER_COLOR, Ingredient
from palette.engine import ColorEngine, DefaultColorEngine
from palette.harmony import RelationType
from palette.palette import DEFAULT_GRADIENT_DIRECTION

from .records import SavedPalette

if TYPE_CHECKING:
    from .store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_BASE_COLOR = "#808080"
DEFAULT_COUNT = 5


class StateKind(Enum):
    """Shape expected from a persisted value."""

    SAVED_PALETTES = "saved_palettes"
    BOOLEAN_FLAG = "boolean_flag"
    ENUMERATED_STRING = "enumerated_string"


class _Missing:
    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


@dataclass
class _Context:
    ids: IdAllocator
    engine: ColorEngine
    values: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FieldPolicy:
    """How one SavedPalette attribute is read from a stored mapping."""

    name: str
    keys: Tuple[str, ...]
    coerce: Callable[[Any, _Context], Any]
    default: Callable[[_Context], Any]


# --- coercions: return MISSING to reject a stored value ---


def _positive_int(value: Any) -> Any:
    if isinstance(value, bool):
        return MISSING
    if isinstance(value, int):
        return value if value > 0 else MISSING
    if isinstance(value, float) and value.is_integer() and value > 0:
        return int(value)
    return MISSING


def _non_blank_str(value: Any, ctx: _Context) -> Any:
    if isinstance(value, str) and value.strip():
        return value
    return MISSING


def _coerce_id(value: Any, ctx: _Context) -> Any:
    return _positive_int(value)


def _coerce_count(value: Any, ctx: _Context) -> Any:
    return _positive_int(value)


def _coerce_ingredient(entry: Any, ctx: _Context) -> Optional[Ingredient]:
    if isinstance(entry, str):
        # legacy shorthand: a bare color string
        return Ingredient.create(entry, ctx.ids, ctx.engine)
    if not isinstance(entry, Mapping):
        return None
    color = entry.get("color")
    if not isinstance(color, str) or not color.strip():
        color = PLACEHOLDER_COLOR
    valid = entry.get("valid")
    if not isinstance(valid, bool):
        valid = ctx.engine.is_valid(color)
    locked = entry.get("locked")
    if not isinstance(locked, bool):
        locked = False
    return Ingredient(id=ctx.ids.prefer(entry.get("id")), color=color, valid=valid, locked=locked)


def _coerce_ingredients(value: Any, ctx: _Context) -> Any:
    if not isinstance(value, (list, tuple)):
        return MISSING
    items: List[Ingredient] = []
    for entry in value:
        try:
            item = _coerce_ingredient(entry, ctx)
        except Exception:
            logger.debug("dropping malformed ingredient %r", entry, exc_info=True)
            continue
        if item is None:
            logger.debug("dropping ingredient of unsupported type %r", type(entry))
            continue
        items.append(item)
    return tuple(items)


def _coerce_palette(value: Any, ctx: _Context) -> Any:
    if not isinstance(value, (list, tuple)):
        return MISSING
    return tuple(c for c in value if isinstance(c, str))


def _coerce_relation(value: Any, ctx: _Context) -> Any:
    if not isinstance(value, str):
        return MISSING
    try:
        return RelationType.from_value(value)
    except ValueError:
        return MISSING


def _default_ingredients(ctx: _Context) -> Tuple[Ingredient, ...]:
    return (Ingredient.create(PLACEHOLDER_COLOR, ctx.ids, ctx.engine),)


RECORD_POLICY: Tuple[FieldPolicy, ...] = (
    FieldPolicy("id", ("id",), _coerce_id, lambda ctx: ctx.ids.next()),
    FieldPolicy(
        "name",
        ("name",),
        _non_blank_str,
        lambda ctx: f"Saved Palette {ctx.values['id']}",
    ),
    FieldPolicy("ingredients", ("ingredients", "mixColors"), _coerce_ingredients, _default_ingredients),
    FieldPolicy(
        "base_color", ("baseColor", "mixedColor"), _non_blank_str, lambda ctx: DEFAULT_BASE_COLOR
    ),
    FieldPolicy("palette", ("palette",), _coerce_palette, lambda ctx: ()),
    FieldPolicy(
        "relation",
        ("relationType", "type"),
        _coerce_relation,
        lambda ctx: RelationType.MONOCHROMATIC,
    ),
    FieldPolicy("count", ("count",), _coerce_count, lambda ctx: DEFAULT_COUNT),
    FieldPolicy(
        "gradient_direction",
        ("gradientDirection",),
        _non_blank_str,
        lambda ctx: DEFAULT_GRADIENT_DIRECTION,
    ),
)


def _resolve_field(policy: FieldPolicy, raw: Mapping[str, Any], ctx: _Context) -> Any:
    for key in policy.keys:
        if key not in raw:
            continue
        try:
            value = policy.coerce(raw[key], ctx)
        except Exception:
            logger.debug("field %s: stored value rejected", policy.name, exc_info=True)
            continue
        if value is not MISSING:
            return value
    return policy.default(ctx)


_POLICY_BY_NAME: Dict[str, FieldPolicy] = {policy.name: policy for policy in RECORD_POLICY}


def coerce_field(
    name: str,
    value: Any,
    ids: Optional[IdAllocator] = None,
    engine: Optional[ColorEngine] = None,
) -> Any:
    """Coerce one value with the ``RECORD_POLICY`` entry ``name``; a rejected value gives its default.

    Only fields whose default does not depend on other fields of the record
    (everything except ``name``) can be coerced on their own.
    """
    policy = _POLICY_BY_NAME[name]
    ctx = _Context(ids=ids or default_allocator(), engine=engine or DefaultColorEngine())
    try:
        coerced = policy.coerce(value, ctx)
    except Exception:
        logger.debug("field %s: value rejected", name, exc_info=True)
        coerced = MISSING
    return policy.default(ctx) if coerced is MISSING else coerced


def coerce_record(
    raw: Mapping[str, Any],
    ids: Optional[IdAllocator] = None,
    engine: Optional[ColorEngine] = None,
) -> SavedPalette:
    """Build a SavedPalette from one stored mapping, defaulting every bad field."""
    ctx = _Context(ids=ids or default_allocator(), engine=engine or DefaultColorEngine())
    for policy in RECORD_POLICY:
        ctx.values[policy.name] = _resolve_field(policy, raw, ctx)
    return SavedPalette(**ctx.values)


def normalize_saved_palettes(
    raw: Any,
    fallback: Any = None,
    *,
    capacity: Optional[int] = None,
    ids: Optional[IdAllocator] = None,
    engine: Optional[ColorEngine] = None,
) -> Any:
    """Coerce a stored list of palettes; non-lists give ``fallback``.

    Non-mapping elements are skipped. The result keeps the stored order and
    is cut to ``capacity`` (default: ``MAX_SAVED_PALETTES``).
    """
    if not isinstance(raw, (list, tuple)):
        return fallback
    if capacity is None:
        capacity = get_settings().MAX_SAVED_PALETTES
    ids = ids or default_allocator()
    engine = engine or DefaultColorEngine()

    out: List[SavedPalette] = []
    for index, element in enumerate(raw):
        if len(out) >= capacity:
            break
        if not isinstance(element, Mapping):
            logger.debug("skipping saved palette #%d of type %r", index, type(element))
            continue
        try:
            out.append(coerce_record(element, ids, engine))
        except Exception:
            logger.warning("dropping malformed saved palette #%d", index, exc_info=True)
    return out


def normalize(
    raw: Any,
    kind: StateKind,
    fallback: Any,
    *,
    allowed: Optional[Collection[str]] = None,
    ids: Optional[IdAllocator] = None,
    engine: Optional[ColorEngine] = None,
) -> Any:
    """Return a validated value of ``kind`` built from ``raw``, or ``fallback``.

    - SAVED_PALETTES: list of :class:`SavedPalette` (see normalize_saved_palettes)
    - BOOLEAN_FLAG: ``raw`` itself if it is a bool
    - ENUMERATED_STRING: ``raw`` itself if it is a str contained in ``allowed``
    """
    try:
        if kind is StateKind.SAVED_PALETTES:
            return normalize_saved_palettes(raw, fallback, ids=ids, engine=engine)
        if kind is StateKind.BOOLEAN_FLAG:
            return raw if isinstance(raw, bool) else fallback
        if kind is StateKind.ENUMERATED_STRING:
            if isinstance(raw, str) and allowed is not None and raw in allowed:
                return raw
            return fallback
    except Exception:
        logger.warning("failed to normalize persisted %s", kind, exc_info=True)
        return fallback
    return fallback


def decode_state(
    text: Optional[str],
    kind: StateKind,
    fallback: Any,
    **kwargs: Any,
) -> Any:
    """Parse serialized JSON ``text`` and normalize it; parse failures give ``fallback``."""
    if text is None:
        return fallback
    try:
        raw = json.loads(text)
    except Exception:
        logger.warning("discarding unparseable persisted %s", kind, exc_info=True)
        return fallback
    return normalize(raw, kind, fallback, **kwargs)


def load_state(
    store: "KeyValueStore",
    key: str,
    kind: StateKind,
    fallback: Any,
    **kwargs: Any,
) -> Any:
    """Read ``key`` from ``store`` and decode it; any failure gives ``fallback``."""
    try:
        text = store.get(key)
    except Exception:
        logger.warning("failed to read persisted key %s", key, exc_info=True)
        return fallback
    return decode_state(text, kind, fallback, **kwargs)


__all__ = [
    "StateKind",
    "FieldPolicy",
    "RECORD_POLICY",
    "DEFAULT_BASE_COLOR",
    "DEFAULT_COUNT",
    "coerce_field",
    "coerce_record",
    "normalize_saved_palettes",
    "normalize",
    "decode_state",
    "load_state",
]
