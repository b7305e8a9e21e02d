"""
どこで: `api.cli`（コンソールスクリプト `palette-mixer`）。
何を: パレット生成/ミックス/保存一覧/エクスポートをコマンドラインから実行する。
なぜ: GUI 無しでもエンジンと永続化を確認・利用できるようにするため。

Usage:
  palette-mixer generate "#e11d48" --relation triadic --count 5 --format rgb
  palette-mixer mix "#e11d48" "#2563eb"
  palette-mixer saved
  palette-mixer export "#e11d48" "#2563eb" --out palette.json

終了コード: 成功 0、不正入力 1。
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from common.ids import default_allocator
from common.logging import setup_default_logging
from common.settings import get as get_settings
from palette.api import generate
from palette.color_types import Ingredient
from palette.engine import DefaultColorEngine
from palette.formatter import DisplayFormat, format_color
from palette.harmony import RelationType
from palette.mix import mix
from palette.ui_helpers import GRADIENT_DIRECTIONS
from persistence.exchange import export_document, export_filename, write_export
from persistence.normalizer import StateKind, load_state
from persistence.store import SAVED_PALETTES_KEY, JsonFileStore

logger = logging.getLogger(__name__)

_RELATIONS = [r.value for r in RelationType]
_FORMATS = [f.value for f in DisplayFormat]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="palette-mixer", description="Mix colors and generate harmonious palettes."
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: settings)")
    parser.add_argument("--state-dir", default=None, help="Directory holding saved state")
    sub = parser.add_subparsers(dest="command", required=True)

    p_gen = sub.add_parser("generate", help="Generate a palette from a base color")
    p_gen.add_argument("base", help="Base color (hex, rgb(), hsl() or CSS name)")
    p_gen.add_argument("--relation", choices=_RELATIONS, default=None)
    p_gen.add_argument("--count", type=int, default=None)
    p_gen.add_argument("--format", choices=_FORMATS, default=DisplayFormat.HEX.value)

    p_mix = sub.add_parser("mix", help="Mix colors into one base color")
    p_mix.add_argument("colors", nargs="+")
    p_mix.add_argument("--format", choices=_FORMATS, default=DisplayFormat.HEX.value)

    sub.add_parser("saved", help="List saved palettes")

    p_exp = sub.add_parser("export", help="Mix colors, generate and write an export document")
    p_exp.add_argument("colors", nargs="+")
    p_exp.add_argument("--relation", choices=_RELATIONS, default=None)
    p_exp.add_argument("--count", type=int, default=None)
    p_exp.add_argument("--direction", default=None, help=f"e.g. {', '.join(GRADIENT_DIRECTIONS)}")
    p_exp.add_argument("--out", default=None, help="Output file (default: palette_<relation>_<hex>.json)")
    return parser


def _cmd_generate(args: argparse.Namespace) -> int:
    settings = get_settings()
    engine = DefaultColorEngine()
    relation = args.relation or settings.DEFAULT_RELATION
    count = args.count if args.count is not None else settings.DEFAULT_COUNT
    result = generate(args.base, relation, count, engine)
    if not result.ok:
        logger.error("could not generate a palette for %r (%s)", args.base, result.error)
        return 1
    for color in result:
        print(format_color(color, args.format, engine))
    return 0


def _mix_tokens(colors: Sequence[str]) -> tuple[list[Ingredient], Optional[str]]:
    engine = DefaultColorEngine()
    ids = default_allocator()
    items = [Ingredient.create(c, ids, engine) for c in colors]
    for item in items:
        if not item.valid:
            logger.warning("ignoring invalid color %r", item.color)
    return items, mix(items, engine)


def _cmd_mix(args: argparse.Namespace) -> int:
    _, base = _mix_tokens(args.colors)
    if base is None:
        logger.error("no valid color to mix")
        return 1
    print(format_color(base, args.format))
    return 0


def _cmd_saved(args: argparse.Namespace) -> int:
    store = JsonFileStore(args.state_dir)
    records = load_state(store, SAVED_PALETTES_KEY, StateKind.SAVED_PALETTES, [])
    if not records:
        print("No saved palettes.")
        return 0
    for rec in records:
        print(f"{rec.id}\t{rec.name}\t{rec.relation.value}({rec.count})\t{' '.join(rec.palette)}")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    settings = get_settings()
    items, base = _mix_tokens(args.colors)
    if base is None:
        logger.error("no valid color to mix")
        return 1
    relation = RelationType.parse(args.relation or settings.DEFAULT_RELATION)
    count = args.count if args.count is not None else settings.DEFAULT_COUNT
    result = generate(base, relation, count)
    if not result.ok:
        logger.error("could not generate a palette (%s)", result.error)
        return 1
    direction = args.direction or settings.GRADIENT_DIRECTION
    doc = export_document(
        base, relation, count, result.colors, [i.color for i in items if i.valid], direction
    )
    out = args.out or export_filename(doc)
    try:
        path = write_export(doc, out)
    except OSError as e:
        logger.error("could not write %s: %s", out, e)
        return 1
    print(path)
    return 0


_COMMANDS = {
    "generate": _cmd_generate,
    "mix": _cmd_mix,
    "saved": _cmd_saved,
    "export": _cmd_export,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_default_logging(args.log_level)
    count = getattr(args, "count", None)
    if count is not None and count < 1:
        logger.error("--count must be at least 1")
        return 1
    return _COMMANDS[args.command](args)


if __name__ == "__main__":
    raise SystemExit(main())
