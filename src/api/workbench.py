from __future__ import annotations

"""ワークベンチ API（ミックス→生成→保存の作業状態）。

どこで: `api.workbench`。
何を: 入力色（Ingredient）の作業セット、関係/色数/グラデーション方向の設定、
      保存パレットと表示設定の永続化、JSON のインポート/エクスポートを 1 つのオブジェクトにまとめる。
なぜ: UI/CLI がこのクラスの操作だけで元アプリと同じ流れを再現できるようにするため。

仕様（要点）:
- 変更操作のたびに `base_color`（`palette.mix`）と `palette`（`palette.Palette.build`）を再計算する。
- 利用者向けの一時メッセージは `notice` に入る（直近の 1 件のみ）。
- 永続化の失敗は例外にせず、メモリ上の状態を保ったまま `notice` で知らせる。
- 公開セッタへの型/値の誤りは ValueError（プログラミングエラー扱い）。
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Tuple

import numpy as np

from common.ids import IdAllocator, default_allocator
from common.settings import _Settings
from common.settings import get as get_settings
from palette.color_types import Ingredient
from palette.engine import ColorEngine, DefaultColorEngine
from palette.formatter import format_color
from palette.harmony import RelationType
from palette.mix import mix
from palette.palette import Palette, gradient_css
from palette.ui_helpers import DISPLAY_FORMAT_VALUES
from persistence.exchange import (
    ImportRejected,
    export_document,
    parse_import_document,
    write_export,
)
from persistence.normalizer import StateKind, load_state
from persistence.records import SavedPalette, SavedPaletteCollection, next_record_id
from persistence.store import (
    DARK_MODE_KEY,
    DISPLAY_FORMAT_KEY,
    SAVED_PALETTES_KEY,
    JsonFileStore,
    KeyValueStore,
    save_value,
)

logger = logging.getLogger(__name__)

DEFAULT_INGREDIENTS: Tuple[str, ...] = ("#e11d48", "#2563eb")
MIN_INGREDIENTS = 2


class Workbench:
    """パレット作成の作業状態。

    Parameters
    ----------
    store : KeyValueStore | None
        永続化先。None なら設定の保存ディレクトリを使う `JsonFileStore`。
    engine : ColorEngine | None
        色計算アダプタ。None なら `DefaultColorEngine`。
    ids : IdAllocator | None
        Ingredient ID の払い出し元。None ならプロセス共有のアロケータ。
    rng : numpy.random.Generator | None
        ランダム色の乱数源。
    settings : _Settings | None
        既定値（色数の範囲、保存上限など）。None なら `common.settings.get()`。
    clock : Callable[[], datetime]
        保存名/ID に使う現在時刻。
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        engine: Optional[ColorEngine] = None,
        ids: Optional[IdAllocator] = None,
        rng: Optional[np.random.Generator] = None,
        settings: Optional[_Settings] = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings if settings is not None else get_settings()
        self.engine: ColorEngine = engine if engine is not None else DefaultColorEngine()
        self.ids = ids if ids is not None else default_allocator()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.store: KeyValueStore = (
            store if store is not None else JsonFileStore(self.settings.state_path())
        )
        self._clock = clock

        self.notice: Optional[str] = None
        self.ingredients: List[Ingredient] = [
            Ingredient.create(c, self.ids, self.engine) for c in DEFAULT_INGREDIENTS
        ]
        self.relation = RelationType.parse(self.settings.DEFAULT_RELATION)
        self.count = self._clamp_count(self.settings.DEFAULT_COUNT)
        self.gradient_direction = self.settings.GRADIENT_DIRECTION
        self.base_color: Optional[str] = None
        self.palette: Tuple[str, ...] = ()

        records = load_state(
            self.store,
            SAVED_PALETTES_KEY,
            StateKind.SAVED_PALETTES,
            [],
            ids=self.ids,
            engine=self.engine,
        )
        self.saved = SavedPaletteCollection(records, capacity=self.settings.MAX_SAVED_PALETTES)
        self.dark_mode: bool = load_state(
            self.store, DARK_MODE_KEY, StateKind.BOOLEAN_FLAG, bool(self.settings.DARK_MODE)
        )
        default_format = (
            self.settings.DISPLAY_FORMAT
            if self.settings.DISPLAY_FORMAT in DISPLAY_FORMAT_VALUES
            else "hex"
        )
        self.display_format: str = load_state(
            self.store,
            DISPLAY_FORMAT_KEY,
            StateKind.ENUMERATED_STRING,
            default_format,
            allowed=DISPLAY_FORMAT_VALUES,
        )
        self._refresh()

    # --- 派生値 ---
    def _refresh(self) -> None:
        self.base_color = mix(self.ingredients, self.engine)
        built = Palette.build(self.base_color, self.relation, self.count, self.engine)
        self.palette = built.colors if built is not None else ()

    def _clamp_count(self, count: int) -> int:
        return max(self.settings.MIN_COUNT, min(self.settings.MAX_COUNT, int(count)))

    def gradient_css(self) -> Optional[str]:
        """現在のパレットの CSS グラデーション（空なら None）。"""
        if not self.palette:
            return None
        return gradient_css(self.palette, self.gradient_direction)

    def format(self, color: Optional[str]) -> str:
        """現在の表示形式で色を文字列化する。"""
        return format_color(color, self.display_format, self.engine)

    # --- 作業セット ---
    def _index_of(self, ingredient_id: int) -> Optional[int]:
        for i, item in enumerate(self.ingredients):
            if item.id == ingredient_id:
                return i
        return None

    def update_ingredient(self, ingredient_id: int, color: str) -> bool:
        """色を差し替えて妥当性を再計算する。未知の ID は False。"""
        i = self._index_of(ingredient_id)
        if i is None:
            return False
        self.ingredients[i] = self.ingredients[i].with_color(color, self.engine)
        self._refresh()
        return True

    def add_ingredient(self, color: Optional[str] = None) -> Ingredient:
        """入力色を追加する（未指定/不正な色はランダム色に置き換える）。"""
        if color is None or not self.engine.is_valid(color):
            color = self.engine.random(self.rng)
        item = Ingredient.create(color, self.ids, self.engine)
        self.ingredients.append(item)
        self.notice = f"Color added: {color}"
        self._refresh()
        return item

    def remove_ingredient(self, ingredient_id: int) -> bool:
        i = self._index_of(ingredient_id)
        if i is None:
            return False
        if len(self.ingredients) <= MIN_INGREDIENTS:
            self.notice = f"Minimum of {MIN_INGREDIENTS} mix colors required."
            return False
        del self.ingredients[i]
        self._refresh()
        return True

    def toggle_lock(self, ingredient_id: int) -> bool:
        i = self._index_of(ingredient_id)
        if i is None:
            return False
        item = self.ingredients[i].toggled()
        self.ingredients[i] = item
        self.notice = "Color Locked" if item.locked else "Color Unlocked"
        return True

    def randomize(self, ingredient_id: Optional[int] = None) -> int:
        """ロックされていない入力色をランダム色にする。

        `ingredient_id` を指定するとその 1 色だけを対象にする。戻り値は変更した色数。
        """
        if ingredient_id is not None and self._index_of(ingredient_id) is None:
            return 0
        changed = 0
        for i, item in enumerate(self.ingredients):
            if ingredient_id is not None and item.id != ingredient_id:
                continue
            if item.locked:
                continue
            self.ingredients[i] = item.with_color(self.engine.random(self.rng), self.engine)
            changed += 1
        if changed == 0:
            self.notice = "All colors are locked." if ingredient_id is None else "Color is locked."
            return 0
        self.notice = (
            f"Randomized {changed} unlocked color(s)!"
            if ingredient_id is None
            else "Color randomized!"
        )
        self._refresh()
        return changed

    # --- 生成設定 ---
    def set_relation(self, relation: RelationType | str) -> None:
        self.relation = RelationType.from_value(relation)
        self._refresh()

    def set_count(self, count: int) -> int:
        """色数を `[MIN_COUNT, MAX_COUNT]` に丸めて設定し、その値を返す。"""
        if isinstance(count, bool) or not isinstance(count, int):
            raise ValueError(f"count must be an int, got {count!r}")
        self.count = self._clamp_count(count)
        self._refresh()
        return self.count

    def set_gradient_direction(self, direction: str) -> None:
        if not isinstance(direction, str) or not direction.strip():
            raise ValueError("gradient direction must be a non-empty string")
        self.gradient_direction = direction.strip()

    # --- 表示設定 ---
    def set_dark_mode(self, enabled: bool) -> bool:
        """ダークモードを切り替えて保存する。保存の成否を返す。"""
        if not isinstance(enabled, bool):
            raise ValueError("dark mode must be a bool")
        self.dark_mode = enabled
        return self._persist(DARK_MODE_KEY, enabled, "Error saving preferences.")

    def set_display_format(self, fmt: str) -> bool:
        if fmt not in DISPLAY_FORMAT_VALUES:
            raise ValueError(f"Unknown display format: {fmt!r}")
        self.display_format = str(fmt)
        return self._persist(DISPLAY_FORMAT_KEY, self.display_format, "Error saving preferences.")

    # --- 保存パレット ---
    def _persist(self, key: str, value: Any, failure_notice: str) -> bool:
        ok = save_value(self.store, key, value)
        if not ok:
            logger.warning("could not persist %s; keeping in-memory state", key)
            self.notice = failure_notice
        return ok

    def _persist_saved(self) -> bool:
        return self._persist(
            SAVED_PALETTES_KEY, self.saved.to_list(), "Error saving palettes: Storage full?"
        )

    def _exportable_base(self) -> Optional[str]:
        if self.base_color is None or not self.palette:
            return None
        return self.base_color if self.engine.is_valid(self.base_color) else None

    def save_current(self) -> Optional[SavedPalette]:
        """現在のパレットを保存する。保存しなかった場合は None（理由は `notice`）。"""
        base_color = self._exportable_base()
        if base_color is None:
            self.notice = "Cannot save an empty or invalid palette."
            return None
        now = self._clock()
        record = SavedPalette(
            id=next_record_id(self.saved.ids(), int(now.timestamp() * 1000)),
            name=f"{self.relation.value} ({self.count}) - {now.strftime('%H:%M')}",
            ingredients=tuple(self.ingredients),
            base_color=base_color,
            palette=tuple(self.palette),
            relation=self.relation,
            count=self.count,
            gradient_direction=self.gradient_direction,
        )
        if self.saved.find_equivalent(record) is not None:
            self.notice = "This exact palette is already saved."
            return None
        evicted = self.saved.add(record)
        if evicted is not None:
            logger.info("saved palettes full; dropped %s", evicted.name)
        self.notice = "Palette Saved!"
        self._persist_saved()
        return record

    def _apply_record(self, record: SavedPalette) -> None:
        items = [item.revalidated(self.engine) for item in record.ingredients]
        while len(items) < MIN_INGREDIENTS:
            items.append(Ingredient.create(self.engine.random(self.rng), self.ids, self.engine))
        self.ingredients = items
        self.relation = record.relation
        self.count = self._clamp_count(record.count)
        self.gradient_direction = record.gradient_direction
        self._refresh()

    def load_saved(self, record_id: int) -> bool:
        record = self.saved.get(record_id)
        if record is None:
            return False
        self._apply_record(record)
        self.notice = f"Loaded: {record.name}"
        return True

    def delete_saved(self, record_id: int) -> bool:
        if not self.saved.remove(record_id):
            return False
        self.notice = "Palette Deleted."
        self._persist_saved()
        return True

    def rename_saved(self, record_id: int, name: str) -> bool:
        trimmed = name.strip() if isinstance(name, str) else ""
        if not trimmed:
            self.notice = "Palette name cannot be empty."
            return False
        if self.saved.rename(record_id, trimmed) is None:
            return False
        self.notice = "Palette name updated."
        self._persist_saved()
        return True

    # --- インポート/エクスポート ---
    def export_current(self, path: Optional[Path | str] = None) -> Optional[dict]:
        """現在のパレットのエクスポート文書を返す（`path` 指定時は書き出しも行う）。"""
        base_color = self._exportable_base()
        if base_color is None:
            self.notice = "Cannot export an empty or invalid palette."
            return None
        doc = export_document(
            base_color,
            self.relation,
            self.count,
            self.palette,
            [item.color for item in self.ingredients],
            self.gradient_direction,
        )
        if path is not None:
            try:
                write_export(doc, path)
            except OSError:
                logger.warning("failed to write export %s", path, exc_info=True)
                self.notice = "Export failed: could not write file."
                return None
        self.notice = "Palette JSON exported!"
        return doc

    def import_palette(self, source: Mapping[str, Any] | str | bytes) -> Optional[SavedPalette]:
        """JSON 文書を作業セットへ読み込む。拒否時は状態を変えず None。"""
        try:
            record = parse_import_document(
                source,
                self.ids,
                self.engine,
                now=self._clock(),
                existing_ids=self.saved.ids(),
            )
        except ImportRejected as e:
            logger.info("import rejected: %s", e.reason)
            self.notice = f"Import failed: {e.reason}."
            return None
        self._apply_record(record)
        self.notice = "Palette imported successfully!"
        return record


__all__ = ["Workbench", "DEFAULT_INGREDIENTS", "MIN_INGREDIENTS"]
