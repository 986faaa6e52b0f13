from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Tuple

if TYPE_CHECKING:
    from tileconnect.components.tile_types import TileTypes
    from tileconnect.systems.render import RenderSystem

BoardPos = Tuple[int, int]


class BoardRenderer:
    def __init__(self, render_system: RenderSystem, padding: int = 4):
        self._rs = render_system
        self._padding = padding

    def render(
        self,
        arcade,
        layout: Dict[BoardPos, Tuple[float, float, int]],
        types: Dict[BoardPos, str],
        registry: TileTypes,
        fades: Dict[BoardPos, float],
    ) -> None:
        pad = self._padding
        for pos, (left, bottom, size) in layout.items():
            symbol = types.get(pos)
            if symbol is None:
                continue
            alpha = int(255 * fades.get(pos, 1.0))
            r, g, b = registry.background_for(symbol)
            arcade.draw_lrbt_rectangle_filled(
                left + pad, left + size - pad, bottom + pad, bottom + size - pad, (r, g, b, alpha)
            )
            if self._rs.selected == pos:
                arcade.draw_lrbt_rectangle_outline(
                    left + pad, left + size - pad, bottom + pad, bottom + size - pad,
                    arcade.color.WHITE, border_width=3,
                )
            arcade.draw_text(
                symbol,
                left + size / 2,
                bottom + size / 2,
                (255, 255, 255, alpha),
                int(size * 0.45),
                anchor_x="center",
                anchor_y="center",
            )
