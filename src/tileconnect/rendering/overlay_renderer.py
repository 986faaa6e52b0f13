from __future__ import annotations

from typing import TYPE_CHECKING

from tileconnect.constants import HUD_HEIGHT
from tileconnect.ui.layout import overlay_button_rect

if TYPE_CHECKING:
    from tileconnect.components.session import Session
    from tileconnect.systems.render import RenderSystem


class OverlayRenderer:
    """Start screen, timer/score bar and game-over panel."""

    def __init__(self, render_system: RenderSystem):
        self._rs = render_system

    def render_start_screen(self, arcade) -> None:
        window = self._rs.window
        cx = window.width / 2
        arcade.draw_text("Welcome to Tile Connect!", cx, window.height * 0.7, arcade.color.WHITE, 26,
                         anchor_x="center", anchor_y="center", bold=True)
        arcade.draw_text(
            "Match adjacent tiles to clear them. Try to get the highest score before time runs out!",
            cx, window.height * 0.6, arcade.color.LIGHT_GRAY, 14,
            anchor_x="center", anchor_y="center", multiline=True, width=int(window.width * 0.8),
            align="center",
        )
        self._draw_button(arcade, "Start Game")

    def render_hud(self, arcade, session: Session) -> None:
        window = self._rs.window
        y = window.height - HUD_HEIGHT / 2
        arcade.draw_text(f"⏱️ : {session.time_remaining}s", window.width * 0.25, y, arcade.color.WHITE, 20,
                         anchor_x="center", anchor_y="center")
        arcade.draw_text(f"⭐ : {session.score}", window.width * 0.75, y, arcade.color.WHITE, 20,
                         anchor_x="center", anchor_y="center")

    def render_game_over(self, arcade, session: Session) -> None:
        window = self._rs.window
        arcade.draw_lrbt_rectangle_filled(0, window.width, 0, window.height, (0, 0, 0, 180))
        cx = window.width / 2
        arcade.draw_text("Game Over", cx, window.height * 0.62, arcade.color.WHITE, 32,
                         anchor_x="center", anchor_y="center", bold=True)
        arcade.draw_text(f"Your Score: {session.score} ⭐", cx, window.height * 0.54, arcade.color.WHITE, 20,
                         anchor_x="center", anchor_y="center")
        self._draw_button(arcade, "Restart Game")

    def _draw_button(self, arcade, label: str) -> None:
        window = self._rs.window
        left, bottom, width, height = overlay_button_rect(window.width, window.height)
        arcade.draw_lbwh_rectangle_filled(left, bottom, width, height, arcade.color.DARK_SLATE_BLUE)
        arcade.draw_lbwh_rectangle_outline(left, bottom, width, height, arcade.color.WHITE, border_width=2)
        arcade.draw_text(label, left + width / 2, bottom + height / 2, arcade.color.WHITE, 20,
                         anchor_x="center", anchor_y="center", bold=True)
