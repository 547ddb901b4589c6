from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from services.theme_store import DARK, LIGHT


@dataclass(frozen=True)
class Palette:
    name: str
    background: str
    foreground: str
    surface: str
    done_bg: str
    done_fg: str

    def row_colors(self, completed: bool) -> Tuple[str, str]:
        if completed:
            return self.done_bg, self.done_fg
        return self.surface, self.foreground


PALETTES = {
    LIGHT: Palette(LIGHT, background="#f8f9fa", foreground="#333333", surface="#ffffff",
                   done_bg="#d4edda", done_fg="#155724"),
    DARK: Palette(DARK, background="#1e1e1e", foreground="#eeeeee", surface="#333333",
                  done_bg="#1b4620", done_fg="#d4edda"),
}


def palette_for(theme: str) -> Palette:
    return PALETTES.get(theme, PALETTES[LIGHT])
