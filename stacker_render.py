
"""
Rendering helpers for Neon Stacker.

- Pre-render block cell Surfaces per kind (solid + ghost outline) and blit them.
- Pre-render static background (grid + panel frame) for the current Dims.
- Cache HUD text surfaces; re-render only when values change.
- Cache a BOARD SURFACE with all settled blocks. Grids are replaced, never
  edited, so the cache is rebuilt only when a new grid object shows up.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, List, Optional

from stacker_board import Board, ghost_y
from stacker_layout import Dims
from stacker_piece import COLORS, Piece
from stacker_session import GameState, Status

FROZEN_COLOR = (220,38,38)
BG = (2,6,23)
GRID = (30,41,59)
TEXT = (226,232,240)
MUTED = (100,116,139)
ACCENT = (34,211,238)

@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    lines: int = -1
    comment: str = ""
    title: Optional[pygame.Surface] = None
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    comment_s: Optional[List[pygame.Surface]] = None


def trimmed(shape):
    """Shape without empty border rows/columns, for previews."""
    rows = [r for r in shape if any(r)]
    cols = [c for c in range(len(shape[0])) if any(r[c] for r in shape)]
    return [[r[c] for c in cols] for r in rows]


def wrap(font: pygame.font.Font, text: str, width: int) -> List[str]:
    lines, cur = [], ""
    for word in text.split():
        trial = f"{cur} {word}".strip()
        if cur and font.size(trial)[0] > width:
            lines.append(cur); cur = word
        else:
            cur = trial
    if cur: lines.append(cur)
    return lines


class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self.big_font = big_font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self._board_src: Optional[Board] = None

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill(BG)
        for x in range(d.cols+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, GRID, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(d.rows+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, GRID, (d.board_x, Y), (d.board_x + d.board_w, Y))
        self.panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.total_h - 2*d.margin)
        pygame.draw.rect(self.bg, (15,23,42), self.panel_rect)
        pygame.draw.rect(self.bg, GRID, self.panel_rect, 1)
        self.pv_cell = 18
        self.next_pos = (d.panel_x + 12, d.panel_y + 150)
        self.held_pos = (d.panel_x + 136, d.panel_y + 150)
        for (px, py) in (self.next_pos, self.held_pos):
            frame = pygame.Rect(px-6, py-6, self.pv_cell*4+12, self.pv_cell*4+12)
            pygame.draw.rect(self.bg, BG, frame)
            pygame.draw.rect(self.bg, GRID, frame, 1)

    # ---------- Small cell sprites (solid + ghost outline) ----------
    def _make_cells(self):
        self.cell_surf: Dict[str, pygame.Surface] = {}
        self.ghost_surf: Dict[str, pygame.Surface] = {}
        c = self.dims.cell
        for t, col in COLORS.items():
            s = pygame.Surface((c-2, c-2))
            s.fill(col)
            self.cell_surf[t] = s
            g = pygame.Surface((c-8, c-8), pygame.SRCALPHA)
            pygame.draw.rect(g, col, (0,0,c-8,c-8), 2)
            self.ghost_surf[t] = g
        self.frozen_surf = pygame.Surface((c-2, c-2))
        self.frozen_surf.fill(FROZEN_COLOR)

    # ---------- Board surface cache ----------
    def sync_board(self, board: Board):
        if board is self._board_src:
            return
        self.board_surface.fill((0,0,0,0))
        c = self.dims.cell
        for y, row in enumerate(board):
            for x, t in enumerate(row):
                if t:
                    self.board_surface.blit(self.cell_surf[t], (x*c + 1, y*c + 1))
        self._board_src = board

    def cell_pos(self, bx: int, by: int, inset: int = 1):
        return (self.dims.board_x + bx*self.dims.cell + inset,
                self.dims.board_y + by*self.dims.cell + inset)

    def draw_piece(self, screen: pygame.Surface, piece: Piece, frozen: bool):
        surf = self.frozen_surf if frozen else self.cell_surf[piece.t]
        for bx, by in piece.cells():
            if by >= 0:
                screen.blit(surf, self.cell_pos(bx, by))

    def draw_ghost(self, screen: pygame.Surface, board: Board, piece: Piece):
        dy = ghost_y(board, piece) - piece.y
        for bx, by in piece.cells():
            if by + dy >= 0:
                screen.blit(self.ghost_surf[piece.t], self.cell_pos(bx, by + dy, 4))

    def draw_preview(self, screen: pygame.Surface, piece: Optional[Piece], pos, dim: bool = False):
        if piece is None:
            screen.blit(self.font.render("empty", True, MUTED), pos)
            return
        shape = trimmed(piece.shape)
        c = self.pv_cell
        offx = (4 - len(shape[0])) * c // 2
        offy = (4 - len(shape)) * c // 2
        block = pygame.Surface((c-2, c-2))
        block.fill(piece.color)
        if dim: block.set_alpha(90)
        for y, row in enumerate(shape):
            for x, v in enumerate(row):
                if v:
                    screen.blit(block, (pos[0] + offx + x*c + 1, pos[1] + offy + y*c + 1))

    # ---------- HUD / Panel ----------
    def draw_panel_hud(self, screen: pygame.Surface, state: GameState, comment: str):
        d = self.dims
        f = self.font
        if self.hud.title is None:
            self.hud.title = self.big_font.render("NEON STACKER", True, ACCENT)
        if state.score != self.hud.score:
            self.hud.score = state.score
            self.hud.score_s = f.render(f"Score: {state.score:,}", True, TEXT)
        if state.level != self.hud.level:
            self.hud.level = state.level
            self.hud.level_s = f.render(f"Level: {state.level}", True, TEXT)
        if state.lines != self.hud.lines:
            self.hud.lines = state.lines
            self.hud.lines_s = f.render(f"Lines: {state.lines}", True, TEXT)
        if comment != self.hud.comment or self.hud.comment_s is None:
            self.hud.comment = comment
            self.hud.comment_s = [f.render(l, True, (148,163,184)) for l in wrap(f, f'"{comment}"', d.panel_w - 24)]
        x = d.panel_x + 12
        screen.blit(self.hud.title, (x, d.panel_y + 12))
        screen.blit(self.hud.score_s, (x, d.panel_y + 52))
        screen.blit(self.hud.level_s, (x, d.panel_y + 76))
        screen.blit(self.hud.lines_s, (x, d.panel_y + 100))
        screen.blit(f.render("Next", True, MUTED), (self.next_pos[0], self.next_pos[1] - 26))
        screen.blit(f.render("Hold", True, MUTED), (self.held_pos[0], self.held_pos[1] - 26))
        if state.status is not Status.IDLE:
            self.draw_preview(screen, state.next, self.next_pos)
        self.draw_preview(screen, state.held, self.held_pos, dim=not state.can_hold)
        y = d.panel_y + 250
        screen.blit(f.render("Coach", True, MUTED), (x, y)); y += 24
        for s in self.hud.comment_s:
            screen.blit(s, (x, y)); y += 20
        if state.frozen:
            screen.blit(f.render("FROZEN (F to release)", True, FROZEN_COLOR), (x, d.panel_y + 420))

    def draw_banner(self, screen: pygame.Surface, lines):
        d = self.dims
        veil = pygame.Surface((d.board_w, d.board_h), pygame.SRCALPHA)
        veil.fill((2,6,23,220))
        screen.blit(veil, (d.board_x, d.board_y))
        y = d.board_y + d.board_h // 3
        for i, text in enumerate(lines):
            font = self.big_font if i == 0 else self.font
            msg = font.render(text, True, TEXT if i else ACCENT)
            screen.blit(msg, msg.get_rect(center=(d.board_x + d.board_w // 2, y)))
            y += 34 if i == 0 else 24
        return y

    def draw(self, screen: pygame.Surface, state: GameState, comment: str, overlay=None):
        """Full frame from a read-only state snapshot."""
        screen.blit(self.bg, (0,0))
        self.sync_board(state.grid)
        screen.blit(self.board_surface, (self.dims.board_x, self.dims.board_y))
        if state.current is not None:
            if not state.frozen:
                self.draw_ghost(screen, state.grid, state.current)
            self.draw_piece(screen, state.current, state.frozen)
        self.draw_panel_hud(screen, state, comment)
        if state.status is Status.IDLE:
            y = self.draw_banner(screen, ["CALIBRATION", "Enter to boot", "Up/Down select, Left/Right adjust"])
            if overlay is not None:
                overlay.draw(screen, self.font, state.config, self.dims.board_x + 16, y + 12)
        elif state.status is Status.PAUSED:
            self.draw_banner(screen, ["PAUSED", "P to resume"])
        elif state.status is Status.GAME_OVER:
            self.draw_banner(screen, ["SESSION ENDED", f"Final score {state.score:,}",
                                      f"Lines cleared {state.lines}", "R to restart, Esc to calibrate"])
