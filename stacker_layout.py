# stacker_layout.py
from dataclasses import dataclass

from stacker_config import CONFIG, FieldConfig

PANEL_MIN_H = 600
MAX_BOARD_H = 840


@dataclass
class Dims:
    cols: int
    rows: int
    cell: int
    margin: int
    panel_w: int
    board_w: int
    board_h: int
    total_w: int
    total_h: int
    board_x: int
    board_y: int
    panel_x: int
    panel_y: int


def compute_dims(config: FieldConfig) -> Dims:
    # tall fields shrink the cell so the window still fits
    cell = min(int(CONFIG["CELL_SIZE"]), MAX_BOARD_H // config.height)
    margin = 16
    panel_w = 260

    board_w = config.width * cell
    board_h = config.height * cell

    total_w = margin + board_w + margin + panel_w + margin
    total_h = margin + max(board_h, PANEL_MIN_H) + margin

    board_x = margin
    board_y = margin
    panel_x = board_x + board_w + margin
    panel_y = margin

    return Dims(
        cols=config.width, rows=config.height,
        cell=cell, margin=margin, panel_w=panel_w,
        board_w=board_w, board_h=board_h,
        total_w=total_w, total_h=total_h,
        board_x=board_x, board_y=board_y,
        panel_x=panel_x, panel_y=panel_y
    )
