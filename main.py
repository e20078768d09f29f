import argparse
import logging
import sys

import pygame

from stacker_coach import Coach
from stacker_config import DEFAULT_HEIGHT, DEFAULT_SPEED_MS, DEFAULT_WIDTH, FieldConfig
from stacker_game import Game
from stacker_input import ShiftRepeat, SoftDropRepeat, intents_for
from stacker_layout import compute_dims
from stacker_overlay import Overlay
from stacker_render import RenderAssets
from stacker_rng import PieceRandom
from stacker_session import Status

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Neon Stacker, a falling-block puzzle with a coach")
    p.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="columns (6-20)")
    p.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="rows (10-40)")
    p.add_argument("--speed", type=int, default=DEFAULT_SPEED_MS, help="base gravity interval in ms (100-1000)")
    p.add_argument("--seed", type=int, default=None, help="fix the piece sequence")
    p.add_argument("--no-coach", action="store_true", help="skip commentary requests")
    p.add_argument("--log-level", default="WARNING")
    return p.parse_args(argv)


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except (TypeError, pygame.error):
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP,
                              pygame.MOUSEBUTTONDOWN, pygame.MOUSEWHEEL])

    game = Game(FieldConfig(args.width, args.height, args.speed),
                rng=PieceRandom(args.seed), coach=Coach(enabled=not args.no_coach))
    dims = compute_dims(game.state.config)
    screen = recreate_window(dims)
    pygame.display.set_caption("Neon Stacker")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 36)

    render = RenderAssets(dims, font, big_font)
    clock = pygame.time.Clock()
    shift = ShiftRepeat()
    soft_drop = SoftDropRepeat()
    overlay = Overlay()

    def refresh_assets_if_field_changed():
        nonlocal dims, screen, render
        new_dims = compute_dims(game.state.config)
        if new_dims != dims:
            logger.debug("field resized to %dx%d", new_dims.cols, new_dims.rows)
            dims = new_dims
            screen = recreate_window(dims)
            render = RenderAssets(dims, font, big_font)

    try:
        while True:
            dt = clock.tick(60)

            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    return 0
                if e.type == pygame.KEYDOWN and game.state.status is Status.IDLE:
                    if overlay.handle(e, game): continue
                for intent in intents_for(e):
                    game.dispatch(intent)

            keys = pygame.key.get_pressed()
            ctrl = pygame.key.get_mods() & pygame.KMOD_CTRL
            step = shift.update(dt, keys[pygame.K_LEFT] and not ctrl, keys[pygame.K_RIGHT] and not ctrl)
            if step is not None:
                game.dispatch(step)
            drop = soft_drop.update(dt, keys[pygame.K_DOWN] and game.state.status is not Status.IDLE)
            if drop is not None:
                game.dispatch(drop)

            game.tick()
            refresh_assets_if_field_changed()

            render.draw(screen, game.state, game.comment, overlay)
            pygame.display.flip()
    finally:
        game.close()
        pygame.quit()


if __name__ == '__main__':
    sys.exit(main())
