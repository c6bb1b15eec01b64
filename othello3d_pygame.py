# othello3d_pygame.py
# Small-multiples viewer: one mini-board per z-layer, click a cell to play.
import argparse
import logging
import math

import pygame

from othello3d import (Othello3D, BLACK, WHITE, EMPTY, NAMES,
                       try_move, winner, status_line)

log = logging.getLogger(__name__)

# Colors
BG = (18, 18, 20)
GRID = (120, 120, 130)
BOARD = (34, 96, 60)
TEXT = (210, 210, 220)
HL_CROSS = (90, 160, 250)
HINT = (240, 200, 80)
STONE_CLR = {BLACK: (15, 15, 15), WHITE: (240, 240, 240)}
STONE_EDGE = (90, 90, 95)


class SliceLayout:
    """Pixel geometry of the z-layer grid; no pygame state, so it can be tested headless."""
    def __init__(self, size, cell=28, pad=24, margin=28, status_h=70):
        self.n = size
        self.cell = cell
        self.pad = pad
        self.margin = margin
        self.status_h = status_h
        self.board_px = size * cell
        self.cols = math.ceil(math.sqrt(size))
        self.rows = math.ceil(size / self.cols)

    @property
    def surface_size(self):
        w = self.margin*2 + self.cols*self.board_px + (self.cols-1)*self.pad
        h = self.margin*2 + self.rows*self.board_px + (self.rows-1)*self.pad + self.status_h
        return w, h

    def board_origin(self, z):
        row, col = divmod(z, self.cols)
        ox = self.margin + col * (self.board_px + self.pad)
        oy = self.margin + row * (self.board_px + self.pad)
        return ox, oy

    def cell_rect(self, x, y, z):
        ox, oy = self.board_origin(z)
        return pygame.Rect(ox + x*self.cell, oy + y*self.cell, self.cell, self.cell)

    def locate(self, mx, my):
        """(x, y, z) under the mouse or None."""
        for z in range(self.n):
            ox, oy = self.board_origin(z)
            if ox <= mx < ox + self.board_px and oy <= my < oy + self.board_px:
                return int((mx - ox) // self.cell), int((my - oy) // self.cell), z
        return None


def draw_stone(screen, rect, player, alpha=255):
    r = int(rect.width * 0.38)
    if alpha >= 255:
        pygame.draw.circle(screen, STONE_CLR[player], rect.center, r)
        pygame.draw.circle(screen, STONE_EDGE, rect.center, r, 1)
        return
    # translucent preview
    surf = pygame.Surface(rect.size, pygame.SRCALPHA)
    pygame.draw.circle(surf, STONE_CLR[player] + (alpha,), (rect.width // 2, rect.height // 2), r)
    screen.blit(surf, rect.topleft)


def main(argv=None):
    ap = argparse.ArgumentParser(description="3D Othello, one panel per z-layer")
    ap.add_argument("--size", type=int, default=8, help="lattice edge length (>= 2)")
    ap.add_argument("--cell", type=int, default=28, help="pixel size of each cell")
    ap.add_argument("--verbose", action="store_true", help="log engine moves")
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    n = args.size
    layout = SliceLayout(n, cell=args.cell)
    stroke = 1

    pygame.init()
    pygame.display.set_caption(f"3D Othello {n}x{n}x{n} (z-layers)")
    font = pygame.font.SysFont("consolas,menlo,monospace", 16)
    win_w, win_h = layout.surface_size
    screen = pygame.display.set_mode((win_w, win_h))

    game = Othello3D(size=n)
    message = ""
    running = True
    hover = None  # (x,y,z) under mouse or None

    def draw():
        screen.fill(BG)
        moves = set(game.valid_moves(game.current_player))
        done = winner(game) is not None

        for z in range(n):
            ox, oy = layout.board_origin(z)
            pygame.draw.rect(screen, BOARD, (ox, oy, layout.board_px, layout.board_px))

            # crosshair of the hovered (x,y) across all layers
            if hover is not None and not done:
                xh, yh, _ = hover
                pygame.draw.rect(screen, HL_CROSS, (ox + xh*layout.cell, oy, layout.cell, layout.board_px), 1)
                pygame.draw.rect(screen, HL_CROSS, (ox, oy + yh*layout.cell, layout.board_px, layout.cell), 1)

            # grid
            for g in range(n+1):
                y0 = oy + g*layout.cell
                x0 = ox + g*layout.cell
                pygame.draw.line(screen, GRID, (ox, y0), (ox + layout.board_px, y0), stroke)
                pygame.draw.line(screen, GRID, (x0, oy), (x0, oy + layout.board_px), stroke)

            lbl = font.render(f"z={z}", True, TEXT)
            screen.blit(lbl, (ox, oy - 20))

            for y in range(n):
                for x in range(n):
                    rect = layout.cell_rect(x, y, z)
                    v = game.cell(x, y, z)
                    if v != EMPTY:
                        draw_stone(screen, rect, v)
                    elif (x, y, z) == hover and hover in moves:
                        draw_stone(screen, rect, game.current_player, alpha=110)
                    elif (x, y, z) in moves:
                        pygame.draw.circle(screen, HINT, rect.center, max(2, layout.cell // 8))

        # status bar
        status_y = win_h - layout.status_h + 6
        lines = [
            status_line(game),
            f"History {game.history_pointer}/{game.history_length - 1} | U=Undo  Y=Redo  R=Reset  ESC=Quit",
            message,
        ]
        for i, line in enumerate(lines):
            if line:
                screen.blit(font.render(line, True, TEXT), (layout.margin, status_y + i*20))

        pygame.display.flip()

    def after_change():
        w = winner(game)
        if w is not None:
            log.info("game over: %s", "draw" if w == EMPTY else NAMES[w] + " wins")

    clock = pygame.time.Clock()

    while running:
        clock.tick(60)
        mx, my = pygame.mouse.get_pos()
        hover = layout.locate(mx, my)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False

                elif event.key == pygame.K_r:
                    game = Othello3D(size=n)
                    message = ""
                    log.info("reset %dx%dx%d board", n, n, n)

                elif event.key == pygame.K_u:
                    message = "Undo move." if game.undo() else "Nothing to undo."

                elif event.key == pygame.K_y:
                    message = "Redo move." if game.redo() else "Nothing to redo."

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                target = layout.locate(mx, my)
                if target is not None and winner(game) is None:
                    ok, message = try_move(game, *target)
                    if ok:
                        after_change()

        draw()

    pygame.quit()

if __name__ == "__main__":
    main()
