# othello3d_pygame_gl.py
# Orbit-camera 3D view of the lattice: arrows/A/D move the cursor, Enter plays.
import argparse
import logging
import math

import pygame
from pygame.locals import DOUBLEBUF, OPENGL

from OpenGL.GL import *
from OpenGL.GLU import *

from othello3d import (Othello3D, BLACK, WHITE, EMPTY, NAMES,
                       try_move, winner, status_line)

log = logging.getLogger(__name__)

SPACING = 2.5
STONE_RADIUS = 0.8
STONE_GL = {BLACK: (0.05, 0.05, 0.05), WHITE: (0.95, 0.95, 0.95)}
CELL_WIRE = (0.0, 0.0, 0.0, 0.12)
ORIGIN_WIRE = (1.0, 0.0, 0.0, 1.0)

# camera defaults
DEFAULT_YAW, DEFAULT_PITCH = 45.0, 30.0

# compass widget (top-left)
COMP_SIZE = 100
COMP_MARGIN = 10


def default_radius(n):
    return n * SPACING * 2.2

def world_pos(n, x, y, z):
    half = (n-1)*SPACING/2.0
    return (-half + x*SPACING, -half + y*SPACING, -half + z*SPACING)

def next_in_cycle(moves, cur):
    """Valid move after cur in scan order (wraps), or the first one; None if no moves."""
    if not moves:
        return None
    if cur in moves:
        return moves[(moves.index(cur) + 1) % len(moves)]
    return moves[0]


def gl_init(width, height, fov=45.0):
    glViewport(0, 0, width, height)
    glEnable(GL_DEPTH_TEST)
    glClearColor(0.94, 0.94, 0.94, 1.0)
    glMatrixMode(GL_PROJECTION)
    glLoadIdentity()
    gluPerspective(fov, width/float(height), 0.1, 1000.0)
    glMatrixMode(GL_MODELVIEW)
    glEnable(GL_BLEND)
    glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)

    # ambient + one directional light, stones take glColor as material
    glLightModelfv(GL_LIGHT_MODEL_AMBIENT, (0.38, 0.38, 0.38, 1.0))
    glLightfv(GL_LIGHT0, GL_DIFFUSE, (1.0, 1.0, 1.0, 1.0))
    glEnable(GL_LIGHT0)
    glEnable(GL_COLOR_MATERIAL)
    glColorMaterial(GL_FRONT_AND_BACK, GL_AMBIENT_AND_DIFFUSE)
    glEnable(GL_NORMALIZE)


def draw_wire_box(size=1.0):
    s = size/2.0
    glBegin(GL_LINES)
    for a,b in [
        ((-s,-s,-s),(+s,-s,-s)), ((+s,-s,-s),(+s,+s,-s)), ((+s,+s,-s),(-s,+s,-s)), ((-s,+s,-s),(-s,-s,-s)),
        ((-s,-s,+s),(+s,-s,+s)), ((+s,-s,+s),(+s,+s,+s)), ((+s,+s,+s),(-s,+s,+s)), ((-s,+s,+s),(-s,-s,+s)),
        ((-s,-s,-s),(-s,-s,+s)), ((+s,-s,-s),(+s,-s,+s)), ((+s,+s,-s),(+s,+s,+s)), ((-s,+s,-s),(-s,+s,+s)),
    ]:
        glVertex3f(*a); glVertex3f(*b)
    glEnd()

def draw_lattice(n):
    """Faint wire box per cell; (0,0,0) drawn solid red so the axes can be read off."""
    glDisable(GL_LIGHTING)
    glDepthMask(GL_FALSE)
    glLineWidth(1.0)
    glColor4f(*CELL_WIRE)
    for x in range(n):
        for y in range(n):
            for z in range(n):
                if x == y == z == 0:
                    continue
                glPushMatrix(); glTranslatef(*world_pos(n, x, y, z))
                draw_wire_box(SPACING * 0.8)
                glPopMatrix()
    glColor4f(*ORIGIN_WIRE)
    glLineWidth(2.0)
    glPushMatrix(); glTranslatef(*world_pos(n, 0, 0, 0))
    draw_wire_box(SPACING * 0.8)
    glPopMatrix()
    glDepthMask(GL_TRUE)

def draw_sphere(quad, color, alpha=1.0):
    glEnable(GL_LIGHTING)
    glColor4f(*color, alpha)
    gluSphere(quad, STONE_RADIUS, 16, 16)
    glDisable(GL_LIGHTING)

# right-hand-rule compass in its own mini-viewport
def draw_compass(x, y, size, yaw, pitch):
    glViewport(x, y, size, size)
    glScissor(x, y, size, size)
    glEnable(GL_SCISSOR_TEST)
    glClear(GL_DEPTH_BUFFER_BIT)
    glDisable(GL_LIGHTING)

    glMatrixMode(GL_PROJECTION); glLoadIdentity()
    gluPerspective(30.0, 1.0, 0.1, 100.0)
    glMatrixMode(GL_MODELVIEW); glLoadIdentity()
    # lock camera to look at origin but rotate compass opposite of world yaw/pitch
    gluLookAt(0,0,6, 0,0,0, 0,1,0)
    glRotatef(-pitch, 1,0,0)
    glRotatef(-yaw,   0,1,0)

    glLineWidth(3.0)
    glBegin(GL_LINES)
    # X axis (red)
    glColor3f(1,0.2,0.2); glVertex3f(0,0,0); glVertex3f(1.2,0,0)
    # Y axis (green)
    glColor3f(0.2,0.8,0.2); glVertex3f(0,0,0); glVertex3f(0,1.2,0)
    # Z axis (blue)
    glColor3f(0.3,0.5,1); glVertex3f(0,0,0); glVertex3f(0,0,1.2)
    glEnd()

    glDisable(GL_SCISSOR_TEST)


class GLText:
    """Cache text → OpenGL texture, draw in screen-space (orthographic)."""
    def __init__(self, font_name="consolas,menlo,monospace", pt=16, color=(30,30,35)):
        pygame.font.init()
        self.font = pygame.font.SysFont(font_name, pt)
        self.default_color = color
        self.cache = {}  # (text, color_tuple) -> (tex_id, w, h)

    def _upload_surface(self, surf):
        w, h = surf.get_size()
        surf = surf.convert_alpha()
        px = pygame.image.tostring(surf, "RGBA", True)
        tex_id = glGenTextures(1)
        glBindTexture(GL_TEXTURE_2D, tex_id)
        glPixelStorei(GL_UNPACK_ALIGNMENT, 1)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_NEAREST)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_NEAREST)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_S, GL_CLAMP_TO_EDGE)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_T, GL_CLAMP_TO_EDGE)
        glTexImage2D(GL_TEXTURE_2D, 0, GL_RGBA, w, h, 0, GL_RGBA, GL_UNSIGNED_BYTE, px)
        glBindTexture(GL_TEXTURE_2D, 0)
        return tex_id, w, h

    def get(self, text: str, color=None):
        color = color or self.default_color  # pygame expects 0–255 ints
        key = (text, color)
        if key in self.cache:
            return self.cache[key]
        # status text changes every move; keep the cache from growing without bound
        if len(self.cache) > 256:
            glDeleteTextures([t[0] for t in self.cache.values()])
            self.cache.clear()
        surf = self.font.render(text, True, color)
        tex = self._upload_surface(surf)
        self.cache[key] = tex
        return tex

    def draw(self, text: str, x: int, y: int, window_w: int, window_h: int, color=None):
        tex_id, w, h = self.get(text, color=color)
        glPushAttrib(GL_ENABLE_BIT | GL_COLOR_BUFFER_BIT | GL_TEXTURE_BIT | GL_DEPTH_BUFFER_BIT)
        glDisable(GL_DEPTH_TEST)
        glDisable(GL_LIGHTING)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glEnable(GL_TEXTURE_2D)
        glColor4f(1, 1, 1, 1)

        glMatrixMode(GL_PROJECTION); glPushMatrix(); glLoadIdentity()
        glOrtho(0, window_w, window_h, 0, -1, 1)
        glMatrixMode(GL_MODELVIEW); glPushMatrix(); glLoadIdentity()

        glBindTexture(GL_TEXTURE_2D, tex_id)
        glBegin(GL_QUADS)
        glTexCoord2f(0, 1); glVertex2f(x,   y)
        glTexCoord2f(1, 1); glVertex2f(x+w, y)
        glTexCoord2f(1, 0); glVertex2f(x+w, y+h)
        glTexCoord2f(0, 0); glVertex2f(x,   y+h)
        glEnd()
        glBindTexture(GL_TEXTURE_2D, 0)

        glMatrixMode(GL_MODELVIEW); glPopMatrix()
        glMatrixMode(GL_PROJECTION); glPopMatrix()
        glPopAttrib()
        return w, h


def main(argv=None):
    ap = argparse.ArgumentParser(description="3D Othello, orbit view")
    ap.add_argument("--size", type=int, default=8, help="lattice edge length (>= 2)")
    ap.add_argument("--verbose", action="store_true", help="log engine moves")
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    n = args.size
    pygame.init()
    W, H = 1280, 900
    pygame.display.set_mode((W, H), DOUBLEBUF | OPENGL)
    pygame.display.set_caption(f"3D Othello {n}x{n}x{n}")

    gl_init(W, H)
    game = Othello3D(size=n)
    text = GLText(pt=16)
    quad = gluNewQuadric()

    # camera
    DEFAULT_RADIUS = default_radius(n)
    yaw, pitch, radius = DEFAULT_YAW, DEFAULT_PITCH, DEFAULT_RADIUS
    dragging = False
    last_mouse = (0,0)

    # cursor starts on the first valid move
    sel = next_in_cycle(game.valid_moves(game.current_player), None) or (0, 0, 0)
    message = ""

    clock = pygame.time.Clock()

    def setup_camera():
        glViewport(0, 0, W, H)
        glMatrixMode(GL_PROJECTION); glLoadIdentity()
        gluPerspective(45.0, W/float(H), 0.1, 1000.0)
        glMatrixMode(GL_MODELVIEW); glLoadIdentity()
        eye_x = radius * math.cos(math.radians(pitch)) * math.cos(math.radians(yaw))
        eye_y = radius * math.sin(math.radians(pitch))
        eye_z = radius * math.cos(math.radians(pitch)) * math.sin(math.radians(yaw))
        gluLookAt(eye_x, eye_y, eye_z, 0, 0, 0, 0, 1, 0)
        glLightfv(GL_LIGHT0, GL_POSITION, (1.0, 1.0, 1.0, 0.0))

    def draw_frame():
        glViewport(0,0,W,H)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        setup_camera()
        glEnable(GL_DEPTH_TEST)

        draw_lattice(n)

        # opaque stones first, translucent preview last
        for x, y, z, v in game.stones():
            glPushMatrix(); glTranslatef(*world_pos(n, x, y, z))
            draw_sphere(quad, STONE_GL[v])
            glPopMatrix()

        done = winner(game) is not None
        if not done:
            glPushMatrix(); glTranslatef(*world_pos(n, *sel))
            if game.cell(*sel) == EMPTY and game.can_flip(*sel, game.current_player):
                draw_sphere(quad, STONE_GL[game.current_player], alpha=0.5)
            glColor3f(0.1, 0.35, 0.95); glLineWidth(2.0)
            draw_wire_box(SPACING * 0.9)
            glPopMatrix()

        draw_compass(COMP_MARGIN, H - (COMP_MARGIN + COMP_SIZE), COMP_SIZE, yaw, pitch)

        glViewport(0, 0, W, H)
        help_lines = [
            "←/→: x-/+   |   ↑/↓: y+/-   |   A/D: z+/-   |   Tab: next valid move",
            "Enter: place   U: undo   Y: redo   R: reset   ESC: quit",
        ]
        margin, y = 30, 20
        for line in help_lines:
            w_txt = text.get(line)[1]
            text.draw(line, W - w_txt - margin, y, W, H)
            y += 20

        # bottom-left HUD
        hud = [
            status_line(game),
            f"Cursor (x,y,z) = ({sel[0]},{sel[1]},{sel[2]})   "
            f"Valid moves: {len(game.valid_moves(game.current_player))}   "
            f"History {game.history_pointer}/{game.history_length - 1}",
            message,
        ]
        y = H - 30 - 20*len(hud)
        for line in hud:
            if line:
                text.draw(line, 30, y, W, H)
            y += 20

        pygame.display.flip()

    running = True
    while running:
        clock.tick(60)
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
            elif e.type == pygame.MOUSEBUTTONDOWN:
                mx, my = e.pos
                if COMP_MARGIN <= mx <= COMP_MARGIN + COMP_SIZE and COMP_MARGIN <= my <= COMP_MARGIN + COMP_SIZE:
                    # reset camera
                    yaw, pitch, radius = DEFAULT_YAW, DEFAULT_PITCH, DEFAULT_RADIUS
                    dragging = False
                    continue

                if e.button == 1:
                    dragging = True; last_mouse = e.pos
                elif e.button == 4:
                    radius = max(n * SPACING, radius - 1.0)
                elif e.button == 5:
                    radius = min(n * SPACING * 6, radius + 1.0)
            elif e.type == pygame.MOUSEBUTTONUP:
                if e.button == 1: dragging = False
            elif e.type == pygame.MOUSEMOTION and dragging:
                mx,my = e.pos
                dx = mx - last_mouse[0]; dy = my - last_mouse[1]
                yaw = (yaw + dx * 0.4) % 360
                pitch = max(-85.0, min(85.0, pitch - dy * 0.3))
                last_mouse = e.pos
            elif e.type == pygame.KEYDOWN:
                x, y, z = sel
                if e.key == pygame.K_ESCAPE:
                    running = False
                elif e.key == pygame.K_r:
                    game = Othello3D(size=n); message = ""
                    sel = next_in_cycle(game.valid_moves(game.current_player), None) or (0, 0, 0)
                    log.info("reset %dx%dx%d board", n, n, n)
                elif e.key == pygame.K_u:
                    message = "Undo move." if game.undo() else "Nothing to undo."
                elif e.key == pygame.K_y:
                    message = "Redo move." if game.redo() else "Nothing to redo."
                elif e.key == pygame.K_TAB:
                    nxt = next_in_cycle(game.valid_moves(game.current_player), sel)
                    if nxt is None:
                        message = f"{NAMES[game.current_player].capitalize()} has no valid moves."
                    else:
                        sel = nxt
                elif e.key == pygame.K_LEFT:
                    sel = ((x - 1) % n, y, z)
                elif e.key == pygame.K_RIGHT:
                    sel = ((x + 1) % n, y, z)
                elif e.key == pygame.K_UP:
                    sel = (x, (y + 1) % n, z)
                elif e.key == pygame.K_DOWN:
                    sel = (x, (y - 1) % n, z)
                elif e.key == pygame.K_a:
                    sel = (x, y, (z + 1) % n)
                elif e.key == pygame.K_d:
                    sel = (x, y, (z - 1) % n)
                elif e.key == pygame.K_RETURN and winner(game) is None:
                    ok, message = try_move(game, *sel)
                    if ok:
                        w = winner(game)
                        if w is not None:
                            log.info("game over: %s", "draw" if w == EMPTY else NAMES[w] + " wins")

        draw_frame()

    gluDeleteQuadric(quad)
    pygame.quit()


if __name__ == "__main__":
    main()
