# othello3d.py
# Othello/Reversi on an n x n x n lattice.
# Flat row-major cells + precomputed 26-direction table + snapshot undo/redo.

import logging
from itertools import product

log = logging.getLogger(__name__)

EMPTY, BLACK, WHITE = 0, 1, 2
NAMES = {EMPTY: "empty", BLACK: "black", WHITE: "white"}
GLYPHS = {EMPTY: '.', BLACK: 'X', WHITE: 'O'}


# used for translating between flat indices and (x, y, z)
def strides(n, d=3):
    """Row-major strides so idx = sum(p[i] * s[i])."""
    s = [1]*d
    for i in range(d-2, -1, -1):
        s[i] = s[i+1] * n
    return s

def index_of(coord, s):
    return sum(ci*si for ci, si in zip(coord, s))

def coords_of(idx, n, d=3, s=None):
    if s is None: s = strides(n, d)
    out = [0]*d
    for i in range(d):
        out[i], idx = divmod(idx, s[i])
    return tuple(out)

# our capture directions
def gen_directions(d=3):
    """All {-1,0,1}^d \\ {0}: both senses of every axis and diagonal."""
    return tuple(v for v in product((-1, 0, 1), repeat=d) if any(v))

DIRECTIONS = gen_directions(3)  # len = 3^3 - 1 = 26


def opponent(player):
    return WHITE if player == BLACK else BLACK


class History:
    """
    Linear undo/redo stack of immutable board snapshots.
    ptr is the snapshot matching the live board; a new save drops everything after it.
    """
    def __init__(self):
        self.stack = []
        self.ptr = -1

    def __len__(self):
        return len(self.stack)

    def save(self, snap):
        del self.stack[self.ptr + 1:]
        self.stack.append(snap)
        self.ptr += 1

    def can_back(self):
        return self.ptr > 0

    def can_forward(self):
        return self.ptr < len(self.stack) - 1

    def back(self):
        if not self.can_back():
            return None
        self.ptr -= 1
        return self.stack[self.ptr]

    def forward(self):
        if not self.can_forward():
            return None
        self.ptr += 1
        return self.stack[self.ptr]


class Othello3D:
    """
    Othello on a size^3 lattice.
    cells: flat list indexed by index_of((x, y, z)), values EMPTY/BLACK/WHITE.
    current_player only changes through switch_player() and undo/redo.
    """
    def __init__(self, size=8):
        assert size >= 2, "need room for the 2x2x2 seed cube"
        self.size = size
        self.N = size**3
        self.strides = strides(size)

        # state
        self.cells = [EMPTY] * self.N
        self.current_player = BLACK
        self._seed()

        # history for undo/redo, starts with the seeded board
        self.history = History()
        self.save_state()

    def _seed(self):
        mid = self.size // 2
        for x, y, z in product(range(mid-1, mid+1), repeat=3):
            self.cells[self.idx((x, y, z))] = BLACK if (x + y + z) % 2 == 0 else WHITE

    # -------- queries --------
    def on_board(self, x, y, z):
        n = self.size
        return 0 <= x < n and 0 <= y < n and 0 <= z < n

    def opponent(self, player):
        return opponent(player)

    def cell(self, x, y, z):
        return self.cells[self.idx((x, y, z))]

    def stones(self):
        """Yield (x, y, z, value) for every occupied cell, in index order."""
        for i, v in enumerate(self.cells):
            if v != EMPTY:
                yield coords_of(i, self.size, 3, self.strides) + (v,)

    def _run(self, x, y, z, dx, dy, dz, player):
        """Opponent stones walked from (x,y,z) along one direction; [] unless capped by player."""
        opp = opponent(player)
        run = []
        nx, ny, nz = x + dx, y + dy, z + dz
        while self.on_board(nx, ny, nz) and self.cells[self.idx((nx, ny, nz))] == opp:
            run.append((nx, ny, nz))
            nx += dx; ny += dy; nz += dz
        if run and self.on_board(nx, ny, nz) and self.cells[self.idx((nx, ny, nz))] == player:
            return run
        return []

    def flips(self, x, y, z, player):
        """Every stone converted if player plays (x,y,z). Empty list means illegal."""
        if not self.on_board(x, y, z) or self.cell(x, y, z) != EMPTY:
            return []
        out = []
        for dx, dy, dz in DIRECTIONS:
            out.extend(self._run(x, y, z, dx, dy, dz, player))
        return out

    def can_flip(self, x, y, z, player):
        if not self.on_board(x, y, z) or self.cell(x, y, z) != EMPTY:
            return False
        return any(self._run(x, y, z, dx, dy, dz, player) for dx, dy, dz in DIRECTIONS)

    def valid_moves(self, player):
        """Legal (x, y, z) for player, x-major scan order, one entry per cell."""
        moves = []
        for i, v in enumerate(self.cells):
            if v != EMPTY:
                continue
            c = coords_of(i, self.size, 3, self.strides)
            if self.can_flip(*c, player):
                moves.append(c)
        return moves

    def has_valid_move(self, player):
        for i, v in enumerate(self.cells):
            if v == EMPTY and self.can_flip(*coords_of(i, self.size, 3, self.strides), player):
                return True
        return False

    def count_stones(self):
        return {"black": self.cells.count(BLACK), "white": self.cells.count(WHITE)}

    @property
    def history_pointer(self):
        return self.history.ptr

    @property
    def history_length(self):
        return len(self.history)

    @property
    def can_undo(self):
        return self.history.can_back()

    @property
    def can_redo(self):
        return self.history.can_forward()

    # -------- moves --------
    def make_move(self, x, y, z, player):
        """Place player's stone and convert every sandwiched run. False leaves the board untouched."""
        flipped = self.flips(x, y, z, player)
        if not flipped:
            return False
        self.cells[self.idx((x, y, z))] = player
        for c in flipped:
            self.cells[self.idx(c)] = player
        self.save_state()
        log.debug("%s plays (%d,%d,%d), flips %d", NAMES[player], x, y, z, len(flipped))
        return True

    def switch_player(self):
        self.current_player = opponent(self.current_player)

    # -------- undo / redo --------
    def save_state(self):
        self.history.save(tuple(self.cells))

    def _restore(self, snap):
        self.cells = list(snap)
        # one ply between consecutive snapshots, so the side to move flips too
        self.switch_player()

    def undo(self):
        snap = self.history.back()
        if snap is None:
            return False
        self._restore(snap)
        log.debug("undo -> %d/%d", self.history.ptr, len(self.history) - 1)
        return True

    def redo(self):
        snap = self.history.forward()
        if snap is None:
            return False
        self._restore(snap)
        log.debug("redo -> %d/%d", self.history.ptr, len(self.history) - 1)
        return True

    # -------- helpers --------
    def idx(self, coord):
        return index_of(coord, self.strides)

    def coord(self, idx):
        return coords_of(idx, self.size, 3, self.strides)

    def pretty(self):
        """
        Debug dump: one block per z-layer, rows are y, columns are x.
        X = black, O = white, . = empty.
        """
        n = self.size
        blocks = []
        for z in range(n):
            rows = [f"z={z}"]
            for y in range(n):
                rows.append(' '.join(GLYPHS[self.cell(x, y, z)] for x in range(n)))
            blocks.append('\n'.join(rows))
        return '\n\n'.join(blocks)


# -------- caller-side policy (what a front-end does around the engine) --------
def try_move(game, x, y, z):
    """Play (x,y,z) for the side to move. Returns (ok, message for the player)."""
    if not game.on_board(x, y, z):
        return False, f"({x}, {y}, {z}) is off the board (0-{game.size - 1})."
    if game.cell(x, y, z) != EMPTY:
        return False, f"({x}, {y}, {z}) is already occupied."
    player = game.current_player
    if not game.make_move(x, y, z, player):
        return False, f"Illegal move: ({x}, {y}, {z}) flips nothing."
    game.switch_player()
    return True, ""

def game_over(game):
    return not game.has_valid_move(BLACK) and not game.has_valid_move(WHITE)

def winner(game):
    """None while someone can still move; else BLACK/WHITE, or EMPTY for a draw."""
    if not game_over(game):
        return None
    score = game.count_stones()
    if score["black"] > score["white"]:
        return BLACK
    if score["white"] > score["black"]:
        return WHITE
    return EMPTY

def status_line(game):
    score = game.count_stones()
    w = winner(game)
    if w is None:
        head = f"Turn: {NAMES[game.current_player]}"
        if not game.has_valid_move(game.current_player):
            head += " (no valid moves)"
    elif w == EMPTY:
        head = "Game over: draw"
    else:
        head = f"Game over: {NAMES[w]} wins"
    return f"{head} | Black {score['black']} - White {score['white']}"


# -------- small self-test --------
if __name__ == "__main__":
    g = Othello3D(size=8)
    assert g.count_stones() == {"black": 4, "white": 4}

    # (2,3,3) -> (3,3,3) white -> (4,3,3) black
    assert g.flips(2, 3, 3, BLACK) == [(3, 3, 3)]
    ok, _ = try_move(g, 2, 3, 3)
    assert ok and g.current_player == WHITE
    assert g.count_stones() == {"black": 6, "white": 3}

    assert g.undo() and g.current_player == BLACK
    assert g.redo() and g.cell(3, 3, 3) == BLACK
    print(g.pretty())
    print(status_line(g))
    print("All good.")
