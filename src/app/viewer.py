# src/app/viewer.py
#!/usr/bin/env python3
"""
Circuit Tracer Viewer — step through the search, then browse the best traces

- Keyboard:
    [1]/[2]/[3]  -> switch board
    [K]/[U]      -> select storage (stacK / qUeue)
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset
    [+]/[-]      -> steps/sec
    [LEFT]/[RIGHT] -> previous / next best trace (after the search)
    [Q]/[ESC]    -> quit

Storage:
- ENV: TRACER_STORAGE=stack|queue
- CLI: python -m src.app.tracer (-s | -q) -g BOARD
"""

# --- bootstrap import path so `from src...` works when run as a script ---
import sys, time
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# -------------------------------------------------------------------------

from typing import List, Tuple, Optional, Dict
import pygame

from src.core.board_loader import load_board
from src.core.explorer import Explorer
from src.core.grid import Grid
from src.core.storage import Discipline, discipline_from_env
from src.core.types import Cell, CellKind, InvalidFileFormatError


# ---------- Config ----------
BOARD_DIR = _REPO_ROOT / "boards"
BOARD_FILES = {
    "grid1": BOARD_DIR / "grid1.dat",
    "grid2": BOARD_DIR / "grid2.dat",
    "grid3": BOARD_DIR / "grid3.dat",
}
PANEL_W = 420            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 40
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
OPEN_GRAY   = (200,200,200)
BLOCK_DARK  = ( 60, 60, 66)
TRACE_AMBER = (255,170, 40)
BEST_MINT   = (  0,255,200)
NEON_CYAN_A = (0,150,255,110)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

CELL_COLORS = {
    CellKind.OPEN:    OPEN_GRAY,
    CellKind.BLOCKED: BLOCK_DARK,
    CellKind.TRACE:   TRACE_AMBER,
    CellKind.START:   BLUE,
    CellKind.END:     RED,
}

# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle

        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()

# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, discipline: Optional[Discipline] = None,
                 board_path: Optional[Path] = None):
        pygame.init()

        self.grid = grid
        self.cell_size = self._auto_cell_size(grid)
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        grid_px_w = GRID_MARGIN*2 + grid.num_cols * self.cell_size
        grid_px_h = GRID_MARGIN*2 + grid.num_rows * self.cell_size
        win_w = grid_px_w + PANEL_W
        win_h = max(grid_px_h, 620)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Circuit Tracer")

        self._buttons: list[UIButton] = []
        self._layout(win_w, win_h)

        self.path: List[Cell] = []
        self.pushed: set[Cell] = set()
        self.solution_index = 0

        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = 8
        self.state = "Idle"
        self.selected_board_key = self._infer_board_key(board_path)
        self.discipline = discipline or discipline_from_env()

        self.algo = Explorer(discipline=self.discipline)
        self.algo.init(self.grid)
        self._last_metrics: Dict = {}
        self._refresh_active_states()

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)

        cs_by_w = avail_w // self.grid.num_cols
        cs_by_h = avail_h // self.grid.num_rows
        self.cell_size = int(max(8, min(cs_by_w, cs_by_h)))

        grid_plate_w = self.grid.num_cols * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.grid.num_rows * self.cell_size + 2 * GRID_MARGIN

        left_x = max(0, (win_w - (grid_plate_w + PANEL_W)) // 2)
        top_y  = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN,
                             self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def _infer_board_key(self, board_path: Optional[Path]) -> str:
        if board_path is not None:
            for k, p in BOARD_FILES.items():
                if p.resolve() == Path(board_path).resolve():
                    return k
        return "custom"

    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(14, min(CELL_SIZE_DEFAULT, target_h // grid.num_rows))

    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        t0 = time.time()
        step_interval = 1.0 / max(1, self.steps_per_sec)
        if not hasattr(self, "_last_step_t"):
            self._last_step_t = 0.0
        if t0 - self._last_step_t >= step_interval:
            self._last_step_t = t0
            self._do_step()

    def _do_step(self):
        res = self.algo.step()
        self.pushed = set(res.pushed)
        if res.path is not None:
            self.path = res.path
        if res.status == "done":
            self.state = "Done"; self.running = False
            self.solution_index = 0
            self._show_solution()
        elif res.status == "no_path":
            self.state = "No path"; self.running = False
            self.path = []
        elif res.status in ("running", "idle"):
            self.state = "Running" if self.running else "Paused"
        if res.metrics:
            self._last_metrics = res.metrics
        self._refresh_active_states()

    def _show_solution(self):
        best = self.algo.best_paths or []
        if best:
            self.solution_index %= len(best)
            self.path = list(best[self.solution_index].trace)

    def _cycle_solution(self, dv: int):
        if self.state != "Done":
            return
        self.solution_index += dv
        self._show_solution()

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
                elif e.key == pygame.K_LEFT:
                    self._cycle_solution(-1)
                elif e.key == pygame.K_RIGHT:
                    self._cycle_solution(+1)
                elif e.key == pygame.K_1:
                    self._switch_board("grid1")
                elif e.key == pygame.K_2:
                    self._switch_board("grid2")
                elif e.key == pygame.K_3:
                    self._switch_board("grid3")
                elif e.key == pygame.K_k:
                    self._switch_storage(Discipline.STACK)
                elif e.key == pygame.K_u:
                    self._switch_storage(Discipline.QUEUE)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)

    def _switch_board(self, key: str):
        if key not in BOARD_FILES: return
        try:
            self.grid = load_board(BOARD_FILES[key])
        except (OSError, InvalidFileFormatError) as ex:
            print(f"Failed to load board {key}: {ex}")
            return
        self.selected_board_key = key
        pygame.display.set_caption(f"Circuit Tracer — {key}")
        self.algo.init(self.grid)
        self._layout(*self.screen.get_size())
        self._reset()

    def _switch_storage(self, discipline: Discipline):
        self.discipline = discipline
        self.algo = Explorer(discipline=discipline)
        self.algo.init(self.grid)
        self._reset()

    def _reset_overlays(self):
        self.path = []
        self.pushed = set()
        self.solution_index = 0
        self._last_metrics = {}

    def _reset(self):
        self.running = False
        self.state = "Idle"
        self.algo.reset()
        self._reset_overlays()
        self._refresh_active_states()

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(top[0] + (bot[0]-top[0]) * t),
                int(top[1] + (bot[1]-top[1]) * t),
                int(top[2] + (bot[2]-top[2]) * t),
            )
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _cell_rect(self, cell: Cell) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        row, col = cell
        return pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)

    def _draw_grid(self):
        cs = self.cell_size
        for row in range(self.grid.num_rows):
            for col in range(self.grid.num_cols):
                rect = self._cell_rect((row, col))
                kind = self.grid.occupancy(row, col)
                pygame.draw.rect(self.screen, CELL_COLORS[kind], rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

        for cell in self.pushed:
            s = pygame.Surface((cs, cs), pygame.SRCALPHA); s.fill(NEON_CYAN_A)
            self.screen.blit(s, self._cell_rect(cell).topleft)

        color = BEST_MINT if self.state == "Done" else TRACE_AMBER
        for cell in self.path:
            pygame.draw.rect(self.screen, color, self._cell_rect(cell).inflate(-4, -4),
                             border_radius=4)

        # trace line from start through the path to the end
        if self.path:
            pts = [self._cell_rect(c).center
                   for c in [self.grid.start, *self.path] + ([self.grid.end] if self.state == "Done" else [])]
            if len(pts) >= 2:
                pygame.draw.lines(self.screen, BLACK, False, pts, 3)

        self._draw_badge(self.grid.start, BLUE, "1")
        self._draw_badge(self.grid.end, RED, "2")

    def _draw_badge(self, cell: Cell, color: Tuple[int,int,int], label: str):
        cx, cy = self._cell_rect(cell).center
        pygame.draw.circle(self.screen, color, (cx, cy), max(8, self.cell_size//2 - 3))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=(cx, cy)))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8
        half = (w - 8) // 2

        def add(label, cb, *, rect=None, togglable=False, store_as: str | None = None):
            btn = UIButton(label, rect or pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step); y += h + gap
        add("Reset", self._reset);       y += h + gap

        add("Speed −", lambda: self._bump_speed(-1), rect=pygame.Rect(x, y, half, h))
        add("Speed +", lambda: self._bump_speed(+1), rect=pygame.Rect(x + half + 8, y, half, h))
        y += h + gap

        add("Storage: Stack", lambda: self._switch_storage(Discipline.STACK),
            rect=pygame.Rect(x, y, half, h), togglable=True, store_as="btn_stack")
        add("Storage: Queue", lambda: self._switch_storage(Discipline.QUEUE),
            rect=pygame.Rect(x + half + 8, y, half, h), togglable=True, store_as="btn_queue")
        y += h + gap

        add("◀ Prev trace", lambda: self._cycle_solution(-1), rect=pygame.Rect(x, y, half, h))
        add("Next trace ▶", lambda: self._cycle_solution(+1), rect=pygame.Rect(x + half + 8, y, half, h))
        y += h + gap

        for i, key in enumerate(BOARD_FILES, start=1):
            add(f"Board {i}: {key}", lambda k=key: self._switch_board(k),
                togglable=True, store_as=f"btn_board{i}")
            y += h + gap

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(getattr(self, "running", False))
        discipline = getattr(self, "discipline", None)
        if hasattr(self, "btn_stack"):
            self.btn_stack.set_active(discipline is Discipline.STACK)
        if hasattr(self, "btn_queue"):
            self.btn_queue.set_active(discipline is Discipline.QUEUE)
        selected = getattr(self, "selected_board_key", None)
        for i, key in enumerate(BOARD_FILES, start=1):
            btn = getattr(self, f"btn_board{i}", None)
            if btn is not None:
                btn.set_active(selected == key)

    def _toggle_run(self):
        if self.state in ("Done", "No path"):
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(240, self.steps_per_sec + dv)))

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 230
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line(f"Metrics — {self.state}", big=True, color=ACCENT_GOLD)
        m = self._last_metrics
        line(f"Popped: {m.get('popped', 0)}   Pushed: {m.get('pushed', 0)}")
        line(f"Worklist: {m.get('storage_size', 0)}")
        best_len = m.get("best_len")
        line(f"Best Len: {best_len if best_len is not None else '-'}")
        line(f"Solutions: {m.get('solutions', 0)}")
        if self.state == "Done":
            line(f"Showing: {self.solution_index + 1} / {m.get('solutions', 0)}")
        line("-" * 26)
        line(f"Board: {self.selected_board_key}")
        line(f"Storage: {self.discipline.value}   Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)

# ---------- main ----------
def main():
    try:
        grid = load_board(BOARD_FILES["grid1"])
    except (OSError, InvalidFileFormatError) as ex:
        print(f"Failed to load default board: {ex}")
        sys.exit(1)
    Viewer(grid, board_path=BOARD_FILES["grid1"]).run()

if __name__ == "__main__":
    main()
