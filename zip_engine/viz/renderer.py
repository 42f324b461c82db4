import pygame

from zip_engine.core.grid import Direction, Position
from zip_engine.core.session import GameSession


class Renderer:
    COLOR_BG = (250, 250, 250)
    COLOR_GRID = (215, 215, 215)
    COLOR_WALL = (30, 30, 30)
    COLOR_PATH = (255, 140, 0)
    COLOR_CHECKPOINT = (20, 20, 20)
    COLOR_CHECKPOINT_TEXT = (255, 255, 255)
    COLOR_HUD = (40, 40, 40)
    COLOR_DONE = (40, 160, 80)

    def __init__(self, session: GameSession, replay=None, width=720, height=800, record=False):
        self.session = session
        self.replay = replay
        self.screen_width = width
        self.screen_height = height

        # Board placement, recomputed on resize
        self.cell_size = 60.0
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.hud_height = 80

        from zip_engine.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=record)

        self.font = None
        self.small_font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.dragging = False

    @property
    def puzzle(self):
        return self.session.puzzle

    def fit_to_screen(self):
        """Square board centered below the HUD."""
        padding = 30
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - self.hud_height - (padding * 2)

        self.cell_size = min(available_w, available_h) / self.puzzle.size

        board = self.puzzle.size * self.cell_size
        self.offset_x = (self.screen_width - board) / 2
        self.offset_y = self.hud_height + (self.screen_height - self.hud_height - board) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Zip - {self.puzzle.size}x{self.puzzle.size}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Arial", 28, bold=True)
        self.small_font = pygame.font.SysFont("Arial", 18)
        self.fit_to_screen()

    def world_to_screen(self, pos: Position):
        sx = pos.col * self.cell_size + self.offset_x
        sy = pos.row * self.cell_size + self.offset_y
        return sx, sy

    def screen_to_world(self, sx, sy) -> Position:
        # May land outside the board; the session rejects those touches
        col = (sx - self.offset_x) // self.cell_size
        row = (sy - self.offset_y) // self.cell_size
        return Position(int(row), int(col))

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif self.replay is not None:
                    continue
                elif event.key == pygame.K_r:
                    self.session.reset()
                elif event.key == pygame.K_n:
                    if self.session.new_puzzle():
                        self.fit_to_screen()

            elif self.replay is not None:
                continue

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.dragging = True
                self.session.handle_touch(self.screen_to_world(*event.pos))

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.dragging = False

            elif event.type == pygame.MOUSEMOTION and self.dragging:
                self.session.handle_touch(self.screen_to_world(*event.pos))

    def draw_board(self):
        self.surface.fill(self.COLOR_BG)
        size = int(self.cell_size) + 1
        n = self.puzzle.size

        # 1. Grid lines
        for i in range(n + 1):
            x = int(self.offset_x + i * self.cell_size)
            y = int(self.offset_y + i * self.cell_size)
            board = int(n * self.cell_size)
            pygame.draw.line(self.surface, self.COLOR_GRID, (x, int(self.offset_y)), (x, int(self.offset_y) + board), 1)
            pygame.draw.line(self.surface, self.COLOR_GRID, (int(self.offset_x), y), (int(self.offset_x) + board, y), 1)

        # 2. Live path
        path = self.session.path
        if path:
            centers = [self._center(pos) for pos in path]
            width = max(4, int(self.cell_size * 0.45))
            if len(centers) > 1:
                pygame.draw.lines(self.surface, self.COLOR_PATH, False, centers, width)
            for cx, cy in centers:
                pygame.draw.circle(self.surface, self.COLOR_PATH, (cx, cy), width // 2)

        # 3. Checkpoints
        for number, pos in self.puzzle.checkpoints.items():
            cx, cy = self._center(pos)
            pygame.draw.circle(self.surface, self.COLOR_CHECKPOINT, (cx, cy), int(self.cell_size * 0.3))
            lbl = self.font.render(str(number), True, self.COLOR_CHECKPOINT_TEXT)
            self.surface.blit(lbl, lbl.get_rect(center=(cx, cy)))

        # 4. Walls (right/bottom sides only; symmetry covers the rest)
        thickness = max(3, int(self.cell_size * 0.08))
        for row in self.puzzle.cells:
            for cell in row:
                px, py = self.world_to_screen(cell.position)
                px, py = int(px), int(py)
                if cell.walls.has_wall(Direction.RIGHT):
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px + size, py), (px + size, py + size), thickness)
                if cell.walls.has_wall(Direction.BOTTOM):
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py + size), (px + size, py + size), thickness)

        # Outer border
        board = int(n * self.cell_size)
        pygame.draw.rect(self.surface, self.COLOR_WALL, (int(self.offset_x), int(self.offset_y), board + 1, board + 1), 2)

    def _center(self, pos: Position):
        sx, sy = self.world_to_screen(pos)
        half = self.cell_size / 2
        return int(sx + half), int(sy + half)

    def draw_hud(self):
        state = self.session.state
        difficulty = self.session.difficulty
        title = difficulty.display_name if difficulty else f"{self.puzzle.size}x{self.puzzle.size}"
        rec_status = "  REC" if self.recorder.active else ""

        if state.is_completed:
            status = f"Solved in {self.session.formatted_time}"
            color = self.COLOR_DONE
        else:
            status = self.session.formatted_time
            color = self.COLOR_HUD

        lbl = self.font.render(status, True, color)
        self.surface.blit(lbl, (20, 16))

        hint = "replay" if self.replay is not None else "drag to draw  R reset  N new  Esc quit"
        info = f"{title}  {self.session.mode.name.lower()}  next: {self.session.next_required_checkpoint}{rec_status}"
        self.surface.blit(self.small_font.render(info, True, self.COLOR_HUD), (20, 50))
        hint_lbl = self.small_font.render(hint, True, self.COLOR_GRID)
        self.surface.blit(hint_lbl, (self.screen_width - hint_lbl.get_width() - 20, 50))

    def run_loop(self):
        replay_iter = None
        if self.replay is not None:
            replay_iter = self.replay.run()

        frame = 0
        while self.running:
            self.handle_input()

            # Step replay: one logged event every few frames so the trace is watchable
            if replay_iter and frame % 6 == 0:
                try:
                    next(replay_iter)
                except StopIteration:
                    replay_iter = None
                # A logged puzzle switch can change the board size
                self.fit_to_screen()

            self.draw_board()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(60)
            frame += 1

        self.recorder.stop()
        pygame.quit()
