import math
from typing import Iterator, List, Optional, Tuple

import pygame

from trimaze.core.geometry import Edge, Orientation, Position, orientation
from trimaze.core.grid import TriGrid

Point = Tuple[float, float]

# Height of an equilateral triangle relative to its side
ROW_RATIO = math.sqrt(3) / 2


def triangle_points(row: int, col: int, size: float, offset_x: float = 0.0, offset_y: float = 0.0) -> Tuple[Point, Point, Point]:
    """
    Screen corners of a cell as (left, right, apex).
    Cells overlap their row neighbours by half a side. APEX_UP cells have
    their base on the top line of the row strip, APEX_DOWN cells on the bottom.
    """
    h = size * ROW_RATIO
    x0 = col * size / 2 + offset_x
    y0 = row * h + offset_y

    if orientation(row, col) is Orientation.APEX_UP:
        return (x0, y0), (x0 + size, y0), (x0 + size / 2, y0 + h)
    return (x0, y0 + h), (x0 + size, y0 + h), (x0 + size / 2, y0)


def edge_segment(row: int, col: int, edge: Edge, size: float, offset_x: float = 0.0, offset_y: float = 0.0) -> Tuple[Point, Point]:
    left, right, apex = triangle_points(row, col, size, offset_x, offset_y)
    if edge is Edge.LEFT:
        return left, apex
    if edge is Edge.RIGHT:
        return right, apex
    return left, right


class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_CELL = (30, 30, 40)
    COLOR_WALL = (200, 200, 200)
    COLOR_VISITED = (60, 100, 160)  # Blue tint
    COLOR_WALKER = (255, 215, 0)    # Gold

    def __init__(self, grid: TriGrid, path_iter: Optional[Iterator[Position]] = None,
                 width=1280, height=720, record=False, steps_per_frame=1):
        self.grid = grid
        self.path_iter = path_iter
        self.path: List[Position] = []
        self.screen_width = width
        self.screen_height = height
        self.steps_per_frame = steps_per_frame

        # Camera
        self.cell_size = 40.0  # Pixels per triangle side
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        from trimaze.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=record)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.walk_finished = path_iter is None

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        # A row of n triangles spans (n + 1) half sides
        zoom_x = available_w / ((self.grid.cols + 1) / 2)
        zoom_y = available_h / (self.grid.rows * ROW_RATIO)
        self.cell_size = min(zoom_x, zoom_y)

        total_w = (self.grid.cols + 1) / 2 * self.cell_size
        total_h = self.grid.rows * ROW_RATIO * self.cell_size

        self.offset_x = (self.screen_width - total_w) / 2
        self.offset_y = (self.screen_height - total_h) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"trimaze - {self.grid.rows}x{self.grid.cols}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

        self.fit_to_screen()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(1.0, min(400.0, self.cell_size))

                # Keep the point under the mouse still
                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]:
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def visible_range(self) -> Tuple[int, int, int, int]:
        half = self.cell_size / 2
        row_h = self.cell_size * ROW_RATIO
        start_row = max(0, int(-self.offset_y / row_h))
        end_row = min(self.grid.rows, int((self.screen_height - self.offset_y) / row_h) + 1)
        start_col = max(0, int(-self.offset_x / half) - 1)
        end_col = min(self.grid.cols, int((self.screen_width - self.offset_x) / half) + 1)
        return start_row, end_row, start_col, end_col

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        start_row, end_row, start_col, end_col = self.visible_range()
        visited = set(self.path)

        # Pass 1 - cell fills
        for r in range(start_row, end_row):
            for c in range(start_col, end_col):
                color = self.COLOR_VISITED if (r, c) in visited else self.COLOR_CELL
                pts = triangle_points(r, c, self.cell_size, self.offset_x, self.offset_y)
                pygame.draw.polygon(self.surface, color, pts)

        # Pass 2 - walls
        for r in range(start_row, end_row):
            for c in range(start_col, end_col):
                for edge in Edge:
                    if self.grid.has_wall(r, c, edge):
                        a, b = edge_segment(r, c, edge, self.cell_size, self.offset_x, self.offset_y)
                        pygame.draw.line(self.surface, self.COLOR_WALL, a, b, 2)

        # Walker trail, drawn through triangle centroids
        if len(self.path) > 1:
            centers = []
            for r, c in self.path:
                pts = triangle_points(r, c, self.cell_size, self.offset_x, self.offset_y)
                centers.append((sum(p[0] for p in pts) / 3, sum(p[1] for p in pts) / 3))
            pygame.draw.lines(self.surface, self.COLOR_WALKER, False, centers, 3)

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        rec_status = "REC" if self.recorder.active else ""
        status = "Done" if self.walk_finished else "Walking"
        info = [
            f"FPS: {fps}",
            f"Size: {self.grid.rows}x{self.grid.cols} ({len(self.grid):,})",
            f"Steps: {len(self.path)}",
            f"Status: {status}",
            rec_status
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def advance(self):
        """Pulls up to steps_per_frame positions from the path iterator."""
        if self.walk_finished:
            return
        try:
            for _ in range(self.steps_per_frame):
                self.path.append(next(self.path_iter))
        except StopIteration:
            self.walk_finished = True

    def run_loop(self):
        # Errors from the path iterator (e.g. a step limit) still finalise the video
        try:
            while self.running:
                self.handle_input()
                self.advance()

                self.draw_grid()
                self.draw_hud()
                pygame.display.flip()

                if self.recorder.active:
                    self.recorder.capture_frame(self.surface)

                self.clock.tick(30)
        finally:
            self.recorder.stop()
            pygame.quit()
