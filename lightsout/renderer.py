"""Text and image rendering of Lights Out boards."""

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .engine import Grid

LIT_COLOR = (255, 176, 0)  # Amber
UNLIT_COLOR = (45, 45, 45)
BACKGROUND_COLOR = (30, 30, 30)
LINE_COLOR = (128, 128, 128)
LABEL_COLOR = (200, 200, 200)
SOLVED_COLOR = (76, 175, 80)  # Green

LIT_CHAR = "■"
UNLIT_CHAR = "□"


class BoardRenderer:
    """Draws grid snapshots for the terminal and as RGB images."""

    def __init__(self, grid_size: int, cell_size: int = 64):
        """
        Initialize the board renderer.

        Args:
            grid_size: Size of the grid (e.g., 5 for 5x5)
            cell_size: Width and height of one cell in pixels
        """
        self.grid_size = grid_size
        self.cell_size = cell_size

    def _check_grid(self, grid: Grid) -> None:
        if len(grid) != self.grid_size or any(len(cells) != self.grid_size for cells in grid):
            raise ValueError(
                f"Grid does not match renderer size {self.grid_size}x{self.grid_size}"
            )

    def _get_font(self, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        """Get a font for drawing text, with fallback."""
        try:
            return ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", size)
        except (OSError, IOError):
            try:
                return ImageFont.truetype("/usr/share/fonts/TTF/DejaVuSans-Bold.ttf", size)
            except (OSError, IOError):
                try:
                    return ImageFont.truetype("arial.ttf", size)
                except (OSError, IOError):
                    return ImageFont.load_default()

    def to_text(self, grid: Grid) -> str:
        """
        Render a grid as a box-drawn string with 1-indexed labels.

        Args:
            grid: Grid snapshot

        Returns:
            Multi-line string, one board row per line
        """
        self._check_grid(grid)
        width = len(str(self.grid_size))
        pad = " " * width

        header = pad + "   " + " ".join(str(c + 1).rjust(width) for c in range(self.grid_size))
        inner = self.grid_size * (width + 1) + 1
        lines = [header, pad + " ┏" + "━" * inner + "┓"]

        for row, cells in enumerate(grid):
            body = " ".join((LIT_CHAR if cell else UNLIT_CHAR).rjust(width) for cell in cells)
            lines.append(f"{str(row + 1).rjust(width)} ┃ {body} ┃")

        lines.append(pad + " ┗" + "━" * inner + "┛")
        return "\n".join(lines)

    def render(self, grid: Grid, show_labels: bool = True, solved: bool = False) -> np.ndarray:
        """
        Render a grid as an RGB image.

        Args:
            grid: Grid snapshot
            show_labels: Whether to draw 1-indexed row/column labels in a margin
            solved: Whether to frame the board in green

        Returns:
            Image as numpy array (H, W, 3) of uint8
        """
        self._check_grid(grid)

        margin = 30 if show_labels else 0
        board = self.grid_size * self.cell_size

        output = np.empty((board + margin, board + margin, 3), dtype=np.uint8)
        output[:] = BACKGROUND_COLOR

        pil_image = Image.fromarray(output)
        draw = ImageDraw.Draw(pil_image)

        self._draw_cells(draw, grid, margin)
        self._draw_grid_lines(draw, margin, board)

        if show_labels:
            self._draw_border_labels(draw, margin)

        if solved:
            draw.rectangle(
                [margin, margin, margin + board - 1, margin + board - 1],
                outline=SOLVED_COLOR,
                width=4,
            )

        return np.array(pil_image)

    def _draw_cells(self, draw: ImageDraw.ImageDraw, grid: Grid, margin: int) -> None:
        """Fill each cell with its lit or unlit colour."""
        for row, cells in enumerate(grid):
            for col, lit in enumerate(cells):
                x1 = margin + col * self.cell_size
                y1 = margin + row * self.cell_size
                draw.rectangle(
                    [x1, y1, x1 + self.cell_size - 1, y1 + self.cell_size - 1],
                    fill=LIT_COLOR if lit else UNLIT_COLOR,
                )

    def _draw_grid_lines(self, draw: ImageDraw.ImageDraw, margin: int, board: int) -> None:
        """Draw simple grid lines."""
        for i in range(self.grid_size + 1):
            offset = margin + i * self.cell_size
            draw.line([(margin, offset), (margin + board, offset)], fill=LINE_COLOR, width=2)
            draw.line([(offset, margin), (offset, margin + board)], fill=LINE_COLOR, width=2)

    def _draw_border_labels(self, draw: ImageDraw.ImageDraw, margin: int) -> None:
        """Draw row and column labels on the borders."""
        font = self._get_font(max(10, min(margin - 4, 20)))

        for i in range(self.grid_size):
            label = str(i + 1)
            bbox = draw.textbbox((0, 0), label, font=font)
            text_w = bbox[2] - bbox[0]
            text_h = bbox[3] - bbox[1]
            center = margin + i * self.cell_size + self.cell_size // 2

            # Column label (top), then row label (left)
            draw.text(
                (center - text_w // 2, margin // 2 - text_h // 2), label, fill=LABEL_COLOR, font=font
            )
            draw.text(
                (margin // 2 - text_w // 2, center - text_h // 2), label, fill=LABEL_COLOR, font=font
            )

    def get_coordinate_format_description(self) -> str:
        """Get a description of the coordinate format for the player."""
        return (
            f'Cells are given as "row,col" where row and column are 1-indexed. '
            f'Top-left is "1,1", bottom-right is "{self.grid_size},{self.grid_size}". '
            f"Rows increase downward, columns increase rightward."
        )
