"""Tests for the board renderer."""

import numpy as np
import pytest

from lightsout.engine import create_empty_grid, toggle_at
from lightsout.renderer import BoardRenderer, LIT_COLOR, SOLVED_COLOR, UNLIT_COLOR


class TestBoardRenderer:
    """Tests for BoardRenderer class."""

    def test_init(self):
        renderer = BoardRenderer(grid_size=5)

        assert renderer.grid_size == 5
        assert renderer.cell_size == 64

    def test_render_shape_with_labels(self):
        renderer = BoardRenderer(grid_size=4, cell_size=16)

        result = renderer.render(create_empty_grid(4))

        # Labels add a margin
        assert result.shape == (64 + 30, 64 + 30, 3)
        assert result.dtype == np.uint8

    def test_render_shape_without_labels(self):
        renderer = BoardRenderer(grid_size=4, cell_size=16)

        result = renderer.render(create_empty_grid(4), show_labels=False)

        assert result.shape == (64, 64, 3)

    def test_cell_colors(self):
        """Cell centres carry the lit or unlit colour."""
        renderer = BoardRenderer(grid_size=3, cell_size=20)
        grid = toggle_at(create_empty_grid(3), 0, 0)

        result = renderer.render(grid, show_labels=False)

        def center(row, col):
            return tuple(result[row * 20 + 10, col * 20 + 10])

        assert center(0, 0) == LIT_COLOR
        assert center(0, 1) == LIT_COLOR
        assert center(1, 0) == LIT_COLOR
        assert center(1, 1) == UNLIT_COLOR
        assert center(2, 2) == UNLIT_COLOR

    def test_solved_frame(self):
        renderer = BoardRenderer(grid_size=3, cell_size=20)

        plain = renderer.render(create_empty_grid(3), show_labels=False)
        framed = renderer.render(create_empty_grid(3), show_labels=False, solved=True)

        assert tuple(framed[1, 30]) == SOLVED_COLOR
        assert not np.array_equal(plain, framed)

    def test_size_mismatch(self):
        renderer = BoardRenderer(grid_size=5)

        with pytest.raises(ValueError):
            renderer.render(create_empty_grid(4))
        with pytest.raises(ValueError):
            renderer.to_text(create_empty_grid(3))

    def test_to_text(self):
        renderer = BoardRenderer(grid_size=3)
        grid = toggle_at(create_empty_grid(3), 0, 0)

        lines = renderer.to_text(grid).splitlines()

        assert lines[0].split() == ["1", "2", "3"]
        assert lines[2] == "1 ┃ ■ ■ □ ┃"
        assert lines[3] == "2 ┃ ■ □ □ ┃"
        assert lines[4] == "3 ┃ □ □ □ ┃"
        assert len(lines) == 6

    def test_to_text_borders_align(self):
        renderer = BoardRenderer(grid_size=12)

        lines = renderer.to_text(create_empty_grid(12)).splitlines()

        widths = {len(line) for line in lines[1:]}
        assert len(widths) == 1

    def test_coordinate_description(self):
        renderer = BoardRenderer(grid_size=5)

        description = renderer.get_coordinate_format_description()

        assert '"1,1"' in description
        assert '"5,5"' in description
