"""Tests for the headless renderer."""

import math

import pytest
from PIL import Image
from walk_config import merge_settings
from walk_driver import COMPLETED, RUNNING
from walk_offline import main, render


class TestRender:
    """Test render()."""

    def test_runs_to_completion(self):
        """Test that a small walk finishes and covers every cell."""
        settings = merge_settings({"grid_count": 4, "canvas_size": 40})

        canvas, driver, frames = render(settings, seed=3, progress=None)

        assert driver.status == COMPLETED
        assert driver.coverage.is_complete(settings["minimum_opacity"])
        assert frames == []
        assert canvas.to_array().shape == (40, 40, 3)

    def test_same_seed_same_walk(self):
        """Test that seeded renders are reproducible."""
        settings = merge_settings({"grid_count": 5, "canvas_size": 50})

        _, first, _ = render(settings, seed=11, progress=None)
        _, second, _ = render(settings, seed=11, progress=None)

        assert first.state.tick_count == second.state.tick_count
        assert (first.coverage.opacity == second.coverage.opacity).all()

    def test_max_steps_stops_endless_walk(self):
        """Test that an unreachable threshold is cut off."""
        settings = merge_settings({"grid_count": 3, "minimum_opacity": math.inf})

        _, driver, _ = render(settings, seed=1, max_steps=250, progress=None)

        assert driver.status == RUNNING
        assert driver.state.tick_count == 250

    def test_gif_frames(self):
        """Test that every Nth step is captured plus the final frame."""
        settings = merge_settings({"grid_count": 3, "canvas_size": 30, "minimum_opacity": math.inf})

        _, _, frames = render(settings, seed=1, max_steps=50, gif_every=10, progress=None)

        assert len(frames) == 6
        assert frames[0].shape == (30, 30, 3)

    def test_progress_messages(self):
        """Test that progress is reported every thousand steps."""
        messages = []
        settings = merge_settings({"grid_count": 3, "minimum_opacity": math.inf})

        render(settings, seed=1, max_steps=2000, progress=messages.append)

        assert len(messages) == 2
        assert messages[0].startswith("  step 1000")


class TestMain:
    """Test the command line entry point."""

    def test_writes_png(self, tmp_path, capsys):
        """Test an end-to-end run from arguments to file."""
        output = tmp_path / "out.png"

        main(["--grid-count", "4", "--canvas-size", "40", "--seed", "5", "--output", str(output)])

        with Image.open(output) as image:
            assert image.size == (40, 40)
        printed = capsys.readouterr().out
        assert "Square done after" in printed
        assert "grid_count=4" in printed

    def test_writes_gif(self, tmp_path):
        """Test that --gif saves an animation next to the PNG."""
        gif = tmp_path / "walk.gif"

        main(
            [
                "--grid-count", "3",
                "--canvas-size", "30",
                "--seed", "2",
                "--output", str(tmp_path / "walk.png"),
                "--gif", str(gif),
                "--gif-every", "5",
            ]
        )

        assert gif.exists()
        with Image.open(gif) as image:
            assert image.n_frames > 1

    def test_unfinished_walk_reports_remaining(self, tmp_path, capsys):
        """Test the summary when max steps is hit."""
        main(
            [
                "--grid-count", "3",
                "--minimum-opacity", "inf",
                "--max-steps", "20",
                "--output", str(tmp_path / "walk.png"),
            ]
        )

        assert "Stopped after 20 steps" in capsys.readouterr().out

    def test_bad_format_exits(self):
        """Test that argparse rejects an unknown format."""
        with pytest.raises(SystemExit):
            main(["--format", "hexagon"])
