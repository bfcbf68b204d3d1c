"""Tests for src/formatter.py"""

import io
import unittest

from src.classifier import Subsystem
from src.extractor import KubeletEvent
from src.formatter import (
    BOLD,
    GREEN,
    HEADER,
    HI_YELLOW,
    PLAIN,
    RED,
    RESET,
    YELLOW,
    color_enabled,
    delta_style,
    format_row,
    paint,
    pod_header,
    render,
    subsystem_style,
)
from src.timeline import TimelineRow


def _row(elapsed=0.0, delta=0.0, subsystem=Subsystem.MISC, message="hello") -> TimelineRow:
    return TimelineRow(
        elapsed_ms=elapsed,
        delta_ms=delta,
        subsystem=subsystem,
        message=message,
        event=KubeletEvent(message=message),
    )


class _FakeTTY(io.StringIO):
    def isatty(self):
        return True


class TestDeltaStyle(unittest.TestCase):
    def test_thresholds(self):
        cases = [
            (0, PLAIN),
            (10, PLAIN),
            (10.9, PLAIN),
            (11, (YELLOW,)),
            (30, (YELLOW,)),
            (31, (BOLD, YELLOW)),
            (51, (HI_YELLOW,)),
            (101, (BOLD, HI_YELLOW)),
            (301, (RED,)),
            (500, (RED,)),
            (501, (BOLD, RED)),
            (60000, (BOLD, RED)),
            (-11, (YELLOW,)),
            (-600, (BOLD, RED)),
        ]
        for delta, expected in cases:
            self.assertEqual(delta_style(delta), expected, delta)

    def test_monotonic(self):
        order = [PLAIN, (YELLOW,), (BOLD, YELLOW), (HI_YELLOW,), (BOLD, HI_YELLOW), (RED,), (BOLD, RED)]
        ranks = [order.index(delta_style(ms)) for ms in range(0, 700)]
        self.assertEqual(ranks, sorted(ranks))

    def test_negative_delta_uses_magnitude(self):
        for ms in (5, 20, 40, 80, 200, 400, 600):
            self.assertEqual(delta_style(-ms), delta_style(ms), ms)


class TestSubsystemStyle(unittest.TestCase):
    def test_every_subsystem_is_bold(self):
        for subsystem in Subsystem:
            self.assertIn(BOLD, subsystem_style(subsystem))

    def test_volume_is_green(self):
        self.assertEqual(subsystem_style(Subsystem.VOLUME), (BOLD, GREEN))


class TestPaint(unittest.TestCase):
    def test_wraps_with_escape(self):
        self.assertEqual(paint("x", (BOLD, RED)), "\033[1;31mx" + RESET)

    def test_plain_style_untouched(self):
        self.assertEqual(paint("x", PLAIN), "x")

    def test_color_disabled(self):
        self.assertEqual(paint("x", (BOLD,), color=False), "x")


class TestColorEnabled(unittest.TestCase):
    def test_always_and_never(self):
        self.assertTrue(color_enabled("always", io.StringIO()))
        self.assertFalse(color_enabled("never", _FakeTTY()))

    def test_auto_follows_tty(self):
        self.assertTrue(color_enabled("auto", _FakeTTY(), environ={}))
        self.assertFalse(color_enabled("auto", io.StringIO(), environ={}))

    def test_auto_respects_no_color(self):
        self.assertFalse(color_enabled("auto", _FakeTTY(), environ={"NO_COLOR": "1"}))


class TestFormatRow(unittest.TestCase):
    def test_plain_layout(self):
        row = _row(elapsed=1.5, delta=0.5, subsystem=Subsystem.SYNCPOD, message="syncPod enter")
        self.assertEqual(format_row(row), "1.5ms    \t500µs    \tSYNCPOD\tsyncPod enter")

    def test_colored_columns(self):
        row = _row(elapsed=600, delta=600, subsystem=Subsystem.VOLUME)
        result = format_row(row, color=True)
        self.assertIn("\033[1;31m600ms    " + RESET, result)
        self.assertIn("\033[1;32mVOLUME" + RESET, result)
        self.assertTrue(result.startswith("600ms    \t"))


class TestRender(unittest.TestCase):
    def test_pod_header(self):
        self.assertEqual(pod_header("nginx"), "Pod: nginx")

    def test_sections(self):
        lines = list(render([_row(), _row(elapsed=2, delta=2)]))
        self.assertEqual(lines[:3], ["", "Logs:", HEADER])
        self.assertEqual(len(lines), 5)
        self.assertEqual(HEADER, "ELAPSED\tDIFF\tSYSTEM\tMESSAGE")


if __name__ == "__main__":
    unittest.main()
