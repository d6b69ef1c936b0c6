"""tests for clipboard detection."""

from unittest.mock import patch

from snip.tools import clipboard
from snip.tools.proc import RunResult


def only(*names):
    """a which() that knows just these tools."""
    return lambda name: f"/usr/bin/{name}" if name in names else None


class TestDetect:

    def test_disabled(self):
        for value in ("none", "off", "0", "false", "No"):
            assert clipboard.detect(value, environ={}) is None

    def test_explicit(self):
        assert clipboard.detect("xclip -selection primary", environ={}) == [
            "xclip", "-selection", "primary",
        ]

    def test_pbcopy_first(self):
        with patch("snip.tools.clipboard.proc.which", side_effect=only("pbcopy", "xclip")):
            assert clipboard.detect("", environ={"DISPLAY": ":0"}) == ["pbcopy"]

    def test_wayland(self):
        with patch("snip.tools.clipboard.proc.which", side_effect=only("wl-copy", "xclip")):
            env = {"WAYLAND_DISPLAY": "wayland-0", "DISPLAY": ":0"}
            assert clipboard.detect("", environ=env) == ["wl-copy"]

    def test_x11_needs_display(self):
        with patch("snip.tools.clipboard.proc.which", side_effect=only("xclip")):
            assert clipboard.detect("", environ={}) is None
            assert clipboard.detect("", environ={"DISPLAY": ":0"}) == [
                "xclip", "-selection", "clipboard",
            ]

    def test_xsel_fallback(self):
        with patch("snip.tools.clipboard.proc.which", side_effect=only("xsel")):
            assert clipboard.detect("", environ={"DISPLAY": ":0"}) == [
                "xsel", "--clipboard", "--input",
            ]

    def test_wsl(self):
        with patch("snip.tools.clipboard.proc.which", side_effect=only("clip.exe")):
            assert clipboard.detect("", environ={}) == ["clip.exe"]

    def test_nothing_found(self):
        with patch("snip.tools.clipboard.proc.which", side_effect=only()):
            assert clipboard.detect("", environ={"DISPLAY": ":0"}) is None


class TestCopy:

    def test_feeds_stdin(self):
        with patch("snip.tools.clipboard.proc.run",
                   return_value=RunResult(command=["pbcopy"])) as run:
            assert clipboard.copy("git status", ["pbcopy"])
        run.assert_called_once_with(["pbcopy"], input="git status")

    def test_failure(self):
        with patch("snip.tools.clipboard.proc.run",
                   return_value=RunResult(command=["pbcopy"], returncode=1)):
            assert not clipboard.copy("x", ["pbcopy"])

    def test_real_command(self, tmp_path):
        out = tmp_path / "clip"
        argv = ["sh", "-c", f"cat > {out}"]
        assert clipboard.copy("echo hi", argv)
        assert out.read_text() == "echo hi"
