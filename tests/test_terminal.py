"""Tests for TerminalInterface drawing and teardown."""

import os
from unittest.mock import MagicMock, Mock, call, patch

import pytest

from lined.terminal import TerminalInterface
from lined.view import RenderDescriptor


def make_term(width=40, height=5):
    term = MagicMock()
    term.move = Mock(side_effect=lambda y, x: f"<{y},{x}>")
    term.home = "<HOME>"
    term.clear = "<CLR>"
    term.clear_eol = ""
    term.reverse = "<R>"
    term.normal = "<N>"
    term.normal_cursor = ""
    term.enter_fullscreen = "<FS>"
    term.exit_fullscreen = "<EXIT>"
    term.width = width
    term.height = height
    return term


def make_descriptor(lines, line_count=None, cursor=(0, 0), offsets=(0, 0), size=(10, 4)):
    return RenderDescriptor(
        visible_lines=lines,
        cursor_screen_pos=cursor,
        scroll_offsets=offsets,
        active_line_index=offsets[1] + cursor[1],
        line_count=len(lines) if line_count is None else line_count,
        viewport_size=size,
    )


def test_draw_frame_writes_rows_status_and_cursor(capsys):
    ti = TerminalInterface(make_term())
    ti.draw_frame(make_descriptor(["hello", "world"], cursor=(3, 1)))
    out = capsys.readouterr().out
    assert out.startswith("<HOME><CLR>")
    assert "<0,0>hello" in out
    assert "<1,0>world" in out
    assert "<2,0>~" in out
    assert "<3,0>~" in out
    assert "<4,0><R> [No Name]" in out
    assert out.endswith("<1,3>")


def test_draw_frame_slices_long_lines(capsys):
    ti = TerminalInterface(make_term())
    ti.draw_frame(make_descriptor(["abcdefghijklmnop"], offsets=(2, 0), size=(5, 4)))
    out = capsys.readouterr().out
    assert "<0,0>cdefg" in out
    assert "cdefgh" not in out


def test_unchanged_rows_are_not_redrawn(capsys):
    ti = TerminalInterface(make_term())
    ti.draw_frame(make_descriptor(["hello", "world"]))
    capsys.readouterr()
    ti.draw_frame(make_descriptor(["hello", "there"]))
    out = capsys.readouterr().out
    assert "hello" not in out
    assert "<1,0>there" in out
    assert "<CLR>" not in out


def test_invalidate_frame_forces_full_repaint(capsys):
    ti = TerminalInterface(make_term())
    ti.draw_frame(make_descriptor(["hello"]))
    ti.invalidate_frame()
    capsys.readouterr()
    ti.draw_frame(make_descriptor(["hello"]))
    out = capsys.readouterr().out
    assert "<CLR>" in out
    assert "<0,0>hello" in out


def test_empty_buffer_draws_banner(capsys):
    ti = TerminalInterface(make_term())
    ti.draw_frame(make_descriptor([], size=(40, 4)))
    out = capsys.readouterr().out
    assert "lined" in out


def test_prompt_replaces_status_and_takes_cursor(capsys):
    ti = TerminalInterface(make_term())
    ti.draw_frame(make_descriptor(["hello"]), prompt="File to save in: a.txt")
    out = capsys.readouterr().out
    assert "<4,0><R> File to save in: a.txt" in out
    assert out.endswith("<4,23>")


def test_height_excludes_status_line():
    ti = TerminalInterface(make_term(width=80, height=24))
    assert ti.width == 80
    assert ti.height == 23


def test_setup_and_cleanup_enter_and_leave_raw_mode(capsys):
    ti = TerminalInterface(make_term())
    with patch('curtsies.Input') as mock_input:
        ti.setup()
    instance = mock_input.return_value
    instance.__enter__.assert_called_once()
    assert ti.is_fullscreen

    ti.cleanup()
    instance.__exit__.assert_called_once_with(None, None, None)
    assert not ti.is_fullscreen
    assert "<EXIT>" in capsys.readouterr().out

    # Second cleanup is harmless
    ti.cleanup()
    instance.__exit__.assert_called_once()


def test_cleanup_restores_screen_even_if_input_teardown_fails(capsys):
    ti = TerminalInterface(make_term())
    failing = MagicMock()
    failing.__exit__.side_effect = OSError("tty gone")
    ti._curtsies_input = failing
    ti.is_fullscreen = True
    ti.cleanup()
    assert "<EXIT>" in capsys.readouterr().out
    assert not ti.is_fullscreen


def test_get_key_without_input_returns_none():
    ti = TerminalInterface(make_term())
    assert ti.get_key() is None


def test_get_key_passes_timeout_to_curtsies():
    ti = TerminalInterface(make_term())
    ti._curtsies_input = Mock()
    ti._curtsies_input.send.side_effect = ['<UP>', None]
    assert ti.get_key(timeout=0.5) == '<UP>'
    assert ti.get_key(timeout=0) is None
    assert ti._curtsies_input.send.call_args_list == [call(0.5), call(0)]


@pytest.mark.skipif(not hasattr(os, 'openpty'), reason="needs a pty")
def test_keys_typed_together_are_all_returned():
    from curtsies import Input

    master, slave = os.openpty()
    try:
        with os.fdopen(slave, 'rb', buffering=0, closefd=False) as stream:
            ti = TerminalInterface(make_term())
            with Input(in_stream=stream, keynames='curtsies') as inp:
                ti._curtsies_input = inp
                os.write(master, b"abc")
                keys = [ti.get_key(timeout=0.2) for _ in range(3)]
                assert ti.get_key(timeout=0) is None
    finally:
        os.close(master)
        os.close(slave)
    assert keys == ['a', 'b', 'c']
