"""Tests for the editor session loop and key handling."""

import os
from unittest.mock import MagicMock, PropertyMock, patch

import pytest

from lined.editor import Editor
from lined.errors import EditorIOError
from lined.keyboard import KeyEvent, KeyType

CTRL_Q = KeyEvent(KeyType.CTRL, 'q', '\x11')
CTRL_S = KeyEvent(KeyType.CTRL, 's', '\x13')
ENTER = KeyEvent(KeyType.SPECIAL, 'enter', '\r')
ESCAPE = KeyEvent(KeyType.SPECIAL, 'escape', '\x1b')
BACKSPACE = KeyEvent(KeyType.SPECIAL, 'backspace', '\x7f')


def char(c):
    return KeyEvent(KeyType.REGULAR, c, c)


def type_text(editor, text):
    for c in text:
        editor._handle_key_event(char(c))


def run_with_keys(editor, key_events, select_results=None, width=80, height=24, cleanup=None):
    """Run the editor loop with a scripted terminal."""
    cleanup = cleanup or MagicMock()
    with patch.object(editor.terminal, 'setup') as mock_setup, \
         patch.object(editor.terminal, 'cleanup', cleanup), \
         patch.object(editor.terminal, 'draw_frame'), \
         patch.object(editor, '_disable_flow_control', return_value=None), \
         patch.object(type(editor.terminal), 'width', PropertyMock(return_value=width)), \
         patch.object(type(editor.terminal), 'height', PropertyMock(return_value=height)), \
         patch.object(editor.keyboard, 'get_key_event', side_effect=key_events), \
         patch('lined.editor.select.select') as mock_select:
        if select_results is None:
            mock_select.return_value = ([0], [], [])
        else:
            mock_select.side_effect = select_results
        editor.run()
    return mock_setup, cleanup


def test_typing_edits_buffer():
    editor = Editor()
    type_text(editor, "hi")
    editor._handle_key_event(ENTER)
    type_text(editor, "yo")
    assert editor.controller.buffer.lines == ["hi", "yo"]
    assert editor.controller.modified


def test_unbound_key_is_ignored():
    editor = Editor()
    editor._handle_key_event(KeyEvent(KeyType.CTRL, 'z', '\x1a'))
    assert editor.controller.buffer.is_empty
    assert editor.running


def test_quit_stops_running():
    editor = Editor()
    editor._handle_key_event(CTRL_Q)
    assert not editor.running


def test_save_with_filename_writes_and_quits(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("abc\n", encoding='utf-8')
    editor = Editor()
    editor.load_file(str(path))
    type_text(editor, "x")
    editor._handle_key_event(CTRL_S)
    assert path.read_text(encoding='utf-8') == "xabc\n"
    assert not editor.running


def test_save_without_filename_prompts(tmp_path):
    path = tmp_path / "new.txt"
    editor = Editor()
    type_text(editor, "hello")
    editor._handle_key_event(CTRL_S)
    assert editor.prompt_input == ""
    assert editor.running

    type_text(editor, str(path) + "z")
    editor._handle_key_event(BACKSPACE)
    editor._handle_key_event(ENTER)
    assert path.read_text(encoding='utf-8') == "hello\n"
    assert editor.prompt_input is None
    assert editor.controller.filename == str(path)
    assert not editor.running


def test_prompt_keys_do_not_edit_buffer():
    editor = Editor()
    type_text(editor, "ab")
    editor._handle_key_event(CTRL_S)
    type_text(editor, "name")
    assert editor.controller.buffer.lines == ["ab"]


def test_escape_cancels_prompt():
    editor = Editor()
    editor._handle_key_event(CTRL_S)
    type_text(editor, "f.txt")
    editor._handle_key_event(ESCAPE)
    assert editor.prompt_input is None
    assert editor.controller.status_message == "Save cancelled"
    assert editor.running


def test_enter_on_empty_prompt_keeps_prompting():
    editor = Editor()
    editor._handle_key_event(CTRL_S)
    editor._handle_key_event(ENTER)
    assert editor.prompt_input == ""
    assert editor.running


def test_status_message_cleared_by_next_key():
    editor = Editor()
    editor.controller.status_message = "Save cancelled"
    type_text(editor, "a")
    assert editor.controller.status_message is None


def test_load_missing_file_raises(tmp_path):
    editor = Editor()
    with pytest.raises(EditorIOError):
        editor.load_file(str(tmp_path / "missing.txt"))


def test_run_quits_and_restores_terminal():
    editor = Editor()
    mock_setup, mock_cleanup = run_with_keys(editor, [char('a'), CTRL_Q])
    mock_setup.assert_called_once()
    mock_cleanup.assert_called_once()
    assert editor.controller.buffer.lines == ["a"]


def test_run_fits_viewport_to_terminal():
    editor = Editor()
    run_with_keys(editor, [CTRL_Q], width=100, height=30)
    assert (editor.controller.viewport.columns, editor.controller.viewport.rows) == (100, 30)


def test_run_restores_terminal_when_save_fails(tmp_path):
    editor = Editor()
    editor.controller.filename = str(tmp_path / "missing" / "doc.txt")
    cleanup = MagicMock()
    with pytest.raises(EditorIOError):
        run_with_keys(editor, [char('a'), CTRL_S], cleanup=cleanup)
    cleanup.assert_called()


def test_resize_signal_triggers_resync():
    editor = Editor()
    os.write(editor._resize_pipe_w, b'R')
    with patch.object(editor.terminal, 'invalidate_frame') as mock_invalidate:
        run_with_keys(
            editor,
            [CTRL_Q],
            select_results=[
                ([editor._resize_pipe_r], [], []),  # Resize pipe ready
                ([0], [], []),  # stdin ready
            ],
        )
    mock_invalidate.assert_called_once()


def test_keyboard_interrupt_ends_session_cleanly():
    editor = Editor()
    _, mock_cleanup = run_with_keys(editor, KeyboardInterrupt())
    mock_cleanup.assert_called_once()


def test_buffered_keys_are_handled_before_redraw():
    editor = Editor()
    with patch.object(editor, '_draw') as mock_draw:
        run_with_keys(
            editor,
            [char('a'), char('b'), char('c'), None, CTRL_Q],
            select_results=[([0], [], []), ([0], [], [])],
        )
    assert editor.controller.buffer.lines == ["abc"]
    # Initial frame, then one frame for the whole batch
    assert mock_draw.call_count == 2
