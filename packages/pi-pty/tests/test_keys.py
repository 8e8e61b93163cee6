"""Tests for pi.pty.keys.classify."""

from __future__ import annotations

import pytest

from pi.pty.keys import (
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_ENTER,
    ControlKey,
    CsiKey,
    DeleteKey,
    EnterKey,
    PrintableKey,
    UnrecognizedEscape,
    classify,
    ctrl,
)


class TestCtrl:
    def test_ctrl_letters(self) -> None:
        assert ctrl("a") == "\x01"
        assert ctrl("C") == "\x03"
        assert ctrl("h") == KEY_BACKSPACE
        assert ctrl("z") == "\x1a"


class TestCookedClassification:
    def test_enter(self) -> None:
        assert classify(KEY_ENTER, "cooked") == EnterKey()

    def test_delete(self) -> None:
        assert classify(KEY_DELETE, "cooked") == DeleteKey()

    @pytest.mark.parametrize("letter", ["A", "B", "C", "D", "Z"])
    def test_csi_letters(self, letter: str) -> None:
        assert classify(f"\x1b[{letter}", "cooked") == CsiKey(letter)

    def test_escape_with_wrong_length_is_unrecognized(self) -> None:
        assert classify("\x1b[3~", "cooked") == UnrecognizedEscape("\x1b[3~")
        assert classify("\x1b", "cooked") == UnrecognizedEscape("\x1b")
        assert classify("\x1b[", "cooked") == UnrecognizedEscape("\x1b[")

    def test_escape_without_bracket_is_unrecognized(self) -> None:
        assert classify("\x1bOA", "cooked") == UnrecognizedEscape("\x1bOA")

    def test_control_characters_map_to_letters(self) -> None:
        assert classify("\x01", "cooked") == ControlKey("A")
        assert classify("\x03", "cooked") == ControlKey("C")
        assert classify(KEY_BACKSPACE, "cooked") == ControlKey("H")
        assert classify("\x15", "cooked") == ControlKey("U")
        assert classify("\x00", "cooked") == ControlKey("@")

    def test_multi_char_with_control_is_printable(self) -> None:
        assert classify("\x01b", "cooked") == PrintableKey("\x01b")

    def test_plain_text(self) -> None:
        assert classify("a", "cooked") == PrintableKey("a")
        assert classify("hello world", "cooked") == PrintableKey("hello world")
        assert classify(" ", "cooked") == PrintableKey(" ")

    def test_empty_token(self) -> None:
        assert classify("", "cooked") == PrintableKey("")


class TestOtherModes:
    @pytest.mark.parametrize("mode", ["raw-echo", "raw", "disabled"])
    def test_enter_and_delete_recognised_in_every_mode(self, mode: str) -> None:
        assert classify(KEY_ENTER, mode) == EnterKey()  # type: ignore[arg-type]
        assert classify(KEY_DELETE, mode) == DeleteKey()  # type: ignore[arg-type]

    @pytest.mark.parametrize("mode", ["raw-echo", "raw", "disabled"])
    def test_escape_and_control_are_printable(self, mode: str) -> None:
        assert classify("\x1b[D", mode) == PrintableKey("\x1b[D")  # type: ignore[arg-type]
        assert classify("\x03", mode) == PrintableKey("\x03")  # type: ignore[arg-type]
        assert classify("\x1b[3~", mode) == PrintableKey("\x1b[3~")  # type: ignore[arg-type]


class TestKeyTags:
    def test_type_tags(self) -> None:
        assert EnterKey().type == "enter"
        assert DeleteKey().type == "delete"
        assert CsiKey("C").type == "csi"
        assert ControlKey("A").type == "control"
        assert UnrecognizedEscape("\x1b").type == "unrecognized-escape"
        assert PrintableKey("a").type == "printable"
