from __future__ import annotations

import os

import pytest
from prompt_toolkit.document import Document

from clay_ref.repl import _SlashCompleter, _normalize, eval_entry, handle_slash, open_depth
from clay_ref.repl_highlight import GROUP_STYLE, highlight_line
from tests.support.harness import ClyInteger, Frame


@pytest.mark.parametrize(
    "text, depth",
    [
        pytest.param("x = 1;", 0, id="balanced"),
        pytest.param("f = fn() {", 1, id="open-brace"),
        pytest.param("f = fn() { xs = [", 2, id="nested-open"),
        pytest.param("f = fn() { }", 0, id="closed"),
        pytest.param('s = "{";', 0, id="brace-in-string"),
        pytest.param('s = "\\"{";', 0, id="escaped-quote-in-string"),
        pytest.param("x = 1; // {", 0, id="brace-in-comment"),
        pytest.param("# (\nf(", 1, id="comment-then-open-paren"),
        pytest.param("}}", 0, id="never-negative"),
    ],
)
def test_open_depth(text: str, depth: int) -> None:
    assert open_depth(text) == depth


def test_eval_entry_prints_and_persists(capsys: pytest.CaptureFixture[str]) -> None:
    frame_box = [Frame()]

    eval_entry("x = 1;", frame_box)
    eval_entry("x := 2;", frame_box)
    eval_entry("x;", frame_box)

    # assignment yields null, which is not echoed
    assert capsys.readouterr().out == "2\n2\n"
    assert frame_box[0].lookup("x") == ClyInteger(2)


def test_eval_entry_reports_errors_and_continues(capsys: pytest.CaptureFixture[str]) -> None:
    frame_box = [Frame()]

    eval_entry("y = 3; missing;", frame_box)
    eval_entry("y;", frame_box)

    captured = capsys.readouterr()
    assert "Error: Could not find identifier 'missing'" in captured.err
    assert captured.out == "3\n"


def test_eval_entry_reports_parse_errors(capsys: pytest.CaptureFixture[str]) -> None:
    eval_entry("x = ;", [Frame()])

    assert capsys.readouterr().err.startswith("Error: Unexpected token")


def test_slash_reset_replaces_frame(capsys: pytest.CaptureFixture[str]) -> None:
    frame_box = [Frame()]
    eval_entry("x = 1;", frame_box)

    assert handle_slash("/reset", frame_box)
    assert frame_box[0].lookup("x") is None
    assert "Environment reset." in capsys.readouterr().out


def test_slash_ast_prints_tree(capsys: pytest.CaptureFixture[str]) -> None:
    assert handle_slash("/ast x = 1;", [Frame()])

    assert capsys.readouterr().out.startswith("Program")


def test_slash_py_traceback_toggles(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("CLAY_DEBUG_PY_TRACE", "0")
    frame_box = [Frame()]

    assert handle_slash("/py-traceback on", frame_box)
    assert os.environ.get("CLAY_DEBUG_PY_TRACE") == "1"

    assert handle_slash("/py-traceback", frame_box)
    assert "CLAY_DEBUG_PY_TRACE" not in os.environ

    assert "Python traceback: off" in capsys.readouterr().out


def test_unknown_slash_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert handle_slash("/nope", [Frame()])
    assert "Unknown command: /nope" in capsys.readouterr().err


def test_plain_entry_is_not_a_command() -> None:
    assert not handle_slash("x = 1;", [Frame()])


def test_slash_completer_matches_prefix() -> None:
    completions = list(_SlashCompleter().get_completions(Document("/re"), None))

    assert [c.text for c in completions] == ["/reset"]


def test_normalize_strips_invisible_characters() -> None:
    assert _normalize("x\u200b = 1;\r") == "x = 1;"


def test_highlight_styles_terminals() -> None:
    fragments = highlight_line("f = fn(a) { return 1; } // note")

    assert (GROUP_STYLE["keyword"], "fn") in fragments
    assert (GROUP_STYLE["keyword"], "return") in fragments
    assert (GROUP_STYLE["number"], "1") in fragments
    assert (GROUP_STYLE["comment"], "// note") in fragments
    assert "".join(text for _, text in fragments) == "f = fn(a) { return 1; } // note"


def test_highlight_leaves_identifiers_plain() -> None:
    fragments = highlight_line("fnord")

    assert fragments == [("", "fnord")]


def test_highlight_unlexable_input_is_plain() -> None:
    assert highlight_line("x = @") == [("", "x = @")]


def test_eval_entry_survives_deeply_nested_input(capsys: pytest.CaptureFixture[str]) -> None:
    frame_box = [Frame()]

    eval_entry("-" * 3000 + "1;", frame_box)
    eval_entry("7;", frame_box)

    captured = capsys.readouterr()
    assert "Error: Input nested too deeply" in captured.err
    assert captured.out == "7\n"
