"""
Parser tests: statements, loops, comments, whitespace and error reporting.
"""

import pytest

from bfwalk import (
    Comment,
    Decrement,
    Increment,
    Input,
    Loop,
    Output,
    ParseError,
    PointerLeft,
    PointerRight,
    Program,
    emit,
    parse,
)
from bfwalk.instructions import max_depth


@pytest.mark.parametrize("source, expected", [
    ("+", Increment()),
    ("-", Decrement()),
    (">", PointerRight()),
    ("<", PointerLeft()),
    (".", Output()),
    (",", Input()),
])
def test_single_commands(source, expected):
    assert parse(source) == Program((expected,))


def test_empty_source():
    assert parse("") == Program(())
    assert parse("  \n\t ") == Program(())


def test_loop():
    assert parse("[++-]") == Program((Loop((Increment(), Increment(), Decrement())),))


def test_nested_loop():
    expected = Program((Loop((Increment(), Loop((Increment(), Increment())), Decrement())),))
    assert parse("[+[++]-]") == expected


def test_ignore_whitespace():
    program = parse("+-+>  <  -\n\n    +")
    assert program == Program((Increment(), Decrement(), Increment(), PointerRight(),
                               PointerLeft(), Decrement(), Increment()))


def test_whitespace_inside_brackets():
    assert parse("[ \n + \n ]") == Program((Loop((Increment(),)),))


def test_comment_ended_by_newline():
    assert parse("+ //+\n    +") == Program((Increment(), Comment(), Increment()))


def test_comment_ended_by_end_of_input():
    assert parse("+ //") == Program((Increment(), Comment()))
    assert parse("+ // trailing note with [ and ]") == Program((Increment(), Comment()))


def test_comment_inside_loop():
    assert parse("[+ // note\n]") == Program((Loop((Increment(), Comment())),))


def test_comment_swallows_commands():
    assert parse("//+++\n-") == Program((Comment(), Decrement()))


def test_bytes_source():
    assert parse(b"+[-]") == Program((Increment(), Loop((Decrement(),))))


def test_parse_hello_world(hello_world):
    program = parse(hello_world)
    assert max_depth(program) == 2
    assert emit(program).startswith("++++++++[>++++[>++>+++>+++>+<<<<-]")


def test_reparse_emitted_text_is_identical():
    source = "++ [>+++ [>+<-] <-] , . // done"
    program = parse(source)
    assert parse(emit(program)) == parse(emit(parse(emit(program))))
    assert emit(parse(emit(program))) == emit(program)
    assert parse(emit(program, comments=True)) == program


def test_unexpected_character_at_top_level():
    with pytest.raises(ParseError) as excinfo:
        parse("++a+")
    err = excinfo.value
    assert err.reason == "unexpected character"
    assert err.position == 2
    assert (err.line, err.column) == (1, 3)
    assert "'a'" in str(err)


def test_stray_closing_bracket():
    with pytest.raises(ParseError) as excinfo:
        parse("+]")
    assert excinfo.value.reason == "unexpected character"
    assert excinfo.value.position == 1
    assert "no matching '['" in str(excinfo.value)


def test_single_slash_is_not_a_comment():
    with pytest.raises(ParseError) as excinfo:
        parse("+ / +")
    assert excinfo.value.reason == "unexpected character"
    assert excinfo.value.position == 2


def test_unterminated_loop_at_end_of_input():
    with pytest.raises(ParseError) as excinfo:
        parse("+\n[+[-]")
    err = excinfo.value
    assert err.reason == "unterminated loop"
    assert err.position == 7
    assert "line 2, column 1" in str(err)


def test_unrecognized_character_inside_loop():
    with pytest.raises(ParseError) as excinfo:
        parse("[+x]")
    assert excinfo.value.reason == "unterminated loop"
    assert excinfo.value.position == 2


def test_error_context_marks_line():
    with pytest.raises(ParseError) as excinfo:
        parse("+\n+\n+?\n+")
    ctx = excinfo.value.context
    assert ">    3 | +?" in ctx
    assert "^" in ctx


def test_deep_nesting_does_not_recurse():
    depth = 5000
    program = parse("[" * depth + "+" + "]" * depth)
    assert max_depth(program) == depth


def test_deep_tree_equality_hash_and_repr():
    depth = 5000
    program = parse("[" * depth + "+" + "]" * depth)
    assert parse(emit(program)) == program
    assert hash(parse(emit(program))) == hash(program)
    assert program != parse("[" * depth + "-" + "]" * depth)
    assert program != parse("[" * (depth - 1) + "+" + "]" * (depth - 1))
    assert repr(program).startswith("Program('[[[")


def test_rejects_non_text_source():
    with pytest.raises(TypeError):
        parse(42)
