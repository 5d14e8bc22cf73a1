import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import toycc


def toks(src):
    """Return list of (kind, value) pairs, excluding EOF."""
    return [(t.kind, t.value) for t in toycc.lex(src) if t.kind != "EOF"]


# ---------- Basic tokens ----------

def test_integer_literal():
    assert toks("42") == [("NUM", 42)]


def test_identifier():
    assert toks("foo") == [("ID", "foo")]


def test_number_then_identifier():
    assert toks("12ab") == [("NUM", 12), ("ID", "ab")]


def test_eof_terminates():
    result = toycc.lex("a")
    assert result[-1].kind == "EOF"
    assert [t.kind for t in result].count("EOF") == 1


def test_empty_source():
    result = toycc.lex("")
    assert len(result) == 1
    assert result[0].kind == "EOF"


# ---------- Keywords ----------

def test_keywords():
    for kw in ("int", "return", "if", "else", "while", "for"):
        assert toks(kw) == [("KW", kw)]


def test_keyword_prefix_is_id():
    # "integer" is not the keyword "int", "returns" is not "return"
    assert toks("integer returns iffy") == [
        ("ID", "integer"), ("ID", "returns"), ("ID", "iffy"),
    ]


# ---------- Symbols ----------

def test_arith_symbols():
    assert toks("+ - * /") == [
        ("SYM", "+"), ("SYM", "-"), ("SYM", "*"), ("SYM", "/"),
    ]


def test_comparison_symbols():
    assert toks("== != < <= > >=") == [
        ("SYM", "=="), ("SYM", "!="),
        ("SYM", "<"), ("SYM", "<="),
        ("SYM", ">"), ("SYM", ">="),
    ]


def test_longest_match_without_spaces():
    assert toks("a<=b==c") == [
        ("ID", "a"), ("SYM", "<="), ("ID", "b"), ("SYM", "=="), ("ID", "c"),
    ]


def test_assign_is_not_equality():
    assert toks("a=b") == [("ID", "a"), ("SYM", "="), ("ID", "b")]


def test_delimiters():
    assert toks("( ) { } ; , &") == [
        ("SYM", "("), ("SYM", ")"),
        ("SYM", "{"), ("SYM", "}"),
        ("SYM", ";"), ("SYM", ","), ("SYM", "&"),
    ]


# ---------- Combinations ----------

def test_pointer_decl():
    assert toks("int *p = &x;") == [
        ("KW", "int"), ("SYM", "*"), ("ID", "p"),
        ("SYM", "="), ("SYM", "&"), ("ID", "x"), ("SYM", ";"),
    ]


def test_positions():
    result = toycc.lex("a  + 1")
    assert [t.pos for t in result] == [0, 3, 5, 6]


# ---------- Comments ----------

def test_line_comment_stripped():
    assert toks("x // comment\ny") == [("ID", "x"), ("ID", "y")]


def test_block_comment_stripped():
    assert toks("x /* block */ y") == [("ID", "x"), ("ID", "y")]


def test_comment_keeps_positions():
    result = toycc.lex("/* c */ y")
    assert result[0].pos == 8


# ---------- Errors ----------

def test_unknown_character_raises():
    with pytest.raises(toycc.LexError):
        toycc.lex("a @ b")


def test_unsupported_symbol_raises():
    # '!' is only valid as part of '!='
    with pytest.raises(toycc.LexError):
        toycc.lex("!a")


def test_lex_error_is_compile_error():
    with pytest.raises(toycc.CompileError, match="at 2"):
        toycc.lex("1 $")


# ---------- Literal range ----------

def test_largest_literal():
    assert toks("9223372036854775807") == [("NUM", 2**63 - 1)]


def test_literal_out_of_range():
    with pytest.raises(toycc.LexError, match="out of range at 10"):
        toycc.lex("return 1; 9223372036854775808")


def test_huge_literal_out_of_range():
    with pytest.raises(toycc.LexError):
        toycc.lex("99999999999999999999")


# ---------- ASCII only ----------

def test_non_ascii_identifier_rejected():
    with pytest.raises(toycc.LexError):
        toycc.lex("aé")


def test_non_ascii_digits_rejected():
    # Arabic-Indic digits are not integer literals
    with pytest.raises(toycc.LexError):
        toycc.lex("١٢")
