import pytest

from awkit.errors import ParsingError
from awkit.lexer import TokenKind, tokenize
from awkit.parser import Parser, parse
from awkit.syntax import (
    Assign,
    BinaryExpr,
    BinOp,
    Call,
    DictExpr,
    If,
    ListExpr,
    Literal,
    Program,
    Return,
    Var,
)

ALL_FUNCTIONS = """
            events = query_bucket(find_bucket("testid", "testhost"));
            events = flood(events);
            events = sort_by_duration(events);
            events = limit_events(events, 10000);
            events = sort_by_timestamp(events);
            events = concat(events, query_bucket("testid"));
            events = categorize(events, [[["test"], { "type": "regex", "regex": "value$" }], [["test", "testing"], { "type": "regex", "regex": "value$" }]]);
            events = tag(events, [["testtag", { "type": "regex", "regex": "test$" }], ["another testtag", { "type": "regex", "regex": "test-pat$" }]]);
            total_duration = sum_durations(events);
            bucketnames = query_bucket_names();
            print("test", "test2");
            url_events = split_url_events (events);
            filtered_events = filter_period_intersect(events, events);
            filtered_events = filter_keyvals(events, "$category", [["Uncategorized"]]);
            filtered_events = filter_keyvals_regex(events, "key", "regex");
            chunked_events = chunk_events_by_key(events, "key");
            merged_events = merge_events_by_keys(events, ["key"]);
            return  merged_events;"""


def test_return_number():
    assert parse("return 1;") == Program([Return(Literal(1.0))])


def test_operators_share_precedence_and_associate_left():
    expected = BinaryExpr(
        BinOp.MUL, BinaryExpr(BinOp.ADD, Literal(1.0), Literal(2.0)), Literal(3.0)
    )
    assert parse("return 1+2*3;") == Program([Return(expected)])


def test_parentheses_group():
    expected = BinaryExpr(
        BinOp.MUL, Literal(1.0), BinaryExpr(BinOp.ADD, Literal(2.0), Literal(3.0))
    )
    assert parse("return 1*(2+3);") == Program([Return(expected)])


def test_equality():
    expected = BinaryExpr(BinOp.EQUAL, Literal("a"), Literal("b"))
    assert parse('return "a"=="b";') == Program([Return(expected)])


def test_old_style_return_assignment():
    assert parse("RETURN=1;") == Program([Assign("RETURN", Literal(1.0))])


def test_return_of_assignment():
    assert parse("return a=1;") == Program([Return(Assign("a", Literal(1.0)))])


def test_calls():
    assert parse("f();") == Program([Call("f", [])])
    assert parse("print(1, 2);") == Program([Call("print", [Literal(1.0), Literal(2.0)])])


def test_lists():
    expected = ListExpr([Literal(1.0), ListExpr([BinaryExpr(BinOp.ADD, Literal(1.0), Literal(2.0))])])
    assert parse("return [1,[1+2]];") == Program([Return(expected)])
    assert parse("return [];") == Program([Return(ListExpr([]))])


def test_dicts_keep_key_order():
    program = parse('return {"test": 2, "test2": "teststr"};')
    assert program == Program(
        [Return(DictExpr({"test": Literal(2.0), "test2": Literal("teststr")}))]
    )
    assert list(program.stmts[0].value.entries) == ["test", "test2"]
    assert parse("return {};") == Program([Return(DictExpr({}))])


def test_if_elif_else_chain():
    program = parse(
        """
        if a { n=2; }
        elif b { n=3; }
        else { n=4; }
        """
    )
    assert program == Program(
        [
            If(
                [
                    (Var("a"), [Assign("n", Literal(2.0))]),
                    (Var("b"), [Assign("n", Literal(3.0))]),
                    (Literal(True), [Assign("n", Literal(4.0))]),
                ]
            )
        ]
    )


def test_nested_if_and_empty_block():
    program = parse("a=True; if a { if a { n = 2; } } if False { } return n;")
    assert program.stmts[1] == If([(Var("a"), [If([(Var("a"), [Assign("n", Literal(2.0))])])])])
    assert program.stmts[2] == If([(Literal(False), [])])
    assert program.stmts[3] == Return(Var("n"))


def test_empty_programs():
    assert parse("") == Program([])
    assert parse(";;") == Program([])


def test_comment_after_statement():
    assert parse("return 1;# testing 123") == Program([Return(Literal(1.0))])


def test_unknown_character_ends_input():
    assert parse("return 1; @ garbage") == Program([Return(Literal(1.0))])


def test_full_function_query_parses():
    program = parse(ALL_FUNCTIONS)
    assert program.stmts[-1] == Return(Var("merged_events"))
    assert program.stmts[0] == Assign(
        "events",
        Call("query_bucket", [Call("find_bucket", [Literal("testid"), Literal("testhost")])]),
    )


def test_span_covers_statement_without_semicolon():
    text = "x = 1 + 2;"
    stmt = parse(text).stmts[0]
    assert text[stmt.span.lo : stmt.span.hi] == "x = 1 + 2"


def test_parser_accepts_token_iterable():
    assert Parser(tokenize("x;")).parse_program() == Program([Var("x")])


@pytest.mark.parametrize(
    "code",
    [
        "return 1",
        "1 +;",
        "{1: 2};",
        "[1,];",
        "if a { n=1;",
        "}",
        "f(1,);",
        "return;",
        "x = ;",
        "else { }",
    ],
)
def test_invalid_programs_raise(code):
    with pytest.raises(ParsingError):
        parse(code)


def test_error_names_offending_token():
    with pytest.raises(ParsingError) as info:
        parse("return 1 2;")
    assert TokenKind.NUMBER.name in info.value.message