import pytest
from hypothesis import given, settings, strategies as st

from lox.debug_utils.ast_printer import print_ast
from lox.errors import LoxSyntaxErrors
from lox.reader.parser import Parser, parse
from lox.reader.scanner import scan
from lox.syntax.expr import Assign, Binary, Call, Grouping, Literal, Variable
from lox.syntax.stmt import Block, ExpressionStmt, FunDecl, Return, VarDecl, While
from lox.types.nil import Nil


def ast(source):
    return print_ast(parse(scan(source)))


def errors(source, **kwargs):
    parser = Parser(scan(source), **kwargs)
    statements = parser.parse_partial()
    return statements, parser.errors


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1 + 2 * 3;", "(; (+ 1 (* 2 3)))"),
        ("(1 + 2) * 3;", "(; (* (group (+ 1 2)) 3))"),
        ("1 - 2 - 3;", "(; (- (- 1 2) 3))"),
        ("8 / 4 / 2;", "(; (/ (/ 8 4) 2))"),
        ("a = b = 3;", "(; (= a (= b 3)))"),
        ("!!true;", "(; (! (! true)))"),
        ("-a * b;", "(; (* (- a) b))"),
        ("a or b and c;", "(; (or a (and b c)))"),
        ("a and b or c;", "(; (or (and a b) c))"),
        ("a == b < c;", "(; (== a (< b c)))"),
        ("1 < 2 == 3 >= 4;", "(; (== (< 1 2) (>= 3 4)))"),
        ("a = 1 + 2;", "(; (= a (+ 1 2)))"),
        ("f();", "(; (call f))"),
        ("f()(x)(1, 2);", "(; (call (call (call f) x) 1 2))"),
        ("-f(1);", "(; (- (call f 1)))"),
        ('print "hi";', '(print "hi")'),
        ("print nil;", "(print nil)"),
        ("print 2.5;", "(print 2.5)"),
        ("var x;", "(var x)"),
        ("var x = 1;", "(var x 1)"),
        ("{ var x = 1; print x; }", "(block (var x 1) (print x))"),
        ("while (a) a = a - 1;", "(while a (; (= a (- a 1))))"),
    ],
)
def test_expression_and_statement_shapes(source, expected):
    assert ast(source) == expected


def test_dangling_else_binds_to_nearest_if():
    assert ast("if (a) if (b) x; else y;") == "(if a (if-else b (; x) (; y)))"


def test_for_desugars_to_block_and_while():
    assert ast("for (var i = 0; i < 3; i = i + 1) print i;") == (
        "(block (var i 0) (while (< i 3) (block (print i) (; (= i (+ i 1))))))"
    )


def test_for_with_empty_clauses():
    assert ast("for (;;) print 1;") == "(while true (print 1))"
    assert ast("for (i = 0; i < 1;) print i;") == "(block (; (= i 0)) (while (< i 1) (print i)))"


def test_function_declaration_and_return():
    assert ast("fun add(a, b) { return a + b; }") == "(fun add (a b) (return (+ a b)))"
    assert ast("fun f() { return; }") == "(fun f () (return))"


def test_node_values():
    (stmt,) = parse(scan("x = nil;"))
    assert isinstance(stmt, ExpressionStmt)
    assert isinstance(stmt.expression, Assign)
    assert stmt.expression.name.lexeme == "x"
    assert stmt.expression.value == Literal(Nil)

    (stmt,) = parse(scan("f(1)(2);"))
    call = stmt.expression
    assert isinstance(call, Call) and isinstance(call.callee, Call)
    assert isinstance(call.callee.callee, Variable)
    assert call.arguments == (Literal(2.0),)

    (decl,) = parse(scan("fun f(a) { return (a); }"))
    assert isinstance(decl, FunDecl)
    assert [p.lexeme for p in decl.params] == ["a"]
    assert isinstance(decl.body[0], Return)
    assert isinstance(decl.body[0].value, Grouping)


def test_for_produces_while_not_a_loop_node():
    (stmt,) = parse(scan("for (var i = 0; i < 1; i = i + 1) {}"))
    assert isinstance(stmt, Block)
    assert isinstance(stmt.statements[0], VarDecl)
    assert isinstance(stmt.statements[1], While)
    assert isinstance(stmt.statements[1].condition, Binary)


@pytest.mark.parametrize("source", ["a + b = c;", "(a) = 1;", "f() = 2;", "1 = 2;"])
def test_invalid_assignment_target(source):
    with pytest.raises(LoxSyntaxErrors) as exc:
        parse(scan(source))
    assert [e.message for e in exc.value.errors] == ["Invalid assignment target."]
    assert exc.value.errors[0].where == " at '='"


def test_errors_are_collected_and_parsing_recovers():
    statements, errs = errors("var = 1;\nprint ;\nvar ok = 2;")
    assert [(e.line, e.message) for e in errs] == [
        (1, "Expect variable name."),
        (2, "Expect expression."),
    ]
    assert len(statements) == 1
    assert statements[0].name.lexeme == "ok"


def test_recovery_inside_block():
    statements, errs = errors("{ print ; print 1; }\nprint 2;")
    assert [e.message for e in errs] == ["Expect expression."]
    assert print_ast(statements) == "(block (print 1))\n(print 2)"


@pytest.mark.parametrize(
    "source,message,where",
    [
        ("{ print 1;", "Expect '}' after block.", " at end"),
        ("print 1", "Expect ';' after value.", " at end"),
        ("(1 + 2;", "Expect ')' after expression.", " at ';'"),
        ("f(1, 2;", "Expect ')' after arguments.", " at ';'"),
        ("if 1) x;", "Expect '(' after 'if'.", " at '1'"),
        ("fun (a) {}", "Expect function name.", " at '('"),
        ("fun f(a b) {}", "Expect ')' after parameters.", " at 'b'"),
        ("fun f() return 1;", "Expect '{' before function body.", " at 'return'"),
        ("return 1", "Expect ';' after return value.", " at end"),
    ],
)
def test_syntax_error_messages(source, message, where):
    with pytest.raises(LoxSyntaxErrors) as exc:
        parse(scan(source))
    first = exc.value.errors[0]
    assert first.message == message
    assert first.where == where
    assert first.kind == "SyntaxError"


def test_argument_limit_is_reported_without_aborting():
    statements, errs = errors("f(1, 2, 3);\nprint 1;", max_arguments=2)
    assert [e.message for e in errs] == ["Can't have more than 2 arguments."]
    assert len(statements) == 2


def test_parameter_limit():
    _, errs = errors("fun f(a, b, c) {}", max_arguments=2)
    assert [e.message for e in errs] == ["Can't have more than 2 parameters."]


def test_missing_eof_is_tolerated():
    tokens = scan("print 1;")[:-1]
    assert print_ast(Parser(tokens).parse()) == "(print 1)"


def test_reparsing_is_deterministic():
    tokens = scan("fun f(n) { if (n < 2) return n; return f(n - 1) + f(n - 2); } print f(10);")
    assert Parser(tokens).parse() == Parser(tokens).parse()


# -----------------------------------------------------
# Property tests
# -----------------------------------------------------

names = st.sampled_from(["a", "b", "x", "count", "_tmp"])
numbers = st.integers(min_value=0, max_value=50).map(str)
leaves = st.one_of(names, numbers, st.just("nil"), st.just("true"), st.just('"s"'))
binary_ops = st.sampled_from(["+", "-", "*", "/", "<", "<=", ">", ">=", "==", "!=", "and", "or"])


def _combine(children):
    return st.one_of(
        st.tuples(children, binary_ops, children).map(lambda t: f"{t[0]} {t[1]} {t[2]}"),
        children.map(lambda e: f"({e})"),
        children.map(lambda e: f"!{e}"),
        st.tuples(names, st.lists(children, max_size=3)).map(lambda t: f"{t[0]}({', '.join(t[1])})"),
    )


expressions = st.recursive(leaves, _combine, max_leaves=12)


@settings(max_examples=75, deadline=None)
@given(expressions)
def test_parsing_same_tokens_twice_gives_equal_trees(source):
    tokens = scan(source + ";")
    first = Parser(tokens).parse()
    second = Parser(tokens).parse()
    assert first == second
    assert print_ast(first) == print_ast(second)
