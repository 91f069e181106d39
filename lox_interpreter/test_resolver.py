import sys

from . lexer import Lexer
from . parser import Parser
from . resolver import Resolver
from . errors import ErrorCode
from . import ast_nodes as ast


def resolve(source_code):
    tokens = Lexer(source_code).scan_tokens()
    parser = Parser(tokens)
    statements = parser.parse()
    assert not parser.had_error, [str(e) for e in parser.errors]
    resolver = Resolver()
    resolver.resolve(statements)
    return resolver, statements


def run_resolver_test(name, source_code, expected_error=None):
    """
    Runs the lexer, parser, and resolver, then checks for a specific error.
    """
    print(f"--- Running Resolver Test: {name} ---")

    resolver, _ = resolve(source_code)
    messages = [str(error) for error in resolver.errors]

    if expected_error:
        if resolver.had_error and any(expected_error in message for message in messages):
            print(f"PASS: {name} (Correctly caught error)")
            return True
        print(f"FAIL: {name}")
        print(f"Expected error containing: '{expected_error}'")
        print(f"Got: {messages}")
        return False

    if not resolver.had_error:
        print(f"PASS: {name} (Correctly identified valid code)")
        return True
    print(f"FAIL: {name}")
    print("Expected no errors, but got:")
    for message in messages:
        print(message)
    return False


RESOLVER_TESTS = [
    # Errors
    ("Redeclared Local", "{ var a = 1; var a = 2; }", "Already a variable with this name in this scope."),
    ("Duplicate Parameter", "fun f(a, a) {}", "Already a variable with this name in this scope."),
    ("Local Function Clashes With Variable", "{ var f; fun f() {} }", "Already a variable with this name in this scope."),
    ("Local Read in Own Initializer", "{ var a = a; }", "Can't read local variable in its own initializer."),
    ("Shadowing Read in Own Initializer", "var a = 1; { var a = a + 1; }",
     "Can't read local variable in its own initializer."),

    # Valid programs
    ("Global Redeclaration", "var a = 1; var a = 2;", None),
    ("Global Read in Own Initializer", "var a = a;", None),
    ("Shadowing in Nested Block", "{ var a = 1; { var a = 2; } }", None),
    ("Parameter Shadowed by Body Block", "fun f(a) { { var a = 1; } }", None),
    ("Local Recursion", "{ fun f(n) { return f(n); } }", None),
]


def test_resolver_cases():
    failed = [name for name, source, expected in RESOLVER_TESTS
              if not run_resolver_test(name, source, expected)]
    assert failed == []


def test_error_details():
    resolver, _ = resolve("{\n  var a = 1;\n  var a = 2;\n}")
    [error] = resolver.errors
    assert error.line == 3
    assert error.code == ErrorCode.DUPLICATE_DECLARATION
    assert str(error) == "[Line 3] Error at 'a': Already a variable with this name in this scope."

    resolver, _ = resolve("{ var b = b; }")
    assert [e.code for e in resolver.errors] == [ErrorCode.SELF_REFERENCING_INITIALIZER]


def test_locals_record_scope_depth():
    resolver, statements = resolve("var g; { var a; { fun f(x) { print x; print a; print g; } } }")
    outer_block = statements[1]
    function = outer_block.statements[1].statements[0]
    reads = [stmt.expression for stmt in function.body]

    # x lives in the function's own scope, a two scopes further out.
    assert resolver.locals[reads[0]] == 0
    assert resolver.locals[reads[1]] == 2
    # Globals are never recorded.
    assert reads[2] not in resolver.locals


def test_assignment_depth_is_recorded():
    resolver, statements = resolve("{ var a; { a = 1; } }")
    assign = statements[0].statements[1].statements[0].expression
    assert isinstance(assign, ast.Assign)
    assert resolver.locals[assign] == 1


def test_same_name_on_one_line_resolves_separately():
    resolver, statements = resolve("{ var a; print a; } print a;")
    local_read = statements[0].statements[1].expression
    global_read = statements[1].expression
    assert resolver.locals[local_read] == 0
    assert global_read not in resolver.locals


def test_for_loop_variable_and_increment():
    resolver, statements = resolve("fun f() { for (var i = 0; i < 3; i = i + 1) print i; }")
    loop = statements[0].body[0].statements[1]
    assert resolver.locals[loop.condition.left] == 0
    assert resolver.locals[loop.body.expression] == 0
    assert resolver.locals[loop.increment] == 0


def main():
    tests = [value for key, value in sorted(globals().items()) if key.startswith("test_")]
    tests_passed = 0
    for test in tests:
        try:
            test()
            tests_passed += 1
        except AssertionError:
            print(f"FAIL: {test.__name__}")

    print(f"\n--- Resolver Test Summary ---")
    print(f"{tests_passed} / {len(tests)} tests passed.")

    if tests_passed != len(tests):
        sys.exit(1)

if __name__ == "__main__":
    main()
