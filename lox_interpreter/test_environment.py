import sys

from . environment import Environment
from . errors import ErrorCode, LoxRuntimeError
from . tokens import Token, TokenType


def name(lexeme, line=1):
    # Environment lookups take the identifier token so errors carry its line.
    return Token(TokenType.IDENTIFIER, lexeme, None, line)


def test_define_and_get():
    env = Environment()
    env.define("a", 1.0)
    assert env.get(name("a")) == 1.0


def test_define_overwrites_in_same_scope():
    env = Environment()
    env.define("a", 1.0)
    env.define("a", "again")
    assert env.get(name("a")) == "again"


def test_get_walks_enclosing_chain():
    outer = Environment()
    outer.define("a", "outer")
    inner = Environment(Environment(outer))
    assert inner.get(name("a")) == "outer"


def test_define_shadows_without_touching_enclosing():
    outer = Environment()
    outer.define("a", "outer")
    inner = Environment(outer)
    inner.define("a", "inner")
    assert inner.get(name("a")) == "inner"
    assert outer.get(name("a")) == "outer"


def test_assign_updates_nearest_binding():
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    inner.assign(name("a"), 2.0)
    assert outer.get(name("a")) == 2.0
    assert "a" not in inner.values


def test_undefined_get_raises_with_line():
    env = Environment(Environment())
    try:
        env.get(name("missing", line=7))
    except LoxRuntimeError as error:
        assert error.line == 7
        assert error.message == "Undefined variable 'missing'."
        assert error.code == ErrorCode.UNDEFINED_VARIABLE
        return
    raise AssertionError("Expected LoxRuntimeError for undefined variable.")


def test_assign_never_creates_binding():
    root = Environment()
    env = Environment(root)
    try:
        env.assign(name("ghost", line=3), 1.0)
    except LoxRuntimeError as error:
        assert error.line == 3
        assert "ghost" not in env.values
        assert "ghost" not in root.values
        return
    raise AssertionError("Expected LoxRuntimeError for assignment to undefined variable.")


def test_ancestor_counts_hops_outward():
    root = Environment()
    middle = Environment(root)
    leaf = Environment(middle)
    assert leaf.ancestor(0) is leaf
    assert leaf.ancestor(1) is middle
    assert leaf.ancestor(2) is root


def test_get_at_skips_nearer_shadowing_binding():
    outer = Environment()
    outer.define("a", "outer")
    inner = Environment(outer)
    inner.define("a", "inner")
    assert inner.get_at(1, name("a")) == "outer"
    assert inner.get_at(0, name("a")) == "inner"


def test_assign_at_writes_only_the_addressed_scope():
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    inner.define("a", 2.0)
    inner.assign_at(1, name("a"), 3.0)
    assert outer.values["a"] == 3.0
    assert inner.values["a"] == 2.0


def test_get_at_missing_binding_raises():
    env = Environment(Environment())
    try:
        env.get_at(1, name("late", line=5))
    except LoxRuntimeError as error:
        assert error.line == 5
        assert error.code == ErrorCode.UNDEFINED_VARIABLE
        return
    raise AssertionError("Expected LoxRuntimeError for a missing binding.")


def main():
    tests = [value for key, value in sorted(globals().items()) if key.startswith("test_")]
    tests_passed = 0
    for test in tests:
        print(f"--- Running Environment Test: {test.__name__} ---")
        try:
            test()
            print(f"PASS: {test.__name__}")
            tests_passed += 1
        except AssertionError:
            print(f"FAIL: {test.__name__}")

    print(f"\n--- Environment Test Summary ---")
    print(f"{tests_passed} / {len(tests)} tests passed.")

    if tests_passed != len(tests):
        sys.exit(1)

if __name__ == "__main__":
    main()
