from __future__ import annotations

from textwrap import dedent

import pytest

from tests.support.harness import (
    ClayUndefinedBinding,
    ClayUndefinedIdentifier,
    ClyInteger,
    Frame,
    repl_eval,
    run_runtime_case,
)

SCENARIOS = [
    pytest.param(
        "x = 5; x;",
        ("integer", 5),
        None,
        id="define-then-read",
    ),
    pytest.param(
        "x = 5; x = 6; x;",
        ("integer", 6),
        None,
        id="redefine-same-frame-overwrites",
    ),
    pytest.param(
        "x = 1; x := 2; x;",
        ("integer", 2),
        None,
        id="mutate-root-binding",
    ),
    pytest.param(
        "y := 1;",
        None,
        ClayUndefinedBinding,
        id="mutate-unbound-name",
    ),
    pytest.param(
        "nope;",
        None,
        ClayUndefinedIdentifier,
        id="read-unbound-name",
    ),
    pytest.param(
        dedent(
            """\
            x = 1;
            f = fn(x) { x = 5; return x; };
            f(3);
        """
        ),
        ("integer", 5),
        None,
        id="shadow-inside-call",
    ),
    pytest.param(
        dedent(
            """\
            x = 1;
            f = fn(x) { x = 5; return x; };
            f(3);
            x;
        """
        ),
        ("integer", 1),
        None,
        id="shadow-leaves-outer-untouched",
    ),
    pytest.param(
        dedent(
            """\
            x = 1;
            f = fn() { x = 7; return x; };
            f();
            x;
        """
        ),
        ("integer", 1),
        None,
        id="define-in-call-is-local",
    ),
    pytest.param(
        dedent(
            """\
            count = 0;
            bump = fn() { count := 5; return count; };
            bump();
            count;
        """
        ),
        ("integer", 5),
        None,
        id="mutate-reaches-enclosing-frame",
    ),
    pytest.param(
        dedent(
            """\
            x = 1;
            f = fn() { return x; };
            g = fn() { x = 99; return f(); };
            g();
        """
        ),
        ("integer", 1),
        None,
        id="lexical-capture-ignores-call-site",
    ),
    pytest.param(
        dedent(
            """\
            f = fn() { return hidden; };
            caller = fn() { hidden = 4; return f(); };
            caller();
        """
        ),
        None,
        ClayUndefinedIdentifier,
        id="no-dynamic-scope",
    ),
    pytest.param(
        dedent(
            """\
            x = 1;
            f = fn() { return x; };
            x := 2;
            f();
        """
        ),
        ("integer", 2),
        None,
        id="closure-sees-later-mutation",
    ),
    pytest.param(
        dedent(
            """\
            f = fn() { return late; };
            late = "here";
            f();
        """
        ),
        ("string", "here"),
        None,
        id="closure-sees-later-define",
    ),
    pytest.param(
        dedent(
            """\
            make = fn(start) {
              read = fn() { return start; };
              return read;
            };
            r = make(10);
            r();
        """
        ),
        ("integer", 10),
        None,
        id="returned-closure-keeps-activation",
    ),
    pytest.param(
        dedent(
            """\
            make = fn() {
              n = 0;
              set = fn(v) { n := v; return n; };
              get = fn() { return n; };
              return [set, get];
            };
            pair = make();
            set, get = pair;
            set(8);
            get();
        """
        ),
        ("integer", 8),
        None,
        id="sibling-closures-share-frame",
    ),
    pytest.param(
        "{ inner = 3; } inner;",
        ("integer", 3),
        None,
        id="block-has-no-own-scope",
    ),
    pytest.param(
        dedent(
            """\
            f = fn() { { local = 1; } return local; };
            f();
        """
        ),
        ("integer", 1),
        None,
        id="nested-block-shares-function-frame",
    ),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_scoping(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


def test_failed_mutate_does_not_create_binding() -> None:
    frame = Frame()

    with pytest.raises(ClayUndefinedBinding):
        repl_eval("y := 1;", frame)

    assert frame.lookup("y") is None


def test_dotted_identifier_is_one_flat_key() -> None:
    frame = Frame()

    assert repl_eval("ab = 1; a.b;", frame) == ClyInteger(1)
    assert repl_eval("xyz = 2; x.y.z;", frame) == ClyInteger(2)

    with pytest.raises(ClayUndefinedIdentifier) as exc_info:
        repl_eval("config.host;", frame)
    assert exc_info.value.name == "confighost"
