"""
Monkey Built-in and Environment Tests
=====================================
The built-in registry (len, first, last, rest, push, puts) and the chained
scope frames the evaluator resolves identifiers through.

Usage:
    python -m pytest tests/test_builtins.py -v
"""
import sys
import os
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from monkey.builtins import BUILTINS, lookup, describe_all
from monkey.environment import Environment
from monkey.errors import UnsupportedArgumentError, WrongArgumentCountError
from monkey.evaluator import Evaluator
from monkey.objects import Integer, String, Array, Builtin, NULL
from monkey.parser import parse


def _run(source: str, env: Environment | None = None, output: list | None = None):
    sink = output.append if output is not None else (lambda s: None)
    return Evaluator(output_fn=sink).evaluate(parse(source), env or Environment())


# ─────────────────────────────────────────────
#  Registry
# ─────────────────────────────────────────────

class TestRegistry(unittest.TestCase):

    def test_fixed_names(self):
        self.assertEqual(set(BUILTINS), {"len", "first", "last", "rest", "push", "puts"})

    def test_lookup(self):
        self.assertIs(lookup("len"), BUILTINS["len"])
        self.assertIsNone(lookup("map"))

    def test_arities(self):
        self.assertEqual(BUILTINS["push"].arity, 2)
        self.assertIsNone(BUILTINS["puts"].arity)
        for name in ("len", "first", "last", "rest"):
            self.assertEqual(BUILTINS[name].arity, 1, name)

    def test_describe_all_lists_every_builtin(self):
        text = describe_all()
        for name in BUILTINS:
            self.assertIn(name, text)

    def test_builtin_is_a_value(self):
        result = _run("len")
        self.assertIsInstance(result, Builtin)
        self.assertIs(result, lookup("len"))
        self.assertEqual(result.inspect(), "builtin function")

    def test_user_binding_shadows_builtin(self):
        result = _run("let len = fn(x) { 99 }; len([1, 2]);")
        self.assertEqual(result, Integer(99))


# ─────────────────────────────────────────────
#  Behaviour
# ─────────────────────────────────────────────

class TestBuiltins(unittest.TestCase):

    def test_len(self):
        for source, expected in [
            ('len("")', 0),
            ('len("four")', 4),
            ('len("hello world")', 11),
            ("len([])", 0),
            ("len([1, 2, 3])", 3),
        ]:
            with self.subTest(source=source):
                self.assertEqual(_run(source), Integer(expected))

    def test_len_rejects_other_types(self):
        with self.assertRaises(UnsupportedArgumentError) as ctx:
            _run("len(1)")
        self.assertEqual(ctx.exception, UnsupportedArgumentError("len", Integer(1)))
        self.assertEqual(str(ctx.exception), "argument to `len` not supported, got INTEGER")

    def test_first_last_rest(self):
        self.assertEqual(_run("first([1, 2, 3])"), Integer(1))
        self.assertEqual(_run("last([1, 2, 3])"), Integer(3))
        self.assertEqual(_run("rest([1, 2, 3])"), Array((Integer(2), Integer(3))))
        self.assertEqual(_run("rest([1])"), Array(()))

    def test_empty_array_yields_null(self):
        for name in ("first", "last", "rest"):
            with self.subTest(name=name):
                self.assertIs(_run(f"{name}([])"), NULL)

    def test_array_builtins_reject_non_arrays(self):
        for source, name, value in [
            ("first(1)", "first", Integer(1)),
            ('last("abc")', "last", String("abc")),
            ("rest(true)", "rest", None),
            ("push(1, 1)", "push", Integer(1)),
        ]:
            with self.subTest(source=source):
                with self.assertRaises(UnsupportedArgumentError) as ctx:
                    _run(source)
                self.assertEqual(ctx.exception.name, name)
                if value is not None:
                    self.assertEqual(ctx.exception.value, value)

    def test_push_returns_new_array(self):
        env = Environment()
        result = _run("let a = [1, 2]; let b = push(a, 3); b;", env)
        self.assertEqual(result, Array((Integer(1), Integer(2), Integer(3))))
        self.assertEqual(env.get("a"), Array((Integer(1), Integer(2))))

    def test_push_wrong_arity(self):
        with self.assertRaises(WrongArgumentCountError) as ctx:
            _run("push([1])")
        self.assertEqual((ctx.exception.got, ctx.exception.want), (1, 2))

    def test_puts_writes_each_argument(self):
        output = []
        result = _run('puts("hello", 42, [1, 2], true)', output=output)
        self.assertIs(result, NULL)
        self.assertEqual(output, ["hello", "42", "[1, 2]", "true"])

    def test_puts_with_no_arguments(self):
        output = []
        self.assertIs(_run("puts()", output=output), NULL)
        self.assertEqual(output, [])


# ─────────────────────────────────────────────
#  Environment
# ─────────────────────────────────────────────

class TestEnvironment(unittest.TestCase):

    def test_get_unbound_is_none(self):
        self.assertIsNone(Environment().get("x"))

    def test_lookup_walks_outward(self):
        outer = Environment()
        outer.set("x", Integer(1))
        inner = Environment.enclosed(outer)
        self.assertEqual(inner.get("x"), Integer(1))
        self.assertIn("x", inner)

    def test_set_is_local(self):
        outer = Environment()
        outer.set("x", Integer(1))
        inner = Environment.enclosed(outer)
        inner.set("x", Integer(2))
        self.assertEqual(inner.get("x"), Integer(2))
        self.assertEqual(outer.get("x"), Integer(1))

    def test_rebinding_replaces(self):
        env = Environment()
        env.set("x", Integer(1))
        env.set("x", Integer(2))
        self.assertEqual(env.get("x"), Integer(2))

    def test_names_are_local_only(self):
        outer = Environment()
        outer.set("a", Integer(1))
        inner = Environment.enclosed(outer)
        inner.set("b", Integer(2))
        self.assertEqual(list(inner.names()), ["b"])

    def test_later_outer_binding_is_visible(self):
        outer = Environment()
        inner = Environment.enclosed(outer)
        outer.set("late", Integer(7))
        self.assertEqual(inner.get("late"), Integer(7))


if __name__ == "__main__":
    unittest.main(verbosity=2)
