import io
import math
import unittest

from lox.core.evaluator import Interpreter, is_equal, is_truthy, stringify
from lox.core.parser import parse
from lox.core.scanner import scan
from lox.lang.error import InvalidOperand, LoxRuntimeError, UndefinedVariable


def compile_source(source):
    tokens, errors = scan(source)
    assert not errors, errors
    statements, errors = parse(tokens)
    assert not errors, errors
    return statements


class InterpreterTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.interpreter = Interpreter(self.out)

    def run_source(self, source):
        """Returns printed lines."""
        self.interpreter.interpret(compile_source(source))
        return self.out.getvalue().splitlines()

    def evaluate(self, source):
        return Interpreter(io.StringIO()).evaluate(compile_source(source + ";")[0].expression)

    def test_print(self):
        cases = {
            "print 1;": ["1"],
            "print 2.5;": ["2.5"],
            "print -0.5;": ["-0.5"],
            "print \"a\" + \"b\";": ["ab"],
            "print true;": ["true"],
            "print !true;": ["false"],
            "print nil;": ["nil"],
            "print 1 == 1;": ["true"],
            "print 10 / 4;": ["2.5"],
            "print 1 / 100000;": ["0.00001"],
            "print (1 + 2) * 3;": ["9"],
        }
        for case, expected in cases.items():
            with self.subTest(case=case):
                self.out = io.StringIO()
                self.interpreter = Interpreter(self.out)
                self.assertEqual(expected, self.run_source(case))

    def test_shadowing_restored_after_block(self):
        lines = self.run_source("var a = 1; { var a = 2; print a; } print a;")
        self.assertEqual(["2", "1"], lines)

    def test_assignment_in_block_reaches_outer(self):
        lines = self.run_source("var a = 1; { a = 2; } print a;")
        self.assertEqual(["2"], lines)

    def test_nested_blocks(self):
        source = """
        var a = "global a";
        var b = "global b";
        {
            var a = "outer a";
            {
                var a = "inner a";
                print a;
                print b;
            }
            print a;
        }
        print a;
        """
        self.assertEqual(["inner a", "global b", "outer a", "global a"], self.run_source(source))

    def test_block_scope_discarded(self):
        with self.assertRaises(UndefinedVariable):
            self.run_source("{ var inner = 1; } print inner;")
        self.assertIs(self.interpreter.globals, self.interpreter.environment)

    def test_scope_restored_after_error_in_block(self):
        with self.assertRaises(LoxRuntimeError):
            self.run_source("var a = 1; { var a = 2; print -\"x\"; }")
        self.assertIs(self.interpreter.globals, self.interpreter.environment)
        self.interpreter.interpret(compile_source("print a;"))
        self.assertEqual(["1"], self.out.getvalue().splitlines())

    def test_assign_undeclared(self):
        with self.assertRaises(UndefinedVariable):
            self.run_source("a = 5;")

    def test_read_undeclared(self):
        with self.assertRaises(UndefinedVariable) as context:
            self.run_source("print nope;")
        self.assertEqual((1, " at 'nope'", "Undefined variable 'nope'."), context.exception.triple)

    def test_assignment_is_an_expression(self):
        self.assertEqual(["3", "3"], self.run_source("var a; var b; print a = b = 3; print b;"))

    def test_var_without_initializer_is_nil(self):
        self.assertEqual(["nil"], self.run_source("var a; print a;"))

    def test_redeclaration_overwrites(self):
        self.assertEqual(["2"], self.run_source("var a = 1; var a = 2; print a;"))

    def test_for_loop(self):
        self.assertEqual(["0", "1", "2"], self.run_source("for (var i = 0; i < 3; i = i + 1) print i;"))
        with self.assertRaises(UndefinedVariable):
            self.interpreter.interpret(compile_source("print i;"))

    def test_while_loop(self):
        source = "var i = 0; var total = 0; while (i < 5) { total = total + i; i = i + 1; } print total;"
        self.assertEqual(["10"], self.run_source(source))

    def test_fibonacci(self):
        source = """
        var a = 0;
        var temp;
        for (var b = 1; a < 100; b = temp + b) {
            print a;
            temp = a;
            a = b;
        }
        """
        self.assertEqual(["0", "1", "1", "2", "3", "5", "8", "13", "21", "34", "55", "89"], self.run_source(source))

    def test_if_else(self):
        cases = {
            "if (true) print 1; else print 2;": ["1"],
            "if (false) print 1; else print 2;": ["2"],
            "if (nil) print 1;": [],
            "if (0) print \"zero is truthy\";": ["zero is truthy"],
            "if (\"\") print \"empty is truthy\";": ["empty is truthy"],
        }
        for case, expected in cases.items():
            with self.subTest(case=case):
                self.out = io.StringIO()
                self.interpreter = Interpreter(self.out)
                self.assertEqual(expected, self.run_source(case))

    def test_logical_short_circuit(self):
        lines = self.run_source(
            "var a = 0; true or (a = 1); false and (a = 2); print a; print nil or \"yes\"; print 1 and 2;"
            "print false or nil; print nil and undefined;"
        )
        self.assertEqual(["0", "yes", "2", "nil", "nil"], lines)

    def test_binary_evaluates_both_operands_left_first(self):
        lines = self.run_source("var a = 1; print (a = 2) + (a * 10); print a;")
        self.assertEqual(["22", "2"], lines)

    def test_comma_drops_earlier_operands(self):
        lines = self.run_source("var a = 1; print (a = 2, a + 1); print a;")
        self.assertEqual(["2", "1"], lines)

    def test_unary(self):
        self.assertEqual(-3.0, self.evaluate("-3"))
        self.assertEqual(3.0, self.evaluate("--3"))
        self.assertIs(False, self.evaluate("!1"))
        self.assertIs(True, self.evaluate("!nil"))
        self.assertIs(True, self.evaluate("!!\"\""))

    def test_arithmetic_and_comparison(self):
        cases = {
            "1 + 2": 3.0, "5 - 7": -2.0, "3 * 4": 12.0, "1 / 4": 0.25,
            "1 < 2": True, "2 <= 2": True, "1 > 2": False, "3 >= 4": False,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.evaluate(case), case)

    def test_division_by_zero(self):
        self.assertEqual(math.inf, self.evaluate("1 / 0"))
        self.assertEqual(-math.inf, self.evaluate("-1 / 0"))
        self.assertTrue(math.isnan(self.evaluate("0 / 0")))

    def test_equality(self):
        should_be_true = ["1 == 1", "\"a\" == \"a\"", "nil == nil", "true == true", "1 != \"1\"", "nil != false",
                          "1 != true", "0 != false"]
        for case in should_be_true:
            self.assertIs(True, self.evaluate(case), case)

        should_be_false = ["1 == \"1\"", "nil == false", "1 == true", "0 == false", "\"a\" == \"b\"", "0/0 == 0/0"]
        for case in should_be_false:
            self.assertIs(False, self.evaluate(case), case)

    def test_type_errors(self):
        should_raise = {
            "1 + \"b\"": "Operands must be two numbers or two strings.",
            "\"a\" + nil": "Operands must be two numbers or two strings.",
            "true + true": "Operands must be two numbers or two strings.",
            "\"a\" - \"b\"": "Operands must be numbers.",
            "1 * nil": "Operands must be numbers.",
            "\"a\" < \"b\"": "Operands must be numbers.",
            "true / 1": "Operands must be numbers.",
            "-\"a\"": "Operand must be a number.",
            "-true": "Operand must be a number.",
        }
        for case, message in should_raise.items():
            with self.assertRaises(InvalidOperand, msg=case) as context:
                self.evaluate(case)
            self.assertEqual(message, context.exception.message, case)

    def test_runtime_error_stops_remaining_statements(self):
        with self.assertRaises(InvalidOperand) as context:
            self.run_source("print 1;\nprint 1 + \"b\";\nprint 3;")
        self.assertEqual(["1"], self.out.getvalue().splitlines())
        self.assertEqual((2, " at '+'", "Operands must be two numbers or two strings."), context.exception.triple)

    def test_state_persists_across_interpret_calls(self):
        self.interpreter.interpret(compile_source("var a = 1;"))
        self.interpreter.interpret(compile_source("a = a + 1;"))
        self.interpreter.interpret(compile_source("print a;"))
        self.assertEqual(["2"], self.out.getvalue().splitlines())

    def test_grouping_is_transparent(self):
        cases = ["1 + 2 * 3", "\"a\" + \"b\"", "!nil", "1 < 2", "nil", "-4", "true and false", "1 == 1"]
        for case in cases:
            self.assertEqual(self.evaluate(case), self.evaluate(f"({case})"), case)
            self.assertEqual(self.evaluate(case), self.evaluate(f"(({case}))"), case)


class ValueTestCase(unittest.TestCase):

    def test_is_truthy(self):
        for value in [None, False]:
            self.assertFalse(is_truthy(value), value)
        for value in [True, 0.0, 1.0, "", "a", math.nan]:
            self.assertTrue(is_truthy(value), value)

    def test_is_equal(self):
        self.assertTrue(is_equal(None, None))
        self.assertTrue(is_equal(1.0, 1.0))
        self.assertFalse(is_equal(1.0, True))
        self.assertFalse(is_equal(0.0, None))
        self.assertFalse(is_equal("1", 1.0))

    def test_stringify(self):
        cases = {
            None: "nil", True: "true", False: "false", 3.0: "3", -3.0: "-3", 0.1: "0.1", 2.5: "2.5",
            "text": "text", math.inf: "inf", -math.inf: "-inf", 1e21: "1000000000000000000000",
            0.00001: "0.00001", -1.25e-7: "-0.000000125", 1.5e300: "15" + "0" * 299, 100.0: "100",
        }
        for value, expected in cases.items():
            self.assertEqual(expected, stringify(value), value)
        self.assertEqual("NaN", stringify(math.nan))
        self.assertEqual("-0", stringify(-0.0))


if __name__ == '__main__':
    unittest.main()
