import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tac.instruction import AssignInstruction
from mips import MIPSTranslatorBase
from mips.expression_translator import ExpressionTranslator
from mips.symbol_table import SemanticType


class ExpressionTestCase(unittest.TestCase):
    def setUp(self) -> None:
        """Set up translator for each test."""
        self.base_translator = MIPSTranslatorBase()
        self.translator = ExpressionTranslator(self.base_translator)

    def _declare(self, *names, semantic_type=SemanticType.INT) -> None:
        for name in names:
            self.base_translator.symbol_table.declare(name, semantic_type)

    def _get_emitted_code(self) -> str:
        """Helper to get emitted MIPS code as a single string."""
        return "\n".join(str(instr) for instr in self.base_translator.text_section)

    def _instructions(self):
        """Emitted instructions without their comments."""
        lines = []
        for node in self.base_translator.text_section:
            text = str(node).split("#")[0].strip()
            if text:
                lines.append(text)
        return lines


class TestBinaryOperations(ExpressionTestCase):
    # Arithmetic operations
    def test_addition_variables(self) -> None:
        """Test: t1 = a + b"""
        self._declare("a", "b")
        self.translator.translate_assignment(AssignInstruction("t1", "a", "+", "b"))

        self.assertEqual(
            self._instructions(),
            ["lw $s1, a", "lw $s2, b", "add $s0, $s1, $s2"],
        )

    def test_addition_of_literals_into_declared_variable(self) -> None:
        """Test: x = 2 + 3"""
        self._declare("x")
        self.translator.translate_assignment(AssignInstruction("x", "2", "+", "3"))

        self.assertEqual(
            self._instructions(),
            ["li $v1, 2", "li $a1, 3", "add $s0, $v1, $a1", "sw $s0, x"],
        )

    def test_subtraction(self) -> None:
        """Test: t1 = a - b"""
        self.translator.translate_assignment(AssignInstruction("t1", "a", "-", "b"))
        self.assertIn("sub $s0, $s1, $s2", self._instructions())

    def test_multiplication(self) -> None:
        """Test: t1 = a * 4"""
        self.translator.translate_assignment(AssignInstruction("t1", "a", "*", "4"))
        self.assertEqual(self._instructions(), ["li $a1, 4", "mul $s0, $s1, $a1"])

    def test_division(self) -> None:
        """Test: t1 = a / b"""
        self.translator.translate_assignment(AssignInstruction("t1", "a", "/", "b"))
        self.assertEqual(self._instructions(), ["div $s1, $s2", "mflo $s0"])

    def test_logical_operations(self) -> None:
        self.translator.translate_assignment(AssignInstruction("t1", "p", "&&", "q"))
        self.translator.translate_assignment(AssignInstruction("t2", "p", "||", "q"))
        code = self._instructions()
        self.assertIn("and $s0, $s1, $s2", code)
        self.assertIn("or $s3, $s1, $s2", code)
        self.assertIs(self.base_translator.symbol_table.type_of("t1"), SemanticType.BOOL)

    def test_every_supported_operator_assigns_one_result(self) -> None:
        for op in ("+", "-", "*", "/", "&&", "||", "==", "!=", "<", "<=", ">", ">="):
            with self.subTest(op=op):
                self.setUp()
                self.translator.translate_assignment(AssignInstruction("t1", "a", op, "b"))
                code = self._instructions()
                self.assertTrue(code)
                written = [line for line in code if line.split()[1].rstrip(",") == "$s0"]
                self.assertTrue(written, msg=f"{op} never wrote $s0: {code}")
                self.assertEqual(self.base_translator.diagnostics, [])

    def test_modulo_is_unsupported(self) -> None:
        """Test: t1 = a % b leaves t1 untouched"""
        self.translator.translate_assignment(AssignInstruction("t1", "a", "%", "b"))

        self.assertEqual(self._instructions(), [])
        self.assertIn("unsupported operator '%'", self._get_emitted_code())
        self.assertIsNone(self.base_translator.register_allocator.lookup("t1"))
        self.assertNotIn("t1", self.base_translator.symbol_table)
        self.assertEqual(len(self.base_translator.diagnostics), 1)


class TestComparisonOperations(ExpressionTestCase):
    def _compare(self, op):
        self.translator.translate_assignment(AssignInstruction("t1", "a", op, "b"))
        return self._instructions()

    def test_less_than(self) -> None:
        self.assertEqual(self._compare("<"), ["slt $s0, $s1, $s2"])

    def test_greater_than(self) -> None:
        self.assertEqual(self._compare(">"), ["slt $s0, $s2, $s1"])

    def test_less_equal(self) -> None:
        self.assertEqual(self._compare("<="), ["slt $s0, $s2, $s1", "xori $s0, $s0, 1"])

    def test_greater_equal(self) -> None:
        self.assertEqual(self._compare(">="), ["slt $s0, $s1, $s2", "xori $s0, $s0, 1"])

    def test_equal(self) -> None:
        self.assertEqual(self._compare("=="), ["sub $s0, $s1, $s2", "sltiu $s0, $s0, 1"])

    def test_not_equal(self) -> None:
        self.assertEqual(self._compare("!="), ["sub $s0, $s1, $s2", "sltu $s0, $zero, $s0"])

    def test_comparison_result_is_bool(self) -> None:
        self._compare("<")
        self.assertIs(self.base_translator.symbol_table.type_of("t1"), SemanticType.BOOL)


class TestUnaryOperations(ExpressionTestCase):
    def test_negation(self) -> None:
        """Test: t1 = -a"""
        self._declare("a")
        self.translator.translate_assignment(AssignInstruction("t1", "a", "-"))
        self.assertEqual(self._instructions(), ["lw $s1, a", "sub $s0, $zero, $s1"])

    def test_logical_not(self) -> None:
        """Test: t1 = !flag"""
        self.translator.translate_assignment(AssignInstruction("t1", "flag", "!"))
        self.assertEqual(self._instructions(), ["xori $s0, $s1, 1"])


class TestSimpleAssignments(ExpressionTestCase):
    def test_integer_literal(self) -> None:
        self._declare("x")
        self.translator.translate_assignment(AssignInstruction("x", "10"))
        self.assertEqual(self._instructions(), ["li $s0, 10", "sw $s0, x"])

    def test_boolean_literal(self) -> None:
        self.translator.translate_assignment(AssignInstruction("t1", "true"))
        self.assertEqual(self._instructions(), ["li $s0, 1"])
        self.assertIs(self.base_translator.symbol_table.type_of("t1"), SemanticType.BOOL)

    def test_char_literal_into_char_variable(self) -> None:
        self._declare("c", semantic_type=SemanticType.CHAR)
        self.translator.translate_assignment(AssignInstruction("c", "'a'"))
        self.assertEqual(self._instructions(), ["li $s0, 97", "sb $s0, c"])

    def test_float_literal(self) -> None:
        self._declare("f", semantic_type=SemanticType.FLOAT)
        self.translator.translate_assignment(AssignInstruction("f", "1.5"))
        self.assertEqual(self._instructions(), ["lw $s0, flt_lit_0", "sw $s0, f"])

    def test_string_literal_references_pool(self) -> None:
        self._declare("s", semantic_type=SemanticType.STRING)
        self.translator.translate_assignment(AssignInstruction("s", '"hello"'))

        self.assertEqual(self._instructions(), ["la $s0, str_lit_0", "sw $s0, s"])
        data = [str(d) for d in self.base_translator.data_section]
        self.assertIn('str_lit_0: .asciiz "hello"', data)

    def test_copy_between_variables(self) -> None:
        self._declare("x", "y")
        self.translator.translate_assignment(AssignInstruction("x", "y"))
        self.assertEqual(self._instructions(), ["lw $s1, y", "move $s0, $s1", "sw $s0, x"])

    def test_self_move_is_elided(self) -> None:
        self.translator.translate_assignment(AssignInstruction("t1", "t1"))
        self.assertEqual(self._instructions(), [])

    def test_undeclared_target_is_never_stored(self) -> None:
        self.translator.translate_assignment(AssignInstruction("t1", "5"))
        self.assertEqual(self._instructions(), ["li $s0, 5"])
        self.assertFalse(self.base_translator.symbol_table.is_memory_backed("t1"))
        self.assertEqual(self.base_translator.data_section, [])


if __name__ == "__main__":
    unittest.main()
