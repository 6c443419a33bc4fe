import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tac.instruction import CallInstruction, ParamInstruction, ReturnInstruction
from mips import CallingConvention, MIPSTranslatorBase
from mips.calling_convention import pop_instructions, push_instructions
from mips.symbol_table import SemanticType


class TestStackHelpers(unittest.TestCase):
    def test_push(self):
        code = [str(i).split("#")[0].strip() for i in push_instructions("$s0")]
        self.assertEqual(code, ["addiu $sp, $sp, -4", "sw $s0, 0($sp)"])

    def test_pop(self):
        code = [str(i).split("#")[0].strip() for i in pop_instructions(3)]
        self.assertEqual(code, ["addiu $sp, $sp, 12"])
        self.assertEqual(pop_instructions(0), [])


class TestCallingConvention(unittest.TestCase):
    def setUp(self):
        self.base_translator = MIPSTranslatorBase()
        self.convention = CallingConvention(self.base_translator)
        self.base_translator.symbol_table.declare("x", SemanticType.INT)
        self.base_translator.symbol_table.declare("y", SemanticType.INT)

    def _get_emitted_code(self) -> str:
        return "\n".join(str(instr) for instr in self.base_translator.text_section)

    def _instructions(self):
        lines = []
        for node in self.base_translator.text_section:
            text = str(node).split("#")[0].strip()
            if text:
                lines.append(text)
        return lines

    def _params(self, *operands):
        for operand in operands:
            self.convention.translate_param(ParamInstruction(operand))

    def test_param_only_buffers(self):
        self._params("x")
        self.assertEqual(self.base_translator.param_buffer, ["x"])
        self.assertEqual(self.base_translator.text_section, [])

    def test_call_pushes_in_buffer_order(self):
        """param x / param y / call foo, 2"""
        self._params("x", "y")
        self.convention.translate_call(CallInstruction("foo", 2))

        self.assertEqual(
            self._instructions(),
            [
                "lw $s0, x",
                "addiu $sp, $sp, -4",
                "sw $s0, 0($sp)",
                "lw $s1, y",
                "addiu $sp, $sp, -4",
                "sw $s1, 0($sp)",
                "jal foo",
                "addiu $sp, $sp, 8",
            ],
        )
        self.assertEqual(self.base_translator.param_buffer, [])

    def test_literal_argument_uses_scratch(self):
        self._params("5")
        self.convention.translate_call(CallInstruction("f", 1))
        self.assertEqual(
            self._instructions()[:3],
            ["li $v1, 5", "addiu $sp, $sp, -4", "sw $v1, 0($sp)"],
        )

    def test_call_without_count_uses_whole_buffer(self):
        self._params("1", "2", "3")
        self.convention.translate_call(CallInstruction("f"))
        self.assertIn("addiu $sp, $sp, 12", self._instructions())

    def test_count_takes_last_buffered_params(self):
        self._params("x", "y")
        self.convention.translate_call(CallInstruction("f", 1))
        code = self._instructions()
        self.assertNotIn("lw $s0, x", code)
        self.assertIn("lw $s0, y", code)
        self.assertIn("addiu $sp, $sp, 4", code)
        self.assertEqual(self.base_translator.param_buffer, [])

    def test_call_without_params(self):
        self.convention.translate_call(CallInstruction("main_helper", 0))
        self.assertEqual(self._instructions(), ["jal main_helper"])

    def test_count_larger_than_buffer_still_pops_n_words(self):
        self._params("x")
        with self.assertLogs("mips.calling_convention", level="WARNING"):
            self.convention.translate_call(CallInstruction("f", 3))
        code = self._instructions()
        self.assertEqual(code.count("addiu $sp, $sp, -4"), 1)
        self.assertIn("addiu $sp, $sp, 12", code)

    def test_non_numeric_count_falls_back_to_buffer(self):
        self._params("x", "y")
        self.convention.translate_call(CallInstruction("f", None, raw_count="n"))
        self.assertIn("non-numeric argument count 'n'", self._get_emitted_code())
        self.assertIn("addiu $sp, $sp, 8", self._instructions())

    def test_call_result_is_stored(self):
        """t1 = call foo, 0"""
        self.convention.translate_call(CallInstruction("foo", 0, target="t1"))

        self.assertEqual(self._instructions(), ["jal foo", "sw $v0, t1"])
        self.assertTrue(self.base_translator.symbol_table.is_memory_backed("t1"))
        data = [str(d) for d in self.base_translator.data_section]
        self.assertIn("t1: .word 0", data)

    def test_return_constant(self):
        self.convention.translate_return(ReturnInstruction("42"))
        self.assertEqual(self._instructions(), ["li $v0, 42", "jr $ra"])

    def test_return_variable(self):
        self.convention.translate_return(ReturnInstruction("x"))
        self.assertEqual(self._instructions(), ["lw $s0, x", "move $v0, $s0", "jr $ra"])

    def test_return_without_value(self):
        self.convention.translate_return(ReturnInstruction())
        self.assertEqual(self._instructions(), ["jr $ra"])


if __name__ == "__main__":
    unittest.main()
