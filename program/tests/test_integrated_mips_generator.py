import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tac.parser import parse_tac
from mips import IntegratedMIPSGenerator, TranslatorConfig
from mips.errors import AssemblyWriteError, LabelResolutionError


def code_lines(program: str):
    """Non-empty lines of a listing with comments removed."""
    lines = []
    for line in program.splitlines():
        text = line.split("#")[0].strip()
        if text:
            lines.append(text)
    return lines


class TestEndToEnd(unittest.TestCase):
    """Whole programs, rendered without per-line annotations."""

    def setUp(self) -> None:
        self.generator = IntegratedMIPSGenerator(TranslatorConfig(annotate=False))

    def _translate(self, *lines):
        return self.generator.generate_from_tac_lines(lines)

    def test_arithmetic_then_print(self) -> None:
        program = self._translate("declare x:int", "x = 2 + 3", "print x")

        self.assertEqual(
            code_lines(program),
            [
                ".data",
                "x: .word 0",
                ".text",
                ".globl main",
                "main:",
                "li $v1, 2",
                "li $a1, 3",
                "add $s0, $v1, $a1",
                "sw $s0, x",
                "lw $a0, x",
                "li $v0, 1",
                "syscall",
                "li $v0, 10",
                "syscall",
            ],
        )

    def test_array_store(self) -> None:
        program = self._translate("declare_arr a[4] int", "astore a, 1, 7")
        lines = code_lines(program)

        self.assertIn("a: .space 16", lines)
        self.assertIn("# INT[4]", program)
        body = lines[lines.index("main:") + 1:]
        self.assertEqual(
            body[:7],
            [
                "la $a3, a",
                "li $a2, 1",
                "li $v1, 4",
                "mul $a2, $a2, $v1",
                "addu $a3, $a3, $a2",
                "li $v1, 7",
                "sw $v1, 0($a3)",
            ],
        )

    def test_call_protocol(self) -> None:
        program = self._translate(
            "declare x:int",
            "declare y:int",
            "param x",
            "param y",
            "call foo, 2",
            "foo:",
            "return 0",
        )
        lines = code_lines(program)
        body = lines[lines.index("main:") + 1:]

        self.assertEqual(
            body[:8],
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
        self.assertEqual(self.generator.base.param_buffer, [])

    def test_malformed_line_does_not_stop_translation(self) -> None:
        program = self._translate("if x", "declare y:int", "y = 1")
        text_lines = program.splitlines()
        start = text_lines.index("main:") + 1

        self.assertTrue(text_lines[start].startswith("# "))
        self.assertIn("if x", text_lines[start])
        self.assertTrue(text_lines[start + 1].strip().startswith("li $s0, 1"))
        self.assertNotIn("bnez", program)
        self.assertEqual(len(self.generator.diagnostics), 1)

    def test_unsupported_line(self) -> None:
        program = self._translate("halt now")
        self.assertIn("# unsupported instruction: halt now", program)

    def test_loop_program(self) -> None:
        program = self._translate(
            "declare i:int",
            "i = 0",
            "L1:",
            "t1 = i < 3",
            "if t1 goto L2",
            "goto L3",
            "L2:",
            "print i",
            "i = i + 1",
            "goto L1",
            "L3:",
        )
        lines = code_lines(program)

        for expected in ("L1:", "L2:", "L3:", "bnez $s1, L2", "j L3", "j L1", "slt $s1, $s0, $a1"):
            self.assertIn(expected, lines)
        self.assertEqual(self.generator.get_statistics()["undefined_labels"], [])

    def test_string_move_uses_literal_pool(self) -> None:
        program = self._translate("declare s:string", 's = "hi"', "print s")
        lines = code_lines(program)

        self.assertEqual(lines[1:3], ["s: .word 0", 'str_lit_0: .asciiz "hi"'])
        self.assertIn("la $s0, str_lit_0", lines)
        self.assertIn("li $v0, 4", lines)

    def test_literal_used_twice_is_pooled_once(self) -> None:
        program = self._translate('print "x y"', 'print "x y"', "print 1.5", "print 1.5")
        self.assertEqual(program.count(".asciiz"), 1)
        self.assertEqual(program.count(".float"), 1)

    def test_blank_lines_are_ignored(self) -> None:
        with_blanks = self._translate("", "declare x:int", "   ", "x = 1", "")
        without = IntegratedMIPSGenerator(TranslatorConfig(annotate=False)).generate_from_tac_lines(
            ["declare x:int", "x = 1"]
        )
        self.assertEqual(with_blanks, without)

    def test_each_pass_starts_fresh(self) -> None:
        first = self._translate("declare x:int", "x = 1")
        second = self._translate("declare x:int", "x = 1")
        self.assertEqual(first, second)
        self.assertEqual(first.count("x: .word 0"), 1)

    def test_zero_fill_labels_avoid_program_labels(self) -> None:
        program = self._translate(
            "declare_arr a[4] int",
            "goto arr_pad_0",
            "arr_pad_zero a, 0, 4",
            "arr_pad_0:",
        )
        lines = code_lines(program)

        self.assertEqual(lines.count("arr_pad_0:"), 1)
        self.assertIn("arr_pad_1:", lines)
        self.assertIn("arr_pad_1_end:", lines)
        self.assertIn("j arr_pad_1", lines)

    def test_zero_fill_labels_avoid_later_end_label(self) -> None:
        program = self._translate(
            "declare_arr a[2] int",
            "arr_pad_zero a, 0, 2",
            "arr_pad_0_end:",
        )
        lines = code_lines(program)

        self.assertEqual(lines.count("arr_pad_0_end:"), 1)
        self.assertIn("arr_pad_1:", lines)

    def test_print_unbound_word(self) -> None:
        program = self._translate("print hello")
        lines = code_lines(program)

        self.assertIn('str_lit_0: .asciiz "hello"', lines)
        self.assertIn("la $a0, str_lit_0", lines)
        self.assertIn("li $v0, 4", lines)
        self.assertNotIn("move $a0, $s0", lines)

    def test_word_array_after_char_is_aligned(self) -> None:
        program = self._translate("declare c:char", "declare_arr a[4] int", "astore a, 0, 1")
        lines = code_lines(program)

        self.assertEqual(lines[1:4], ["c: .byte 0", ".align 2", "a: .space 16"])

    def test_scalar_write_to_array_is_reported(self) -> None:
        program = self._translate("declare_arr a[2] int", "read a")

        self.assertIn("# cannot assign to array 'a' without an index", program)
        self.assertNotIn("sw $v0, a", program)
        self.assertEqual(len(self.generator.diagnostics), 1)

    def test_parsed_instructions_entry_point(self) -> None:
        instructions = parse_tac(["declare x:int", "x = 2 + 3"])
        program = self.generator.generate_from_tac(instructions)
        self.assertIn("add $s0, $v1, $a1", code_lines(program))


class TestGeneratorOptions(unittest.TestCase):
    def test_annotation_goes_on_first_instruction(self) -> None:
        generator = IntegratedMIPSGenerator()
        program = generator.generate_from_tac_lines(["declare x:int", "x = 2 + 3"])
        lines = program.splitlines()

        first = next(line for line in lines if "li $v1, 2" in line)
        self.assertTrue(first.endswith("# x = 2 + 3"))
        # only the first instruction of the line carries the TAC text
        self.assertEqual(sum(1 for line in lines if line.endswith("# x = 2 + 3")), 1)

    def test_annotation_does_not_add_lines(self) -> None:
        annotated = IntegratedMIPSGenerator().generate_from_tac_lines(["if x", "t1 = 1"])
        plain = IntegratedMIPSGenerator(TranslatorConfig(annotate=False)).generate_from_tac_lines(
            ["if x", "t1 = 1"]
        )
        self.assertEqual(len(annotated.splitlines()), len(plain.splitlines()))

    def test_exit_sequence_can_be_disabled(self) -> None:
        generator = IntegratedMIPSGenerator(TranslatorConfig(emit_exit=False))
        program = generator.generate_from_tac_lines(["t1 = 1"])
        self.assertNotIn("li $v0, 10", program)
        self.assertTrue(program.endswith("\n"))

    def test_undefined_label_is_a_warning(self) -> None:
        generator = IntegratedMIPSGenerator()
        with self.assertLogs("mips.integrated_mips_generator", level="WARNING"):
            program = generator.generate_from_tac_lines(["goto nowhere"])
        self.assertIn("j nowhere", program)

    def test_strict_labels_raise(self) -> None:
        generator = IntegratedMIPSGenerator(TranslatorConfig(strict_labels=True))
        with self.assertRaises(LabelResolutionError):
            generator.generate_from_tac_lines(["goto nowhere"])

    def test_small_register_pool_aliases_last_register(self) -> None:
        generator = IntegratedMIPSGenerator(
            TranslatorConfig(register_pool=("$t0", "$t1"), annotate=False)
        )
        program = generator.generate_from_tac_lines(["a = 1", "b = 2", "c = 3"])
        lines = code_lines(program)

        self.assertIn("li $t0, 1", lines)
        self.assertIn("li $t1, 2", lines)
        self.assertIn("li $t1, 3", lines)
        self.assertTrue(generator.get_statistics()["register_pool_exhausted"])

    def test_statistics(self) -> None:
        generator = IntegratedMIPSGenerator()
        generator.generate_from_tac_lines(
            ["declare x:int", 'print "hi"', "x = 1", "L1:", "goto L1", "x = 1 % 2"]
        )
        stats = generator.get_statistics()

        self.assertEqual(stats["symbols"], 1)
        self.assertEqual(stats["literals"], 1)
        self.assertEqual(stats["labels"], 1)
        self.assertEqual(stats["diagnostics"], 1)
        self.assertEqual(stats["registers_used"], 1)


class TestFiles(unittest.TestCase):
    def test_generate_from_file_and_write(self) -> None:
        generator = IntegratedMIPSGenerator()
        with tempfile.TemporaryDirectory() as tmp:
            source = os.path.join(tmp, "program.tac")
            target = os.path.join(tmp, "program.asm")
            with open(source, "w", encoding="utf-8") as f:
                f.write("declare x:int\nx = 4\nprint x\n")

            program = generator.generate_from_tac_file(source)
            generator.write_program(target, program)

            with open(target, "r", encoding="utf-8") as f:
                self.assertEqual(f.read(), program)

    def test_missing_input_file(self) -> None:
        with self.assertRaises(OSError):
            IntegratedMIPSGenerator().generate_from_tac_file("/nonexistent/program.tac")

    def test_unwritable_output(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = os.path.join(tmp, "missing", "program.asm")
            with self.assertRaises(AssemblyWriteError) as ctx:
                IntegratedMIPSGenerator.write_program(target, ".data\n")
        self.assertEqual(ctx.exception.path, target)


if __name__ == "__main__":
    unittest.main()
