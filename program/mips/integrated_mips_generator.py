"""
Integrated MIPS Generator

This module orchestrates the complete TAC to MIPS translation process,
integrating all the translator components (expressions, control flow,
arrays, calls and I/O) over one shared translation context.

Usage:
    generator = IntegratedMIPSGenerator()
    mips_code = generator.generate_from_tac_file("program.tac")

    # Save to file
    generator.write_program("program.asm", mips_code)
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from tac.instruction import (
    ArrayLoadInstruction,
    ArrayStoreInstruction,
    ArrayZeroFillInstruction,
    AssignInstruction,
    CallInstruction,
    CommentInstruction,
    ConditionalGotoInstruction,
    DeclareArrayInstruction,
    DeclareInstruction,
    GotoInstruction,
    LabelInstruction,
    MalformedInstruction,
    ParamInstruction,
    PrintInstruction,
    ReadInstruction,
    ReturnInstruction,
    TACInstruction,
    UnsupportedInstruction,
)
from tac.parser import TACParser

from .array_translator import ArrayTranslator
from .calling_convention import CallingConvention
from .config import SYSCALL_REGISTER, TranslatorConfig
from .control_flow_translator import ControlFlowTranslator
from .errors import AssemblyWriteError
from .expression_translator import ExpressionTranslator
from .instruction import MIPSInstruction
from .io_translator import SYSCALL_EXIT, IOTranslator
from .symbol_table import SemanticType
from .translator_base import MIPSTranslatorBase

logger = logging.getLogger(__name__)


class IntegratedMIPSGenerator:
    """
    Main MIPS code generator that integrates all translation phases.

    Architecture:
    1. Parse TAC lines into instruction objects
    2. Translate each instruction, in order, with the specialized translators
    3. Append the exit sequence
    4. Render the data and text sections as one assembly listing

    Every call to a ``generate_*`` method starts a fresh pass; symbols,
    literals, register bindings and labels never leak between programs.
    """

    def __init__(self, config: Optional[TranslatorConfig] = None):
        """
        Initialize the MIPS generator.

        Args:
            config: Translation knobs (register pool, annotation, exit
                sequence).  Defaults to ``TranslatorConfig()``.
        """
        self.config = config or TranslatorConfig()
        self.parser = TACParser()
        self._new_pass()

    def _new_pass(self) -> None:
        self.base = MIPSTranslatorBase(self.config)
        self.expression_translator = ExpressionTranslator(self.base)
        self.control_flow_translator = ControlFlowTranslator(self.base)
        self.array_translator = ArrayTranslator(self.base)
        self.calling_convention = CallingConvention(self.base)
        self.io_translator = IOTranslator(self.base)

    # ------------------------------------------------------------------ #
    # Entry points
    # ------------------------------------------------------------------ #

    def generate_from_tac_file(self, tac_file_path: str) -> str:
        """
        Generate MIPS code from a TAC file.

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not UTF-8 text
        """
        with open(tac_file_path, "r", encoding="utf-8") as f:
            tac_lines = f.readlines()
        return self.generate_from_tac_lines(tac_lines)

    def generate_from_tac_lines(self, tac_lines: Iterable[str]) -> str:
        """Generate MIPS code from raw TAC lines (blank lines are skipped)."""
        pairs: List[Tuple[str, TACInstruction]] = []
        for raw_line in tac_lines:
            line = raw_line.strip()
            if line:
                pairs.append((line, self.parser.parse_line(line)))
        return self._generate(pairs)

    def generate_from_tac(self, tac_instructions: Iterable[TACInstruction]) -> str:
        """Generate MIPS code from already parsed TAC instructions."""
        return self._generate((str(instr), instr) for instr in tac_instructions)

    def _generate(self, pairs: Iterable[Tuple[str, TACInstruction]]) -> str:
        self._new_pass()
        pairs = list(pairs)
        self._reserve_program_labels(instr for _, instr in pairs)

        for source_line, instr in pairs:
            start = len(self.base.text_section)
            self._translate_instruction(instr)
            if self.config.annotate:
                self._annotate(start, source_line)

        if self.config.emit_exit:
            self._generate_exit()

        self._check_labels()
        return self.base.program_as_string()

    # ------------------------------------------------------------------ #
    # Translation
    # ------------------------------------------------------------------ #

    def _reserve_program_labels(self, instructions: Iterable[TACInstruction]) -> None:
        """Keep generated labels clear of every label the program names, wherever it appears."""
        labels = self.base.label_manager
        for instr in instructions:
            if isinstance(instr, (LabelInstruction, GotoInstruction, ConditionalGotoInstruction)):
                labels.reserve_label(instr.label)
            elif isinstance(instr, CallInstruction):
                labels.reserve_label(instr.function)

    def _translate_instruction(self, instr: TACInstruction) -> None:
        """Translate a single TAC instruction to MIPS."""
        logger.debug("translating %s: %s", type(instr).__name__, instr)

        if isinstance(instr, DeclareInstruction):
            self.base.symbol_table.declare(instr.name, SemanticType.from_name(instr.type_name))

        elif isinstance(instr, DeclareArrayInstruction):
            self.base.symbol_table.declare_array(
                instr.name, SemanticType.from_name(instr.type_name), instr.length
            )

        elif isinstance(instr, LabelInstruction):
            self.control_flow_translator.translate_label(instr)

        elif isinstance(instr, CommentInstruction):
            self.control_flow_translator.translate_comment(instr)

        elif isinstance(instr, GotoInstruction):
            self.control_flow_translator.translate_goto(instr)

        elif isinstance(instr, ConditionalGotoInstruction):
            self.control_flow_translator.translate_conditional_goto(instr)

        elif isinstance(instr, AssignInstruction):
            self.expression_translator.translate_assignment(instr)

        elif isinstance(instr, ArrayLoadInstruction):
            self.array_translator.translate_array_load(instr)

        elif isinstance(instr, ArrayStoreInstruction):
            self.array_translator.translate_array_store(instr)

        elif isinstance(instr, ArrayZeroFillInstruction):
            self.array_translator.translate_zero_fill(instr)

        elif isinstance(instr, ParamInstruction):
            self.calling_convention.translate_param(instr)

        elif isinstance(instr, CallInstruction):
            self.calling_convention.translate_call(instr)

        elif isinstance(instr, ReturnInstruction):
            self.calling_convention.translate_return(instr)

        elif isinstance(instr, PrintInstruction):
            self.io_translator.translate_print(instr)

        elif isinstance(instr, ReadInstruction):
            self.io_translator.translate_read(instr)

        elif isinstance(instr, MalformedInstruction):
            self.control_flow_translator.translate_malformed(instr)

        elif isinstance(instr, UnsupportedInstruction):
            self.control_flow_translator.translate_unsupported(instr)

        else:
            self.base.emit_diagnostic(f"unsupported instruction: {instr}")

    def _annotate(self, start: int, source_line: str) -> None:
        """Attach the TAC line as the comment of its first emitted instruction."""
        text = self.base.text_section
        for index in range(start, len(text)):
            node = text[index]
            if isinstance(node, MIPSInstruction):
                text[index] = node.with_comment(source_line)
                return

    def _generate_exit(self) -> None:
        self.base.emit_comment("program exit")
        self.base.emit("li", SYSCALL_REGISTER, str(SYSCALL_EXIT))
        self.base.emit("syscall")

    def _check_labels(self) -> None:
        labels = self.base.label_manager
        undefined = labels.get_undefined_labels()
        if not undefined:
            return
        if self.config.strict_labels:
            labels.validate()
        logger.warning("labels referenced but never defined: %s", ", ".join(undefined))

    # ------------------------------------------------------------------ #
    # Output
    # ------------------------------------------------------------------ #

    @staticmethod
    def write_program(path: str, assembly: str) -> None:
        """
        Write an assembly listing to `path`.

        Raises:
            AssemblyWriteError: If the file cannot be written
        """
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(assembly)
        except OSError as exc:
            raise AssemblyWriteError(path, exc) from exc
        logger.info("wrote %s", path)

    @property
    def diagnostics(self) -> List[str]:
        return list(self.base.diagnostics)

    def get_statistics(self) -> Dict:
        """Get statistics about the last translation pass."""
        text = self.base.text_section
        allocator = self.base.register_allocator
        return {
            "instructions": sum(1 for node in text if isinstance(node, MIPSInstruction)),
            "labels": len(self.base.label_manager.get_all_labels()),
            "symbols": len(self.base.symbol_table),
            "literals": len(self.base.data_manager.literals),
            "registers_used": len(set(allocator.bindings.values())),
            "register_pool_exhausted": allocator.is_exhausted,
            "undefined_labels": self.base.label_manager.get_undefined_labels(),
            "diagnostics": len(self.base.diagnostics),
        }
