"""
Backend that translates TAC into MIPS assembly (MARS/SPIM dialect).

This package provides the translation context, the symbol registry and
storage planner, the register allocator, the per-instruction translators
and the generator that ties them together.
"""

from .instruction import (
    MIPSInstruction,
    MIPSLabel,
    MIPSComment,
    MIPSDirective,
)
from .config import TranslatorConfig
from .errors import (
    TranslationError,
    RegisterAllocationError,
    LabelResolutionError,
    AssemblyWriteError,
)
from .symbol_table import SemanticType, Symbol, SymbolTable
from .data_section_manager import DataSectionManager
from .register_allocator import RegisterAllocator
from .label_manager import LabelManager
from .translator_base import MIPSTranslatorBase
from .expression_translator import ExpressionTranslator
from .control_flow_translator import ControlFlowTranslator
from .array_translator import ArrayTranslator
from .io_translator import IOTranslator
from .calling_convention import CallingConvention
from .integrated_mips_generator import IntegratedMIPSGenerator

__all__ = [
    "MIPSInstruction",
    "MIPSLabel",
    "MIPSComment",
    "MIPSDirective",
    "TranslatorConfig",
    "TranslationError",
    "RegisterAllocationError",
    "LabelResolutionError",
    "AssemblyWriteError",
    "SemanticType",
    "Symbol",
    "SymbolTable",
    "DataSectionManager",
    "RegisterAllocator",
    "LabelManager",
    "MIPSTranslatorBase",
    "ExpressionTranslator",
    "ControlFlowTranslator",
    "ArrayTranslator",
    "IOTranslator",
    "CallingConvention",
    "IntegratedMIPSGenerator",
]
