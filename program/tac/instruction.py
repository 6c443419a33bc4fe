from abc import ABC, abstractmethod
from typing import Optional


class TACInstruction(ABC):
    """Base class for Three Address Code instructions."""

    @abstractmethod
    def __str__(self) -> str:
        """Return string representation of the instruction."""
        pass


class DeclareInstruction(TACInstruction):
    """Scalar declaration: declare x:int"""

    def __init__(self, name: str, type_name: str, is_global: bool = False):
        self.name = name
        self.type_name = type_name
        self.is_global = is_global

    def __str__(self) -> str:
        keyword = "declare_global" if self.is_global else "declare"
        return f"{keyword} {self.name}:{self.type_name}"


class DeclareArrayInstruction(TACInstruction):
    """Array declaration: declare_arr a[4] int"""

    def __init__(self, name: str, length: int, type_name: str, is_global: bool = False):
        self.name = name
        self.length = length
        self.type_name = type_name
        self.is_global = is_global

    def __str__(self) -> str:
        keyword = "declare_global_arr" if self.is_global else "declare_arr"
        return f"{keyword} {self.name}[{self.length}] {self.type_name}"


class LabelInstruction(TACInstruction):
    """Label: L:"""

    def __init__(self, label: str):
        self.label = label

    def __str__(self) -> str:
        return f"{self.label}:"


class CommentInstruction(TACInstruction):
    """Comment or meta line: // text, # text, begin_main"""

    def __init__(self, comment: str):
        self.comment = comment

    def __str__(self) -> str:
        return f"# {self.comment}"


class GotoInstruction(TACInstruction):
    """Unconditional jump: goto L"""

    def __init__(self, label: str):
        self.label = label

    def __str__(self) -> str:
        return f"goto {self.label}"


class ConditionalGotoInstruction(TACInstruction):
    """Conditional jump: if x goto L, if x relop y goto L"""

    def __init__(self, condition: str, label: str, operand2: Optional[str] = None,
                 operator: Optional[str] = None):
        self.condition = condition
        self.label = label
        self.operand2 = operand2
        self.operator = operator

    def __str__(self) -> str:
        if self.operator and self.operand2:
            return f"if {self.condition} {self.operator} {self.operand2} goto {self.label}"
        return f"if {self.condition} goto {self.label}"


class AssignInstruction(TACInstruction):
    """Assignment instruction: x = y op z, x = op y, x = y"""

    def __init__(self, target: str, operand1: Optional[str] = None,
                 operator: Optional[str] = None, operand2: Optional[str] = None):
        self.target = target
        self.operand1 = operand1
        self.operator = operator
        self.operand2 = operand2

    @property
    def is_binary(self) -> bool:
        return self.operator is not None and self.operand2 is not None

    @property
    def is_unary(self) -> bool:
        return self.operator is not None and self.operand2 is None

    def __str__(self) -> str:
        if self.is_binary:
            return f"{self.target} = {self.operand1} {self.operator} {self.operand2}"
        elif self.is_unary:
            return f"{self.target} = {self.operator}{self.operand1}"
        return f"{self.target} = {self.operand1}"


class ArrayLoadInstruction(TACInstruction):
    """Array read: x = a[i]"""

    def __init__(self, target: str, array: str, index: str):
        self.target = target
        self.array = array
        self.index = index

    def __str__(self) -> str:
        return f"{self.target} = {self.array}[{self.index}]"


class ArrayStoreInstruction(TACInstruction):
    """Array write: astore a, i, v"""

    def __init__(self, array: str, index: str, value: str):
        self.array = array
        self.index = index
        self.value = value

    def __str__(self) -> str:
        return f"astore {self.array}, {self.index}, {self.value}"


class ArrayZeroFillInstruction(TACInstruction):
    """Zero the elements [start, end) of an array: arr_pad_zero a, start, end"""

    def __init__(self, array: str, start: str, end: str):
        self.array = array
        self.start = start
        self.end = end

    def __str__(self) -> str:
        return f"arr_pad_zero {self.array}, {self.start}, {self.end}"


class ParamInstruction(TACInstruction):
    """Queue an argument for the next call: param x"""

    def __init__(self, param: str):
        self.param = param

    def __str__(self) -> str:
        return f"param {self.param}"


class CallInstruction(TACInstruction):
    """
    Function call: call f, n / call f / x = call f, n

    `param_count` is None when the count was omitted, in which case every
    buffered parameter is passed.  `raw_count` keeps the raw text when it
    was present but not numeric.
    """

    def __init__(self, function: str, param_count: Optional[int] = None,
                 target: Optional[str] = None, raw_count: Optional[str] = None):
        self.function = function
        self.param_count = param_count
        self.target = target
        self.raw_count = raw_count

    def __str__(self) -> str:
        call_str = f"call {self.function}"
        if self.param_count is not None:
            call_str = f"{call_str}, {self.param_count}"
        elif self.raw_count is not None:
            call_str = f"{call_str}, {self.raw_count}"
        if self.target:
            return f"{self.target} = {call_str}"
        return call_str


class ReturnInstruction(TACInstruction):
    """Return statement: return x or return"""

    def __init__(self, value: Optional[str] = None):
        self.value = value

    def __str__(self) -> str:
        if self.value:
            return f"return {self.value}"
        return "return"


class PrintInstruction(TACInstruction):
    """Print a value with the matching syscall: print x"""

    def __init__(self, value: str):
        self.value = value

    def __str__(self) -> str:
        return f"print {self.value}"


class ReadInstruction(TACInstruction):
    """Read an integer into a variable: read x"""

    def __init__(self, target: str):
        self.target = target

    def __str__(self) -> str:
        return f"read {self.target}"


class MalformedInstruction(TACInstruction):
    """A recognised instruction whose shape is wrong (e.g. `if x` without goto)."""

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason

    def __str__(self) -> str:
        return self.text


class UnsupportedInstruction(TACInstruction):
    """A line the backend has no rule for."""

    def __init__(self, text: str):
        self.text = text

    def __str__(self) -> str:
        return self.text
