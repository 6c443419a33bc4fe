from __future__ import annotations
from typing import List
from .instruction import MIPSInstruction


def translate_less_than(dest_reg: str, src1_reg: str, src2_reg: str) -> List[MIPSInstruction]:
    """
    Generate MIPS instructions for less than: dest = (src1 < src2) ? 1 : 0

    Examples:
        translate_less_than("$s0", "$s1", "$s2")
        # [slt $s0, $s1, $s2]
    """
    return [
        MIPSInstruction(
            "slt",
            (dest_reg, src1_reg, src2_reg),
            comment=f"{dest_reg} = ({src1_reg} < {src2_reg})",
        )
    ]


def translate_less_equal(dest_reg: str, src1_reg: str, src2_reg: str) -> List[MIPSInstruction]:
    """
    Generate MIPS instructions for less or equal: dest = (src1 <= src2) ? 1 : 0

    MIPS has no native "sle", so this is computed as !(src2 < src1).
    """
    return [
        MIPSInstruction(
            "slt",
            (dest_reg, src2_reg, src1_reg),
            comment=f"{dest_reg} = ({src2_reg} < {src1_reg})",
        ),
        MIPSInstruction(
            "xori",
            (dest_reg, dest_reg, "1"),
            comment=f"{dest_reg} = ({src1_reg} <= {src2_reg})",
        ),
    ]


def translate_greater_than(dest_reg: str, src1_reg: str, src2_reg: str) -> List[MIPSInstruction]:
    """Generate MIPS instructions for greater than: src1 > src2 is src2 < src1."""
    return [
        MIPSInstruction(
            "slt",
            (dest_reg, src2_reg, src1_reg),
            comment=f"{dest_reg} = ({src1_reg} > {src2_reg})",
        )
    ]


def translate_greater_equal(dest_reg: str, src1_reg: str, src2_reg: str) -> List[MIPSInstruction]:
    """Generate MIPS instructions for greater or equal: !(src1 < src2)."""
    return [
        MIPSInstruction(
            "slt",
            (dest_reg, src1_reg, src2_reg),
            comment=f"{dest_reg} = ({src1_reg} < {src2_reg})",
        ),
        MIPSInstruction(
            "xori",
            (dest_reg, dest_reg, "1"),
            comment=f"{dest_reg} = ({src1_reg} >= {src2_reg})",
        ),
    ]


def translate_equal(dest_reg: str, src1_reg: str, src2_reg: str) -> List[MIPSInstruction]:
    """
    Generate MIPS instructions for equality: dest = (src1 == src2) ? 1 : 0

    The difference of equal values is zero, and `sltiu d, d, 1` is 1 exactly
    when d is zero.
    """
    return [
        MIPSInstruction(
            "sub",
            (dest_reg, src1_reg, src2_reg),
            comment=f"{dest_reg} = {src1_reg} - {src2_reg}",
        ),
        MIPSInstruction(
            "sltiu",
            (dest_reg, dest_reg, "1"),
            comment=f"{dest_reg} = ({src1_reg} == {src2_reg})",
        ),
    ]


def translate_not_equal(dest_reg: str, src1_reg: str, src2_reg: str) -> List[MIPSInstruction]:
    """Generate MIPS instructions for inequality: 0 < unsigned(src1 - src2)."""
    return [
        MIPSInstruction(
            "sub",
            (dest_reg, src1_reg, src2_reg),
            comment=f"{dest_reg} = {src1_reg} - {src2_reg}",
        ),
        MIPSInstruction(
            "sltu",
            (dest_reg, "$zero", dest_reg),
            comment=f"{dest_reg} = ({src1_reg} != {src2_reg})",
        ),
    ]
