from __future__ import annotations
from typing import List
from .instruction import MIPSInstruction


def translate_add(dest_reg: str, src1_reg: str, src2_reg: str) -> List[MIPSInstruction]:
    """
    Generate MIPS instructions for addition: dest = src1 + src2

    Examples:
        translate_add("$s0", "$v1", "$a1")
        # [add $s0, $v1, $a1]
    """
    return [
        MIPSInstruction(
            "add",
            (dest_reg, src1_reg, src2_reg),
            comment=f"{dest_reg} = {src1_reg} + {src2_reg}",
        )
    ]


def translate_sub(dest_reg: str, src1_reg: str, src2_reg: str) -> List[MIPSInstruction]:
    """Generate MIPS instructions for subtraction: dest = src1 - src2"""
    return [
        MIPSInstruction(
            "sub",
            (dest_reg, src1_reg, src2_reg),
            comment=f"{dest_reg} = {src1_reg} - {src2_reg}",
        )
    ]


def translate_mult(dest_reg: str, src1_reg: str, src2_reg: str) -> List[MIPSInstruction]:
    """
    Generate MIPS instructions for multiplication: dest = src1 * src2

    `mul` is the three-operand pseudo-instruction (mult + mflo), so the low
    32 bits of the product end up in dest.
    """
    return [
        MIPSInstruction(
            "mul",
            (dest_reg, src1_reg, src2_reg),
            comment=f"{dest_reg} = {src1_reg} * {src2_reg}",
        )
    ]


def translate_div(dest_reg: str, src1_reg: str, src2_reg: str) -> List[MIPSInstruction]:
    """
    Generate MIPS instructions for division: dest = src1 / src2

    Examples:
        translate_div("$s0", "$s1", "$s2")
        # [div $s1, $s2, mflo $s0]

    Note:
        MIPS division stores the quotient in LO and the remainder in HI; the
        quotient is extracted with mflo.  Division by zero is not checked.
    """
    return [
        MIPSInstruction(
            "div",
            (src1_reg, src2_reg),
            comment=f"divide {src1_reg} / {src2_reg}",
        ),
        MIPSInstruction(
            "mflo",
            (dest_reg,),
            comment=f"{dest_reg} = quotient",
        ),
    ]


def translate_negate(dest_reg: str, src_reg: str) -> List[MIPSInstruction]:
    """
    Generate MIPS instructions for negation: dest = -src

    Implemented as a subtraction from $zero.
    """
    return [
        MIPSInstruction(
            "sub",
            (dest_reg, "$zero", src_reg),
            comment=f"{dest_reg} = -{src_reg}",
        )
    ]


def translate_logical_and(dest_reg: str, src1_reg: str, src2_reg: str) -> List[MIPSInstruction]:
    """
    Generate MIPS instructions for `&&` on 0/1 values: dest = src1 & src2

    Operands are trusted to already be booleans; no normalisation is done.
    """
    return [
        MIPSInstruction(
            "and",
            (dest_reg, src1_reg, src2_reg),
            comment=f"{dest_reg} = {src1_reg} && {src2_reg}",
        )
    ]


def translate_logical_or(dest_reg: str, src1_reg: str, src2_reg: str) -> List[MIPSInstruction]:
    """Generate MIPS instructions for `||` on 0/1 values: dest = src1 | src2"""
    return [
        MIPSInstruction(
            "or",
            (dest_reg, src1_reg, src2_reg),
            comment=f"{dest_reg} = {src1_reg} || {src2_reg}",
        )
    ]


def translate_complement(dest_reg: str, src_reg: str) -> List[MIPSInstruction]:
    """
    Generate MIPS instructions for logical not: dest = !src

    Flips the low bit with `xori dest, src, 1`, which is the logical
    complement for values that are 0 or 1.
    """
    return [
        MIPSInstruction(
            "xori",
            (dest_reg, src_reg, "1"),
            comment=f"{dest_reg} = !{src_reg}",
        )
    ]
