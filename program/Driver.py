import logging
import os
import sys

from mips.config import TranslatorConfig
from mips.errors import AssemblyWriteError, TranslationError
from mips.integrated_mips_generator import IntegratedMIPSGenerator

USAGE = "usage: python Driver.py input.tac [output.asm] [-v] [--strict-labels]"
FLAGS = ("-v", "--verbose", "--strict-labels")


def default_output_path(input_path):
    root, _ = os.path.splitext(input_path)
    return root + ".asm"


def main(argv):
    verbose = "-v" in argv[1:] or "--verbose" in argv[1:]
    strict_labels = "--strict-labels" in argv[1:]
    args = [arg for arg in argv[1:] if arg not in FLAGS]

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args or len(args) > 2:
        print(USAGE, file=sys.stderr)
        return 1

    input_path = args[0]
    output_path = args[1] if len(args) == 2 else default_output_path(input_path)

    try:
        with open(input_path, "r", encoding="utf-8") as f:
            tac_lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        print(f"✗ cannot read {input_path}: {getattr(e, 'strerror', None) or e}", file=sys.stderr)
        return 1

    print("--- MIPS Generation ---")
    generator = IntegratedMIPSGenerator(TranslatorConfig(strict_labels=strict_labels))
    try:
        mips_code = generator.generate_from_tac_lines(tac_lines)
        generator.write_program(output_path, mips_code)
    except AssemblyWriteError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1
    except TranslationError as e:
        print(f"✗ MIPS generation error: {e}", file=sys.stderr)
        return 1

    print("✓ MIPS generation completed successfully.")
    print(f"✓ MIPS -> {output_path}")

    diagnostics = generator.diagnostics
    if diagnostics:
        print("\n⚠ Translation diagnostics:")
        for message in diagnostics:
            print(f"  - {message}")

    stats = generator.get_statistics()
    print("\n--- MIPS Statistics ---")
    print(f"  Instructions: {stats['instructions']}")
    print(f"  Labels: {stats['labels']}")
    print(f"  Symbols: {stats['symbols']}")
    print(f"  Literals: {stats['literals']}")
    print(f"  Registers used: {stats['registers_used']}")
    if stats["undefined_labels"]:
        print(f"  Undefined labels: {', '.join(stats['undefined_labels'])}")

    if verbose:
        print("\n--- Generated MIPS (first 30 lines) ---")
        mips_lines = mips_code.split("\n")
        for line in mips_lines[:30]:
            print(line)
        if len(mips_lines) > 30:
            print(f"... ({len(mips_lines) - 30} more lines)")

    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
