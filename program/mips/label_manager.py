"""
Label management for MIPS code generation.

Tracks which labels the program defines and references, and hands out fresh
numbered labels for code the backend synthesises (zero-fill loops).  TAC may
reference a label before defining it; unresolved references are only
reported once the whole program has been translated.
"""

import logging
from typing import Dict, List, Set, Tuple

from .errors import LabelResolutionError

logger = logging.getLogger(__name__)


class LabelManager:
    """
    Manages labels for MIPS assembly code generation.

    The label manager tracks:
    - Which labels have been defined (emitted)
    - Which labels have been referenced (in jumps/branches/calls)
    - Per-prefix counters for generated labels
    """

    def __init__(self) -> None:
        self._defined_labels: Set[str] = set()
        self._referenced_labels: Set[str] = set()
        self._reserved_labels: Set[str] = set()
        self._label_counters: Dict[str, int] = {}

    def define_label(self, label: str) -> None:
        """
        Mark a label as defined.

        A label the TAC defines twice is kept (the assembler will reject it)
        but logged, since the translator does not validate its input.
        """
        if label in self._defined_labels:
            logger.warning("label %r is defined more than once", label)
        self._defined_labels.add(label)

    def reference_label(self, label: str) -> None:
        """Mark a label as referenced (used in a jump/branch)."""
        self._referenced_labels.add(label)

    def is_defined(self, label: str) -> bool:
        return label in self._defined_labels

    def is_referenced(self, label: str) -> bool:
        return label in self._referenced_labels

    def get_undefined_labels(self) -> List[str]:
        """Labels that are referenced but never defined."""
        return sorted(self._referenced_labels - self._defined_labels)

    def get_unreferenced_labels(self) -> List[str]:
        """Labels that are defined but never referenced."""
        return sorted(self._defined_labels - self._referenced_labels)

    def validate(self) -> None:
        """
        Validate that all referenced labels are defined.

        Raises:
            LabelResolutionError: If there are undefined labels
        """
        undefined = self.get_undefined_labels()
        if undefined:
            raise LabelResolutionError(
                f"Undefined labels referenced: {', '.join(undefined)}"
            )

    def reserve_label(self, label: str) -> None:
        """Mark a name the program uses somewhere, before or after this point."""
        self._reserved_labels.add(label)

    def is_taken(self, label: str) -> bool:
        return (
            label in self._defined_labels
            or label in self._referenced_labels
            or label in self._reserved_labels
        )

    def generate_unique_label(self, prefix: str = "L", suffixes: Tuple[str, ...] = ("",)) -> str:
        """
        Generate a fresh label such as "arr_pad_0", "arr_pad_1", ...

        A number is skipped when the label with any of `suffixes` appended is
        already defined, referenced or reserved.  Callers that emit companion
        labels (e.g. "arr_pad_0_end") pass their suffixes so the whole group
        is fresh.
        """
        counter = self._label_counters.get(prefix, 0)
        while any(self.is_taken(f"{prefix}_{counter}{suffix}") for suffix in suffixes):
            counter += 1
        self._label_counters[prefix] = counter + 1
        return f"{prefix}_{counter}"

    def get_all_labels(self) -> List[str]:
        return sorted(self._defined_labels | self._referenced_labels)

    def __repr__(self) -> str:
        return (
            f"LabelManager("
            f"defined={len(self._defined_labels)}, "
            f"referenced={len(self._referenced_labels)}, "
            f"undefined={len(self.get_undefined_labels())})"
        )
