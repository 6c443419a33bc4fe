"""Exception hierarchy for the MIPS backend."""


class TranslationError(Exception):
    """Base class for errors that stop a TAC -> MIPS translation."""


class RegisterAllocationError(TranslationError):
    """Raised when the allocator is configured without usable registers."""


class LabelResolutionError(TranslationError):
    """Raised in strict mode when a jump targets a label that is never defined."""


class AssemblyWriteError(TranslationError):
    """Raised when the generated program cannot be written to disk."""

    def __init__(self, path: str, reason: Exception):
        super().__init__(f"cannot write {path}: {reason}")
        self.path = path
        self.reason = reason
