from dataclasses import dataclass
from enum import StrEnum


class ValidationMode(StrEnum):
    """How much semantic checking runs after structural decoding."""

    DEFAULT = "default"
    STRICT = "strict"


@dataclass(frozen=True, slots=True)
class LoadOptions:
    """Flags controlling the post-decode passes of the loader."""

    mode: ValidationMode = ValidationMode.DEFAULT
    run_lint: bool = True
    run_analysis: bool = True
    include_strict_rules: bool = False

    @staticmethod
    def for_mode(mode: ValidationMode) -> "LoadOptions":
        if mode == ValidationMode.STRICT:
            return LoadOptions(
                mode=mode,
                run_lint=True,
                run_analysis=True,
                include_strict_rules=True,
            )

        return LoadOptions(
            mode=mode,
            run_lint=True,
            run_analysis=True,
            include_strict_rules=False,
        )
