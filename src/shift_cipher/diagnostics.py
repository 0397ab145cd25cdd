from typing import List, Mapping, Tuple

from .classical import Mode
from .transform import CipherRun

BORDER = "=" * 45
SAMPLE_SIZE = 10


def mapping_sample(mapping: Mapping[str, str], start: str = "A", size: int = SAMPLE_SIZE) -> List[Tuple[str, str]]:
    """First ``size`` entries in key order, beginning at ``start``."""
    keys = [key for key in sorted(mapping) if key >= start]
    return [(key, mapping[key]) for key in keys[:size]]


def completion_message(run: CipherRun) -> str:
    return f"Read {run.chars_processed} characters from the input file."


def render_report(run: CipherRun, program_name: str = "shift-cipher") -> str:
    config = run.config
    title = "Cipher" if config.mode is Mode.ENCIPHER else "Decipher"
    pairs = ", ".join(f"({src},{dst})" for src, dst in mapping_sample(run.mapping))

    def flag(value: bool) -> str:
        return "true" if value else "false"

    lines = [
        BORDER,
        f"{title} program options/control",
        BORDER,
        f"Program name:        {program_name}",
        f"IFILE:               {run.in_path}",
        f"OFILE:               {run.out_path}",
        f"Default output name: {flag(run.default_output)}",
        f"Shift amount:        {config.shift}",
        f"[Reduced] Shift:     {run.shifts.letters}",
        f"Shift numbers:       {flag(config.include_digits)}",
        f"Number shift amount: {run.shifts.digits}",
        f"Shift punctuation:   {flag(config.include_punctuation)}",
        f"Punct. shift amount: {run.shifts.punctuation}",
        f"{title} dictionary: {{{pairs}, ...}}",
        f"Number chars read:   {run.chars_processed}",
        BORDER,
    ]
    return "\n".join(lines)
