from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from .errors import ConfigurationError
from .utils import simple_replace

# Character classes, each in a fixed canonical order.
UPPERCASE: Tuple[str, ...] = tuple("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
LOWERCASE: Tuple[str, ...] = tuple("abcdefghijklmnopqrstuvwxyz")
DIGITS: Tuple[str, ...] = tuple("0123456789")
# Printable ASCII punctuation in code point order.
PUNCTUATION: Tuple[str, ...] = tuple("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")

LETTER_COUNT = len(UPPERCASE)
DEFAULT_SHIFT = 5


class Mode(str, Enum):
    ENCIPHER = "encipher"
    DECIPHER = "decipher"

    @property
    def suffix(self) -> str:
        """Extension appended to the input path when no output path is given."""
        return ".ciph" if self is Mode.ENCIPHER else ".dec"


@dataclass(frozen=True)
class CipherConfig:
    shift: int = DEFAULT_SHIFT
    include_digits: bool = False
    include_punctuation: bool = False
    mode: Mode = Mode.ENCIPHER

    def __post_init__(self) -> None:
        try:
            mode = Mode(self.mode)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown cipher mode: {self.mode}") from exc
        object.__setattr__(self, "mode", mode)


@dataclass(frozen=True)
class ReducedShifts:
    letters: int
    digits: int = 0
    punctuation: int = 0


def reduce_shift(original: int, modulus: int = LETTER_COUNT) -> int:
    """
    Normalise a signed shift into ``[0, modulus)``.

    Negative shifts wrap around (``-3`` becomes ``23`` for letters), so the
    result is always congruent to ``original``. ``modulus`` must be positive;
    every caller passes the length of one of the fixed alphabets above.
    """
    return original % modulus


def rotate(alphabet: Tuple[str, ...], amount: int) -> Tuple[str, ...]:
    """Circularly rotate left, so ``rotated[i] == alphabet[(i + amount) % len]``."""
    amount %= len(alphabet)
    return alphabet[amount:] + alphabet[:amount]


def reduced_shifts(config: CipherConfig) -> ReducedShifts:
    return ReducedShifts(
        letters=reduce_shift(config.shift, LETTER_COUNT),
        digits=reduce_shift(config.shift, len(DIGITS)) if config.include_digits else 0,
        punctuation=reduce_shift(config.shift, len(PUNCTUATION)) if config.include_punctuation else 0,
    )


def enabled_alphabets(config: CipherConfig, shifts: ReducedShifts) -> List[Tuple[Tuple[str, ...], int]]:
    alphabets = [(UPPERCASE, shifts.letters), (LOWERCASE, shifts.letters)]
    if config.include_digits:
        alphabets.append((DIGITS, shifts.digits))
    if config.include_punctuation:
        alphabets.append((PUNCTUATION, shifts.punctuation))
    return alphabets


def build_cipher_dict(config: CipherConfig) -> Mapping[str, str]:
    """
    Build the substitution table for ``config``.

    Enciphering maps each plain character to its rotated counterpart;
    deciphering maps the rotated character back to the plain one. Disabled
    classes contribute no entries and therefore pass through unchanged.
    """
    shifts = reduced_shifts(config)
    table: Dict[str, str] = {}
    for alphabet, amount in enabled_alphabets(config, shifts):
        shifted = rotate(alphabet, amount)
        if config.mode is Mode.ENCIPHER:
            table.update(zip(alphabet, shifted))
        else:
            table.update(zip(shifted, alphabet))
    return MappingProxyType(table)


def _shift_text(text: str, config: CipherConfig) -> str:
    return simple_replace(text, build_cipher_dict(config))


def encipher_text(
    text: str,
    shift: int = DEFAULT_SHIFT,
    include_digits: bool = False,
    include_punctuation: bool = False,
) -> str:
    """Encipher an in-memory string; line breaks are preserved."""
    config = CipherConfig(shift, include_digits, include_punctuation, Mode.ENCIPHER)
    return _shift_text(text, config)


def decipher_text(
    text: str,
    shift: int = DEFAULT_SHIFT,
    include_digits: bool = False,
    include_punctuation: bool = False,
) -> str:
    """Reverse :func:`encipher_text` for the same shift and classes."""
    config = CipherConfig(shift, include_digits, include_punctuation, Mode.DECIPHER)
    return _shift_text(text, config)
