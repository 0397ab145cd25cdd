from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Mapping, Optional, Tuple

from .classical import CipherConfig, ReducedShifts, build_cipher_dict, reduced_shifts
from .errors import ConfigurationError, ResourceError
from .utils import DEFAULT_ENCODING, PathLike, resolve_output_path, simple_replace, strip_line_ending


@dataclass
class CipherRun:
    """Outcome of one file run, consumed by the diagnostics report."""

    config: CipherConfig
    shifts: ReducedShifts
    mapping: Mapping[str, str]
    in_path: Path
    out_path: Path
    default_output: bool
    chars_processed: int = 0


def iter_transform(lines: Iterable[str], mapping: Mapping[str, str]) -> Iterator[Tuple[str, int]]:
    """
    Yield ``(substituted_line, length)`` for each input line.

    Trailing newlines are removed first and are not counted. Only the current
    line is held in memory.
    """
    for line in lines:
        plain = strip_line_ending(line)
        yield simple_replace(plain, mapping), len(plain)


def transform(lines: Iterable[str], mapping: Mapping[str, str]) -> Tuple[List[str], int]:
    output: List[str] = []
    count = 0
    for out_line, length in iter_transform(lines, mapping):
        output.append(out_line)
        count += length
    return output, count


def cipher_file(
    in_path: PathLike,
    out_path: Optional[PathLike],
    config: CipherConfig,
    encoding: str = DEFAULT_ENCODING,
) -> CipherRun:
    """
    Read ``in_path`` line by line, substitute and write to ``out_path``.

    When ``out_path`` is empty the mode's suffix is appended to the input path.
    An existing output file is overwritten. Raises :class:`ResourceError` before
    anything is written if either file cannot be opened; a write or decode
    failure part way through removes the partial output before raising.
    """
    try:
        # str.encode also rejects non-text codecs such as base64 or rot13.
        "".encode(encoding)
    except LookupError as exc:
        raise ConfigurationError(f"Unknown text encoding: {encoding}") from exc
    source = Path(in_path)
    if not source.is_file():
        raise ResourceError("Input file not found", source)
    target = resolve_output_path(in_path, out_path, config.mode.suffix)
    if target.resolve() == source.resolve():
        raise ResourceError("Output file would overwrite the input file", target)

    mapping = build_cipher_dict(config)
    run = CipherRun(
        config=config,
        shifts=reduced_shifts(config),
        mapping=mapping,
        in_path=source,
        out_path=target,
        default_output=not out_path,
    )

    try:
        infile = source.open("r", encoding=encoding, errors="surrogateescape", newline="\n")
    except OSError as exc:
        raise ResourceError(f"Cannot read input file ({exc.strerror or exc})", source) from exc
    with infile:
        try:
            outfile = target.open("w", encoding=encoding, errors="surrogateescape", newline="\n")
        except OSError as exc:
            raise ResourceError(f"Cannot write output file ({exc.strerror or exc})", target) from exc
        try:
            with outfile:
                for out_line, length in iter_transform(infile, mapping):
                    outfile.write(out_line + "\n")
                    run.chars_processed += length
        except OSError as exc:
            _discard_partial(target)
            raise ResourceError(f"Cannot write output file ({exc.strerror or exc})", target) from exc
        except UnicodeError as exc:
            _discard_partial(target)
            raise ConfigurationError(f"Input file is not valid {encoding} text ({exc})") from exc
    return run


def _discard_partial(target: Path) -> None:
    # Only regular files are removed; devices such as /dev/full stay.
    if target.is_file():
        try:
            target.unlink()
        except OSError:
            pass
