import argparse
import sys
from typing import List, Optional

from .classical import CipherConfig, Mode
from .config import load_defaults, parse_shift
from .diagnostics import completion_message, render_report
from .errors import CipherError, ConfigurationError
from .history import log_event
from .transform import cipher_file

UNEXPECTED_ERROR = "Unexpected error encountered. Program terminated."

EPILOG = """examples:
  %(prog)s -a -i hello.txt
  %(prog)s -np -s 15 -i what.txt -o this.out
  %(prog)s --ofile temp.txt --ifile perm.txt -pn -s -80
"""


def _common_cipher_args(p: argparse.ArgumentParser, mode: Mode) -> None:
    p.add_argument("-i", "--ifile", dest="in_file", required=True, help="Input text file to read.")
    p.add_argument(
        "-o",
        "--ofile",
        dest="out_file",
        help=f"Output file (overwritten if it exists). Default: IFILE with '{mode.suffix}' appended.",
    )
    p.add_argument(
        "-s",
        "--shift-amount",
        dest="shift",
        metavar="SHIFT",
        help="Positions to rotate each alphabet; negative values rotate the other way (default: 5).",
    )
    p.add_argument(
        "-n",
        "--shift-numbers",
        "--shift-nums",
        dest="shift_numbers",
        action="store_true",
        help="Include digits in the shifted alphabet.",
    )
    p.add_argument(
        "-p",
        "--shift-puncts",
        dest="shift_puncts",
        action="store_true",
        help="Include punctuation symbols in the shifted alphabet.",
    )
    p.add_argument(
        "-a",
        "--shift-all",
        dest="shift_all",
        action="store_true",
        help="Include both digits and punctuation symbols.",
    )
    p.add_argument(
        "-l",
        "--show-log",
        dest="show_log",
        action="store_true",
        help="Print the run's options and dictionary sample to stderr.",
    )
    p.add_argument("--encoding", help="Text encoding of the input and output files (default: latin-1).")
    p.add_argument("--no-history", action="store_true", help="Do not record the run in history.")
    p.set_defaults(func=_run_cipher, mode=mode)


def _resolve_config(args: argparse.Namespace) -> CipherConfig:
    defaults = load_defaults()
    args.encoding = args.encoding or defaults.encoding
    if not defaults.history:
        args.no_history = True
    shift = parse_shift(args.shift) if args.shift is not None else defaults.shift
    return CipherConfig(
        shift=shift,
        include_digits=args.shift_numbers or args.shift_all or defaults.include_digits,
        include_punctuation=args.shift_puncts or args.shift_all or defaults.include_punctuation,
        mode=args.mode,
    )


def _run_cipher(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    run = cipher_file(args.in_file, args.out_file, config, encoding=args.encoding)
    if args.show_log:
        print(render_report(run, program_name=args.prog), file=sys.stderr)
    else:
        print(completion_message(run))
    if not args.no_history:
        log_event(
            action=config.mode.value,
            payload={
                "in_file": str(run.in_path),
                "out_file": str(run.out_path),
                "shift": config.shift,
                "digits": config.include_digits,
                "punctuation": config.include_punctuation,
                "chars": run.chars_processed,
            },
        )
    return 0


def _run_gui(args: argparse.Namespace) -> int:
    try:
        from .gui import run_gui
    except ImportError as exc:
        raise ConfigurationError("The desktop front end needs PyQt5: pip install 'shift-cipher[gui]'") from exc
    return run_gui()


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description="Circular shift cipher for text files.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for mode in Mode:
        sub = subparsers.add_parser(
            mode.value,
            help=f"{mode.value.capitalize()} a text file",
            epilog=EPILOG,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _common_cipher_args(sub, mode)

    gui_parser = subparsers.add_parser("gui", help="Launch the desktop front end (needs PyQt5)")
    gui_parser.set_defaults(func=_run_gui)
    return parser


def build_mode_parser(mode: Mode, prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description=f"{mode.value.capitalize()} a text file with a circular shift cipher.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _common_cipher_args(parser, mode)
    return parser


def _execute(parser: argparse.ArgumentParser, argv: Optional[List[str]]) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        parser.print_usage()
        return 0
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        # --help exits 0; argument errors have already been printed by argparse.
        return 0 if exc.code in (0, None) else 1
    args.prog = parser.prog
    try:
        return args.func(args)
    except CipherError as exc:
        print(exc, file=sys.stderr)
    except Exception:
        print(UNEXPECTED_ERROR, file=sys.stderr)
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    return _execute(build_parser("shift-cipher"), argv)


def encipher_main(argv: Optional[List[str]] = None) -> int:
    return _execute(build_mode_parser(Mode.ENCIPHER, "shift-encipher"), argv)


def decipher_main(argv: Optional[List[str]] = None) -> int:
    return _execute(build_mode_parser(Mode.DECIPHER, "shift-decipher"), argv)


if __name__ == "__main__":
    sys.exit(main())
