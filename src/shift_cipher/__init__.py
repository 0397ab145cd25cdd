from .classical import (
    DIGITS,
    LOWERCASE,
    PUNCTUATION,
    UPPERCASE,
    CipherConfig,
    Mode,
    ReducedShifts,
    build_cipher_dict,
    decipher_text,
    encipher_text,
    reduce_shift,
    reduced_shifts,
    rotate,
)
from .config import CipherDefaults, load_defaults, parse_shift, save_defaults
from .diagnostics import completion_message, mapping_sample, render_report
from .errors import CipherError, ConfigurationError, ResourceError
from .history import log_event
from .transform import CipherRun, cipher_file, iter_transform, transform
from .utils import default_output_path, simple_replace

__version__ = "0.1.0"
