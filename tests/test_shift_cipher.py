import os
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import mock

from shift_cipher import (
    DIGITS,
    LOWERCASE,
    PUNCTUATION,
    UPPERCASE,
    CipherConfig,
    ConfigurationError,
    Mode,
    ResourceError,
    build_cipher_dict,
    cipher_file,
    decipher_text,
    encipher_text,
    iter_transform,
    reduce_shift,
    reduced_shifts,
    rotate,
    transform,
)


class TestShiftReduction(unittest.TestCase):
    def test_result_in_range_and_congruent(self) -> None:
        for modulus in (1, 10, 26, 32):
            for shift in range(-100, 101):
                reduced = reduce_shift(shift, modulus)
                self.assertTrue(0 <= reduced < modulus)
                self.assertEqual((reduced - shift) % modulus, 0)

    def test_known_values(self) -> None:
        self.assertEqual(reduce_shift(-3, 10), 7)
        self.assertEqual(reduce_shift(-3), 23)
        self.assertEqual(reduce_shift(26, 26), 0)
        self.assertEqual(reduce_shift(33, 32), 1)
        self.assertEqual(reduce_shift(-80, 32), 16)

    def test_reduced_shifts_only_for_enabled_classes(self) -> None:
        shifts = reduced_shifts(CipherConfig(shift=-3))
        self.assertEqual((shifts.letters, shifts.digits, shifts.punctuation), (23, 0, 0))
        shifts = reduced_shifts(CipherConfig(shift=-3, include_digits=True, include_punctuation=True))
        self.assertEqual((shifts.letters, shifts.digits, shifts.punctuation), (23, 7, 29))


class TestCipherDictionary(unittest.TestCase):
    def test_alphabet_tables(self) -> None:
        self.assertEqual(len(UPPERCASE), 26)
        self.assertEqual(len(LOWERCASE), 26)
        self.assertEqual(len(DIGITS), 10)
        self.assertEqual(len(PUNCTUATION), 32)
        self.assertEqual(list(PUNCTUATION), sorted(PUNCTUATION))

    def test_rotate_left(self) -> None:
        self.assertEqual("".join(rotate(DIGITS, 3)), "3456789012")
        self.assertEqual(rotate(DIGITS, 0), DIGITS)

    def test_encipher_mapping_letters_only(self) -> None:
        mapping = build_cipher_dict(CipherConfig(shift=5))
        self.assertEqual(mapping["A"], "F")
        self.assertEqual(mapping["Z"], "E")
        self.assertEqual(mapping["a"], "f")
        self.assertEqual(len(mapping), 52)
        self.assertNotIn("1", mapping)
        self.assertNotIn(",", mapping)

    def test_decipher_mapping_is_inverse(self) -> None:
        for shift in (-41, -3, 0, 5, 13, 77):
            config = CipherConfig(shift=shift, include_digits=True, include_punctuation=True)
            enc = build_cipher_dict(config)
            dec = build_cipher_dict(CipherConfig(shift, True, True, Mode.DECIPHER))
            self.assertEqual(len(enc), len(dec))
            for plain, shifted in enc.items():
                self.assertEqual(dec[shifted], plain)

    def test_bijection_within_each_alphabet(self) -> None:
        config = CipherConfig(shift=12345, include_digits=True, include_punctuation=True)
        for mode in Mode:
            mapping = build_cipher_dict(CipherConfig(config.shift, True, True, mode))
            for alphabet in (UPPERCASE, LOWERCASE, DIGITS, PUNCTUATION):
                targets = [mapping[ch] for ch in alphabet]
                self.assertEqual(sorted(targets), sorted(alphabet))

    def test_build_is_deterministic_and_read_only(self) -> None:
        config = CipherConfig(shift=-7, include_punctuation=True)
        first = build_cipher_dict(config)
        self.assertEqual(dict(first), dict(build_cipher_dict(config)))
        with self.assertRaises(TypeError):
            first["A"] = "A"  # type: ignore[index]

    def test_mode_accepts_names(self) -> None:
        self.assertIs(CipherConfig(mode="decipher").mode, Mode.DECIPHER)  # type: ignore[arg-type]
        with self.assertRaises(ConfigurationError):
            CipherConfig(mode="scramble")  # type: ignore[arg-type]

    def test_punctuation_wraps(self) -> None:
        mapping = build_cipher_dict(CipherConfig(shift=1, include_punctuation=True))
        self.assertEqual(mapping["!"], '"')
        self.assertEqual(mapping["~"], "!")
        self.assertNotIn("5", mapping)


class TestTextTransform(unittest.TestCase):
    def test_hello_world(self) -> None:
        self.assertEqual(encipher_text("Hello, World!", 5), "Mjqqt, Btwqi!")
        self.assertEqual(decipher_text("Mjqqt, Btwqi!", 5), "Hello, World!")

    def test_negative_shift_with_digits(self) -> None:
        self.assertEqual(encipher_text("Test123", -3, include_digits=True), "Qbpq890")
        self.assertEqual(encipher_text("Test123", -3), "Qbpq123")

    def test_full_rotation_is_identity(self) -> None:
        sample = "The quick brown fox, 42 times!"
        self.assertEqual(encipher_text(sample, 26), sample)

    def test_round_trip_all_classes(self) -> None:
        sample = "Hello, World! 0123456789 {[(<~>)]} \\ \"quoted\"\nsecond line\té"
        for shift in range(-40, 41):
            for digits in (False, True):
                for puncts in (False, True):
                    enciphered = encipher_text(sample, shift, digits, puncts)
                    self.assertEqual(decipher_text(enciphered, shift, digits, puncts), sample)

    def test_pass_through_characters(self) -> None:
        mapping = build_cipher_dict(CipherConfig(shift=9, include_digits=True, include_punctuation=True))
        untouched = " \t\r\x00\x7f\xa0é\xff"
        output, count = transform([untouched], mapping)
        self.assertEqual(output, [untouched])
        self.assertEqual(count, len(untouched))

    def test_count_excludes_line_terminators(self) -> None:
        mapping = build_cipher_dict(CipherConfig(shift=5))
        output, count = transform(["abc\n", "\n", "de"], mapping)
        self.assertEqual(output, ["fgh", "", "ij"])
        self.assertEqual(count, 5)

    def test_iter_transform_is_lazy(self) -> None:
        def lines():
            yield "ab\n"
            raise AssertionError("second line should not be read")

        mapping = build_cipher_dict(CipherConfig(shift=5))
        self.assertEqual(next(iter_transform(lines(), mapping)), ("fg", 2))


class TestCipherFile(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmpdir = Path(self._tmp.name)

    def test_default_output_names_and_round_trip(self) -> None:
        source = self.tmpdir / "letter.txt"
        source.write_text("Hello, World!\nSee you at 10.\n", encoding="latin-1")

        run = cipher_file(source, None, CipherConfig(shift=5))
        self.assertEqual(run.out_path, self.tmpdir / "letter.txt.ciph")
        self.assertTrue(run.default_output)
        self.assertEqual(run.chars_processed, 27)
        self.assertEqual(run.out_path.read_text(encoding="latin-1"), "Mjqqt, Btwqi!\nXjj dtz fy 10.\n")

        back = cipher_file(run.out_path, None, CipherConfig(shift=5, mode=Mode.DECIPHER))
        self.assertEqual(back.out_path, self.tmpdir / "letter.txt.ciph.dec")
        self.assertEqual(back.out_path.read_text(encoding="latin-1"), source.read_text(encoding="latin-1"))

    def test_last_line_gets_terminator(self) -> None:
        source = self.tmpdir / "short.txt"
        source.write_text("abc", encoding="latin-1")
        out = self.tmpdir / "short.out"
        run = cipher_file(source, out, CipherConfig(shift=1))
        self.assertFalse(run.default_output)
        self.assertEqual(out.read_bytes(), b"bcd\n")
        self.assertEqual(run.chars_processed, 3)

    def test_every_byte_value_survives_round_trip(self) -> None:
        data = bytes(range(256)) + b"\n"
        source = self.tmpdir / "bytes.bin"
        source.write_bytes(data)
        config = CipherConfig(shift=11, include_digits=True, include_punctuation=True)
        run = cipher_file(source, self.tmpdir / "bytes.ciph", config)
        self.assertEqual(run.chars_processed, 255)
        enciphered = run.out_path.read_bytes()
        self.assertEqual(enciphered[:10], data[:10])
        self.assertEqual(enciphered[ord("A")], ord("L"))
        back = cipher_file(run.out_path, self.tmpdir / "bytes.dec", CipherConfig(11, True, True, Mode.DECIPHER))
        self.assertEqual(back.out_path.read_bytes(), data)

    def test_missing_input_is_resource_error(self) -> None:
        missing = self.tmpdir / "nope.txt"
        with self.assertRaises(ResourceError) as ctx:
            cipher_file(missing, None, CipherConfig())
        self.assertIsInstance(ctx.exception, OSError)
        self.assertIn("Input file not found", str(ctx.exception))
        self.assertFalse((self.tmpdir / "nope.txt.ciph").exists())

    def test_unwritable_output_is_resource_error(self) -> None:
        source = self.tmpdir / "in.txt"
        source.write_text("abc\n", encoding="latin-1")
        target = self.tmpdir / "missing-dir" / "out.txt"
        with self.assertRaises(ResourceError):
            cipher_file(source, target, CipherConfig())
        self.assertFalse(target.exists())

    def test_output_must_differ_from_input(self) -> None:
        source = self.tmpdir / "in.txt"
        source.write_text("abc\n", encoding="latin-1")
        with self.assertRaises(ResourceError):
            cipher_file(source, source, CipherConfig())
        self.assertEqual(source.read_text(encoding="latin-1"), "abc\n")

    def test_unknown_encoding_is_configuration_error(self) -> None:
        source = self.tmpdir / "in.txt"
        source.write_text("abc\n", encoding="latin-1")
        with self.assertRaises(ConfigurationError):
            cipher_file(source, None, CipherConfig(), encoding="no-such-codec")

    def test_binary_codecs_are_rejected(self) -> None:
        source = self.tmpdir / "in.txt"
        source.write_text("abc\n", encoding="latin-1")
        for codec in ("base64", "rot13", "zlib"):
            with self.assertRaises(ConfigurationError):
                cipher_file(source, None, CipherConfig(), encoding=codec)
        self.assertFalse((self.tmpdir / "in.txt.ciph").exists())

    def test_undecodable_input_leaves_no_output(self) -> None:
        source = self.tmpdir / "wide.txt"
        # Odd trailing byte: truncated UTF-16 data.
        source.write_bytes("ab\ncd\n".encode("utf-16") + b"A")
        with self.assertRaises(ConfigurationError) as ctx:
            cipher_file(source, None, CipherConfig(), encoding="utf-16")
        self.assertIn("not valid utf-16 text", str(ctx.exception))
        self.assertFalse((self.tmpdir / "wide.txt.ciph").exists())

    def test_write_failure_removes_partial_output(self) -> None:
        source = self.tmpdir / "in.txt"
        source.write_text("abc\ndef\n", encoding="latin-1")
        target = self.tmpdir / "out.txt"

        def failing(lines, mapping):
            yield "bcd", 3
            raise OSError(28, "No space left on device")

        with mock.patch("shift_cipher.transform.iter_transform", failing):
            with self.assertRaises(ResourceError) as ctx:
                cipher_file(source, target, CipherConfig(shift=1))
        self.assertIn("No space left on device", str(ctx.exception))
        self.assertEqual(ctx.exception.path, target)
        self.assertFalse(target.exists())

    @unittest.skipUnless(os.access("/dev/full", os.W_OK), "needs a writable /dev/full")
    def test_full_device_is_resource_error(self) -> None:
        source = self.tmpdir / "in.txt"
        source.write_text("abc\n" * 5000, encoding="latin-1")
        with self.assertRaises(ResourceError) as ctx:
            cipher_file(source, "/dev/full", CipherConfig())
        self.assertIn("Cannot write output file", str(ctx.exception))
        self.assertTrue(Path("/dev/full").exists())


if __name__ == "__main__":
    unittest.main()
