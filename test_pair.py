from __future__ import annotations

import io
import unittest

from splitmd5.diag import DiagnosticConfig
from splitmd5.errors import DigestMismatch, InvalidLengthError
from splitmd5.md5 import Md5Context, md5
from splitmd5.pair import digest_into, md5_2, md5_many, md5_window
from splitmd5.reference import checked_md5, reference_md5


def _pattern(n: int, seed: int = 0) -> bytes:
    return bytes((i * 13 + seed) & 0xFF for i in range(n))


def _direct(data: bytes) -> bytes:
    ctx = Md5Context.new()
    ctx.update(data)
    return ctx.result()


class TwoBufferEquivalenceTests(unittest.TestCase):
    CASES = [
        (b"", b""),
        (b"", _pattern(17)),
        (_pattern(17), b""),
        (_pattern(3), _pattern(61, seed=5)),
        (_pattern(64), _pattern(128, seed=9)),
        (_pattern(55), _pattern(1)),
        (_pattern(63), _pattern(2)),
    ]

    def test_digest_into_matches_concatenation(self):
        for a, b in self.CASES:
            with self.subTest(len_a=len(a), len_b=len(b)):
                out = bytearray(16)
                self.assertIsNone(digest_into(out, a, len(a), b, len(b)))
                self.assertEqual(bytes(out), _direct(a + b))
                self.assertEqual(bytes(out), reference_md5(a + b))

    def test_md5_2(self):
        for a, b in self.CASES:
            self.assertEqual(md5_2(a, b), md5(a + b))
        self.assertEqual(md5_2(b"ab", b"c").hex(), "900150983cd24fb0d6963f7d28e17f72")

    def test_lengths_select_prefixes(self):
        a = b"abcXXXX"
        b = b"YYYY"
        out = bytearray(16)
        digest_into(out, a, 3, b, 0)
        self.assertEqual(out.hex(), "900150983cd24fb0d6963f7d28e17f72")

    def test_writes_exactly_sixteen_bytes(self):
        out = bytearray(b"\xee" * 20)
        digest_into(out, b"a", 1, b"bc", 2)
        self.assertEqual(bytes(out[:16]), md5(b"abc"))
        self.assertEqual(bytes(out[16:]), b"\xee" * 4)

    def test_memoryview_out(self):
        backing = bytearray(32)
        digest_into(memoryview(backing)[8:24], b"", 0, b"abc", 3)
        self.assertEqual(bytes(backing[8:24]), md5(b"abc"))
        self.assertEqual(bytes(backing[:8]), bytes(8))

    def test_deterministic(self):
        a, b = _pattern(70), _pattern(90, seed=3)
        self.assertEqual(md5_2(a, b), md5_2(a, b))


class InvalidLengthTests(unittest.TestCase):
    def _assert_rejected(self, *args):
        out = bytearray(b"\xaa" * 16)
        with self.assertRaises(InvalidLengthError):
            digest_into(out, *args)
        self.assertEqual(bytes(out), b"\xaa" * 16)

    def test_negative_lengths(self):
        self._assert_rejected(b"abc", -1, b"", 0)
        self._assert_rejected(b"abc", 3, b"", -5)

    def test_lengths_past_buffer_end(self):
        self._assert_rejected(b"abc", 4, b"", 0)
        self._assert_rejected(b"abc", 3, b"de", 3)

    def test_non_integer_lengths(self):
        self._assert_rejected(b"abc", 1.5, b"", 0)
        self._assert_rejected(b"abc", True, b"", 0)

    def test_is_value_error(self):
        with self.assertRaises(ValueError):
            digest_into(bytearray(16), b"", -1, b"", 0)

    def test_bad_output_buffers(self):
        with self.assertRaises(InvalidLengthError):
            digest_into(bytearray(15), b"", 0, b"", 0)
        with self.assertRaises(InvalidLengthError):
            digest_into(bytes(16), b"", 0, b"", 0)
        with self.assertRaises(InvalidLengthError):
            digest_into(None, b"", 0, b"", 0)


class GeneralisationTests(unittest.TestCase):
    def test_md5_many(self):
        parts = [_pattern(n, seed=n) for n in (0, 5, 64, 1, 100, 0, 63)]
        self.assertEqual(md5_many(*parts), md5(b"".join(parts)))
        self.assertEqual(md5_many(), md5(b""))
        self.assertEqual(md5_many(b"abc"), md5(b"abc"))

    def test_window_wraps(self):
        buf = b"0123456789"
        self.assertEqual(md5_window(buf, 3), md5(b"3456789012"))
        self.assertEqual(md5_window(buf, 0), md5(buf))
        self.assertEqual(md5_window(buf, 10), md5(buf))

    def test_window_with_partial_fill(self):
        buf = bytearray(b"abcdefgh\x00\x00\x00\x00")
        self.assertEqual(md5_window(buf, 2, 8), md5(b"cdefghab"))

    def test_window_rejects_bad_bounds(self):
        with self.assertRaises(InvalidLengthError):
            md5_window(b"abc", 4)
        with self.assertRaises(InvalidLengthError):
            md5_window(b"abc", -1)
        with self.assertRaises(InvalidLengthError):
            md5_window(b"abcdef", 5, 4)
        with self.assertRaises(InvalidLengthError):
            md5_window(b"abc", 0, 4)


class ReferenceTests(unittest.TestCase):
    def test_checked_md5(self):
        self.assertEqual(checked_md5(b"ab", b"c").hex(), "900150983cd24fb0d6963f7d28e17f72")
        self.assertTrue(issubclass(DigestMismatch, Exception))


class DiagnosticTests(unittest.TestCase):
    def test_disabled_by_default(self):
        self.assertFalse(DiagnosticConfig().enabled)
        self.assertFalse(DiagnosticConfig.from_environment({}).enabled)
        self.assertFalse(DiagnosticConfig.from_environment({"MDEBUG": "0"}).enabled)
        self.assertFalse(DiagnosticConfig.from_environment({"MDEBUG": "yes"}).enabled)
        self.assertTrue(DiagnosticConfig.from_environment({"MDEBUG": "1"}).enabled)

    def test_dump_contents(self):
        stream = io.StringIO()
        out = bytearray(16)
        digest_into(out, b"abc", 3, b"", 0, diagnostics=DiagnosticConfig(enabled=True, stream=stream))
        lines = stream.getvalue().splitlines()
        self.assertEqual(
            lines,
            [
                "md5_2: out " + "00" * 16,
                "md5_2: input1 616263",
                "md5_2: input2 ",
                "md5_2: digest 900150983cd24fb0d6963f7d28e17f72",
            ],
        )

    def test_disabled_config_writes_nothing(self):
        stream = io.StringIO()
        digest_into(bytearray(16), b"abc", 3, b"", 0, diagnostics=DiagnosticConfig(enabled=False, stream=stream))
        self.assertEqual(stream.getvalue(), "")


if __name__ == "__main__":
    unittest.main()
