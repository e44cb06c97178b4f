import hashlib
import hmac
from unittest import TestCase

from ..signature import parse_signature, sign, verify


class SignTests(TestCase):

    def test_matches_hmac_sha256(self):
        expected = hmac.new(b'pineapple', b'topic', hashlib.sha256).hexdigest()
        self.assertEqual(sign('pineapple', 'topic'), expected)

    def test_deterministic(self):
        self.assertEqual(sign('pineapple', 'http://www.example.com/'),
                         sign('pineapple', 'http://www.example.com/'))

    def test_different_topics(self):
        self.assertNotEqual(sign('pineapple', 'http://www.example.com/a'),
                            sign('pineapple', 'http://www.example.com/b'))

    def test_bytes_and_text_agree(self):
        self.assertEqual(sign(b'pineapple', b'hello'),
                         sign('pineapple', 'hello'))


class ParseSignatureTests(TestCase):

    def test_scheme_and_digest(self):
        self.assertEqual(parse_signature('sha256=abc'), ('sha256', 'abc'))

    def test_scheme_is_lowercased(self):
        self.assertEqual(parse_signature('SHA256=abc'), ('sha256', 'abc'))

    def test_no_scheme(self):
        self.assertEqual(parse_signature('abc'), (None, 'abc'))

    def test_empty(self):
        self.assertEqual(parse_signature(None), (None, ''))


class VerifyTests(TestCase):
    secret = 'topic-secret'
    body = b'<feed>hello</feed>'

    def header(self, body=None, scheme='sha256'):
        digest = sign(self.secret, self.body if body is None else body)
        return '%s=%s' % (scheme, digest)

    def test_valid(self):
        self.assertTrue(verify(self.secret, self.body, self.header()))

    def test_digest_without_scheme(self):
        digest = sign(self.secret, self.body)
        self.assertTrue(verify(self.secret, self.body, digest))

    def test_flipped_body_byte(self):
        header = self.header()
        for idx in range(len(self.body)):
            tampered = bytearray(self.body)
            tampered[idx] ^= 0x01
            self.assertFalse(verify(self.secret, bytes(tampered), header))

    def test_flipped_digest_character(self):
        digest = sign(self.secret, self.body)
        for idx in range(len(digest)):
            swapped = '0' if digest[idx] != '0' else '1'
            tampered = digest[:idx] + swapped + digest[idx + 1:]
            self.assertFalse(
                verify(self.secret, self.body, 'sha256=' + tampered)
            )

    def test_wrong_secret(self):
        self.assertFalse(verify('other', self.body, self.header()))

    def test_wrong_scheme(self):
        self.assertFalse(
            verify(self.secret, self.body, self.header(scheme='sha1'))
        )

    def test_non_ascii_digest(self):
        self.assertFalse(verify(self.secret, self.body, 'sha256=\xe9\xe9'))
