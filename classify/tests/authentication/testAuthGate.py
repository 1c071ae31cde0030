from django.test import SimpleTestCase

from classify.authentication import AuthGate, TokenCodec, extract_bearer_token
from classify.exceptions import Unauthorized, UnauthorizedReason


class ExtractBearerTokenTests(SimpleTestCase):
    def test_valid_header(self):
        self.assertEqual(extract_bearer_token({"Authorization": "Bearer abc.def.ghi"}), "abc.def.ghi")

    def test_missing_header(self):
        self.assertIsNone(extract_bearer_token({}))

    def test_scheme_is_case_sensitive(self):
        self.assertIsNone(extract_bearer_token({"Authorization": "bearer abc"}))

    def test_other_schemes_are_ignored(self):
        self.assertIsNone(extract_bearer_token({"Authorization": "Basic dXNlcjpwYXNz"}))

    def test_exactly_one_space(self):
        self.assertIsNone(extract_bearer_token({"Authorization": "Bearer  abc"}))
        self.assertIsNone(extract_bearer_token({"Authorization": "Bearer abc def"}))
        self.assertIsNone(extract_bearer_token({"Authorization": "Bearer "}))


class AuthGateTests(SimpleTestCase):
    def setUp(self):
        self.codec = TokenCodec("S1")
        self.gate = AuthGate(self.codec)

    def test_valid_credential_returns_subject(self):
        token = self.codec.issue(5)
        self.assertEqual(self.gate.authenticate({"Authorization": f"Bearer {token}"}), 5)

    def test_missing_header_is_rejected(self):
        with self.assertRaises(Unauthorized) as ctx:
            self.gate.authenticate({})
        self.assertEqual(ctx.exception.reason, UnauthorizedReason.MISSING)

    def test_lowercase_scheme_is_rejected(self):
        token = self.codec.issue(5)
        with self.assertRaises(Unauthorized):
            self.gate.authenticate({"Authorization": f"bearer {token}"})

    def test_foreign_credential_is_rejected(self):
        token = TokenCodec("S2").issue(5)
        with self.assertRaises(Unauthorized) as ctx:
            self.gate.authenticate({"Authorization": f"Bearer {token}"})
        self.assertEqual(ctx.exception.reason, UnauthorizedReason.BAD_SIGNATURE)

    def test_rejection_message_is_generic(self):
        with self.assertRaises(Unauthorized) as ctx:
            self.gate.authenticate({"Authorization": "Bearer x.y.z"})
        self.assertEqual(ctx.exception.to_dict(), {"error": "Unauthorized"})

    def test_non_bearer_header_is_logged(self):
        with self.assertLogs("classify.authentication.gate", level="WARNING") as logs:
            with self.assertRaises(Unauthorized) as ctx:
                self.gate.authenticate({"Authorization": "Token abc"})
        self.assertEqual(ctx.exception.reason, UnauthorizedReason.MISSING)
        self.assertIn("missing", logs.output[0].lower())
