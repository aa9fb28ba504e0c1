import os
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("JWT_SECRET", "internai-test-secret-0123456789abcdef")

import jwt  # noqa: E402
from fastapi import HTTPException, Request  # noqa: E402

from internai.core.config import looks_like_placeholder, settings  # noqa: E402
from internai.core.rate_limit import client_key  # noqa: E402
from internai.core.security import resolve_user  # noqa: E402


def _token(claims):
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


class ResolveUserTests(unittest.TestCase):
    def test_no_credentials(self):
        self.assertIsNone(resolve_user(None, None))
        self.assertIsNone(resolve_user("", "  "))

    def test_bearer_token_with_admin_role(self):
        user = resolve_user(f"Bearer {_token({'id': 'a1', 'role': 'admin'})}", None)
        self.assertEqual(user.id, "a1")
        self.assertTrue(user.is_admin)

    def test_sub_claim_is_accepted(self):
        user = resolve_user(f"Bearer {_token({'sub': 's1'})}", None)
        self.assertEqual(user.id, "s1")
        self.assertEqual(user.role, "student")
        self.assertFalse(user.is_admin)

    def test_header_identity_is_never_admin(self):
        user = resolve_user(None, "firebase-uid-1")
        self.assertEqual(user.id, "firebase-uid-1")
        self.assertTrue(user.via_header)
        self.assertFalse(user.is_admin)

    def test_bad_token_without_header_is_rejected(self):
        with self.assertRaises(HTTPException) as ctx:
            resolve_user("Bearer not-a-jwt", None)
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.detail, "Token is not valid")

    def test_bad_token_with_header_falls_back_to_header(self):
        user = resolve_user("Bearer not-a-jwt", "uid-2")
        self.assertEqual(user.id, "uid-2")

    def test_token_signed_with_other_secret_is_rejected(self):
        forged = jwt.encode({"id": "x", "role": "admin"}, "another-secret-0123456789abcdef-xyz", algorithm="HS256")
        with self.assertRaises(HTTPException):
            resolve_user(f"Bearer {forged}", None)


class RateLimitKeyTests(unittest.TestCase):
    def _request(self, headers):
        scope = {
            "type": "http",
            "method": "POST",
            "path": "/api/ai/chat",
            "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
            "client": ("10.0.0.7", 5555),
        }
        return Request(scope)

    def test_trusted_user_header_is_the_key(self):
        self.assertEqual(client_key(self._request({"X-User-ID": "uid-9"})), "user:uid-9")

    def test_falls_back_to_remote_address(self):
        self.assertEqual(client_key(self._request({})), "10.0.0.7")


class PlaceholderTests(unittest.TestCase):
    def test_placeholder_values(self):
        for value in (None, "", "your_key_here", "YOUR_GROQ_API_KEY_HERE", "changeme", "replace_me"):
            self.assertTrue(looks_like_placeholder(value), value)
        self.assertFalse(looks_like_placeholder("gsk_live_abc123"))


if __name__ == "__main__":
    unittest.main()
