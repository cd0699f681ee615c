#!/usr/bin/env python3
"""
Unit tests for bearer token authentication.
"""

import time
import unittest

import jwt
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from core.config_loader import AuthConfig
from web.backend.auth import InvalidTokenError, TokenVerifier, get_current_user_id, get_token_verifier
from web.backend.exceptions import register_exception_handlers

SECRET = "unit-test-signing-secret-0123456789abcdef"


class TestTokenVerifier(unittest.TestCase):

    def setUp(self):
        self.verifier = TokenVerifier(AuthConfig(jwt_secret=SECRET))

    def test_sub_claim(self):
        token = jwt.encode({"sub": "user-1"}, SECRET, algorithm="HS256")
        self.assertEqual(self.verifier.verify(token), "user-1")

    def test_uid_claim(self):
        token = jwt.encode({"uid": "user-2"}, SECRET, algorithm="HS256")
        self.assertEqual(self.verifier.verify(token), "user-2")

    def test_wrong_secret(self):
        token = jwt.encode({"sub": "user-1"}, "another-signing-secret-0123456789abcdef", algorithm="HS256")
        with self.assertRaises(InvalidTokenError):
            self.verifier.verify(token)

    def test_expired(self):
        token = jwt.encode({"sub": "user-1", "exp": int(time.time()) - 60}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidTokenError):
            self.verifier.verify(token)

    def test_no_id_claim(self):
        token = jwt.encode({"email": "a@example.com"}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidTokenError):
            self.verifier.verify(token)

    def test_no_secret_configured(self):
        with self.assertRaises(InvalidTokenError):
            TokenVerifier(AuthConfig()).verify("anything")


class TestCurrentUserDependency(unittest.TestCase):

    def setUp(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/whoami")
        def whoami(user_id: str = Depends(get_current_user_id)):
            return {"user_id": user_id}

        app.dependency_overrides[get_token_verifier] = lambda: TokenVerifier(AuthConfig(jwt_secret=SECRET))
        self.client = TestClient(app, raise_server_exceptions=False)

    def test_valid_token(self):
        token = jwt.encode({"sub": "user-1"}, SECRET, algorithm="HS256")
        response = self.client.get("/whoami", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(response.json(), {"user_id": "user-1"})

    def test_missing_header(self):
        response = self.client.get("/whoami")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "Unauthorized")

    def test_bad_token(self):
        response = self.client.get("/whoami", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"], "Invalid token")


if __name__ == '__main__':
    unittest.main()
