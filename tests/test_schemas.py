"""
Tests for request validation at the HTTP boundary.
"""

from auth.schemas import AuthRequest, RequestValidationFailure, validate_auth_request


class TestValidateAuthRequest:
    def test_valid_payload(self):
        parsed = validate_auth_request({"email": "a@x.com", "password": "secret1"})
        assert isinstance(parsed, AuthRequest)
        assert parsed.email == "a@x.com"
        assert parsed.password == "secret1"

    def test_bad_email(self):
        parsed = validate_auth_request({"email": "nope", "password": "secret1"})
        assert isinstance(parsed, RequestValidationFailure)
        assert any(e.startswith("email:") for e in parsed.errors)

    def test_empty_password(self):
        parsed = validate_auth_request({"email": "a@x.com", "password": ""})
        assert isinstance(parsed, RequestValidationFailure)
        assert any(e.startswith("password:") for e in parsed.errors)

    def test_missing_fields_reported_individually(self):
        parsed = validate_auth_request({})
        assert isinstance(parsed, RequestValidationFailure)
        assert len(parsed.errors) == 2

    def test_password_hidden_from_repr(self):
        req = AuthRequest(email="a@x.com", password="secret1")
        assert "secret1" not in repr(req)

    def test_email_is_not_normalized(self):
        parsed = validate_auth_request({"email": "A@X.COM", "password": "secret1"})
        assert isinstance(parsed, AuthRequest)
        assert parsed.email == "A@X.COM"

    def test_non_object_body(self):
        parsed = validate_auth_request([{"email": "a@x.com", "password": "secret1"}])
        assert isinstance(parsed, RequestValidationFailure)
        assert parsed.errors[0].startswith("body:")
