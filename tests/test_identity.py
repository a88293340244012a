"""Tests for bearer token → identity extraction."""

import base64

import jwt
import pytest

from conftest import make_token
from subscore.config import Settings
from subscore.errors import InvalidTokenFormat, TokenExtractionFailed
from subscore.services.identity_service import (
    SignedTokenVerifier,
    UnverifiedClaimsExtractor,
    build_identity_extractor,
)

SIGNING_KEY = "a-32-byte-long-test-signing-key!"


@pytest.fixture
def extractor():
    return UnverifiedClaimsExtractor()


@pytest.mark.parametrize("token", ["", "onlyonesegment", "no-dots-at-all"])
def test_token_without_claims_segment_is_rejected(extractor, token):
    with pytest.raises(InvalidTokenFormat):
        extractor.extract(token)


def test_invalid_format_is_an_extraction_failure():
    assert issubclass(InvalidTokenFormat, TokenExtractionFailed)


def test_extracts_email_name_picture(extractor):
    token = make_token({"email": "a@b.com", "name": "A", "picture": "http://x"})
    identity = extractor.extract(token)

    assert (identity.email, identity.name, identity.picture) == ("a@b.com", "A", "http://x")
    assert identity.verified is False


def test_two_segments_are_enough(extractor):
    header, claims, _ = make_token({"email": "a@b.com"}).split(".")
    identity = extractor.extract(f"{header}.{claims}")
    assert identity.email == "a@b.com"


def test_missing_and_non_text_claims_default_to_empty(extractor):
    token = make_token({"email": "a@b.com", "name": 42, "picture": None})
    identity = extractor.extract(token)

    assert identity.email == "a@b.com"
    assert identity.name == ""
    assert identity.picture == ""


def test_signature_is_not_checked(extractor):
    token = make_token({"email": "a@b.com"})
    tampered = token.rsplit(".", 1)[0] + ".forged"
    assert extractor.extract(tampered).email == "a@b.com"


def test_undecodable_claims_segment_fails_with_cause(extractor):
    with pytest.raises(TokenExtractionFailed) as exc_info:
        extractor.extract("header.%%%not-base64%%%.sig")
    assert exc_info.value.__cause__ is not None


def test_non_json_claims_fail(extractor):
    payload = base64.urlsafe_b64encode(b"not json").rstrip(b"=").decode()
    with pytest.raises(TokenExtractionFailed):
        extractor.extract(f"h.{payload}.s")


def test_non_object_claims_fail(extractor):
    payload = base64.urlsafe_b64encode(b'["a@b.com"]').rstrip(b"=").decode()
    with pytest.raises(TokenExtractionFailed):
        extractor.extract(f"h.{payload}.s")


def test_claims_segment_with_or_without_padding(extractor):
    padded = base64.urlsafe_b64encode(b'{"email":"a@b.c"}').decode()
    assert padded.endswith("=")
    assert extractor.extract(f"h.{padded}.s").email == "a@b.c"
    assert extractor.extract(f"h.{padded.rstrip('=')}.s").email == "a@b.c"


def test_deeply_nested_claims_fail_cleanly(extractor):
    nested = base64.urlsafe_b64encode(b"[" * 5000 + b"]" * 5000).rstrip(b"=").decode()
    with pytest.raises(TokenExtractionFailed) as exc_info:
        extractor.extract(f"h.{nested}.s")
    assert isinstance(exc_info.value.__cause__, RecursionError)


def test_signed_verifier_accepts_valid_signature():
    token = jwt.encode({"email": "a@b.com", "name": "A", "picture": "p"}, SIGNING_KEY, algorithm="HS256")
    identity = SignedTokenVerifier(SIGNING_KEY).extract(token)

    assert identity.email == "a@b.com"
    assert identity.verified is True


def test_signed_verifier_rejects_wrong_key():
    token = jwt.encode({"email": "a@b.com"}, "another-32-byte-long-signing-key!", algorithm="HS256")
    with pytest.raises(TokenExtractionFailed):
        SignedTokenVerifier(SIGNING_KEY).extract(token)


def test_build_extractor_follows_auth_mode():
    assert isinstance(build_identity_extractor(Settings(auth_mode="unverified")), UnverifiedClaimsExtractor)
    signed = build_identity_extractor(Settings(auth_mode="signed", jwt_secret=SIGNING_KEY))
    assert isinstance(signed, SignedTokenVerifier)


def test_signed_mode_requires_secret():
    with pytest.raises(ValueError):
        Settings(auth_mode="signed", jwt_secret="")
