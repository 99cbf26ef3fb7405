from __future__ import annotations

import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from session_tokens.models.schemas import Role
from session_tokens.services.errors import InvalidArgumentError, TokenSigningError
from session_tokens.services.jwt_signer import JwtTokenSigner
from session_tokens.services.token_types import TokenData

SECRET = "0123456789abcdef0123456789abcdef-secret"
NOW = 1_700_000_000
NO_EXP = {"verify_exp": False}


@pytest.fixture
def signer() -> JwtTokenSigner:
    return JwtTokenSigner(clock=lambda: NOW, nonce_source=lambda: 7, default_ttl_seconds=900)


def make_token_data(**overrides) -> TokenData:
    values = {
        "api_key": "12345",
        "api_secret": SECRET,
        "role": Role.SUBSCRIBER,
        "data": None,
        "session_id": "1_MX4session",
    }
    values.update(overrides)
    return TokenData(**values)


def test_legacy_claims_use_default_ttl(signer):
    token = signer.sign_legacy_claims(make_token_data())
    claims = jwt.decode(token, SECRET, algorithms=["HS256"], options=NO_EXP)

    assert claims["iss"] == "12345"
    assert claims["ist"] == "project"
    assert claims["iat"] == NOW
    assert claims["exp"] == NOW + 900
    assert claims["nonce"] == 7
    assert claims["role"] == "subscriber"
    assert claims["scope"] == "session.connect"
    assert claims["session_id"] == "1_MX4session"
    assert claims["initial_layout_class_list"] == []
    assert "connection_data" not in claims


def test_legacy_claims_carry_caller_values(signer):
    token_data = make_token_data(
        role=Role.MODERATOR,
        data="user=42",
        expire_time=NOW + 3600,
        initial_layout_classes=("full", "focus"),
    )
    claims = jwt.decode(signer.sign_legacy_claims(token_data), SECRET, algorithms=["HS256"], options=NO_EXP)

    assert claims["exp"] == NOW + 3600
    assert claims["connection_data"] == "user=42"
    assert claims["initial_layout_class_list"] == ["full", "focus"]
    assert claims["role"] == "moderator"


def test_legacy_claims_reject_oversized_data(signer):
    with pytest.raises(InvalidArgumentError):
        signer.sign_legacy_claims(make_token_data(data="x" * 1001))


@pytest.mark.parametrize("expire_time", [NOW - 1, NOW, NOW + 2592001])
def test_legacy_claims_reject_out_of_range_expire_time(signer, expire_time):
    with pytest.raises(InvalidArgumentError):
        signer.sign_legacy_claims(make_token_data(expire_time=expire_time))


def test_legacy_claims_accept_thirty_day_ceiling(signer):
    token = signer.sign_legacy_claims(make_token_data(expire_time=NOW + 2592000))

    assert jwt.decode(token, SECRET, algorithms=["HS256"], options=NO_EXP)["exp"] == NOW + 2592000


def test_legacy_claims_reject_empty_secret(signer):
    with pytest.raises(TokenSigningError):
        signer.sign_legacy_claims(make_token_data(api_secret=""))


def test_application_token_is_rs256_moderator(signer, private_key_pem, public_key_pem):
    token = signer.sign_application_token("app-123", private_key_pem, "1_MX4session")

    assert jwt.get_unverified_header(token)["alg"] == "RS256"
    claims = jwt.decode(token, public_key_pem, algorithms=["RS256"], options=NO_EXP)
    assert claims["application_id"] == "app-123"
    assert claims["session_id"] == "1_MX4session"
    assert claims["role"] == "moderator"
    assert claims["scope"] == "session.connect"
    assert claims["exp"] == NOW + 900
    assert claims["jti"]


def test_application_tokens_have_unique_ids(signer, private_key_pem):
    first = jwt.decode(signer.sign_application_token("app-123", private_key_pem, "s"), options={"verify_signature": False})
    second = jwt.decode(signer.sign_application_token("app-123", private_key_pem, "s"), options={"verify_signature": False})

    assert first["jti"] != second["jti"]


@pytest.mark.parametrize("private_key", ["", "not a pem key"])
def test_malformed_private_key_fails_signing(signer, private_key):
    with pytest.raises(TokenSigningError):
        signer.sign_application_token("app-123", private_key, "1_MX4session")


def test_non_rsa_private_key_fails_signing(signer):
    ec_pem = ec.generate_private_key(ec.SECP256R1()).private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")

    with pytest.raises(TokenSigningError):
        signer.sign_application_token("app-123", ec_pem, "1_MX4session")
