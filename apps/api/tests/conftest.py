from __future__ import annotations

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from session_tokens.config import Settings

JWT_SECRET = "0123456789abcdef0123456789abcdef-secret"


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_key: rsa.RSAPrivateKey) -> str:
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


@pytest.fixture(scope="session")
def public_key_pem(rsa_key: rsa.RSAPrivateKey) -> str:
    return rsa_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")


@pytest.fixture
def jwt_secret() -> str:
    return JWT_SECRET


@pytest.fixture
def legacy_settings(jwt_secret: str) -> Settings:
    return Settings(_env_file=None, api_key=12345, api_secret=jwt_secret, application_id=None, private_key=None)


@pytest.fixture
def application_settings(private_key_pem: str) -> Settings:
    return Settings(_env_file=None, api_key=None, api_secret=None, application_id="app-123", private_key=private_key_pem)
