"""Outbound HTTP: external metadata, Pinata JSON pinning and Cognito tokens."""

import json
import time

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwk, jwt

from config.settings import Settings
from core import auth
from core.auth import TokenVerifier
from core.errors import UpstreamError
from utilities.external import base_fetch_get

def test_base_fetch_get_returns_json():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"name": "Token", "image": "ipfs://x"}))

    assert base_fetch_get("https://meta.example/1.json", transport=transport) == {"name": "Token", "image": "ipfs://x"}

def test_base_fetch_get_rejects_non_json():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html></html>"))

    with pytest.raises(UpstreamError):
        base_fetch_get("https://meta.example/1.json", transport=transport)

def test_base_fetch_get_raises_on_http_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(404))

    with pytest.raises(httpx.HTTPStatusError):
        base_fetch_get("https://meta.example/missing.json", transport=transport)

def test_fetch_external_img_metadata_requires_endpoint(client):
    response = client.get("/fetch_external_img_metadata")

    assert response.json() == {"success": False, "message": "Validation Error: ENDPOINT must be provided."}

def test_pin_json_to_ipfs(pinning, pinata_requests):
    result = pinning.pin_json_to_ipfs({"name": "Token"})

    assert result["IpfsHash"] == "QmHash1"
    [request] = pinata_requests
    assert request.url.path == "/pinning/pinJSONToIPFS"
    assert request.headers["Authorization"] == "Bearer pinata-jwt"
    assert json.loads(request.read()) == {"name": "Token"}

@pytest.fixture
def cognito(monkeypatch):
    """An RS256 key pair standing in for a user pool"""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    public_jwk = jwk.construct(public_pem, "RS256").to_dict()
    public_jwk["kid"] = "test-kid"
    monkeypatch.setattr(auth, "fetch_jwks", lambda url, timeout: {"keys": [public_jwk]})

    settings = Settings(
        COGNITO_REGION="us-west-1",
        COGNITO_USER_POOL_ID="us-west-1_pool",
        COGNITO_CLIENT_ID="client-1",
    )

    def issue(**overrides):
        claims = {
            "sub": "user-1",
            "iss": settings.COGNITO_ISSUER,
            "token_use": "access",
            "client_id": "client-1",
            "exp": int(time.time()) + 300,
        }
        claims.update(overrides)
        return jwt.encode(claims, private_pem.decode(), algorithm="RS256", headers={"kid": "test-kid"})

    return settings, issue

def test_cognito_access_token(cognito):
    settings, issue = cognito
    verifier = TokenVerifier(settings)

    assert verifier.verify(issue(), "user-1")
    assert not verifier.verify(issue(), "user-2")
    assert not verifier.verify(issue(token_use="id"), "user-1")
    assert not verifier.verify(issue(client_id="other-client"), "user-1")
    assert not verifier.verify(issue(iss="https://issuer.example"), "user-1")
    assert not verifier.verify(issue(exp=int(time.time()) - 10), "user-1")
