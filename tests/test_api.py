"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings, get_settings
from app.main import app

API = "/api/v1"
REFERENCE = "The quick brown fox jumps over the lazy dog. " * 3


@pytest.fixture
def client():
    with TestClient(app) as client:
        yield client


class TestLanguagesEndpoint:
    """GET /languages"""

    def test_list(self, client):
        response = client.get(f"{API}/languages")
        assert response.status_code == 200
        languages = {item["id"]: item for item in response.json()}
        assert set(languages) == {"ukrainian", "english"}
        assert languages["ukrainian"]["size"] == 33
        assert languages["ukrainian"]["key_range"] == "1-32"
        assert languages["english"]["key_range"] == "1-25"

    def test_get_one(self, client):
        response = client.get(f"{API}/languages/english")
        assert response.status_code == 200
        assert response.json()["uppercase"] == "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

    def test_unknown_language(self, client):
        response = client.get(f"{API}/languages/klingon")
        assert response.status_code == 404
        assert "klingon" in response.json()["detail"]


class TestEncryptDecryptEndpoints:
    """POST /encrypt and /decrypt"""

    def test_caesar(self, client):
        response = client.post(
            f"{API}/encrypt",
            json={"plaintext": "Hello", "cipher_type": "caesar", "language": "english", "key": "7"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["ciphertext"] == "Olssv"
        assert body["key_used"] == 7
        assert "key 7" in body["explanation"]

        response = client.post(
            f"{API}/decrypt",
            json={"ciphertext": "Olssv", "cipher_type": "caesar", "language": "english", "key": 7},
        )
        assert response.status_code == 200
        assert response.json()["plaintext"] == "Hello"

    def test_default_language_is_ukrainian(self, client):
        response = client.post(
            f"{API}/encrypt",
            json={"plaintext": "Привіт", "cipher_type": "caesar", "key": 1},
        )
        assert response.status_code == 200
        assert response.json()["language"] == "ukrainian"
        assert response.json()["ciphertext"] == "Рсігїу"

    def test_input_is_nfc_normalized(self, client):
        response = client.post(
            f"{API}/encrypt",
            json={"plaintext": "\u0438\u0306", "cipher_type": "caesar", "language": "ukrainian", "key": 1},
        )
        assert response.json()["ciphertext"] == "к"

    def test_policy(self, client):
        response = client.post(
            f"{API}/encrypt",
            json={
                "plaintext": "Hello, World!",
                "cipher_type": "caesar",
                "language": "english",
                "key": 3,
                "policy": {"case_handling": "upper", "non_alpha_handling": "remove"},
            },
        )
        assert response.json()["ciphertext"] == "KHOORZRUOG"

    def test_invalid_caesar_key(self, client):
        response = client.post(
            f"{API}/encrypt",
            json={"plaintext": "Hello", "cipher_type": "caesar", "language": "english", "key": "0"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "key must be greater than 0"

    def test_random_key_when_missing(self, client):
        response = client.post(
            f"{API}/encrypt",
            json={"plaintext": "Attack at dawn", "cipher_type": "trithemius", "language": "english"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["key_used"]["mode"] == "linear"

        response = client.post(
            f"{API}/decrypt",
            json={
                "ciphertext": body["ciphertext"],
                "cipher_type": "trithemius",
                "language": "english",
                "key": body["key_used"],
            },
        )
        assert response.json()["plaintext"] == "Attack at dawn"

    def test_decrypt_requires_key(self, client):
        response = client.post(
            f"{API}/decrypt",
            json={"ciphertext": "Olssv", "cipher_type": "caesar", "language": "english"},
        )
        assert response.status_code == 400

    def test_trithemius(self, client):
        response = client.post(
            f"{API}/encrypt",
            json={
                "plaintext": "AAAA",
                "cipher_type": "trithemius",
                "language": "english",
                "key": {"mode": "linear", "A": 1, "B": 0},
            },
        )
        assert response.status_code == 200
        assert response.json()["ciphertext"] == "ABCD"

    def test_unknown_key_mode(self, client):
        response = client.post(
            f"{API}/encrypt",
            json={
                "plaintext": "AAAA",
                "cipher_type": "trithemius",
                "language": "english",
                "key": {"mode": "cubic", "A": 1},
            },
        )
        assert response.status_code == 422
        assert response.json()["detail"] == "unknown key mode"

    def test_invalid_schedule(self, client):
        response = client.post(
            f"{API}/encrypt",
            json={
                "plaintext": "AAAA",
                "cipher_type": "trithemius",
                "language": "english",
                "key": {"mode": "motto", "motto": "Ключ"},
            },
        )
        assert response.status_code == 400

    def test_unknown_language(self, client):
        response = client.post(
            f"{API}/encrypt",
            json={"plaintext": "Hello", "cipher_type": "caesar", "language": "klingon", "key": 1},
        )
        assert response.status_code == 404

    def test_book_roundtrip(self, client):
        response = client.post(
            f"{API}/encrypt",
            json={"plaintext": "Hello World", "cipher_type": "book", "language": "english", "key": REFERENCE},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["ciphertext"] == "1/2, 1/3, 3/9, 3/9, 2/1, [ ], 2/2, 2/1, 1/10, 3/9, 4/3"
        assert body["key_used"] == {"size": 10, "letter_count": 100}

        response = client.post(
            f"{API}/decrypt",
            json={
                "ciphertext": body["ciphertext"],
                "cipher_type": "book",
                "language": "english",
                "key": {"reference_text": REFERENCE},
            },
        )
        assert response.json()["plaintext"] == "HELLO WORLD"

    def test_book_reference_too_short(self, client):
        response = client.post(
            f"{API}/encrypt",
            json={"plaintext": "Hello", "cipher_type": "book", "language": "english", "key": "Roses are red"},
        )
        assert response.status_code == 400
        assert "at least 100 characters" in response.json()["detail"]

    def test_text_length_limit(self, client):
        app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, max_text_length=5)
        try:
            response = client.post(
                f"{API}/encrypt",
                json={"plaintext": "Hello World", "cipher_type": "caesar", "language": "english", "key": 1},
            )
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 400
        assert response.json()["detail"] == "Text length 11 exceeds maximum 5"

    def test_book_without_grid(self, client):
        response = client.post(
            f"{API}/decrypt",
            json={"ciphertext": "1/1", "cipher_type": "book", "language": "english"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "book cipher grid has not been built"

    @pytest.mark.parametrize("size", [0, 3000])
    def test_book_grid_size_out_of_range(self, client, size):
        response = client.post(
            f"{API}/encrypt",
            json={
                "plaintext": "Hello",
                "cipher_type": "book",
                "language": "english",
                "key": {"reference_text": REFERENCE, "size": size},
            },
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "grid size must be between 1 and 100"


class TestKeysEndpoints:
    """POST /keys/validate and GET /keys/random"""

    def test_validate_caesar(self, client):
        response = client.post(
            f"{API}/keys/validate",
            json={"cipher_type": "caesar", "language": "english", "key": 26},
        )
        assert response.status_code == 200
        assert response.json() == {"valid": False, "message": "key cannot exceed 25", "key_range": "1-25"}

    def test_validate_trithemius(self, client):
        response = client.post(
            f"{API}/keys/validate",
            json={"cipher_type": "trithemius", "language": "english", "key": {"mode": "quadratic", "A": 1}},
        )
        assert response.json()["valid"] is False
        assert response.json()["message"] == "A, B, C must be numbers"

    def test_validate_book(self, client):
        response = client.post(
            f"{API}/keys/validate",
            json={"cipher_type": "book", "language": "english", "key": "too short"},
        )
        assert response.json()["valid"] is False
        response = client.post(
            f"{API}/keys/validate",
            json={"cipher_type": "book", "language": "english", "key": REFERENCE},
        )
        assert response.json()["valid"] is True

    def test_validate_huge_coefficient(self, client):
        response = client.post(
            f"{API}/keys/validate",
            json={"cipher_type": "trithemius", "language": "english", "key": {"mode": "linear", "A": 10**400, "B": 1}},
        )
        assert response.status_code == 200
        assert response.json()["valid"] is True

    def test_validate_non_text_motto(self, client):
        response = client.post(
            f"{API}/keys/validate",
            json={"cipher_type": "trithemius", "language": "english", "key": {"mode": "motto", "phrase": 123}},
        )
        assert response.status_code == 200
        assert response.json() == {"valid": False, "message": "phrase must be text", "key_range": None}

    def test_validate_book_grid_size(self, client):
        response = client.post(
            f"{API}/keys/validate",
            json={"cipher_type": "book", "language": "english", "key": {"reference_text": REFERENCE, "size": 5000}},
        )
        assert response.status_code == 200
        assert response.json()["valid"] is False
        assert response.json()["message"] == "grid size must be between 1 and 100"

    def test_random_caesar(self, client):
        response = client.get(f"{API}/keys/random", params={"cipher_type": "caesar", "language": "english"})
        assert response.status_code == 200
        assert 1 <= response.json()["key"] <= 25

    def test_random_book_unsupported(self, client):
        response = client.get(f"{API}/keys/random", params={"cipher_type": "book", "language": "english"})
        assert response.status_code == 400


class TestBookGridEndpoint:
    """POST /book/grid"""

    def test_grid(self, client):
        response = client.post(f"{API}/book/grid", json={"reference_text": REFERENCE})
        assert response.status_code == 200
        body = response.json()
        assert body["size"] == 10
        assert body["letter_count"] == 100
        assert body["rows"][0] == list("THEQUICKBR")
        assert body["coordinates"]["H"][0] == "1/2"

    def test_custom_size(self, client):
        response = client.post(f"{API}/book/grid", json={"reference_text": REFERENCE, "size": 5})
        body = response.json()
        assert len(body["rows"]) == 5
        assert body["letter_count"] == 25

    def test_too_short(self, client):
        response = client.post(f"{API}/book/grid", json={"reference_text": "Roses are red"})
        assert response.status_code == 400


class TestBruteForceEndpoint:
    """POST /brute-force"""

    def test_recovers_key(self, client):
        response = client.post(
            f"{API}/brute-force",
            json={"ciphertext": "ymj hfy fsi ymj itl", "language": "english"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["total_keys"] == 25
        assert len(body["results"]) == 25
        assert body["best"]["key"] == 5
        assert body["best"]["text"] == "the cat and the dog"
        assert body["best"]["likely"] is True

    def test_unknown_language(self, client):
        response = client.post(f"{API}/brute-force", json={"ciphertext": "abc", "language": "klingon"})
        assert response.status_code == 404
