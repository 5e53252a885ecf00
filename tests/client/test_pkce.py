import base64
import hashlib

import pytest

from oauth2_twitter.client.models.security import PKCEParameters
from oauth2_twitter.client.primitives.pkce import (
    VERIFIER_ALPHABET,
    derive_code_challenge,
    generate_code_verifier,
    generate_parameters,
    is_valid_code_verifier,
)


class TestCodeVerifier:
    def test_verifier_meets_rfc7636_requirements(self) -> None:
        # Act
        verifiers = [generate_code_verifier() for _ in range(200)]

        # Assert
        for verifier in verifiers:
            assert 43 <= len(verifier) <= 128
            assert set(verifier) <= set(VERIFIER_ALPHABET)

    def test_verifier_length_varies(self) -> None:
        # Act
        lengths = {len(generate_code_verifier()) for _ in range(200)}

        # Assert
        assert len(lengths) > 1

    def test_verifier_uniqueness(self) -> None:
        assert generate_code_verifier() != generate_code_verifier()

    def test_alphabet_has_66_symbols(self) -> None:
        assert len(set(VERIFIER_ALPHABET)) == 66

    @pytest.mark.parametrize(
        "verifier,expected",
        [
            ("a" * 43, True),
            ("Z" * 128, True),
            ("-._~" * 11, True),
            ("a" * 42, False),
            ("a" * 129, False),
            ("a" * 42 + "+", False),
            ("a" * 42 + "/", False),
        ],
    )
    def test_is_valid_code_verifier(self, verifier: str, expected: bool) -> None:
        assert is_valid_code_verifier(verifier) is expected


class TestCodeChallenge:
    def test_rfc7636_appendix_b_example(self) -> None:
        # Arrange
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"

        # Act
        challenge = derive_code_challenge(verifier)

        # Assert
        assert challenge == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"

    def test_challenge_is_deterministic_and_url_safe(self) -> None:
        # Arrange
        verifier = generate_code_verifier()

        # Act
        first = derive_code_challenge(verifier)
        second = derive_code_challenge(verifier)

        # Assert
        assert first == second
        assert "+" not in first
        assert "/" not in first
        assert "=" not in first

    def test_challenge_is_base64url_of_sha256(self) -> None:
        # Arrange
        verifier = generate_code_verifier()

        # Act
        challenge = derive_code_challenge(verifier)

        # Assert
        expected = (
            base64.urlsafe_b64encode(hashlib.sha256(verifier.encode("ascii")).digest())
            .decode("ascii")
            .rstrip("=")
        )
        assert challenge == expected


class TestGenerateParameters:
    def test_parameters_pair_matches(self) -> None:
        # Act
        params = generate_parameters()

        # Assert
        assert params.code_challenge_method == "S256"
        assert params.code_challenge == derive_code_challenge(params.code_verifier)

    def test_parameters_reject_short_verifier(self) -> None:
        with pytest.raises(ValueError):
            PKCEParameters(code_verifier="short", code_challenge="c" * 43)

    def test_parameters_reject_plain_method(self) -> None:
        with pytest.raises(ValueError):
            PKCEParameters(
                code_verifier="v" * 43,
                code_challenge="c" * 43,
                code_challenge_method="plain",
            )
