# tests/core/auth/test_auth_token_validity.py
"""
core/auth/token/validity.py, error_token.py 단위 테스트

exp/nbf 판단, 에러 토큰 생성 테스트.
"""

import pytest

from conftest import NOW, make_token
from core.auth.token import decode, decode_header, get_error_claim, is_token_valid, is_valid, make_error_token
from core.auth.token.error_token import ERROR_TOKEN_HEADER, ERROR_TOKEN_TTL_SECONDS

# =============================================================================
# is_valid 테스트
# =============================================================================


class TestIsValid:
    """is_valid 테스트"""

    def test_future_exp(self):
        """exp가 미래면 유효"""
        assert is_valid({"exp": NOW + 3600}, NOW) is True

    def test_past_exp(self):
        """exp가 과거면 만료"""
        assert is_valid({"exp": NOW - 1}, NOW) is False

    def test_exp_equal_to_now(self):
        """exp == now는 아직 유효"""
        assert is_valid({"exp": NOW}, NOW) is True

    def test_future_nbf(self):
        """nbf가 미래면 아직 유효하지 않음"""
        assert is_valid({"exp": NOW + 3600, "nbf": NOW + 10}, NOW) is False

    def test_past_nbf(self):
        """nbf가 지났으면 유효"""
        assert is_valid({"exp": NOW + 3600, "nbf": NOW - 10}, NOW) is True

    def test_no_time_claims(self):
        """exp/nbf가 모두 없으면 유효"""
        assert is_valid({"sub": "user"}, NOW) is True

    @pytest.mark.parametrize("value", ["1700000000", "soon", True, [1]])
    def test_non_numeric_exp(self, value):
        """숫자가 아닌 exp는 유효하지 않음"""
        assert is_valid({"exp": value}, NOW) is False

    def test_non_numeric_nbf(self):
        """숫자가 아닌 nbf는 유효하지 않음"""
        assert is_valid({"exp": NOW + 60, "nbf": "later"}, NOW) is False

    def test_float_claims(self):
        """소수 시각 허용"""
        assert is_valid({"exp": NOW + 0.5}, NOW) is True


# =============================================================================
# is_token_valid 테스트
# =============================================================================


class TestIsTokenValid:
    """is_token_valid 테스트"""

    def test_valid_token(self):
        assert is_token_valid(make_token(exp=NOW + 60), NOW) is True

    def test_expired_token(self):
        assert is_token_valid(make_token(exp=NOW - 60), NOW) is False

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "%%%.%%%"])
    def test_malformed_token_is_invalid(self, token):
        """디코딩 실패는 예외 없이 False"""
        assert is_token_valid(token, NOW) is False


# =============================================================================
# make_error_token 테스트
# =============================================================================


class TestMakeErrorToken:
    """make_error_token / get_error_claim 테스트"""

    def test_payload(self):
        """payload는 error와 exp(now + 60)"""
        token = make_error_token("Incorrect username or password.", NOW)

        assert decode(token) == {"error": "Incorrect username or password.", "exp": NOW + ERROR_TOKEN_TTL_SECONDS}

    def test_header(self):
        """header는 HS256/JWT"""
        token = make_error_token("boom", NOW)
        assert decode_header(token) == ERROR_TOKEN_HEADER == {"alg": "HS256", "typ": "JWT"}

    def test_unsigned_two_segments(self):
        """서명 세그먼트 없음"""
        assert make_error_token("boom", NOW).count(".") == 1

    def test_custom_ttl(self):
        token = make_error_token("boom", NOW, ttl_seconds=5)
        assert decode(token)["exp"] == NOW + 5

    def test_valid_until_ttl(self):
        """60초 동안만 유효"""
        token = make_error_token("boom", NOW)

        assert is_token_valid(token, NOW + 59) is True
        assert is_token_valid(token, NOW + 60) is True
        assert is_token_valid(token, NOW + 61) is False

    def test_get_error_claim(self):
        assert get_error_claim({"error": "boom", "exp": 1}) == "boom"

    def test_get_error_claim_missing(self):
        """error 클레임이 없으면 일반 토큰"""
        assert get_error_claim({"exp": 1, "sub": "user"}) is None

    def test_get_error_claim_empty_message(self):
        """빈 메시지도 에러 토큰으로 취급"""
        assert get_error_claim({"error": ""}) == ""

    def test_get_error_claim_null(self):
        """error가 null이면 일반 토큰으로 취급"""
        assert get_error_claim({"error": None, "exp": 1}) is None

    def test_get_error_claim_non_string(self):
        assert get_error_claim({"error": 42}) == "42"
