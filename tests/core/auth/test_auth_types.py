# tests/core/auth/test_auth_types.py
"""
core/auth/types/types.py 단위 테스트

TokenType, CredentialSet, 에러 클래스 테스트.
"""

import pytest

from core.auth.types import (
    AuthenticationError,
    AuthError,
    Authenticator,
    ConfigurationError,
    CredentialSet,
    DecodeError,
    TokenType,
)
from core.exceptions import ValidationError

# =============================================================================
# TokenType 테스트
# =============================================================================


class TestTokenType:
    """TokenType 테스트"""

    def test_values(self):
        assert TokenType.ACCESS.value == "access"
        assert TokenType.ID.value == "id"
        assert TokenType.RAW_REQUEST.value == "raw_request"

    def test_str(self):
        assert str(TokenType.ID) == "id"

    @pytest.mark.parametrize("value", [None, ""])
    def test_parse_empty_defaults_to_access(self, value):
        assert TokenType.parse(value) is TokenType.ACCESS

    def test_parse_string(self):
        assert TokenType.parse("id") is TokenType.ID
        assert TokenType.parse("raw_request") is TokenType.RAW_REQUEST

    def test_parse_enum_passthrough(self):
        assert TokenType.parse(TokenType.ID) is TokenType.ID

    def test_parse_unknown(self):
        with pytest.raises(ValidationError) as exc_info:
            TokenType.parse("refresh")
        assert exc_info.value.field == "TokenType"


# =============================================================================
# CredentialSet 테스트
# =============================================================================


class TestCredentialSet:
    """CredentialSet 테스트"""

    def _args(self, **overrides):
        args = {
            "username": "user",
            "password": "pw",
            "region": "ap-northeast-2",
            "client_id": "client",
            "user_pool_id": "ap-northeast-2_Pool",
        }
        args.update(overrides)
        return args

    def test_create_defaults(self):
        """토큰 타입 기본값은 access, 시크릿은 None"""
        credentials = CredentialSet.create(**self._args())

        assert credentials.token_type is TokenType.ACCESS
        assert credentials.client_secret is None

    def test_create_empty_secret_is_none(self):
        credentials = CredentialSet.create(**self._args(client_secret=""))
        assert credentials.client_secret is None

    def test_create_with_token_type(self):
        credentials = CredentialSet.create(**self._args(token_type="id"))
        assert credentials.token_type is TokenType.ID

    @pytest.mark.parametrize(
        "field,display_name",
        [
            ("username", "Username"),
            ("password", "Password"),
            ("region", "Region"),
            ("client_id", "ClientId"),
            ("user_pool_id", "UserPoolId"),
        ],
    )
    @pytest.mark.parametrize("empty", [None, ""])
    def test_missing_required_field(self, field, display_name, empty):
        """필수 필드가 비면 필드 이름이 담긴 ValidationError"""
        with pytest.raises(ValidationError) as exc_info:
            CredentialSet.create(**self._args(**{field: empty}))

        assert exc_info.value.field == display_name
        assert display_name in str(exc_info.value)

    def test_first_missing_field_reported(self):
        """여러 필드가 비어도 첫 번째 필드만 보고"""
        with pytest.raises(ValidationError) as exc_info:
            CredentialSet.create(**self._args(password="", region=""))
        assert exc_info.value.field == "Password"

    @pytest.mark.parametrize("value,expected", [(None, TokenType.ACCESS), ("", TokenType.ACCESS), ("id", TokenType.ID)])
    def test_direct_construction_normalizes_token_type(self, value, expected):
        """create()를 거치지 않아도 토큰 타입은 TokenType"""
        credentials = CredentialSet("user", "pw", "ap-northeast-2", "client", "ap-northeast-2_Pool", token_type=value)
        assert credentials.token_type is expected

    def test_direct_construction_unknown_token_type(self):
        with pytest.raises(ValidationError):
            CredentialSet("user", "pw", "ap-northeast-2", "client", "ap-northeast-2_Pool", token_type="refresh")

    def test_frozen(self):
        credentials = CredentialSet.create(**self._args())
        with pytest.raises(AttributeError):
            credentials.username = "other"

    def test_repr_hides_secrets(self):
        """repr에 비밀번호/시크릿이 노출되지 않음"""
        credentials = CredentialSet.create(**self._args(password="Sup3rS3cret", client_secret="cs-value"))

        text = repr(credentials)
        assert "Sup3rS3cret" not in text
        assert "cs-value" not in text
        assert "user" in text


# =============================================================================
# 에러 클래스 테스트
# =============================================================================


class TestAuthErrors:
    """AuthError 계층 테스트"""

    def test_hierarchy(self):
        assert issubclass(AuthenticationError, AuthError)
        assert issubclass(DecodeError, AuthError)
        assert issubclass(ConfigurationError, AuthError)

    def test_str_without_cause(self):
        assert str(AuthError("boom")) == "boom"

    def test_str_with_cause(self):
        error = AuthError("boom", cause=ValueError("inner"))
        assert str(error) == "boom: inner"
        assert error.message == "boom"

    def test_authentication_error_code(self):
        error = AuthenticationError("Incorrect username or password.", error_code="NotAuthorizedException")
        assert error.error_code == "NotAuthorizedException"

    def test_decode_error_segment(self):
        assert DecodeError("bad", segment="payload").segment == "payload"

    def test_configuration_error_key(self):
        assert ConfigurationError("bad", config_key="Region").config_key == "Region"


class TestAuthenticator:
    """Authenticator ABC 테스트"""

    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            Authenticator()

    def test_default_close(self):
        class Dummy(Authenticator):
            def authenticate(self, credentials):
                return "token"

        dummy = Dummy()
        dummy.close()
        assert dummy.authenticate(None) == "token"
