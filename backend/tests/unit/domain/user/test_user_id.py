"""Unit tests for UserId value object."""

import pytest
import uuid

from domain.user.core.value_objects.user_id import UserId


class TestUserId:
    """Test UserId value object."""

    def test_generate_creates_valid_uuid(self):
        user_id = UserId.generate()

        uuid.UUID(user_id.value)

    def test_generate_creates_unique_ids(self):
        assert UserId.generate() != UserId.generate()

    def test_create_with_valid_uuid(self):
        uuid_str = str(uuid.uuid4())

        assert UserId(uuid_str).value == uuid_str

    @pytest.mark.parametrize("value", ["not-a-valid-uuid", "", None])
    def test_create_with_invalid_uuid_raises_error(self, value):
        with pytest.raises(ValueError, match="Invalid UUID format"):
            UserId(value)

    def test_str_is_the_owner_id_form(self):
        uuid_str = str(uuid.uuid4())

        assert str(UserId(uuid_str)) == uuid_str
        assert repr(UserId(uuid_str)) == f"UserId('{uuid_str}')"
