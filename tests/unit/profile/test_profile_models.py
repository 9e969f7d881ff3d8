"""Tests for profile domain models."""

import pytest

from cafebot.profile import UNKNOWN_USER_NAME, UserProfile, capitalize_name


class TestCapitalizeName:
    """Tests for capitalize_name."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("alice", "Alice"),
            ("  bob ", "Bob"),
            ("mcDonald", "McDonald"),
            ("Émile", "Émile"),
            ("", ""),
        ],
    )
    def test_first_character_upper_rest_unchanged(self, raw, expected):
        assert capitalize_name(raw) == expected


class TestUserProfile:
    """Tests for UserProfile."""

    def test_new_profile_is_not_identified(self):
        profile = UserProfile(user_id="u1")

        assert profile.user_name == ""
        assert not profile.is_identified

    def test_placeholder_name_is_not_identified(self):
        profile = UserProfile(user_id="u1", user_name=UNKNOWN_USER_NAME)

        assert not profile.is_identified

    def test_rename(self):
        profile = UserProfile(user_id="u1")
        created = profile.updated_at

        profile.rename("Alice")

        assert profile.user_name == "Alice"
        assert profile.is_identified
        assert profile.updated_at >= created
