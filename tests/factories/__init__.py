"""Test factories."""

from tests.factories.profile import UserProfileFactory


__all__ = ["UserProfileFactory"]
