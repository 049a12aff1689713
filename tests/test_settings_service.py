"""Tests for the goal, privacy and appearance settings."""

import pytest

from services.settings_service import SettingsService
from utils.constants import GOAL_KEY, PRIVACY_KEY


def test_goal_defaults_to_none(settings_service) -> None:
    """No goal is set on a fresh store."""
    if settings_service.get_goal() is not None:
        msg = "Expected no goal"
        raise AssertionError(msg)


def test_goal_round_trip_keeps_cents(db, settings_service) -> None:
    """Goals are stored with two decimals and read back as floats."""
    settings_service.set_goal(1234.56)
    if db.get_item(GOAL_KEY) != "1234.56" or SettingsService(db).get_goal() != 1234.56:
        msg = f"Unexpected stored goal {db.get_item(GOAL_KEY)!r}"
        raise AssertionError(msg)


def test_zero_goal_clears_it(db, settings_service) -> None:
    """Setting zero or None removes the goal key."""
    settings_service.set_goal(500.0)
    settings_service.set_goal(0)
    if GOAL_KEY in db.keys() or settings_service.get_goal() is not None:
        msg = "Goal key should be removed"
        raise AssertionError(msg)


@pytest.mark.parametrize("raw", ["", "abc", "-50", "0"])
def test_unusable_stored_goal_reads_as_none(db, settings_service, raw: str) -> None:
    """Blank, unreadable or non-positive goals count as unset."""
    db.set_item(GOAL_KEY, raw)
    if settings_service.get_goal() is not None:
        msg = f"Expected None for {raw!r}"
        raise AssertionError(msg)


def test_goal_accepts_decimal_comma(db, settings_service) -> None:
    """A goal typed the pt-BR way is still read."""
    db.set_item(GOAL_KEY, "800,50")
    if settings_service.get_goal() != 800.5:
        msg = f"Unexpected goal {settings_service.get_goal()}"
        raise AssertionError(msg)


def test_negative_goal_is_rejected(settings_service) -> None:
    """A negative goal is a user error."""
    with pytest.raises(ValueError):
        settings_service.set_goal(-10.0)


def test_privacy_toggle_persists(db, settings_service) -> None:
    """Privacy starts off and flips on each toggle."""
    if settings_service.is_privacy_mode():
        msg = "Privacy should start disabled"
        raise AssertionError(msg)
    if settings_service.toggle_privacy_mode() is not True or db.get_item(PRIVACY_KEY) != "true":
        msg = "First toggle should enable privacy"
        raise AssertionError(msg)
    if SettingsService(db).toggle_privacy_mode() is not False:
        msg = "Second toggle should disable privacy"
        raise AssertionError(msg)


def test_appearance_mode(settings_service, db) -> None:
    """The seeded mode is 'system'; unknown stored values fall back to it."""
    if settings_service.get_appearance_mode() != "system":
        msg = "Expected the seeded appearance"
        raise AssertionError(msg)
    settings_service.set_appearance_mode("dark")
    if settings_service.get_appearance_mode() != "dark":
        msg = "Expected dark mode"
        raise AssertionError(msg)
    db.set_item("appearance_mode", "neon")
    if settings_service.get_appearance_mode() != "system":
        msg = "Unknown modes should fall back to system"
        raise AssertionError(msg)
    with pytest.raises(ValueError):
        settings_service.set_appearance_mode("neon")
