# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from multirel.errors import TierTooLowError
from multirel.version import MIN_TIER, LanguageVersion, is_supported_tier, to_tier, validate_tier


@pytest.mark.parametrize("tier", [-1, 0, 1, 5, 8])
def test_tiers_up_to_eight_are_rejected(tier: int) -> None:
	err = validate_tier(tier, "files(dep.jar)")
	assert isinstance(err, TierTooLowError)
	assert err.reason_code == "TIER_TOO_LOW"
	assert err.tier == tier
	assert err.dependency == "files(dep.jar)"
	assert f"{tier} is too low, minimum is 9" in str(err)


@pytest.mark.parametrize("tier", [9, 11, 17, 21, 99])
def test_tiers_from_nine_are_accepted(tier: int) -> None:
	assert validate_tier(tier) is None
	assert is_supported_tier(tier)


def test_min_tier() -> None:
	assert MIN_TIER == 9


def test_language_version_parsing() -> None:
	assert LanguageVersion.of(17).as_int() == 17
	assert LanguageVersion.of("11").as_int() == 11
	assert LanguageVersion.of("1.8").as_int() == 8
	assert LanguageVersion.of(9) < LanguageVersion.of(11)
	assert str(LanguageVersion.of(21)) == "21"
	for bad in ("", "abc", "1.", "0"):
		with pytest.raises(ValueError):
			LanguageVersion.of(bad)
	with pytest.raises(TypeError):
		LanguageVersion.of(True)


def test_to_tier_normalizes_versions_and_ints() -> None:
	assert to_tier(11) == 11
	assert to_tier(LanguageVersion.of(11)) == 11
	with pytest.raises(TypeError):
		to_tier(True)
	with pytest.raises(TypeError):
		to_tier("11")
	with pytest.raises(TypeError):
		to_tier(11.0)


def test_error_serializes() -> None:
	err = validate_tier(8, "files(a.jar)")
	assert err is not None
	d = err.to_dict()
	assert d["reason_code"] == "TIER_TOO_LOW"
	assert d["tier"] == 8
	assert d["dependency"] == "files(a.jar)"
