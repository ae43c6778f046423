"""Tests for profile models."""

import pytest
from pydantic import ValidationError

from aura.modules.profiles.models import Plan, Profile


class TestProfile:
    def test_free_profile(self, free_profile, settings):
        assert free_profile.is_premium is False
        assert free_profile.request_limit(settings) == 100

    def test_premium_profile(self, premium_profile, settings):
        assert premium_profile.is_premium is True
        assert premium_profile.billing_customer_id == "cus_123"
        assert premium_profile.request_limit(settings) == 1000

    def test_empty_customer_id_counts_as_missing(self):
        profile = Profile(plan=Plan.PREMIUM, request_count=0, stripe_customer_id="")
        assert profile.billing_customer_id is None

    def test_unknown_plan_rejected(self):
        with pytest.raises(ValidationError):
            Profile.model_validate({"plan": "enterprise", "request_count": 0})

    def test_request_count_must_be_integer(self):
        with pytest.raises(ValidationError):
            Profile.model_validate({"plan": "free", "request_count": "12"})

    def test_parses_expiry(self):
        profile = Profile.model_validate({
            "plan": "premium",
            "request_count": 3,
            "plan_expires_at": "2025-06-30T00:00:00+00:00",
            "stripe_customer_id": "cus_9",
        })
        assert profile.plan_expires_at.year == 2025
