"""Application tests for coupon management handlers."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.coupon.coupon import Coupon
from storefront.coupon.management import ActivateCoupon, CreateCoupon, DeactivateCoupon


def _create_coupon(**overrides):
    defaults = {"code": "FAMILY", "kind": "percentage", "value": 25.0}
    defaults.update(overrides)
    return current_domain.process(CreateCoupon(**defaults), asynchronous=False)


class TestCreateCoupon:
    def test_create(self):
        coupon_id = _create_coupon(usage_limit=10)
        coupon = current_domain.repository_for(Coupon).get(coupon_id)
        assert coupon.code == "family"
        assert coupon.usage_limit == 10

    def test_duplicate_code_rejected_case_insensitively(self):
        _create_coupon(code="family")
        with pytest.raises(ValidationError):
            _create_coupon(code="FAMILY")

    def test_find_by_code_ignores_case_and_whitespace(self):
        _create_coupon()
        assert current_domain.repository_for(Coupon).find_by_code("  Family ") is not None

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            _create_coupon(kind="bogo")


class TestToggleCoupon:
    def test_deactivate_then_activate(self):
        _create_coupon()
        current_domain.process(DeactivateCoupon(code="family"), asynchronous=False)
        assert current_domain.repository_for(Coupon).find_by_code("family").active is False

        current_domain.process(ActivateCoupon(code="FAMILY"), asynchronous=False)
        assert current_domain.repository_for(Coupon).find_by_code("family").active is True

    def test_unknown_code(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(DeactivateCoupon(code="nope"), asynchronous=False)
