import dataclasses
import uuid
import pytest
from datetime import timedelta
from unittest.mock import patch
from django.utils import timezone
from apps.checkout.services import (
    CheckoutPolicy,
    default_policy,
    evaluate_checkout_policy,
    fetch_checkout_policy_row,
)


def exploding_lookup(user_id):
    raise RuntimeError('policy store unavailable')


def garbage_lookup(user_id):
    return [{
        'required_moq': 'abc',
        'is_influencer': 1,
        'influencer_moq_enabled': 'yes',
        'paid_orders_last_30d': None,
    }]


def empty_lookup(user_id):
    return []


def relaxed_lookup(user_id):
    return {
        'required_moq': 1,
        'is_influencer': True,
        'influencer_moq_enabled': True,
        'paid_orders_last_30d': 7,
    }


def oversized_lookup(user_id):
    return {
        'required_moq': 10 ** 400,
        'is_influencer': True,
        'influencer_moq_enabled': True,
        'paid_orders_last_30d': 10 ** 400,
    }


def assert_default(policy, moq=4):
    assert policy == CheckoutPolicy(
        required_moq=moq,
        is_influencer=False,
        influencer_moq_enabled=False,
        paid_orders_last_30d=0,
    )


# =============================================================================
# Row Parsing Tests
# =============================================================================

class TestCheckoutPolicyFromRow:
    """Tests for CheckoutPolicy.from_row"""

    @pytest.mark.parametrize('row', [None, {}, [], 'nonsense', 42])
    def test_unusable_row_gives_default(self, row):
        assert_default(CheckoutPolicy.from_row(row))

    def test_relaxed_influencer(self):
        policy = CheckoutPolicy.from_row({
            'required_moq': 2,
            'is_influencer': True,
            'influencer_moq_enabled': True,
            'paid_orders_last_30d': 5,
        })

        assert policy.required_moq == 2
        assert policy.is_influencer is True
        assert policy.influencer_moq_enabled is True
        assert policy.paid_orders_last_30d == 5

    def test_takes_first_row_of_list(self):
        policy = CheckoutPolicy.from_row([{'required_moq': 3, 'is_influencer': True, 'influencer_moq_enabled': True}])

        assert policy.required_moq == 3

    @pytest.mark.parametrize('raw', ['abc', 0, -2, None, float('nan'), float('inf'), '', True, [1], 10 ** 400])
    def test_bad_required_moq_falls_back(self, raw):
        """Unusable MOQ values never weaken the requirement."""
        policy = CheckoutPolicy.from_row({
            'required_moq': raw,
            'is_influencer': True,
            'influencer_moq_enabled': True,
        })

        assert policy.required_moq == 4

    @pytest.mark.parametrize('raw,expected', [('3', 3), (2.0, 2), (1, 1)])
    def test_numeric_strings_and_floats_accepted(self, raw, expected):
        policy = CheckoutPolicy.from_row({
            'required_moq': raw,
            'is_influencer': True,
            'influencer_moq_enabled': True,
        })

        assert policy.required_moq == expected

    def test_non_influencer_gets_standard_moq(self):
        """An upstream relaxed value is ignored for regular buyers."""
        policy = CheckoutPolicy.from_row({
            'required_moq': 1,
            'is_influencer': False,
            'influencer_moq_enabled': True,
        })

        assert policy.required_moq == 4

    def test_disabled_relaxation_gets_standard_moq(self):
        policy = CheckoutPolicy.from_row({
            'required_moq': 1,
            'is_influencer': True,
            'influencer_moq_enabled': False,
        })

        assert policy.required_moq == 4
        assert policy.is_influencer is True

    @pytest.mark.parametrize('raw,expected', [('abc', 0), (-1, 0), ('5', 5), (None, 0), (True, 0), (3, 3), (10 ** 400, 0)])
    def test_paid_order_count_coercion(self, raw, expected):
        policy = CheckoutPolicy.from_row({'paid_orders_last_30d': raw})

        assert policy.paid_orders_last_30d == expected

    def test_policy_is_immutable(self):
        policy = default_policy()

        with pytest.raises(dataclasses.FrozenInstanceError):
            policy.required_moq = 1

    def test_standard_moq_from_settings(self, settings):
        settings.MIN_ORDER_UNITS = 6

        assert_default(default_policy(), moq=6)

    def test_invalid_standard_moq_setting_ignored(self, settings):
        settings.MIN_ORDER_UNITS = 0

        assert_default(default_policy(), moq=4)


# =============================================================================
# Evaluator Tests
# =============================================================================

@pytest.mark.django_db
class TestEvaluateCheckoutPolicy:
    """Tests for evaluate_checkout_policy"""

    def test_anonymous_gets_default(self, settings):
        settings.CHECKOUT_POLICY_LOOKUP = 'apps.checkout.tests.test_policy.exploding_lookup'

        assert_default(evaluate_checkout_policy(None))

    def test_lookup_failure_gives_default(self, settings, influencer):
        settings.CHECKOUT_POLICY_LOOKUP = 'apps.checkout.tests.test_policy.exploding_lookup'

        assert_default(evaluate_checkout_policy(influencer.id))

    def test_unloadable_lookup_gives_default(self, settings, influencer):
        settings.CHECKOUT_POLICY_LOOKUP = 'apps.checkout.services.missing_lookup'

        assert_default(evaluate_checkout_policy(influencer.id))

    def test_unconfigured_lookup_gives_default(self, settings, influencer):
        settings.CHECKOUT_POLICY_LOOKUP = ''

        assert_default(evaluate_checkout_policy(influencer.id))

    def test_empty_result_gives_default(self, settings, influencer):
        settings.CHECKOUT_POLICY_LOOKUP = 'apps.checkout.tests.test_policy.empty_lookup'

        assert_default(evaluate_checkout_policy(influencer.id))

    def test_garbage_row_is_sanitised(self, settings, influencer):
        settings.CHECKOUT_POLICY_LOOKUP = 'apps.checkout.tests.test_policy.garbage_lookup'

        policy = evaluate_checkout_policy(influencer.id)

        assert policy == CheckoutPolicy(
            required_moq=4,
            is_influencer=True,
            influencer_moq_enabled=True,
            paid_orders_last_30d=0,
        )

    def test_oversized_numbers_are_sanitised(self, settings, influencer):
        settings.CHECKOUT_POLICY_LOOKUP = 'apps.checkout.tests.test_policy.oversized_lookup'

        policy = evaluate_checkout_policy(influencer.id)

        assert policy == CheckoutPolicy(
            required_moq=4,
            is_influencer=True,
            influencer_moq_enabled=True,
            paid_orders_last_30d=0,
        )

    def test_row_parse_failure_gives_default(self, settings, influencer):
        settings.CHECKOUT_POLICY_LOOKUP = 'apps.checkout.tests.test_policy.relaxed_lookup'

        with patch.object(CheckoutPolicy, 'from_row', side_effect=OverflowError('too large')):
            policy = evaluate_checkout_policy(influencer.id)

        assert_default(policy)

    def test_custom_lookup_is_used(self, settings, buyer):
        settings.CHECKOUT_POLICY_LOOKUP = 'apps.checkout.tests.test_policy.relaxed_lookup'

        policy = evaluate_checkout_policy(buyer.id)

        assert policy.required_moq == 1
        assert policy.paid_orders_last_30d == 7

    def test_regular_buyer(self, buyer, make_order):
        make_order(buyer)

        policy = evaluate_checkout_policy(buyer.id)

        assert policy == CheckoutPolicy(
            required_moq=4,
            is_influencer=False,
            influencer_moq_enabled=False,
            paid_orders_last_30d=1,
        )

    def test_relaxed_influencer(self, influencer):
        policy = evaluate_checkout_policy(influencer.id)

        assert policy.required_moq == 2
        assert policy.is_influencer is True
        assert policy.influencer_moq_enabled is True

    def test_unknown_user_gets_default(self):
        assert_default(evaluate_checkout_policy(uuid.uuid4()))

    def test_malformed_user_id_gets_default(self):
        assert_default(evaluate_checkout_policy('not-a-uuid'))


# =============================================================================
# Lookup Tests
# =============================================================================

@pytest.mark.django_db
class TestFetchCheckoutPolicyRow:
    """Tests for fetch_checkout_policy_row"""

    def test_counts_only_recent_paid_orders(self, influencer, buyer, make_order):
        now = timezone.now()
        for _ in range(3):
            make_order(influencer, paid_at=now - timedelta(days=2))
        make_order(influencer, paid_at=now - timedelta(days=31))
        make_order(influencer, paid=False)
        make_order(buyer)

        row = fetch_checkout_policy_row(influencer.id, now=now)

        assert row['paid_orders_last_30d'] == 3

    def test_global_switch_disables_relaxation(self, settings, influencer):
        settings.INFLUENCER_MOQ_ENABLED = False

        row = fetch_checkout_policy_row(influencer.id)

        assert row['influencer_moq_enabled'] is False
        assert row['required_moq'] == 4
        assert row['is_influencer'] is True

    def test_influencer_without_relaxed_value(self, influencer):
        influencer.influencer_moq = None
        influencer.save()

        row = fetch_checkout_policy_row(influencer.id)

        assert row['required_moq'] is None
        assert evaluate_checkout_policy(influencer.id).required_moq == 4

    def test_unknown_user(self):
        assert fetch_checkout_policy_row(uuid.uuid4()) is None
