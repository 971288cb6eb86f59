from django.dispatch import Signal


# Sent once per influencer whose MOQ relaxation was revoked.
# kwargs: user_id, email, paid_orders_last_30d, required_paid_orders
influencer_moq_revoked = Signal()
