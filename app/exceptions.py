# app/exceptions.py

import uuid


class SubscriptionNotFoundError(LookupError):
    """Raised by the store when no subscription has the requested id."""

    def __init__(self, subscription_id: uuid.UUID):
        self.subscription_id = subscription_id
        super().__init__(f"subscription {subscription_id} not found")
