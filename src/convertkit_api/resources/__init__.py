"""Resource families mixed into ``ConvertKitClient``."""

from .account import AccountMixin
from .base import ResourceMixin
from .broadcasts import BroadcastsMixin
from .custom_fields import CustomFieldsMixin
from .email_templates import EmailTemplatesMixin
from .filters import GrowthStatsRange, SubscriberFilters, SubscriptionFilters
from .forms import FormsMixin
from .lookups import LookupsMixin
from .purchases import PurchasesMixin
from .segments import SegmentsMixin
from .sequences import SequencesMixin
from .subscribers import SubscribersMixin
from .tags import TagsMixin
from .webhooks import WebhooksMixin

__all__ = [
    "ResourceMixin",
    "AccountMixin",
    "BroadcastsMixin",
    "CustomFieldsMixin",
    "EmailTemplatesMixin",
    "FormsMixin",
    "LookupsMixin",
    "PurchasesMixin",
    "SegmentsMixin",
    "SequencesMixin",
    "SubscribersMixin",
    "TagsMixin",
    "WebhooksMixin",
    "SubscriberFilters",
    "SubscriptionFilters",
    "GrowthStatsRange",
]
