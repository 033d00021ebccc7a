"""Back-office aggregate read models.

Each dashboard issues its independent reads as one concurrent batch through
Django's async ORM and waits for all of them. There is no partial result: if
any read fails, the whole batch raises.

Month-over-month growth uses `growth()`:

    growth(0, 0)    -> 0
    growth(x > 0, 0) -> 100
    otherwise       -> round((current - previous) / previous * 100), halves up
"""

import asyncio
from datetime import timedelta
from decimal import ROUND_FLOOR, Decimal

from asgiref.sync import async_to_sync
from django.contrib.auth import get_user_model
from django.db.models import Count, DecimalField, Q, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from contact.models import ContactMessage
from orders.models import Order
from profiles.models import Profile
from site_templates.models import Template

User = get_user_model()

ACTIVE_USER_WINDOW = timedelta(days=30)
RECENT_SIGNUP_WINDOW = timedelta(days=30)
RECENT_MESSAGE_WINDOW = timedelta(days=7)
RECENT_ORDERS_ON_DASHBOARD = 10

_MONEY = DecimalField(max_digits=12, decimal_places=2)


def growth(current, previous) -> int:
    current = Decimal(str(current))
    previous = Decimal(str(previous))
    if previous == 0:
        return 100 if current > 0 else 0
    ratio = (current - previous) / previous * 100
    return int((ratio + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def run_batch(**reads):
    """Run named zero-argument coroutine functions concurrently.

    Returns `{name: result}`; the first failure propagates to the caller.
    """

    async def _gather():
        names = list(reads)
        results = await asyncio.gather(*(reads[name]() for name in names))
        return dict(zip(names, results))

    return async_to_sync(_gather)()


def month_bounds(now=None):
    """(start of last month, start of this month, start of next month) in local time."""
    now = timezone.localtime(now or timezone.now())
    this_month = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    last_month = (this_month - timedelta(days=1)).replace(day=1)
    next_month = (this_month + timedelta(days=32)).replace(day=1)
    return last_month, this_month, next_month


def revenue_total(qs):
    return qs.aaggregate(total=Coalesce(Sum("total"), Value(0), output_field=_MONEY))


async def fetch_all(qs):
    return [obj async for obj in qs]


def _admin_q():
    return Q(is_staff=True) | Q(profile__role=Profile.Role.ADMIN)


def recent_order_row(order) -> dict:
    template = None
    if order.template_id:
        template = {"name": order.template.name, "category": order.template.category}
    return {
        "id": str(order.pk),
        "salonName": order.salon_name,
        "ownerName": order.owner_name,
        "email": order.email,
        "template": template,
        "amount": float(order.total),
        "status": order.status,
        "date": order.created_at.isoformat(),
        "domain": order.domain,
    }


def recent_orders_queryset(limit=RECENT_ORDERS_ON_DASHBOARD, status=None):
    qs = Order.objects.select_related("template").order_by("-created_at")
    if status:
        qs = qs.filter(status=status)
    return qs[:limit]


def dashboard_stats(now=None) -> dict:
    now = now or timezone.now()
    last_month, this_month, next_month = month_bounds(now)
    in_this_month = Q(created_at__gte=this_month, created_at__lt=next_month)
    in_last_month = Q(created_at__gte=last_month, created_at__lt=this_month)
    completed = Q(status=Order.Status.COMPLETED)

    r = run_batch(
        total_users=lambda: User.objects.acount(),
        active_users=lambda: User.objects.filter(
            is_active=True, last_login__gte=now - ACTIVE_USER_WINDOW
        ).acount(),
        total_orders=lambda: Order.objects.acount(),
        monthly_orders=lambda: Order.objects.filter(in_this_month).acount(),
        monthly_revenue=lambda: revenue_total(Order.objects.filter(in_this_month & completed)),
        pending_orders=lambda: Order.objects.filter(status=Order.Status.PENDING).acount(),
        completed_orders=lambda: Order.objects.filter(in_this_month & completed).acount(),
        unread_messages=lambda: ContactMessage.objects.filter(
            status=ContactMessage.Status.UNREAD
        ).acount(),
        active_templates=lambda: Template.objects.filter(active=True).acount(),
        recent_orders=lambda: fetch_all(recent_orders_queryset()),
        this_month_users=lambda: User.objects.filter(
            date_joined__gte=this_month, date_joined__lt=next_month
        ).acount(),
        last_month_users=lambda: User.objects.filter(
            date_joined__gte=last_month, date_joined__lt=this_month
        ).acount(),
        last_month_orders=lambda: Order.objects.filter(in_last_month).acount(),
        last_month_revenue=lambda: revenue_total(Order.objects.filter(in_last_month & completed)),
    )

    monthly_revenue = r["monthly_revenue"]["total"]
    last_month_revenue = r["last_month_revenue"]["total"]
    return {
        "totalUsers": r["total_users"],
        "activeUsers": r["active_users"],
        "totalOrders": r["total_orders"],
        "monthlyOrders": r["monthly_orders"],
        "monthlyRevenue": float(monthly_revenue),
        "pendingOrders": r["pending_orders"],
        "completedOrders": r["completed_orders"],
        "newMessages": r["unread_messages"],
        "activeTemplates": r["active_templates"],
        "recentOrders": [recent_order_row(o) for o in r["recent_orders"]],
        "monthlyGrowth": {
            "users": growth(r["this_month_users"], r["last_month_users"]),
            "orders": growth(r["monthly_orders"], r["last_month_orders"]),
            "revenue": growth(monthly_revenue, last_month_revenue),
        },
    }


def user_stats(now=None) -> dict:
    now = now or timezone.now()
    r = run_batch(
        total=lambda: User.objects.acount(),
        active=lambda: User.objects.filter(is_active=True).acount(),
        inactive=lambda: User.objects.filter(is_active=False).acount(),
        admins=lambda: User.objects.filter(_admin_q()).distinct().acount(),
        clients=lambda: User.objects.exclude(_admin_q()).acount(),
        recent_signups=lambda: User.objects.filter(
            date_joined__gte=now - RECENT_SIGNUP_WINDOW
        ).acount(),
        completed_onboarding=lambda: Profile.objects.filter(
            has_completed_onboarding=True
        ).acount(),
        business_types=lambda: fetch_all(
            Profile.objects.values("business_type").annotate(n=Count("id")).order_by("business_type")
        ),
    )
    return {
        "total": r["total"],
        "active": r["active"],
        "inactive": r["inactive"],
        "byRole": {"CLIENT": r["clients"], "ADMIN": r["admins"]},
        "byBusinessType": {row["business_type"]: row["n"] for row in r["business_types"]},
        "recentSignups": r["recent_signups"],
        "completedOnboarding": r["completed_onboarding"],
    }


def message_stats(now=None) -> dict:
    now = now or timezone.now()
    S = ContactMessage.Status
    r = run_batch(
        total=lambda: ContactMessage.objects.acount(),
        unread=lambda: ContactMessage.objects.filter(status=S.UNREAD).acount(),
        read=lambda: ContactMessage.objects.filter(status=S.READ).acount(),
        replied=lambda: ContactMessage.objects.filter(status=S.REPLIED).acount(),
        archived=lambda: ContactMessage.objects.filter(status=S.ARCHIVED).acount(),
        recent=lambda: ContactMessage.objects.filter(
            created_at__gte=now - RECENT_MESSAGE_WINDOW
        ).acount(),
    )
    return {
        "total": r["total"],
        "unread": r["unread"],
        "read": r["read"],
        "replied": r["replied"],
        "archived": r["archived"],
        "recentMessages": r["recent"],
    }
