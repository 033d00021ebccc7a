"""Back-office analytics reports.

Each report fetches its rows in one concurrent batch (see `run_batch`) and
aggregates them in Python: per-day and per-period series are keyed by the
local calendar date. A day window of `days` covers today and the `days - 1`
days before it. Percentages are rounded to two decimals; growth figures use
`growth()` like the dashboard overview.
"""

from collections import Counter, defaultdict
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Count, Q, Sum
from django.utils import timezone

from domains.models import DomainPricing
from orders.billing import add_months
from orders.models import Order
from profiles.models import Profile
from site_templates.models import Template
from .aggregation import fetch_all, growth, revenue_total, run_batch

User = get_user_model()

Status = Order.Status
Step = Order.SetupStep

PAID = (Status.COMPLETED, Status.PROCESSING)
CANCELLED = (Status.CANCELLED, Status.REFUNDED)

DOMAIN_KEYWORDS = ("peluqueria", "salon", "barberia", "hair", "beauty", "style")
PRICE_RANGES = (
    ("low", 0, 50),
    ("medium", 50, 100),
    ("high", 100, 200),
    ("premium", 200, None),
)
TOP = 5
LISTED = 10

_ZERO = Decimal("0")


def _money(value) -> float:
    return float(value or 0)


def _pct(part, whole) -> float:
    if not whole:
        return 0.0
    return float(round(Decimal(part) * 100 / Decimal(whole), 2))


def _ratio(total, count) -> float:
    if not count:
        return 0.0
    return float(round(Decimal(total) / count, 2))


def _day(value) -> str:
    return timezone.localtime(value).date().isoformat()


def window(days: int, now=None):
    """(start of the window, ISO day keys oldest first)."""
    today = timezone.localtime(now or timezone.now()).replace(hour=0, minute=0, second=0, microsecond=0)
    start = today - timedelta(days=days - 1)
    keys = [(start + timedelta(days=offset)).date().isoformat() for offset in range(days)]
    return start, keys


def _template_name(order) -> str:
    return order.template.name if order.template_id else "Sin plantilla"


# ------------------------------------ revenue ------------------------------------

def revenue_report(period: str = "monthly", months: int = 12, now=None) -> dict:
    """Paid revenue per month or per year with period-over-period growth."""
    now = timezone.localtime(now or timezone.now())
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    year_start = month_start.replace(month=1)
    if period == "yearly":
        start = add_months(month_start, -months).replace(month=1)

        def key(dt):
            return f"{timezone.localtime(dt).year}"

        current_key, previous_key = key(now), f"{now.year - 1}"
    else:
        start = add_months(month_start, -(months - 1))

        def key(dt):
            return timezone.localtime(dt).strftime("%Y-%m")

        current_key, previous_key = key(now), key(add_months(month_start, -1))

    paid = Q(status__in=PAID)
    r = run_batch(
        orders=lambda: fetch_all(
            Order.objects.filter(paid, created_at__gte=start).select_related("template").order_by("created_at")
        ),
        recent=lambda: fetch_all(
            Order.objects.filter(paid).select_related("template").order_by("-created_at")[:LISTED]
        ),
        mrr=lambda: revenue_total(
            Order.objects.filter(status=Status.COMPLETED, created_at__gte=add_months(now, -1))
        ),
        ytd=lambda: revenue_total(Order.objects.filter(paid, created_at__gte=year_start)),
    )

    revenue = defaultdict(lambda: _ZERO)
    counts = Counter()
    template_revenue = defaultdict(lambda: _ZERO)
    domain_revenue = defaultdict(lambda: _ZERO)
    for order in r["orders"]:
        k = key(order.created_at)
        revenue[k] += order.total
        counts[k] += 1
        template_revenue[k] += order.template.price if order.template_id else _ZERO
        domain_revenue[k] += order.domain_user_price or _ZERO

    periods = sorted(revenue)
    growth_rates = {
        current: growth(revenue[current], revenue[previous])
        for previous, current in zip(periods, periods[1:])
    }
    total_revenue = sum(revenue.values(), _ZERO)
    total_orders = sum(counts.values())

    return {
        "period": period,
        "summary": {
            "totalRevenue": _money(total_revenue),
            "currentPeriodRevenue": _money(revenue.get(current_key)),
            "previousPeriodRevenue": _money(revenue.get(previous_key)),
            "revenueGrowth": growth(revenue.get(current_key, _ZERO), revenue.get(previous_key, _ZERO)),
            "averageOrderValue": _ratio(total_revenue, total_orders),
            "totalOrders": total_orders,
            "mrr": _money(r["mrr"]["total"]),
            "ytd": _money(r["ytd"]["total"]),
        },
        "timeSeries": [
            {
                "period": p,
                "revenue": _money(revenue[p]),
                "orders": counts[p],
                "templateRevenue": _money(template_revenue[p]),
                "domainRevenue": _money(domain_revenue[p]),
                "growthRate": growth_rates.get(p, 0),
                "avgOrderValue": _ratio(revenue[p], counts[p]),
            }
            for p in periods
        ],
        "revenueBreakdown": {
            "templates": _money(sum(template_revenue.values(), _ZERO)),
            "domains": _money(sum(domain_revenue.values(), _ZERO)),
        },
        "growthRates": growth_rates,
        "recentTransactions": [
            {
                "id": str(order.pk),
                "salonName": order.salon_name,
                "total": _money(order.total),
                "status": order.status,
                "template": _template_name(order),
                "createdAt": order.created_at.isoformat(),
            }
            for order in r["recent"]
        ],
    }


# ------------------------------------ orders ------------------------------------

def orders_report(days: int = 30, now=None) -> dict:
    """Order volume, status and setup funnel over the day window."""
    start, keys = window(days, now)
    r = run_batch(
        orders=lambda: fetch_all(
            Order.objects.filter(created_at__gte=start).select_related("template").order_by("-created_at")
        ),
    )
    orders = r["orders"]
    total = len(orders)

    by_status = {s: 0 for s in Status.values}
    by_step = {s: 0 for s in Step.values}
    per_day = Counter()
    revenue_per_day = defaultdict(lambda: _ZERO)
    per_hour = Counter()
    templates = defaultdict(lambda: {"count": 0, "revenue": _ZERO})
    extensions = Counter()
    completion_hours = []

    for order in orders:
        by_status[order.status] = by_status.get(order.status, 0) + 1
        by_step[order.setup_step] = by_step.get(order.setup_step, 0) + 1
        day = _day(order.created_at)
        per_day[day] += 1
        per_hour[timezone.localtime(order.created_at).hour] += 1
        entry = templates[_template_name(order)]
        entry["count"] += 1
        if order.status in PAID:
            revenue_per_day[day] += order.total
            entry["revenue"] += order.total
        if order.domain_extension:
            extensions[order.domain_extension] += 1
        if order.status == Status.COMPLETED and order.completed_at:
            completion_hours.append((order.completed_at - order.created_at).total_seconds() / 3600)

    completed = by_status[Status.COMPLETED]
    cancelled = sum(by_status[s] for s in CANCELLED)
    after_design = sum(
        by_step[s]
        for s in (Step.CONTENT_EDITOR, Step.CONTENT_UPLOAD, Step.PHOTOS_UPLOAD, Step.REVIEW_LAUNCH, Step.COMPLETED)
    )
    top_templates = sorted(templates.items(), key=lambda item: item[1]["count"], reverse=True)[:TOP]

    return {
        "summary": {
            "totalOrders": total,
            "completedOrders": completed,
            "pendingOrders": by_status[Status.PENDING] + by_status[Status.PROCESSING],
            "cancelledOrders": cancelled,
            "completionRate": _pct(completed, total),
            "cancellationRate": _pct(cancelled, total),
            "avgCompletionTime": round(sum(completion_hours) / len(completion_hours), 2)
            if completion_hours
            else 0,
            "totalRevenue": _money(sum(revenue_per_day.values(), _ZERO)),
        },
        "statusDistribution": by_status,
        "setupStepDistribution": by_step,
        "setupFunnel": [
            {"step": step, "count": count, "percentage": _pct(count, total)}
            for step, count in by_step.items()
        ],
        "conversionFunnel": {
            "started": total,
            "domainSelected": total - by_step[Step.DOMAIN_SELECTION],
            "businessInfoAdded": total - by_step[Step.DOMAIN_SELECTION] - by_step[Step.BUSINESS_INFO],
            "designCompleted": after_design,
            "completed": by_step[Step.COMPLETED],
        },
        "timeSeries": [
            {"date": k, "orders": per_day[k], "revenue": _money(revenue_per_day.get(k))} for k in keys
        ],
        "topTemplates": [
            {"name": name, "count": data["count"], "revenue": _money(data["revenue"])}
            for name, data in top_templates
        ],
        "domainExtensions": dict(extensions),
        "recentOrders": [
            {
                "id": str(order.pk),
                "salonName": order.salon_name,
                "ownerName": order.owner_name,
                "email": order.email,
                "domain": order.domain,
                "template": _template_name(order),
                "total": _money(order.total),
                "status": order.status,
                "setupStep": order.setup_step,
                "createdAt": order.created_at.isoformat(),
                "completedAt": order.completed_at.isoformat() if order.completed_at else None,
            }
            for order in orders[:LISTED]
        ],
        "peakHours": [
            {"hour": hour, "count": count} for hour, count in per_hour.most_common(TOP)
        ],
    }


# ------------------------------------ users ------------------------------------

def users_report(days: int = 30, now=None) -> dict:
    """Registrations, activity, segmentation and best customers."""
    now = now or timezone.now()
    start, keys = window(days, now)
    previous_start = start - timedelta(days=days)

    r = run_batch(
        users=lambda: fetch_all(
            User.objects.select_related("profile").annotate(
                order_count=Count("orders", distinct=True),
                photo_count=Count("photos", distinct=True),
            )
        ),
        revenue=lambda: fetch_all(
            Order.objects.filter(status=Status.COMPLETED, user__isnull=False)
            .values("user_id")
            .annotate(total=Sum("total"))
        ),
    )
    users = r["users"]
    revenue_by_user = {row["user_id"]: row["total"] for row in r["revenue"]}
    total = len(users)

    def profile(user):
        return getattr(user, "profile", None)

    def is_admin(user):
        prof = profile(user)
        return user.is_staff or (prof is not None and prof.role == Profile.Role.ADMIN)

    def seen_within(user, n_days):
        return user.last_login is not None and now - user.last_login <= timedelta(days=n_days)

    def idle_for(user, n_days):
        return user.last_login is not None and now - user.last_login > timedelta(days=n_days)

    new_users = sum(1 for u in users if u.date_joined >= start)
    previous_users = sum(1 for u in users if previous_start <= u.date_joined < start)

    joined_per_day = Counter(_day(u.date_joined) for u in users if u.date_joined >= start)
    series, cumulative = [], 0
    for k in keys:
        cumulative += joined_per_day[k]
        series.append({"date": k, "newUsers": joined_per_day[k], "cumulativeUsers": cumulative})

    active_day = sum(1 for u in users if seen_within(u, 1))
    active_week = sum(1 for u in users if seen_within(u, 7))
    active_month = sum(1 for u in users if seen_within(u, 30))

    business_types = Counter(profile(u).business_type for u in users if profile(u) and profile(u).business_type)
    cities = Counter(profile(u).city for u in users if profile(u) and profile(u).city)

    def engagement(user):
        prof = profile(user)
        revenue = revenue_by_user.get(user.pk, _ZERO)
        return {
            "userId": user.pk,
            "email": user.email,
            "name": (prof.name if prof else "") or user.get_full_name() or "N/A",
            "salonName": (prof.salon_name if prof else "") or "N/A",
            "orderCount": user.order_count,
            "photoCount": user.photo_count,
            "totalRevenue": _money(revenue),
            "avgOrderValue": _ratio(revenue, user.order_count),
            "lastLogin": user.last_login.isoformat() if user.last_login else None,
            "createdAt": user.date_joined.isoformat(),
            "isActive": user.is_active,
            "hasCompletedOnboarding": bool(prof and prof.has_completed_onboarding),
        }

    customers = sorted(users, key=lambda u: revenue_by_user.get(u.pk, _ZERO), reverse=True)[:LISTED]
    newest = sorted(users, key=lambda u: u.date_joined, reverse=True)[:LISTED]
    total_revenue = sum(revenue_by_user.values(), _ZERO)
    admins = sum(1 for u in users if is_admin(u))

    return {
        "summary": {
            "totalUsers": total,
            "adminUsers": admins,
            "clientUsers": total - admins,
            "activeUsers": sum(1 for u in users if u.is_active),
            "completedOnboarding": sum(
                1 for u in users if profile(u) and profile(u).has_completed_onboarding
            ),
            "newUsers": new_users,
            "userGrowthRate": growth(new_users, previous_users),
            "avgOrdersPerUser": _ratio(sum(u.order_count for u in users), total),
            "avgRevenuePerUser": _ratio(total_revenue, total),
            "avgPhotosPerUser": _ratio(sum(u.photo_count for u in users), total),
        },
        "userActivity": {
            "activeLastDay": active_day,
            "activeLastWeek": active_week,
            "activeLastMonth": active_month,
        },
        "retentionCohorts": {
            "day1": active_day,
            "day7": active_week,
            "day30": active_month,
            "retention1Day": _pct(active_day, total),
            "retention7Day": _pct(active_week, total),
            "retention30Day": _pct(active_month, total),
        },
        "businessTypeDistribution": dict(business_types),
        "topCities": [{"city": city, "count": n} for city, n in cities.most_common(LISTED)],
        "lifecycleStages": {
            "new": sum(1 for u in users if now - u.date_joined <= timedelta(days=7)),
            "active": sum(1 for u in users if u.order_count > 0),
            "engaged": sum(1 for u in users if u.order_count > 1),
            "champions": sum(1 for u in users if u.order_count > 3),
            "dormant": sum(1 for u in users if idle_for(u, 30)),
            "churned": sum(1 for u in users if idle_for(u, 90)),
        },
        "timeSeries": series,
        "topCustomers": [engagement(u) for u in customers],
        "recentRegistrations": [
            {
                "id": u.pk,
                "email": u.email,
                "name": profile(u).name if profile(u) else "",
                "salonName": profile(u).salon_name if profile(u) else "",
                "city": profile(u).city if profile(u) else "",
                "businessType": profile(u).business_type if profile(u) else "",
                "createdAt": u.date_joined.isoformat(),
                "hasCompletedOnboarding": bool(profile(u) and profile(u).has_completed_onboarding),
                "orderCount": u.order_count,
            }
            for u in newest
        ],
    }


# ------------------------------------ templates ------------------------------------

def templates_report(days: int = 30, now=None) -> dict:
    """Per-template sales and conversion over the day window."""
    start, keys = window(days, now)
    r = run_batch(
        templates=lambda: fetch_all(Template.objects.annotate(all_time_orders=Count("orders"))),
        orders=lambda: fetch_all(
            Order.objects.filter(created_at__gte=start, template__isnull=False).values(
                "template_id", "total", "status", "created_at", "setup_completed"
            )
        ),
    )
    orders_by_template = defaultdict(list)
    for row in r["orders"]:
        orders_by_template[row["template_id"]].append(row)

    metrics, funnel, features, trends = [], [], [], {}
    for template in r["templates"]:
        rows = orders_by_template[template.pk]
        completed = sum(1 for o in rows if o["status"] == Status.COMPLETED)
        processing = sum(1 for o in rows if o["status"] == Status.PROCESSING)
        revenue = sum((o["total"] for o in rows if o["status"] in PAID), _ZERO)
        setup_done = sum(1 for o in rows if o["setup_completed"])
        metrics.append(
            {
                "id": template.pk,
                "name": template.name,
                "description": template.description,
                "category": template.category,
                "price": _money(template.price),
                "active": template.active,
                "totalOrders": len(rows),
                "completedOrders": completed,
                "processingOrders": processing,
                "cancelledOrders": sum(1 for o in rows if o["status"] in CANCELLED),
                "revenue": _money(revenue),
                "conversionRate": _pct(completed, len(rows)),
                "setupCompletionRate": _pct(setup_done, len(rows)),
                "avgOrderValue": _ratio(revenue, completed + processing),
                "allTimeOrders": template.all_time_orders,
            }
        )
        funnel.append(
            {
                "templateName": template.name,
                "started": len(rows),
                "setupCompleted": setup_done,
                "paid": completed + processing,
                "completed": completed,
            }
        )
        feature_list = template.features if isinstance(template.features, list) else []
        features.append(
            {
                "templateName": template.name,
                "featureCount": len(feature_list),
                "features": feature_list,
                "pricePerFeature": _ratio(template.price, len(feature_list)),
            }
        )
        trends[template.name] = Counter(_day(o["created_at"]) for o in rows)

    categories = {}
    for category in Template.Category.values:
        in_category = [m for m in metrics if m["category"] == category]
        orders = sum(m["totalOrders"] for m in in_category)
        categories[category] = {
            "orders": orders,
            "revenue": round(sum(m["revenue"] for m in in_category), 2),
            "conversionRate": _pct(sum(m["completedOrders"] for m in in_category), orders),
        }

    price_ranges = {}
    for label, low, high in PRICE_RANGES:
        in_range = [m for m in metrics if m["price"] >= low and (high is None or m["price"] < high)]
        price_ranges[label] = {
            "min": low,
            "max": high,
            "count": sum(m["totalOrders"] for m in in_range),
            "revenue": round(sum(m["revenue"] for m in in_range), 2),
        }

    recommendations = [
        {
            "template": m["name"],
            "issue": "Low conversion rate",
            "conversionRate": m["conversionRate"],
            "suggestion": "Consider reviewing pricing or improving template features",
        }
        for m in metrics
        if m["conversionRate"] < 20 and m["totalOrders"] > 0
    ] + [
        {
            "template": m["name"],
            "strength": "High conversion and revenue",
            "conversionRate": m["conversionRate"],
            "suggestion": "Feature prominently on homepage",
        }
        for m in metrics
        if m["conversionRate"] > 50 and m["revenue"] > 100
    ]

    count = len(metrics)
    return {
        "summary": {
            "totalTemplates": count,
            "activeTemplates": sum(1 for m in metrics if m["active"]),
            "totalOrders": sum(m["totalOrders"] for m in metrics),
            "totalRevenue": round(sum(m["revenue"] for m in metrics), 2),
            "avgConversionRate": round(sum(m["conversionRate"] for m in metrics) / count, 2) if count else 0,
            "avgOrderValue": round(sum(m["avgOrderValue"] for m in metrics) / count, 2) if count else 0,
        },
        "templateMetrics": metrics,
        "topPerformingTemplates": sorted(metrics, key=lambda m: m["revenue"], reverse=True)[:TOP],
        "mostPopularTemplates": sorted(metrics, key=lambda m: m["totalOrders"], reverse=True)[:TOP],
        "categoryPerformance": categories,
        "timeSeries": [
            dict({"date": k}, **{name: per_day[k] for name, per_day in trends.items()}) for k in keys
        ],
        "featureAnalysis": features,
        "priceRanges": price_ranges,
        "conversionFunnel": funnel,
        "recommendations": recommendations,
    }


# ------------------------------------ domains ------------------------------------

def _discount(order) -> float:
    price, user_price = order["domain_price"], order["domain_user_price"]
    if not price or user_price is None:
        return 0.0
    return float(round((price - user_price) / price * 100, 2))


def domains_report(days: int = 30, now=None) -> dict:
    """Domain extensions sold, their revenue and pricing hints."""
    start, keys = window(days, now)
    r = run_batch(
        orders=lambda: fetch_all(
            Order.objects.filter(created_at__gte=start).values(
                "domain", "domain_extension", "domain_price", "domain_user_price", "total", "status", "created_at"
            )
        ),
        pricing=lambda: fetch_all(DomainPricing.objects.all()),
    )
    orders = r["orders"]
    pricing = r["pricing"]
    with_extension = [o for o in orders if o["domain_extension"]]
    paid = [o for o in orders if o["status"] in PAID]

    stats = {p.extension: {"count": 0, "revenue": _ZERO, "discounts": []} for p in pricing}
    for order in with_extension:
        entry = stats.setdefault(order["domain_extension"], {"count": 0, "revenue": _ZERO, "discounts": []})
        entry["count"] += 1
        if order["status"] in PAID:
            entry["revenue"] += order["domain_user_price"] or _ZERO
            if order["domain_price"] and order["domain_user_price"] is not None:
                entry["discounts"].append(_discount(order))

    extension_stats = sorted(
        (
            {
                "extension": ext,
                "count": data["count"],
                "revenue": _money(data["revenue"]),
                "avgPrice": _ratio(data["revenue"], data["count"]),
                "avgDiscount": round(sum(data["discounts"]) / len(data["discounts"]), 2)
                if data["discounts"]
                else 0,
            }
            for ext, data in stats.items()
        ),
        key=lambda item: item["count"],
        reverse=True,
    )
    for rank, item in enumerate(extension_stats, start=1):
        item["popularityRank"] = rank

    trends = defaultdict(Counter)
    for order in with_extension:
        trends[_day(order["created_at"])][order["domain_extension"]] += 1
    series = [dict(trends[k], date=k, total=sum(trends[k].values())) for k in keys]

    lengths = {"short": 0, "medium": 0, "long": 0}
    keywords = {word: 0 for word in DOMAIN_KEYWORDS}
    for order in orders:
        if not order["domain"]:
            continue
        label = order["domain"].split(".")[0].lower()
        if len(label) < 10:
            lengths["short"] += 1
        elif len(label) <= 15:
            lengths["medium"] += 1
        else:
            lengths["long"] += 1
        for word in DOMAIN_KEYWORDS:
            if word in label:
                keywords[word] += 1

    domain_revenue = sum((o["domain_user_price"] or _ZERO for o in paid), _ZERO)
    template_revenue = sum((o["total"] - (o["domain_user_price"] or _ZERO) for o in paid), _ZERO)
    combined = domain_revenue + template_revenue

    optimizations = []
    for p in pricing:
        per_day = stats[p.extension]["count"] / days
        if per_day < 0.1 and p.discount < 50:
            optimizations.append(
                {
                    "extension": p.extension,
                    "currentPrice": _money(p.price),
                    "currentDiscount": p.discount,
                    "suggestion": "Consider increasing discount to boost sales",
                    "reason": "Low conversion rate",
                }
            )
        if per_day > 1 and p.discount > 20:
            optimizations.append(
                {
                    "extension": p.extension,
                    "currentPrice": _money(p.price),
                    "currentDiscount": p.discount,
                    "suggestion": "Can reduce discount while maintaining sales",
                    "reason": "High demand",
                }
            )

    top_domains = sorted(paid, key=lambda o: o["domain_user_price"] or _ZERO, reverse=True)[:LISTED]
    count = len(extension_stats)
    by_revenue = sorted(extension_stats, key=lambda item: item["revenue"], reverse=True)

    return {
        "summary": {
            "totalDomainsSold": len(with_extension),
            "uniqueExtensions": count,
            "totalDomainRevenue": _money(domain_revenue),
            "avgDomainPrice": round(sum(i["avgPrice"] for i in extension_stats) / count, 2) if count else 0,
            "avgDiscount": round(sum(i["avgDiscount"] for i in extension_stats) / count, 2) if count else 0,
            "mostPopularExtension": extension_stats[0]["extension"] if count else "N/A",
            "highestRevenueExtension": by_revenue[0]["extension"] if count else "N/A",
        },
        "extensionStats": extension_stats,
        "timeSeries": series,
        "domainPatterns": {
            "lengthDistribution": lengths,
            "containsKeywords": keywords,
            "uniqueDomains": len({o["domain"] for o in orders if o["domain"]}),
        },
        "revenueComparison": {
            "domainRevenue": _money(domain_revenue),
            "templateRevenue": _money(template_revenue),
            "domainPercentage": _pct(domain_revenue, combined),
            "templatePercentage": _pct(template_revenue, combined),
        },
        "pricingOptimizations": optimizations,
        "topDomainsByRevenue": [
            {
                "domain": o["domain"],
                "extension": o["domain_extension"],
                "price": _money(o["domain_user_price"]),
                "originalPrice": _money(o["domain_price"]),
                "discount": _discount(o),
                "createdAt": o["created_at"].isoformat(),
            }
            for o in top_domains
        ],
        "extensionConfig": [
            {
                "extension": p.extension,
                "basePrice": _money(p.price),
                "discount": p.discount,
                "finalPrice": _money(p.final_price),
                "isPopular": p.popular,
                "isAvailable": p.active,
                "sold": stats[p.extension]["count"],
                "revenue": _money(stats[p.extension]["revenue"]),
            }
            for p in pricing
        ],
    }
