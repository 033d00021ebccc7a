"""Content editor data of an order: service menu and opening hours.

Both hang off the order's SiteContent row, which is created on first use.
An order without stored hours gets the default week (Mon-Fri 09:00-18:00,
Sat 09:00-16:00, closed on Sunday) the first time its hours are read.
"""

import logging

from django.db import transaction
from django.db.models import Max

from .models import BusinessHours, SalonService, SiteContent

logger = logging.getLogger(__name__)

Day = BusinessHours.Day

WEEK = list(Day.values)

DEFAULT_HOURS = {
    Day.MONDAY: ("09:00", "18:00"),
    Day.TUESDAY: ("09:00", "18:00"),
    Day.WEDNESDAY: ("09:00", "18:00"),
    Day.THURSDAY: ("09:00", "18:00"),
    Day.FRIDAY: ("09:00", "18:00"),
    Day.SATURDAY: ("09:00", "16:00"),
}


class UnknownServices(Exception):
    def __init__(self, ids):
        super().__init__(f"Unknown service ids: {ids}")
        self.ids = ids


def content_for(order) -> SiteContent:
    content, _ = SiteContent.objects.get_or_create(order=order)
    return content


def services_of(content: SiteContent):
    return content.salon_services.all()


def add_service(content: SiteContent, **fields) -> SalonService:
    """Append a service; without an explicit sort order it goes last."""
    if not fields.get("sort_order"):
        last = content.salon_services.aggregate(m=Max("sort_order"))["m"]
        fields["sort_order"] = (last or 0) + 1
    return SalonService.objects.create(content=content, **fields)


def reorder_services(content: SiteContent, service_ids) -> list:
    """Give the listed services the sort order of their position.

    Every id must belong to this content; otherwise nothing is changed.
    """
    own = set(content.salon_services.values_list("id", flat=True))
    unknown = [sid for sid in service_ids if sid not in own]
    if unknown:
        raise UnknownServices(unknown)

    with transaction.atomic():
        for position, service_id in enumerate(service_ids):
            SalonService.objects.filter(pk=service_id).update(sort_order=position)
    return list(services_of(content))


def _sorted_week(rows):
    return sorted(rows, key=lambda row: WEEK.index(row.day_of_week))


def hours_of(content: SiteContent) -> list:
    rows = list(content.business_hours.all())
    if rows:
        return _sorted_week(rows)

    BusinessHours.objects.bulk_create(
        [
            BusinessHours(
                content=content,
                day_of_week=day,
                is_open=day in DEFAULT_HOURS,
                open_time=DEFAULT_HOURS.get(day, ("", ""))[0],
                close_time=DEFAULT_HOURS.get(day, ("", ""))[1],
            )
            for day in WEEK
        ]
    )
    logger.info("Created default opening hours for order %s", content.order_id)
    return _sorted_week(content.business_hours.all())


def replace_hours(content: SiteContent, days) -> list:
    """Upsert the given weekdays; days not listed keep their stored hours."""
    with transaction.atomic():
        for entry in days:
            entry = dict(entry)
            day = entry.pop("day_of_week")
            BusinessHours.objects.update_or_create(content=content, day_of_week=day, defaults=entry)
    return _sorted_week(content.business_hours.all())
