from datetime import datetime

from django.test import SimpleTestCase, TestCase
from django.utils import timezone

from dashboard.aggregation import growth, month_bounds, run_batch
from orders.models import Order


class GrowthTests(SimpleTestCase):
    def test_growth(self):
        cases = [
            ((0, 0), 0),
            ((0, 5), -100),
            ((5, 0), 100),
            ((50, 100), -50),
            ((150, 100), 50),
            ((1, 3), -67),
            ((2, 3), -33),
            ((3, 2), 50),
            ((101, 200), -49),
            ((1, 8), -87),
            ((3, 8), -62),
        ]
        for (current, previous), expected in cases:
            with self.subTest(current=current, previous=previous):
                self.assertEqual(growth(current, previous), expected)

    def test_month_bounds(self):
        now = timezone.make_aware(datetime(2024, 3, 15, 12, 30))
        last, this, nxt = month_bounds(now)
        self.assertEqual((last.month, this.month, nxt.month), (2, 3, 4))
        self.assertEqual((last.day, this.day, nxt.day), (1, 1, 1))
        self.assertEqual(this.hour, 0)

    def test_month_bounds_across_year_end(self):
        now = timezone.make_aware(datetime(2024, 12, 31, 23, 0))
        last, this, nxt = month_bounds(now)
        self.assertEqual((last.year, last.month), (2024, 11))
        self.assertEqual((nxt.year, nxt.month), (2025, 1))


class RunBatchTests(TestCase):
    def test_returns_named_results(self):
        Order.objects.create(salon_name="Uno", email="uno@example.com")

        async def value():
            return 7

        result = run_batch(orders=lambda: Order.objects.acount(), seven=value)
        self.assertEqual(result, {"orders": 1, "seven": 7})

    def test_failure_fails_the_whole_batch(self):
        async def broken():
            raise RuntimeError("database unavailable")

        with self.assertRaises(RuntimeError):
            run_batch(orders=lambda: Order.objects.acount(), broken=broken)

    def test_half_open_month_window(self):
        _, this_month, next_month = month_bounds()
        inside = Order.objects.create(salon_name="In", email="in@example.com")
        boundary = Order.objects.create(salon_name="Next", email="next@example.com")
        Order.objects.filter(pk=inside.pk).update(created_at=this_month)
        Order.objects.filter(pk=boundary.pk).update(created_at=next_month)

        result = run_batch(
            monthly=lambda: Order.objects.filter(
                created_at__gte=this_month, created_at__lt=next_month
            ).acount()
        )
        self.assertEqual(result["monthly"], 1)
