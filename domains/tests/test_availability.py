from django.test import SimpleTestCase

from domains.availability import MAX_SUGGESTIONS, DomainAvailabilityChecker


class FixedRandom:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


class AvailabilityTests(SimpleTestCase):
    def test_taken_domains_are_never_available(self):
        checker = DomainAvailabilityChecker(rng=FixedRandom(0.99))
        self.assertFalse(checker.is_available("google", ".com"))
        self.assertFalse(checker.is_available("peluqueria", ".es"))

    def test_thresholds_depend_on_length(self):
        cases = [
            ("abc", 0.81, True),
            ("abc", 0.8, False),
            ("abcde", 0.61, True),
            ("abcde", 0.6, False),
            ("salonluna", 0.31, True),
            ("salonluna", 0.3, False),
        ]
        for label, roll, expected in cases:
            with self.subTest(label=label, roll=roll):
                checker = DomainAvailabilityChecker(rng=FixedRandom(roll))
                self.assertIs(checker.is_available(label, ".es"), expected)

    def test_suggestions(self):
        suggestions = DomainAvailabilityChecker().suggestions("luna", ".es")
        self.assertEqual(len(suggestions), MAX_SUGGESTIONS)
        self.assertEqual(suggestions[0], "luna-salon.com")
        self.assertIn("luna-peluqueria.org", suggestions)
