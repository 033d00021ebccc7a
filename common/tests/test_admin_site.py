from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse

from contact.models import ContactMessage
from domains.models import DomainPricing
from orders.models import Order, SalonService, SiteContent
from photos.models import Photo
from profiles.models import Profile
from site_templates.models import Template

User = get_user_model()


class AdminSiteTests(TestCase):
    """Back-office model pages render with data in them."""

    def setUp(self):
        self.superuser = User.objects.create_superuser("root@example.com", "root@example.com", "pass12345")
        Profile.objects.create(user=self.superuser, role=Profile.Role.ADMIN)
        template = Template.objects.create(name="Esencial", price=199)
        order = Order.objects.create(user=self.superuser, template=template, salon_name="Luna", email="l@example.com")
        content = SiteContent.objects.create(order=order, about_text="Hola")
        SalonService.objects.create(content=content, name="Corte bob", category="CUTS")
        self.content = content
        Photo.objects.create(
            id="p1",
            order=order,
            filename="a.jpg",
            stored_name="a.jpg",
            original_url="/uploads/photos/a.jpg",
            thumbnail_url="/uploads/thumbnails/thumb_a.jpg",
            size=1,
            mime_type="image/jpeg",
        )
        ContactMessage.objects.create(name="Ana", email="ana@example.com", message="Hola, información")
        DomainPricing.objects.create(extension=".es", price=12.99)
        self.order = order
        self.client.force_login(self.superuser)

    def test_changelists_render(self):
        names = [
            "admin:auth_user_changelist",
            "admin:profiles_profile_changelist",
            "admin:site_templates_template_changelist",
            "admin:orders_order_changelist",
            "admin:orders_sitecontent_changelist",
            "admin:photos_photo_changelist",
            "admin:contact_contactmessage_changelist",
            "admin:domains_domainpricing_changelist",
        ]
        for name in names:
            with self.subTest(name=name):
                self.assertEqual(self.client.get(reverse(name)).status_code, 200)

    def test_order_change_page_shows_content_inline(self):
        res = self.client.get(reverse("admin:orders_order_change", args=[self.order.pk]))
        self.assertEqual(res.status_code, 200)
        self.assertContains(res, "Hola")

    def test_user_change_page_lists_orders(self):
        res = self.client.get(reverse("admin:auth_user_change", args=[self.superuser.pk]))
        self.assertEqual(res.status_code, 200)
        self.assertContains(res, "Luna")

    def test_content_change_page_lists_services(self):
        res = self.client.get(reverse("admin:orders_sitecontent_change", args=[self.content.pk]))
        self.assertEqual(res.status_code, 200)
        self.assertContains(res, "Corte bob")
