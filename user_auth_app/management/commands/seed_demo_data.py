from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from rest_framework.authtoken.models import Token

from domains.models import DomainPricing
from profiles.models import Profile
from site_templates.models import Template

USERS = {
    "ADMIN": {"email": "admin@peluquerias-web.com", "password": "admin12345", "name": "Administrador"},
    "CLIENT": {
        "email": "cliente@example.com",
        "password": "cliente12345",
        "name": "María García",
        "salon_name": "Salón María",
    },
}

TEMPLATES = [
    {
        "name": "Esencial",
        "category": Template.Category.BASIC,
        "price": Decimal("199.00"),
        "description": "Web de una página con reservas por WhatsApp.",
        "features": ["Diseño responsive", "Galería de fotos", "Botón de WhatsApp"],
    },
    {
        "name": "Profesional",
        "category": Template.Category.PREMIUM,
        "price": Decimal("399.00"),
        "description": "Web completa con reservas online y blog.",
        "features": ["Reservas online", "Blog", "SEO local", "Galería de fotos"],
    },
    {
        "name": "Cadena",
        "category": Template.Category.ENTERPRISE,
        "price": Decimal("799.00"),
        "description": "Varios salones, equipo y tienda online.",
        "features": ["Multi-salón", "Tienda online", "Gestión de equipo", "Reservas online"],
    },
]

DOMAIN_PRICES = [
    {"extension": ".es", "price": Decimal("12.99"), "discount": 0, "popular": True},
    {"extension": ".com", "price": Decimal("15.99"), "discount": 10, "popular": False},
    {"extension": ".org", "price": Decimal("14.99"), "discount": 0, "popular": False},
]


class Command(BaseCommand):
    help = "Create or update demo accounts, templates and domain prices."

    def handle(self, *args, **options):
        User = get_user_model()

        for role, cfg in USERS.items():
            u, created = User.objects.get_or_create(
                username=cfg["email"],
                defaults={"email": cfg["email"], "is_staff": role == "ADMIN"},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f"Created user '{u.email}'"))
            else:
                self.stdout.write(f"User '{u.email}' already exists")

            u.set_password(cfg["password"])
            u.save(update_fields=["password"])

            prof, _ = Profile.objects.get_or_create(user=u, defaults={"role": role})
            prof.role = role
            prof.name = cfg["name"]
            prof.salon_name = cfg.get("salon_name", "")
            prof.save(update_fields=["role", "name", "salon_name"])

            token, _ = Token.objects.get_or_create(user=u)
            self.stdout.write(f"  → role={role}, token={token.key}")

        for data in TEMPLATES:
            _, created = Template.objects.update_or_create(name=data["name"], defaults=data)
            self.stdout.write(f"Template '{data['name']}' {'created' if created else 'updated'}")

        for data in DOMAIN_PRICES:
            DomainPricing.objects.update_or_create(extension=data["extension"], defaults=data)
        self.stdout.write(f"{len(DOMAIN_PRICES)} domain prices ready")

        self.stdout.write(self.style.SUCCESS("Demo data ready."))
