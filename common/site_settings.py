"""Site-wide settings stored as a flat JSON document.

The document lives at settings.SITE_SETTINGS_FILE. Missing keys fall back to
DEFAULT_SITE_SETTINGS, so a fresh deployment works without the file. The Stripe
secret is kept in the document only when an admin sets one; otherwise the
STRIPE_SECRET_KEY environment value is used.
"""

import copy
import json
import logging
import os
import tempfile
from pathlib import Path

from django.conf import settings

logger = logging.getLogger(__name__)

SECRET_MASK = "••••••••"

DEFAULT_SITE_SETTINGS = {
    "siteName": "PeluqueríasPRO",
    "siteDescription": (
        "Crea la web de tu peluquería en 48h. Diseño profesional, reservas online, "
        "gestión de citas."
    ),
    "siteUrl": "https://peluquerias-web.com",
    "contactEmail": "contacto@peluquerias-web.com",
    "supportEmail": "soporte@peluquerias-web.com",
    "maintenanceMode": False,
    "allowRegistrations": True,
    "emailNotifications": True,
    "smsNotifications": False,
    "stripePublishableKey": "",
    "stripeSecretKey": "",
    "domainPricing": [
        {"extension": ".es", "price": 12.99, "discount": 0, "popular": True},
        {"extension": ".com", "price": 15.99, "discount": 10, "popular": False},
        {"extension": ".org", "price": 14.99, "discount": 0, "popular": False},
    ],
    "templatePricing": {"offerPrice": 199, "originalPrice": 799},
    "theme": {
        "primaryColor": "#f97316",
        "secondaryColor": "#7c3aed",
        "accentColor": "#06b6d4",
    },
}

PUBLIC_KEYS = (
    "siteName",
    "siteDescription",
    "siteUrl",
    "contactEmail",
    "supportEmail",
    "maintenanceMode",
    "allowRegistrations",
    "stripePublishableKey",
    "domainPricing",
    "templatePricing",
    "theme",
)


def _settings_path(path=None) -> Path:
    return Path(path or settings.SITE_SETTINGS_FILE)


def load_site_settings(path=None) -> dict:
    """Return the stored document merged over the defaults."""
    data = copy.deepcopy(DEFAULT_SITE_SETTINGS)
    file_path = _settings_path(path)
    if not file_path.exists():
        return data
    with file_path.open("r", encoding="utf-8") as fh:
        stored = json.load(fh)
    if not isinstance(stored, dict):
        logger.warning("Ignoring malformed site settings document at %s", file_path)
        return data
    data.update(stored)
    return data


def save_site_settings(data: dict, path=None) -> dict:
    """Write the document atomically (temp file + rename) and return it."""
    file_path = _settings_path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=file_path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False, indent=2)
        os.replace(tmp_name, file_path)
    except OSError:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return data


def masked(data: dict) -> dict:
    """Copy of the document with the Stripe secret hidden."""
    out = copy.deepcopy(data)
    out["stripeSecretKey"] = SECRET_MASK if out.get("stripeSecretKey") else ""
    return out


def public_view(data: dict) -> dict:
    return {key: copy.deepcopy(data.get(key)) for key in PUBLIC_KEYS}


def stripe_secret_key(data=None) -> str:
    data = data if data is not None else load_site_settings()
    return data.get("stripeSecretKey") or settings.STRIPE_SECRET_KEY
