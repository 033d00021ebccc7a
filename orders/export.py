"""CSV export of orders for the back-office.

The file is UTF-8 with a byte order mark so spreadsheet programs pick the
encoding up, and uses Spanish column headers and status labels.
"""

import csv
import io

from django.utils import timezone

from .models import Order

BOM = "\ufeff"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

HEADERS = [
    "ID Pedido",
    "Fecha Creación",
    "Estado",
    "Nombre Salón",
    "Propietario",
    "Email",
    "Teléfono",
    "Dirección",
    "Ciudad",
    "Dominio",
    "Extensión Dominio",
    "Plantilla",
    "Categoría Plantilla",
    "Precio Plantilla",
    "Precio Dominio",
    "Precio Usuario Dominio",
    "Total",
    "Paso Configuración",
    "Configuración Completada",
    "Fecha Completado",
    "Usuario Registrado",
    "Email Usuario",
    "Número de Fotos",
    "Número de Servicios",
    "ID Sesión Stripe",
    "ID Pago Stripe",
]

STATUS_LABELS = {
    Order.Status.PENDING: "Pendiente",
    Order.Status.PROCESSING: "En Proceso",
    Order.Status.COMPLETED: "Completado",
    Order.Status.CANCELLED: "Cancelado",
    Order.Status.REFUNDED: "Reembolsado",
}

STEP_LABELS = {
    Order.SetupStep.DOMAIN_SELECTION: "Selección de Dominio",
    Order.SetupStep.BUSINESS_INFO: "Información del Negocio",
    Order.SetupStep.DESIGN_PREFERENCES: "Preferencias de Diseño",
    Order.SetupStep.CONTENT_EDITOR: "Editor de Contenido",
    Order.SetupStep.CONTENT_UPLOAD: "Editor de Contenido",
    Order.SetupStep.PHOTOS_UPLOAD: "Carga de Fotos",
    Order.SetupStep.REVIEW_LAUNCH: "Revisión y Lanzamiento",
    Order.SetupStep.COMPLETED: "Completado",
}


def _money(value) -> str:
    return "" if value is None else f"{value:.2f}"


def _when(value) -> str:
    return "" if value is None else timezone.localtime(value).strftime(DATETIME_FORMAT)


def _yes_no(flag) -> str:
    return "Sí" if flag else "No"


def order_row(order) -> list:
    """One CSV row; expects `photo_count` and `service_count` annotations."""
    user = order.user if order.user_id else None
    profile = getattr(user, "profile", None) if user else None
    template = order.template if order.template_id else None
    return [
        str(order.id),
        _when(order.created_at),
        STATUS_LABELS.get(order.status, order.status),
        order.salon_name,
        order.owner_name,
        order.email,
        order.phone,
        order.address,
        profile.city if profile else "",
        order.domain,
        order.domain_extension,
        template.name if template else "",
        template.category if template else "",
        _money(template.price) if template else "",
        _money(order.domain_price),
        _money(order.domain_user_price),
        _money(order.total),
        STEP_LABELS.get(order.setup_step, order.setup_step),
        _yes_no(order.setup_completed),
        _when(order.completed_at),
        _yes_no(user),
        user.email if user else "",
        str(getattr(order, "photo_count", 0)),
        str(getattr(order, "service_count", 0)),
        order.stripe_session_id,
        order.payment_intent_id,
    ]


def orders_csv(orders) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(HEADERS)
    for order in orders:
        writer.writerow(order_row(order))
    return BOM + buf.getvalue()


def export_filename(now=None) -> str:
    now = timezone.localtime(now or timezone.now())
    return f"orders_export_{now.strftime('%Y-%m-%d_%H-%M-%S')}.csv"
