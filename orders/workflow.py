"""Order setup workflow.

The client wizard walks an order through a fixed list of setup steps
(domain → business info → design → content → photos → review → completed).
Each step persists its own fields and moves `setup_step` forward. Nothing here
stops a client from skipping or repeating a step, and the admin status
override is independent of the wizard: both write only their own columns and
the last write wins.
"""

import logging
from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from photos.models import Photo
from .models import Order, SiteContent

logger = logging.getLogger(__name__)

Step = Order.SetupStep
Status = Order.Status

STEP_PROGRESS = {
    Step.DOMAIN_SELECTION: 15,
    Step.BUSINESS_INFO: 30,
    Step.DESIGN_PREFERENCES: 45,
    Step.CONTENT_EDITOR: 60,
    Step.CONTENT_UPLOAD: 60,
    Step.PHOTOS_UPLOAD: 75,
    Step.REVIEW_LAUNCH: 90,
    Step.COMPLETED: 100,
}

MILESTONES = [
    (Step.DOMAIN_SELECTION, "Selección de dominio", "Configuración del dominio web"),
    (Step.BUSINESS_INFO, "Información del negocio", "Recopilación de datos del salón"),
    (Step.DESIGN_PREFERENCES, "Preferencias de diseño", "Personalización visual"),
    (Step.CONTENT_EDITOR, "Edición de contenido", "Creación de textos y secciones"),
    (Step.PHOTOS_UPLOAD, "Carga de imágenes", "Subida y optimización de fotos"),
    (Step.REVIEW_LAUNCH, "Revisión y lanzamiento", "Pruebas finales y publicación"),
]

MILESTONE_SPACING_DAYS = 5
ESTIMATED_DELIVERY_DAYS = 30

ACTIVE_STATUSES = (Status.PENDING, Status.PROCESSING)


def calculate_progress(status: str, setup_step: str) -> int:
    """Percentage shown in the client dashboard for an order."""
    if status == Status.CANCELLED:
        return 0
    if status == Status.COMPLETED and setup_step == Step.COMPLETED:
        return 100
    return STEP_PROGRESS.get(setup_step, 0)


def project_status(status: str, setup_step: str) -> str:
    """Coarse project phase label derived from status and setup step."""
    if status == Status.CANCELLED:
        return "cancelled"
    if status == Status.COMPLETED and setup_step == Step.COMPLETED:
        return "live"
    if status == Status.COMPLETED:
        return "completed"
    if status == Status.PROCESSING:
        if setup_step in (Step.DOMAIN_SELECTION, Step.BUSINESS_INFO):
            return "planning"
        if setup_step == Step.DESIGN_PREFERENCES:
            return "design"
        if setup_step == Step.REVIEW_LAUNCH:
            return "testing"
        return "development"
    return "planning"


def estimated_completion(order: Order):
    return order.created_at + timedelta(days=ESTIMATED_DELIVERY_DAYS)


def milestones(order: Order) -> list:
    """Milestone list for the project view; CONTENT_UPLOAD counts as content editing."""
    step = Step.CONTENT_EDITOR if order.setup_step == Step.CONTENT_UPLOAD else order.setup_step
    if step == Step.COMPLETED:
        current = len(MILESTONES)
    else:
        current = next((i for i, m in enumerate(MILESTONES) if m[0] == step), -1)

    out = []
    for index, (milestone_step, title, description) in enumerate(MILESTONES):
        if current >= 0 and index < current:
            state = "completed"
            completed_at = order.created_at + timedelta(days=index * MILESTONE_SPACING_DAYS)
        elif index == current:
            state = "in_progress"
            completed_at = None
        else:
            state = "pending"
            completed_at = None
        out.append(
            {
                "id": f"milestone-{order.id}-{index}",
                "step": milestone_step,
                "title": title,
                "description": description,
                "status": state,
                "dueDate": order.created_at + timedelta(days=(index + 1) * MILESTONE_SPACING_DAYS),
                "completedAt": completed_at,
                "order": index + 1,
            }
        )
    return out


def advance_domain(order: Order, domain: str, extension: str, price, user_price) -> Order:
    """Store the chosen domain and move the wizard to BUSINESS_INFO.

    Availability is not re-checked here; the domain check endpoint is advisory.
    """
    order.domain = domain
    order.domain_extension = extension
    order.domain_price = Decimal(str(price))
    order.domain_user_price = Decimal(str(user_price))
    order.setup_step = Step.BUSINESS_INFO
    order.save(
        update_fields=[
            "domain",
            "domain_extension",
            "domain_price",
            "domain_user_price",
            "setup_step",
            "updated_at",
        ]
    )
    return order


def advance_content(order: Order, about_text=None, services=None, photo_count=None):
    """Store the content step and move the wizard to CONTENT_UPLOAD.

    Returns `(order, content_data, stored_photo_count)` where the last value is
    the number of photos actually uploaded for the order.
    """
    content, _ = SiteContent.objects.update_or_create(
        order=order,
        defaults={
            "about_text": about_text or "",
            "services": list(services or []),
            "photo_count": int(photo_count or 0),
        },
    )
    order.setup_step = Step.CONTENT_UPLOAD
    order.save(update_fields=["setup_step", "updated_at"])

    content_data = {
        "aboutText": content.about_text,
        "services": content.services,
        "photoCount": content.photo_count,
        "updatedAt": content.updated_at.isoformat(),
    }
    return order, content_data, Photo.objects.filter(order=order).count()


def current_order_for(user_id):
    """Most recent unfinished order of a user.

    Returns `(order, has_completed_orders)`; `order` is None when the user has
    nothing in PENDING/PROCESSING with the setup still open.
    """
    order = (
        Order.objects.select_related("template")
        .filter(user_id=user_id, status__in=ACTIVE_STATUSES, setup_completed=False)
        .order_by("-created_at")
        .first()
    )
    if order is not None:
        return order, False
    has_completed = Order.objects.filter(user_id=user_id, status=Status.COMPLETED).exists()
    return None, has_completed


def override_status(order: Order, new_status: str, actor=None) -> Order:
    """Back-office status change.

    Moving to COMPLETED stamps `completed_at` and `setup_completed` unless the
    order was already stamped; moving away from COMPLETED clears
    `completed_at`. `setup_step` is left untouched.
    """
    previous = order.status
    fields = ["status", "updated_at"]
    order.status = new_status

    if new_status == Status.COMPLETED and order.completed_at is None:
        order.completed_at = timezone.now()
        order.setup_completed = True
        fields += ["completed_at", "setup_completed"]

    if previous == Status.COMPLETED and new_status != Status.COMPLETED:
        order.completed_at = None
        fields.append("completed_at")

    order.save(update_fields=fields)
    logger.info(
        "Order %s status updated from %s to %s by %s",
        order.pk,
        previous,
        new_status,
        getattr(actor, "email", None) or "system",
    )
    return order
