"""Client notifications derived from order activity.

Notifications are not stored. The feed is rebuilt on every request from the
caller's most recently updated orders, plus a welcome notice for accounts
without orders and a hosting reminder while an order is being worked on.
"""

from django.utils import timezone

from .models import Order
from .workflow import calculate_progress

Status = Order.Status
Step = Order.SetupStep

FEED_SIZE = 5

STEP_MESSAGES = {
    Step.DOMAIN_SELECTION: "Estamos configurando tu dominio",
    Step.BUSINESS_INFO: "Procesando la información de tu negocio",
    Step.DESIGN_PREFERENCES: "Trabajando en el diseño personalizado",
    Step.CONTENT_EDITOR: "Añadiendo tu contenido a la web",
    Step.CONTENT_UPLOAD: "Añadiendo tu contenido a la web",
    Step.PHOTOS_UPLOAD: "Optimizando tus imágenes",
    Step.REVIEW_LAUNCH: "Realizando pruebas finales",
    Step.COMPLETED: "Tu web está lista",
}


def _is_live(order: Order) -> bool:
    return order.status == Status.COMPLETED and order.setup_step == Step.COMPLETED


def notification_title(order: Order) -> str:
    if _is_live(order):
        return "Tu web está lista"
    if order.status == Status.PROCESSING:
        return "Proyecto actualizado"
    if order.status == Status.PENDING:
        return "Nuevo proyecto creado"
    return "Actualización de estado"


def notification_message(order: Order) -> str:
    if _is_live(order):
        return f"¡Tu web {order.salon_name} está completamente lista y funcionando!"
    if order.status == Status.PROCESSING:
        progress = calculate_progress(order.status, order.setup_step)
        step = STEP_MESSAGES.get(order.setup_step, "Trabajando en tu proyecto")
        return f"Tu proyecto {order.salon_name} ha avanzado al {progress}%. {step}"
    if order.status == Status.PENDING:
        return (
            f"Hemos recibido tu pedido para {order.salon_name}. "
            "Pronto comenzaremos a trabajar en él."
        )
    return f"El estado de tu proyecto {order.salon_name} ha sido actualizado"


def _action_text(status: str) -> str:
    if status == Status.COMPLETED:
        return "Ver web"
    if status == Status.PROCESSING:
        return "Ver progreso"
    return "Ver detalles"


def order_notification(order: Order, user_id) -> dict:
    return {
        "id": f"notif-{order.id}",
        "userId": user_id,
        "title": notification_title(order),
        "message": notification_message(order),
        "type": "payment" if order.status == Status.PENDING else "project_update",
        "read": False,
        "actionUrl": f"/client/projects/{order.id}" if order.setup_completed else "/client/setup",
        "actionText": _action_text(order.status),
        "createdAt": order.updated_at.isoformat(),
    }


def notifications_for(user, now=None) -> list:
    now = now or timezone.now()
    orders = list(Order.objects.filter(user=user).order_by("-updated_at")[:FEED_SIZE])
    feed = [order_notification(order, user.id) for order in orders]

    if not orders:
        feed.append(
            {
                "id": "welcome-1",
                "userId": user.id,
                "title": "Bienvenido a tu panel de cliente",
                "message": (
                    "Aquí podrás gestionar todos tus proyectos web y seguir su progreso "
                    "en tiempo real"
                ),
                "type": "project_update",
                "read": False,
                "actionUrl": "/client/setup",
                "actionText": "Comenzar proyecto",
                "createdAt": now.isoformat(),
            }
        )

    if any(order.status == Status.PROCESSING for order in orders):
        feed.append(
            {
                "id": "payment-reminder",
                "userId": user.id,
                "title": "Próximo pago mensual",
                "message": (
                    "Tu próximo pago de hosting y mantenimiento se procesará el 1 del "
                    "próximo mes"
                ),
                "type": "payment",
                "read": False,
                "actionUrl": "/client/payments",
                "actionText": "Ver detalles",
                "createdAt": now.isoformat(),
            }
        )
    return feed
