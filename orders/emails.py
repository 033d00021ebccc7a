"""Order confirmation email."""

from django.conf import settings

from common.mail import build_email, send_with_retry


def _euros(value) -> str:
    return f"{value or 0:.2f} €"


def order_confirmation_email(order):
    domain = f"{order.domain}{order.domain_extension}" if order.domain else "pendiente"
    template_name = order.template.name if order.template_id else "Plantilla personalizada"
    lines = [
        f"Hola {order.owner_name or order.salon_name},",
        "",
        f"Hemos recibido tu pedido para {order.salon_name}.",
        "",
        f"Pedido: {order.id}",
        f"Plantilla: {template_name}",
        f"Dominio: {domain}",
        f"Total: {_euros(order.total)}",
        "",
        "Te avisaremos en cuanto tu web esté lista.",
        "",
        "El equipo de PeluqueriasPRO",
    ]
    html = (
        f"<h1>¡Gracias por tu pedido, {order.salon_name}!</h1>"
        f"<p><strong>Pedido:</strong> {order.id}<br>"
        f"<strong>Plantilla:</strong> {template_name}<br>"
        f"<strong>Dominio:</strong> {domain}<br>"
        f"<strong>Total:</strong> {_euros(order.total)}</p>"
    )
    return build_email(
        subject=f"Confirmación de pedido - {order.salon_name}",
        to=[order.email],
        text_body="\n".join(lines),
        html_body=html,
        bcc=[settings.ADMIN_EMAIL] if settings.ADMIN_EMAIL else None,
    )


def send_order_confirmation(order, sleep=None):
    """Send the confirmation with the standard retry policy."""
    message = order_confirmation_email(order)
    if sleep is None:
        return send_with_retry(message.send)
    return send_with_retry(message.send, sleep=sleep)
