"""SendGrid email delivery (API v3 HTTP)."""
from __future__ import annotations

import logging

import requests

from backend.app.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def build_payload(to: str, subject: str, html_body: str, settings: Settings) -> dict:
    return {
        "personalizations": [{"to": [{"email": to}]}],
        "from": {"email": settings.SENDGRID_FROM_EMAIL, "name": settings.SENDGRID_FROM_NAME},
        "subject": subject,
        "content": [{"type": "text/html", "value": html_body}],
    }


def send_email(
    to: str,
    subject: str,
    html_body: str,
    *,
    settings: Settings | None = None,
) -> bool:
    """
    Envoie un email HTML à un destinataire.

    Retourne True si SendGrid a accepté le message (2xx), False sinon.
    Ne lève jamais d'exception pour un problème de transport :
    - clé API absente => email journalisé, non envoyé
    - statut non 2xx ou erreur réseau => journalisé
    """
    settings = settings or default_settings

    if not settings.SENDGRID_API_KEY:
        logger.warning("[EMAIL] SendGrid API key non configurée. Email non envoyé à %s. Sujet: %s", to, subject)
        logger.info("[EMAIL] Contenu: %s", html_body)
        return False

    try:
        response = requests.post(
            settings.SENDGRID_API_URL,
            json=build_payload(to, subject, html_body, settings),
            headers={"Authorization": f"Bearer {settings.SENDGRID_API_KEY}"},
            timeout=settings.SENDGRID_TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        logger.error("[EMAIL] Erreur réseau lors de l'envoi à %s: %s", to, exc)
        return False

    if 200 <= response.status_code < 300:
        logger.info("[EMAIL] Envoyé à %s. Status: %s", to, response.status_code)
        return True

    logger.error(
        "[EMAIL] Échec de l'envoi à %s. Status: %s, Body: %s",
        to,
        response.status_code,
        response.text,
    )
    return False
