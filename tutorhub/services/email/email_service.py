# Fichier: tutorhub/services/email/email_service.py
import logging

import resend

from tutorhub.core.config import settings
from tutorhub.models.user.user_model import User

logger = logging.getLogger(__name__)

RESET_SUBJECT = "Réinitialisation de votre mot de passe TutorHub"


def render_reset(url: str) -> tuple[str, str]:
    body = f"""
  <p>Vous avez demandé à réinitialiser votre mot de passe.</p>
  <p><a href="{url}" style="display:inline-block;padding:10px 16px;border-radius:8px;background:#2563eb;color:#fff;text-decoration:none">Choisir un nouveau mot de passe</a></p>
  <p style="color:#6b7280;font-size:12px">Le lien expire dans {settings.PASSWORD_RESET_TOKEN_EXPIRE_MINUTES} minutes. Si vous n'êtes pas à l'origine de la demande, ignorez cet email.</p>
  """
    return RESET_SUBJECT, body


def send_email(to: str, subject: str, html: str) -> bool:
    if not settings.RESEND_API_KEY or not settings.EMAIL_FROM:
        logger.warning("Envoi d'email désactivé (RESEND_API_KEY / EMAIL_FROM manquants): '%s' non envoyé.", subject)
        return False

    resend.api_key = settings.RESEND_API_KEY
    response = resend.Emails.send({
        "from": settings.EMAIL_FROM,
        "to": [to],
        "subject": subject,
        "html": html,
    })
    logger.info("Resend → email '%s' envoyé (id=%s)", subject, (response or {}).get("id"))
    return True


def build_reset_url(token: str) -> str:
    base = str(settings.FRONTEND_BASE_URL or "").rstrip("/")
    return f"{base}/reset-password?token={token}"


def send_reset_email(user: User, token: str) -> bool:
    subject, html = render_reset(build_reset_url(token))
    return send_email(user.email, subject, html)
