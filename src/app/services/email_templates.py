"""
Email Templates

HTML bodies for outbound mail. Links are the only secret-bearing content.
"""

from typing import Tuple

from src.domain.entities import MagicLinkIntent

_BUTTON_STYLE = (
    "background-color: #007cba; color: white; padding: 12px 24px; "
    "text-decoration: none; border-radius: 4px; display: inline-block;"
)


def invitation_email(tenant_name: str, inviter_name: str, role: str, accept_url: str) -> Tuple[str, str]:
    subject = f"You've been invited to join {tenant_name}"
    body = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <h2>Join {tenant_name}</h2>
          <p>{inviter_name} invited you to join {tenant_name} as {role}.</p>
          <p><a href="{accept_url}" style="{_BUTTON_STYLE}">Accept Invitation</a></p>
          <p style="color: #666; font-size: 14px;">
            This invitation expires in 7 days. If you weren't expecting it, you can ignore this email.
          </p>
        </div>
    """
    return subject, body


def magic_link_email(intent: MagicLinkIntent, link_url: str, ttl_minutes: int) -> Tuple[str, str]:
    if intent == MagicLinkIntent.SIGNUP:
        subject, action, button = "Complete your account setup", "complete your registration", "Complete Registration"
    elif intent == MagicLinkIntent.INVITE:
        subject, action, button = "You've been invited to join", "accept your invitation", "Continue"
    else:
        subject, action, button = "Sign in to your account", "sign in", "Sign In"

    body = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <h2>Magic Link Authentication</h2>
          <p>Click the link below to {action}:</p>
          <p><a href="{link_url}" style="{_BUTTON_STYLE}">{button}</a></p>
          <p style="color: #666; font-size: 14px;">
            This link will expire in {ttl_minutes} minutes. If you didn't request this, please ignore this email.
          </p>
        </div>
    """
    return subject, body
