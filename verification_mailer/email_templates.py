"""
MJML Email Templates
"""

import html

from .config import VERIFICATION_CODE_TTL_MINUTES

THEME = {
    "primary": "#6366f1",
    "primary_dark": "#4f46e5",
    "background": "#f8fafc",
    "text_primary": "#1e293b",
    "text_secondary": "#475569",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
    "footer": "#94a3b8",
}

SUPPORT_EMAIL = "support@quickaccounting.com"
SUPPORT_PHONE = "+91 22 4567 8900"


def verification_code_template(code: str) -> str:
    """Sign-in verification code MJML template"""
    code = html.escape(str(code), quote=True)
    return f"""
    <mjml>
      <mj-head>
        <mj-title>Verify Your Identity</mj-title>
        <mj-preview>Your Quick Accounting verification code is {code}</mj-preview>
        <mj-attributes>
          <mj-all font-family="Inter, Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section padding="30px 20px 10px 20px">
          <mj-column>
            <mj-text align="center" font-size="28px" font-weight="700" color="{THEME['text_primary']}" padding="0">
              Quick
            </mj-text>
            <mj-text align="center" color="{THEME['text_muted']}" padding="4px 0 0 0">
              Accounting Service
            </mj-text>
          </mj-column>
        </mj-section>

        <mj-section background-color="#ffffff" border="1px solid {THEME['border']}" border-radius="8px" padding="30px">
          <mj-column>
            <mj-text font-size="22px" font-weight="600" color="{THEME['text_primary']}" padding="0 0 12px 0">
              Verify Your Identity
            </mj-text>
            <mj-text>
              You're signing in to your Quick Accounting Service account. Use the verification code below to complete your login:
            </mj-text>
          </mj-column>
        </mj-section>

        <mj-section background-color="{THEME['primary']}" border-radius="8px" padding="20px">
          <mj-column>
            <mj-text align="center" font-size="12px" color="#ffffff" text-transform="uppercase" letter-spacing="2px" padding="0 0 10px 0">
              Your Verification Code
            </mj-text>
            <mj-text align="center" font-size="40px" font-weight="700" color="#ffffff" letter-spacing="10px" padding="0">
              {code}
            </mj-text>
          </mj-column>
        </mj-section>

        <mj-section background-color="#ffffff" padding="20px 30px">
          <mj-column>
            <mj-text font-size="14px" color="{THEME['text_muted']}">
              This code expires in <strong>{VERIFICATION_CODE_TTL_MINUTES} minutes</strong>.
            </mj-text>
            <mj-text font-size="14px" color="{THEME['text_muted']}">
              If you didn't request this code, please ignore this email. Your account is secure.
            </mj-text>
          </mj-column>
        </mj-section>

        <mj-section padding="20px">
          <mj-column>
            <mj-text align="center" font-size="12px" color="{THEME['footer']}">
              Quick Accounting Service. All Rights Reserved.
            </mj-text>
            <mj-text align="center" font-size="12px" color="{THEME['footer']}" padding="0">
              {SUPPORT_EMAIL} | {SUPPORT_PHONE}
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """
