"""Email adapter backed by the Resend API."""

import resend
from resend.exceptions import ResendError

from marketplace.notifications.channel.email_port import EmailPort


class ResendEmailAdapter(EmailPort):
    def __init__(self, api_key: str, sender: str):
        self.api_key = api_key
        self.sender = sender

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        resend.api_key = self.api_key
        params = {
            "from": self.sender,
            "to": [to],
            "subject": subject,
            "text": body,
        }
        if html_body:
            params["html"] = html_body

        try:
            response = resend.Emails.send(params)
        except ResendError as exc:
            return {"message_id": None, "status": "failed", "error": str(exc)}

        return {"message_id": response["id"], "status": "sent"}
