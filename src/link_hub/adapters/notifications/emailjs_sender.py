"""EmailJS delivery adapter."""

import httpx

from link_hub.core import SendResult, SuggestionSender

EMAILJS_SEND_URL = "https://api.emailjs.com/api/v1.0/email/send"


class EmailJSSender(SuggestionSender):
    """Send template emails through the EmailJS REST API."""

    def __init__(
        self,
        service_id: str,
        public_key: str,
        api_url: str = EMAILJS_SEND_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize EmailJS sender.

        Args:
            service_id: EmailJS service identifier
            public_key: EmailJS public key (sent as user_id)
            api_url: Send endpoint, overridable for testing
            timeout: Request timeout in seconds
        """
        self.service_id = service_id
        self.public_key = public_key
        self.api_url = api_url
        self.timeout = timeout

    async def send(self, template_id: str, params: dict[str, str]) -> SendResult:
        """Send template parameters to EmailJS.

        Args:
            template_id: EmailJS template to render
            params: Template variables

        Returns:
            SendResult with type "api" or "network" on failure
        """
        payload = {
            "service_id": self.service_id,
            "template_id": template_id,
            "user_id": self.public_key,
            "template_params": params,
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(self.api_url, json=payload)
            except httpx.HTTPError as e:
                print(f"⚠️  EmailJS request failed: {e}")
                return SendResult(
                    success=False,
                    error="Failed to send event suggestion. Please check your connection and try again.",
                    type="network",
                )

        if response.status_code != 200:
            print(f"⚠️  EmailJS API error: {response.status_code} {response.text}")
            return SendResult(
                success=False,
                error="Unable to send event suggestion. Please try again later.",
                type="api",
            )

        return SendResult(success=True, message_id=response.text or "sent")
