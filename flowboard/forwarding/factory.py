from flowboard.config.settings import Settings
from flowboard.forwarding.base import BaseAutomationClient
from flowboard.forwarding.webhook_client import WebhookClient


class AutomationClientFactory:
    """Creates the automation client, or None when no endpoint is configured."""

    @classmethod
    def create(cls, settings: Settings) -> BaseAutomationClient | None:
        url = settings.automation_webhook_url.strip()
        if not url:
            return None
        return WebhookClient(url=url, timeout_seconds=settings.io_timeout_seconds)
