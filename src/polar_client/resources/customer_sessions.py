"""Customer portal sessions."""

from ..models.customers import CustomerSession, CustomerSessionCreate
from ..result import PolarResult
from .base import BaseResource, Payload


class CustomerSessionsResource(BaseResource):
    def create(self, data: Payload, timeout: float | None = None) -> PolarResult[CustomerSession]:
        """Create a session; the returned token authenticates the customer portal."""
        return self._send("POST", "customer-sessions/", data, CustomerSessionCreate, CustomerSession, timeout)

    def introspect(self, token: str, timeout: float | None = None) -> PolarResult[CustomerSession]:
        """Look up the session a customer session token belongs to."""
        if error := self._require(token=token):
            return PolarResult.fail(error)
        return self._post(
            "customer-sessions/introspect",
            CustomerSession,
            json={"token": token},
            timeout=timeout,
        )
