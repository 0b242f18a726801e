from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..domain.clock import Clock, system_clock
from ..domain.constants import RegisteredClaim
from ..domain.entities import IssueRequest
from ..domain.value_objects import IssuerContext


@dataclass(slots=True)
class DefaultPayload:
    """
    Default-payload hook used by `TokenIssuer` when no other callback is
    configured.

    Sets `nbf` to now, `sub` to the application name and `iss` to the host
    info (when the context provides them) and, if the request has no `exp`
    yet and a lifespan is given, `exp` to now + lifespan.
    """

    context: IssuerContext = field(default_factory=IssuerContext)
    clock: Clock = system_clock

    def __call__(
            self,
            issue_request: IssueRequest,
            default_lifespan_seconds: Optional[int] = None,
    ) -> IssueRequest:
        now = self.clock()
        issue_request.set_not_before(now)

        if self.context.application_name:
            issue_request.set_subject(self.context.application_name)
        if self.context.host_info:
            issue_request.set_issuer(self.context.host_info)

        if (
                default_lifespan_seconds is not None
                and not issue_request.has_payload_entry(RegisteredClaim.EXPIRES_AT)
        ):
            issue_request.set_expires_at(now + default_lifespan_seconds)

        return issue_request
