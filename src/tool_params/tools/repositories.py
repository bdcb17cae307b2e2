"""
Data-fetch collaborators used by the reference tools.

Implementations query the backing store (or its HTTP API) and honor
``offset`` / ``limit`` as a page cursor. They signal failures by raising
:class:`~tool_params.exceptions.ResourceNotFoundError`,
:class:`~tool_params.exceptions.UnauthorizedError`,
:class:`~tool_params.exceptions.UpstreamServiceError` or ``httpx.HTTPStatusError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tool_params.schemas.common import ExecutionResult
    from tool_params.schemas.records import ApplicationSummary, AttackSummary, VulnerabilitySummary
    from tool_params.tools.attacks import AttackFilterParams
    from tool_params.tools.vulnerabilities import VulnerabilitySearchParams


class AttackRepository(Protocol):
    def search_attacks(
        self, filters: AttackFilterParams, offset: int, limit: int
    ) -> ExecutionResult[AttackSummary]: ...


class VulnerabilityRepository(Protocol):
    def search_vulnerabilities(
        self, filters: VulnerabilitySearchParams, offset: int, limit: int
    ) -> ExecutionResult[VulnerabilitySummary]:
        """
        Metadata filters arrive unresolved: mapping their field names to the
        application's field identifiers is the repository's job.
        """
        ...


class ApplicationRepository(Protocol):
    def list_applications(self) -> list[ApplicationSummary]: ...

    def get_application(self, app_id: str) -> ApplicationSummary | None: ...
