"""
Auth module: request principals, the get_current_user FastAPI dependency and
the pregnancy access checks every handler goes through.

Each role is a Principal subclass answering the same questions (may this
identity touch pregnancy N? which pregnancy does an unscoped read target?
who authored a clinical record?), so handlers never branch on role strings.
"""

import logging
from typing import Optional

from fastapi import Depends, Request

from passport.exceptions import AuthenticationError, AuthorizationError, NotFoundError
from passport.models import Pregnancy, User
from passport.params import parse_id
from passport.repositories import Repository, get_repository
from passport.services.identity_service import IdentityVerifier, get_identity_verifier, resolve_user

audit = logging.getLogger("passport.audit")


class Principal:
    """Resolved identity attached to each request."""
    role = ""
    is_clinician = False

    def __init__(self, user: User):
        self.user = user

    @property
    def id(self) -> int:
        return self.user.id

    @property
    def authoring_clinician_id(self) -> Optional[int]:
        """Value stamped into clinician_id on records this identity creates."""
        return None

    async def can_access_pregnancy(self, repo: Repository, pregnancy_id: int) -> bool:
        raise NotImplementedError

    async def scoped_pregnancy_id(self, repo: Repository, requested: Optional[str]) -> int:
        """Pregnancy targeted by a list request, given the raw query value."""
        raise NotImplementedError

    async def pregnancy_for_read(self, repo: Repository, requested_patient: Optional[str]) -> Optional[Pregnancy]:
        """Pregnancy returned by GET /api/pregnancy, given the raw patientId value."""
        raise NotImplementedError


class PatientPrincipal(Principal):
    role = "patient"

    async def own_pregnancy(self, repo: Repository) -> Optional[Pregnancy]:
        return await repo.get_pregnancy_by_patient_id(self.id)

    async def can_access_pregnancy(self, repo: Repository, pregnancy_id: int) -> bool:
        own = await self.own_pregnancy(repo)
        return own is not None and own.id == pregnancy_id

    async def scoped_pregnancy_id(self, repo: Repository, requested: Optional[str]) -> int:
        # A patient's own record is the only scope; any supplied id is ignored
        own = await self.own_pregnancy(repo)
        if own is None:
            raise NotFoundError("No pregnancy record found")
        return own.id

    async def pregnancy_for_read(self, repo: Repository, requested_patient: Optional[str]) -> Optional[Pregnancy]:
        return await self.own_pregnancy(repo)


class ClinicianPrincipal(Principal):
    role = "clinician"
    is_clinician = True

    @property
    def authoring_clinician_id(self) -> Optional[int]:
        return self.id

    async def can_access_pregnancy(self, repo: Repository, pregnancy_id: int) -> bool:
        # Single-clinic trust model: every clinician sees every patient.
        # An assigned-patient restriction would be enforced here.
        return True

    async def scoped_pregnancy_id(self, repo: Repository, requested: Optional[str]) -> int:
        return parse_id(requested, "pregnancyId")

    async def pregnancy_for_read(self, repo: Repository, requested_patient: Optional[str]) -> Optional[Pregnancy]:
        return await repo.get_pregnancy_by_patient_id(parse_id(requested_patient, "patientId"))


class AdminPrincipal(ClinicianPrincipal):
    role = "admin"


PRINCIPALS = {cls.role: cls for cls in (PatientPrincipal, ClinicianPrincipal, AdminPrincipal)}


def principal_for(user: User) -> Principal:
    # Unknown roles get the most restricted principal
    return PRINCIPALS.get(user.role, PatientPrincipal)(user)


def get_bearer_token(request: Request) -> str:
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer ") or not auth_header[7:].strip():
        raise AuthenticationError("Not authenticated")
    return auth_header[7:].strip()


async def get_current_user(
    request: Request,
    repo: Repository = Depends(get_repository),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> Principal:
    """
    FastAPI dependency. Verifies the bearer token with the identity provider
    and resolves (or provisions) the matching User. Raises 401 on any failure.
    """
    token = get_bearer_token(request)
    claims = await verifier.verify(token)
    user = await resolve_user(repo, claims)
    return principal_for(user)


async def require_clinician(current_user: Principal = Depends(get_current_user)) -> Principal:
    if not current_user.is_clinician:
        audit.info("Denied clinician-only access to user=%s", current_user.id)
        raise AuthorizationError("Clinician access only")
    return current_user


async def authorize_pregnancy(principal: Principal, repo: Repository, pregnancy_id: int) -> Pregnancy:
    """Gate a write naming `pregnancy_id`. Runs before any insert."""
    if not await principal.can_access_pregnancy(repo, pregnancy_id):
        audit.warning("Denied user=%s write to pregnancy=%s", principal.id, pregnancy_id)
        raise AuthorizationError("You don't have access to this pregnancy")
    pregnancy = await repo.get_pregnancy(pregnancy_id)
    if pregnancy is None:
        raise NotFoundError("Pregnancy not found")
    return pregnancy


async def load_visible(principal: Principal, repo: Repository, model, record_id: int, label: str):
    """
    Fetch a pregnancy-scoped row by id. Rows the caller may not see produce
    the same 404 as rows that do not exist.
    """
    record = await repo.get(model, record_id)
    if record is None or not await principal.can_access_pregnancy(repo, record.pregnancy_id):
        raise NotFoundError(f"{label} not found")
    return record
