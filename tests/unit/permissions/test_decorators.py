"""Unit tests for permission decorators."""

import pytest

from gymdesk.core.errors import ForbiddenError
from gymdesk.core.permissions.catalog import Capability
from gymdesk.core.permissions.checker import AccessControl
from gymdesk.core.permissions.decorators import (
    require_all_permissions,
    require_any_permission,
    require_permission,
    require_role,
)


pytestmark = pytest.mark.unit


@require_permission(Capability.SEND_SMS)
async def send_bulk_sms(message: str, *, access: AccessControl) -> str:
    return f"sent: {message}"


@require_any_permission([Capability.VIEW_REPORTS, Capability.VIEW_ANALYTICS])
async def open_reports(*, access: AccessControl) -> str:
    return "reports"


@require_all_permissions([Capability.VIEW_PAYMENTS, Capability.MANAGE_PAYMENTS])
async def refund(*, access: AccessControl) -> str:
    return "refunded"


@require_role("admin")
async def reset_system(*, access: AccessControl) -> str:
    return "reset"


class TestRequirePermission:
    """Tests for @require_permission."""

    async def test_allows(self, signed_in, trainer):
        access = await signed_in(trainer)

        assert await send_bulk_sms("hi", access=access) == "sent: hi"

    async def test_denies(self, signed_in, member):
        access = await signed_in(member)

        with pytest.raises(ForbiddenError) as exc_info:
            await send_bulk_sms("hi", access=access)

        assert exc_info.value.details == {"required": ["can_send_sms"]}

    async def test_missing_access_kwarg(self):
        with pytest.raises(ForbiddenError) as exc_info:
            await send_bulk_sms("hi", access=None)

        assert exc_info.value.error_code == "access_context_missing"

    def test_preserves_metadata(self):
        assert send_bulk_sms.__name__ == "send_bulk_sms"


class TestOtherDecorators:
    """Tests for the any/all/role decorators."""

    async def test_any(self, signed_in, trainer, member):
        assert await open_reports(access=await signed_in(trainer)) == "reports"
        with pytest.raises(ForbiddenError):
            await open_reports(access=await signed_in(member))

    async def test_all(self, signed_in, admin, trainer):
        assert await refund(access=await signed_in(admin)) == "refunded"
        with pytest.raises(ForbiddenError):
            await refund(access=await signed_in(trainer))

    async def test_role(self, signed_in, admin, trainer):
        assert await reset_system(access=await signed_in(admin)) == "reset"
        with pytest.raises(ForbiddenError) as exc_info:
            await reset_system(access=await signed_in(trainer))

        assert exc_info.value.details == {"required": ["role:admin"]}

    async def test_signed_out_denied(self, signed_in):
        with pytest.raises(ForbiddenError):
            await open_reports(access=await signed_in(None))
