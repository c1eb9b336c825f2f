"""Tests for BindIdentityUseCase."""

import pytest

from src.application.dto import BindIdentityRequest
from src.application.use_cases import BindIdentityUseCase
from src.core.entities import Caller, CallerRole
from src.core.services import IdentityBindingService


@pytest.fixture
def use_case(memory_store) -> BindIdentityUseCase:
    return BindIdentityUseCase(bindings=IdentityBindingService(memory_store))


class TestBindIdentityUseCase:
    async def test_binds_calling_identity(self, use_case):
        caller = Caller(caller_id="auth|dana", role=CallerRole.DISTRIBUTOR)

        binding = await use_case.execute(caller, BindIdentityRequest(custodian="0xdana"))

        assert binding.caller_id == "auth|dana"
        assert binding.role == CallerRole.DISTRIBUTOR
        response = use_case.to_response(binding)
        assert response.role == "distributor"
        assert response.custodian == "0xdana"

    async def test_history_with_current_custodian(self, use_case):
        caller = Caller(caller_id="auth|dana", role=CallerRole.DISTRIBUTOR)
        await use_case.execute(caller, BindIdentityRequest(custodian="0xold"))
        await use_case.execute(caller, BindIdentityRequest(custodian="0xnew"))

        history = await use_case.history("auth|dana")

        assert history.current_custodian == "0xnew"
        assert [b.custodian for b in history.bindings] == ["0xold", "0xnew"]

    async def test_history_of_unbound_caller(self, use_case):
        history = await use_case.history("0xwallet")

        assert history.current_custodian == "0xwallet"
        assert history.bindings == []
