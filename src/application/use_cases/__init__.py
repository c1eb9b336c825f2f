"""Application use cases."""

from src.application.use_cases.bind_identity import BindIdentityUseCase
from src.application.use_cases.export_compliance import ExportComplianceUseCase, export_filename
from src.application.use_cases.register_product import RegisterProductUseCase
from src.application.use_cases.report_counterfeit import ReportCounterfeitUseCase
from src.application.use_cases.transfer_ownership import TransferOwnershipUseCase
from src.application.use_cases.verify_product import (
    VERIFICATION_MESSAGES,
    VerificationOutcome,
    VerifyProductUseCase,
)

__all__ = [
    "RegisterProductUseCase",
    "VerifyProductUseCase",
    "VerificationOutcome",
    "VERIFICATION_MESSAGES",
    "TransferOwnershipUseCase",
    "ReportCounterfeitUseCase",
    "ExportComplianceUseCase",
    "export_filename",
    "BindIdentityUseCase",
]
