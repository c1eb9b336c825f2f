"""
Product ledger endpoints.

Registration, verification, custody history, transfer, counterfeit
reporting and QR rendering.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from src.api.dependencies import (
    get_caller,
    get_generator,
    get_ledger,
    get_queries,
    get_register_product_use_case,
    get_report_counterfeit_use_case,
    get_transfer_ownership_use_case,
    get_verify_product_use_case,
)
from src.application.dto.requests import (
    RegisterProductRequest,
    ReportCounterfeitRequest,
    ScanVerifyRequest,
    TransferOwnershipRequest,
)
from src.application.dto.responses import (
    CounterfeitReportResponse,
    CustodyEventResponse,
    ErrorResponse,
    GeneratedIdentifierResponse,
    HistoryResponse,
    ProductListResponse,
    ProductResponse,
    TransferResponse,
    VerificationResponse,
)
from src.application.use_cases import (
    RegisterProductUseCase,
    ReportCounterfeitUseCase,
    TransferOwnershipUseCase,
    VerifyProductUseCase,
)
from src.core.entities.identity import Caller
from src.core.services import IdentifierGenerator, LedgerQueryService, ProductLedger
from src.infrastructure.qr import render_qr_png

router = APIRouter(prefix="/api/products", tags=["products"])


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def register_product(
    request: RegisterProductRequest,
    caller: Caller = Depends(get_caller),
    use_case: RegisterProductUseCase = Depends(get_register_product_use_case),
) -> ProductResponse:
    """
    Register a product.

    Manufacturers only. The identifier is generated when not supplied.
    """
    product = await use_case.execute(caller, request)
    return use_case.to_response(product)


@router.get("", response_model=ProductListResponse)
async def list_products(
    owner: str | None = None,
    manufacturer: str | None = None,
    queries: LedgerQueryService = Depends(get_queries),
) -> ProductListResponse:
    """List products by current owner, by manufacturer, or all."""
    if owner:
        products = await queries.by_owner(owner)
    elif manufacturer:
        products = await queries.by_manufacturer(manufacturer)
    else:
        products = await queries.all_products()

    return ProductListResponse(
        products=[ProductResponse.from_entity(p) for p in products],
        total=len(products),
    )


@router.post("/identifiers", response_model=GeneratedIdentifierResponse)
async def generate_identifier(
    manufacturer: str | None = None,
    generator: IdentifierGenerator = Depends(get_generator),
) -> GeneratedIdentifierResponse:
    """Issue a fresh identifier and its QR payload without registering it."""
    identifier = generator.generate()
    return GeneratedIdentifierResponse(
        identifier=identifier,
        qr_payload=generator.qr_payload(identifier, manufacturer=manufacturer),
    )


@router.get("/verify/{identifier}", response_model=VerificationResponse)
async def verify_product(
    identifier: str,
    use_case: VerifyProductUseCase = Depends(get_verify_product_use_case),
) -> VerificationResponse:
    """
    Verify an identifier.

    Always 200: unregistered identifiers are a verification outcome.
    """
    outcome = await use_case.execute(identifier)
    return use_case.to_response(outcome)


@router.post(
    "/verify/scan",
    response_model=VerificationResponse,
    responses={400: {"model": ErrorResponse}},
)
async def verify_scan(
    request: ScanVerifyRequest,
    use_case: VerifyProductUseCase = Depends(get_verify_product_use_case),
) -> VerificationResponse:
    """Verify decoded QR content (bare identifier or JSON payload)."""
    outcome = await use_case.execute_scan(request.payload)
    return use_case.to_response(outcome)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: int,
    ledger: ProductLedger = Depends(get_ledger),
) -> ProductResponse:
    """Get a product by ledger ID."""
    product = await ledger.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product not found: {product_id}")
    return ProductResponse.from_entity(product)


@router.get("/{product_id}/history", response_model=HistoryResponse)
async def get_history(
    product_id: int,
    ledger: ProductLedger = Depends(get_ledger),
) -> HistoryResponse:
    """Custody history, oldest first. Empty for unknown products."""
    events = await ledger.get_history(product_id)
    return HistoryResponse(
        product_id=product_id,
        events=[CustodyEventResponse.from_entity(e) for e in events],
        total=len(events),
    )


@router.post(
    "/{product_id}/transfer",
    response_model=TransferResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse, "description": "Caller is not the current owner"},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse, "description": "Product is flagged"},
    },
)
async def transfer_ownership(
    product_id: int,
    request: TransferOwnershipRequest,
    caller: Caller = Depends(get_caller),
    use_case: TransferOwnershipUseCase = Depends(get_transfer_ownership_use_case),
) -> TransferResponse:
    """Transfer custody to a new owner."""
    result = await use_case.execute(caller, product_id, request)
    return use_case.to_response(result)


@router.post(
    "/{product_id}/report",
    response_model=CounterfeitReportResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def report_counterfeit(
    product_id: int,
    request: ReportCounterfeitRequest,
    caller: Caller = Depends(get_caller),
    use_case: ReportCounterfeitUseCase = Depends(get_report_counterfeit_use_case),
) -> CounterfeitReportResponse:
    """Report a product as counterfeit. Any role may report."""
    report = await use_case.execute(caller, product_id, request)
    return use_case.to_response(report)


@router.get(
    "/{identifier}/qr",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}},
        404: {"model": ErrorResponse},
    },
)
async def get_qr_code(
    identifier: str,
    ledger: ProductLedger = Depends(get_ledger),
) -> Response:
    """Render the QR code of a registered product as PNG."""
    result = await ledger.verify(identifier)
    if result.product is None:
        raise HTTPException(status_code=404, detail=f"Product not found: {result.identifier}")

    payload = ledger.generator.qr_payload(
        result.product.identifier,
        manufacturer=result.product.manufacturer_name,
        product_id=result.product.product_id,
    )
    return Response(content=render_qr_png(payload), media_type="image/png")
