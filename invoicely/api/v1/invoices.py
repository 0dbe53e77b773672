"""Invoice endpoints. Every route passes through the trial gate."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from invoicely.api.v1._authz import gated_account
from invoicely.core.dependencies import Services, get_services
from invoicely.models import Account
from invoicely.schemas.invoices import InvoiceCreateRequest, InvoiceResponse, InvoiceSentResponse
from invoicely.services.invoice_service import ItemInput

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("", response_model=list[InvoiceResponse])
def list_invoices(
    account: Account = Depends(gated_account),
    services: Services = Depends(get_services),
) -> list[InvoiceResponse]:
    invoices = services.invoices.list_invoices(account.email)
    return [InvoiceResponse.model_validate(invoice) for invoice in invoices]


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
def create_invoice(
    payload: InvoiceCreateRequest,
    account: Account = Depends(gated_account),
    services: Services = Depends(get_services),
) -> InvoiceResponse:
    invoice = services.invoices.create_invoice(
        owner=account.email,
        customer=payload.customer,
        customer_email=payload.customer_email,
        items=[
            ItemInput(description=item.description, quantity=item.quantity, unit_price=item.unit_price)
            for item in payload.items
        ],
        notes=payload.notes,
        requested_status=payload.status,
    )
    return InvoiceResponse.model_validate(invoice)


@router.get("/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(
    invoice_id: str,
    account: Account = Depends(gated_account),
    services: Services = Depends(get_services),
) -> InvoiceResponse:
    return InvoiceResponse.model_validate(services.invoices.get_invoice(invoice_id, account.email))


@router.post("/{invoice_id}/send", response_model=InvoiceSentResponse)
def send_invoice(
    invoice_id: str,
    account: Account = Depends(gated_account),
    services: Services = Depends(get_services),
) -> InvoiceSentResponse:
    invoice = services.invoices.send_invoice(invoice_id, account.email)
    return InvoiceSentResponse(invoice=InvoiceResponse.model_validate(invoice))
