"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List
from mt_gateway.domain.models import Organization, TransactionView, TransactionsView


class OperationRequest(BaseModel):
    """Request body for POST /v1/invoke and POST /v1/query"""

    function: str = Field(..., min_length=1, description="Operation name")
    args: List[str] = Field(default_factory=list, description="Positional arguments, base64 where required")


class ViewSchema(BaseModel):
    """Base for response documents serialized with their camelCase field names"""

    model_config = ConfigDict(populate_by_name=True)


class OrganizationSchema(ViewSchema):
    bic: str = Field(..., alias="BIC")
    account: str = Field(..., alias="Account")

    @classmethod
    def from_domain(cls, org: Organization) -> "OrganizationSchema":
        return cls(bic=org.bic, account=org.account)


class TransferSchema(ViewSchema):
    sender: OrganizationSchema
    receiver: OrganizationSchema
    amount: str
    currency: str


class TransactionStatusSchema(ViewSchema):
    status: str
    comment: str


class AccountStateSchema(ViewSchema):
    amount: str
    currency: str


class DetailsSchema(ViewSchema):
    input_message: str = Field(..., alias="inputMessage")
    output_message: str = Field(..., alias="outputMessage")


class TransactionViewSchema(ViewSchema):
    """Single transaction in an account history"""

    id: str
    transfer: TransferSchema
    time: str
    transaction_status: TransactionStatusSchema = Field(..., alias="transactionStatus")
    account_state: AccountStateSchema = Field(..., alias="accountState")
    details: DetailsSchema

    @classmethod
    def from_domain(cls, view: TransactionView) -> "TransactionViewSchema":
        return cls(
            id=view.id,
            transfer=TransferSchema(
                sender=OrganizationSchema.from_domain(view.transfer.sender),
                receiver=OrganizationSchema.from_domain(view.transfer.receiver),
                amount=view.transfer.amount,
                currency=view.transfer.currency,
            ),
            time=view.time,
            transaction_status=TransactionStatusSchema(status=view.status, comment=view.comment),
            account_state=AccountStateSchema(amount=view.account_state.amount, currency=view.account_state.currency),
            details=DetailsSchema(
                input_message=view.details.input_message,
                output_message=view.details.output_message,
            ),
        )


class TransactionsViewSchema(ViewSchema):
    """Response for the listTransactions query"""

    account_state: AccountStateSchema = Field(..., alias="accountState")
    transactions: List[TransactionViewSchema]

    @classmethod
    def from_domain(cls, view: TransactionsView) -> "TransactionsViewSchema":
        return cls(
            account_state=AccountStateSchema(amount=view.account_state.amount, currency=view.account_state.currency),
            transactions=[TransactionViewSchema.from_domain(t) for t in view.transactions],
        )
