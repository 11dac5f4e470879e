"""Pydantic models for the JSON documents kept in the ledger store.

Field names and order match the stored data exactly; serialize with
``model_dump_json(by_alias=True)``.
"""

from typing import Any, List
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from mt_gateway.domain.exceptions import MalformedInputError
from mt_gateway.domain.models import (
    AccountKey,
    AccountRecord,
    Organization,
    Permission,
    PermissionKey,
    Transaction,
    TransactionDetails,
    UserDetails,
)


class LedgerDocument(BaseModel):
    """Base document: unknown fields ignored, null fields fall back to defaults"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class AccountKeyDocument(LedgerDocument):
    holder_bic: str = Field("", alias="holderBic")
    owner_bic: str = Field("", alias="ownerBic")
    currency: str = ""
    type: str = ""

    @classmethod
    def from_domain(cls, key: AccountKey) -> "AccountKeyDocument":
        return cls(holder_bic=key.holder_bic, owner_bic=key.owner_bic, currency=key.currency, type=key.type)

    def to_domain(self) -> AccountKey:
        return AccountKey(holder_bic=self.holder_bic, owner_bic=self.owner_bic, currency=self.currency, type=self.type)


class OrganizationDocument(LedgerDocument):
    bic: str = Field("", alias="BIC")
    account: str = Field("", alias="Account")

    @classmethod
    def from_domain(cls, org: Organization) -> "OrganizationDocument":
        return cls(bic=org.bic, account=org.account)

    def to_domain(self) -> Organization:
        return Organization(bic=self.bic, account=self.account)


class DetailsDocument(LedgerDocument):
    input_message: str = Field("", alias="inputMessage")
    output_message: str = Field("", alias="outputMessage")


class TransactionDocument(LedgerDocument):
    transaction_id: str = Field("", alias="transactionId")
    sender: OrganizationDocument = Field(default_factory=OrganizationDocument)
    receiver: OrganizationDocument = Field(default_factory=OrganizationDocument)
    sender_account_key: AccountKeyDocument = Field(default_factory=AccountKeyDocument, alias="senderAccountKey")
    receiver_account_key: AccountKeyDocument = Field(default_factory=AccountKeyDocument, alias="receiverAccountKey")
    fee: str = ""
    amount: str = ""
    details: DetailsDocument = Field(default_factory=DetailsDocument)
    status: str = ""
    comment: str = ""
    time: str = ""

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionDocument":
        return cls(
            transaction_id=txn.transaction_id,
            sender=OrganizationDocument.from_domain(txn.sender),
            receiver=OrganizationDocument.from_domain(txn.receiver),
            sender_account_key=AccountKeyDocument.from_domain(txn.sender_account_key),
            receiver_account_key=AccountKeyDocument.from_domain(txn.receiver_account_key),
            fee=txn.fee,
            amount=txn.amount,
            details=DetailsDocument(
                input_message=txn.details.input_message,
                output_message=txn.details.output_message,
            ),
            status=txn.status,
            comment=txn.comment,
            time=txn.time,
        )

    def to_domain(self) -> Transaction:
        return Transaction(
            transaction_id=self.transaction_id,
            sender=self.sender.to_domain(),
            receiver=self.receiver.to_domain(),
            sender_account_key=self.sender_account_key.to_domain(),
            receiver_account_key=self.receiver_account_key.to_domain(),
            fee=self.fee,
            amount=self.amount,
            details=TransactionDetails(
                input_message=self.details.input_message,
                output_message=self.details.output_message,
            ),
            status=self.status,
            comment=self.comment,
            time=self.time,
        )


class AccountDocument(LedgerDocument):
    amount: str = ""
    currency: str = ""
    type: str = ""
    date: str = ""
    number: str = ""
    transactions: List[TransactionDocument] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, account: AccountRecord) -> "AccountDocument":
        return cls(
            amount=account.amount,
            currency=account.currency,
            type=account.type,
            date=account.date,
            number=account.number,
            transactions=[TransactionDocument.from_domain(t) for t in account.transactions],
        )

    def to_domain(self) -> AccountRecord:
        return AccountRecord(
            amount=self.amount,
            currency=self.currency,
            type=self.type,
            date=self.date,
            number=self.number,
            transactions=tuple(t.to_domain() for t in self.transactions),
        )


class PermissionKeyDocument(LedgerDocument):
    type: str = ""
    holder: str = ""
    owner: str = ""
    currency: str = ""
    account_type: str = Field("", alias="accountType")


class PermissionDocument(LedgerDocument):
    account_key: PermissionKeyDocument = Field(default_factory=PermissionKeyDocument, alias="accountKey")
    access: str = ""


class UserDetailsDocument(LedgerDocument):
    password: str = ""
    permissions: List[PermissionDocument] = Field(default_factory=list)

    def to_domain(self) -> UserDetails:
        return UserDetails(
            password=self.password,
            permissions=tuple(
                Permission(
                    key=PermissionKey(
                        type=p.account_key.type,
                        holder=p.account_key.holder,
                        owner=p.account_key.owner,
                        currency=p.account_key.currency,
                        account_type=p.account_key.account_type,
                    ),
                    access=p.access,
                )
                for p in self.permissions
            ),
        )


def serialize_account_key(key: AccountKey) -> str:
    """Canonical store key for an account: compact JSON, fields in stored order"""
    return AccountKeyDocument.from_domain(key).model_dump_json(by_alias=True)


def parse_account_key(text: str) -> AccountKey:
    """Decode a client-supplied JSON account key"""
    try:
        return AccountKeyDocument.model_validate_json(text).to_domain()
    except ValidationError as e:
        raise MalformedInputError(f"accountId is not a valid account key: {e}") from e
