"""MT message block/tag extraction and per-field decoders"""

import re
from typing import Optional
from mt_gateway.domain.models import TransferRequest
from mt_gateway.domain.money import to_decimal_point

# Block 4 may contain braces of its own, so it runs greedily up to the last "-}"
_BLOCK4_PATTERN = re.compile(r"\{4:(.*)-\}", re.DOTALL)


def extract_block(message: str, block_number: int) -> str:
    """
    Return the content of a numbered block, or "" if it is absent.

    Blocks 1-3 are "{N:...}" and end at the first closing brace. Block 4 is
    "{4:...-}".
    """
    if block_number == 4:
        match = _BLOCK4_PATTERN.search(message)
        return match.group(1) if match else ""

    marker = "{" + str(block_number) + ":"
    start = message.find(marker)
    if start == -1:
        return ""
    start += len(marker)
    end = message.find("}", start)
    if end == -1:
        return ""
    return message[start:end]


def extract_tag(block4: str, tag_name: str) -> str:
    """
    Return the value of ":TAG:" inside block 4, or "" if the tag is absent.

    The value runs until the first whitespace followed by a colon (the next
    tag) or the end of the block. A value that itself contains such a
    sequence is cut short there.
    """
    pattern = re.compile(":" + re.escape(tag_name) + r":(.*?)(?:\s:|\Z)", re.DOTALL)
    match = pattern.search(block4)
    if not match:
        return ""

    value = match.group(1).replace("\r", "").rstrip("\n")
    if value.endswith(":"):
        value = value[:-1]
    return value


def _block4_tag(message: str, tag_name: str) -> str:
    block4 = extract_block(message, 4)
    if not block4:
        return ""
    return extract_tag(block4, tag_name)


def _account_line(value: str) -> Optional[str]:
    # "/ACCOUNT\nNAME\nADDRESS..." or "/ACCOUNT\nBIC"
    if not value.startswith("/"):
        return None
    account = value.split("\n", 1)[0][1:].strip()
    return account or None


def get_sender_bic(message: str) -> Optional[str]:
    """Sender BIC: block 1, positions 3..11 (after the app id and service id)"""
    block1 = extract_block(message, 1)
    if len(block1) < 11:
        return None
    return block1[3:11]


def get_receiver_bic(message: str) -> Optional[str]:
    """
    Receiver BIC from block 2.

    Input headers ("I103BANKDEFFXXXXN", 17 or 21 chars) carry it at 4..12;
    output headers (47 chars) carry it at 14..22.
    """
    block2 = extract_block(message, 2)
    if len(block2) in (17, 21):
        return block2[4:12]
    if len(block2) == 47:
        return block2[14:22]
    return None


def get_intermediary_bic(message: str) -> Optional[str]:
    value = _block4_tag(message, "57A").replace("\n", "")
    return value or None


def get_credit_account(message: str) -> Optional[str]:
    """Ordering customer account from :50K:"""
    return _account_line(_block4_tag(message, "50K"))


def get_benefit_account(message: str) -> Optional[str]:
    """Beneficiary account from :59A:"""
    return _account_line(_block4_tag(message, "59A"))


def get_transfer_amount(message: str) -> Optional[str]:
    """Amount from :32A: (YYMMDD + currency + amount), in decimal-point notation"""
    value = _block4_tag(message, "32A")
    if len(value) <= 9:
        return None
    return to_decimal_point(value[9:]).replace("\n", "")


def get_transfer_currency(message: str) -> Optional[str]:
    value = _block4_tag(message, "32A")
    if len(value) < 9:
        return None
    currency = value[6:9]
    if not currency.isalpha():
        return None
    return currency


def get_transfer_fee(message: str) -> Optional[str]:
    """Fee from :71G: (currency + amount), in decimal-point notation"""
    value = _block4_tag(message, "71G")
    if len(value) <= 3:
        return None
    return to_decimal_point(value[3:]).replace("\n", "")


def decode_transfer_request(message: str) -> TransferRequest:
    """Decode every transfer field; fields that are absent or malformed become empty strings"""
    return TransferRequest(
        sender_bic=get_sender_bic(message) or "",
        receiver_bic=get_receiver_bic(message) or "",
        intermediary_bic=get_intermediary_bic(message) or "",
        credit_account=get_credit_account(message) or "",
        benefit_account=get_benefit_account(message) or "",
        currency=get_transfer_currency(message) or "",
        amount=get_transfer_amount(message) or "",
        fee=get_transfer_fee(message) or "",
    )
