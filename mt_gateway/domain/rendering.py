"""Reply message synthesis: forwarded MT on success, MT199 notice on failure"""

from mt_gateway.domain.models import TransferRequest
from mt_gateway.domain.money import (
    format_swift_amount,
    fraction_digits,
    parse_amount,
    parse_fee,
    to_decimal_comma,
)

MT199_TEMPLATE = (
    "{1:F01[[SENDER]]XXXX0000000000}{2:I199[[RECEIVER]]XXXXN}{4:\r\n"
    ":20:HL-[[TX-ID]]\r\n"
    ":79:[[COMMENT]]\r\n"
    "-}"
)


def _replace(text: str, old: str, new: str) -> str:
    # An empty search string would splice `new` between every character
    if not old:
        return text
    return text.replace(old, new)


def _remove_line(text: str, line: str) -> str:
    if not line:
        return text
    for ending in ("\r\n", "\n", ""):
        if line + ending in text:
            return text.replace(line + ending, "")
    return text


def net_amount(request: TransferRequest) -> str:
    """
    Amount forwarded onward (amount minus fee), in SWIFT notation.

    Keeps as many fraction digits as the more precise of amount and fee, so
    the fee is never rounded away.
    """
    amount = parse_amount(request.amount)
    fee = parse_fee(request.fee)
    if amount is None or fee is None:
        return to_decimal_comma(request.amount)
    digits = max(fraction_digits(request.amount), fraction_digits(request.fee))
    return format_swift_amount(amount - fee, digits)


def render_success(message: str, request: TransferRequest) -> str:
    """
    Build the onward message from the inbound one.

    Substitutions are literal and apply to every occurrence, in this order:
    1. receiver BIC → intermediary BIC
    2. sender BIC → receiver BIC
    3. ":57A:<intermediary>" → ":52A:<sender>"
    4. ":71G:<currency><fee>" line removed
    5. inbound amount → amount minus fee

    The fee line goes before the amount rewrite, which would otherwise alter
    a fee whose text contains the amount.
    """
    output = message
    output = _replace(output, request.receiver_bic, request.intermediary_bic)
    output = _replace(output, request.sender_bic, request.receiver_bic)
    if request.intermediary_bic:
        output = _replace(output, ":57A:" + request.intermediary_bic, ":52A:" + request.sender_bic)
    if request.fee:
        output = _remove_line(output, ":71G:" + request.currency + to_decimal_comma(request.fee))
    output = _replace(output, to_decimal_comma(request.amount), net_amount(request))
    return output


def render_failure(request: TransferRequest, transaction_id: str, comment: str) -> str:
    """Fill the MT199 template; the notice goes back from the receiver to the sender"""
    output = MT199_TEMPLATE
    output = output.replace("[[SENDER]]", request.receiver_bic)
    output = output.replace("[[RECEIVER]]", request.sender_bic)
    output = output.replace("[[TX-ID]]", transaction_id)
    output = output.replace("[[COMMENT]]", comment)
    return output
