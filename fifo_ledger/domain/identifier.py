"""Composite position identifier and its string token codec."""

from __future__ import annotations

from dataclasses import dataclass, fields

from .errors import InvalidIdentifierError

DOMAIN_IDENTIFIER_DELIMITER = "::"


@dataclass(frozen=True)
class PositionIdentifier:
    """Composite key grouping lots into one position.

    Attributes:
        broker: Broker label.
        account: Account label within the broker.
        ticker: Instrument ticker.
        currency: Currency label, carried as an opaque grouping attribute.
        asset_class: Asset class label.
    """

    broker: str
    account: str
    ticker: str
    currency: str
    asset_class: str

    def __post_init__(self) -> None:
        for identifier_field in fields(self):
            value = getattr(self, identifier_field.name)
            if not isinstance(value, str):
                raise InvalidIdentifierError(
                    f"identifier.{identifier_field.name} must be text, got {type(value).__name__}"
                )
            _domain_identifier_validate_attribute(identifier_field.name, value)

    def identifier_as_tuple(self) -> tuple[str, str, str, str, str]:
        """Return identifier attributes in canonical field order.

        Returns:
            tuple[str, str, str, str, str]: Broker, account, ticker, currency, asset class.
        """

        return (self.broker, self.account, self.ticker, self.currency, self.asset_class)

    def __str__(self) -> str:
        return domain_identifier_encode(self)


def domain_identifier_encode(identifier: PositionIdentifier) -> str:
    """Encode one identifier into its single-string token.

    Args:
        identifier: Identifier to encode.

    Returns:
        str: Delimiter-joined token in canonical field order.

    Raises:
        InvalidIdentifierError: Raised when one attribute would make the token ambiguous.
    """

    attributes = identifier.identifier_as_tuple()
    for field_name, value in zip(("broker", "account", "ticker", "currency", "asset_class"), attributes):
        _domain_identifier_validate_attribute(field_name, value)
    return DOMAIN_IDENTIFIER_DELIMITER.join(attributes)


def domain_identifier_decode(token: str) -> PositionIdentifier:
    """Decode one identifier token back into its composite key.

    Args:
        token: Token produced by `domain_identifier_encode`.

    Returns:
        PositionIdentifier: Decoded identifier.

    Raises:
        InvalidIdentifierError: Raised when token does not hold exactly five fields.
    """

    if not isinstance(token, str):
        raise InvalidIdentifierError(f"identifier token must be text, got {type(token).__name__}")

    parts = token.split(DOMAIN_IDENTIFIER_DELIMITER)
    if len(parts) != 5:
        raise InvalidIdentifierError(f"identifier token must hold exactly 5 fields, got {len(parts)}: {token!r}")

    broker, account, ticker, currency, asset_class = parts
    return PositionIdentifier(
        broker=broker,
        account=account,
        ticker=ticker,
        currency=currency,
        asset_class=asset_class,
    )


def _domain_identifier_validate_attribute(field_name: str, value: str) -> None:
    """Reject attribute values that cannot round-trip through the token form.

    A single leading or trailing colon merges with the delimiter, so it is
    rejected along with the delimiter itself.

    Args:
        field_name: Attribute name used in the error message.
        value: Attribute value.

    Returns:
        None: This helper does not return a value.

    Raises:
        InvalidIdentifierError: Raised when value is not encodable.
    """

    if DOMAIN_IDENTIFIER_DELIMITER in value or value.startswith(":") or value.endswith(":"):
        raise InvalidIdentifierError(
            f"identifier.{field_name} must not contain '{DOMAIN_IDENTIFIER_DELIMITER}' "
            f"or start/end with ':': {value!r}"
        )


__all__ = [
    "DOMAIN_IDENTIFIER_DELIMITER",
    "PositionIdentifier",
    "domain_identifier_decode",
    "domain_identifier_encode",
]
