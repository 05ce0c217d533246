"""StreamrConfig contract operations for streamr-chains library."""

from dataclasses import dataclass
from decimal import Context, Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union

from .constants import TOKEN_AMOUNT_WEI_THRESHOLD, WEI_DECIMALS
from .exceptions import UnknownOperationError
from .types import Address


class ValueKind(Enum):
    """How a StreamrConfig parameter value is written on-chain."""

    ADDRESS = "address"
    INTEGER = "integer"
    TOKEN_AMOUNT = "token-amount"  # 18-decimal fixed point (wei amounts and fractions)


class StreamrConfigParameter(Enum):
    """
    Parameters of the StreamrConfig contract.

    Value strings are the getter method names; setters are "set" + capitalized getter.
    """

    MINIMUM_STAKE_WEI = "minimumStakeWei"
    MINIMUM_DELEGATION_WEI = "minimumDelegationWei"
    MINIMUM_SELF_DELEGATION_FRACTION = "minimumSelfDelegationFraction"
    SLASHING_FRACTION = "slashingFraction"
    FLAGGER_REWARD_WEI = "flaggerRewardWei"
    FLAG_REVIEWER_REWARD_WEI = "flagReviewerRewardWei"
    FLAG_STAKE_WEI = "flagStakeWei"
    FLAG_REVIEWER_COUNT = "flagReviewerCount"
    REVIEW_PERIOD_SECONDS = "reviewPeriodSeconds"
    VOTING_PERIOD_SECONDS = "votingPeriodSeconds"
    MAX_QUEUE_SECONDS = "maxQueueSeconds"
    MAX_PENALTY_PERIOD_SECONDS = "maxPenaltyPeriodSeconds"
    STREAM_REGISTRY_ADDRESS = "streamRegistryAddress"
    SPONSORSHIP_FACTORY = "sponsorshipFactory"
    OPERATOR_FACTORY = "operatorFactory"
    OPERATOR_CONTRACT_ONLY_JOIN_POLICY = "operatorContractOnlyJoinPolicy"
    PROTOCOL_FEE_BENEFICIARY = "protocolFeeBeneficiary"
    TRUSTED_FORWARDER = "trustedForwarder"
    RANDOM_ORACLE = "randomOracle"

    @property
    def getter(self) -> str:
        return self.value

    @property
    def setter(self) -> str:
        return "set" + self.value[0].upper() + self.value[1:]

    @property
    def kind(self) -> ValueKind:
        if self.value.endswith("Wei") or self.value.endswith("Fraction"):
            return ValueKind.TOKEN_AMOUNT
        if self in _ADDRESS_PARAMETERS:
            return ValueKind.ADDRESS
        return ValueKind.INTEGER

    @property
    def settable(self) -> bool:
        # minimumStakeWei is derived from the flag/reward parameters
        return self is not StreamrConfigParameter.MINIMUM_STAKE_WEI


_ADDRESS_PARAMETERS = frozenset(
    {
        StreamrConfigParameter.STREAM_REGISTRY_ADDRESS,
        StreamrConfigParameter.SPONSORSHIP_FACTORY,
        StreamrConfigParameter.OPERATOR_FACTORY,
        StreamrConfigParameter.OPERATOR_CONTRACT_ONLY_JOIN_POLICY,
        StreamrConfigParameter.PROTOCOL_FEE_BENEFICIARY,
        StreamrConfigParameter.TRUSTED_FORWARDER,
        StreamrConfigParameter.RANDOM_ORACLE,
    }
)


@dataclass(frozen=True)
class ConfigOperation:
    """A read or write of one StreamrConfig parameter."""

    parameter: StreamrConfigParameter
    is_setter: bool = False

    @property
    def method_name(self) -> str:
        """Contract method to call."""
        return self.parameter.setter if self.is_setter else self.parameter.getter

    def encode_value(self, raw: Optional[str]) -> Union[Address, int, None]:
        """
        Convert a command-line value to the setter argument.

        Token amounts below 1e10 are read as whole tokens (or fractions, e.g.
        "0.1") and scaled to 18 decimals; larger amounts are taken as wei.

        Args:
            raw: Value as typed by the user (None for getters)

        Returns:
            Address, int, or None for getters

        Raises:
            ValueError: If a getter is given a value, a setter is not,
                        or the value does not parse
            InvalidAddressFormatError: If an address value is malformed
        """
        if not self.is_setter:
            if raw is not None:
                raise ValueError(f"{self.method_name} takes no value")
            return None
        if raw is None or raw == "":
            raise ValueError(f"Missing value for {self.method_name}")

        kind = self.parameter.kind
        if kind is ValueKind.ADDRESS:
            return Address(raw)

        try:
            amount = Decimal(raw)
        except InvalidOperation:
            raise ValueError(f"Value for {self.method_name} must be a number, got '{raw}'") from None
        if not amount.is_finite() or amount < 0:
            raise ValueError(f"Value for {self.method_name} must be a non-negative number, got '{raw}'")

        if kind is ValueKind.TOKEN_AMOUNT and amount < TOKEN_AMOUNT_WEI_THRESHOLD:
            # Enough precision for every input digit, so scaling never rounds
            context = Context(prec=len(amount.as_tuple().digits))
            amount = amount.scaleb(WEI_DECIMALS, context)
            if amount != amount.to_integral_value():
                raise ValueError(
                    f"Value for {self.method_name} has more than {WEI_DECIMALS} decimal places, got '{raw}'"
                )
        if amount != amount.to_integral_value():
            raise ValueError(f"Value for {self.method_name} must be a whole number, got '{raw}'")
        return int(amount)


def parse_operation(method_name: str) -> ConfigOperation:
    """
    Resolve a StreamrConfig method name to an operation.

    Args:
        method_name: Getter (e.g. "slashingFraction") or setter
                     (e.g. "setSlashingFraction") name

    Returns:
        ConfigOperation

    Raises:
        UnknownOperationError: If the name is not a known getter or setter
    """
    for parameter in StreamrConfigParameter:
        if method_name == parameter.getter:
            return ConfigOperation(parameter)
        if method_name == parameter.setter:
            if not parameter.settable:
                raise UnknownOperationError(f"StreamrConfig parameter '{parameter.getter}' is read-only")
            return ConfigOperation(parameter, is_setter=True)

    raise UnknownOperationError(f"No such method in StreamrConfig: {method_name}")
