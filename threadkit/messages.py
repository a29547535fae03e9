"""The messages exchanged between the ATM, the bank and the hardware interface."""

from __future__ import annotations

from dataclasses import dataclass

from threadkit.messaging import Sender


@dataclass(frozen=True)
class Withdraw:
    """Ask the bank to withdraw ``amount`` from ``account``."""

    account: str
    amount: int
    atm_queue: Sender


@dataclass(frozen=True)
class WithdrawOk:
    """The bank allows the withdrawal."""


@dataclass(frozen=True)
class WithdrawDenied:
    """The bank refuses the withdrawal."""


@dataclass(frozen=True)
class CancelWithdrawal:
    """Tell the bank a pending withdrawal was cancelled."""

    account: str
    amount: int


@dataclass(frozen=True)
class WithdrawalProcessed:
    """Tell the bank the money was issued."""

    account: str
    amount: int


@dataclass(frozen=True)
class CardInserted:
    """A card for ``account`` was inserted."""

    account: str


@dataclass(frozen=True)
class DigitPressed:
    """A PIN digit was pressed."""

    digit: str


@dataclass(frozen=True)
class ClearLastPressed:
    """The key clearing the last digit was pressed."""


@dataclass(frozen=True)
class EjectCard:
    """Eject the card."""


@dataclass(frozen=True)
class WithdrawPressed:
    """A withdrawal of ``amount`` was requested."""

    amount: int


@dataclass(frozen=True)
class CancelPressed:
    """The cancel key was pressed."""


@dataclass(frozen=True)
class IssueMoney:
    """Pay out ``amount``."""

    amount: int


@dataclass(frozen=True)
class VerifyPin:
    """Ask the bank to check ``pin`` for ``account``."""

    account: str
    pin: str
    atm_queue: Sender


@dataclass(frozen=True)
class PinVerified:
    """The PIN was correct."""


@dataclass(frozen=True)
class PinIncorrect:
    """The PIN was wrong."""


@dataclass(frozen=True)
class DisplayEnterPin:
    """Show the prompt for the PIN."""


@dataclass(frozen=True)
class DisplayEnterCard:
    """Show the prompt for a card."""


@dataclass(frozen=True)
class DisplayInsufficientFunds:
    """Show that the account lacks funds."""


@dataclass(frozen=True)
class DisplayWithdrawalCancelled:
    """Show that the withdrawal was cancelled."""


@dataclass(frozen=True)
class DisplayPinIncorrectMessage:
    """Show that the PIN was wrong."""


@dataclass(frozen=True)
class DisplayWithdrawalOptions:
    """Show the available actions."""


@dataclass(frozen=True)
class GetBalance:
    """Ask the bank for the balance of ``account``."""

    account: str
    atm_queue: Sender


@dataclass(frozen=True)
class Balance:
    """The bank's answer to a balance query."""

    amount: int


@dataclass(frozen=True)
class DisplayBalance:
    """Show a balance of ``amount``."""

    amount: int


@dataclass(frozen=True)
class BalancePressed:
    """The balance key was pressed."""