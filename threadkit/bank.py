"""The bank side of the ATM system: checks PINs and keeps the account balance."""

from __future__ import annotations

from threadkit.messages import (
    Balance,
    CancelWithdrawal,
    GetBalance,
    PinIncorrect,
    PinVerified,
    VerifyPin,
    Withdraw,
    WithdrawDenied,
    WithdrawOk,
    WithdrawalProcessed,
)
from threadkit.messaging import CloseQueue, Receiver, Sender

_CORRECT_PIN = "1937"


class BankMachine:
    """A message-driven bank holding a single balance."""

    def __init__(self, balance: int = 199) -> None:
        self._incoming = Receiver()
        self.balance = balance

    def done(self) -> None:
        """Ask the running loop to stop."""
        self.sender().send(CloseQueue())

    def _verify_pin(self, message: VerifyPin) -> None:
        if message.pin == _CORRECT_PIN:
            message.atm_queue.send(PinVerified())
        else:
            message.atm_queue.send(PinIncorrect())

    def _withdraw(self, message: Withdraw) -> None:
        if self.balance >= message.amount:
            message.atm_queue.send(WithdrawOk())
            self.balance -= message.amount
        else:
            message.atm_queue.send(WithdrawDenied())

    def _get_balance(self, message: GetBalance) -> None:
        message.atm_queue.send(Balance(self.balance))

    def run(self) -> None:
        """Handle bank messages until a CloseQueue message arrives."""
        try:
            while True:
                (
                    self._incoming.wait()
                    .handle(VerifyPin, self._verify_pin)
                    .handle(Withdraw, self._withdraw)
                    .handle(GetBalance, self._get_balance)
                    .handle(WithdrawalProcessed, lambda message: None)
                    .handle(CancelWithdrawal, lambda message: None)
                    .run()
                )
        except CloseQueue:
            pass

    def sender(self) -> Sender:
        """Return a sender posting to this bank's queue."""
        return self._incoming.sender()