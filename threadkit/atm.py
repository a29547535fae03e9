"""The ATM state machine, driven entirely by messages."""

from __future__ import annotations

from typing import Callable

from threadkit.messages import (
    Balance,
    BalancePressed,
    CancelPressed,
    CancelWithdrawal,
    CardInserted,
    ClearLastPressed,
    DigitPressed,
    DisplayBalance,
    DisplayEnterCard,
    DisplayEnterPin,
    DisplayInsufficientFunds,
    DisplayPinIncorrectMessage,
    DisplayWithdrawalCancelled,
    DisplayWithdrawalOptions,
    EjectCard,
    GetBalance,
    IssueMoney,
    PinIncorrect,
    PinVerified,
    VerifyPin,
    Withdraw,
    WithdrawDenied,
    WithdrawOk,
    WithdrawPressed,
    WithdrawalProcessed,
)
from threadkit.messaging import CloseQueue, Receiver, Sender

_PIN_LENGTH = 4


class Atm:
    """An ATM that moves between states as keypad, card and bank messages arrive."""

    def __init__(self, bank: Sender, interface_hardware: Sender) -> None:
        self._incoming = Receiver()
        self._bank = bank
        self._interface = interface_hardware
        self._state: Callable[[], None] = self._waiting_for_card
        self._account = ""
        self._pin = ""
        self._withdrawal_amount = 0

    def _set_state(self, state: Callable[[], None]) -> None:
        self._state = state

    def _process_withdrawal(self) -> None:
        def ok(message: WithdrawOk) -> None:
            self._interface.send(IssueMoney(self._withdrawal_amount))
            self._bank.send(
                WithdrawalProcessed(self._account, self._withdrawal_amount)
            )
            self._set_state(self._done_processing)

        def denied(message: WithdrawDenied) -> None:
            self._interface.send(DisplayInsufficientFunds())
            self._set_state(self._done_processing)

        def cancel(message: CancelPressed) -> None:
            self._bank.send(CancelWithdrawal(self._account, self._withdrawal_amount))
            self._interface.send(DisplayWithdrawalCancelled())
            self._set_state(self._done_processing)

        (
            self._incoming.wait()
            .handle(WithdrawOk, ok)
            .handle(WithdrawDenied, denied)
            .handle(CancelPressed, cancel)
            .run()
        )

    def _process_balance(self) -> None:
        def balance(message: Balance) -> None:
            self._interface.send(DisplayBalance(message.amount))
            self._set_state(self._wait_for_action)

        (
            self._incoming.wait()
            .handle(Balance, balance)
            .handle(CancelPressed, lambda m: self._set_state(self._done_processing))
            .run()
        )

    def _wait_for_action(self) -> None:
        self._interface.send(DisplayWithdrawalOptions())

        def withdraw(message: WithdrawPressed) -> None:
            self._withdrawal_amount = message.amount
            self._bank.send(Withdraw(self._account, message.amount, self.sender()))
            self._set_state(self._process_withdrawal)

        def balance(message: BalancePressed) -> None:
            self._bank.send(GetBalance(self._account, self.sender()))
            self._set_state(self._process_balance)

        (
            self._incoming.wait()
            .handle(WithdrawPressed, withdraw)
            .handle(BalancePressed, balance)
            .handle(CancelPressed, lambda m: self._set_state(self._done_processing))
            .run()
        )

    def _verifying_pin(self) -> None:
        def incorrect(message: PinIncorrect) -> None:
            self._interface.send(DisplayPinIncorrectMessage())
            self._set_state(self._done_processing)

        (
            self._incoming.wait()
            .handle(PinVerified, lambda m: self._set_state(self._wait_for_action))
            .handle(PinIncorrect, incorrect)
            .handle(CancelPressed, lambda m: self._set_state(self._done_processing))
            .run()
        )

    def _getting_pin(self) -> None:
        def digit(message: DigitPressed) -> None:
            self._pin += message.digit
            if len(self._pin) == _PIN_LENGTH:
                self._bank.send(VerifyPin(self._account, self._pin, self.sender()))
                self._set_state(self._verifying_pin)

        def clear_last(message: ClearLastPressed) -> None:
            self._pin = self._pin[:-1]

        (
            self._incoming.wait()
            .handle(DigitPressed, digit)
            .handle(ClearLastPressed, clear_last)
            .handle(CancelPressed, lambda m: self._set_state(self._done_processing))
            .run()
        )

    def _waiting_for_card(self) -> None:
        self._interface.send(DisplayEnterCard())

        def card(message: CardInserted) -> None:
            self._account = message.account
            self._pin = ""
            self._interface.send(DisplayEnterPin())
            self._set_state(self._getting_pin)

        self._incoming.wait().handle(CardInserted, card).run()

    def _done_processing(self) -> None:
        self._interface.send(EjectCard())
        self._set_state(self._waiting_for_card)

    def done(self) -> None:
        """Ask the running loop to stop."""
        self.sender().send(CloseQueue())

    def run(self) -> None:
        """Run the state machine from the card-waiting state until closed."""
        self._state = self._waiting_for_card
        try:
            while True:
                self._state()
        except CloseQueue:
            pass

    def sender(self) -> Sender:
        """Return a sender posting to this ATM's queue."""
        return self._incoming.sender()