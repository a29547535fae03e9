"""The hardware interface of the ATM: shows prompts and pays out money."""

from __future__ import annotations

import sys
import threading
from typing import Callable, Optional, TextIO

from threadkit.messages import (
    DisplayBalance,
    DisplayEnterCard,
    DisplayEnterPin,
    DisplayInsufficientFunds,
    DisplayPinIncorrectMessage,
    DisplayWithdrawalCancelled,
    DisplayWithdrawalOptions,
    EjectCard,
    IssueMoney,
)
from threadkit.messaging import CloseQueue, Receiver, Sender

_io_lock = threading.Lock()


class InterfaceMachine:
    """Writes a line of text for each display or payout message it receives."""

    def __init__(self, output: Optional[TextIO] = None) -> None:
        self._incoming = Receiver()
        self._output = output

    def _write(self, *lines: str) -> None:
        stream = self._output if self._output is not None else sys.stdout
        with _io_lock:
            for line in lines:
                print(line, file=stream, flush=True)

    def _say(self, *lines: str) -> Callable[[object], None]:
        return lambda message: self._write(*lines)

    def done(self) -> None:
        """Ask the running loop to stop."""
        self.sender().send(CloseQueue())

    def run(self) -> None:
        """Handle display messages until a CloseQueue message arrives."""
        try:
            while True:
                (
                    self._incoming.wait()
                    .handle(IssueMoney, lambda m: self._write(f"Issuing {m.amount}"))
                    .handle(DisplayInsufficientFunds, self._say("Insufficient funds"))
                    .handle(DisplayEnterPin, self._say("Please enter your PIN (0-9)"))
                    .handle(DisplayEnterCard, self._say("Please enter your card (I)"))
                    .handle(
                        DisplayBalance,
                        lambda m: self._write(
                            f"The balance of your account is {m.amount}"
                        ),
                    )
                    .handle(
                        DisplayWithdrawalOptions,
                        self._say(
                            "Withdraw 50? (w)", "Display Balance? (b)", "Cancel? (c)"
                        ),
                    )
                    .handle(
                        DisplayWithdrawalCancelled, self._say("Withdrawal cancelled")
                    )
                    .handle(DisplayPinIncorrectMessage, self._say("PIN incorrect"))
                    .handle(EjectCard, self._say("Ejecting card"))
                    .run()
                )
        except CloseQueue:
            pass

    def sender(self) -> Sender:
        """Return a sender posting to this interface's queue."""
        return self._incoming.sender()