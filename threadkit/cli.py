"""A keyboard-driven ATM: wires the ATM, bank and interface together."""

from __future__ import annotations

import argparse
import sys
import threading
from typing import Optional, Sequence, TextIO

from threadkit.atm import Atm
from threadkit.bank import BankMachine
from threadkit.interface import InterfaceMachine
from threadkit.messages import (
    BalancePressed,
    CancelPressed,
    CardInserted,
    DigitPressed,
    WithdrawPressed,
)

_KEYS = {
    "b": BalancePressed,
    "w": lambda: WithdrawPressed(50),
    "c": CancelPressed,
    "i": lambda: CardInserted("acc1234"),
}


def run_atm(input_stream: TextIO, output: Optional[TextIO] = None) -> None:
    """Drive an ATM from keys read off ``input_stream`` until 'q' or end of input.

    Digits enter the PIN, 'i' inserts a card, 'w' withdraws 50, 'b' asks for
    the balance and 'c' cancels; other characters are ignored.
    """
    bank = BankMachine()
    interface = InterfaceMachine(output)
    machine = Atm(bank.sender(), interface.sender())
    bank_thread = threading.Thread(target=bank.run, daemon=True)
    if_thread = threading.Thread(target=interface.run, daemon=True)
    atm_thread = threading.Thread(target=machine.run, daemon=True)
    for thread in (bank_thread, if_thread, atm_thread):
        thread.start()

    atm_queue = machine.sender()
    try:
        while (key := input_stream.read(1)) and key != "q":
            if key.isdigit() and key.isascii():
                atm_queue.send(DigitPressed(key))
            elif key in _KEYS:
                atm_queue.send(_KEYS[key]())
    finally:
        bank.done()
        machine.done()
        atm_thread.join()
        interface.done()
        bank_thread.join()
        if_thread.join()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the ATM on standard input and output."""
    parser = argparse.ArgumentParser(
        prog="threadkit-atm",
        description="Simulate an ATM driven by single-key commands on standard input.",
    )
    parser.parse_args(argv)
    run_atm(sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())