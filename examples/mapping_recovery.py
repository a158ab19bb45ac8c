#!/usr/bin/env python3
"""Recover from a mapping function that fails mid-relay.

This example demonstrates:
1. A MappingError surfacing from the mutation that triggered it
2. The opposite collection left untouched by the failed relay
3. rebuild_target() bringing the pair back in line

Run this example:
    python mapping_recovery.py
"""

from collection_sync import MappingError, ObservableList, Synchronizer
from collection_sync.utils.logging import get_logger


RATES = {"EUR": 1.1, "USD": 1.0}


def to_usd(entry):
    currency, amount = entry
    return round(amount * RATES[currency], 2)


def from_usd(amount):
    return ("USD", amount)


def main():
    get_logger(level="INFO")

    ledger = ObservableList([("USD", 10.0), ("EUR", 5.0)])
    usd = ObservableList([to_usd(e) for e in ledger])
    sync = Synchronizer(ledger, usd, from_usd, to_usd)

    try:
        ledger.append(("GBP", 3.0))
    except MappingError as e:
        print(f"Relay failed for {e.item!r}: {e.__cause__!r}")
        print(f"ledger: {list(ledger)}")
        print(f"usd:    {list(usd)}  (unchanged)")

    RATES["GBP"] = 1.25
    sync.rebuild_target()
    print(f"usd after rebuild: {list(usd)}")

    ledger.append(("EUR", 2.0))
    print(f"usd after append:  {list(usd)}")
    sync.dispose()


if __name__ == "__main__":
    main()
