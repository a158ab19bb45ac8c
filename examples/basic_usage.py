#!/usr/bin/env python3
"""Basic usage example for Collection Sync.

This example demonstrates:
1. Creating two observable lists
2. Linking them with a two-way Synchronizer
3. Mutating either side and watching the other follow
4. Moving and resetting
5. Disposing the synchronizer

Run this example:
    python basic_usage.py
"""

from collection_sync import ObservableList, Synchronizer


def main():
    print("=" * 60)
    print("Collection Sync - Basic Usage Example")
    print("=" * 60)

    # -------------------------------------------------------------------------
    # Step 1: Two collections that already agree
    # -------------------------------------------------------------------------
    print("\n[1] Creating collections...")

    prices = ObservableList([1, 2, 3])
    cents = ObservableList([100, 200, 300])
    print(f"    prices: {list(prices)}")
    print(f"    cents:  {list(cents)}")

    # -------------------------------------------------------------------------
    # Step 2: Link them (two-way is the default)
    # -------------------------------------------------------------------------
    print("\n[2] Linking with a two-way Synchronizer...")

    sync = Synchronizer(
        prices,
        cents,
        to_source=lambda c: c // 100,   # cents -> price
        to_target=lambda p: p * 100,    # price -> cents
    )
    print(f"    {sync!r}")

    # -------------------------------------------------------------------------
    # Step 3: Change either side
    # -------------------------------------------------------------------------
    print("\n[3] Appending to prices...")
    prices.append(4)
    print(f"    cents:  {list(cents)}")

    print("\n    Removing the first cents entry...")
    cents.pop(0)
    print(f"    prices: {list(prices)}")

    print("\n    Replacing a price...")
    prices[0] = 9
    print(f"    cents:  {list(cents)}")

    # -------------------------------------------------------------------------
    # Step 4: Move and reset
    # -------------------------------------------------------------------------
    print("\n[4] Moving the last price to the front...")
    prices.move(len(prices) - 1, 0)
    print(f"    prices: {list(prices)}")
    print(f"    cents:  {list(cents)}")

    print("\n    Clearing and refilling prices...")
    prices.clear()
    prices.extend([7])
    print(f"    cents:  {list(cents)}")

    # -------------------------------------------------------------------------
    # Step 5: Dispose
    # -------------------------------------------------------------------------
    print("\n[5] Disposing...")
    sync.dispose()
    prices.append(8)
    print(f"    prices: {list(prices)}")
    print(f"    cents:  {list(cents)}  (no longer follows)")
    print(f"    stats:  {sync.stats.to_dict()}")

    print("\n" + "=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
