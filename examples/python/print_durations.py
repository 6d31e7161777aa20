"""Example: Print the first durations of a fixed and a capped exponential strategy."""

import logging
from datetime import timedelta
from itertools import islice

import retry_durations

logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(message)s")


def main() -> None:
    print("fixed")
    for delay in islice(retry_durations.builder().fixed().build(), 10):
        print(f"  {delay}")

    print("exponential")
    strategy = (
        retry_durations.builder()
        .exponential()
        .duration(timedelta(seconds=1))
        .duration_max(timedelta(minutes=2))
        .build()
    )
    for delay in islice(strategy, 10):
        print(f"  {delay}")


if __name__ == "__main__":
    main()
