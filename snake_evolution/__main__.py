#!/usr/bin/env python3
# Snake evolution training entry point

from .train.trainer import run

if __name__ == "__main__":
    run()
