#!/usr/bin/env python3
"""
Convenience shim to run Marquee from a source checkout.
Usage: python marquee.py [--verify|--help|--config PATH] [QUERY]
"""

from marquee.cli import main


if __name__ == "__main__":
    main()
