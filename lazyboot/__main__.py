#!/usr/bin/env python3
"""
lazyboot module entry point
Allows running: python3 -m lazyboot
"""

from lazyboot.cli import main

if __name__ == '__main__':
    main()
