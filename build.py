#!/usr/bin/env python3
from minimalblog.cli import main

if __name__ == "__main__":
    main()
