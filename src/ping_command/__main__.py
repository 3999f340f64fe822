# -*- coding: utf-8 -*-
"""
支持 python -m ping_command 方式运行

使用方式:
    python -m ping_command 223.5.5.5 -c 10
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
