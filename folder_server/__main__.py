# Folder Server v.0.1.0
# Copyright (C) 2025 EGT Maks Tymoshenko (Ukraine)
# License: MIT

from .server import main

main()
