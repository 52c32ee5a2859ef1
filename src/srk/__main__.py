#!/usr/bin/env python
# This file is part of the srk project
# https://github.com/mbarkhau/srk
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT
"""
__main__ module for SRK.

Enables use as module: $ python -m srk
"""


if __name__ == '__main__':
    from . import cli

    cli.cli()
