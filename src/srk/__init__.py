# This file is part of the srk project
# https://github.com/mbarkhau/srk
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT
"""SRK: Shamir Recovery Kit.

A cli app and library to recombine numeral encoded shares into a secret.
"""

__version__ = "2022.1018-beta"
