# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

__app_name__ = "domview"
__version__ = "0.1.0"
