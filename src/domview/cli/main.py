# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

import sys

from cyclopts import App

from .snapshot import snapshot_structure
from domview import __version__


app = App(version=__version__)
app.command(
    snapshot_structure,
    "snapshot",
)


def main() -> None:
    sys.exit(app())


if __name__ == "__main__":
    main()
