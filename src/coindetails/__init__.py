"""CoinDetails: currency conversion and chart formatting for a coin detail screen.

This package turns a USD-denominated market snapshot for a single crypto asset
into display-ready values in whatever currency the user has selected.

Key modules:
- `converter`: USD to display-currency conversion against a rate series.
- `formatting`: currency, percentage, magnitude and timestamp rendering.
- `series`: chart point conversion for the price and volume charts.
- `summary`: assembly of the summary record and the sorted exchange list.
- `session`: explicit recompute when the snapshot or the currency changes.
"""

import importlib.metadata

try:
    __version__: str = importlib.metadata.version("coindetails")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout that has not been installed.
    __version__ = "0.0.0-dev"
